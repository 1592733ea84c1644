from app.application.utils.event_parser import (
    extract_budget,
    extract_date,
    extract_event_type,
    extract_location,
    extract_styles,
    merge_profiles,
    parse_event,
)
from app.domain.entities.event_profile import EventProfile
from app.domain.entities.message import ChatMessage


def test_extract_event_type():
    assert extract_event_type("We're planning a WEDDING next year") == "wedding"
    assert extract_event_type("a birthday party for my son") == "birthday"
    assert extract_event_type("a small baby shower") == "baby shower"
    assert extract_event_type("just a get together") is None


def test_extract_budget_formats():
    assert extract_budget("Our budget is $25,000") == (25000.0, "$")
    assert extract_budget("around €5000 total") == (5000.0, "€")
    assert extract_budget("£1,250.50 max") == (1250.5, "£")
    assert extract_budget("25000") == (25000.0, "$")
    assert extract_budget("no idea yet") is None


def test_extract_budget_requiring_symbol_skips_bare_numbers():
    assert extract_budget("about 150 guests", require_symbol=True) is None
    assert extract_budget("150 guests and $20,000 to spend", require_symbol=True) == (20000.0, "$")
    assert extract_budget("150 guests and $20,000 to spend") == (150.0, "$")


def test_extract_location():
    assert extract_location("We'd love to have it in Austin, Texas") == "Austin, Texas"
    assert extract_location("Party at the lake house") == "the lake house"
    assert extract_location("We are planning a wedding") is None


def test_extract_date():
    assert extract_date("the date is 2025-06-14") == "2025-06-14"
    assert extract_date("sometime around june 14th") == "June 14"
    assert extract_date("next spring") is None


def test_extract_styles_keeps_keyword_order():
    assert extract_styles("Elegant but a bit rustic") == ("rustic", "elegant")
    assert extract_styles("whatever works") == ()


def test_parse_event_later_messages_override():
    messages = [
        ChatMessage(role="user", content="We're planning a wedding in Austin"),
        ChatMessage(role="user", content="Budget is $20,000"),
        ChatMessage(role="user", content="Actually it's a birthday, and the budget is $5,000"),
        ChatMessage(role="user", content="Something modern"),
    ]
    profile = parse_event(messages)

    assert profile.event_type == "birthday"
    assert profile.budget_amount == 5000.0
    assert profile.currency == "$"
    assert profile.location == "Austin"
    assert profile.styles == ("modern",)


def test_parse_event_empty():
    profile = parse_event([])
    assert profile.event_type is None
    assert profile.budget_amount is None
    assert profile.styles == ()


def test_merge_profiles_keeps_stored_fields():
    stored = EventProfile(event_type="wedding", budget_amount=25000.0, currency="$", location="Austin", styles=("rustic",))
    update = EventProfile(location="Denver", date="June 14")

    merged = merge_profiles(stored, update)
    assert merged == EventProfile(
        event_type="wedding",
        budget_amount=25000.0,
        currency="$",
        location="Denver",
        date="June 14",
        styles=("rustic",),
    )
    assert merge_profiles(stored, EventProfile(budget_amount=900.0, currency="€")).currency == "€"

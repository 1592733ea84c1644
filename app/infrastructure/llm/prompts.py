from app.domain.entities.event_profile import EventProfile


def build_planner_system_prompt(
    assistant_name: str,
    profile: EventProfile,
    next_question: str,
    planning_complete: bool,
    allocation: dict[str, float] | None = None,
) -> str:
    known = []
    if profile.event_type:
        known.append(f"  event_type: {profile.event_type}")
    if profile.budget_amount is not None:
        known.append(f"  budget: {profile.currency or '$'}{profile.budget_amount:,.0f}")
    if profile.location:
        known.append(f"  location: {profile.location}")
    if profile.date:
        known.append(f"  date: {profile.date}")
    if profile.styles:
        known.append(f"  styles: {', '.join(profile.styles)}")
    known_block = "\n".join(known) if known else "  (nothing yet)"

    allocation_block = ""
    if allocation:
        lines = [f"  {category}: ${amount:,.0f}" for category, amount in allocation.items()]
        allocation_block = "Suggested budget split:\n" + "\n".join(lines) + "\n\n"

    stage_rule = (
        "  - All details are collected. Summarize the plan briefly and say you will look for vendors.\n"
        if planning_complete
        else "  - End your reply by asking the next question below, in your own words.\n"
    )

    return (
        f"You are {assistant_name}, a friendly event-planning assistant.\n"
        "Rules:\n"
        "  - Keep replies short: two or three sentences.\n"
        "  - Acknowledge what the user just told you before moving on.\n"
        "  - Never invent vendors, prices or availability.\n"
        + stage_rule
        + "\n"
        "Known event details:\n"
        f"{known_block}\n"
        "\n"
        + allocation_block
        + f"Next question: {next_question}\n"
    )

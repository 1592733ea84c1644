from app.application.utils.conversation_flow import DEFAULT_PROMPTS, ConversationFlow, FlowConfig
from app.domain.entities.conversation_state import ConversationState


def test_flow_walks_every_step_to_planning():
    flow = ConversationFlow()
    state = ConversationState.EVENT_TYPE
    visited = [state]
    while not flow.is_complete(state):
        state = flow.next_state(state)
        visited.append(state)

    assert visited == [
        ConversationState.EVENT_TYPE,
        ConversationState.SCOPE,
        ConversationState.BUDGET,
        ConversationState.LOCATION,
        ConversationState.DATE,
        ConversationState.STYLE,
        ConversationState.PLANNING,
    ]


def test_planning_is_terminal():
    flow = ConversationFlow()
    assert flow.next_state(ConversationState.PLANNING) == ConversationState.PLANNING
    assert flow.is_complete(ConversationState.PLANNING) is True
    assert flow.is_complete(ConversationState.STYLE) is False


def test_state_outside_order_goes_to_terminal():
    """INITIAL is not part of the order, so the machine itself sends it to PLANNING."""
    flow = ConversationFlow()
    assert flow.next_state(ConversationState.INITIAL) == ConversationState.PLANNING


def test_every_state_has_a_prompt():
    flow = ConversationFlow()
    for state in ConversationState:
        assert flow.prompt_for(state)
    assert flow.prompt_for(ConversationState.INITIAL) == DEFAULT_PROMPTS[ConversationState.INITIAL]


def test_custom_flow_config():
    config = FlowConfig(
        order=(ConversationState.EVENT_TYPE, ConversationState.BUDGET, ConversationState.PLANNING),
        prompts={
            ConversationState.EVENT_TYPE: "What are we celebrating?",
            ConversationState.PLANNING: "On it.",
        },
    )
    flow = ConversationFlow(config)

    assert flow.next_state(ConversationState.EVENT_TYPE) == ConversationState.BUDGET
    assert flow.next_state(ConversationState.BUDGET) == ConversationState.PLANNING
    assert flow.next_state(ConversationState.SCOPE) == ConversationState.PLANNING
    # states without a prompt use the terminal prompt
    assert flow.prompt_for(ConversationState.BUDGET) == "On it."


def test_state_parse_is_lenient():
    assert ConversationState.parse("budget") == ConversationState.BUDGET
    assert ConversationState.parse(None) == ConversationState.INITIAL
    assert ConversationState.parse("collecting_date") == ConversationState.INITIAL


def test_seven_steps_from_initial_reach_planning_and_stay():
    flow = ConversationFlow()
    state = ConversationState.INITIAL
    for _ in range(7):
        state = flow.next_state(state)
    assert state == ConversationState.PLANNING

    for _ in range(3):
        state = flow.next_state(state)
        assert state == ConversationState.PLANNING

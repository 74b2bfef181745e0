"""Unit tests for the on-page assistant's canned replies and conversation log."""

import pytest

from chatbot_engine import (
    DEFAULT_RESPONSE,
    GREETING,
    REPLY_RULES,
    get_bot_response,
    new_conversation,
    send_message,
)


def _reply(name):
    return next(rule["response"] for rule in REPLY_RULES if rule["name"] == name)


@pytest.mark.unit
def test_stack_question_gets_stack_reply():
    """Test that a tech-stack question returns the stack reply."""
    assert get_bot_response("what stack do you use") == _reply("stack")


@pytest.mark.unit
def test_owow_question_gets_owow_reply():
    """Test that mentioning Owow returns the Owow-specific reply."""
    assert get_bot_response("tell me about owow") == _reply("owow")


@pytest.mark.unit
def test_unmatched_question_gets_default():
    """Test fallback when no rule matches."""
    assert get_bot_response("xyz123 unmatched") == DEFAULT_RESPONSE


@pytest.mark.unit
def test_matching_ignores_case():
    """Test that STACK and stack give the same reply."""
    assert get_bot_response("STACK") == get_bot_response("stack") == _reply("stack")


@pytest.mark.unit
def test_first_matching_rule_wins():
    """Test that rule order decides, not the number of hits."""
    # Hits both the Owow rule ("recruit") and the stack rule ("tech", "stack")
    assert get_bot_response("recruit with your tech stack?") == _reply("owow")
    # Capabilities is listed before contact
    assert get_bot_response("What can you do before the interview?") == _reply("capabilities")


@pytest.mark.unit
def test_contact_rule():
    """Test that scheduling questions get the contact reply."""
    assert get_bot_response("Can we schedule a call?") == _reply("contact")


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", "   ", "¿¡!!??…", "日本語のテキスト", "\x00\n\t", "((([[["])
def test_any_text_gets_exactly_one_reply(text):
    """Test that odd input never raises and falls back to the default."""
    assert get_bot_response(text) == DEFAULT_RESPONSE


@pytest.mark.unit
def test_new_conversation_starts_with_greeting():
    """Test that a fresh log holds only the assistant greeting."""
    history = new_conversation()
    assert history == [{"role": "assistant", "text": GREETING}]


@pytest.mark.unit
def test_new_conversation_returns_independent_logs():
    """Test that two fresh logs do not share state."""
    first = new_conversation()
    second = new_conversation()
    send_message(first, "hello")
    assert len(second) == 1


@pytest.mark.unit
def test_send_message_appends_user_then_assistant():
    """Test that one message adds exactly two ordered entries."""
    history = new_conversation()
    reply = send_message(history, "  what stack do you use  ")

    assert reply == _reply("stack")
    assert len(history) == 3
    assert history[1] == {"role": "user", "text": "what stack do you use"}
    assert history[2] == {"role": "assistant", "text": reply}


@pytest.mark.unit
def test_send_message_default_reply_is_logged():
    """Test that the fallback reply is logged like any other."""
    history = []
    reply = send_message(history, "xyz123 unmatched")

    assert reply == DEFAULT_RESPONSE
    assert [m["role"] for m in history] == ["user", "assistant"]


@pytest.mark.unit
def test_send_message_keeps_chronological_order():
    """Test that successive messages append in order."""
    history = new_conversation()
    send_message(history, "tell me about owow")
    send_message(history, "STACK")

    assert [m["role"] for m in history] == ["assistant", "user", "assistant", "user", "assistant"]
    assert history[1]["text"] == "tell me about owow"
    assert history[3]["text"] == "STACK"


@pytest.mark.unit
@pytest.mark.parametrize("blank", ["", "   ", "\n\t ", None])
def test_send_message_ignores_blank_input(blank):
    """Test that blank input produces no reply and no log entries."""
    history = new_conversation()
    before = list(history)

    assert send_message(history, blank) is None
    assert history == before


@pytest.mark.unit
def test_contact_reply_wording():
    """Test the scheduling reply keeps its calendly hint."""
    assert _reply("contact") == (
        "Click 'Schedule Interview' to email me (or replace mailto in the "
        "code with your calendly)."
    )

"""Unit tests for the action parser."""

import pytest

from agent_studio.agent.parser import (
    DEFAULT_THOUGHT,
    FinalAnswer,
    NoAction,
    SubAgentCall,
    ToolAction,
    extract_thought,
    parse_completion,
    unwrap_args,
)


class TestFinalAnswer:
    """Tests for final answer detection."""

    def test_final_answer_with_thought(self):
        parsed = parse_completion("Thought: I know this.\nFinal Answer: 42")
        assert isinstance(parsed.action, FinalAnswer)
        assert parsed.action.text == "42"
        assert parsed.thought == "I know this."

    def test_final_answer_wins_over_action(self):
        """A final answer terminates even if action text is also present."""
        text = 'Thought: done\nAction: GoogleSearch("x")\nFinal Answer: the answer'
        parsed = parse_completion(text)
        assert isinstance(parsed.action, FinalAnswer)
        assert parsed.action.text == "the answer"
        assert parsed.thought == "done"

    def test_final_answer_keeps_multiline_text(self):
        parsed = parse_completion("Final Answer: line one\nline two\n")
        assert parsed.action.text == "line one\nline two"

    def test_final_answer_without_thought_uses_default(self):
        parsed = parse_completion("Final Answer: yes")
        assert parsed.thought == DEFAULT_THOUGHT


class TestActions:
    """Tests for action detection."""

    def test_quoted_tool_action(self):
        parsed = parse_completion('Thought: search it\nAction: GoogleSearch("weather in Paris")')
        assert isinstance(parsed.action, ToolAction)
        assert parsed.action.name == "GoogleSearch"
        assert parsed.action.args == "weather in Paris"
        assert parsed.thought == "search it"

    def test_key_value_argument_is_unwrapped(self):
        parsed = parse_completion('Action: HttpRequest(url="https://example.com")')
        assert parsed.action.args == "https://example.com"

    def test_arguments_run_to_last_parenthesis(self):
        parsed = parse_completion('Action: CodeInterpreter("print(max(1, 2))")')
        assert parsed.action.name == "CodeInterpreter"
        assert parsed.action.args == "print(max(1, 2))"

    def test_sub_agent_call(self):
        parsed = parse_completion('Thought: ask the writer\nAction: Agent_Creative_Writer("a poem")')
        assert isinstance(parsed.action, SubAgentCall)
        assert parsed.action.name == "Agent_Creative_Writer"
        assert parsed.action.agent_slug == "Creative_Writer"
        assert parsed.action.args == "a poem"

    def test_thought_before_action_without_marker(self):
        parsed = parse_completion('I should look this up.\nAction: GoogleSearch("x")')
        assert parsed.thought == "I should look this up."

    def test_unknown_tool_is_still_a_tool_action(self):
        parsed = parse_completion("Action: Teleport(home)")
        assert isinstance(parsed.action, ToolAction)
        assert parsed.action.name == "Teleport"
        assert parsed.action.args == "home"


class TestNoAction:
    """Tests for completions that hold neither an action nor an answer."""

    def test_plain_text(self):
        parsed = parse_completion("I am not sure what to do.")
        assert isinstance(parsed.action, NoAction)
        assert parsed.thought == DEFAULT_THOUGHT
        assert parsed.raw == "I am not sure what to do."

    def test_action_marker_without_call(self):
        parsed = parse_completion("Thought: hmm\nAction: search the web")
        assert isinstance(parsed.action, NoAction)
        assert parsed.thought == "hmm"

    def test_empty_completion(self):
        parsed = parse_completion("")
        assert isinstance(parsed.action, NoAction)
        assert parsed.thought == DEFAULT_THOUGHT


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('"quoted"', "quoted"),
        ("'single'", "single"),
        ("`backtick`", "backtick"),
        ('""nested""', '"nested"'),
        ('query="value"', "value"),
        ("bare words", "bare words"),
        ('"mismatched\'', '"mismatched\''),
        ("  padded  ", "padded"),
    ],
)
def test_unwrap_args(raw, expected):
    assert unwrap_args(raw) == expected


def test_extract_thought_stops_at_final_answer():
    assert extract_thought("Thought: a\nb\nFinal Answer: c") == "a\nb"

"""Action parser for the reasoning loop.

Turns a raw model completion into a thought plus exactly one typed action:

* ``FinalAnswer``: a ``Final Answer:`` marker was found. It wins over any
  action text in the same completion.
* ``SubAgentCall``: ``Action: Agent_<Name>(args)``
* ``ToolAction``: ``Action: <Tool>(args)``
* ``NoAction``: nothing parseable, answered with corrective feedback.
"""

import re
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ..models.agent import SUB_AGENT_PREFIX

DEFAULT_THOUGHT = "I need to determine the next step."

_THOUGHT_RE = re.compile(r"Thought:\s*(.*?)(?=Action:|Final Answer:|$)", re.DOTALL)
_LEADING_RE = re.compile(r"^(.*?)(?=Action:|Final Answer:)", re.DOTALL)
_FINAL_ANSWER_RE = re.compile(r"Final Answer:\s*(.*)", re.DOTALL)
# Greedy so that arguments containing parentheses run to the last ")"
_ACTION_RE = re.compile(r"Action:\s*(\w+)\((.*)\)", re.DOTALL)
_KEY_VALUE_RE = re.compile(r'^\w+\s*=\s*"(.*)"$', re.DOTALL)
_QUOTES = ('"', "'", "`")


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class ToolAction(_Action):
    """Call of a regular tool."""

    kind: Literal["tool"] = "tool"
    name: str
    args: str


class SubAgentCall(_Action):
    """Call of another agent through its ``Agent_<Name>`` pseudo-tool."""

    kind: Literal["sub_agent"] = "sub_agent"
    name: str
    args: str

    @property
    def agent_slug(self) -> str:
        return self.name[len(SUB_AGENT_PREFIX):]


class FinalAnswer(_Action):
    """Terminal answer."""

    kind: Literal["final_answer"] = "final_answer"
    text: str


class NoAction(_Action):
    """Neither a valid action nor a final answer."""

    kind: Literal["none"] = "none"


Action = Union[ToolAction, SubAgentCall, FinalAnswer, NoAction]


class ParsedCompletion(BaseModel):
    """Result of parsing one completion.

    Attributes:
        raw: Completion text as received
        thought: Extracted reasoning
        action: The single action the completion asks for
    """

    model_config = ConfigDict(frozen=True)

    raw: str
    thought: str
    action: Action = Field(discriminator="kind")


def extract_thought(text: str) -> str:
    """Extract the reasoning part of a completion.

    Args:
        text: Raw completion

    Returns:
        Text after ``Thought:`` up to the next marker, else the text before
        the first marker, else a default thought
    """
    match = _THOUGHT_RE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()

    if not match:
        leading = _LEADING_RE.search(text)
        if leading and leading.group(1).strip():
            return leading.group(1).strip()

    return DEFAULT_THOUGHT


def unwrap_args(args: str) -> str:
    """Normalize raw action arguments.

    A single ``key="value"`` form is unwrapped to ``value``. Otherwise one
    layer of matching quotes or backticks is stripped.

    Args:
        args: Text between the action parentheses

    Returns:
        Argument string passed to the tool
    """
    args = args.strip()

    key_value = _KEY_VALUE_RE.match(args)
    if key_value and key_value.group(1):
        return key_value.group(1)

    if len(args) >= 2 and args[0] in _QUOTES and args[-1] == args[0]:
        return args[1:-1]

    return args


def parse_action(text: str) -> Action:
    """Find the action a completion asks for, ignoring final answers.

    Args:
        text: Raw completion

    Returns:
        ToolAction, SubAgentCall or NoAction
    """
    match = _ACTION_RE.search(text)
    if not match:
        return NoAction()

    name = match.group(1).strip()
    args = unwrap_args(match.group(2))
    if name.startswith(SUB_AGENT_PREFIX) and len(name) > len(SUB_AGENT_PREFIX):
        return SubAgentCall(name=name, args=args)
    return ToolAction(name=name, args=args)


def parse_completion(text: str) -> ParsedCompletion:
    """Parse a model completion into a thought and a typed action.

    Args:
        text: Raw completion

    Returns:
        Parsed completion
    """
    text = text or ""
    thought = extract_thought(text)

    final_answer = _FINAL_ANSWER_RE.search(text)
    if final_answer:
        return ParsedCompletion(raw=text, thought=thought, action=FinalAnswer(text=final_answer.group(1).strip()))

    return ParsedCompletion(raw=text, thought=thought, action=parse_action(text))

"""Text and JSON rendering for issue dependency trees."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson
import typer

from linctl.constants import (
    BRANCH,
    CIRCULAR_MARK,
    DEFAULT_STATE_COLOR,
    IDENTIFIER_COLOR,
    LAST_BRANCH,
    PIPE_INDENT,
    SECTION_LABEL_COLOR,
    SPACE_INDENT,
    STATE_COLORS,
)
from linctl.walker import EventKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from linctl.models import IssueRef, State, TreeNode
    from linctl.walker import VisitEvent


def colorize_state(state: State) -> str:
    """Color a state name according to its workflow state type."""
    style = STATE_COLORS.get(state.type or "", DEFAULT_STATE_COLOR)
    return typer.style(state.name, **style)  # type: ignore[arg-type]


def format_issue_one_liner(issue: IssueRef, plaintext: bool = False) -> str:
    """Format an issue as ``IDENT (State) - Title``.

    The state parenthetical is left out when the issue has no state.
    """
    if plaintext:
        if issue.state_name:
            return f"{issue.identifier} ({issue.state_name}) - {issue.title}"
        return f"{issue.identifier} - {issue.title}"

    ident = typer.style(issue.identifier, fg=IDENTIFIER_COLOR, bold=True)
    state_str = f" ({colorize_state(issue.state)})" if issue.state else ""
    return f"{ident}{state_str} - {issue.title}"


def _prefix(trail: tuple[bool, ...]) -> str:
    return "".join(SPACE_INDENT if last else PIPE_INDENT for last in trail)


def _label(text: str, plaintext: bool) -> str:
    return text if plaintext else typer.style(text, fg=SECTION_LABEL_COLOR)


def _issue_of(event: VisitEvent) -> IssueRef:
    if event.issue is None:
        msg = f"{event.kind.value} event carries no issue"
        raise ValueError(msg)
    return event.issue


def render_event(event: VisitEvent, plaintext: bool = False) -> str:
    """Render one walk event as a single tree line."""
    if event.kind is EventKind.ROOT:
        return format_issue_one_liner(_issue_of(event), plaintext)

    connector = LAST_BRANCH if event.is_last else BRANCH
    prefix = _prefix(event.trail)

    if event.kind is EventKind.SECTION:
        return f"{prefix}{connector} {_label(event.label + ':', plaintext)}"

    line = format_issue_one_liner(_issue_of(event), plaintext)
    mark = CIRCULAR_MARK if event.circular else ""
    if event.inline:
        return f"{prefix}{connector} {_label(event.label, plaintext)}: {line}{mark}"
    return f"{prefix}{connector} {line}{mark}"


def render_text(
    events: Iterable[VisitEvent],
    plaintext: bool = False,
) -> Iterator[str]:
    """Render walk events lazily, one line per event."""
    for event in events:
        yield render_event(event, plaintext)


def tree_to_dict(node: TreeNode) -> dict[str, Any]:
    """Convert a TreeNode to a JSON-ready dictionary.

    ``state`` is omitted when absent, ``children`` when empty, and
    ``circular`` unless the node is a circular leaf.
    """
    data: dict[str, Any] = {
        "type": node.type,
        "id": node.id,
        "identifier": node.identifier,
        "title": node.title,
    }
    if node.state:
        data["state"] = node.state
    if node.circular:
        data["circular"] = True
    if node.children:
        data["children"] = [tree_to_dict(child) for child in node.children]
    return data


def render_json(node: TreeNode) -> str:
    """Serialize a tree as an indented JSON document."""
    return orjson.dumps(tree_to_dict(node), option=orjson.OPT_INDENT_2).decode()

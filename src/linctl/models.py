"""Data models for Linear issues and dependency trees using dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EdgeKind(str, Enum):
    """How one issue is reached from another in the dependency tree."""

    PARENT = "parent"
    SUB_ISSUE = "sub-issue"
    BLOCKS = "blocks"
    BLOCKED_BY = "blocked-by"
    RELATED = "related"
    DUPLICATE = "duplicate"


@dataclass
class State:
    """A workflow state (e.g. "In Progress" of type "started")."""

    name: str
    type: str | None = None


@dataclass
class IssueRef:
    """A shallow reference to an issue, without its own edges."""

    id: str
    identifier: str
    title: str
    state: State | None = None

    @property
    def state_name(self) -> str | None:
        """Get the state name, or None when the issue has no state."""
        return self.state.name if self.state else None


@dataclass
class Relation:
    """A typed relation record as returned by the API."""

    type: str
    related_issue: IssueRef | None = None


@dataclass
class Issue(IssueRef):
    """A fully fetched issue with its parent, sub-issues and relations."""

    parent: IssueRef | None = None
    children: list[IssueRef] = field(default_factory=list[IssueRef])
    relations: list[Relation] = field(default_factory=list[Relation])


@dataclass
class TreeNode:
    """One node of a rendered dependency tree.

    ``type`` is ``"root"`` for the starting issue and the edge label for
    everything else.
    """

    type: str
    id: str
    identifier: str
    title: str
    state: str | None = None
    children: list[TreeNode] = field(default_factory=list["TreeNode"])
    circular: bool = False


def _dict_to_state(data: dict[str, Any] | None) -> State | None:
    if not data or not data.get("name"):
        return None
    return State(name=data["name"], type=data.get("type"))


def dict_to_ref(data: dict[str, Any]) -> IssueRef:
    """Convert an API issue payload to a shallow IssueRef.

    Nested parent/children/relations in the payload are ignored.
    """
    return IssueRef(
        id=data["id"],
        identifier=data.get("identifier") or data["id"],
        title=data.get("title") or "",
        state=_dict_to_state(data.get("state")),
    )


def dict_to_issue(data: dict[str, Any]) -> Issue:
    """Convert an API issue payload to an Issue.

    Null entries in the children and relations lists are skipped.
    """
    parent_data = data.get("parent")
    children_data = (data.get("children") or {}).get("nodes") or []
    relations_data = (data.get("relations") or {}).get("nodes") or []

    relations: list[Relation] = []
    for rel in relations_data:
        if not rel:
            continue
        related = rel.get("relatedIssue")
        relations.append(
            Relation(
                type=rel.get("type") or "",
                related_issue=dict_to_ref(related) if related else None,
            ),
        )

    ref = dict_to_ref(data)
    return Issue(
        id=ref.id,
        identifier=ref.identifier,
        title=ref.title,
        state=ref.state,
        parent=dict_to_ref(parent_data) if parent_data else None,
        children=[dict_to_ref(child) for child in children_data if child],
        relations=relations,
    )

"""Dependency graph traversal for the issue tree.

The graph is discovered lazily: an issue's edges are only known once the
issue has been fetched. ``GraphWalker.walk_events`` performs a depth-first,
depth-bounded walk and yields a ``VisitEvent`` per tree line. Text output
renders those events as they arrive; JSON output folds them into a
``TreeNode`` via ``GraphWalker.walk``.

A visited set keyed by issue id is created per walk. An issue is expanded
at most once; any later occurrence becomes a ``[circular]`` leaf.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from linctl.api import LinearError
from linctl.constants import DEFAULT_TREE_DEPTH
from linctl.models import EdgeKind, TreeNode
from linctl.relations import Edge, group_relations

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from linctl.models import Issue, IssueRef

logger = logging.getLogger(__name__)


class IssueFetcher(Protocol):
    """Anything that can fetch a full issue by identifier."""

    def get_issue(self, identifier: str) -> Issue:
        """Fetch an issue with its parent, sub-issues and relations.

        Raises:
            LinearError: If the issue cannot be fetched
        """
        ...


class EventKind(str, Enum):
    """Kind of line produced by the walk."""

    ROOT = "root"
    SECTION = "section"
    ITEM = "item"


@dataclass(frozen=True)
class VisitEvent:
    """A single step of the walk.

    ``depth`` is the depth of the issue whose edges are being listed.
    ``trail`` holds the "was last" flag of every enclosing level and
    determines the continuation prefix of the line.
    """

    kind: EventKind
    depth: int
    trail: tuple[bool, ...] = ()
    is_last: bool = True
    label: str = ""
    issue: IssueRef | None = None
    edge: EdgeKind | None = None
    circular: bool = False
    inline: bool = False


@dataclass
class Section:
    """A labeled group of edges leaving one issue."""

    label: str
    edges: list[Edge] = field(default_factory=list[Edge])
    inline: bool = False


def build_sections(issue: Issue) -> list[Section]:
    """Build the non-empty edge sections of an issue in display order.

    Order: parent, sub-issues, blocks, blocked-by, related, duplicates.
    The parent section is the only one printed inline.
    """
    sections: list[Section] = []

    if issue.parent is not None:
        parent_edge = Edge(
            issue=issue.parent,
            kind=EdgeKind.PARENT,
            label=EdgeKind.PARENT.value,
        )
        sections.append(Section("parent", [parent_edge], inline=True))

    if issue.children:
        sub_issues = [
            Edge(issue=child, kind=EdgeKind.SUB_ISSUE, label=EdgeKind.SUB_ISSUE.value)
            for child in issue.children
        ]
        sections.append(Section("sub-issues", sub_issues))

    groups = group_relations(issue)
    for label, edges in (
        ("blocks", groups.blocks),
        ("blocked-by", groups.blocked_by),
        ("related", groups.related),
        ("duplicates", groups.duplicates),
    ):
        if edges:
            sections.append(Section(label, edges))

    return sections


class GraphWalker:
    """Depth-first, cycle-safe walker over an issue's relationship graph."""

    def __init__(
        self,
        fetcher: IssueFetcher,
        max_depth: int = DEFAULT_TREE_DEPTH,
    ) -> None:
        """Create a walker.

        Args:
            fetcher: Source of full issues for expanding stubs
            max_depth: Depth at which expansion stops (root is depth 0)

        Raises:
            ValueError: If max_depth is negative
        """
        if max_depth < 0:
            msg = f"max_depth must be >= 0, got {max_depth}"
            raise ValueError(msg)
        self.fetcher = fetcher
        self.max_depth = max_depth

    def walk_events(self, root: Issue) -> Iterator[VisitEvent]:
        """Walk the graph from an already fetched root, yielding events.

        Issues are fetched lazily as the iterator advances.
        """
        visited: set[str] = {root.id}
        yield VisitEvent(EventKind.ROOT, depth=0, label="root", issue=root)
        yield from self._expand(root, 0, (), visited)

    def walk_streaming(
        self,
        root: Issue,
        emit: Callable[[VisitEvent], None],
    ) -> None:
        """Walk the graph and pass every event to *emit* as it is produced."""
        for event in self.walk_events(root):
            emit(event)

    def walk(self, root: Issue) -> TreeNode:
        """Walk the graph and return the fully built tree."""
        root_node: TreeNode | None = None
        # stack[d] is the node whose edges are listed at depth d
        stack: list[TreeNode] = []

        for event in self.walk_events(root):
            if event.issue is None:
                continue
            if event.kind is EventKind.ROOT:
                root_node = build_node(event)
                stack = [root_node]
            elif event.kind is EventKind.ITEM:
                node = build_node(event)
                del stack[event.depth + 1 :]
                stack[event.depth].children.append(node)
                stack.append(node)

        if root_node is None:  # pragma: no cover - walk_events always yields root
            msg = "walk produced no root"
            raise RuntimeError(msg)
        return root_node

    def _expand(
        self,
        issue: Issue,
        depth: int,
        trail: tuple[bool, ...],
        visited: set[str],
    ) -> Iterator[VisitEvent]:
        sections = build_sections(issue)
        if depth > 0 and issue.parent is not None and issue.parent.id in visited:
            # an already visited parent is not listed again below its child
            sections = [s for s in sections if s.label != "parent"]
        for s_idx, section in enumerate(sections):
            section_last = s_idx == len(sections) - 1
            section_trail = (*trail, section_last)

            if section.inline:
                yield from self._visit(
                    section.edges[0],
                    depth,
                    trail,
                    section_last,
                    section_trail,
                    visited,
                    inline=True,
                )
                continue

            yield VisitEvent(
                EventKind.SECTION,
                depth=depth,
                trail=trail,
                is_last=section_last,
                label=section.label,
            )
            for i_idx, edge in enumerate(section.edges):
                item_last = i_idx == len(section.edges) - 1
                yield from self._visit(
                    edge,
                    depth,
                    section_trail,
                    item_last,
                    (*section_trail, item_last),
                    visited,
                )

    def _visit(
        self,
        edge: Edge,
        depth: int,
        trail: tuple[bool, ...],
        is_last: bool,
        child_trail: tuple[bool, ...],
        visited: set[str],
        inline: bool = False,
    ) -> Iterator[VisitEvent]:
        ref = edge.issue
        circular = ref.id in visited
        yield VisitEvent(
            EventKind.ITEM,
            depth=depth,
            trail=trail,
            is_last=is_last,
            label=edge.label,
            issue=ref,
            edge=edge.kind,
            circular=circular,
            inline=inline,
        )

        if circular or depth >= self.max_depth:
            return

        visited.add(ref.id)
        try:
            full = self.fetcher.get_issue(ref.identifier)
        except LinearError as e:
            logger.debug("Could not expand %s: %s", ref.identifier, e)
            return

        yield from self._expand(full, depth + 1, child_trail, visited)


def build_node(event: VisitEvent) -> TreeNode:
    """Build a childless tree node from a root or item event."""
    ref = event.issue
    if ref is None:
        msg = f"{event.kind.value} event carries no issue"
        raise ValueError(msg)
    return TreeNode(
        type=event.label,
        id=ref.id,
        identifier=ref.identifier,
        title=ref.title,
        state=ref.state_name,
        circular=event.circular,
    )

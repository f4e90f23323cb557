"""Relation classification and grouping."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from linctl.models import EdgeKind

if TYPE_CHECKING:
    from linctl.models import Issue, IssueRef

_KNOWN_TYPES: dict[str, EdgeKind] = {
    "blocks": EdgeKind.BLOCKS,
    "blocked": EdgeKind.BLOCKED_BY,
    "blocked-by": EdgeKind.BLOCKED_BY,
    "related": EdgeKind.RELATED,
    "duplicate": EdgeKind.DUPLICATE,
}


@dataclass
class Edge:
    """A stub reached through an edge, with the label shown for it."""

    issue: IssueRef
    kind: EdgeKind
    label: str


@dataclass
class RelationGroups:
    """An issue's relations bucketed by edge kind, in API order."""

    blocks: list[Edge] = field(default_factory=list[Edge])
    blocked_by: list[Edge] = field(default_factory=list[Edge])
    related: list[Edge] = field(default_factory=list[Edge])
    duplicates: list[Edge] = field(default_factory=list[Edge])


def classify(raw_type: str) -> EdgeKind:
    """Map a raw relation type to its edge kind.

    Matching is case-insensitive. Unknown types fall back to RELATED.
    """
    return _KNOWN_TYPES.get(raw_type.lower(), EdgeKind.RELATED)


def edge_label(raw_type: str) -> str:
    """Get the display label for a raw relation type.

    Known types use the canonical label; unknown types keep the raw string.
    """
    kind = _KNOWN_TYPES.get(raw_type.lower())
    return kind.value if kind is not None else raw_type


def group_relations(issue: Issue) -> RelationGroups:
    """Partition an issue's relations into blocks/blocked-by/related/duplicates.

    Relations pointing at no issue (e.g. a deleted one) are dropped.
    """
    groups = RelationGroups()
    buckets = {
        EdgeKind.BLOCKS: groups.blocks,
        EdgeKind.BLOCKED_BY: groups.blocked_by,
        EdgeKind.RELATED: groups.related,
        EdgeKind.DUPLICATE: groups.duplicates,
    }
    for rel in issue.relations:
        if rel.related_issue is None:
            logging.getLogger(__name__).debug(
                "Skipping %s relation on %s with no related issue",
                rel.type,
                issue.identifier,
            )
            continue
        kind = classify(rel.type)
        buckets[kind].append(
            Edge(issue=rel.related_issue, kind=kind, label=edge_label(rel.type)),
        )
    return groups

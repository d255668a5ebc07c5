# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from consent_ledger.types import EdgeKind


class ConsentEdge(BaseModel, frozen=True):
    """
    An immutable snapshot of one subject → reader relation.

    Attributes:
        kind: :attr:`EdgeKind.GRANT` or :attr:`EdgeKind.DENY`.
        subject: The subject that owns the edge.
        reader: The reader the edge applies to.
        active: Whether the relation currently holds.
        updated_at: UTC time of the last write.
    """

    kind: str
    subject: str
    reader: str
    active: bool
    updated_at: datetime


def _make_edge_key(kind: str, subject: str, reader: str) -> tuple[str, str, str]:
    """Create a hashable lookup key for an edge."""
    return (kind, subject, reader)


class EdgeStore:
    """
    In-memory tagged key-value store for consent edges.

    Edges are keyed by ``(kind, subject, reader)``. Grant and deny edges of
    the same pair live side by side and never influence each other here;
    precedence between them is decided by the access gateway. Edges are
    overwritten, never removed, so a cleared edge remains visible with
    ``active=False``.
    """

    def __init__(self) -> None:
        self._edges: dict[tuple[str, str, str], ConsentEdge] = {}

    def put(self, edge: ConsentEdge) -> None:
        """Store or replace ``edge``."""
        self._edges[_make_edge_key(edge.kind, edge.subject, edge.reader)] = edge

    def get(self, kind: str, subject: str, reader: str) -> ConsentEdge | None:
        return self._edges.get(_make_edge_key(kind, subject, reader))

    def is_active(self, kind: str, subject: str, reader: str) -> bool:
        """Return True if the edge exists and is active. Missing edges are inactive."""
        edge = self.get(kind, subject, reader)
        return edge is not None and edge.active

    def active_readers(self, kind: str, subject: str) -> list[str]:
        """
        Return readers with an active edge of ``kind`` from ``subject``.

        Only the given subject's namespace is scanned.

        Returns:
            Reader identities in the order their edges were first written.
        """
        return [
            edge.reader
            for key, edge in self._edges.items()
            if key[0] == kind and key[1] == subject and edge.active
        ]

    def count(self) -> int:
        """Return the total number of stored edges, active or not."""
        return len(self._edges)

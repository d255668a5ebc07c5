# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Abstract base class that every ledger storage backend must implement.

Implementations must guarantee append-only semantics: records written through
``append`` must never be altered or deleted by the storage layer, and each
subject's records must come back in the order they were appended.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from consent_ledger.ledger.record import EventRecord


class LedgerStorage(ABC):
    """
    Contract for event record persistence backends.

    Storage is partitioned by subject. No operation spans more than one
    subject's records.
    """

    @abstractmethod
    def append(self, record: EventRecord) -> None:
        """
        Persist a fully-formed record at the end of its subject's sequence.

        The ledger has already assigned ``record.sequence_id``; it equals the
        subject's count before this call.
        """
        ...

    @abstractmethod
    def count(self, subject: str) -> int:
        """Return the number of records stored for ``subject``."""
        ...

    @abstractmethod
    def slice(self, subject: str, start: int, stop: int) -> list[EventRecord]:
        """
        Return ``subject``'s records at positions ``[start, stop)``.

        Bounds beyond the stored range are truncated, the way list slicing
        truncates them.
        """
        ...

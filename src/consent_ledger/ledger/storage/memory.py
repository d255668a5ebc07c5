# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Volatile in-memory storage backend.

Each subject's records are held in a plain list in append order. Suitable for
testing and short-lived processes. Data is lost when the process exits.
"""

from __future__ import annotations

from consent_ledger.ledger.record import EventRecord
from consent_ledger.ledger.storage.interface import LedgerStorage


class MemoryLedgerStorage(LedgerStorage):
    """In-memory, non-persistent LedgerStorage implementation."""

    def __init__(self) -> None:
        self._records: dict[str, list[EventRecord]] = {}

    def append(self, record: EventRecord) -> None:
        self._records.setdefault(record.subject, []).append(record)

    def count(self, subject: str) -> int:
        return len(self._records.get(subject, ()))

    def slice(self, subject: str, start: int, stop: int) -> list[EventRecord]:
        return list(self._records.get(subject, [])[start:stop])

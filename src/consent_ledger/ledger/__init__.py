# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from consent_ledger.ledger.ledger import EventLedger, coerce_event_class
from consent_ledger.ledger.record import EventRecord, create_record
from consent_ledger.ledger.storage import LedgerStorage, MemoryLedgerStorage

__all__ = [
    "EventLedger",
    "EventRecord",
    "LedgerStorage",
    "MemoryLedgerStorage",
    "coerce_event_class",
    "create_record",
]

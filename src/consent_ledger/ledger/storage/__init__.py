# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from consent_ledger.ledger.storage.interface import LedgerStorage
from consent_ledger.ledger.storage.memory import MemoryLedgerStorage

__all__ = [
    "LedgerStorage",
    "MemoryLedgerStorage",
]

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from consent_ledger.consent.denylist import Denylist
from consent_ledger.consent.grants import GrantTable
from consent_ledger.consent.store import ConsentEdge, EdgeStore

__all__ = [
    "GrantTable",
    "Denylist",
    "ConsentEdge",
    "EdgeStore",
]

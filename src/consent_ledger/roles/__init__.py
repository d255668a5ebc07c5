# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from consent_ledger.roles.directory import RoleAssignment, RoleDirectory

__all__ = [
    "RoleDirectory",
    "RoleAssignment",
]

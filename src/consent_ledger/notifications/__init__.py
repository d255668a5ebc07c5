# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from consent_ledger.notifications.log import NotificationLog
from consent_ledger.notifications.query import (
    NotificationFilter,
    NotificationQueryResult,
    apply_filter,
    count_by_kind,
)
from consent_ledger.notifications.record import Notification

__all__ = [
    "NotificationLog",
    "NotificationFilter",
    "NotificationQueryResult",
    "Notification",
    "apply_filter",
    "count_by_kind",
]

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class Notification(BaseModel, frozen=True):
    """
    An immutable notification describing one state change.

    Notifications are what external audit and observability consumers
    subscribe to. They are emitted after the change has been applied.

    Attributes:
        notification_id: Unique UUID for this notification.
        sequence: Position of this notification in its log (0-based).
        kind: One of the :class:`~consent_ledger.types.NotificationKind` values.
        actor: Identity that performed the operation.
        subject: Subject namespace the change applies to, if any.
        reader: Reader the change concerns, if any.
        detail: Additional key-value data (role, sequence id, etc.).
        timestamp: UTC time the notification was emitted.
    """

    notification_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    sequence: int
    kind: str
    actor: str
    subject: str | None = None
    reader: str | None = None
    detail: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(tz=timezone.utc)
    )

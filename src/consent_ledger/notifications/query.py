# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from collections import Counter
from datetime import datetime

from pydantic import BaseModel

from consent_ledger.notifications.record import Notification


class NotificationFilter(BaseModel, frozen=True):
    """
    Filter criteria for querying notifications.

    All fields are optional and combined with AND logic.

    Attributes:
        kind: Only include notifications of this kind.
        actor: Only include notifications performed by this identity.
        subject: Only include notifications for this subject namespace.
        reader: Only include notifications concerning this reader.
        since: Only include notifications at or after this UTC timestamp.
        until: Only include notifications before this UTC timestamp.
        limit: Maximum number of notifications to return. 0 means no limit.
        offset: Number of matches to skip before collecting results.
    """

    kind: str | None = None
    actor: str | None = None
    subject: str | None = None
    reader: str | None = None
    since: datetime | None = None
    until: datetime | None = None
    limit: int = 0
    offset: int = 0


class NotificationQueryResult(BaseModel, frozen=True):
    """
    Result of a notification query.

    Attributes:
        records: Matching notifications, oldest first.
        total_matched: Number of matches before ``offset``/``limit``.
        filter_applied: The filter used.
    """

    records: list[Notification]
    total_matched: int
    filter_applied: NotificationFilter


def apply_filter(
    notifications: list[Notification],
    notification_filter: NotificationFilter,
) -> NotificationQueryResult:
    """Apply ``notification_filter`` to ``notifications`` in memory."""
    matched = [
        notification
        for notification in notifications
        if _matches(notification, notification_filter)
    ]

    paginated = matched[notification_filter.offset :]
    if notification_filter.limit > 0:
        paginated = paginated[: notification_filter.limit]

    return NotificationQueryResult(
        records=paginated,
        total_matched=len(matched),
        filter_applied=notification_filter,
    )


def _matches(notification: Notification, notification_filter: NotificationFilter) -> bool:
    if notification_filter.kind is not None and notification.kind != notification_filter.kind:
        return False
    if notification_filter.actor is not None and notification.actor != notification_filter.actor:
        return False
    if (
        notification_filter.subject is not None
        and notification.subject != notification_filter.subject
    ):
        return False
    if (
        notification_filter.reader is not None
        and notification.reader != notification_filter.reader
    ):
        return False
    if notification_filter.since is not None and notification.timestamp < notification_filter.since:
        return False
    if notification_filter.until is not None and notification.timestamp >= notification_filter.until:
        return False
    return True


def count_by_kind(notifications: list[Notification]) -> dict[str, int]:
    """Return the number of notifications of each kind present."""
    return dict(Counter(notification.kind for notification in notifications))

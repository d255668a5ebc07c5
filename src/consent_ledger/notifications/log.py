# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import collections
import logging
from typing import Any

from consent_ledger.clock import Clock, SystemClock
from consent_ledger.config import NotificationConfig
from consent_ledger.notifications.query import (
    NotificationFilter,
    NotificationQueryResult,
    apply_filter,
)
from consent_ledger.notifications.record import Notification
from consent_ledger.types import NOTIFICATION_KIND_VALUES

logger = logging.getLogger("consent_ledger.notifications")


class NotificationLog:
    """
    Records every state change made through the system as a notification.

    The log is RECORDING ONLY. It does not analyse, aggregate, or react to
    what it records; external consumers read it through :meth:`query`.

    Notifications are held in a bounded deque. When
    :attr:`~NotificationConfig.max_records` is reached the oldest
    notification is evicted. Sequence numbers keep counting, so a gap at the
    front of the log shows how many were evicted.

    Example::

        log = NotificationLog()
        log.emit(NotificationKind.ROLE_REGISTERED, actor="0xadmin", reader="0xr1")
        result = log.query(NotificationFilter(kind=NotificationKind.ROLE_REGISTERED))
    """

    def __init__(
        self,
        config: NotificationConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = config or NotificationConfig()
        self._clock = clock or SystemClock()
        self._records: collections.deque[Notification] = collections.deque(
            maxlen=self._config.max_records
        )
        self._next_sequence = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def emit(
        self,
        kind: str,
        actor: str,
        subject: str | None = None,
        reader: str | None = None,
        **detail: Any,
    ) -> Notification:
        """
        Record a notification.

        Args:
            kind: A :class:`~consent_ledger.types.NotificationKind` value.
            actor: Identity that performed the operation.
            subject: Subject namespace affected, if any.
            reader: Reader concerned, if any.
            **detail: Extra data stored on the notification.

        Returns:
            The stored :class:`Notification`.

        Raises:
            ValueError: If ``kind`` is not a known notification kind.
        """
        if kind not in NOTIFICATION_KIND_VALUES:
            raise ValueError(f"Unknown notification kind {kind!r}.")

        notification = Notification(
            sequence=self._next_sequence,
            kind=kind,
            actor=actor,
            subject=subject,
            reader=reader,
            detail=detail,
            timestamp=self._clock.now(),
        )
        self._records.append(notification)
        self._next_sequence += 1

        if self._config.log_notifications:
            logger.info(
                kind,
                extra={
                    "notification_id": notification.notification_id,
                    "sequence": notification.sequence,
                    "actor": actor,
                    "subject": subject,
                    "reader": reader,
                    "detail": detail,
                },
            )
        return notification

    def query(
        self, notification_filter: NotificationFilter | None = None
    ) -> NotificationQueryResult:
        """Return stored notifications matching ``notification_filter`` (all if None)."""
        return apply_filter(
            notifications=list(self._records),
            notification_filter=notification_filter or NotificationFilter(),
        )

    def count(self) -> int:
        """Return the number of notifications currently retained."""
        return len(self._records)

    def clear(self) -> int:
        """
        Remove all retained notifications.

        Sequence numbering continues from where it was.

        Returns:
            The number of notifications cleared.
        """
        count = len(self._records)
        self._records.clear()
        return count

    def latest(self, n: int = 10) -> list[Notification]:
        """Return the ``n`` most recent notifications, most recent last."""
        if n < 1:
            raise ValueError(f"n must be >= 1; got {n}.")
        records = list(self._records)
        return records[-n:]

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import logging

from consent_ledger.clock import Clock, SystemClock
from consent_ledger.consent.store import ConsentEdge, EdgeStore
from consent_ledger.errors import ZeroIdentityError
from consent_ledger.notifications.log import NotificationLog
from consent_ledger.types import EdgeKind, NotificationKind, is_zero_identity

logger = logging.getLogger("consent_ledger.consent")


class Denylist:
    """
    Subject-maintained list of readers the subject forbids.

    A denial overrides any grant. Anyone can be denied, including identities
    that were never registered or granted, so a subject can block a reader
    ahead of time. Denials survive grant and role changes and are cleared
    only by :meth:`undeny`.

    This is the only denylist in the system; the access gateway consults it
    before any other check.
    """

    def __init__(
        self,
        store: EdgeStore | None = None,
        notifications: NotificationLog | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._store = store or EdgeStore()
        self._notifications = notifications or NotificationLog()
        self._clock = clock or SystemClock()

    def deny(self, subject: str, reader: str) -> None:
        """
        Forbid ``reader`` from reading ``subject``'s records.

        Raises:
            ZeroIdentityError: If ``reader`` is the null identity.
        """
        if is_zero_identity(reader):
            raise ZeroIdentityError("reader")

        self._write(subject, reader, active=True)
        logger.info("reader_denied", extra={"subject": subject, "reader": reader})
        self._notifications.emit(
            NotificationKind.READER_DENIED,
            actor=subject,
            subject=subject,
            reader=reader,
        )

    def undeny(self, subject: str, reader: str) -> None:
        """
        Clear a denial. Succeeds even if ``reader`` was never denied.

        Raises:
            ZeroIdentityError: If ``reader`` is the null identity.
        """
        if is_zero_identity(reader):
            raise ZeroIdentityError("reader")

        self._write(subject, reader, active=False)
        logger.info("reader_undenied", extra={"subject": subject, "reader": reader})
        self._notifications.emit(
            NotificationKind.READER_UNDENIED,
            actor=subject,
            subject=subject,
            reader=reader,
        )

    def is_denied(self, subject: str, reader: str) -> bool:
        return self._store.is_active(EdgeKind.DENY, subject, reader)

    def denied_readers(self, subject: str) -> list[str]:
        return self._store.active_readers(EdgeKind.DENY, subject)

    def edge(self, subject: str, reader: str) -> ConsentEdge | None:
        return self._store.get(EdgeKind.DENY, subject, reader)

    def _write(self, subject: str, reader: str, active: bool) -> None:
        self._store.put(
            ConsentEdge(
                kind=EdgeKind.DENY,
                subject=subject,
                reader=reader,
                active=active,
                updated_at=self._clock.now(),
            )
        )

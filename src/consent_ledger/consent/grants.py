# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import logging

from consent_ledger.clock import Clock, SystemClock
from consent_ledger.consent.store import ConsentEdge, EdgeStore
from consent_ledger.errors import UnknownEntityError, ZeroIdentityError
from consent_ledger.notifications.log import NotificationLog
from consent_ledger.roles.directory import RoleDirectory
from consent_ledger.types import EdgeKind, NotificationKind, is_zero_identity

logger = logging.getLogger("consent_ledger.consent")


class GrantTable:
    """
    Subject-maintained record of which readers the subject permits.

    A subject may only grant a reader that currently holds a role. That
    check happens once, when the grant is made. Revoking the reader's role
    later does NOT clear the grant: if the reader is registered again, the
    old grant applies without the subject re-authorising it. The gateway
    still refuses an unregistered reader, so a grant alone never suffices.

    Revoking a grant has no precondition and always succeeds.

    Example::

        grants = GrantTable(roles)
        grants.grant("0xdriver", "0xinsurer")
        grants.is_granted("0xdriver", "0xinsurer")  # True
        grants.revoke_grant("0xdriver", "0xinsurer")
    """

    def __init__(
        self,
        roles: RoleDirectory,
        store: EdgeStore | None = None,
        notifications: NotificationLog | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._roles = roles
        self._store = store or EdgeStore()
        self._notifications = notifications or NotificationLog()
        self._clock = clock or SystemClock()

    # ------------------------------------------------------------------
    # Subject self-service
    # ------------------------------------------------------------------

    def grant(self, subject: str, reader: str) -> None:
        """
        Permit ``reader`` to read ``subject``'s records.

        Args:
            subject: The calling subject; edges are always written to the
                caller's own namespace.
            reader: A registered reader.

        Raises:
            ZeroIdentityError: If ``reader`` is the null identity.
            UnknownEntityError: If ``reader`` holds no role right now.
        """
        if is_zero_identity(reader):
            raise ZeroIdentityError("reader")
        if not self._roles.is_registered(reader):
            raise UnknownEntityError(subject=subject, reader=reader)

        self._write(subject, reader, active=True)
        logger.info("grant_issued", extra={"subject": subject, "reader": reader})
        self._notifications.emit(
            NotificationKind.GRANT_ISSUED,
            actor=subject,
            subject=subject,
            reader=reader,
        )

    def revoke_grant(self, subject: str, reader: str) -> None:
        """
        Withdraw ``subject``'s grant to ``reader``, whether or not one exists.

        Raises:
            ZeroIdentityError: If ``reader`` is the null identity.
        """
        if is_zero_identity(reader):
            raise ZeroIdentityError("reader")

        self._write(subject, reader, active=False)
        logger.info("grant_revoked", extra={"subject": subject, "reader": reader})
        self._notifications.emit(
            NotificationKind.GRANT_REVOKED,
            actor=subject,
            subject=subject,
            reader=reader,
        )

    # ------------------------------------------------------------------
    # Pure reads
    # ------------------------------------------------------------------

    def is_granted(self, subject: str, reader: str) -> bool:
        return self._store.is_active(EdgeKind.GRANT, subject, reader)

    def granted_readers(self, subject: str) -> list[str]:
        """Return readers ``subject`` currently grants, in first-grant order."""
        return self._store.active_readers(EdgeKind.GRANT, subject)

    def edge(self, subject: str, reader: str) -> ConsentEdge | None:
        """Return the last grant edge written for the pair, if any."""
        return self._store.get(EdgeKind.GRANT, subject, reader)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _write(self, subject: str, reader: str, active: bool) -> None:
        self._store.put(
            ConsentEdge(
                kind=EdgeKind.GRANT,
                subject=subject,
                reader=reader,
                active=active,
                updated_at=self._clock.now(),
            )
        )

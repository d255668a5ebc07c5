# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import logging
from datetime import datetime

from pydantic import BaseModel

from consent_ledger.admin import Administration
from consent_ledger.clock import Clock, SystemClock
from consent_ledger.errors import InvalidRoleError, NotRegisteredError, ZeroIdentityError
from consent_ledger.types import NotificationKind, Role, is_zero_identity

logger = logging.getLogger("consent_ledger.roles")


class RoleAssignment(BaseModel, frozen=True):
    """
    The current role of a reader.

    Attributes:
        reader: The reader identity.
        role: The assigned :class:`~consent_ledger.types.Role`.
            ``Role.NONE`` after a revocation.
        assigned_by: Administrator identity that made the change.
        assigned_at: UTC time of the change.
    """

    reader: str
    role: Role
    assigned_by: str
    assigned_at: datetime


class RoleDirectory:
    """
    Administrator-maintained mapping from reader identity to :class:`Role`.

    Every identity starts at ``Role.NONE``. Revocation resets the value to
    ``Role.NONE``; assignments are never physically removed, so
    :meth:`assignment` keeps showing who revoked a reader and when.

    Re-registration overwrites the previous role. Registering the same role
    twice is harmless.

    Example::

        roles = RoleDirectory(admin)
        roles.register("0xadmin", "0xinsurer", Role.INSURER)
        roles.is_registered("0xinsurer")  # True
        roles.revoke("0xadmin", "0xinsurer")
        roles.role_of("0xinsurer")        # Role.NONE
    """

    def __init__(self, admin: Administration, clock: Clock | None = None) -> None:
        self._admin = admin
        self._clock = clock or SystemClock()
        self._assignments: dict[str, RoleAssignment] = {}

    # ------------------------------------------------------------------
    # Administrator operations
    # ------------------------------------------------------------------

    def register(self, caller: str, reader: str, role: Role) -> None:
        """
        Assign ``role`` to ``reader``, overwriting any previous role.

        Args:
            caller: Must be the administrator.
            reader: The reader identity to register.
            role: Any :class:`Role` other than ``Role.NONE``.

        Raises:
            NotAdministratorError: If ``caller`` is not the administrator.
            InvalidRoleError: If ``role`` is ``Role.NONE`` or not a Role.
            ZeroIdentityError: If ``reader`` is the null identity.
        """
        self._admin.require(caller, "register")
        if not isinstance(role, Role) or role == Role.NONE:
            raise InvalidRoleError(role)
        if is_zero_identity(reader):
            raise ZeroIdentityError("reader")

        self._assignments[reader] = RoleAssignment(
            reader=reader,
            role=role,
            assigned_by=caller,
            assigned_at=self._clock.now(),
        )
        logger.info(
            "role_registered",
            extra={"reader": reader, "role": role.name, "assigned_by": caller},
        )
        self._admin.notifications.emit(
            NotificationKind.ROLE_REGISTERED,
            actor=caller,
            reader=reader,
            role=role.name,
        )

    def revoke(self, caller: str, reader: str) -> None:
        """
        Reset ``reader`` to ``Role.NONE``.

        Grants that subjects issued to ``reader`` are NOT cleared; see
        :class:`~consent_ledger.consent.grants.GrantTable`.

        Raises:
            NotAdministratorError: If ``caller`` is not the administrator.
            ZeroIdentityError: If ``reader`` is the null identity.
            NotRegisteredError: If ``reader`` currently holds no role.
        """
        self._admin.require(caller, "revoke")
        if is_zero_identity(reader):
            raise ZeroIdentityError("reader")

        previous = self.role_of(reader)
        if previous == Role.NONE:
            raise NotRegisteredError(reader)

        self._assignments[reader] = RoleAssignment(
            reader=reader,
            role=Role.NONE,
            assigned_by=caller,
            assigned_at=self._clock.now(),
        )
        logger.info(
            "role_revoked",
            extra={"reader": reader, "previous_role": previous.name, "assigned_by": caller},
        )
        self._admin.notifications.emit(
            NotificationKind.ROLE_REVOKED,
            actor=caller,
            reader=reader,
            previous_role=previous.name,
        )

    # ------------------------------------------------------------------
    # Pure reads
    # ------------------------------------------------------------------

    def role_of(self, reader: str) -> Role:
        """Return the reader's current role, ``Role.NONE`` if never registered."""
        assignment = self._assignments.get(reader)
        if assignment is None:
            return Role.NONE
        return assignment.role

    def is_registered(self, reader: str) -> bool:
        return self.role_of(reader) != Role.NONE

    def assignment(self, reader: str) -> RoleAssignment | None:
        """Return the last assignment written for ``reader``, if any."""
        return self._assignments.get(reader)

    def list_registered(self) -> list[str]:
        """Return readers currently holding a role, in first-registration order."""
        return [
            reader
            for reader, assignment in self._assignments.items()
            if assignment.role != Role.NONE
        ]

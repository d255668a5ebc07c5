# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import logging

from consent_ledger.errors import NotAdministratorError, ZeroIdentityError
from consent_ledger.notifications.log import NotificationLog
from consent_ledger.types import NotificationKind, is_zero_identity

logger = logging.getLogger("consent_ledger.admin")


class Administration:
    """
    The single administrative capability of a deployment.

    Exactly one identity holds it at a time. Components that expose
    administrator-only operations (role registration, subject attributes,
    ledger and gateway routing) receive the same ``Administration`` at
    construction and call :meth:`require` before mutating anything.

    The capability can be handed to another identity with :meth:`transfer`.

    Example::

        admin = Administration("0xadmin")
        admin.require("0xadmin")          # passes
        admin.transfer("0xadmin", "0xops")
        admin.is_administrator("0xadmin")  # False
    """

    def __init__(
        self,
        administrator: str,
        notifications: NotificationLog | None = None,
    ) -> None:
        if is_zero_identity(administrator):
            raise ZeroIdentityError("administrator")
        self._administrator = administrator
        self._notifications = notifications or NotificationLog()

    @property
    def administrator(self) -> str:
        """The identity currently holding the capability."""
        return self._administrator

    @property
    def notifications(self) -> NotificationLog:
        return self._notifications

    def is_administrator(self, identity: str) -> bool:
        return identity == self._administrator

    def require(self, caller: str, operation: str = "administrative operation") -> None:
        """
        Assert that ``caller`` is the administrator.

        Raises:
            NotAdministratorError: If ``caller`` is any other identity.
        """
        if caller != self._administrator:
            logger.warning(
                "administrator_required",
                extra={"caller": caller, "operation": operation},
            )
            raise NotAdministratorError(caller=caller, operation=operation)

    def transfer(self, caller: str, new_administrator: str) -> None:
        """
        Hand the capability to ``new_administrator``.

        Raises:
            NotAdministratorError: If ``caller`` is not the administrator.
            ZeroIdentityError: If ``new_administrator`` is the null identity.
        """
        self.require(caller, "transfer")
        if is_zero_identity(new_administrator):
            raise ZeroIdentityError("new_administrator")

        previous = self._administrator
        self._administrator = new_administrator
        self._notifications.emit(
            NotificationKind.ADMINISTRATION_TRANSFERRED,
            actor=caller,
            previous=previous,
            current=new_administrator,
        )

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import logging

from consent_ledger.admin import Administration
from consent_ledger.errors import InvalidAttributeError, ZeroIdentityError
from consent_ledger.types import NotificationKind, is_zero_identity

logger = logging.getLogger("consent_ledger.attributes")


class SubjectAttributeStore:
    """
    Administrator-maintained per-subject metadata, e.g. a vehicle plate.

    A subject has no attribute until one is set. Values can be overwritten
    at any time and are never deleted. The ledger copies the current value
    into each record it appends, so later changes never rewrite history.
    """

    def __init__(self, admin: Administration) -> None:
        self._admin = admin
        self._attributes: dict[str, str] = {}

    def set_attribute(self, caller: str, subject: str, value: str) -> None:
        """
        Set or overwrite the attribute of ``subject``.

        Raises:
            NotAdministratorError: If ``caller`` is not the administrator.
            ZeroIdentityError: If ``subject`` is the null identity.
            InvalidAttributeError: If ``value`` is not a string.
        """
        self._admin.require(caller, "set_attribute")
        if is_zero_identity(subject):
            raise ZeroIdentityError("subject")
        if not isinstance(value, str):
            raise InvalidAttributeError(value)

        previous = self._attributes.get(subject)
        self._attributes[subject] = value
        logger.info(
            "attribute_set",
            extra={"subject": subject, "attribute_value": value, "previous_value": previous},
        )
        self._admin.notifications.emit(
            NotificationKind.ATTRIBUTE_SET,
            actor=caller,
            subject=subject,
            value=value,
            previous=previous,
        )

    def attribute_of(self, subject: str) -> str | None:
        """Return the subject's attribute, or None if it was never set."""
        return self._attributes.get(subject)

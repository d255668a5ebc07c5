# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from enum import IntEnum

ZERO_IDENTITY = "0x" + "0" * 40
"""The null identity. Never a valid reader, subject, or administrator."""


def is_zero_identity(identity: str | None) -> bool:
    """Return True for the null identity, the empty string, or None."""
    return not identity or identity == ZERO_IDENTITY


class Role(IntEnum):
    """
    Closed set of organisational roles a reader can be registered under.

    ``NONE`` is the default for every identity and means "not registered".
    It is never a valid value for :meth:`RoleDirectory.register`.
    """

    NONE = 0
    REGULATOR = 1
    INSURER = 2
    FLEET_OPERATOR = 3
    LAW_ENFORCEMENT = 4
    AUDITOR = 5

    def label(self) -> str:
        """Return a human-readable label for this role."""
        _labels: dict[int, str] = {
            0: "None",
            1: "Regulator",
            2: "Insurer",
            3: "Fleet Operator",
            4: "Law Enforcement",
            5: "Auditor",
        }
        return _labels[int(self)]


class EventClass(IntEnum):
    """
    Catalogue of driving observations that can be appended to a ledger.

    The catalogue is fixed. Classification of raw telemetry into one of
    these classes happens upstream; the ledger only records the outcome.
    """

    HARSH_BRAKING = 0
    HARSH_ACCELERATION = 1
    SHARP_CORNERING = 2
    SPEEDING = 3
    PHONE_USAGE = 4
    DROWSINESS = 5
    LANE_DEPARTURE = 6
    TAILGATING = 7
    COLLISION = 8
    NEAR_MISS = 9
    RED_LIGHT_VIOLATION = 10
    SEATBELT_UNFASTENED = 11

    def label(self) -> str:
        """Return a human-readable label, e.g. ``'Harsh Braking'``."""
        return self.name.replace("_", " ").title()


class EdgeKind(str):
    """Tags distinguishing the relations held in the consent edge store."""

    GRANT = "grant"
    DENY = "deny"


class NotificationKind(str):
    """Kinds of notification emitted for state-changing operations."""

    ADMINISTRATION_TRANSFERRED = "administration_transferred"
    ROLE_REGISTERED = "role_registered"
    ROLE_REVOKED = "role_revoked"
    ATTRIBUTE_SET = "attribute_set"
    GRANT_ISSUED = "grant_issued"
    GRANT_REVOKED = "grant_revoked"
    READER_DENIED = "reader_denied"
    READER_UNDENIED = "reader_undenied"
    EVENT_APPENDED = "event_appended"
    LEDGER_ROUTED = "ledger_routed"
    GATEWAY_BOUND = "gateway_bound"
    ATTRIBUTE_STORE_ROUTED = "attribute_store_routed"


NOTIFICATION_KIND_VALUES = frozenset(
    {
        NotificationKind.ADMINISTRATION_TRANSFERRED,
        NotificationKind.ROLE_REGISTERED,
        NotificationKind.ROLE_REVOKED,
        NotificationKind.ATTRIBUTE_SET,
        NotificationKind.GRANT_ISSUED,
        NotificationKind.GRANT_REVOKED,
        NotificationKind.READER_DENIED,
        NotificationKind.READER_UNDENIED,
        NotificationKind.EVENT_APPENDED,
        NotificationKind.LEDGER_ROUTED,
        NotificationKind.GATEWAY_BOUND,
        NotificationKind.ATTRIBUTE_STORE_ROUTED,
    }
)

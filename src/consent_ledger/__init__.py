# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""
consent-ledger: subject-controlled access to per-subject driving event ledgers.

An administrator registers readers (regulators, insurers, fleet operators,
law enforcement) under a role. Each subject (driver) appends events to its own
ledger and decides which registered readers may read it. A subject's denial
overrides everything else.

Quick start::

    from consent_ledger import ConsentLedgerSystem, EventClass, Role

    system = ConsentLedgerSystem("0xadmin")
    system.roles.register("0xadmin", "0xinsurer", Role.INSURER)
    system.attributes.set_attribute("0xadmin", "0xdriver", "ABC123")

    system.ledger.append("0xdriver", EventClass.HARSH_BRAKING)
    system.grants.grant("0xdriver", "0xinsurer")

    result = system.gateway.fetch("0xdriver", "0xinsurer", offset=0, limit=10)
    print(result.total_count)  # 1
"""
from __future__ import annotations

from consent_ledger.admin import Administration
from consent_ledger.attributes import SubjectAttributeStore
from consent_ledger.clock import Clock, ManualClock, SystemClock
from consent_ledger.config import ConsentLedgerConfig, LedgerConfig, NotificationConfig
from consent_ledger.consent.denylist import Denylist
from consent_ledger.consent.grants import GrantTable
from consent_ledger.consent.store import ConsentEdge, EdgeStore
from consent_ledger.errors import (
    AccessBlockedError,
    AttributeStoreNotConfiguredError,
    AuthorizationError,
    ConfigurationError,
    ConsentLedgerError,
    DeniedError,
    InvalidAttributeError,
    InvalidEventClassError,
    InvalidRoleError,
    LedgerNotConfiguredError,
    NotAdministratorError,
    NotRegisteredError,
    PreconditionError,
    ReaderNotRegisteredError,
    UnauthorizedGatewayError,
    UnknownEntityError,
    ValidationError,
    ZeroIdentityError,
)
from consent_ledger.gateway import AccessDecision, AccessGateway, AccessStep, FetchResult
from consent_ledger.ledger.ledger import EventLedger
from consent_ledger.ledger.record import EventRecord
from consent_ledger.ledger.storage import LedgerStorage, MemoryLedgerStorage
from consent_ledger.notifications import (
    Notification,
    NotificationFilter,
    NotificationLog,
    NotificationQueryResult,
)
from consent_ledger.roles.directory import RoleAssignment, RoleDirectory
from consent_ledger.system import ConsentLedgerSystem
from consent_ledger.types import (
    ZERO_IDENTITY,
    EdgeKind,
    EventClass,
    NotificationKind,
    Role,
    is_zero_identity,
)

__version__ = "0.1.0"

__all__ = [
    # Core types
    "Role",
    "EventClass",
    "EdgeKind",
    "NotificationKind",
    "ZERO_IDENTITY",
    "is_zero_identity",
    # Configuration
    "ConsentLedgerConfig",
    "LedgerConfig",
    "NotificationConfig",
    # Composition
    "ConsentLedgerSystem",
    "Administration",
    # Clocks
    "Clock",
    "SystemClock",
    "ManualClock",
    # Roles and attributes
    "RoleDirectory",
    "RoleAssignment",
    "SubjectAttributeStore",
    # Consent
    "GrantTable",
    "Denylist",
    "ConsentEdge",
    "EdgeStore",
    # Ledger
    "EventLedger",
    "EventRecord",
    "LedgerStorage",
    "MemoryLedgerStorage",
    # Gateway
    "AccessGateway",
    "AccessDecision",
    "AccessStep",
    "FetchResult",
    # Notifications
    "NotificationLog",
    "Notification",
    "NotificationFilter",
    "NotificationQueryResult",
    # Errors
    "ConsentLedgerError",
    "ValidationError",
    "PreconditionError",
    "AuthorizationError",
    "ConfigurationError",
    "ZeroIdentityError",
    "InvalidRoleError",
    "InvalidAttributeError",
    "InvalidEventClassError",
    "NotRegisteredError",
    "ReaderNotRegisteredError",
    "UnknownEntityError",
    "DeniedError",
    "AccessBlockedError",
    "NotAdministratorError",
    "LedgerNotConfiguredError",
    "UnauthorizedGatewayError",
    "AttributeStoreNotConfiguredError",
    "__version__",
]

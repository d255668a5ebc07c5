# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field


class LedgerConfig(BaseModel, frozen=True):
    """
    Configuration for the EventLedger.

    Attributes:
        default_attribute: Snapshot stored on records appended by a subject
            whose attribute has never been set.
        max_page_size: Optional upper bound applied to the ``limit`` of a
            page read. ``None`` leaves ``limit`` unclamped. Clamping never
            affects the total count returned alongside a page.
    """

    default_attribute: Annotated[str, Field(min_length=1)] = "UNREGISTERED"
    max_page_size: Annotated[int, Field(gt=0)] | None = None


class NotificationConfig(BaseModel, frozen=True):
    """
    Configuration for the NotificationLog.

    Attributes:
        max_records: Maximum number of notifications retained in memory.
            Oldest notifications are evicted when this limit is reached.
        log_notifications: When True, every notification is also written
            to the ``consent_ledger.notifications`` logger at INFO level.
    """

    max_records: Annotated[int, Field(gt=0)] = 10_000
    log_notifications: bool = True


class ConsentLedgerConfig(BaseModel, frozen=True):
    """
    Top-level configuration for a :class:`~consent_ledger.system.ConsentLedgerSystem`.

    Example::

        config = ConsentLedgerConfig(
            ledger=LedgerConfig(default_attribute="NO-PLATE", max_page_size=500),
            notifications=NotificationConfig(max_records=5000),
        )
        system = ConsentLedgerSystem("0xadmin", config=config)
    """

    ledger: LedgerConfig = Field(default_factory=LedgerConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)

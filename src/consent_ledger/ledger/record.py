# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from consent_ledger.types import EventClass


class EventRecord(BaseModel, frozen=True):
    """
    An immutable ledger entry for one observed driving event.

    Attributes:
        subject: The subject whose ledger holds this record.
        attribute_snapshot: The subject's attribute at append time. Later
            attribute changes never alter it.
        event_class: The recorded :class:`~consent_ledger.types.EventClass`.
        timestamp: UTC time taken from the ledger's clock at append time.
        sequence_id: 0-based position in the subject's ledger. Dense and
            never reused.
    """

    subject: str
    attribute_snapshot: str
    event_class: EventClass
    timestamp: datetime
    sequence_id: int = Field(ge=0)


def create_record(
    subject: str,
    attribute_snapshot: str,
    event_class: EventClass,
    timestamp: datetime,
    sequence_id: int,
) -> EventRecord:
    """
    Construct an :class:`EventRecord`.

    The ledger builds every record through this function rather than
    calling the model directly.
    """
    return EventRecord(
        subject=subject,
        attribute_snapshot=attribute_snapshot,
        event_class=event_class,
        timestamp=timestamp,
        sequence_id=sequence_id,
    )

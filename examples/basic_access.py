# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""
Basic consent-ledger walkthrough.

Shows the three parties:

- the administrator registers an insurer and sets the driver's plate,
- the driver records events and grants the insurer access,
- the insurer reads through the gateway until the driver denies it.

Run with::

    python examples/basic_access.py
"""
from __future__ import annotations

import logging

from consent_ledger import (
    ConsentLedgerError,
    ConsentLedgerSystem,
    DeniedError,
    EventClass,
    NotificationFilter,
    Role,
)

ADMIN = "0xadmin"
DRIVER = "0xdriver"
INSURER = "0xinsurer"
STRANGER = "0xstranger"


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(name)s %(levelname)s %(message)s")
    system = ConsentLedgerSystem(ADMIN)

    # --- Administrator ---
    system.roles.register(ADMIN, INSURER, Role.INSURER)
    system.attributes.set_attribute(ADMIN, DRIVER, "ABC123")

    # --- Driver ---
    for event in (EventClass.HARSH_BRAKING, EventClass.SPEEDING, EventClass.PHONE_USAGE):
        seq = system.ledger.append(DRIVER, event)
        print(f"appended {event.label()} as #{seq}")
    system.grants.grant(DRIVER, INSURER)
    system.denylist.deny(DRIVER, STRANGER)

    # --- Readers ---
    result = system.gateway.fetch(DRIVER, INSURER, offset=0, limit=2)
    print(f"insurer sees {len(result.records)} of {result.total_count} records")
    for record in result.records:
        print(f"  #{record.sequence_id} {record.event_class.label()} [{record.attribute_snapshot}]")
    print(f"  next page starts at {result.next_offset}")

    try:
        system.gateway.fetch(DRIVER, STRANGER)
    except ConsentLedgerError as exc:
        print(f"stranger refused: {exc.code}")

    system.denylist.deny(DRIVER, INSURER)
    try:
        system.gateway.fetch(DRIVER, INSURER)
    except DeniedError as exc:
        print(f"insurer refused after denial: {exc.message}")

    # --- Audit ---
    denials = system.notifications.query(NotificationFilter(kind="reader_denied"))
    print(f"driver issued {denials.total_matched} denials")


if __name__ == "__main__":
    main()

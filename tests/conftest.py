# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""Shared fixtures for consent-ledger tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from consent_ledger.clock import ManualClock
from consent_ledger.system import ConsentLedgerSystem
from consent_ledger.types import Role


@pytest.fixture
def clock() -> ManualClock:
    """A manual clock starting at 2026-01-01T00:00:00Z."""
    return ManualClock(datetime(2026, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def system(clock: ManualClock) -> ConsentLedgerSystem:
    """A freshly wired system administered by '0xadmin'."""
    return ConsentLedgerSystem("0xadmin", clock=clock)


@pytest.fixture
def system_with_reader(system: ConsentLedgerSystem) -> ConsentLedgerSystem:
    """
    A system where '0xinsurer' is registered as an INSURER, driver '0xdriver'
    has attribute 'ABC123' and has granted '0xinsurer'.
    """
    system.roles.register("0xadmin", "0xinsurer", Role.INSURER)
    system.attributes.set_attribute("0xadmin", "0xdriver", "ABC123")
    system.grants.grant("0xdriver", "0xinsurer")
    return system

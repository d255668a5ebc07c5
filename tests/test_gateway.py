# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""
Tests for AccessGateway: evaluation order, self access, sticky edges,
pagination metadata, routing and the end-to-end flow.
"""

from __future__ import annotations

import logging

import pytest

from consent_ledger.clock import ManualClock
from consent_ledger.config import ConsentLedgerConfig, LedgerConfig
from consent_ledger.errors import (
    AccessBlockedError,
    AuthorizationError,
    DeniedError,
    LedgerNotConfiguredError,
    NotAdministratorError,
    PreconditionError,
    ReaderNotRegisteredError,
    UnauthorizedGatewayError,
    ZeroIdentityError,
)
from consent_ledger.gateway import AccessGateway, AccessStep
from consent_ledger.system import ConsentLedgerSystem
from consent_ledger.types import EventClass, Role


# ---------------------------------------------------------------------------
# TestEvaluationOrder
# ---------------------------------------------------------------------------


class TestEvaluationOrder:
    def test_denied_unregistered_reader_fails_denied(
        self, system: ConsentLedgerSystem
    ) -> None:
        system.denylist.deny("0xdriver", "0xstranger")
        with pytest.raises(DeniedError) as exc_info:
            system.gateway.fetch("0xdriver", "0xstranger", 0, 10)
        assert exc_info.value.code == "DENIED"

    def test_denied_registered_and_granted_reader_fails_denied(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        system_with_reader.denylist.deny("0xdriver", "0xinsurer")
        with pytest.raises(DeniedError):
            system_with_reader.gateway.fetch("0xdriver", "0xinsurer", 0, 10)

    def test_unregistered_reader_fails_not_registered(
        self, system: ConsentLedgerSystem
    ) -> None:
        with pytest.raises(ReaderNotRegisteredError) as exc_info:
            system.gateway.fetch("0xdriver", "0xstranger", 0, 10)
        assert exc_info.value.code == "READER_NOT_REGISTERED"
        assert isinstance(exc_info.value, PreconditionError)

    def test_registered_reader_without_grant_fails_access_blocked(
        self, system: ConsentLedgerSystem
    ) -> None:
        system.roles.register("0xadmin", "0xinsurer", Role.INSURER)
        with pytest.raises(AccessBlockedError) as exc_info:
            system.gateway.fetch("0xdriver", "0xinsurer", 0, 10)
        assert exc_info.value.code == "ACCESS_BLOCKED"
        assert isinstance(exc_info.value, AuthorizationError)

    def test_registered_and_granted_reader_succeeds(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        result = system_with_reader.gateway.fetch("0xdriver", "0xinsurer", 0, 10)
        assert result.records == []
        assert result.total_count == 0

    def test_evaluate_reports_step_without_raising(
        self, system: ConsentLedgerSystem
    ) -> None:
        system.denylist.deny("0xdriver", "0xstranger")
        decision = system.gateway.evaluate("0xdriver", "0xstranger")
        assert decision.allowed is False
        assert decision.step == AccessStep.DENYLIST
        assert "denied" in decision.reason

    def test_evaluate_allowed_reader_reports_grant_step(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        decision = system_with_reader.gateway.evaluate("0xdriver", "0xinsurer")
        assert decision.allowed is True
        assert decision.step == AccessStep.GRANT
        assert "Insurer" in decision.reason

    def test_refusal_is_logged_at_warning(
        self, system: ConsentLedgerSystem, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="consent_ledger.gateway"):
            system.gateway.evaluate("0xdriver", "0xstranger")
        assert any(record.getMessage() == "access_refused" for record in caplog.records)


# ---------------------------------------------------------------------------
# TestSelfAccess
# ---------------------------------------------------------------------------


class TestSelfAccess:
    def test_subject_reads_own_records_without_role_or_grant(
        self, system: ConsentLedgerSystem
    ) -> None:
        system.ledger.append("0xdriver", EventClass.SPEEDING)
        result = system.gateway.fetch("0xdriver", "0xdriver", 0, 10)
        assert result.total_count == 1

    def test_self_denial_does_not_lock_subject_out(
        self, system: ConsentLedgerSystem
    ) -> None:
        system.ledger.append("0xdriver", EventClass.SPEEDING)
        system.denylist.deny("0xdriver", "0xdriver")
        result = system.gateway.fetch("0xdriver", "0xdriver", 0, 10)
        assert len(result.records) == 1
        assert system.gateway.evaluate("0xdriver", "0xdriver").step == AccessStep.SELF


# ---------------------------------------------------------------------------
# TestStickyEdges
# ---------------------------------------------------------------------------


class TestStickyEdges:
    def test_role_revocation_keeps_grant_but_blocks_at_registration(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        system_with_reader.roles.revoke("0xadmin", "0xinsurer")
        assert system_with_reader.grants.is_granted("0xdriver", "0xinsurer") is True
        with pytest.raises(ReaderNotRegisteredError):
            system_with_reader.gateway.fetch("0xdriver", "0xinsurer", 0, 10)

    def test_reregistered_reader_regains_access_through_old_grant(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        system_with_reader.roles.revoke("0xadmin", "0xinsurer")
        system_with_reader.roles.register("0xadmin", "0xinsurer", Role.REGULATOR)
        result = system_with_reader.gateway.fetch("0xdriver", "0xinsurer", 0, 10)
        assert result.total_count == 0

    def test_deny_dominates_later_grant(self, system: ConsentLedgerSystem) -> None:
        system.roles.register("0xadmin", "0xinsurer", Role.INSURER)
        system.denylist.deny("0xdriver", "0xinsurer")
        system.grants.grant("0xdriver", "0xinsurer")
        with pytest.raises(DeniedError):
            system.gateway.fetch("0xdriver", "0xinsurer", 0, 10)

    def test_denial_survives_role_and_grant_churn(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        system_with_reader.denylist.deny("0xdriver", "0xinsurer")
        system_with_reader.grants.revoke_grant("0xdriver", "0xinsurer")
        system_with_reader.roles.revoke("0xadmin", "0xinsurer")
        system_with_reader.roles.register("0xadmin", "0xinsurer", Role.INSURER)
        system_with_reader.grants.grant("0xdriver", "0xinsurer")
        with pytest.raises(DeniedError):
            system_with_reader.gateway.fetch("0xdriver", "0xinsurer", 0, 10)

    def test_undeny_restores_access(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        system_with_reader.denylist.deny("0xdriver", "0xinsurer")
        system_with_reader.denylist.undeny("0xdriver", "0xinsurer")
        result = system_with_reader.gateway.fetch("0xdriver", "0xinsurer", 0, 10)
        assert result.total_count == 0

    def test_revoked_grant_blocks_access(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        system_with_reader.grants.revoke_grant("0xdriver", "0xinsurer")
        with pytest.raises(AccessBlockedError):
            system_with_reader.gateway.fetch("0xdriver", "0xinsurer", 0, 10)

    def test_grant_is_scoped_to_its_subject(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        with pytest.raises(AccessBlockedError):
            system_with_reader.gateway.fetch("0xother-driver", "0xinsurer", 0, 10)


# ---------------------------------------------------------------------------
# TestFetchPagination
# ---------------------------------------------------------------------------


class TestFetchPagination:
    def test_total_count_is_full_count_not_page_size(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        for _ in range(10):
            system_with_reader.ledger.append("0xdriver", EventClass.SPEEDING)
        result = system_with_reader.gateway.fetch("0xdriver", "0xinsurer", 7, 3)
        assert [r.sequence_id for r in result.records] == [7, 8, 9]
        assert result.total_count == 10
        assert result.has_more is False
        assert result.next_offset is None

    def test_next_offset_points_past_the_page(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        for _ in range(10):
            system_with_reader.ledger.append("0xdriver", EventClass.SPEEDING)
        result = system_with_reader.gateway.fetch("0xdriver", "0xinsurer", 0, 3)
        assert result.has_more is True
        assert result.next_offset == 3

    def test_fetch_reports_clamped_limit(self, clock: ManualClock) -> None:
        config = ConsentLedgerConfig(ledger=LedgerConfig(max_page_size=4))
        system = ConsentLedgerSystem("0xadmin", config=config, clock=clock)
        system.roles.register("0xadmin", "0xinsurer", Role.INSURER)
        system.grants.grant("0xdriver", "0xinsurer")
        for _ in range(10):
            system.ledger.append("0xdriver", EventClass.SPEEDING)

        result = system.gateway.fetch("0xdriver", "0xinsurer", offset=0, limit=100)
        assert result.limit == 4
        assert len(result.records) == 4
        assert result.total_count == 10
        assert result.has_more is True
        assert result.next_offset == 4

    def test_fetch_reports_requested_limit_when_not_clamped(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        system_with_reader.ledger.append("0xdriver", EventClass.SPEEDING)
        result = system_with_reader.gateway.fetch("0xdriver", "0xinsurer", 0, 25)
        assert result.limit == 25

    def test_iter_pages_walks_every_record(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        for _ in range(7):
            system_with_reader.ledger.append("0xdriver", EventClass.SPEEDING)
        pages = list(system_with_reader.gateway.iter_pages("0xdriver", "0xinsurer", page_size=3))
        assert [len(page.records) for page in pages] == [3, 3, 1]
        ids = [r.sequence_id for page in pages for r in page.records]
        assert ids == list(range(7))

    def test_iter_pages_over_empty_ledger_yields_one_empty_page(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        pages = list(system_with_reader.gateway.iter_pages("0xdriver", "0xinsurer"))
        assert len(pages) == 1
        assert pages[0].records == []

    def test_iter_pages_sees_appends_made_during_iteration(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        for _ in range(4):
            system_with_reader.ledger.append("0xdriver", EventClass.SPEEDING)
        iterator = system_with_reader.gateway.iter_pages("0xdriver", "0xinsurer", page_size=2)
        first = next(iterator)
        system_with_reader.ledger.append("0xdriver", EventClass.COLLISION)
        rest = list(iterator)
        assert first.total_count == 4
        assert rest[-1].total_count == 5
        assert rest[-1].records[-1].event_class == EventClass.COLLISION

    def test_iter_pages_rejects_non_positive_page_size(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        with pytest.raises(ValueError):
            next(system_with_reader.gateway.iter_pages("0xdriver", "0xinsurer", page_size=0))

    def test_iter_pages_stops_when_reader_is_denied_mid_way(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        for _ in range(4):
            system_with_reader.ledger.append("0xdriver", EventClass.SPEEDING)
        iterator = system_with_reader.gateway.iter_pages("0xdriver", "0xinsurer", page_size=2)
        next(iterator)
        system_with_reader.denylist.deny("0xdriver", "0xinsurer")
        with pytest.raises(DeniedError):
            next(iterator)


# ---------------------------------------------------------------------------
# TestRouting
# ---------------------------------------------------------------------------


class TestRouting:
    def test_gateway_without_ledger_raises_ledger_not_configured(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        gateway = AccessGateway(
            system_with_reader.admin,
            system_with_reader.roles,
            system_with_reader.grants,
            system_with_reader.denylist,
        )
        with pytest.raises(LedgerNotConfiguredError):
            gateway.fetch("0xdriver", "0xinsurer", 0, 10)

    def test_authorization_is_checked_before_ledger_configuration(
        self, system: ConsentLedgerSystem
    ) -> None:
        gateway = AccessGateway(system.admin, system.roles, system.grants, system.denylist)
        with pytest.raises(ReaderNotRegisteredError):
            gateway.fetch("0xdriver", "0xstranger", 0, 10)

    def test_repointing_does_not_migrate_records(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        system_with_reader.ledger.append("0xdriver", EventClass.SPEEDING)
        old_ledger = system_with_reader.ledger

        new_ledger = system_with_reader.new_ledger(identity="ledger-v2")
        new_ledger.set_gateway("0xadmin", system_with_reader.gateway.identity)
        system_with_reader.gateway.set_ledger("0xadmin", new_ledger)

        assert system_with_reader.ledger is new_ledger
        result = system_with_reader.gateway.fetch("0xdriver", "0xinsurer", 0, 10)
        assert result.total_count == 0
        assert old_ledger.count_of("0xdriver") == 1

    def test_repointing_to_unbound_ledger_fails_loudly(
        self, system_with_reader: ConsentLedgerSystem
    ) -> None:
        system_with_reader.gateway.set_ledger("0xadmin", system_with_reader.new_ledger())
        with pytest.raises(UnauthorizedGatewayError):
            system_with_reader.gateway.fetch("0xdriver", "0xinsurer", 0, 10)

    def test_set_ledger_requires_administrator(
        self, system: ConsentLedgerSystem
    ) -> None:
        with pytest.raises(NotAdministratorError):
            system.gateway.set_ledger("0xdriver", system.new_ledger())

    def test_set_ledger_none_raises_zero_identity(
        self, system: ConsentLedgerSystem
    ) -> None:
        with pytest.raises(ZeroIdentityError):
            system.gateway.set_ledger("0xadmin", None)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# TestEndToEnd
# ---------------------------------------------------------------------------


class TestEndToEnd:
    def test_register_append_grant_fetch_then_deny(
        self, system: ConsentLedgerSystem
    ) -> None:
        system.roles.register("0xadmin", "0xr1", Role.REGULATOR)
        system.attributes.set_attribute("0xadmin", "0xs", "ABC123")

        appended = [
            system.ledger.append("0xs", EventClass.HARSH_BRAKING),
            system.ledger.append("0xs", EventClass.SPEEDING),
            system.ledger.append("0xs", EventClass.PHONE_USAGE),
        ]
        system.grants.grant("0xs", "0xr1")

        result = system.gateway.fetch("0xs", "0xr1", 0, 10)
        assert appended == [0, 1, 2]
        assert result.total_count == 3
        assert [r.event_class for r in result.records] == [
            EventClass.HARSH_BRAKING,
            EventClass.SPEEDING,
            EventClass.PHONE_USAGE,
        ]
        assert {r.attribute_snapshot for r in result.records} == {"ABC123"}

        system.denylist.deny("0xs", "0xr1")
        with pytest.raises(DeniedError):
            system.gateway.fetch("0xs", "0xr1", 0, 10)

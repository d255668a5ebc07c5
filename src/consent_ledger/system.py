# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from consent_ledger.admin import Administration
from consent_ledger.attributes import SubjectAttributeStore
from consent_ledger.clock import Clock, SystemClock
from consent_ledger.config import ConsentLedgerConfig
from consent_ledger.consent.denylist import Denylist
from consent_ledger.consent.grants import GrantTable
from consent_ledger.consent.store import EdgeStore
from consent_ledger.errors import LedgerNotConfiguredError
from consent_ledger.gateway import AccessGateway
from consent_ledger.ledger.ledger import EventLedger
from consent_ledger.ledger.storage.interface import LedgerStorage
from consent_ledger.notifications.log import NotificationLog
from consent_ledger.roles.directory import RoleDirectory


class ConsentLedgerSystem:
    """
    Wires every component of a deployment around one administrator.

    After construction the ledger is bound to the gateway's identity and the
    gateway routes reads to the ledger, so the system is ready to use:

    Example::

        system = ConsentLedgerSystem("0xadmin")
        system.roles.register("0xadmin", "0xinsurer", Role.INSURER)
        system.attributes.set_attribute("0xadmin", "0xdriver", "ABC123")
        system.ledger.append("0xdriver", EventClass.HARSH_BRAKING)
        system.grants.grant("0xdriver", "0xinsurer")
        result = system.gateway.fetch("0xdriver", "0xinsurer", 0, 10)

    Attributes:
        admin: The :class:`~consent_ledger.admin.Administration` capability.
        notifications: Shared :class:`~consent_ledger.notifications.NotificationLog`.
        roles: The :class:`~consent_ledger.roles.RoleDirectory`.
        attributes: The :class:`~consent_ledger.attributes.SubjectAttributeStore`.
        grants: The :class:`~consent_ledger.consent.GrantTable`.
        denylist: The :class:`~consent_ledger.consent.Denylist`.
        gateway: The :class:`~consent_ledger.gateway.AccessGateway`.
    """

    def __init__(
        self,
        administrator: str,
        config: ConsentLedgerConfig | None = None,
        clock: Clock | None = None,
        storage: LedgerStorage | None = None,
    ) -> None:
        cfg = config or ConsentLedgerConfig()
        self._config = cfg
        self._clock = clock or SystemClock()

        self.notifications = NotificationLog(cfg.notifications, clock=self._clock)
        self.admin = Administration(administrator, notifications=self.notifications)
        self.roles = RoleDirectory(self.admin, clock=self._clock)
        self.attributes = SubjectAttributeStore(self.admin)

        edges = EdgeStore()
        self.grants = GrantTable(
            self.roles, store=edges, notifications=self.notifications, clock=self._clock
        )
        self.denylist = Denylist(
            store=edges, notifications=self.notifications, clock=self._clock
        )

        self.gateway = AccessGateway(self.admin, self.roles, self.grants, self.denylist)
        ledger = self.new_ledger(storage=storage)
        ledger.set_gateway(administrator, self.gateway.identity)
        self.gateway.set_ledger(administrator, ledger)

    @property
    def config(self) -> ConsentLedgerConfig:
        return self._config

    @property
    def ledger(self) -> EventLedger:
        """The ledger the gateway currently routes to."""
        ledger = self.gateway.ledger
        if ledger is None:
            raise LedgerNotConfiguredError()
        return ledger

    def new_ledger(
        self,
        storage: LedgerStorage | None = None,
        identity: str | None = None,
    ) -> EventLedger:
        """
        Build an unrouted ledger sharing this system's attribute store and clock.

        The new ledger is empty unless ``storage`` is pre-seeded. It still
        needs :meth:`EventLedger.set_gateway` and
        :meth:`AccessGateway.set_ledger` before readers can reach it.
        """
        return EventLedger(
            self.admin,
            attributes=self.attributes,
            config=self._config.ledger,
            storage=storage,
            clock=self._clock,
            identity=identity,
        )

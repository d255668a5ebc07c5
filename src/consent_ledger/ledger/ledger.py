# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import logging
import uuid

from consent_ledger.admin import Administration
from consent_ledger.attributes import SubjectAttributeStore
from consent_ledger.clock import Clock, SystemClock
from consent_ledger.config import LedgerConfig
from consent_ledger.errors import (
    AttributeStoreNotConfiguredError,
    InvalidEventClassError,
    UnauthorizedGatewayError,
    ZeroIdentityError,
)
from consent_ledger.ledger.record import EventRecord, create_record
from consent_ledger.ledger.storage.interface import LedgerStorage
from consent_ledger.ledger.storage.memory import MemoryLedgerStorage
from consent_ledger.types import EventClass, NotificationKind, is_zero_identity

logger = logging.getLogger("consent_ledger.ledger")


def coerce_event_class(value: EventClass | int | str) -> EventClass:
    """
    Return ``value`` as an :class:`EventClass`.

    Accepts a member, its integer value, or its name (case-insensitive).

    Raises:
        InvalidEventClassError: If ``value`` names no catalogue entry.
    """
    if isinstance(value, EventClass):
        return value
    if isinstance(value, bool):
        raise InvalidEventClassError(value)
    if isinstance(value, int):
        try:
            return EventClass(value)
        except ValueError:
            raise InvalidEventClassError(value) from None
    if isinstance(value, str):
        try:
            return EventClass[value.strip().upper()]
        except KeyError:
            raise InvalidEventClassError(value) from None
    raise InvalidEventClassError(value)


class EventLedger:
    """
    Per-subject, append-only, sequentially indexed store of event records.

    Storage is the only record of how many events a subject has. :meth:`append`
    gives the new record the stored count as its sequence id, so a subject's
    ids are always ``0..count-1`` with no gaps or repeats, even when several
    ledgers write to the same storage or other subjects append in between.

    The ledger applies no access policy. :meth:`page` only accepts calls from
    the gateway identity bound with :meth:`set_gateway`; the gateway is the
    single place where reads are authorised.

    Pagination is consistent within one call but not across calls. If a
    subject appends between two page reads, later offsets refer to a longer
    sequence and a caller walking pages may see the end move.

    Example::

        ledger = EventLedger(admin, attributes)
        ledger.set_gateway("0xadmin", gateway.identity)
        seq = ledger.append("0xdriver", EventClass.SPEEDING)
        ledger.count_of("0xdriver")  # 1
    """

    def __init__(
        self,
        admin: Administration,
        attributes: SubjectAttributeStore | None = None,
        config: LedgerConfig | None = None,
        storage: LedgerStorage | None = None,
        clock: Clock | None = None,
        identity: str | None = None,
    ) -> None:
        self._admin = admin
        self._attributes = attributes
        self._config = config or LedgerConfig()
        self._storage = storage or MemoryLedgerStorage()
        self._clock = clock or SystemClock()
        self._identity = identity or f"ledger-{uuid.uuid4().hex[:12]}"
        self._gateway: str | None = None

    @property
    def identity(self) -> str:
        """Routing name of this ledger instance."""
        return self._identity

    @property
    def gateway(self) -> str | None:
        """The gateway identity allowed to call :meth:`page`, if bound."""
        return self._gateway

    @property
    def config(self) -> LedgerConfig:
        return self._config

    # ------------------------------------------------------------------
    # Administrator operations
    # ------------------------------------------------------------------

    def set_gateway(self, caller: str, gateway: str) -> None:
        """
        Bind the only identity allowed to read pages from this ledger.

        Raises:
            NotAdministratorError: If ``caller`` is not the administrator.
            ZeroIdentityError: If ``gateway`` is the null identity.
        """
        self._admin.require(caller, "set_gateway")
        if is_zero_identity(gateway):
            raise ZeroIdentityError("gateway")

        previous = self._gateway
        self._gateway = gateway
        logger.info(
            "gateway_bound",
            extra={"ledger": self._identity, "gateway": gateway, "previous_gateway": previous},
        )
        self._admin.notifications.emit(
            NotificationKind.GATEWAY_BOUND,
            actor=caller,
            ledger=self._identity,
            gateway=gateway,
            previous=previous,
        )

    def set_attribute_store(self, caller: str, attributes: SubjectAttributeStore) -> None:
        """
        Route future attribute snapshots to ``attributes``.

        Records already appended keep their snapshots.

        Raises:
            NotAdministratorError: If ``caller`` is not the administrator.
            ZeroIdentityError: If ``attributes`` is None.
        """
        self._admin.require(caller, "set_attribute_store")
        if attributes is None:
            raise ZeroIdentityError("attributes")

        self._attributes = attributes
        self._admin.notifications.emit(
            NotificationKind.ATTRIBUTE_STORE_ROUTED,
            actor=caller,
            ledger=self._identity,
        )

    # ------------------------------------------------------------------
    # Subject operations
    # ------------------------------------------------------------------

    def append(self, subject: str, event_class: EventClass | int | str) -> int:
        """
        Append an event to ``subject``'s own ledger.

        The record carries the subject's attribute as it is right now, or
        :attr:`~LedgerConfig.default_attribute` if it is unset or empty.

        Args:
            subject: The calling subject.
            event_class: The observed :class:`EventClass` (or its value/name).

        Returns:
            The new record's sequence id.

        Raises:
            ZeroIdentityError: If ``subject`` is the null identity.
            InvalidEventClassError: If ``event_class`` is not in the catalogue.
            AttributeStoreNotConfiguredError: If no attribute store is routed.
        """
        if is_zero_identity(subject):
            raise ZeroIdentityError("subject")
        resolved_class = coerce_event_class(event_class)
        if self._attributes is None:
            logger.error(
                "attribute_store_missing",
                extra={"ledger": self._identity, "subject": subject},
            )
            raise AttributeStoreNotConfiguredError()

        snapshot = self._attributes.attribute_of(subject)
        if not snapshot:
            snapshot = self._config.default_attribute

        sequence_id = self._storage.count(subject)
        record = create_record(
            subject=subject,
            attribute_snapshot=snapshot,
            event_class=resolved_class,
            timestamp=self._clock.now(),
            sequence_id=sequence_id,
        )
        self._storage.append(record)

        logger.info(
            "event_appended",
            extra={
                "ledger": self._identity,
                "subject": subject,
                "sequence_id": sequence_id,
                "event_class": resolved_class.name,
            },
        )
        self._admin.notifications.emit(
            NotificationKind.EVENT_APPENDED,
            actor=subject,
            subject=subject,
            ledger=self._identity,
            sequence_id=sequence_id,
            event_class=resolved_class.name,
        )
        return sequence_id

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def count_of(self, subject: str) -> int:
        """Return how many records ``subject`` has appended to this ledger."""
        return self._storage.count(subject)

    def page(self, caller: str, subject: str, offset: int, limit: int) -> list[EventRecord]:
        """
        Return a slice of ``subject``'s records, oldest first.

        Returns records at positions ``[offset, min(offset + limit, count))``.
        An ``offset`` at or past the end, or a ``limit`` of 0, gives an empty
        list. When :attr:`~LedgerConfig.max_page_size` is set, ``limit`` is
        clamped to it.

        Args:
            caller: Must be the bound gateway identity.
            subject: Whose records to read.
            offset: Index of the first record to return.
            limit: Maximum number of records to return.

        Raises:
            UnauthorizedGatewayError: If ``caller`` is not the bound gateway,
                or no gateway is bound.
            ValueError: If ``offset`` or ``limit`` is negative.
        """
        if self._gateway is None or caller != self._gateway:
            logger.error(
                "unauthorized_gateway",
                extra={"ledger": self._identity, "caller": caller, "gateway": self._gateway},
            )
            raise UnauthorizedGatewayError(caller=caller, gateway=self._gateway)
        if offset < 0:
            raise ValueError(f"offset must be >= 0; got {offset}.")
        if limit < 0:
            raise ValueError(f"limit must be >= 0; got {limit}.")

        limit = self.effective_limit(limit)

        count = self.count_of(subject)
        if limit == 0 or offset >= count:
            return []
        return self._storage.slice(subject, offset, min(offset + limit, count))

    def effective_limit(self, limit: int) -> int:
        """Return ``limit`` after clamping to :attr:`~LedgerConfig.max_page_size`."""
        if self._config.max_page_size is None:
            return limit
        return min(limit, self._config.max_page_size)

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator

from pydantic import BaseModel

from consent_ledger.admin import Administration
from consent_ledger.consent.denylist import Denylist
from consent_ledger.consent.grants import GrantTable
from consent_ledger.errors import (
    AccessBlockedError,
    AuthorizationError,
    DeniedError,
    LedgerNotConfiguredError,
    PreconditionError,
    ReaderNotRegisteredError,
    ZeroIdentityError,
)
from consent_ledger.ledger.ledger import EventLedger
from consent_ledger.ledger.record import EventRecord
from consent_ledger.roles.directory import RoleDirectory
from consent_ledger.types import NotificationKind

logger = logging.getLogger("consent_ledger.gateway")


class AccessStep(str):
    """The evaluation step that decided an access request."""

    SELF = "self"
    DENYLIST = "denylist"
    REGISTRATION = "registration"
    GRANT = "grant"


class AccessDecision(BaseModel, frozen=True):
    """
    Outcome of evaluating whether ``requester`` may read ``subject``'s records.

    Attributes:
        allowed: True if the read may proceed.
        subject: The subject whose records were requested.
        requester: The identity asking to read.
        step: The :class:`AccessStep` that settled the decision. For an
            allowed reader this is ``GRANT``; for the subject itself ``SELF``.
        reason: Human-readable explanation.
    """

    allowed: bool
    subject: str
    requester: str
    step: str
    reason: str


class FetchResult(BaseModel, frozen=True):
    """
    One page of a subject's records plus the subject's full record count.

    Attributes:
        records: The page, in ascending sequence order.
        total_count: The subject's total number of records, not the page size.
        offset: The offset that was requested.
        limit: The limit actually applied. Lower than the requested limit when
            the ledger clamps it to :attr:`~LedgerConfig.max_page_size`.
    """

    records: list[EventRecord]
    total_count: int
    offset: int
    limit: int

    @property
    def has_more(self) -> bool:
        """True if records exist past the end of this page."""
        return self.offset + len(self.records) < self.total_count

    @property
    def next_offset(self) -> int | None:
        """Offset of the next page, or None when this page reached the end."""
        if not self.has_more:
            return None
        return self.offset + len(self.records)


class AccessGateway:
    """
    The single entry point through which readers reach a subject's records.

    Evaluation order is fixed:

    1. The subject reading its own records bypasses every check.
    2. A reader the subject denied is refused (:class:`DeniedError`), even if
       it is unregistered or holds a grant.
    3. An unregistered reader is refused (:class:`ReaderNotRegisteredError`).
    4. A reader without a grant is refused (:class:`AccessBlockedError`).
    5. Otherwise the read is forwarded to the routed ledger.

    Each call re-reads the role directory, grant table and denylist. Nothing
    is cached between calls.

    A grant made while the reader was registered survives a later role
    revocation. Step 3 refuses the reader while unregistered; once
    re-registered, the old grant applies again.

    Example::

        gateway = AccessGateway(admin, roles, grants, denylist)
        gateway.set_ledger("0xadmin", ledger)
        ledger.set_gateway("0xadmin", gateway.identity)
        result = gateway.fetch("0xdriver", "0xinsurer", offset=0, limit=10)
        result.total_count
    """

    def __init__(
        self,
        admin: Administration,
        roles: RoleDirectory,
        grants: GrantTable,
        denylist: Denylist,
        ledger: EventLedger | None = None,
        identity: str | None = None,
    ) -> None:
        self._admin = admin
        self._roles = roles
        self._grants = grants
        self._denylist = denylist
        self._ledger = ledger
        self._identity = identity or f"gateway-{uuid.uuid4().hex[:12]}"

    @property
    def identity(self) -> str:
        """The identity the gateway presents to the ledger."""
        return self._identity

    @property
    def ledger(self) -> EventLedger | None:
        """The ledger reads are currently routed to."""
        return self._ledger

    # ------------------------------------------------------------------
    # Administrator operations
    # ------------------------------------------------------------------

    def set_ledger(self, caller: str, ledger: EventLedger) -> None:
        """
        Route reads to ``ledger``.

        This only changes routing. Nothing is copied from the previous
        ledger; a fresh ledger starts empty.

        Raises:
            NotAdministratorError: If ``caller`` is not the administrator.
            ZeroIdentityError: If ``ledger`` is None.
        """
        self._admin.require(caller, "set_ledger")
        if ledger is None:
            raise ZeroIdentityError("ledger")

        previous = self._ledger.identity if self._ledger is not None else None
        self._ledger = ledger
        logger.info(
            "ledger_routed",
            extra={"gateway": self._identity, "ledger": ledger.identity, "previous_ledger": previous},
        )
        self._admin.notifications.emit(
            NotificationKind.LEDGER_ROUTED,
            actor=caller,
            gateway=self._identity,
            ledger=ledger.identity,
            previous=previous,
        )

    # ------------------------------------------------------------------
    # Reader operations
    # ------------------------------------------------------------------

    def evaluate(self, subject: str, requester: str) -> AccessDecision:
        """
        Decide whether ``requester`` may read ``subject``'s records.

        Does NOT raise on refusal. Inspect :attr:`AccessDecision.allowed`,
        or call :meth:`fetch` to get the matching exception.
        """
        if requester == subject:
            return self._decide(
                True, subject, requester, AccessStep.SELF,
                f"Subject '{subject}' is reading its own records.",
            )

        if self._denylist.is_denied(subject, requester):
            return self._decide(
                False, subject, requester, AccessStep.DENYLIST,
                f"Subject '{subject}' has denied reader '{requester}'.",
            )

        if not self._roles.is_registered(requester):
            return self._decide(
                False, subject, requester, AccessStep.REGISTRATION,
                f"Reader '{requester}' holds no role.",
            )

        if not self._grants.is_granted(subject, requester):
            return self._decide(
                False, subject, requester, AccessStep.GRANT,
                f"Reader '{requester}' has no grant from subject '{subject}'.",
            )

        role = self._roles.role_of(requester)
        return self._decide(
            True, subject, requester, AccessStep.GRANT,
            f"Reader '{requester}' ({role.label()}) is registered and granted "
            f"by subject '{subject}'.",
        )

    def fetch(
        self,
        subject: str,
        requester: str,
        offset: int = 0,
        limit: int = 100,
    ) -> FetchResult:
        """
        Return a page of ``subject``'s records if ``requester`` may read them.

        Args:
            subject: Whose records to read.
            requester: The authenticated caller.
            offset: Index of the first record to return.
            limit: Maximum number of records to return.

        Returns:
            A :class:`FetchResult` with the page and the subject's total count.

        Raises:
            DeniedError: The subject denied ``requester``.
            ReaderNotRegisteredError: ``requester`` holds no role.
            AccessBlockedError: ``requester`` has no grant from ``subject``.
            LedgerNotConfiguredError: No ledger is routed.
        """
        decision = self.evaluate(subject, requester)
        if not decision.allowed:
            raise self._error_for(decision)

        if self._ledger is None:
            logger.error(
                "ledger_not_configured",
                extra={"gateway": self._identity, "subject": subject, "requester": requester},
            )
            raise LedgerNotConfiguredError()

        records = self._ledger.page(self._identity, subject, offset, limit)
        total_count = self._ledger.count_of(subject)
        return FetchResult(
            records=records,
            total_count=total_count,
            offset=offset,
            limit=self._ledger.effective_limit(limit),
        )

    def iter_pages(
        self,
        subject: str,
        requester: str,
        page_size: int = 100,
    ) -> Iterator[FetchResult]:
        """
        Yield successive pages of ``subject``'s records from offset 0.

        Each page is a separate :meth:`fetch`, authorised afresh. Pages are
        not taken from one snapshot: records the subject appends while
        iterating show up in later pages, and a denial issued mid-way stops
        the iteration with :class:`DeniedError`.

        Raises:
            ValueError: If ``page_size`` is not positive.
        """
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1; got {page_size}.")

        offset = 0
        while True:
            result = self.fetch(subject, requester, offset=offset, limit=page_size)
            yield result
            if result.next_offset is None:
                return
            offset = result.next_offset

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _decide(
        self,
        allowed: bool,
        subject: str,
        requester: str,
        step: str,
        reason: str,
    ) -> AccessDecision:
        extra = {"subject": subject, "requester": requester, "step": step}
        if allowed:
            logger.info("access_allowed", extra=extra)
        else:
            logger.warning("access_refused", extra=extra)
        return AccessDecision(
            allowed=allowed,
            subject=subject,
            requester=requester,
            step=step,
            reason=reason,
        )

    @staticmethod
    def _error_for(decision: AccessDecision) -> AuthorizationError | PreconditionError:
        if decision.step == AccessStep.DENYLIST:
            return DeniedError(subject=decision.subject, requester=decision.requester)
        if decision.step == AccessStep.REGISTRATION:
            return ReaderNotRegisteredError(subject=decision.subject, requester=decision.requester)
        return AccessBlockedError(subject=decision.subject, requester=decision.requester)

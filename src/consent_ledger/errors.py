# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations


class ConsentLedgerError(Exception):
    """Base class for all consent-ledger errors."""

    def __init__(self, message: str, code: str = "CONSENT_LEDGER_ERROR") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


class ValidationError(ConsentLedgerError):
    """Malformed input. Fixable by the caller; no state was changed."""


class PreconditionError(ConsentLedgerError):
    """The current state does not satisfy the operation's precondition."""


class AuthorizationError(ConsentLedgerError):
    """The caller is not permitted to perform the operation."""


class ConfigurationError(ConsentLedgerError):
    """The components are not wired correctly. Fixable by the administrator."""


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


class ZeroIdentityError(ValidationError):
    """Raised when the null identity is passed where a real one is required."""

    def __init__(self, field: str) -> None:
        super().__init__(
            f"'{field}' must not be the zero identity.",
            code="ZERO_IDENTITY",
        )
        self.field = field


class InvalidRoleError(ValidationError):
    """Raised when registering a reader under ``Role.NONE`` or a non-role value."""

    def __init__(self, role: object) -> None:
        super().__init__(
            f"{role!r} is not an assignable role.",
            code="INVALID_ROLE",
        )
        self.role = role


class InvalidAttributeError(ValidationError):
    """Raised when a subject attribute value is not a string."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"Subject attribute must be a string; got {type(value).__name__} {value!r}.",
            code="INVALID_ATTRIBUTE",
        )
        self.value = value


class InvalidEventClassError(ValidationError):
    """Raised when an appended event is not part of the event catalogue."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"{value!r} is not a known event class.",
            code="INVALID_EVENT_CLASS",
        )
        self.value = value


# ---------------------------------------------------------------------------
# State preconditions
# ---------------------------------------------------------------------------


class NotRegisteredError(PreconditionError):
    """Raised when revoking the role of a reader that holds no role."""

    def __init__(self, reader: str) -> None:
        super().__init__(
            f"Reader '{reader}' is not registered; nothing to revoke.",
            code="NOT_REGISTERED",
        )
        self.reader = reader


class ReaderNotRegisteredError(PreconditionError):
    """
    Raised by the gateway when the requesting reader holds no role.

    Attributes:
        subject: The subject whose records were requested.
        requester: The unregistered reader.
    """

    def __init__(self, subject: str, requester: str) -> None:
        super().__init__(
            f"Reader '{requester}' is not registered and cannot read "
            f"records of subject '{subject}'.",
            code="READER_NOT_REGISTERED",
        )
        self.subject = subject
        self.requester = requester


class UnknownEntityError(PreconditionError):
    """Raised when a subject grants access to a reader that holds no role."""

    def __init__(self, subject: str, reader: str) -> None:
        super().__init__(
            f"Subject '{subject}' cannot grant access to unregistered "
            f"reader '{reader}'.",
            code="UNKNOWN_ENTITY",
        )
        self.subject = subject
        self.reader = reader


# ---------------------------------------------------------------------------
# Authorization rejections
# ---------------------------------------------------------------------------


class DeniedError(AuthorizationError):
    """
    Raised when the subject has placed the requester on its denylist.

    Attributes:
        subject: The subject whose records were requested.
        requester: The denied reader.
    """

    def __init__(self, subject: str, requester: str) -> None:
        super().__init__(
            f"Subject '{subject}' has denied reader '{requester}'.",
            code="DENIED",
        )
        self.subject = subject
        self.requester = requester


class AccessBlockedError(AuthorizationError):
    """Raised when a registered reader has no grant from the subject."""

    def __init__(self, subject: str, requester: str) -> None:
        super().__init__(
            f"Reader '{requester}' has not been granted access by "
            f"subject '{subject}'.",
            code="ACCESS_BLOCKED",
        )
        self.subject = subject
        self.requester = requester


class NotAdministratorError(AuthorizationError):
    """Raised when an administrative operation is called by anyone else."""

    def __init__(self, caller: str, operation: str) -> None:
        super().__init__(
            f"'{caller}' is not the administrator and cannot call {operation}().",
            code="NOT_ADMINISTRATOR",
        )
        self.caller = caller
        self.operation = operation


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class LedgerNotConfiguredError(ConfigurationError):
    """Raised when the gateway has no ledger to route reads to."""

    def __init__(self) -> None:
        super().__init__(
            "The access gateway has no event ledger configured. "
            "Route one with AccessGateway.set_ledger().",
            code="LEDGER_NOT_CONFIGURED",
        )


class UnauthorizedGatewayError(ConfigurationError):
    """Raised when the ledger's page read is called by anything but its gateway."""

    def __init__(self, caller: str, gateway: str | None) -> None:
        bound_text = f"'{gateway}'" if gateway else "no gateway"
        super().__init__(
            f"'{caller}' is not the gateway bound to this ledger "
            f"(bound: {bound_text}).",
            code="UNAUTHORIZED_GATEWAY",
        )
        self.caller = caller
        self.gateway = gateway


class AttributeStoreNotConfiguredError(ConfigurationError):
    """Raised when appending to a ledger that has no attribute store."""

    def __init__(self) -> None:
        super().__init__(
            "The event ledger has no subject attribute store configured. "
            "Route one with EventLedger.set_attribute_store().",
            code="ATTRIBUTE_STORE_NOT_CONFIGURED",
        )

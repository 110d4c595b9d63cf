"""Domain errors raised by the registry, ledger, aggregator and invitation flows.

Routers translate these into HTTP responses in one place (see ``src.main``);
the write and read models never return error values instead of raising.
"""


class DomainError(Exception):
    """Base class for every error the core raises on purpose."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Malformed input: negative counts, a missing field, a bad enum value."""


class NotFoundError(DomainError):
    """A referenced guest, event, wedding or invitation does not exist."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} '{identifier}' not found")


class ConflictError(DomainError):
    """The write collides with existing state."""


class ExpiredError(DomainError):
    """The referenced record is past its expiry."""


class AuthorizationError(DomainError):
    """The caller may not perform the operation on this record."""


class DependencyError(DomainError):
    """The backing store failed or timed out."""


class InvalidInvitationCodeError(NotFoundError):
    def __init__(self, code: str) -> None:
        super().__init__("Invitation", code)
        self.code = code


class InvitationExpiredError(ExpiredError):
    def __init__(self, identifier: object) -> None:
        self.identifier = identifier
        super().__init__(f"Invitation '{identifier}' has expired")


class InvitationAlreadyRespondedError(ConflictError):
    def __init__(self, identifier: object, status: str) -> None:
        self.identifier = identifier
        self.status = status
        super().__init__(f"Invitation '{identifier}' has already been {status}")


class InvitationEmailMismatchError(AuthorizationError):
    def __init__(self, identifier: object) -> None:
        self.identifier = identifier
        super().__init__("This invitation is not for your email address")

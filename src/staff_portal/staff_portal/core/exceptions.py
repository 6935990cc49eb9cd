class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "invalid_input"


class InvalidRangeError(ValidationError):
    """Raised when an end date falls before its start date."""

    code = "invalid_range"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or no user is signed in."""

    code = "unauthenticated"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "forbidden"


class NotFoundError(DomainError):
    """Raised when the referenced record does not exist."""

    code = "not_found"


class AlreadyClockedInError(DomainError):
    """Raised on clock-in while an open time entry exists."""

    code = "already_clocked_in"


class NoOpenEntryError(DomainError):
    """Raised on clock-out when the user has no open time entry."""

    code = "no_open_entry"


class ConflictError(DomainError):
    """Raised when the store rejects a write because of a uniqueness constraint."""

    code = "conflict"


class StoreUnavailableError(DomainError):
    """Raised when the record store cannot be reached or fails unexpectedly."""

    code = "store_unavailable"

# ledger/services/exceptions.py

"""
LEDGER SERVICE ERRORS

Centralized domain errors for the ledger engine.

Each error carries a stable machine-readable `code`; the API layer maps codes
to HTTP statuses (see ledger/api/errors.py).

Only TransientError is safe to retry. Every other error is terminal and
leaves the database in its pre-operation state.
"""


class LedgerServiceError(Exception):
    """Base exception for all ledger engine failures."""

    code = "LEDGER_ERROR"

    def __init__(self, message: str = "", *, field: str | None = None):
        super().__init__(message or self.__class__.__doc__ or self.code)
        self.field = field


class LedgerValidationError(LedgerServiceError):
    """Invalid input (unknown kind/status, blank category, unknown fields)."""

    code = "VALIDATION_ERROR"


class InvalidAmountError(LedgerServiceError):
    """Amount must be greater than zero."""

    code = "INVALID_AMOUNT"


class InvalidReferenceError(LedgerServiceError):
    """Referenced record does not exist or belongs to another company."""

    code = "INVALID_REFERENCE"


class InactiveAccountError(LedgerServiceError):
    """Cash account is deactivated."""

    code = "INACTIVE_ACCOUNT"


class ImmutableFieldError(LedgerServiceError):
    """Field is locked on invoice-linked transactions."""

    code = "IMMUTABLE_FIELD"


class EmptyItemsError(LedgerServiceError):
    """Invoice must have at least one line item."""

    code = "EMPTY_ITEMS"


class NotFoundError(LedgerServiceError):
    """Record not found."""

    code = "NOT_FOUND"


class DuplicateNameError(LedgerServiceError):
    """An active cash account with this name already exists."""

    code = "DUPLICATE_NAME"


class TransientError(LedgerServiceError):
    """Temporary database conflict (lock timeout / serialization). Retry."""

    code = "TRANSIENT"

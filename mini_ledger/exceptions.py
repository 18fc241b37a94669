"""
Error taxonomy for the ledger.

Services raise these; the API layer turns each one into the
{error: true, message} envelope with the status code the
exception carries. Nothing below the API layer knows about HTTP
beyond that single attribute.
"""


class LedgerError(Exception):
    """Base class for every error the ledger reports to callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(LedgerError):
    """A field is missing or malformed, or an amount is not usable."""

    status_code = 400


class AccountNotFoundError(LedgerError):
    status_code = 404

    def __init__(self, message: str = "Account not found"):
        super().__init__(message)


class UnauthorizedError(LedgerError):
    """Bad bearer credential or bad password."""

    status_code = 401


class AccountExistsError(LedgerError):
    status_code = 400

    def __init__(self, message: str = "Account already exists"):
        super().__init__(message)


class InsufficientFundsError(LedgerError):
    status_code = 400

    def __init__(self, message: str = "Insufficient funds"):
        super().__init__(message)


class StorageUnavailableError(LedgerError):
    """
    The backing store could not be reached or timed out.

    Always retryable from the caller's point of view.
    """

    status_code = 500


class BalanceConflictError(StorageUnavailableError):
    """
    A conditional balance write lost a race.

    Raised when the account version read at the start of an
    operation no longer matches the stored one. The balance
    engine catches it and re-runs the whole unit of work.
    """

    def __init__(
        self,
        message: str = "Account balance changed concurrently, please retry",
    ):
        super().__init__(message)

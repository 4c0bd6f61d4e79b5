"""Unified error codes and custom exceptions for the client core.

Error code ranges:
  1xxx: Session
  2xxx: Wallet validation (raised locally, never reach the network)
  9xxx: System (transport, remote rejection, persistence)
"""


class AppError(Exception):
    """Base application error."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


# --- 1xxx: Session ---

class NotAuthenticatedError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "No user is logged in")


class AuthInputError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(1002, detail)


# --- 2xxx: Wallet validation ---

class InvalidAmountError(AppError):
    def __init__(self) -> None:
        super().__init__(2001, "Please enter a valid amount")


class BelowMinimumError(AppError):
    def __init__(self, operation: str, minimum: str) -> None:
        self.minimum = minimum
        super().__init__(2002, f"Minimum {operation} amount is {minimum}")


class AboveMaximumError(AppError):
    def __init__(self, operation: str, maximum: str) -> None:
        self.maximum = maximum
        super().__init__(2003, f"Maximum {operation} amount is {maximum} per transaction")


class InsufficientBalanceError(AppError):
    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            2004,
            "Insufficient balance. You cannot withdraw more than your current balance.",
        )


class MutationInProgressError(AppError):
    def __init__(self) -> None:
        super().__init__(2005, "Another wallet request is already being processed")


# --- 9xxx: System ---

GENERIC_RETRY_MESSAGE = (
    "Unable to connect to server. Please check your internet connection and try again."
)


class TransportError(AppError):
    """Network failure, timeout, or an unparseable response body.

    `detail` is for logs only; `message` is always the generic retry text.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(9001, GENERIC_RETRY_MESSAGE)


class RemoteRejectionError(AppError):
    """Well-formed rejection from the backend; message is shown verbatim."""

    def __init__(self, message: str, http_status: int = 400) -> None:
        self.http_status = http_status
        super().__init__(9002, message)


class PersistenceError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9003, f"Local storage failure: {detail}")

"""
Error Kinds and Operation Results

The public Bank API never raises for business-rule failures; it reports
them through booleans and the -1.0 balance sentinel. Underneath, every
registry operation produces a BankResult that names exactly which rule
failed, so callers and tests can tell an unknown account from
insufficient funds.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar


T = TypeVar("T")


class BankErrorKind(Enum):
    """Reasons a registry operation can fail"""
    UNKNOWN_ACCOUNT = "unknown_account"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    WRONG_ACCOUNT_TYPE = "wrong_account_type"
    INVALID_ARGUMENT = "invalid_argument"
    WRONG_PIN = "wrong_pin"


class BankingError(Exception):
    """Base exception for the banking package"""


class BankOperationError(BankingError):
    """Raised when a failed BankResult is unwrapped"""

    def __init__(self, kind: BankErrorKind, message: Optional[str] = None):
        self.kind = kind
        super().__init__(message or kind.value)


@dataclass(frozen=True)
class BankResult(Generic[T]):
    """
    Outcome of a registry operation

    Either carries a value (error is None) or an error kind.
    """
    value: Optional[T] = None
    error: Optional[BankErrorKind] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> 'BankResult[T]':
        return cls(value=value)

    @classmethod
    def failure(cls, error: BankErrorKind) -> 'BankResult[T]':
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """
        Return the value of a successful result

        Raises:
            BankOperationError: If the operation failed
        """
        if self.error is not None:
            raise BankOperationError(self.error)
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Return the value, or default when the operation failed"""
        if self.error is not None:
            return default
        return self.value

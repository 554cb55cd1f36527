"""
Account Module

Consumer and commercial bank accounts. Both variants hold a balance, a
PIN and one owning holder fixed at construction. Only commercial accounts
can grant secondary access to authorized users; callers ask an account
whether it supports that capability instead of checking its class.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import FrozenSet, Set

from .holders import AccountHolder, Company, Person


class AccountCategory(Enum):
    """Account variants, also used as the keys of balance reports"""
    CONSUMER = "ConsumerAccount"
    COMMERCIAL = "CommercialAccount"


class Account(ABC):
    """
    Base bank account

    Balance is the only mutable state. The PIN and the owning holder are
    read-only after construction.
    """

    def __init__(
        self,
        account_holder: AccountHolder,
        account_number: int,
        pin: int,
        starting_deposit: float
    ):
        self._account_holder = account_holder
        self._account_number = account_number
        self._pin = pin
        self._balance = starting_deposit

    @property
    @abstractmethod
    def category(self) -> AccountCategory:
        """Variant of this account"""

    @property
    def supports_authorized_users(self) -> bool:
        """Whether secondary users can be authorized on this account"""
        return False

    @property
    def account_holder(self) -> AccountHolder:
        return self._account_holder

    @property
    def account_number(self) -> int:
        return self._account_number

    @property
    def balance(self) -> float:
        return self._balance

    def get_balance(self) -> float:
        return self._balance

    def validate_pin(self, attempted_pin: int) -> bool:
        """Check an attempted PIN against the stored one"""
        return attempted_pin == self._pin

    def credit_account(self, amount: float) -> None:
        """Add amount to the balance. The amount is not validated."""
        self._balance += amount

    def debit_account(self, amount: float) -> bool:
        """
        Withdraw amount if the balance covers it

        Args:
            amount: Amount to withdraw

        Returns:
            True if the balance was reduced, False if funds were insufficient
        """
        if self._balance >= amount:
            self._balance -= amount
            return True
        return False

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(account_number={self._account_number}, "
            f"holder={self._account_holder!r}, balance={self._balance})"
        )


class ConsumerAccount(Account):
    """Account owned by an individual"""

    def __init__(self, person: Person, account_number: int, pin: int, starting_deposit: float):
        super().__init__(person, account_number, pin, starting_deposit)

    @property
    def category(self) -> AccountCategory:
        return AccountCategory.CONSUMER


class CommercialAccount(Account):
    """
    Account owned by a company

    Keeps a set of people allowed to act on the account besides its owner.
    Membership is by value, so adding an equal Person twice keeps one entry.
    """

    def __init__(self, company: Company, account_number: int, pin: int, starting_deposit: float):
        super().__init__(company, account_number, pin, starting_deposit)
        self._authorized_users: Set[Person] = set()

    @property
    def category(self) -> AccountCategory:
        return AccountCategory.COMMERCIAL

    @property
    def supports_authorized_users(self) -> bool:
        return True

    @property
    def authorized_users(self) -> FrozenSet[Person]:
        return frozenset(self._authorized_users)

    def add_authorized_user(self, person: Person) -> None:
        self._authorized_users.add(person)

    def is_authorized_user(self, person: Person) -> bool:
        return person in self._authorized_users

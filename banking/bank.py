"""
Bank Registry Module

The Bank owns every account, keyed by account number in opening order.
Account numbers come from a dedicated counter, so they stay unique and
sequential no matter how the registry is stored.

Two layers are exposed. The try_*/lookup_* methods return a BankResult
naming the exact failure. The classic methods (get_balance, debit,
authenticate_user, ...) are built on them and never raise: unknown
accounts yield -1.0, False or a silent no-op.
"""

import logging
import threading
from typing import Dict, Iterator, List, Optional

from .accounts import Account, AccountCategory, CommercialAccount, ConsumerAccount
from .audit import AuditEventType, AuditTrail
from .config import BankConfig, get_config
from .errors import BankErrorKind, BankResult
from .holders import Company, Person


logger = logging.getLogger("banking.bank")

UNKNOWN_ACCOUNT_BALANCE = -1.0


class Bank:
    """
    In-memory account registry
    """

    def __init__(
        self,
        config: Optional[BankConfig] = None,
        audit_trail: Optional[AuditTrail] = None,
        first_account_number: int = 1
    ):
        if first_account_number < 1:
            raise ValueError("First account number must be at least 1")

        self.config = config if config is not None else get_config()
        self._accounts: Dict[int, Account] = {}
        self._next_account_number = first_account_number
        if audit_trail is None:
            audit_trail = AuditTrail(enabled=self.config.enable_audit_logging)
        self._audit_trail = audit_trail
        self._lock = threading.RLock()

    @property
    def audit_trail(self) -> AuditTrail:
        return self._audit_trail

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)

    def __contains__(self, account_number: int) -> bool:
        with self._lock:
            return account_number in self._accounts

    def __iter__(self) -> Iterator[Account]:
        with self._lock:
            return iter(list(self._accounts.values()))

    # Account opening

    def _register(self, account_factory, holder, pin: int, starting_deposit: float) -> int:
        # Holders are not validated; the audit record tolerates a missing id
        metadata = {
            'holder_id': getattr(holder, 'id_number', None),
            'starting_deposit': starting_deposit,
        }

        with self._lock:
            account_number = self._next_account_number
            account = account_factory(holder, account_number, pin, starting_deposit)
            self._accounts[account_number] = account
            self._next_account_number += 1

        metadata['category'] = account.category.value
        self._audit_trail.log_event(AuditEventType.ACCOUNT_OPENED, account_number, metadata)
        logger.info(
            "Opened %s %d", account.category.value, account_number,
            extra={'action': 'open_account', 'resource': str(account_number)}
        )
        return account_number

    def open_commercial_account(self, company: Company, pin: int, starting_deposit: float) -> int:
        """
        Open a commercial account for a company

        Args:
            company: Owning company
            pin: Account PIN (not range-checked)
            starting_deposit: Initial balance, accepted as given

        Returns:
            The new account number
        """
        return self._register(CommercialAccount, company, pin, starting_deposit)

    def open_consumer_account(self, person: Person, pin: int, starting_deposit: float) -> int:
        """
        Open a consumer account for a person

        Args:
            person: Owning person
            pin: Account PIN (not range-checked)
            starting_deposit: Initial balance, accepted as given

        Returns:
            The new account number
        """
        return self._register(ConsumerAccount, person, pin, starting_deposit)

    # Lookups

    def get_account(self, account_number: int) -> Optional[Account]:
        with self._lock:
            return self._accounts.get(account_number)

    def find_account(self, account_number: int) -> BankResult[Account]:
        account = self.get_account(account_number)
        if account is None:
            logger.debug("Unknown account %s", account_number)
            return BankResult.failure(BankErrorKind.UNKNOWN_ACCOUNT)
        return BankResult.success(account)

    def accounts_in(self, category: AccountCategory) -> List[Account]:
        """Accounts of one category in opening order"""
        return [account for account in self if account.category == category]

    def lookup_balance(self, account_number: int) -> BankResult[float]:
        found = self.find_account(account_number)
        if not found.ok:
            return BankResult.failure(found.error)
        return BankResult.success(found.value.get_balance())

    def get_balance(self, account_number: int) -> float:
        """Balance of an account, or -1.0 if the account is unknown"""
        return self.lookup_balance(account_number).unwrap_or(UNKNOWN_ACCOUNT_BALANCE)

    # Balance changes

    def try_credit(self, account_number: int, amount: float) -> BankResult[float]:
        """
        Credit an account

        Returns:
            Result carrying the new balance
        """
        with self._lock:
            found = self.find_account(account_number)
            if not found.ok:
                return BankResult.failure(found.error)
            account = found.value
            account.credit_account(amount)
            balance = account.get_balance()

        self._audit_trail.log_event(
            AuditEventType.ACCOUNT_CREDITED, account_number,
            {'amount': amount, 'balance': balance}
        )
        return BankResult.success(balance)

    def credit(self, account_number: int, amount: float) -> None:
        """Credit an account. Unknown accounts are ignored."""
        self.try_credit(account_number, amount)

    def try_debit(self, account_number: int, amount: float) -> BankResult[float]:
        """
        Debit an account if it holds enough funds

        Returns:
            Result carrying the new balance, or UNKNOWN_ACCOUNT /
            INSUFFICIENT_FUNDS
        """
        with self._lock:
            found = self.find_account(account_number)
            if not found.ok:
                return BankResult.failure(found.error)
            account = found.value
            debited = account.debit_account(amount)
            balance = account.get_balance()

        if not debited:
            self._audit_trail.log_event(
                AuditEventType.DEBIT_REJECTED, account_number,
                {'amount': amount, 'balance': balance}
            )
            logger.warning(
                "Debit of %s rejected on account %d: insufficient funds", amount, account_number,
                extra={'action': 'debit', 'resource': str(account_number)}
            )
            return BankResult.failure(BankErrorKind.INSUFFICIENT_FUNDS)

        self._audit_trail.log_event(
            AuditEventType.ACCOUNT_DEBITED, account_number,
            {'amount': amount, 'balance': balance}
        )
        return BankResult.success(balance)

    def debit(self, account_number: int, amount: float) -> bool:
        """Debit an account; False if unknown or short of funds"""
        return self.try_debit(account_number, amount).ok

    # Authentication

    def try_authenticate_user(self, account_number: int, pin: int) -> BankResult[None]:
        found = self.find_account(account_number)
        if not found.ok:
            return BankResult.failure(found.error)

        if not found.value.validate_pin(pin):
            self._audit_trail.log_event(AuditEventType.AUTHENTICATION_FAILED, account_number)
            logger.warning(
                "PIN check failed for account %d", account_number,
                extra={'action': 'authenticate', 'resource': str(account_number)}
            )
            return BankResult.failure(BankErrorKind.WRONG_PIN)

        self._audit_trail.log_event(AuditEventType.AUTHENTICATION_SUCCEEDED, account_number)
        return BankResult.success()

    def authenticate_user(self, account_number: int, pin: int) -> bool:
        """Whether pin matches the account's PIN; False if unknown"""
        return self.try_authenticate_user(account_number, pin).ok

    # Authorized users

    def _authorizable_account(self, account_number: int, person: Optional[Person]) -> BankResult[Account]:
        found = self.find_account(account_number)
        if not found.ok:
            return found
        if person is None:
            return BankResult.failure(BankErrorKind.INVALID_ARGUMENT)
        if not found.value.supports_authorized_users:
            return BankResult.failure(BankErrorKind.WRONG_ACCOUNT_TYPE)
        return found

    def try_add_authorized_user(self, account_number: int, person: Optional[Person]) -> BankResult[None]:
        with self._lock:
            found = self._authorizable_account(account_number, person)
            if not found.ok:
                logger.debug(
                    "Ignoring authorized user for account %s: %s",
                    account_number, found.error.value
                )
                return BankResult.failure(found.error)
            found.value.add_authorized_user(person)

        self._audit_trail.log_event(
            AuditEventType.AUTHORIZED_USER_ADDED, account_number,
            {'person_id': person.id_number}
        )
        return BankResult.success()

    def add_authorized_user(self, account_number: int, person: Optional[Person]) -> None:
        """Authorize person on a commercial account; otherwise a no-op"""
        self.try_add_authorized_user(account_number, person)

    def try_check_authorized_user(self, account_number: int, person: Optional[Person]) -> BankResult[bool]:
        found = self._authorizable_account(account_number, person)
        if not found.ok:
            return BankResult.failure(found.error)
        return BankResult.success(found.value.is_authorized_user(person))

    def check_authorized_user(self, account_number: int, person: Optional[Person]) -> bool:
        """Whether person is authorized on a commercial account"""
        return bool(self.try_check_authorized_user(account_number, person).unwrap_or(False))

    # Reporting

    def _average_balance(self, category: AccountCategory) -> float:
        # Incremental mean over a single pass; 0.0 when there are no accounts
        mean = 0.0
        count = 0
        for account in self.accounts_in(category):
            count += 1
            mean = (mean * (count - 1) + account.get_balance()) / count
        return mean

    def get_average_balance_report(self) -> Dict[str, float]:
        """
        Average balance per account category

        Returns:
            {"ConsumerAccount": avg, "CommercialAccount": avg}
        """
        return {
            category.value: self._average_balance(category)
            for category in AccountCategory
        }

"""
Test suite for accounts module

Tests balance changes, PIN validation and the authorized-user capability
of commercial accounts.
"""

import pytest

from banking.accounts import (
    Account, AccountCategory, CommercialAccount, ConsumerAccount
)
from banking.holders import Company, Person


@pytest.fixture
def consumer():
    return ConsumerAccount(Person("Alice", "Smith", 1), 1, 1234, 100.0)


@pytest.fixture
def commercial():
    return CommercialAccount(Company("Acme", 99), 2, 5678, 500.0)


class TestAccount:
    """Test behaviour shared by all accounts"""

    def test_construction(self, consumer):
        """Test that constructor values are exposed"""
        assert consumer.account_number == 1
        assert consumer.balance == 100.0
        assert consumer.get_balance() == 100.0
        assert consumer.account_holder == Person("Alice", "Smith", 1)

    def test_account_is_abstract(self):
        """Test that the base class cannot be instantiated"""
        with pytest.raises(TypeError):
            Account(Person("Alice", "Smith", 1), 1, 1234, 0.0)

    def test_credit(self, consumer):
        """Test that credits are added unconditionally"""
        consumer.credit_account(50.0)
        assert consumer.get_balance() == pytest.approx(150.0)

        consumer.credit_account(-20.0)
        assert consumer.get_balance() == pytest.approx(130.0)

    def test_debit_with_sufficient_funds(self, consumer):
        """Test successful debit"""
        assert consumer.debit_account(40.0)
        assert consumer.get_balance() == pytest.approx(60.0)

    def test_debit_of_entire_balance(self, consumer):
        """Test that the full balance can be withdrawn"""
        assert consumer.debit_account(100.0)
        assert consumer.get_balance() == 0.0

    def test_debit_with_insufficient_funds(self, consumer):
        """Test that a failed debit leaves the balance alone"""
        assert not consumer.debit_account(100.01)
        assert consumer.get_balance() == 100.0

    def test_validate_pin(self, consumer):
        """Test PIN equality check"""
        assert consumer.validate_pin(1234)
        assert not consumer.validate_pin(4321)
        assert not consumer.validate_pin(0)

    def test_pin_and_holder_are_read_only(self, consumer):
        """Test that owner cannot be reassigned"""
        with pytest.raises(AttributeError):
            consumer.account_holder = Person("Bob", "Ray", 2)
        with pytest.raises(AttributeError):
            consumer.balance = 1000.0


class TestConsumerAccount:
    """Test consumer account variant"""

    def test_category_and_capability(self, consumer):
        """Test that consumer accounts do not support authorized users"""
        assert consumer.category == AccountCategory.CONSUMER
        assert not consumer.supports_authorized_users
        assert not hasattr(consumer, "add_authorized_user")


class TestCommercialAccount:
    """Test commercial account variant"""

    def test_category_and_capability(self, commercial):
        """Test that commercial accounts support authorized users"""
        assert commercial.category == AccountCategory.COMMERCIAL
        assert commercial.supports_authorized_users
        assert commercial.account_holder == Company("Acme", 99)

    def test_authorized_users(self, commercial):
        """Test adding and checking authorized users"""
        bob = Person("Bob", "Ray", 2)

        assert not commercial.is_authorized_user(bob)
        commercial.add_authorized_user(bob)
        assert commercial.is_authorized_user(bob)
        assert commercial.is_authorized_user(Person("Bob", "Ray", 2))
        assert not commercial.is_authorized_user(Person("Bob", "Ray", 3))

    def test_add_is_idempotent(self, commercial):
        """Test that equal people are stored once"""
        commercial.add_authorized_user(Person("Bob", "Ray", 2))
        commercial.add_authorized_user(Person("Bob", "Ray", 2))

        assert commercial.authorized_users == frozenset({Person("Bob", "Ray", 2)})

    def test_authorized_users_view_is_a_copy(self, commercial):
        """Test that the exposed set cannot mutate the account"""
        users = commercial.authorized_users
        assert isinstance(users, frozenset)
        assert len(users) == 0

"""
Bank Simulator

An in-memory bank: consumer and commercial accounts, PIN authentication,
authorized users on commercial accounts and per-category balance reports.
"""

from .accounts import Account, AccountCategory, CommercialAccount, ConsumerAccount
from .bank import Bank
from .errors import BankErrorKind, BankResult
from .holders import AccountHolder, Company, Person

__version__ = "1.0.0"

__all__ = [
    "Account",
    "AccountCategory",
    "AccountHolder",
    "Bank",
    "BankErrorKind",
    "BankResult",
    "CommercialAccount",
    "Company",
    "ConsumerAccount",
    "Person",
]

"""
Account Holder Module

Identity value types for the owners of bank accounts. A holder is either
a Person (consumer accounts, authorized users) or a Company (commercial
accounts). Holders are immutable and compare by value.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AccountHolder:
    """Base identity carrying the holder's identifying number"""
    id_number: int

    def get_id_number(self) -> int:
        return self.id_number


@dataclass(frozen=True, init=False)
class Person(AccountHolder):
    """
    Individual account holder

    Field order follows the natural call form Person("Alice", "Smith", 1).
    """
    first_name: str
    last_name: str

    def __init__(self, first_name: str, last_name: str, id_number: int):
        object.__setattr__(self, 'id_number', id_number)
        object.__setattr__(self, 'first_name', first_name)
        object.__setattr__(self, 'last_name', last_name)

    def get_first_name(self) -> str:
        return self.first_name

    def get_last_name(self) -> str:
        return self.last_name

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True, init=False)
class Company(AccountHolder):
    """Business account holder identified by its tax id"""
    company_name: str

    def __init__(self, company_name: str, tax_id: int = 0):
        object.__setattr__(self, 'id_number', tax_id)
        object.__setattr__(self, 'company_name', company_name)

    @property
    def tax_id(self) -> int:
        return self.id_number

    def get_company_name(self) -> str:
        return self.company_name

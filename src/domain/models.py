"""
Entity model - Plain records for address books and contacts.

These records carry no behavior. Identifiers are opaque integers assigned
by the relational store and never change once assigned.
"""

from dataclasses import dataclass, field
from typing import NewType

AddressBookId = NewType("AddressBookId", int)
ContactId = NewType("ContactId", int)


@dataclass
class Contact:
    """A contact owned by exactly one address book."""

    id: ContactId
    name: str
    address: str
    phone_number: str | None
    email: str | None
    address_book_id: AddressBookId


@dataclass
class AddressBook:
    """
    An address book with its (optionally loaded) contacts.

    `contacts` is only populated by eager retrieval. Lazy retrieval and all
    write paths return an empty list; a follow-up fetch is needed to obtain
    the contacts in that case.
    """

    id: AddressBookId
    name: str
    contacts: list[Contact] = field(default_factory=list)


@dataclass
class NewAddressBook:
    """Input projection used to create or rename an address book."""

    name: str


@dataclass
class NewContact:
    """Input projection used to create or replace a contact."""

    name: str
    address: str
    phone_number: str | None = None
    email: str | None = None

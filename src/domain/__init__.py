"""
Domain layer - Pure business logic with zero framework imports.

This package contains the entity model, the store port interfaces, the
error taxonomy and the address book orchestrator. Adapters implement the
ports; the API layer only ever talks to AddressBookService.
"""

from .address_books import AddressBookService
from .exceptions import (
    AddressBookError,
    AddressBookNotFound,
    ContactNotFound,
    DatabaseQueryError,
    InvalidLoadStrategy,
    InvalidPagination,
    JsonDeserializationError,
    MissingParameters,
)
from .models import AddressBook, AddressBookId, Contact, ContactId, NewAddressBook, NewContact
from .pagination import Pagination
from .ports import AddressBookRepository, ContactRepository, LoadingStrategy

__all__ = [
    "AddressBook",
    "AddressBookError",
    "AddressBookId",
    "AddressBookNotFound",
    "AddressBookRepository",
    "AddressBookService",
    "Contact",
    "ContactId",
    "ContactNotFound",
    "ContactRepository",
    "DatabaseQueryError",
    "InvalidLoadStrategy",
    "InvalidPagination",
    "JsonDeserializationError",
    "LoadingStrategy",
    "MissingParameters",
    "NewAddressBook",
    "NewContact",
    "Pagination",
]

"""
Port interfaces - Protocol definitions for the relational stores.

This module defines the store interfaces the orchestrator depends on and
the loading-strategy selector. Adapters implement these protocols
structurally; an in-memory or mock store is a drop-in substitute.
"""

from enum import Enum
from typing import Protocol

from .exceptions import InvalidLoadStrategy
from .models import AddressBook, AddressBookId, Contact, ContactId, NewContact


class LoadingStrategy(str, Enum):
    """
    How composite address book retrieval is performed.

    - EAGER: one LEFT JOIN query, contacts folded into each book
    - LAZY: address book rows only, contacts left empty
    """

    EAGER = "eager"
    LAZY = "lazy"

    @classmethod
    def resolve(cls, value: "str | LoadingStrategy | None") -> "LoadingStrategy":
        """
        Select a strategy from a caller-supplied literal.

        Absent means EAGER. Anything other than the two literals raises
        InvalidLoadStrategy. No storage is touched.
        """
        if value is None:
            return cls.EAGER
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidLoadStrategy(str(value)) from None


class AddressBookRepository(Protocol):
    """Port interface for address book persistence."""

    def get_all(
        self, limit: int | None, offset: int, strategy: LoadingStrategy
    ) -> list[AddressBook]:
        """
        Return one page of address books.

        The page window applies to address books, not to joined rows: an
        eager page of two books contains every contact of both books.
        """
        ...

    def get_by_id(
        self, address_book_id: AddressBookId, strategy: LoadingStrategy
    ) -> AddressBook | None:
        """Return the address book with this id, or None."""
        ...

    def find_by_name(self, name: str, strategy: LoadingStrategy) -> AddressBook | None:
        """Return the address book with exactly this name, or None."""
        ...

    def create(self, name: str) -> AddressBook:
        """Insert an address book and return it with its assigned id."""
        ...

    def update(self, address_book_id: AddressBookId, name: str) -> AddressBook:
        """
        Replace the name of an address book.

        Raises:
            AddressBookNotFound: No row matched the id
        """
        ...

    def delete(self, address_book_id: AddressBookId) -> None:
        """Delete an address book and its contacts. Missing ids are not an error."""
        ...


class ContactRepository(Protocol):
    """Port interface for contact persistence, scoped to a parent book."""

    def list_for_book(
        self, address_book_id: AddressBookId, limit: int | None, offset: int
    ) -> list[Contact]:
        """Return one page of the contacts belonging to a book."""
        ...

    def create(self, address_book_id: AddressBookId, contact: NewContact) -> Contact:
        """
        Insert a contact under a book.

        Raises:
            DatabaseQueryError: Insert failed (including a missing parent)
        """
        ...

    def get_by_id(
        self, contact_id: ContactId, address_book_id: AddressBookId
    ) -> Contact | None:
        """Return the contact only if it belongs to this book, else None."""
        ...

    def update(
        self, contact_id: ContactId, address_book_id: AddressBookId, contact: NewContact
    ) -> Contact:
        """
        Replace a contact's fields.

        Raises:
            ContactNotFound: The (id, address_book_id) pair matched zero rows
        """
        ...

    def delete(self, contact_id: ContactId, address_book_id: AddressBookId) -> None:
        """
        Delete a contact.

        Raises:
            ContactNotFound: The (id, address_book_id) pair matched zero rows
        """
        ...

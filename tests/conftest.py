"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory store implementations of the domain ports
- An AddressBookService wired over those stores
"""

import itertools

import pytest

from src.domain.address_books import AddressBookService
from src.domain.exceptions import AddressBookNotFound, ContactNotFound, DatabaseQueryError
from src.domain.models import AddressBook, AddressBookId, Contact, ContactId, NewContact
from src.domain.ports import LoadingStrategy


class InMemoryAddressBookRepository:
    """AddressBookRepository over a dict, mirroring the PostgreSQL semantics."""

    def __init__(self) -> None:
        self.books: dict[int, str] = {}
        self.contacts: dict[int, Contact] = {}
        self._ids = itertools.count(1)

    def _materialize(self, book_id: int, strategy: LoadingStrategy) -> AddressBook:
        book = AddressBook(id=AddressBookId(book_id), name=self.books[book_id])
        if strategy is LoadingStrategy.EAGER:
            book.contacts = [
                c for _, c in sorted(self.contacts.items()) if c.address_book_id == book_id
            ]
        return book

    def get_all(
        self, limit: int | None, offset: int, strategy: LoadingStrategy
    ) -> list[AddressBook]:
        ids = sorted(self.books)[offset:]
        if limit is not None:
            ids = ids[:limit]
        return [self._materialize(book_id, strategy) for book_id in ids]

    def get_by_id(self, address_book_id: int, strategy: LoadingStrategy) -> AddressBook | None:
        if address_book_id not in self.books:
            return None
        return self._materialize(address_book_id, strategy)

    def find_by_name(self, name: str, strategy: LoadingStrategy) -> AddressBook | None:
        for book_id, book_name in self.books.items():
            if book_name == name:
                return self._materialize(book_id, strategy)
        return None

    def create(self, name: str) -> AddressBook:
        if name in self.books.values():
            raise DatabaseQueryError()
        book_id = next(self._ids)
        self.books[book_id] = name
        return AddressBook(id=AddressBookId(book_id), name=name)

    def update(self, address_book_id: int, name: str) -> AddressBook:
        if address_book_id not in self.books:
            raise AddressBookNotFound(address_book_id=address_book_id)
        self.books[address_book_id] = name
        return AddressBook(id=AddressBookId(address_book_id), name=name)

    def delete(self, address_book_id: int) -> None:
        self.books.pop(address_book_id, None)
        for contact_id, contact in list(self.contacts.items()):
            if contact.address_book_id == address_book_id:
                del self.contacts[contact_id]


class InMemoryContactRepository:
    """ContactRepository sharing storage with an InMemoryAddressBookRepository."""

    def __init__(self, books: InMemoryAddressBookRepository) -> None:
        self._books = books
        self._ids = itertools.count(1)

    def list_for_book(self, address_book_id: int, limit: int | None, offset: int) -> list[Contact]:
        contacts = [
            c for _, c in sorted(self._books.contacts.items()) if c.address_book_id == address_book_id
        ][offset:]
        return contacts if limit is None else contacts[:limit]

    def create(self, address_book_id: int, contact: NewContact) -> Contact:
        if address_book_id not in self._books.books:
            raise DatabaseQueryError()
        created = Contact(
            id=ContactId(next(self._ids)),
            name=contact.name,
            address=contact.address,
            phone_number=contact.phone_number,
            email=contact.email,
            address_book_id=AddressBookId(address_book_id),
        )
        self._books.contacts[created.id] = created
        return created

    def get_by_id(self, contact_id: int, address_book_id: int) -> Contact | None:
        contact = self._books.contacts.get(contact_id)
        if contact is None or contact.address_book_id != address_book_id:
            return None
        return contact

    def update(self, contact_id: int, address_book_id: int, contact: NewContact) -> Contact:
        if self.get_by_id(contact_id, address_book_id) is None:
            raise ContactNotFound(contact_id, address_book_id)
        updated = Contact(
            id=ContactId(contact_id),
            name=contact.name,
            address=contact.address,
            phone_number=contact.phone_number,
            email=contact.email,
            address_book_id=AddressBookId(address_book_id),
        )
        self._books.contacts[contact_id] = updated
        return updated

    def delete(self, contact_id: int, address_book_id: int) -> None:
        if self.get_by_id(contact_id, address_book_id) is None:
            raise ContactNotFound(contact_id, address_book_id)
        del self._books.contacts[contact_id]


@pytest.fixture
def book_store() -> InMemoryAddressBookRepository:
    """Empty in-memory address book store."""
    return InMemoryAddressBookRepository()


@pytest.fixture
def contact_store(book_store: InMemoryAddressBookRepository) -> InMemoryContactRepository:
    """In-memory contact store sharing storage with book_store."""
    return InMemoryContactRepository(book_store)


@pytest.fixture
def service(
    book_store: InMemoryAddressBookRepository, contact_store: InMemoryContactRepository
) -> AddressBookService:
    """AddressBookService over the in-memory stores."""
    return AddressBookService(address_books=book_store, contacts=contact_store)

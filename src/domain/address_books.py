"""
Address book domain service - The orchestrator consumers talk to.

For every operation the service validates its inputs (pagination window,
loading-strategy literal), delegates to exactly one store call and returns
the domain result. Store and validation failures propagate unchanged as
AddressBookError subclasses: there are no retries and no silent recovery.

Loading strategies
==================

- eager (default): a single LEFT JOIN query; each book carries its contacts
- lazy: address book rows only; each book carries an empty contact list

The strategy literal is resolved before any store call is attempted, so an
invalid value never reaches the database.
"""

from dataclasses import dataclass

from .exceptions import AddressBookNotFound, ContactNotFound
from .models import AddressBook, AddressBookId, Contact, ContactId, NewAddressBook, NewContact
from .pagination import Pagination
from .ports import AddressBookRepository, ContactRepository, LoadingStrategy


@dataclass
class AddressBookService:
    """
    Stateless facade over the address book and contact stores.

    Safe to share between concurrent requests: it holds nothing but the
    store handles.
    """

    address_books: AddressBookRepository
    contacts: ContactRepository

    def list_address_books(
        self,
        pagination: Pagination,
        loading_strategy: str | LoadingStrategy | None = None,
    ) -> list[AddressBook]:
        """
        List one page of address books.

        Raises:
            InvalidLoadStrategy: Unknown strategy literal
            DatabaseQueryError: Store failure
        """
        strategy = LoadingStrategy.resolve(loading_strategy)
        return self.address_books.get_all(pagination.limit, pagination.offset, strategy)

    def get_address_book(
        self,
        address_book_id: AddressBookId,
        loading_strategy: str | LoadingStrategy | None = None,
    ) -> AddressBook:
        """
        Fetch one address book by id.

        Raises:
            InvalidLoadStrategy: Unknown strategy literal
            AddressBookNotFound: No book with this id
            DatabaseQueryError: Store failure
        """
        strategy = LoadingStrategy.resolve(loading_strategy)
        address_book = self.address_books.get_by_id(address_book_id, strategy)
        if address_book is None:
            raise AddressBookNotFound(address_book_id=address_book_id)
        return address_book

    def find_address_book_by_name(
        self,
        name: str,
        loading_strategy: str | LoadingStrategy | None = None,
    ) -> AddressBook:
        """
        Fetch one address book by exact name.

        Raises:
            InvalidLoadStrategy: Unknown strategy literal
            AddressBookNotFound: No book with this name
            DatabaseQueryError: Store failure
        """
        strategy = LoadingStrategy.resolve(loading_strategy)
        address_book = self.address_books.find_by_name(name, strategy)
        if address_book is None:
            raise AddressBookNotFound(name=name)
        return address_book

    def create_address_book(self, new_address_book: NewAddressBook) -> AddressBook:
        """Create an address book. The result has no contacts."""
        return self.address_books.create(new_address_book.name)

    def update_address_book(
        self, address_book_id: AddressBookId, new_address_book: NewAddressBook
    ) -> AddressBook:
        """
        Rename an address book. The result has no contacts.

        Raises:
            AddressBookNotFound: No book with this id
            DatabaseQueryError: Store failure
        """
        return self.address_books.update(address_book_id, new_address_book.name)

    def delete_address_book(self, address_book_id: AddressBookId) -> None:
        """Delete an address book and its contacts. Idempotent."""
        self.address_books.delete(address_book_id)

    def list_contacts(self, address_book_id: AddressBookId, pagination: Pagination) -> list[Contact]:
        """List one page of a book's contacts."""
        return self.contacts.list_for_book(address_book_id, pagination.limit, pagination.offset)

    def add_contact(self, address_book_id: AddressBookId, new_contact: NewContact) -> Contact:
        """
        Create a contact under an address book.

        Raises:
            DatabaseQueryError: Insert failed, including an unknown parent book
        """
        return self.contacts.create(address_book_id, new_contact)

    def get_contact(self, address_book_id: AddressBookId, contact_id: ContactId) -> Contact:
        """
        Fetch a contact scoped to its address book.

        A contact that exists under another book is reported as not found.

        Raises:
            ContactNotFound: No contact with this (id, book) pair
        """
        contact = self.contacts.get_by_id(contact_id, address_book_id)
        if contact is None:
            raise ContactNotFound(contact_id, address_book_id)
        return contact

    def update_contact(
        self,
        address_book_id: AddressBookId,
        contact_id: ContactId,
        new_contact: NewContact,
    ) -> Contact:
        """Replace a contact's fields. Raises ContactNotFound on a mismatched pair."""
        return self.contacts.update(contact_id, address_book_id, new_contact)

    def delete_contact(self, address_book_id: AddressBookId, contact_id: ContactId) -> None:
        """Delete a contact. Raises ContactNotFound on a mismatched pair."""
        self.contacts.delete(contact_id, address_book_id)

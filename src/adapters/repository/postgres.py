"""
PostgreSQL repository adapters - Implement the address book and contact ports.

This module provides the PostgreSQL implementations of the domain's store
ports using psycopg3 with raw, parameterized SQL over a shared
ConnectionPool. Each public method is a single round-trip.

Eager loading - Row folding:
----------------------------
Eager retrieval runs one LEFT JOIN between address_books and contacts. The
join yields one row per (book, contact) pair, or a single row with NULL
contact columns for a book that has no contacts. fold_address_book_rows()
rebuilds the nested structure:

1. Rows are grouped by address book id, preserving first-seen order.
2. Each row with contact data appends one Contact to its book, so row
   order is contact order.
3. A row whose contact columns are all NULL yields the book only, never a
   placeholder contact.

Paging is applied to address_books in a subquery before the join, so
`limit` counts books, not joined rows.

Error classification:
---------------------
Every psycopg.Error is logged with its engine message and re-raised as
DatabaseQueryError, which carries only a generic message. Zero affected
rows on a scoped UPDATE/DELETE is reported as a not-found error, never
ignored.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from src.domain.exceptions import AddressBookNotFound, ContactNotFound, DatabaseQueryError
from src.domain.models import AddressBook, AddressBookId, Contact, ContactId, NewContact
from src.domain.ports import LoadingStrategy

logger = logging.getLogger(__name__)

_CONTACT_COLUMNS = ("contact_id", "contact_name", "address", "phone_number", "email")

# Joined projection shared by every eager query. "ab" must expose id and name.
_EAGER_SELECT = """
    SELECT ab.id AS address_book_id, ab.name AS address_book_name,
           c.id AS contact_id, c.name AS contact_name,
           c.address, c.phone_number, c.email
"""

_CONTACT_SELECT = """
    SELECT id, name, address, phone_number, email, address_book_id
    FROM contacts
"""


@contextmanager
def _query_errors(operation: str) -> Iterator[None]:
    """Classify engine failures raised inside the block as DatabaseQueryError."""
    try:
        yield
    except psycopg.Error as e:
        logger.error(f"Query failed during {operation}: {e}")
        raise DatabaseQueryError() from e


def fold_address_book_rows(rows: Iterable[Mapping[str, Any]]) -> list[AddressBook]:
    """
    Fold LEFT JOIN rows into address books with nested contacts.

    Args:
        rows: Mappings with address_book_id, address_book_name and the
            contact columns (contact_id, contact_name, address,
            phone_number, email)

    Returns:
        Address books in first-seen order, each with its contacts in row order
    """
    books: dict[int, AddressBook] = {}
    for row in rows:
        book_id = AddressBookId(row["address_book_id"])
        book = books.get(book_id)
        if book is None:
            book = AddressBook(id=book_id, name=row["address_book_name"])
            books[book_id] = book

        if all(row[column] is None for column in _CONTACT_COLUMNS):
            continue

        book.contacts.append(
            Contact(
                id=ContactId(row["contact_id"]),
                name=row["contact_name"],
                address=row["address"],
                phone_number=row["phone_number"],
                email=row["email"],
                address_book_id=book_id,
            )
        )
    return list(books.values())


def _book_from_row(row: Mapping[str, Any]) -> AddressBook:
    return AddressBook(id=AddressBookId(row["id"]), name=row["name"])


def _contact_from_row(row: Mapping[str, Any]) -> Contact:
    return Contact(
        id=ContactId(row["id"]),
        name=row["name"],
        address=row["address"],
        phone_number=row["phone_number"],
        email=row["email"],
        address_book_id=AddressBookId(row["address_book_id"]),
    )


class PostgresAddressBookRepository:
    """
    Implements AddressBookRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Holds no state besides the injected pool.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool owned by the application
        """
        self._pool = pool

    def get_all(
        self, limit: int | None, offset: int, strategy: LoadingStrategy
    ) -> list[AddressBook]:
        """
        Return one page of address books, ordered by id.

        A NULL limit is LIMIT ALL in PostgreSQL.
        """
        if strategy is LoadingStrategy.EAGER:
            sql = (
                _EAGER_SELECT
                + """
                FROM (
                    SELECT id, name FROM address_books
                    ORDER BY id
                    LIMIT %s OFFSET %s
                ) AS ab
                LEFT JOIN contacts AS c ON c.address_book_id = ab.id
                ORDER BY ab.id, c.id
            """
            )
            return self._fetch_folded(sql, (limit, offset), "get_all")

        sql = "SELECT id, name FROM address_books ORDER BY id LIMIT %s OFFSET %s"
        with _query_errors("get_all"), self._pool.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(sql, (limit, offset))
                return [_book_from_row(row) for row in cursor.fetchall()]

    def get_by_id(
        self, address_book_id: AddressBookId, strategy: LoadingStrategy
    ) -> AddressBook | None:
        """Return the address book with this id, or None."""
        if strategy is LoadingStrategy.EAGER:
            sql = (
                _EAGER_SELECT
                + """
                FROM address_books AS ab
                LEFT JOIN contacts AS c ON c.address_book_id = ab.id
                WHERE ab.id = %s
                ORDER BY c.id
            """
            )
            books = self._fetch_folded(sql, (address_book_id,), "get_by_id")
            return books[0] if books else None

        return self._fetch_one_book(
            "SELECT id, name FROM address_books WHERE id = %s", (address_book_id,), "get_by_id"
        )

    def find_by_name(self, name: str, strategy: LoadingStrategy) -> AddressBook | None:
        """Return the address book with exactly this name, or None."""
        if strategy is LoadingStrategy.EAGER:
            sql = (
                _EAGER_SELECT
                + """
                FROM address_books AS ab
                LEFT JOIN contacts AS c ON c.address_book_id = ab.id
                WHERE ab.name = %s
                ORDER BY ab.id, c.id
            """
            )
            books = self._fetch_folded(sql, (name,), "find_by_name")
            return books[0] if books else None

        return self._fetch_one_book(
            "SELECT id, name FROM address_books WHERE name = %s", (name,), "find_by_name"
        )

    def create(self, name: str) -> AddressBook:
        """
        Insert an address book.

        Raises:
            DatabaseQueryError: Insert failed (e.g. duplicate name)
        """
        sql = "INSERT INTO address_books (name) VALUES (%s) RETURNING id, name"

        with _query_errors("create"), self._pool.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(sql, (name,))
                row = cursor.fetchone()
                conn.commit()
        logger.info(f"Created address book {row['id']}")
        return _book_from_row(row)

    def update(self, address_book_id: AddressBookId, name: str) -> AddressBook:
        """
        Replace the name of an address book.

        Raises:
            AddressBookNotFound: Zero rows affected
            DatabaseQueryError: Update failed
        """
        sql = "UPDATE address_books SET name = %s WHERE id = %s RETURNING id, name"

        with _query_errors("update"), self._pool.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(sql, (name, address_book_id))
                if cursor.rowcount == 0:
                    raise AddressBookNotFound(address_book_id=address_book_id)
                row = cursor.fetchone()
                conn.commit()
        return _book_from_row(row)

    def delete(self, address_book_id: AddressBookId) -> None:
        """Delete an address book; contacts go with it via ON DELETE CASCADE."""
        sql = "DELETE FROM address_books WHERE id = %s"

        with _query_errors("delete"), self._pool.connection() as conn:
            with conn.cursor() as cursor:
                cursor.execute(sql, (address_book_id,))
                deleted = cursor.rowcount
                conn.commit()
        if deleted == 0:
            logger.debug(f"Delete of address book {address_book_id} matched no rows")

    def _fetch_folded(
        self, sql: str, params: tuple[Any, ...], operation: str
    ) -> list[AddressBook]:
        with _query_errors(operation), self._pool.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(sql, params)
                return fold_address_book_rows(cursor.fetchall())

    def _fetch_one_book(
        self, sql: str, params: tuple[Any, ...], operation: str
    ) -> AddressBook | None:
        with _query_errors(operation), self._pool.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
        return _book_from_row(row) if row is not None else None


class PostgresContactRepository:
    """
    Implements ContactRepository protocol via psycopg3.

    Every statement that targets a single contact filters on both the
    contact id and the address book id, so a mismatched pair touches
    zero rows instead of another book's contact.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def list_for_book(
        self, address_book_id: AddressBookId, limit: int | None, offset: int
    ) -> list[Contact]:
        """Return one page of a book's contacts, ordered by id."""
        sql = _CONTACT_SELECT + "WHERE address_book_id = %s ORDER BY id LIMIT %s OFFSET %s"

        with _query_errors("list_for_book"), self._pool.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(sql, (address_book_id, limit, offset))
                return [_contact_from_row(row) for row in cursor.fetchall()]

    def create(self, address_book_id: AddressBookId, contact: NewContact) -> Contact:
        """
        Insert a contact under a book.

        Raises:
            DatabaseQueryError: Insert failed, including a foreign key
                violation for an unknown address book
        """
        sql = """
            INSERT INTO contacts (name, address, phone_number, email, address_book_id)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING id, name, address, phone_number, email, address_book_id
        """
        params = (contact.name, contact.address, contact.phone_number, contact.email, address_book_id)

        with _query_errors("create_contact"), self._pool.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
                conn.commit()
        return _contact_from_row(row)

    def get_by_id(
        self, contact_id: ContactId, address_book_id: AddressBookId
    ) -> Contact | None:
        """Return the contact only if it belongs to this book."""
        sql = _CONTACT_SELECT + "WHERE id = %s AND address_book_id = %s"

        with _query_errors("get_contact"), self._pool.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(sql, (contact_id, address_book_id))
                row = cursor.fetchone()
        return _contact_from_row(row) if row is not None else None

    def update(
        self, contact_id: ContactId, address_book_id: AddressBookId, contact: NewContact
    ) -> Contact:
        """
        Replace a contact's fields.

        Raises:
            ContactNotFound: The (id, address_book_id) pair matched zero rows
            DatabaseQueryError: Update failed
        """
        sql = """
            UPDATE contacts
            SET name = %s, address = %s, phone_number = %s, email = %s
            WHERE id = %s AND address_book_id = %s
            RETURNING id, name, address, phone_number, email, address_book_id
        """
        params = (
            contact.name,
            contact.address,
            contact.phone_number,
            contact.email,
            contact_id,
            address_book_id,
        )

        with _query_errors("update_contact"), self._pool.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(sql, params)
                if cursor.rowcount == 0:
                    raise ContactNotFound(contact_id, address_book_id)
                row = cursor.fetchone()
                conn.commit()
        return _contact_from_row(row)

    def delete(self, contact_id: ContactId, address_book_id: AddressBookId) -> None:
        """
        Delete a contact.

        Raises:
            ContactNotFound: The (id, address_book_id) pair matched zero rows
        """
        sql = "DELETE FROM contacts WHERE id = %s AND address_book_id = %s"

        with _query_errors("delete_contact"), self._pool.connection() as conn:
            with conn.cursor() as cursor:
                cursor.execute(sql, (contact_id, address_book_id))
                if cursor.rowcount == 0:
                    raise ContactNotFound(contact_id, address_book_id)
                conn.commit()


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL files from the migrations directory in sorted order.

    Each migration must be idempotent (CREATE TABLE IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))
    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            with pool.connection() as conn:
                conn.execute(sql_file.read_text())
        except psycopg.Error as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
        logger.info(f"Migration complete: {sql_file.name}")

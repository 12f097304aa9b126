"""Repository adapters - Database implementations."""

from .postgres import (
    PostgresAddressBookRepository,
    PostgresContactRepository,
    fold_address_book_rows,
    run_migrations,
)

__all__ = [
    "PostgresAddressBookRepository",
    "PostgresContactRepository",
    "fold_address_book_rows",
    "run_migrations",
]

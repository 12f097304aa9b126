"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting the domain
service and its store adapters into routes. The pool is owned by the
application lifespan; stores and the service are built per request.
"""

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import (
    PostgresAddressBookRepository,
    PostgresContactRepository,
)
from src.config.settings import Settings, get_settings
from src.domain.address_books import AddressBookService


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_address_book_repository(request: Request) -> PostgresAddressBookRepository:
    """Create address book repository with connection pool from app state."""
    return PostgresAddressBookRepository(get_pool(request))


def get_contact_repository(request: Request) -> PostgresContactRepository:
    """Create contact repository with connection pool from app state."""
    return PostgresContactRepository(get_pool(request))


def get_address_book_service(request: Request) -> AddressBookService:
    """
    Create address book service with injected dependencies.

    Wires both stores over the shared pool for the domain service.
    """
    return AddressBookService(
        address_books=get_address_book_repository(request),
        contacts=get_contact_repository(request),
    )


def get_default_page_limit(settings: Settings = Depends(get_settings)) -> int | None:
    """Limit applied when a request carries no `limit` value."""
    return settings.default_page_limit


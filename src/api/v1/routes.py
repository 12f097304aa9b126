"""
API v1 routes.

Defines REST endpoints for address books and their contacts. Query values
(limit, offset, loading_strategy) are accepted as raw text and validated
by the domain layer, so a bad value never reaches the store.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import get_address_book_service, get_default_page_limit
from src.api.errors import http_error
from src.api.models import (
    AddressBookRequest,
    AddressBookResponse,
    ContactRequest,
    ContactResponse,
    ErrorResponse,
)
from src.domain.address_books import AddressBookService
from src.domain.exceptions import AddressBookError
from src.domain.models import AddressBookId, ContactId
from src.domain.pagination import Pagination

router = APIRouter(tags=["v1"])

_BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid parameters or body"}}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Not found"}}
_SERVER_ERROR = {500: {"model": ErrorResponse, "description": "Query could not be executed"}}

STRATEGY_DESCRIPTION = "'eager' (default) embeds contacts, 'lazy' returns books only"


@router.get(
    "/addressbooks",
    response_model=list[AddressBookResponse],
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
    summary="List address books",
)
async def list_address_books(
    limit: str | None = Query(None, description="Maximum number of books"),
    offset: str | None = Query(None, description="Number of books to skip"),
    loading_strategy: str | None = Query(None, description=STRATEGY_DESCRIPTION),
    default_limit: int | None = Depends(get_default_page_limit),
    service: AddressBookService = Depends(get_address_book_service),
) -> list[AddressBookResponse]:
    """List one page of address books, ordered by id."""
    try:
        pagination = Pagination.from_query(
            {"limit": limit, "offset": offset}, default_limit=default_limit
        )
        address_books = service.list_address_books(pagination, loading_strategy)
    except AddressBookError as e:
        raise http_error(e) from None
    return [AddressBookResponse.model_validate(book) for book in address_books]


@router.post(
    "/addressbooks",
    response_model=AddressBookResponse,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
    summary="Create an address book",
)
async def create_address_book(
    request_data: AddressBookRequest,
    service: AddressBookService = Depends(get_address_book_service),
) -> AddressBookResponse:
    """
    Create an address book.

    - **name**: Address book name

    The created book is returned without contacts.
    """
    try:
        address_book = service.create_address_book(request_data.to_domain())
    except AddressBookError as e:
        raise http_error(e) from None
    return AddressBookResponse.model_validate(address_book)


# Declared before /addressbooks/{address_book_id} so "search" is not parsed as an id
@router.get(
    "/addressbooks/search",
    response_model=AddressBookResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Find an address book by name",
)
async def find_address_book_by_name(
    name: str = Query(..., description="Exact address book name"),
    loading_strategy: str | None = Query(None, description=STRATEGY_DESCRIPTION),
    service: AddressBookService = Depends(get_address_book_service),
) -> AddressBookResponse:
    try:
        address_book = service.find_address_book_by_name(name, loading_strategy)
    except AddressBookError as e:
        raise http_error(e) from None
    return AddressBookResponse.model_validate(address_book)


@router.get(
    "/addressbooks/{address_book_id}",
    response_model=AddressBookResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Get an address book",
)
async def get_address_book(
    address_book_id: int,
    loading_strategy: str | None = Query(None, description=STRATEGY_DESCRIPTION),
    service: AddressBookService = Depends(get_address_book_service),
) -> AddressBookResponse:
    try:
        address_book = service.get_address_book(AddressBookId(address_book_id), loading_strategy)
    except AddressBookError as e:
        raise http_error(e) from None
    return AddressBookResponse.model_validate(address_book)


@router.put(
    "/addressbooks/{address_book_id}",
    response_model=AddressBookResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Rename an address book",
)
async def update_address_book(
    address_book_id: int,
    request_data: AddressBookRequest,
    service: AddressBookService = Depends(get_address_book_service),
) -> AddressBookResponse:
    """Replace the name of an address book. Contacts are not returned."""
    try:
        address_book = service.update_address_book(
            AddressBookId(address_book_id), request_data.to_domain()
        )
    except AddressBookError as e:
        raise http_error(e) from None
    return AddressBookResponse.model_validate(address_book)


@router.delete(
    "/addressbooks/{address_book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
    summary="Delete an address book and its contacts",
)
async def delete_address_book(
    address_book_id: int,
    service: AddressBookService = Depends(get_address_book_service),
) -> Response:
    try:
        service.delete_address_book(AddressBookId(address_book_id))
    except AddressBookError as e:
        raise http_error(e) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/addressbooks/{address_book_id}/contacts",
    response_model=list[ContactResponse],
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
    summary="List the contacts of an address book",
)
async def list_contacts(
    address_book_id: int,
    limit: str | None = Query(None, description="Maximum number of contacts"),
    offset: str | None = Query(None, description="Number of contacts to skip"),
    default_limit: int | None = Depends(get_default_page_limit),
    service: AddressBookService = Depends(get_address_book_service),
) -> list[ContactResponse]:
    try:
        pagination = Pagination.from_query(
            {"limit": limit, "offset": offset}, default_limit=default_limit
        )
        contacts = service.list_contacts(AddressBookId(address_book_id), pagination)
    except AddressBookError as e:
        raise http_error(e) from None
    return [ContactResponse.model_validate(contact) for contact in contacts]


@router.post(
    "/addressbooks/{address_book_id}/contacts",
    response_model=ContactResponse,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
    summary="Add a contact to an address book",
)
async def add_contact(
    address_book_id: int,
    request_data: ContactRequest,
    service: AddressBookService = Depends(get_address_book_service),
) -> ContactResponse:
    """
    Add a contact to an address book.

    - **name**, **address**: required
    - **phone_number**, **email**: optional
    """
    try:
        contact = service.add_contact(AddressBookId(address_book_id), request_data.to_domain())
    except AddressBookError as e:
        raise http_error(e) from None
    return ContactResponse.model_validate(contact)


@router.get(
    "/addressbooks/{address_book_id}/contacts/{contact_id}",
    response_model=ContactResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a contact",
)
async def get_contact(
    address_book_id: int,
    contact_id: int,
    service: AddressBookService = Depends(get_address_book_service),
) -> ContactResponse:
    try:
        contact = service.get_contact(AddressBookId(address_book_id), ContactId(contact_id))
    except AddressBookError as e:
        raise http_error(e) from None
    return ContactResponse.model_validate(contact)


@router.put(
    "/addressbooks/{address_book_id}/contacts/{contact_id}",
    response_model=ContactResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Replace a contact",
)
async def update_contact(
    address_book_id: int,
    contact_id: int,
    request_data: ContactRequest,
    service: AddressBookService = Depends(get_address_book_service),
) -> ContactResponse:
    try:
        contact = service.update_contact(
            AddressBookId(address_book_id), ContactId(contact_id), request_data.to_domain()
        )
    except AddressBookError as e:
        raise http_error(e) from None
    return ContactResponse.model_validate(contact)


@router.delete(
    "/addressbooks/{address_book_id}/contacts/{contact_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a contact",
)
async def delete_contact(
    address_book_id: int,
    contact_id: int,
    service: AddressBookService = Depends(get_address_book_service),
) -> Response:
    try:
        service.delete_contact(AddressBookId(address_book_id), ContactId(contact_id))
    except AddressBookError as e:
        raise http_error(e) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)

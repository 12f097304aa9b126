"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.domain.models import NewAddressBook, NewContact


class AddressBookRequest(BaseModel):
    """Request model for creating or renaming an address book."""

    name: str = Field(..., min_length=1, max_length=255, description="Address book name")

    def to_domain(self) -> NewAddressBook:
        return NewAddressBook(name=self.name)


class ContactRequest(BaseModel):
    """Request model for creating or replacing a contact."""

    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1)
    phone_number: str | None = Field(None, max_length=64)
    email: EmailStr | None = None

    def to_domain(self) -> NewContact:
        return NewContact(
            name=self.name,
            address=self.address,
            phone_number=self.phone_number,
            email=self.email,
        )


class ContactResponse(BaseModel):
    """Response model for a single contact."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: str
    phone_number: str | None
    email: str | None
    address_book_id: int


class AddressBookResponse(BaseModel):
    """
    Response model for an address book.

    `contacts` is empty unless the book was fetched eagerly.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    contacts: list[ContactResponse] = []


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str

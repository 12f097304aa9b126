"""
Domain exceptions - Closed error taxonomy for the address book core.

Every failure raised by the stores or by input validation is one of these
classes. The messages are fixed and generic: raw engine text is kept only
on the chained cause, never in the error itself.
"""


class AddressBookError(Exception):
    """Base class for address book domain errors."""

    message = "Address book error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class DatabaseQueryError(AddressBookError):
    """A store operation failed to execute (constraint, connectivity, syntax)."""

    message = "Query could not be executed"


class AddressBookNotFound(AddressBookError):
    """No address book matched the requested id or name."""

    message = "Address book not found"

    def __init__(self, address_book_id: int | None = None, name: str | None = None) -> None:
        super().__init__()
        self.address_book_id = address_book_id
        self.name = name


class ContactNotFound(AddressBookError):
    """No contact matched the (contact id, address book id) pair."""

    message = "Contact not found"

    def __init__(self, contact_id: int, address_book_id: int) -> None:
        super().__init__()
        self.contact_id = contact_id
        self.address_book_id = address_book_id


class InvalidLoadStrategy(AddressBookError):
    """The loading_strategy value is neither 'eager' nor 'lazy'."""

    message = "Invalid load strategy"

    def __init__(self, value: str) -> None:
        super().__init__()
        self.value = value


class MissingParameters(AddressBookError):
    """A pagination parameter was supplied without a value."""

    message = "Missing parameters"


class InvalidPagination(AddressBookError):
    """A pagination parameter is not a non-negative integer."""

    message = "Pagination parameters must be non-negative integers"


class JsonDeserializationError(AddressBookError):
    """The request body could not be parsed into the expected shape."""

    message = "Json deserialization error"

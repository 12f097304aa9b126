"""
Pagination parameters - Parsing and validation of limit/offset.

Query values arrive as text. An absent `limit` falls back to the configured
default, an absent `offset` means 0, and anything that is not a
non-negative integer fitting in 32 bits is rejected before the store is
reached.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from .exceptions import InvalidPagination, MissingParameters

# Largest unsigned 32-bit value; anything above is rejected before reaching LIMIT/OFFSET
MAX_PAGE_VALUE = 4_294_967_295


@dataclass(frozen=True)
class Pagination:
    """Validated page window. `limit=None` means no upper bound."""

    limit: int | None = None
    offset: int = 0

    def __post_init__(self) -> None:
        if self.limit is not None and not _in_range(self.limit):
            raise InvalidPagination()
        if not _in_range(self.offset):
            raise InvalidPagination()

    @classmethod
    def from_query(
        cls,
        params: Mapping[str, str | None],
        default_limit: int | None = None,
    ) -> "Pagination":
        """
        Build pagination from raw query-string values.

        Args:
            params: Mapping that may contain "limit" and/or "offset"
            default_limit: Limit used when "limit" is absent

        Returns:
            Validated Pagination

        Raises:
            MissingParameters: A key is present with an empty value
            InvalidPagination: A value is not an integer in 0..MAX_PAGE_VALUE
        """
        limit = _parse_unsigned(params.get("limit"))
        offset = _parse_unsigned(params.get("offset"))
        return cls(
            limit=default_limit if limit is None else limit,
            offset=0 if offset is None else offset,
        )


def _parse_unsigned(raw: str | None) -> int | None:
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        raise MissingParameters()
    # int() accepts a leading sign; only plain digits are unsigned
    if not (text.isascii() and text.isdigit()):
        raise InvalidPagination()
    value = int(text)
    if value > MAX_PAGE_VALUE:
        raise InvalidPagination()
    return value


def _in_range(value: object) -> bool:
    return isinstance(value, int) and 0 <= value <= MAX_PAGE_VALUE

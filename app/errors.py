"""Error taxonomy shared by the catalog sources and assemblers."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for failures raised while assembling catalog payloads."""

    default_message = "Catalog request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class NotFound(CatalogError):
    """The requested series, movie or episode does not exist."""

    default_message = "Not found"


class AddressError(CatalogError):
    """An episode address could not be interpreted."""

    default_message = "Invalid episode address"


class InvalidFormat(AddressError):
    """The address does not match the ``season-episode`` pattern."""

    default_message = "Invalid episode format. Use season-episode (e.g., 1-5)"


class SourceUnavailable(CatalogError):
    """The active backend failed to answer a query."""

    default_message = "Data source unavailable"

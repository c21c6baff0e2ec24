"""
Catalog Protocols (Interfaces)
"""
from typing import Optional, Protocol, runtime_checkable

from booking.line_items.models import LineItemKind

from .models import CatalogEntry


class CatalogServiceError(Exception):
    """Catalog lookup failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CatalogEntryNotFoundError(CatalogServiceError):
    pass


@runtime_checkable
class CatalogClientProtocol(Protocol):
    """Resolves a resource id to its display name and price"""

    async def get_entry(self, kind: LineItemKind, resource_id: str) -> CatalogEntry:
        ...

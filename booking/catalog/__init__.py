"""
Catalog

Display name and price lookup for selections.
"""

from .models import CatalogEntry
from .protocols import CatalogClientProtocol, CatalogEntryNotFoundError, CatalogServiceError
from .client import CatalogClient

__all__ = [
    "CatalogEntry",
    "CatalogClientProtocol",
    "CatalogEntryNotFoundError",
    "CatalogServiceError",
    "CatalogClient",
]

"""
Business entities representing core domain concepts.

Entities are mutable objects with identity that persist over time.

Exports:
- CatalogItem: A cataloged movie or TV show
- Material: A confirmed link between a CatalogItem and a file on disk
"""

from mediashelf.core.entities.catalog import CatalogItem, Material

__all__ = [
    "CatalogItem",
    "Material",
]

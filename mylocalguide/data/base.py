"""Protocol definitions for external collaborators.

Each protocol defines the interface that concrete implementations must satisfy.
"""

from typing import Protocol, runtime_checkable

from mylocalguide.models.venue import SearchSpec, VenueListing


@runtime_checkable
class ListingSource(Protocol):
    source_name: str

    async def search(self, spec: SearchSpec, offset: int = 0, page_size: int = 50) -> list[VenueListing]:
        """Return one page of normalized listings for a search."""
        ...


@runtime_checkable
class NeighborhoodLocator(Protocol):
    async def locate_neighborhood(self, name: str, address: str) -> str | None:
        """Name the neighborhood for an address, or None if unknown."""
        ...

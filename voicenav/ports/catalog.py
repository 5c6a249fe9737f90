"""Catalog port - Abstraction over the transit reference data.

The catalog is static today (in-memory or CSV) but the contract is the
one a live feed would implement, so ProximityResolver and RouteMatcher
never depend on where routes and stops come from.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Route, Stop


class TransitCatalogPort(Protocol):
    """Port for transit reference data.

    Implementations:
    - adapters/catalog/static_catalog.py (StaticTransitCatalog)
    - adapters/catalog/csv_repository.py (CSVTransitCatalog)
    """

    def list_routes(self) -> Sequence[Route]:
        """List all known routes, in catalog order.

        Returns:
            Sequence of routes.
        """
        ...

    def list_stops(self) -> Sequence[Stop]:
        """List all known stops, in catalog order.

        Returns:
            Sequence of stops.
        """
        ...

    def get_route(self, identifier: str) -> Optional[Route]:
        """Get a route by identifier, ignoring case.

        Args:
            identifier: Route identifier (e.g. 't581').

        Returns:
            The route, or None if unknown.
        """
        ...

"""Catalog adapters - Implementations of TransitCatalogPort.

Available implementations:
- StaticTransitCatalog: Built-in Kuala Lumpur reference data
- CSVTransitCatalog: Routes and stops loaded from CSV files
"""

from .csv_repository import CSVTransitCatalog
from .static_catalog import KL_BUS_ROUTES, KL_BUS_STOPS, StaticTransitCatalog

__all__ = ["StaticTransitCatalog", "CSVTransitCatalog", "KL_BUS_ROUTES", "KL_BUS_STOPS"]

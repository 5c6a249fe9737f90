"""Location adapters - Implementations of LocationProviderPort.

Available implementations:
- StaticLocationProvider: Fixed fix (or none), for kiosks and tests
- NominatimLocationProvider: Geocodes a configured place name
"""

from .nominatim_provider import NominatimLocationProvider
from .static_provider import StaticLocationProvider

__all__ = ["StaticLocationProvider", "NominatimLocationProvider"]

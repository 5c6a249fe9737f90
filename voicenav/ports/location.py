"""Location port - Abstraction for device location acquisition."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import LocationFix


class LocationProviderPort(Protocol):
    """Port for location providers.

    Implementations:
    - adapters/location/static_provider.py (StaticLocationProvider)
    - adapters/location/nominatim_provider.py (NominatimLocationProvider)

    A denied permission and a failed lookup are indistinguishable to
    callers: both are reported as None.
    """

    def get_fix(self) -> Optional[LocationFix]:
        """Acquire the current location.

        Returns:
            A LocationFix, or None when location is unavailable.
        """
        ...

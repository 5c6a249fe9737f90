"""Location provider returning a preset fix."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...domain.models import LocationFix


@dataclass
class StaticLocationProvider:
    """Returns the same fix on every call; None means "unavailable"."""

    fix: Optional[LocationFix] = None

    def get_fix(self) -> Optional[LocationFix]:
        return self.fix

    def update(self, fix: Optional[LocationFix]) -> None:
        """Replace the preset fix (e.g. when the user moves in a demo)."""
        self.fix = fix

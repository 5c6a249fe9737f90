"""Route matcher - Validates an extracted candidate against nearby routes.

Matching is exact on the case-insensitive identifier. No fuzzy or
partial matching: a wrong confirmation read aloud to a rider who cannot
check the screen is worse than asking again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..domain.models import (
    CandidateNotInSet,
    Confirmed,
    MatchOutcome,
    NoCandidateExtracted,
    ProximitySet,
)
from ..ports.catalog import TransitCatalogPort


@dataclass
class RouteMatcher:
    """Resolves a candidate identifier to a MatchOutcome.

    Attributes:
        catalog: Source of the full route records
    """

    catalog: TransitCatalogPort
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def match(
        self,
        candidate: Optional[str],
        raw_text: str,
        active_set: ProximitySet,
    ) -> MatchOutcome:
        """Match a candidate against the active route set.

        Args:
            candidate: Identifier from CommandExtractor, or None.
            raw_text: The recognized text the candidate came from.
            active_set: Routes currently valid for the session.

        Returns:
            Confirmed with the catalog record, or a no-match outcome.
        """
        if candidate is None:
            self._logger.debug("No candidate", extra={"text": raw_text})
            return NoCandidateExtracted(raw_text=raw_text)

        in_set = active_set.find_route(candidate)
        if in_set is None:
            self._logger.info(
                "Candidate not among nearby routes",
                extra={"candidate": candidate, "active": list(active_set.route_ids)},
            )
            return CandidateNotInSet(candidate_id=candidate, raw_text=raw_text)

        route = self.catalog.get_route(in_set.identifier) or in_set
        self._logger.info("Route confirmed", extra={"route_id": route.identifier})
        return Confirmed(route=route, raw_text=raw_text)

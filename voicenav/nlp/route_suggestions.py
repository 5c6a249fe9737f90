"""Route suggestions for re-prompts.

When the user names a route that is not nearby, the assistant can offer
the closest nearby alternatives. Suggestions are hints only; they never
confirm a route.
"""

from typing import List, Sequence

from rapidfuzz import fuzz, process

from ..domain.models import Route

# Minimum similarity score (0-100) to consider a fuzzy match
MIN_SIMILARITY_SCORE = 70


def suggest_routes(routes: Sequence[Route], query: str, limit: int = 5) -> List[Route]:
    """Suggest routes for a partial or misheard identifier.

    Substring matches on identifier or description come first, in the
    given order. Remaining slots are filled with identifiers close to the
    query according to rapidfuzz.

    Parameters
    ----------
    routes : Sequence[Route]
        Routes to search, usually the active set
    query : str
        Partial identifier or free text
    limit : int
        Maximum number of suggestions

    Returns
    -------
    List[Route]
        Suggested routes, best first
    """
    term = query.strip().lower()
    if not term or limit <= 0:
        return []

    suggestions = [
        route
        for route in routes
        if term in route.identifier.lower() or term in route.description.lower()
    ][:limit]

    if len(suggestions) < limit:
        remaining = [route for route in routes if route not in suggestions]
        scored = process.extract(
            term,
            [route.identifier.lower() for route in remaining],
            scorer=fuzz.ratio,
            score_cutoff=MIN_SIMILARITY_SCORE,
            limit=limit - len(suggestions),
        )
        for _, _, index in scored:
            suggestions.append(remaining[index])

    return suggestions

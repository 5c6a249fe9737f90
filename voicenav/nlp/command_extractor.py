"""Route identifier extraction from recognized speech.

Turns free-form recognized text into a candidate route identifier. The
candidate is not validated here; RouteMatcher checks it against the
routes near the user.

Patterns are evaluated in ascending priority and the first hit wins:

1. Spoken-number phrases ("five eight one" -> "581"), by substring
   containment, in declaration order.
2. Bare digits with optional trailing letters ("581", "58a").
3. ``T``, then ``U``, then ``B`` prefixed digits ("t581" -> "T581").

Because precedence is by pattern and not by position, a sentence with
several numbers yields the hit of the highest-priority pattern, not
necessarily the leftmost number.

Example
-------
    >>> extract_route_id("five eight one")
    '581'
    >>> extract_route_id("t581")
    'T581'
    >>> extract_route_id("random text") is None
    True
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence

logger = logging.getLogger(__name__)

# Longer phrases must come before the shorter phrases they contain.
SPOKEN_ROUTE_PHRASES: tuple[tuple[str, str], ...] = (
    ("five eight one", "581"),
    ("five eight", "58"),
    ("eight four", "84"),
    ("eighty four", "84"),
    ("one zero one", "101"),
    ("four zero zero", "400"),
    ("five zero zero", "500"),
)

_WHITESPACE = re.compile(r"\s+")


class RoutePattern(Protocol):
    """One entry of the extraction precedence table."""

    name: str
    priority: int

    def match(self, text: str) -> Optional[str]:
        """Return a route identifier found in normalized text, or None."""
        ...


@dataclass(frozen=True)
class SpokenPhrasePattern:
    """Maps spoken digit sequences to route numbers by substring search."""

    name: str
    priority: int
    phrases: tuple[tuple[str, str], ...] = SPOKEN_ROUTE_PHRASES

    def match(self, text: str) -> Optional[str]:
        for phrase, digits in self.phrases:
            if phrase in text:
                return digits
        return None


@dataclass(frozen=True)
class RegexPattern:
    """Matches the first occurrence of a regex; whitespace is stripped."""

    name: str
    priority: int
    regex: re.Pattern[str]

    def match(self, text: str) -> Optional[str]:
        found = self.regex.search(text)
        if found is None:
            return None
        return _WHITESPACE.sub("", found.group(0)).upper()


DEFAULT_PATTERNS: tuple[RoutePattern, ...] = (
    SpokenPhrasePattern(name="spoken_phrase", priority=0),
    RegexPattern(
        name="digits", priority=10, regex=re.compile(r"\b\d+[a-z]*\b", re.ASCII)
    ),
    RegexPattern(
        name="t_prefixed", priority=20, regex=re.compile(r"\bt\s*\d+\b", re.ASCII)
    ),
    RegexPattern(
        name="u_prefixed", priority=30, regex=re.compile(r"\bu\s*\d+\b", re.ASCII)
    ),
    RegexPattern(
        name="b_prefixed", priority=40, regex=re.compile(r"\bb\s*\d+\b", re.ASCII)
    ),
)


def normalize_utterance(text: str) -> str:
    """Lowercase and trim recognized text."""
    return text.lower().strip()


@dataclass
class CommandExtractor:
    """Extracts a candidate route identifier from recognized speech.

    Attributes:
        patterns: Precedence table; evaluated by ascending priority
    """

    patterns: Sequence[RoutePattern] = DEFAULT_PATTERNS

    _ordered: tuple[RoutePattern, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._ordered = tuple(sorted(self.patterns, key=lambda p: p.priority))

    def extract(self, text: str) -> Optional[str]:
        """Extract a route identifier from text.

        Args:
            text: Raw recognized text.

        Returns:
            Upper-cased candidate identifier, or None if nothing matched.
        """
        normalized = normalize_utterance(text)
        if not normalized:
            return None

        for pattern in self._ordered:
            candidate = pattern.match(normalized)
            if candidate:
                logger.debug(
                    "Route candidate extracted",
                    extra={"pattern": pattern.name, "candidate": candidate},
                )
                return candidate

        logger.debug("No route candidate in utterance", extra={"text": normalized})
        return None


_DEFAULT_EXTRACTOR = CommandExtractor()


def extract_route_id(text: str) -> Optional[str]:
    """Extract a route identifier using the default precedence table."""
    return _DEFAULT_EXTRACTOR.extract(text)

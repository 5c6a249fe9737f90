"""Speech output that only records and logs.

Used for headless runs and in tests, where the spoken lines are the
observable output of a session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List


@dataclass
class LoggingSpeechOutput:
    """SpeechOutputPort that keeps every utterance in ``history``."""

    history: List[str] = field(default_factory=list)
    stops: int = 0
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def speak(self, text: str, rate: float = 1.0, pitch: float = 1.0) -> None:
        self.history.append(text)
        self._logger.info("Speak", extra={"text": text, "rate": rate, "pitch": pitch})

    def stop(self) -> None:
        self.stops += 1

    @property
    def last(self) -> str:
        """Most recent utterance, or an empty string."""
        return self.history[-1] if self.history else ""

    def clear(self) -> None:
        self.history.clear()

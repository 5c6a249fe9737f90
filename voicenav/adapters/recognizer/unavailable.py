"""Recognizer for platforms without speech recognition."""

from __future__ import annotations

from dataclasses import dataclass

from ...domain.errors import RecognizerError
from ...ports.recognizer import ErrorCallback, ResultCallback


@dataclass
class UnavailableSpeechRecognizer:
    """Always reports itself unavailable, sending callers to manual input."""

    def is_available(self) -> bool:
        return False

    def start(
        self,
        language: str,
        on_result: ResultCallback,
        on_error: ErrorCallback,
    ) -> None:
        raise RecognizerError(
            "Speech recognition is not available on this platform",
            code="not-available",
        )

    def stop(self) -> None:
        pass

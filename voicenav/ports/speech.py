"""Speech output port - Fire-and-forget text-to-speech."""

from __future__ import annotations

from typing import Protocol


class SpeechOutputPort(Protocol):
    """Port for speech synthesis.

    Implementations:
    - adapters/speech/pyttsx3_adapter.py (Pyttsx3SpeechOutput)
    - adapters/speech/logging_speech.py (LoggingSpeechOutput)

    ``speak`` must return immediately; callers never wait on playback.
    """

    def speak(self, text: str, rate: float = 1.0, pitch: float = 1.0) -> None:
        """Queue text for playback.

        Args:
            text: Text to speak.
            rate: Speaking rate multiplier (1.0 = engine default).
            pitch: Pitch multiplier, where the engine supports it.
        """
        ...

    def stop(self) -> None:
        """Interrupt current playback and drop queued utterances."""
        ...

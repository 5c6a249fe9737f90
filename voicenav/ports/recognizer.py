"""Recognizer ports - Native speech recognition and microphone permission.

The absence of a recognizer is a normal input to the voice channel, not
an exception: ``is_available`` returning False routes the channel to its
manual fallback.
"""

from __future__ import annotations

from typing import Callable, Protocol

# on_result(text, confidence)
ResultCallback = Callable[[str, float], None]
# on_error(code)
ErrorCallback = Callable[[str], None]


class SpeechRecognizerPort(Protocol):
    """Port for one-shot speech recognizers.

    Implementations:
    - adapters/recognizer/whisper_adapter.py (WhisperSpeechRecognizer)
    - adapters/recognizer/unavailable.py (UnavailableSpeechRecognizer)

    Recognition is single-utterance (continuous off, interim results off).
    Exactly one of the callbacks fires per ``start``, unless ``stop`` is
    called first.
    """

    def is_available(self) -> bool:
        """Return True if recognition can run on this platform."""
        ...

    def start(
        self,
        language: str,
        on_result: ResultCallback,
        on_error: ErrorCallback,
    ) -> None:
        """Start listening for one utterance.

        Args:
            language: BCP-47 language tag (e.g. 'en-US').
            on_result: Called with the recognized text and its confidence.
            on_error: Called with an error code if recognition fails.

        Raises:
            RecognizerError: If the recognizer cannot be started.
        """
        ...

    def stop(self) -> None:
        """Stop listening. Safe to call when not listening."""
        ...


class MicrophonePermissionPort(Protocol):
    """Port for acquiring microphone access.

    Implementations:
    - adapters/recognizer/permission.py (SoundDeviceMicrophonePermission,
      StaticMicrophonePermission)
    """

    def request(self) -> bool:
        """Attempt to acquire microphone access.

        Returns:
            True if access was granted.
        """
        ...

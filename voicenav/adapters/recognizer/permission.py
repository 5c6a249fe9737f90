"""Microphone permission adapters.

Desktop platforms have no permission dialog; access is "granted" when
the default input device can be opened. Opening and immediately closing
a stream mirrors how browsers grant access on the first capture.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...config import ASRConfig, get_config


@dataclass
class SoundDeviceMicrophonePermission:
    """Grants access if a short input stream can be opened.

    Attributes:
        config: ASR configuration (sample rate of the probe stream)
    """

    config: ASRConfig = field(default_factory=lambda: get_config().asr)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def request(self) -> bool:
        self._logger.info("Requesting microphone access")
        try:
            import sounddevice as sd

            with sd.InputStream(samplerate=self.config.sample_rate, channels=1):
                pass
        except Exception as e:
            self._logger.warning(
                "Microphone access denied",
                extra={"error": str(e)},
            )
            return False

        self._logger.info("Microphone access granted")
        return True


@dataclass
class StaticMicrophonePermission:
    """Answers every request with the same preset result."""

    granted: bool = True
    requests: int = 0

    def request(self) -> bool:
        self.requests += 1
        return self.granted

"""Whisper speech recognizer.

Records one utterance from the default microphone with sounddevice and
transcribes it with Faster-Whisper on a background thread, reporting
back through the recognizer callbacks. Recording is fixed-length
(``record_seconds``); Whisper's VAD filter trims the silence.

The model is loaded on first use and kept for the lifetime of the
adapter. If loading on the requested device fails, the fallback device
and compute type are used instead.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from ...config import ASRConfig, get_config
from ...domain.errors import RecognizerError
from ...ports.recognizer import ErrorCallback, ResultCallback


def whisper_language(language: str) -> Optional[str]:
    """Convert a BCP-47 tag ('en-US') to a Whisper language code ('en')."""
    code = language.split("-")[0].strip().lower()
    return code or None


@dataclass
class WhisperSpeechRecognizer:
    """Faster-Whisper recognizer implementing SpeechRecognizerPort.

    Attributes:
        config: ASR configuration
    """

    config: ASRConfig = field(default_factory=lambda: get_config().asr)

    _model: Optional[Any] = field(default=None, repr=False)
    _actual_device: str = field(default="", repr=False)
    _worker: Optional[threading.Thread] = field(default=None, repr=False)
    _stop_event: threading.Event = field(default_factory=threading.Event, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def is_available(self) -> bool:
        """Check that the audio stack, Whisper and an input device exist."""
        try:
            import faster_whisper  # noqa: F401
            import sounddevice as sd

            sd.query_devices(kind="input")
        except Exception as e:
            self._logger.info(
                "Speech recognition unavailable",
                extra={"error": str(e)},
            )
            return False
        return True

    def start(
        self,
        language: str,
        on_result: ResultCallback,
        on_error: ErrorCallback,
    ) -> None:
        """Start recording and transcribing one utterance.

        Raises:
            RecognizerError: If a previous utterance is still being processed.
        """
        with self._lock:
            if self._worker is not None and self._worker.is_alive():
                raise RecognizerError("Recognizer is already listening", code="busy")

            stop_event = threading.Event()
            self._stop_event = stop_event
            self._worker = threading.Thread(
                target=self._listen,
                args=(language, on_result, on_error, stop_event),
                name="whisper-recognizer",
                daemon=True,
            )
            self._worker.start()

        self._logger.info("Listening", extra={"language": language})

    def stop(self) -> None:
        """Stop listening; a pending transcription is discarded."""
        self._stop_event.set()
        try:
            import sounddevice as sd

            sd.stop()
        except Exception as e:
            self._logger.debug("Recorder stop failed", extra={"error": str(e)})

    def _listen(
        self,
        language: str,
        on_result: ResultCallback,
        on_error: ErrorCallback,
        stop_event: threading.Event,
    ) -> None:
        try:
            audio = self._record()
            if stop_event.is_set():
                return
            text, confidence = self._transcribe(audio, language)
        except Exception as e:
            self._logger.error("Recognition failed", extra={"error": str(e)})
            if not stop_event.is_set():
                on_error("recognizer-failure")
            return

        if stop_event.is_set():
            return
        if not text:
            on_error("no-speech")
            return
        on_result(text, confidence)

    def _record(self) -> Any:
        import sounddevice as sd

        frames = int(self.config.record_seconds * self.config.sample_rate)
        audio = sd.rec(
            frames,
            samplerate=self.config.sample_rate,
            channels=1,
            dtype="float32",
        )
        sd.wait()
        return audio

    def _transcribe(self, audio: Any, language: str) -> tuple[str, float]:
        model = self._load_model()
        start_time = time.time()

        segments_iter, info = model.transcribe(
            audio.flatten(),
            language=whisper_language(language),
            beam_size=self.config.beam_size,
            vad_filter=True,
        )

        parts = []
        logprobs = []
        for segment in segments_iter:
            segment_text = segment.text.strip()
            if segment_text:
                parts.append(segment_text)
                logprobs.append(segment.avg_logprob)

        text = " ".join(parts)
        confidence = math.exp(sum(logprobs) / len(logprobs)) if logprobs else 0.0

        self._logger.info(
            "Transcription complete",
            extra={
                "elapsed_seconds": round(time.time() - start_time, 2),
                "segments": len(parts),
                "language": getattr(info, "language", None),
            },
        )
        return text, min(max(confidence, 0.0), 1.0)

    def _load_model(self) -> Any:
        """Load the Whisper model, falling back to CPU if needed."""
        if self._model is not None:
            return self._model

        from faster_whisper import WhisperModel

        device = self.config.device
        if device == "auto":
            device = self._detect_device()

        self._logger.info(
            "Loading Whisper model",
            extra={
                "model": self.config.default_model,
                "device": device,
                "compute_type": self.config.compute_type,
            },
        )

        try:
            model = WhisperModel(
                self.config.default_model,
                device=device,
                compute_type=self.config.compute_type,
            )
            self._actual_device = device
        except Exception as e:
            self._logger.warning(
                "Failed to load on requested device, falling back",
                extra={
                    "error": str(e),
                    "requested_device": device,
                    "fallback_device": self.config.fallback_device,
                },
            )
            model = WhisperModel(
                self.config.default_model,
                device=self.config.fallback_device,
                compute_type=self.config.fallback_compute_type,
            )
            self._actual_device = self.config.fallback_device

        self._model = model
        return model

    def _detect_device(self) -> str:
        """Detect available device (cuda or cpu)."""
        try:
            import ctranslate2

            if ctranslate2.get_cuda_device_count() > 0:
                return "cuda"
        except (ImportError, RuntimeError):
            pass
        return "cpu"

    @property
    def device(self) -> str:
        """Return the device the model is running on."""
        return self._actual_device or "unknown"

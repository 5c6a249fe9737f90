"""Offline text-to-speech with pyttsx3.

pyttsx3's ``runAndWait`` blocks and its engines are not thread-safe, so
playback happens on one daemon worker thread fed by a queue.
``speak`` only enqueues and returns. ``stop`` is the one engine call
made from the caller's thread, since it has to interrupt a running
``runAndWait``.
"""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Any, Optional

from ...config import SpeechConfig, get_config

_SHUTDOWN = object()


@dataclass
class Pyttsx3SpeechOutput:
    """SpeechOutputPort backed by a pyttsx3 engine.

    pyttsx3 has no pitch control; ``pitch`` is accepted and ignored.

    Attributes:
        config: Speech configuration (rate, volume)
    """

    config: SpeechConfig = field(default_factory=lambda: get_config().speech)

    _queue: "queue.Queue[Any]" = field(default_factory=queue.Queue, repr=False)
    _worker: Optional[threading.Thread] = field(default=None, repr=False)
    _engine: Optional[Any] = field(default=None, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def speak(self, text: str, rate: float = 1.0, pitch: float = 1.0) -> None:
        if not text.strip():
            return
        self._ensure_worker()
        self._queue.put((text, rate))

    def stop(self) -> None:
        """Drop queued utterances and interrupt the current one."""
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break
        engine = self._engine
        if engine is not None:
            try:
                engine.stop()
            except Exception as e:
                self._logger.debug("Engine stop failed", extra={"error": str(e)})

    def shutdown(self) -> None:
        """Stop the worker thread after the queue drains."""
        if self._worker is not None and self._worker.is_alive():
            self._queue.put(_SHUTDOWN)
            self._worker.join(timeout=5)

    def _ensure_worker(self) -> None:
        with self._lock:
            if self._worker is None or not self._worker.is_alive():
                self._worker = threading.Thread(
                    target=self._run,
                    name="pyttsx3-speech",
                    daemon=True,
                )
                self._worker.start()

    def _run(self) -> None:
        try:
            import pyttsx3

            self._engine = pyttsx3.init()
            self._engine.setProperty("volume", self.config.volume)
        except Exception as e:
            self._logger.error("TTS engine init failed", extra={"error": str(e)})
            return

        while True:
            item = self._queue.get()
            if item is _SHUTDOWN:
                break
            text, rate = item
            try:
                self._engine.setProperty(
                    "rate", int(self.config.words_per_minute * rate)
                )
                self._engine.say(text)
                self._engine.runAndWait()
            except Exception as e:
                self._logger.error(
                    "TTS playback error",
                    extra={"error": str(e), "text": text},
                )

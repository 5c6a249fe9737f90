"""Voice input channel - One recognized utterance per ``open``.

State machine::

    IDLE -> AWAITING_PERMISSION -+-> LISTENING -------------> DELIVERED | CANCELLED
                                +-> MANUAL_FALLBACK_ARMED -> DELIVERED | TIMED_OUT

``close`` returns to IDLE from any state.

When microphone access is denied, the platform has no recognizer, or
the recognizer refuses to start, the channel arms a manual fallback: the
continuation stays pending until ``simulate`` is called or the fallback
timeout (15 seconds by default) expires.

Every ``open`` and ``close`` bumps a session token. Callbacks that arrive
with an outdated token (a permission request that finished after
``close``, a recognizer result after a timeout) are ignored, which is
what guarantees the continuation runs at most once per ``open``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from functools import lru_cache, partial
from typing import Callable, Optional

from ..config import VoiceConfig, get_config
from ..domain.errors import ChannelBusyError
from ..domain.models import ChannelState, RecognitionResult
from ..ports.recognizer import MicrophonePermissionPort, SpeechRecognizerPort
from ..ports.scheduler import SchedulerPort, TimerHandle

ResultHandler = Callable[[RecognitionResult], None]
InterruptHandler = Callable[[ChannelState], None]


@dataclass
class PermissionCache:
    """Process-wide microphone permission flag.

    A granted permission is kept for the life of the process. A denied
    (or failed) request is retried on the next ``ensure`` call. One
    acquisition completes under the lock before its result is reported.
    """

    _granted: bool = field(default=False, repr=False)
    _attempts: int = field(default=0, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def granted(self) -> bool:
        return self._granted

    @property
    def attempts(self) -> int:
        return self._attempts

    def ensure(self, acquire: Callable[[], bool]) -> bool:
        """Return True if permission is held, acquiring it if needed.

        Args:
            acquire: Performs one permission request.
        """
        if self._granted:
            return True

        with self._lock:
            if self._granted:
                return True
            self._attempts += 1
            try:
                granted = bool(acquire())
            except Exception as e:
                self._logger.warning(
                    "Microphone permission request failed",
                    extra={"error": str(e)},
                )
                granted = False
            self._granted = granted
            return granted


@lru_cache(maxsize=1)
def get_permission_cache() -> PermissionCache:
    """Get the process-wide permission cache."""
    return PermissionCache()


def reset_permission_cache() -> None:
    """Forget the cached permission. Call this in tests."""
    get_permission_cache.cache_clear()


@dataclass
class VoiceInputChannel:
    """Delivers one RecognitionResult to a caller-supplied continuation.

    Attributes:
        recognizer: Native speech recognizer
        permission: Microphone permission requester
        scheduler: Timer source for the manual-fallback timeout
        config: Language, timeout and simulated confidence
        permission_cache: Shared permission flag
    """

    recognizer: SpeechRecognizerPort
    permission: MicrophonePermissionPort
    scheduler: SchedulerPort
    config: VoiceConfig = field(default_factory=lambda: get_config().voice)
    permission_cache: PermissionCache = field(default_factory=get_permission_cache)

    _state: ChannelState = field(default=ChannelState.IDLE, repr=False)
    _pending: Optional[ResultHandler] = field(default=None, repr=False)
    _on_interrupted: Optional[InterruptHandler] = field(default=None, repr=False)
    _token: int = field(default=0, repr=False)
    _timer: Optional[TimerHandle] = field(default=None, repr=False)
    _deadline: Optional[float] = field(default=None, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> ChannelState:
        return self._state

    @property
    def deadline(self) -> Optional[float]:
        """Scheduler time at which the manual fallback expires, if armed."""
        return self._deadline

    def is_active(self) -> bool:
        return self._state.is_active

    def open(
        self,
        on_result: ResultHandler,
        on_interrupted: Optional[InterruptHandler] = None,
    ) -> None:
        """Start waiting for one utterance.

        The caller must ``close`` an active channel before opening it
        again; the previous continuation is never silently replaced.

        Args:
            on_result: Continuation invoked at most once with the result.
            on_interrupted: Called with CANCELLED or TIMED_OUT when the
                attempt ends without a result (not called on ``close``).

        Raises:
            ChannelBusyError: If the channel is already active.
        """
        with self._lock:
            if self._state.is_active:
                raise ChannelBusyError(
                    "Voice channel is already open; close it before reopening",
                    state=self._state.name,
                )
            self._token += 1
            token = self._token
            self._pending = on_result
            self._on_interrupted = on_interrupted
            self._deadline = None
            self._state = ChannelState.AWAITING_PERMISSION

        self._logger.info("Voice channel opening", extra={"token": token})

        granted = self.permission_cache.ensure(self.permission.request)
        available = granted and self._recognizer_available()

        with self._lock:
            if token != self._token or self._state is not ChannelState.AWAITING_PERMISSION:
                self._logger.info(
                    "Channel changed during permission request, result ignored",
                    extra={"token": token},
                )
                return
            if not granted:
                self._arm_manual_fallback(token, reason="permission-denied")
                return
            if not available:
                self._arm_manual_fallback(token, reason="recognizer-unavailable")
                return
            self._state = ChannelState.LISTENING

        try:
            self.recognizer.start(
                self.config.language,
                partial(self._on_recognized, token),
                partial(self._on_recognition_error, token),
            )
        except Exception as e:
            self._logger.warning(
                "Failed to start speech recognition",
                extra={"error": str(e)},
            )
            with self._lock:
                if token == self._token and self._state is ChannelState.LISTENING:
                    self._arm_manual_fallback(token, reason="recognizer-start-failed")
            return

        self._logger.info(
            "Listening for route number",
            extra={"token": token, "language": self.config.language},
        )

    def close(self) -> None:
        """Stop listening and drop the pending continuation. Idempotent."""
        with self._lock:
            previous = self._state
            self._token += 1
            self._pending = None
            self._on_interrupted = None
            self._cancel_timer()
            self._deadline = None
            self._state = ChannelState.IDLE

        if previous is ChannelState.LISTENING:
            self._stop_recognizer()
        if previous is not ChannelState.IDLE:
            self._logger.info(
                "Voice channel closed",
                extra={"previous_state": previous.name},
            )

    def simulate(self, text: str) -> bool:
        """Inject text as if it had been recognized.

        Returns:
            True if a pending continuation received it; False (no-op)
            when nothing is pending, e.g. after a timeout.
        """
        with self._lock:
            token = self._token

        result = RecognitionResult(
            text=text,
            confidence=self.config.simulated_confidence,
            simulated=True,
        )
        self._logger.info("Simulated voice input", extra={"text": text})

        delivered = self._deliver(token, result)
        if not delivered:
            self._logger.info(
                "No pending voice request, simulated input ignored",
                extra={"state": self._state.name},
            )
        return delivered

    def _recognizer_available(self) -> bool:
        try:
            return bool(self.recognizer.is_available())
        except Exception as e:
            self._logger.warning(
                "Recognizer availability check failed",
                extra={"error": str(e)},
            )
            return False

    def _arm_manual_fallback(self, token: int, reason: str) -> None:
        # Caller holds the lock.
        timeout = self.config.manual_timeout_seconds
        self._state = ChannelState.MANUAL_FALLBACK_ARMED
        self._deadline = self.scheduler.now() + timeout
        self._timer = self.scheduler.call_later(
            timeout, partial(self._on_manual_timeout, token)
        )
        self._logger.info(
            "Manual voice input armed",
            extra={"reason": reason, "timeout_seconds": timeout},
        )

    def _on_recognized(self, token: int, text: str, confidence: float) -> None:
        result = RecognitionResult(
            text=text,
            confidence=min(max(float(confidence), 0.0), 1.0),
        )
        self._logger.info(
            "Speech recognized",
            extra={"text": text, "confidence": result.confidence},
        )
        if not self._deliver(token, result):
            self._logger.debug("Late recognition result ignored", extra={"token": token})

    def _on_recognition_error(self, token: int, code: str) -> None:
        with self._lock:
            if token != self._token or self._state is not ChannelState.LISTENING:
                return
            interrupted = self._on_interrupted
            self._pending = None
            self._on_interrupted = None
            self._state = ChannelState.CANCELLED

        self._stop_recognizer()
        self._logger.warning("Speech recognition error", extra={"code": code})
        if interrupted is not None:
            interrupted(ChannelState.CANCELLED)

    def _on_manual_timeout(self, token: int) -> None:
        with self._lock:
            if token != self._token or self._state is not ChannelState.MANUAL_FALLBACK_ARMED:
                return
            interrupted = self._on_interrupted
            self._pending = None
            self._on_interrupted = None
            self._timer = None
            self._deadline = None
            self._state = ChannelState.TIMED_OUT

        self._logger.info(
            "Manual voice input timed out",
            extra={"timeout_seconds": self.config.manual_timeout_seconds},
        )
        if interrupted is not None:
            interrupted(ChannelState.TIMED_OUT)

    def _deliver(self, token: int, result: RecognitionResult) -> bool:
        with self._lock:
            if token != self._token or self._pending is None:
                return False
            callback = self._pending
            was_listening = self._state is ChannelState.LISTENING
            self._pending = None
            self._on_interrupted = None
            self._cancel_timer()
            self._deadline = None
            self._state = ChannelState.DELIVERED

        if was_listening:
            self._stop_recognizer()
        callback(result)
        return True

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _stop_recognizer(self) -> None:
        try:
            self.recognizer.stop()
        except Exception as e:
            self._logger.debug("Recognizer stop failed", extra={"error": str(e)})

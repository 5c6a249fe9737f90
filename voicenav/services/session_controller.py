"""Session controller - One voice-command cycle, end to end.

This service orchestrates a voice session:
1. Refresh the nearby stops and routes
2. Announce them and open the voice channel
3. Extract a route identifier from the utterance and match it
4. Hand a confirmed route to the arrival announcer, or re-prompt

There is no automatic retry loop. After a no-match the session waits in
AWAITING_RETRY until the caller calls ``retry`` or ``cancel``.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Iterator, Optional

from ..domain.errors import SessionStateError
from ..domain.models import (
    CandidateNotInSet,
    ChannelState,
    Confirmed,
    LocationFix,
    MatchOutcome,
    NoCandidateExtracted,
    ProximitySet,
    RecognitionResult,
    VoiceSessionState,
)
from ..nlp.command_extractor import CommandExtractor
from ..nlp.route_suggestions import suggest_routes
from ..ports.speech import SpeechOutputPort
from .arrival_announcer import ArrivalAnnouncer
from .proximity_resolver import ProximityResolver
from .route_matcher import RouteMatcher
from .voice_channel import VoiceInputChannel

_CHANNEL_TO_SESSION = {
    ChannelState.AWAITING_PERMISSION: VoiceSessionState.AWAITING_PERMISSION,
    ChannelState.LISTENING: VoiceSessionState.LISTENING,
    ChannelState.MANUAL_FALLBACK_ARMED: VoiceSessionState.MANUAL_FALLBACK_ARMED,
}

_RETRYABLE = (
    VoiceSessionState.AWAITING_RETRY,
    VoiceSessionState.CANCELLED,
    VoiceSessionState.TIMED_OUT,
)


@dataclass
class VoiceSession:
    """State of one voice-command session.

    Attributes:
        session_id: Sequential identifier
        proximity: Active set the utterances are matched against
        state: Current session state
        deadline: Scheduler time at which manual input expires, if armed
        last_outcome: Outcome of the most recent utterance
        attempts: Number of utterances processed
    """

    session_id: int
    proximity: ProximitySet
    state: VoiceSessionState = VoiceSessionState.IDLE
    deadline: Optional[float] = None
    last_outcome: Optional[MatchOutcome] = None
    attempts: int = 0


@dataclass
class SessionController:
    """Drives voice sessions on top of an injected VoiceInputChannel.

    Attributes:
        channel: The voice channel owned by this controller
        proximity_resolver: Computes the active route set
        extractor: Turns utterances into route candidates
        matcher: Validates candidates against the active set
        announcer: Speaks arrivals for a confirmed route
        speech: Speech output for prompts and re-prompts
        on_outcome: Optional listener notified of every MatchOutcome
    """

    channel: VoiceInputChannel
    proximity_resolver: ProximityResolver
    extractor: CommandExtractor
    matcher: RouteMatcher
    announcer: ArrivalAnnouncer
    speech: SpeechOutputPort
    on_outcome: Optional[Callable[[MatchOutcome], None]] = None

    _session: Optional[VoiceSession] = field(default=None, repr=False)
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1), repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def session(self) -> Optional[VoiceSession]:
        return self._session

    def start(self, announce: bool = True) -> VoiceSession:
        """Start a session at the location reported by the location provider.

        Raises:
            SessionStateError: If a session is already in progress.
        """
        self._ensure_no_session()
        return self._begin(self.proximity_resolver.resolve_current(), announce)

    def start_at(self, fix: Optional[LocationFix], announce: bool = True) -> VoiceSession:
        """Start a session for an explicit fix (None = location unavailable).

        Raises:
            SessionStateError: If a session is already in progress.
        """
        self._ensure_no_session()
        return self._begin(self.proximity_resolver.resolve(fix), announce)

    def retry(self) -> VoiceSession:
        """Listen again within the current session and active set.

        Raises:
            SessionStateError: If there is no session awaiting a retry.
        """
        with self._lock:
            session = self._session
            if session is None or session.state not in _RETRYABLE:
                raise SessionStateError(
                    "No voice session to retry",
                    state=session.state.name if session else "NONE",
                )

        self.channel.close()
        self.speech.speak("Listening for route number...")
        self._open_channel(session)
        return session

    def cancel(self) -> None:
        """Close the channel and discard the session. Safe at any time."""
        with self._lock:
            session = self._session
            self._session = None

        self.channel.close()
        if session is None:
            return
        if not session.state.is_terminal:
            session.state = VoiceSessionState.CANCELLED
            session.deadline = None
            self.speech.stop()
            self.speech.speak("Voice selection closed.")
        self._logger.info(
            "Voice session discarded",
            extra={"session_id": session.session_id, "state": session.state.name},
        )

    def reprompt_text(self, outcome: MatchOutcome, proximity: ProximitySet) -> str:
        """Build the spoken re-prompt for a no-match outcome."""
        if isinstance(outcome, CandidateNotInSet):
            heard = outcome.candidate_id
        else:
            heard = outcome.raw_text.strip()

        text = f'Did not recognize "{heard}" as a nearby route.'
        if isinstance(outcome, CandidateNotInSet):
            suggestions = suggest_routes(proximity.routes, outcome.candidate_id, limit=2)
            if suggestions:
                names = " or ".join(f"route {route.identifier}" for route in suggestions)
                text += f" Did you mean {names}?"
        return text + " Try again or tap to select."

    def _ensure_no_session(self) -> None:
        with self._lock:
            current = self._session
            if current is not None and not current.state.is_terminal:
                raise SessionStateError(
                    "A voice session is already in progress",
                    state=current.state.name,
                )

    def _begin(self, proximity: ProximitySet, announce: bool) -> VoiceSession:
        session = VoiceSession(session_id=next(self._ids), proximity=proximity)
        with self._lock:
            self._session = session

        self._logger.info(
            "Voice session started",
            extra={
                "session_id": session.session_id,
                "location": proximity.location_label,
                "routes": list(proximity.route_ids),
                "fallback": proximity.is_fallback,
            },
        )

        if proximity.is_empty:
            session.state = VoiceSessionState.CANCELLED
            self.speech.speak(
                "No nearby routes found. Please check your location or try again later."
            )
            return session

        if announce:
            routes_list = ", ".join(proximity.route_ids)
            self.speech.speak(
                f"From {proximity.location_label}, nearby routes: {routes_list}. "
                "Say a route number or tap to select.",
                rate=1.0,
                pitch=1.0,
            )

        self._open_channel(session)
        return session

    def _open_channel(self, session: VoiceSession) -> None:
        session.state = VoiceSessionState.AWAITING_PERMISSION
        session.deadline = None
        self.channel.open(
            partial(self._handle_result, session),
            on_interrupted=partial(self._handle_interrupted, session),
        )

        with self._lock:
            # A result may already have been handled synchronously.
            if self._session is session and session.state is VoiceSessionState.AWAITING_PERMISSION:
                session.state = _CHANNEL_TO_SESSION.get(
                    self.channel.state, session.state
                )
                session.deadline = self.channel.deadline

    def _handle_result(self, session: VoiceSession, result: RecognitionResult) -> None:
        with self._lock:
            if self._session is not session:
                self._logger.debug("Result for a discarded session ignored")
                return
            candidate = self.extractor.extract(result.text)
            outcome = self.matcher.match(candidate, result.text, session.proximity)
            session.last_outcome = outcome
            session.attempts += 1
            session.deadline = None
            if isinstance(outcome, Confirmed):
                session.state = VoiceSessionState.MATCHED
            else:
                session.state = VoiceSessionState.AWAITING_RETRY

        self._logger.info(
            "Utterance processed",
            extra={
                "session_id": session.session_id,
                "text": result.text,
                "confidence": result.confidence,
                "candidate": candidate,
                "outcome": type(outcome).__name__,
            },
        )

        if isinstance(outcome, Confirmed):
            self.channel.close()
            self.speech.stop()
            self.announcer.announce(outcome.route)
        elif isinstance(outcome, (CandidateNotInSet, NoCandidateExtracted)):
            self.speech.speak(self.reprompt_text(outcome, session.proximity))

        if self.on_outcome is not None:
            self.on_outcome(outcome)

    def _handle_interrupted(self, session: VoiceSession, state: ChannelState) -> None:
        with self._lock:
            if self._session is not session:
                return
            session.deadline = None
            if state is ChannelState.TIMED_OUT:
                session.state = VoiceSessionState.TIMED_OUT
            else:
                session.state = VoiceSessionState.CANCELLED

        self._logger.info(
            "Voice session interrupted",
            extra={"session_id": session.session_id, "state": session.state.name},
        )
        if session.state is VoiceSessionState.TIMED_OUT:
            self.speech.speak("No route number heard. Double tap to try again.")
        else:
            self.speech.speak(
                "Voice recognition stopped. Try again or tap to select."
            )

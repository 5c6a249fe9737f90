"""Shared fixtures: fresh config, fake voice ports and a wired controller."""

import random
from dataclasses import dataclass, field
from typing import List, Optional

import pytest

from voicenav.adapters.arrivals import SimulatedArrivalSource
from voicenav.adapters.catalog import StaticTransitCatalog
from voicenav.adapters.recognizer import StaticMicrophonePermission
from voicenav.adapters.scheduler import ManualScheduler
from voicenav.adapters.speech import LoggingSpeechOutput
from voicenav.config import ProximityConfig, VoiceConfig, reset_config
from voicenav.nlp import CommandExtractor
from voicenav.ports import ErrorCallback, ResultCallback
from voicenav.services import (
    ArrivalAnnouncer,
    PermissionCache,
    ProximityResolver,
    RouteMatcher,
    SessionController,
    VoiceInputChannel,
    reset_permission_cache,
)


@dataclass
class FakeRecognizer:
    """Recognizer whose callbacks are fired by the test."""

    available: bool = True
    fail_on_start: bool = False
    starts: int = 0
    stops: int = 0
    languages: List[str] = field(default_factory=list)
    on_result: Optional[ResultCallback] = None
    on_error: Optional[ErrorCallback] = None

    def is_available(self) -> bool:
        return self.available

    def start(self, language, on_result, on_error) -> None:
        self.starts += 1
        if self.fail_on_start:
            raise RuntimeError("audio device busy")
        self.languages.append(language)
        self.on_result = on_result
        self.on_error = on_error

    def stop(self) -> None:
        self.stops += 1

    def hear(self, text: str, confidence: float = 0.8) -> None:
        assert self.on_result is not None, "recognizer was never started"
        self.on_result(text, confidence)

    def fail(self, code: str = "no-speech") -> None:
        assert self.on_error is not None, "recognizer was never started"
        self.on_error(code)


@pytest.fixture(autouse=True)
def fresh_state():
    reset_config()
    reset_permission_cache()
    yield
    reset_config()
    reset_permission_cache()


@pytest.fixture
def catalog():
    return StaticTransitCatalog()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def recognizer():
    return FakeRecognizer()


@pytest.fixture
def permission():
    return StaticMicrophonePermission(granted=True)


@pytest.fixture
def speech():
    return LoggingSpeechOutput()


@pytest.fixture
def voice_config():
    return VoiceConfig(language="en-US", manual_timeout_seconds=15.0, simulated_confidence=0.9)


@pytest.fixture
def channel(recognizer, permission, scheduler, voice_config):
    return VoiceInputChannel(
        recognizer=recognizer,
        permission=permission,
        scheduler=scheduler,
        config=voice_config,
        permission_cache=PermissionCache(),
    )


@pytest.fixture
def resolver(catalog):
    return ProximityResolver(catalog, config=ProximityConfig())


@pytest.fixture
def controller(channel, resolver, catalog, speech):
    arrivals = SimulatedArrivalSource(catalog, rng=random.Random(7))
    return SessionController(
        channel=channel,
        proximity_resolver=resolver,
        extractor=CommandExtractor(),
        matcher=RouteMatcher(catalog),
        announcer=ArrivalAnnouncer(arrivals, speech),
        speech=speech,
    )

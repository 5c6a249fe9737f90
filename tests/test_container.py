"""Tests for the default dependency wiring."""

import pytest

from voicenav.adapters.catalog import CSVTransitCatalog, StaticTransitCatalog
from voicenav.adapters.location import NominatimLocationProvider
from voicenav.adapters.recognizer import UnavailableSpeechRecognizer, WhisperSpeechRecognizer
from voicenav.adapters.speech import LoggingSpeechOutput, Pyttsx3SpeechOutput
from voicenav.config import (
    AppConfig,
    CatalogConfig,
    LocationConfig,
    SpeechConfig,
    VoiceConfig,
)
from voicenav.container import Container, get_container, reset_container
from voicenav.domain import ConfigurationError, VoiceSessionState
from voicenav.ports import (
    LocationProviderPort,
    SpeechOutputPort,
    SpeechRecognizerPort,
    TransitCatalogPort,
)
from voicenav.services import SessionController, VoiceInputChannel


def _headless_config(**overrides) -> AppConfig:
    settings = dict(
        speech=SpeechConfig(engine="log"),
        voice=VoiceConfig(recognizer="none"),
        location=LocationConfig(latitude=3.1347, longitude=101.6841),
    )
    settings.update(overrides)
    return AppConfig(**settings)


def test_headless_session_end_to_end():
    container = Container.create_default(_headless_config())
    controller = container.resolve(SessionController)
    speech = container.resolve(SpeechOutputPort)

    session = controller.start()
    assert session.proximity.location_label == "KL Sentral"
    assert session.state is VoiceSessionState.MANUAL_FALLBACK_ARMED

    assert container.resolve(VoiceInputChannel).simulate("route 581")
    assert session.state is VoiceSessionState.MATCHED
    assert "Getting live times for route 581..." in speech.history
    controller.cancel()


def test_singletons_are_shared():
    container = Container.create_default(_headless_config())

    controller = container.resolve(SessionController)

    assert controller is container.resolve(SessionController)
    assert controller.speech is container.resolve(SpeechOutputPort)
    assert controller.channel is container.resolve(VoiceInputChannel)


def test_adapters_follow_config():
    headless = Container.create_default(_headless_config())
    assert isinstance(headless.resolve(TransitCatalogPort), StaticTransitCatalog)
    assert isinstance(headless.resolve(SpeechOutputPort), LoggingSpeechOutput)
    assert isinstance(headless.resolve(SpeechRecognizerPort), UnavailableSpeechRecognizer)

    full = Container.create_default(
        AppConfig(
            catalog=CatalogConfig(source="csv"),
            location=LocationConfig(provider="nominatim", place="KL Sentral"),
        )
    )
    assert isinstance(full.resolve(TransitCatalogPort), CSVTransitCatalog)
    assert isinstance(full.resolve(LocationProviderPort), NominatimLocationProvider)
    assert isinstance(full.resolve(SpeechOutputPort), Pyttsx3SpeechOutput)
    assert isinstance(full.resolve(SpeechRecognizerPort), WhisperSpeechRecognizer)


def test_half_specified_location_is_rejected():
    container = Container.create_default(
        _headless_config(location=LocationConfig(latitude=3.1347))
    )

    with pytest.raises(ConfigurationError):
        container.resolve(LocationProviderPort)


def test_no_location_configured_means_no_fix():
    container = Container.create_default(_headless_config(location=LocationConfig()))

    assert container.resolve(LocationProviderPort).get_fix() is None


def test_register_override_and_unknown_type():
    container = Container()
    speech = LoggingSpeechOutput()
    container.register(SpeechOutputPort, lambda: speech)

    assert container.resolve(SpeechOutputPort) is speech
    assert container.is_registered(SpeechOutputPort)
    with pytest.raises(KeyError):
        container.resolve(TransitCatalogPort)


def test_default_container_is_reset(monkeypatch):
    monkeypatch.setenv("VOICENAV_SPEECH_ENGINE", "log")
    monkeypatch.setenv("VOICENAV_VOICE_RECOGNIZER", "none")
    reset_container()
    try:
        first = get_container()
        assert get_container() is first

        reset_container()
        assert get_container() is not first
    finally:
        reset_container()


def test_override_replaces_default_binding():
    container = Container.create_default(_headless_config())
    speech = LoggingSpeechOutput()
    container.override(SpeechOutputPort, speech)

    assert container.resolve(SessionController).speech is speech


def test_reset_instances_rebuilds_and_unshared_bindings():
    container = Container.create_default(_headless_config())
    first = container.resolve(TransitCatalogPort)

    container.reset_instances()
    assert container.resolve(TransitCatalogPort) is not first

    container.register(SpeechOutputPort, LoggingSpeechOutput, singleton=False)
    assert container.resolve(SpeechOutputPort) is not container.resolve(SpeechOutputPort)

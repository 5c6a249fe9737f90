"""Tests for the Faster-Whisper recognizer with mocked audio and model."""

import math
import sys
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from voicenav.adapters.recognizer import WhisperSpeechRecognizer
from voicenav.adapters.recognizer.whisper_adapter import whisper_language
from voicenav.config import ASRConfig


@pytest.fixture
def sounddevice(monkeypatch):
    sd = MagicMock()
    sd.rec.return_value = MagicMock(name="audio")
    monkeypatch.setitem(sys.modules, "sounddevice", sd)
    return sd


@pytest.fixture
def whisper_model(monkeypatch):
    model = MagicMock()
    module = MagicMock()
    module.WhisperModel.return_value = model
    monkeypatch.setitem(sys.modules, "faster_whisper", module)
    return model


def _segments(*pairs):
    return iter([SimpleNamespace(text=text, avg_logprob=logprob) for text, logprob in pairs])


def _listen_once(recognizer):
    results, errors = [], []
    recognizer.start("en-US", lambda text, conf: results.append((text, conf)), errors.append)
    recognizer._worker.join(timeout=5)
    return results, errors


@pytest.fixture
def recognizer():
    return WhisperSpeechRecognizer(ASRConfig(device="cpu", compute_type="int8"))


def test_whisper_language():
    assert whisper_language("en-US") == "en"
    assert whisper_language("ms") == "ms"
    assert whisper_language("") is None


def test_available_when_input_device_exists(recognizer, sounddevice, whisper_model):
    assert recognizer.is_available()
    sounddevice.query_devices.assert_called_once_with(kind="input")


def test_unavailable_without_input_device(recognizer, sounddevice, whisper_model):
    sounddevice.query_devices.side_effect = ValueError("No input device matching")

    assert not recognizer.is_available()


def test_transcription_is_reported(recognizer, sounddevice, whisper_model):
    whisper_model.transcribe.return_value = (
        _segments((" route ", -0.2), ("581 ", -0.4)),
        SimpleNamespace(language="en"),
    )

    results, errors = _listen_once(recognizer)

    assert errors == []
    assert results[0][0] == "route 581"
    assert results[0][1] == pytest.approx(math.exp(-0.3))
    _, kwargs = whisper_model.transcribe.call_args
    assert kwargs["language"] == "en"
    assert kwargs["vad_filter"] is True
    assert recognizer.device == "cpu"


def test_silence_reports_no_speech(recognizer, sounddevice, whisper_model):
    whisper_model.transcribe.return_value = (_segments(), SimpleNamespace(language="en"))

    results, errors = _listen_once(recognizer)

    assert results == []
    assert errors == ["no-speech"]


def test_failure_reports_recognizer_failure(recognizer, sounddevice, whisper_model):
    whisper_model.transcribe.side_effect = RuntimeError("CUDA out of memory")

    results, errors = _listen_once(recognizer)

    assert results == []
    assert errors == ["recognizer-failure"]


def test_model_falls_back_to_cpu(monkeypatch, sounddevice):
    module = MagicMock()
    fallback_model = MagicMock()
    module.WhisperModel.side_effect = [RuntimeError("no CUDA"), fallback_model]
    monkeypatch.setitem(sys.modules, "faster_whisper", module)
    recognizer = WhisperSpeechRecognizer(ASRConfig(device="cuda"))

    assert recognizer._load_model() is fallback_model
    assert recognizer.device == "cpu"
    _, kwargs = module.WhisperModel.call_args
    assert kwargs == {"device": "cpu", "compute_type": "int8"}


def test_stop_stops_recording(recognizer, sounddevice):
    recognizer.stop()

    sounddevice.stop.assert_called_once()

"""Recognizer adapters - Implementations of the voice input ports.

Available implementations:
- WhisperSpeechRecognizer: Microphone capture + Faster-Whisper transcription
- UnavailableSpeechRecognizer: Platform without speech recognition
- SoundDeviceMicrophonePermission: Probes the default input device
- StaticMicrophonePermission: Fixed answer, for kiosks and tests
"""

from .permission import SoundDeviceMicrophonePermission, StaticMicrophonePermission
from .unavailable import UnavailableSpeechRecognizer
from .whisper_adapter import WhisperSpeechRecognizer

__all__ = [
    "WhisperSpeechRecognizer",
    "UnavailableSpeechRecognizer",
    "SoundDeviceMicrophonePermission",
    "StaticMicrophonePermission",
]

"""Speech adapters - Implementations of SpeechOutputPort.

Available implementations:
- Pyttsx3SpeechOutput: Offline text-to-speech through pyttsx3
- LoggingSpeechOutput: Records and logs utterances (headless, testing)
"""

from .logging_speech import LoggingSpeechOutput
from .pyttsx3_adapter import Pyttsx3SpeechOutput

__all__ = ["Pyttsx3SpeechOutput", "LoggingSpeechOutput"]

"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- Transit reference data (in-memory, CSV)
- Location (preset fix, Nominatim geocoding)
- Speech recognition (Faster-Whisper, microphone permission)
- Speech output (pyttsx3, logging)
- Arrival predictions (simulated)
- Timers (threading, manual)
"""

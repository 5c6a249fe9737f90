"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
catalog source, proximity radius and caps, voice-channel timeouts,
speech engines and logging.

Configuration can be overridden via environment variables:
- VOICENAV_CATALOG_SOURCE=csv
- VOICENAV_PROXIMITY_RADIUS_METERS=1500
- VOICENAV_VOICE_MANUAL_TIMEOUT_SECONDS=20
- VOICENAV_ASR_DEVICE=cpu
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogConfig(BaseSettings):
    """Transit catalog configuration.

    Environment variables prefixed with VOICENAV_CATALOG_.
    """

    model_config = SettingsConfigDict(env_prefix="VOICENAV_CATALOG_")

    source: Literal["static", "csv"] = "static"
    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    routes_file: str = "routes.csv"
    stops_file: str = "stops.csv"

    @property
    def routes_path(self) -> Path:
        """Full path to routes CSV file."""
        return self.data_dir / self.routes_file

    @property
    def stops_path(self) -> Path:
        """Full path to stops CSV file."""
        return self.data_dir / self.stops_file


class ProximityConfig(BaseSettings):
    """Nearby stop and route selection.

    Environment variables prefixed with VOICENAV_PROXIMITY_.
    """

    model_config = SettingsConfigDict(env_prefix="VOICENAV_PROXIMITY_")

    radius_meters: float = 1000.0
    max_stops: int = 5
    max_routes: int = 6
    fallback_stops: int = 3
    fallback_routes: int = 5
    fallback_label: str = "Unknown location"


class VoiceConfig(BaseSettings):
    """Voice input channel configuration.

    Environment variables prefixed with VOICENAV_VOICE_.
    """

    model_config = SettingsConfigDict(env_prefix="VOICENAV_VOICE_")

    language: str = "en-US"
    recognizer: Literal["whisper", "none"] = "whisper"
    manual_timeout_seconds: float = 15.0
    simulated_confidence: float = 0.9


class ASRConfig(BaseSettings):
    """ASR-related configuration for the Whisper recognizer.

    Environment variables prefixed with VOICENAV_ASR_.
    """

    model_config = SettingsConfigDict(env_prefix="VOICENAV_ASR_")

    default_model: str = "base.en"
    device: Literal["cuda", "cpu", "auto"] = "auto"
    compute_type: str = "float16"
    fallback_device: str = "cpu"
    fallback_compute_type: str = "int8"
    beam_size: int = 5
    record_seconds: float = 4.0
    sample_rate: int = 16000


class LocationConfig(BaseSettings):
    """Location provider configuration.

    Environment variables prefixed with VOICENAV_LOCATION_.
    """

    model_config = SettingsConfigDict(env_prefix="VOICENAV_LOCATION_")

    provider: Literal["static", "nominatim"] = "static"
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    place: Optional[str] = None
    user_agent: str = "voicenav"
    timeout_seconds: int = 10


class SpeechConfig(BaseSettings):
    """Speech output configuration.

    Environment variables prefixed with VOICENAV_SPEECH_.
    """

    model_config = SettingsConfigDict(env_prefix="VOICENAV_SPEECH_")

    engine: Literal["pyttsx3", "log"] = "pyttsx3"
    words_per_minute: int = 175
    volume: float = 1.0


class ArrivalConfig(BaseSettings):
    """Simulated arrival source configuration.

    Environment variables prefixed with VOICENAV_ARRIVALS_.
    """

    model_config = SettingsConfigDict(env_prefix="VOICENAV_ARRIVALS_")

    seed: Optional[int] = None


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with VOICENAV_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="VOICENAV_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.proximity.radius_meters)
        print(config.catalog.routes_path)

    Environment variables prefixed with VOICENAV_.
    """

    model_config = SettingsConfigDict(env_prefix="VOICENAV_")

    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    proximity: ProximityConfig = Field(default_factory=ProximityConfig)
    voice: VoiceConfig = Field(default_factory=VoiceConfig)
    asr: ASRConfig = Field(default_factory=ASRConfig)
    location: LocationConfig = Field(default_factory=LocationConfig)
    speech: SpeechConfig = Field(default_factory=SpeechConfig)
    arrivals: ArrivalConfig = Field(default_factory=ArrivalConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @property
    def project_root(self) -> Path:
        """Return the project root directory."""
        return Path(__file__).resolve().parent.parent


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()

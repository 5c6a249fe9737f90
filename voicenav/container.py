"""Dependency wiring for VoiceNav.

A small registry maps each port type (or concrete service class) to a
factory. Factories run lazily on first ``resolve``; bindings are shared
per container unless registered with ``singleton=False``.

``Container.create_default`` chooses adapters from ``AppConfig``:

- catalog: static KL data or CSV files
- location: preset coordinates, none, or a geocoded place
- voice: Faster-Whisper with microphone probing, or manual input only
- speech: pyttsx3 or a logging sink
"""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config
from .domain.errors import ConfigurationError
from .domain.models import LocationFix

Factory = Callable[[], Any]


@dataclass
class _Binding:
    factory: Factory
    shared: bool
    instance: Any = None
    built: bool = False


@dataclass
class Container:
    """Registry of factories keyed by port type.

    Usage:
        # Production
        controller = Container.create_default().resolve(SessionController)

        # Testing
        container = Container.create_default(config)
        container.override(SpeechOutputPort, LoggingSpeechOutput())

    Attributes:
        config: Configuration the default bindings were built from
    """

    config: AppConfig = field(default_factory=get_config)

    _bindings: Dict[type[Any], _Binding] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(self, port_type: type[Any], factory: Factory, singleton: bool = True) -> None:
        """Bind a factory to a port type, replacing any earlier binding.

        Args:
            port_type: Protocol or class used as the lookup key.
            factory: Zero-argument callable building the implementation.
            singleton: Share one instance per container (default) or
                build a new one on every ``resolve``.
        """
        with self._lock:
            self._bindings[port_type] = _Binding(factory=factory, shared=singleton)

    def override(self, port_type: type[Any], instance: Any) -> None:
        """Bind a ready-made instance, typically a fake in tests."""
        with self._lock:
            self._bindings[port_type] = _Binding(
                factory=lambda: instance, shared=True, instance=instance, built=True
            )

    def resolve(self, port_type: type[Any]) -> Any:
        """Return the implementation bound to ``port_type``.

        Raises:
            KeyError: If nothing is bound to the type.
        """
        with self._lock:
            binding = self._bindings.get(port_type)
            if binding is None:
                raise KeyError(f"No binding for {port_type!r}")
            if not binding.shared:
                return binding.factory()
            if not binding.built:
                binding.instance = binding.factory()
                binding.built = True
            return binding.instance

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._bindings

    def reset_instances(self) -> None:
        """Drop built instances; factories run again on next resolve."""
        with self._lock:
            for binding in self._bindings.values():
                binding.instance = None
                binding.built = False

    def clear(self) -> None:
        """Remove every binding."""
        with self._lock:
            self._bindings.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Bind every port and service according to ``config``.

        Adapters that need the voice extras import them lazily, so
        building the container (and running headless) does not require
        faster-whisper, sounddevice or pyttsx3.

        Resolving LocationProviderPort raises ConfigurationError when only
        one of the static coordinates is set or they are out of range.
        """
        from .adapters.arrivals import SimulatedArrivalSource
        from .adapters.catalog import CSVTransitCatalog, StaticTransitCatalog
        from .adapters.location import NominatimLocationProvider, StaticLocationProvider
        from .adapters.recognizer import (
            SoundDeviceMicrophonePermission,
            StaticMicrophonePermission,
            UnavailableSpeechRecognizer,
            WhisperSpeechRecognizer,
        )
        from .adapters.scheduler import ThreadingScheduler
        from .adapters.speech import LoggingSpeechOutput, Pyttsx3SpeechOutput
        from .nlp.command_extractor import CommandExtractor
        from .ports.arrivals import ArrivalSourcePort
        from .ports.catalog import TransitCatalogPort
        from .ports.location import LocationProviderPort
        from .ports.recognizer import MicrophonePermissionPort, SpeechRecognizerPort
        from .ports.scheduler import SchedulerPort
        from .ports.speech import SpeechOutputPort
        from .services import (
            ArrivalAnnouncer,
            ProximityResolver,
            RouteMatcher,
            SessionController,
            VoiceInputChannel,
        )

        config = config or get_config()
        container = cls(config=config)

        # Reference data
        def create_catalog() -> TransitCatalogPort:
            if config.catalog.source == "csv":
                return CSVTransitCatalog(config.catalog)
            return StaticTransitCatalog()

        container.register(TransitCatalogPort, create_catalog)

        # Location provider based on config
        def create_location_provider() -> LocationProviderPort:
            location = config.location
            if location.provider == "nominatim":
                return NominatimLocationProvider(location)
            if (location.latitude is None) != (location.longitude is None):
                raise ConfigurationError(
                    "Static location needs both latitude and longitude",
                    setting_name="VOICENAV_LOCATION_LATITUDE/LONGITUDE",
                    expected_type="float pair",
                )
            if location.latitude is None or location.longitude is None:
                return StaticLocationProvider()
            try:
                fix = LocationFix(latitude=location.latitude, longitude=location.longitude)
            except ValueError as e:
                raise ConfigurationError(
                    "Static location is out of range",
                    cause=e,
                    setting_name="VOICENAV_LOCATION_LATITUDE/LONGITUDE",
                    expected_type="WGS84 degrees",
                ) from e
            return StaticLocationProvider(fix)

        container.register(LocationProviderPort, create_location_provider)

        container.register(
            ArrivalSourcePort,
            lambda: SimulatedArrivalSource(
                container.resolve(TransitCatalogPort),
                rng=random.Random(config.arrivals.seed),
            ),
        )

        # Speech output
        def create_speech_output() -> SpeechOutputPort:
            if config.speech.engine == "log":
                return LoggingSpeechOutput()
            return Pyttsx3SpeechOutput(config.speech)

        container.register(SpeechOutputPort, create_speech_output)

        # Voice input
        def create_recognizer() -> SpeechRecognizerPort:
            if config.voice.recognizer == "none":
                return UnavailableSpeechRecognizer()
            return WhisperSpeechRecognizer(config.asr)

        def create_permission() -> MicrophonePermissionPort:
            if config.voice.recognizer == "none":
                return StaticMicrophonePermission(granted=False)
            return SoundDeviceMicrophonePermission(config.asr)

        container.register(SpeechRecognizerPort, create_recognizer)
        container.register(MicrophonePermissionPort, create_permission)
        container.register(SchedulerPort, lambda: ThreadingScheduler())

        # Core services
        container.register(CommandExtractor, lambda: CommandExtractor())
        container.register(
            RouteMatcher,
            lambda: RouteMatcher(container.resolve(TransitCatalogPort)),
        )
        container.register(
            ProximityResolver,
            lambda: ProximityResolver(
                catalog=container.resolve(TransitCatalogPort),
                location_provider=container.resolve(LocationProviderPort),
                config=config.proximity,
            ),
        )
        container.register(
            VoiceInputChannel,
            lambda: VoiceInputChannel(
                recognizer=container.resolve(SpeechRecognizerPort),
                permission=container.resolve(MicrophonePermissionPort),
                scheduler=container.resolve(SchedulerPort),
                config=config.voice,
            ),
        )
        container.register(
            ArrivalAnnouncer,
            lambda: ArrivalAnnouncer(
                arrivals=container.resolve(ArrivalSourcePort),
                speech=container.resolve(SpeechOutputPort),
            ),
        )

        # Main service
        def create_session_controller() -> SessionController:
            return SessionController(
                channel=container.resolve(VoiceInputChannel),
                proximity_resolver=container.resolve(ProximityResolver),
                extractor=container.resolve(CommandExtractor),
                matcher=container.resolve(RouteMatcher),
                announcer=container.resolve(ArrivalAnnouncer),
                speech=container.resolve(SpeechOutputPort),
            )

        container.register(SessionController, create_session_controller)

        return container



_default: Optional[Container] = None
_default_lock = threading.Lock()


def get_container() -> Container:
    """Return the process-wide container, building it on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = Container.create_default()
        return _default


def reset_container() -> None:
    """Forget the process-wide container. Call this in tests."""
    global _default
    with _default_lock:
        if _default is not None:
            _default.clear()
        _default = None

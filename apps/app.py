# -*- coding: utf-8 -*-
"""Gradio demo for the VoiceNav session pipeline.

The demo runs headless: speech output is logged instead of spoken and the
recognizer is disabled, so every session uses the manual fallback and the
typed utterance is fed through ``VoiceInputChannel.simulate``.
"""

from typing import List, Optional, Tuple

import gradio as gr

from voicenav.adapters.arrivals import SimulatedArrivalSource
from voicenav.adapters.catalog import StaticTransitCatalog
from voicenav.adapters.recognizer import StaticMicrophonePermission, UnavailableSpeechRecognizer
from voicenav.adapters.scheduler import ThreadingScheduler
from voicenav.adapters.speech import LoggingSpeechOutput
from voicenav.config import get_config
from voicenav.domain import LocationFix, SessionStateError
from voicenav.nlp import CommandExtractor
from voicenav.observability import configure_logging
from voicenav.services import (
    ArrivalAnnouncer,
    ProximityResolver,
    RouteMatcher,
    SessionController,
    VoiceInputChannel,
)

# ============================ WIRING ============================
CONFIG = get_config()
configure_logging(CONFIG.observability)

CATALOG = StaticTransitCatalog()
SPEECH = LoggingSpeechOutput()
CHANNEL = VoiceInputChannel(
    recognizer=UnavailableSpeechRecognizer(),
    permission=StaticMicrophonePermission(granted=True),
    scheduler=ThreadingScheduler(),
    config=CONFIG.voice,
)
CONTROLLER = SessionController(
    channel=CHANNEL,
    proximity_resolver=ProximityResolver(CATALOG, config=CONFIG.proximity),
    extractor=CommandExtractor(),
    matcher=RouteMatcher(CATALOG),
    announcer=ArrivalAnnouncer(SimulatedArrivalSource(CATALOG), SPEECH),
    speech=SPEECH,
)

PRESET_PLACES: List[str] = ["None (no fix)"] + [
    f"{stop.name} ({stop.latitude}, {stop.longitude})" for stop in CATALOG.list_stops()
]

Outputs = Tuple[str, str, str]


def _parse_fix(latitude: str, longitude: str) -> Optional[LocationFix]:
    if not str(latitude).strip() or not str(longitude).strip():
        return None
    try:
        return LocationFix(latitude=float(latitude), longitude=float(longitude))
    except ValueError:
        return None


def _snapshot() -> Outputs:
    session = CONTROLLER.session
    spoken = "\n".join(f"🔊 {line}" for line in SPEECH.history)
    if session is None:
        return spoken, "", "No session"

    routes = "\n".join(
        f"{route.identifier}: {route.description}" for route in session.proximity.routes
    )
    header = f"📍 {session.proximity.location_label}"
    if session.proximity.is_fallback:
        header += " (fallback)"

    status = f"Session {session.session_id}: {session.state.name}"
    if session.last_outcome is not None:
        status += f"\nLast outcome: {type(session.last_outcome).__name__}"
    return spoken, f"{header}\n{routes}", status


def on_preset(choice: str) -> Tuple[str, str]:
    for stop in CATALOG.list_stops():
        if choice.startswith(stop.name):
            return str(stop.latitude), str(stop.longitude)
    return "", ""


def start_session(latitude: str, longitude: str) -> Outputs:
    CONTROLLER.cancel()
    SPEECH.clear()
    CONTROLLER.start_at(_parse_fix(latitude, longitude))
    return _snapshot()


def send_utterance(text: str) -> Outputs:
    if not CHANNEL.simulate(text):
        SPEECH.speak("Nothing is listening. Start or retry a session first.")
    return _snapshot()


def retry_session() -> Outputs:
    try:
        CONTROLLER.retry()
    except SessionStateError as e:
        SPEECH.speak(e.message)
    return _snapshot()


def cancel_session() -> Outputs:
    CONTROLLER.cancel()
    return _snapshot()


# ============================ UI ============================
with gr.Blocks(title="VoiceNav • Route by voice") as app:
    gr.Markdown(
        """
# 🚌 VoiceNav – Say a route number
✔ Nearby routes from your position
✔ Typed utterances stand in for the microphone
"""
    )

    with gr.Row():
        preset_dd = gr.Dropdown(PRESET_PLACES, value=PRESET_PLACES[0], label="📍 Preset")
        lat_box = gr.Textbox(label="Latitude", placeholder="3.1347")
        lon_box = gr.Textbox(label="Longitude", placeholder="101.6841")

    with gr.Row():
        btn_start = gr.Button("🎙️ Start session")
        btn_retry = gr.Button("🔁 Retry")
        btn_cancel = gr.Button("✖ Cancel")

    with gr.Row():
        utterance = gr.Textbox(
            label="🗣️ Utterance", lines=1, placeholder="route five eight one"
        )
        btn_say = gr.Button("➡️ Say")

    with gr.Row():
        spoken_out = gr.Textbox(label="🔊 Spoken", lines=14)
        routes_out = gr.Textbox(label="🚏 Nearby routes", lines=14)

    status_out = gr.Textbox(label="Session", lines=2)
    outputs = [spoken_out, routes_out, status_out]

    preset_dd.change(on_preset, inputs=preset_dd, outputs=[lat_box, lon_box])
    btn_start.click(start_session, inputs=[lat_box, lon_box], outputs=outputs)
    btn_say.click(send_utterance, inputs=utterance, outputs=outputs)
    utterance.submit(send_utterance, inputs=utterance, outputs=outputs)
    btn_retry.click(retry_session, outputs=outputs)
    btn_cancel.click(cancel_session, outputs=outputs)


if __name__ == "__main__":
    app.launch()

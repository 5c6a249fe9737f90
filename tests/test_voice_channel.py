"""Tests for the voice input channel state machine."""

import pytest

from voicenav.adapters.recognizer import StaticMicrophonePermission
from voicenav.domain import ChannelBusyError, ChannelState, RecognitionResult
from voicenav.services import PermissionCache, VoiceInputChannel


class Recorder:
    """Collects continuation and interruption calls."""

    def __init__(self):
        self.results = []
        self.interruptions = []

    def on_result(self, result):
        self.results.append(result)

    def on_interrupted(self, state):
        self.interruptions.append(state)


@pytest.fixture
def calls():
    return Recorder()


def _open(channel, calls):
    channel.open(calls.on_result, on_interrupted=calls.on_interrupted)


class TestListening:
    def test_open_starts_recognizer(self, channel, recognizer, calls):
        _open(channel, calls)

        assert channel.state is ChannelState.LISTENING
        assert recognizer.starts == 1
        assert recognizer.languages == ["en-US"]

    def test_result_is_delivered_once(self, channel, recognizer, calls):
        _open(channel, calls)

        recognizer.hear("route 581", 0.8)
        recognizer.hear("route 400", 0.7)

        assert calls.results == [RecognitionResult(text="route 581", confidence=0.8)]
        assert channel.state is ChannelState.DELIVERED
        assert recognizer.stops == 1

    def test_confidence_is_clamped(self, channel, recognizer, calls):
        _open(channel, calls)

        recognizer.hear("581", 1.7)

        assert calls.results[0].confidence == 1.0

    def test_open_while_active_raises(self, channel, calls):
        _open(channel, calls)

        with pytest.raises(ChannelBusyError) as excinfo:
            _open(channel, calls)

        assert excinfo.value.state == "LISTENING"

    def test_reopen_after_delivery(self, channel, recognizer, calls):
        _open(channel, calls)
        recognizer.hear("581")

        _open(channel, calls)

        assert channel.state is ChannelState.LISTENING
        assert recognizer.starts == 2

    def test_recognizer_error_cancels(self, channel, recognizer, calls):
        _open(channel, calls)

        recognizer.fail("no-speech")

        assert channel.state is ChannelState.CANCELLED
        assert calls.interruptions == [ChannelState.CANCELLED]
        assert calls.results == []
        assert recognizer.stops == 1

    def test_close_drops_late_result(self, channel, recognizer, calls):
        _open(channel, calls)

        channel.close()
        recognizer.hear("581")

        assert channel.state is ChannelState.IDLE
        assert calls.results == []
        assert calls.interruptions == []
        assert recognizer.stops == 1

    def test_close_is_idempotent(self, channel, recognizer):
        channel.close()
        channel.close()

        assert channel.state is ChannelState.IDLE
        assert recognizer.stops == 0

    def test_simulate_while_listening_delivers(self, channel, recognizer, calls):
        _open(channel, calls)

        assert channel.simulate("581")
        recognizer.hear("400")

        assert [r.text for r in calls.results] == ["581"]
        assert calls.results[0].simulated


class TestManualFallback:
    @pytest.fixture
    def permission(self):
        return StaticMicrophonePermission(granted=False)

    def test_denied_permission_arms_fallback(self, channel, recognizer, scheduler, calls):
        _open(channel, calls)

        assert channel.state is ChannelState.MANUAL_FALLBACK_ARMED
        assert channel.deadline == 15.0
        assert scheduler.pending == 1
        assert recognizer.starts == 0

    def test_simulate_delivers_with_fixed_confidence(self, channel, scheduler, calls):
        _open(channel, calls)

        assert channel.simulate("route 581")

        assert calls.results == [
            RecognitionResult(text="route 581", confidence=0.9, simulated=True)
        ]
        assert channel.state is ChannelState.DELIVERED
        assert scheduler.pending == 0

    def test_timeout(self, channel, scheduler, calls):
        _open(channel, calls)

        scheduler.advance(10)
        assert channel.state is ChannelState.MANUAL_FALLBACK_ARMED

        scheduler.advance(5)
        assert channel.state is ChannelState.TIMED_OUT
        assert calls.interruptions == [ChannelState.TIMED_OUT]

        assert not channel.simulate("581")
        assert calls.results == []

    def test_close_cancels_timer(self, channel, scheduler, calls):
        _open(channel, calls)

        channel.close()
        scheduler.advance(30)

        assert channel.state is ChannelState.IDLE
        assert calls.interruptions == []

    def test_stale_timer_from_previous_open_is_ignored(self, channel, scheduler, calls):
        _open(channel, calls)
        scheduler.advance(10)
        channel.close()
        _open(channel, calls)

        scheduler.advance(5)
        assert channel.state is ChannelState.MANUAL_FALLBACK_ARMED

        scheduler.advance(10)
        assert channel.state is ChannelState.TIMED_OUT
        assert calls.interruptions == [ChannelState.TIMED_OUT]


def test_unavailable_recognizer_arms_fallback(channel, recognizer, calls):
    recognizer.available = False

    _open(channel, calls)

    assert channel.state is ChannelState.MANUAL_FALLBACK_ARMED
    assert recognizer.starts == 0


def test_recognizer_start_failure_arms_fallback(channel, recognizer, calls):
    recognizer.fail_on_start = True

    _open(channel, calls)

    assert channel.state is ChannelState.MANUAL_FALLBACK_ARMED
    assert channel.simulate("581")
    assert calls.results[0].text == "581"


def test_simulate_without_pending_request_is_noop(channel):
    assert not channel.simulate("581")
    assert channel.state is ChannelState.IDLE


def test_close_during_permission_request(recognizer, scheduler, voice_config, calls):
    class ClosingPermission:
        channel = None

        def request(self):
            self.channel.close()
            return True

    permission = ClosingPermission()
    channel = VoiceInputChannel(
        recognizer=recognizer,
        permission=permission,
        scheduler=scheduler,
        config=voice_config,
        permission_cache=PermissionCache(),
    )
    permission.channel = channel

    _open(channel, calls)

    assert channel.state is ChannelState.IDLE
    assert recognizer.starts == 0
    assert scheduler.pending == 0


class TestPermissionCache:
    def test_denial_is_retried_and_grant_is_kept(self, recognizer, scheduler, voice_config, calls):
        permission = StaticMicrophonePermission(granted=False)
        cache = PermissionCache()
        channel = VoiceInputChannel(recognizer, permission, scheduler, voice_config, cache)

        _open(channel, calls)
        assert channel.state is ChannelState.MANUAL_FALLBACK_ARMED
        assert not cache.granted

        channel.close()
        permission.granted = True
        _open(channel, calls)
        assert channel.state is ChannelState.LISTENING
        assert cache.granted

        channel.close()
        _open(channel, calls)
        assert permission.requests == 2
        assert cache.attempts == 2

    def test_failed_request_counts_as_denied(self):
        cache = PermissionCache()

        def explode():
            raise OSError("no input device")

        assert not cache.ensure(explode)
        assert cache.ensure(lambda: True)
        assert cache.ensure(explode)
        assert cache.attempts == 2

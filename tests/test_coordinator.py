"""Integration tests for the coordinator: events in, frames and actions out."""

import mido
import pytest
from conftest import action_calls, pulse_frame, sent_frames, static_frame

from lpxcontrol.core import ActionRunner, Coordinator
from lpxcontrol.models import AppConfig, LockState

CONTROL_PADS = [19, 29, 39, 49, 59, 69, 79, 89]
ENABLED = 87
DISABLED = 5
SELECTED = 67


def press(coordinator, identifier, value=127):
    coordinator.handle_bytes([0xB0, identifier, value])


def strike(coordinator, note=60, velocity=100):
    coordinator.handle_bytes([0x90, note, velocity])


def tick(coordinator, count):
    for _ in range(count):
        coordinator.timer.tick()


class TestStartup:
    """Test coordinator startup."""

    @pytest.mark.integration
    def test_start_paints_all_control_pads_enabled(self, config, output, mock_link, actions_dir):
        coordinator = Coordinator(config, output, runner=ActionRunner(actions_dir))
        coordinator.start(run_timer=False)

        assert sent_frames(mock_link) == [static_frame(pad, ENABLED) for pad in CONTROL_PADS]
        assert coordinator.state.pads_enabled
        assert coordinator.state.lock_state is LockState.UNLOCKED
        assert not coordinator.timer.is_running

    @pytest.mark.integration
    def test_context_manager_runs_timer(self, config, output, actions_dir):
        with Coordinator(config, output, runner=ActionRunner(actions_dir)) as coordinator:
            assert coordinator.timer.is_running
        assert not coordinator.timer.is_running


class TestControlDispatch:
    """Test control presses reaching actions."""

    @pytest.mark.integration
    def test_press_sequence_frames_and_actions(self, coordinator, mock_link, actions_dir, make_action):
        """Two presses: the second deactivates the first, all in order."""
        for pad in (39, 49):
            make_action(f"ON-CTL.{pad}")
            make_action(f"OFF-CTL.{pad}")

        press(coordinator, 39)
        press(coordinator, 49)

        assert action_calls(actions_dir) == ["ON-CTL.39", "OFF-CTL.39", "ON-CTL.49"]
        assert sent_frames(mock_link) == [
            pulse_frame(39, SELECTED),
            static_frame(39, SELECTED),
            pulse_frame(39, SELECTED),
            static_frame(39, ENABLED),
            pulse_frame(49, SELECTED),
            static_frame(49, SELECTED),
        ]
        assert coordinator.state.active_identifier == 49

    @pytest.mark.integration
    def test_missing_actions_still_paint(self, coordinator, mock_link, actions_dir):
        press(coordinator, 39)

        assert action_calls(actions_dir) == []
        assert sent_frames(mock_link) == [pulse_frame(39, SELECTED), static_frame(39, SELECTED)]

    @pytest.mark.integration
    @pytest.mark.parametrize("identifier", [0, 11, 18])
    def test_ids_below_floor_ignored(self, coordinator, mock_link, identifier):
        press(coordinator, identifier)

        assert sent_frames(mock_link) == []
        assert coordinator.state.last_identifier is None

    @pytest.mark.integration
    def test_release_ignored(self, coordinator, mock_link):
        press(coordinator, 39, value=0)

        assert sent_frames(mock_link) == []
        assert coordinator.state.active_identifier is None

    @pytest.mark.integration
    def test_gesture_band_not_dispatched(self, coordinator, mock_link):
        press(coordinator, 93)

        assert sent_frames(mock_link) == []
        assert coordinator.state.active_identifier is None
        assert coordinator.state.last_identifier == 93

    @pytest.mark.integration
    def test_mido_messages(self, coordinator, mock_link):
        coordinator.handle_message(mido.Message("clock"))
        coordinator.handle_message(mido.Message("control_change", control=29, value=127))

        assert coordinator.state.active_identifier == 29

    @pytest.mark.integration
    def test_malformed_input_ignored(self, coordinator, mock_link):
        coordinator.handle_bytes([0xB0, 39])
        coordinator.handle_bytes([0xF8])
        coordinator.handle_bytes([0xB1, 39, 127])

        assert sent_frames(mock_link) == []


class TestLocking:
    """Test the lock gesture through the coordinator."""

    @pytest.mark.integration
    def test_locked_surface_ignores_controls(self, coordinator, mock_link, actions_dir, make_action):
        make_action("ON-CTL.39")

        for pad in (91, 92, 93, 94):
            press(coordinator, pad)
        assert coordinator.state.lock_state is LockState.LOCKED

        press(coordinator, 39)
        assert action_calls(actions_dir) == []
        assert sent_frames(mock_link) == []

    @pytest.mark.integration
    def test_unlock_restores_dispatch(self, coordinator, actions_dir, make_action):
        make_action("ON-CTL.39")

        for pad in (91, 92, 93, 94, 94, 92):
            press(coordinator, pad)
        # 92 skipped 93, so the surface relocks
        assert coordinator.state.lock_state is LockState.LOCKED

        for pad in (94, 93, 92, 91):
            press(coordinator, pad)
        assert coordinator.state.lock_state is LockState.UNLOCKED

        press(coordinator, 39)
        assert action_calls(actions_dir) == ["ON-CTL.39"]

    @pytest.mark.integration
    def test_interrupted_lock_dispatches_nothing(self, coordinator, mock_link):
        press(coordinator, 91)
        press(coordinator, 39)

        assert coordinator.state.lock_state is LockState.UNLOCKED
        assert coordinator.state.active_identifier is None
        assert sent_frames(mock_link) == []

    @pytest.mark.integration
    def test_notes_ignored_while_locked(self, coordinator, mock_link):
        for pad in (91, 92, 93, 94):
            press(coordinator, pad)

        strike(coordinator)

        assert not coordinator.timer.suppressed
        assert sent_frames(mock_link) == []


class TestActivitySuppression:
    """Test note activity disabling the control pads."""

    @pytest.mark.integration
    def test_note_disables_then_reenables(self, coordinator, mock_link):
        strike(coordinator)

        assert coordinator.timer.suppressed
        assert sent_frames(mock_link) == [static_frame(pad, DISABLED) for pad in CONTROL_PADS]

        mock_link.send.reset_mock()
        tick(coordinator, 20)

        assert not coordinator.timer.suppressed
        assert sent_frames(mock_link) == [static_frame(pad, ENABLED) for pad in CONTROL_PADS]

    @pytest.mark.integration
    def test_controls_dropped_while_suppressed(self, coordinator, actions_dir, make_action):
        make_action("ON-CTL.39")

        strike(coordinator)
        press(coordinator, 39)
        assert action_calls(actions_dir) == []
        assert coordinator.state.last_identifier is None

        tick(coordinator, 20)
        press(coordinator, 39)
        assert action_calls(actions_dir) == ["ON-CTL.39"]

    @pytest.mark.integration
    def test_repeated_notes_repaint_once(self, coordinator, mock_link):
        strike(coordinator)
        strike(coordinator, note=61)

        assert len(sent_frames(mock_link)) == len(CONTROL_PADS)

    @pytest.mark.integration
    def test_note_off_velocity_ignored(self, coordinator, mock_link):
        strike(coordinator, velocity=0)

        assert not coordinator.timer.suppressed
        assert sent_frames(mock_link) == []

    @pytest.mark.integration
    def test_active_pad_keeps_selected_colour(self, coordinator, mock_link):
        press(coordinator, 39)
        mock_link.send.reset_mock()

        strike(coordinator)
        tick(coordinator, 20)

        painted = {frame[8] for frame in sent_frames(mock_link)}
        assert 39 not in painted
        assert painted == set(CONTROL_PADS) - {39}

    @pytest.mark.integration
    def test_custom_cooldown(self, output, mock_link, actions_dir):
        config = AppConfig(cooldown_seconds=1, tick_interval=0.5)
        coordinator = Coordinator(config, output, runner=ActionRunner(actions_dir))
        coordinator.start(run_timer=False)

        strike(coordinator)
        tick(coordinator, 1)
        assert coordinator.timer.suppressed
        tick(coordinator, 1)
        assert not coordinator.timer.suppressed


class TestEndToEnd:
    """Press two controls, play a note, wait out the cooldown."""

    @pytest.mark.integration
    def test_press_press_note_cooldown(self, coordinator, mock_link, actions_dir, make_action):
        for pad in (39, 59):
            make_action(f"ON-CTL.{pad}")
            make_action(f"OFF-CTL.{pad}")
        others = [pad for pad in CONTROL_PADS if pad != 59]

        press(coordinator, 39)
        press(coordinator, 59)
        strike(coordinator)
        tick(coordinator, 19)
        assert coordinator.timer.suppressed
        tick(coordinator, 1)

        assert action_calls(actions_dir) == ["ON-CTL.39", "OFF-CTL.39", "ON-CTL.59"]
        assert sent_frames(mock_link) == (
            [
                pulse_frame(39, SELECTED),
                static_frame(39, SELECTED),
                pulse_frame(39, SELECTED),
                static_frame(39, ENABLED),
                pulse_frame(59, SELECTED),
                static_frame(59, SELECTED),
            ]
            + [static_frame(pad, DISABLED) for pad in others]
            + [static_frame(pad, ENABLED) for pad in others]
        )
        assert coordinator.state.active_identifier == 59
        assert coordinator.state.pads_enabled
        assert not coordinator.timer.suppressed

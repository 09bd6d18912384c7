"""Tests for the command table, dispatcher and action runner."""

import logging
from unittest.mock import Mock

import pytest
from conftest import action_calls, pulse_frame, sent_frames, static_frame

from lpxcontrol.core import ActionRunner, CommandEntry, CommandTable, Dispatcher, SurfaceState

ENABLED = 87
SELECTED = 67


class TestCommandTable:
    """Test the control id to action mapping."""

    @pytest.mark.unit
    def test_for_pads(self):
        table = CommandTable.for_pads([19, 29])

        assert len(table) == 2
        assert table[19] == CommandEntry("ON-CTL.19", "OFF-CTL.19")
        assert table.activate_action(29) == "ON-CTL.29"
        assert table.deactivate_action(29) == "OFF-CTL.29"

    @pytest.mark.unit
    def test_missing_id_has_no_actions(self):
        table = CommandTable.for_pads([19])

        assert 39 not in table
        assert table.activate_action(39) is None
        assert table.deactivate_action(39) is None

    @pytest.mark.unit
    def test_table_is_read_only(self):
        entries = {19: CommandEntry("a", "b")}
        table = CommandTable(entries)
        entries[29] = CommandEntry("c", "d")

        assert 29 not in table
        with pytest.raises(TypeError):
            table[19] = CommandEntry("x", "y")


class TestDispatcher:
    """Test activation order and visual feedback."""

    @pytest.fixture
    def runner(self):
        return Mock(spec=ActionRunner)

    @pytest.fixture
    def state(self):
        return SurfaceState()

    @pytest.fixture
    def dispatcher(self, runner, output, state):
        return Dispatcher(
            CommandTable.for_pads([19, 29, 39, 49]),
            runner,
            output,
            state,
            enabled_colour=ENABLED,
            selected_colour=SELECTED,
        )

    @pytest.mark.unit
    def test_first_activation(self, dispatcher, runner, mock_link, state):
        """No previous control: pulse, run ON-CTL, paint selected."""
        dispatcher.activate(39)

        runner.run.assert_called_once_with("ON-CTL.39")
        assert sent_frames(mock_link) == [pulse_frame(39, SELECTED), static_frame(39, SELECTED)]
        assert state.active_identifier == 39

    @pytest.mark.unit
    def test_switching_controls(self, dispatcher, runner, mock_link, state):
        """The previous control is deactivated and repainted enabled before the new one runs."""
        dispatcher.activate(39)
        mock_link.send.reset_mock()
        runner.reset_mock()

        dispatcher.activate(49)

        assert [c.args[0] for c in runner.run.call_args_list] == ["OFF-CTL.39", "ON-CTL.49"]
        assert sent_frames(mock_link) == [
            pulse_frame(39, SELECTED),
            static_frame(39, ENABLED),
            pulse_frame(49, SELECTED),
            static_frame(49, SELECTED),
        ]
        assert state.active_identifier == 49

    @pytest.mark.unit
    def test_action_runs_while_pad_pulses(self, dispatcher, runner, mock_link):
        """The program runs after the pulse frame and before the final colour."""
        frames_at_run = []
        runner.run.side_effect = lambda name: frames_at_run.append(sent_frames(mock_link))

        dispatcher.activate(29)

        assert frames_at_run == [[pulse_frame(29, SELECTED)]]

    @pytest.mark.unit
    def test_reactivating_same_control(self, dispatcher, runner):
        """Pressing the active control again runs its OFF then its ON action again."""
        dispatcher.activate(19)
        dispatcher.activate(19)

        assert [c.args[0] for c in runner.run.call_args_list] == [
            "ON-CTL.19",
            "OFF-CTL.19",
            "ON-CTL.19",
        ]

    @pytest.mark.unit
    def test_unmapped_control_becomes_active_silently(self, dispatcher, runner, mock_link, state):
        dispatcher.activate(79)

        runner.run.assert_not_called()
        assert sent_frames(mock_link) == []
        assert state.active_identifier == 79

    @pytest.mark.unit
    def test_unmapped_previous_skips_deactivate(self, dispatcher, runner, mock_link):
        dispatcher.activate(79)
        dispatcher.activate(19)

        runner.run.assert_called_once_with("ON-CTL.19")
        assert sent_frames(mock_link) == [pulse_frame(19, SELECTED), static_frame(19, SELECTED)]

    @pytest.mark.unit
    def test_failed_action_still_paints(self, dispatcher, runner, mock_link):
        runner.run.return_value = False

        dispatcher.activate(39)

        assert sent_frames(mock_link)[-1] == static_frame(39, SELECTED)


class TestActionRunner:
    """Test running real executables."""

    @pytest.mark.integration
    def test_runs_in_actions_directory(self, actions_dir, make_action):
        make_action("ON-CTL.39")
        runner = ActionRunner(actions_dir)

        assert runner.run("ON-CTL.39") is True
        # calls.log is written relative to the working directory
        assert action_calls(actions_dir) == ["ON-CTL.39"]

    @pytest.mark.integration
    def test_missing_action_is_skipped(self, actions_dir, caplog):
        runner = ActionRunner(actions_dir)

        with caplog.at_level(logging.DEBUG, logger="lpxcontrol.core.actions"):
            assert runner.run("ON-CTL.39") is False

        assert "No action ON-CTL.39" in caplog.text
        assert not any(r.levelno >= logging.ERROR for r in caplog.records)

    @pytest.mark.integration
    def test_non_zero_exit_is_logged(self, actions_dir, make_action, caplog):
        make_action("OFF-CTL.19", exit_code=3, stderr="no such player")
        runner = ActionRunner(actions_dir)

        with caplog.at_level(logging.ERROR, logger="lpxcontrol.core.actions"):
            assert runner.run("OFF-CTL.19") is False

        assert "Not success: OFF-CTL.19 (exit 3)" in caplog.text
        assert "no such player" in caplog.text

    @pytest.mark.integration
    def test_spawn_failure_is_logged(self, actions_dir, caplog):
        (actions_dir / "ON-CTL.29").write_text("not a program\n")  # no execute bit
        runner = ActionRunner(actions_dir)

        with caplog.at_level(logging.ERROR, logger="lpxcontrol.core.actions"):
            assert runner.run("ON-CTL.29") is False

        assert "Failure: cmd ON-CTL.29" in caplog.text

    @pytest.mark.integration
    def test_directory_resolved_per_run(self, tmp_path, make_action, actions_dir):
        current = {"dir": tmp_path / "elsewhere"}
        runner = ActionRunner(lambda: current["dir"])
        make_action("ON-CTL.49")

        assert runner.run("ON-CTL.49") is False

        current["dir"] = actions_dir
        assert runner.run("ON-CTL.49") is True

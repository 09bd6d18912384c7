"""Pytest fixtures for tests."""

import stat
from pathlib import Path
from unittest.mock import Mock

import pytest

from lpxcontrol.core import ActionRunner, Coordinator
from lpxcontrol.devices.launchpad import LaunchpadOutput
from lpxcontrol.models import AppConfig

HEADER = [0xF0, 0x00, 0x20, 0x29, 0x02, 0x0C]


def static_frame(pad: int, colour: int) -> list[int]:
    """Expected static palette LED frame."""
    return HEADER + [0x03, 0, pad, colour, 0xF7]


def pulse_frame(pad: int, colour: int) -> list[int]:
    """Expected pulsing palette LED frame."""
    return HEADER + [0x03, 2, pad, colour, 0xF7]


def sent_frames(link: Mock) -> list[list[int]]:
    """Frames passed to a mock link's send(), in order."""
    return [list(call.args[0]) for call in link.send.call_args_list]


@pytest.fixture
def mock_link():
    """Mock MidiConnection that accepts every frame."""
    link = Mock()
    link.send = Mock(return_value=None)
    return link


@pytest.fixture
def output(mock_link):
    """LaunchpadOutput writing to the mock link."""
    return LaunchpadOutput(mock_link)


@pytest.fixture
def config():
    """Default configuration (not loaded from disk)."""
    return AppConfig()


@pytest.fixture
def actions_dir(tmp_path: Path) -> Path:
    """Empty directory for action executables."""
    directory = tmp_path / "subs"
    directory.mkdir()
    return directory


@pytest.fixture
def make_action(actions_dir: Path):
    """
    Factory for shell script actions.

    Each script appends its own name to `calls.log` in its working
    directory, then exits with `exit_code`.
    """

    def _make(name: str, exit_code: int = 0, stderr: str = "") -> Path:
        script = actions_dir / name
        lines = ["#!/bin/sh", f"echo {name} >> calls.log"]
        if stderr:
            lines.append(f"echo '{stderr}' >&2")
        lines.append(f"exit {exit_code}")
        script.write_text("\n".join(lines) + "\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


def action_calls(actions_dir: Path) -> list[str]:
    """Names of the actions that ran, in order."""
    log = actions_dir / "calls.log"
    if not log.exists():
        return []
    return log.read_text().split()


@pytest.fixture
def coordinator(config, output, mock_link, actions_dir):
    """Started coordinator with a hand-driven activity timer; sends after start are cleared."""
    coordinator = Coordinator(config, output, runner=ActionRunner(actions_dir))
    coordinator.start(run_timer=False)
    mock_link.send.reset_mock()
    yield coordinator
    coordinator.stop()

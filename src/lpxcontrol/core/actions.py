"""Run external action programs."""

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path

from lpxcontrol.exceptions import ActionExecutionError

logger = logging.getLogger(__name__)


class ActionRunner:
    """
    Runs executables named after an action from the actions directory.

    Each run is synchronous with no timeout: the caller blocks until the
    program exits. A missing executable is skipped. Spawn failures and
    non-zero exits are logged and reported as False, never raised.
    """

    def __init__(self, actions_dir: Path | Callable[[], Path]):
        """
        Args:
            actions_dir: Directory holding the executables, or a callable
                returning it (resolved on every run)
        """
        self._actions_dir = actions_dir

    @property
    def actions_dir(self) -> Path:
        if callable(self._actions_dir):
            return self._actions_dir()
        return self._actions_dir

    def run(self, name: str) -> bool:
        """
        Run the named action.

        Returns:
            True if the program ran and exited 0
        """
        directory = self.actions_dir
        command = directory / name
        if not command.is_file():
            logger.debug(f"No action {name} in {directory}, skipping")
            return False

        try:
            self._execute(command, directory)
        except ActionExecutionError as e:
            logger.error(e.technical_message)
            return False

        logger.info(f"Success: {name}")
        return True

    def _execute(self, command: Path, cwd: Path) -> None:
        """
        Raises:
            ActionExecutionError: If the program fails to spawn or exits non-zero
        """
        try:
            result = subprocess.run([str(command)], cwd=cwd, capture_output=True)
        except OSError as e:
            raise ActionExecutionError(command.name, original_error=str(e)) from e

        if result.returncode != 0:
            raise ActionExecutionError(
                command.name,
                returncode=result.returncode,
                stderr=result.stderr.decode(errors="replace"),
            )

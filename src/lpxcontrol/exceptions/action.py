"""External action exceptions."""

from typing import Optional

from .base import LpxControlError


class ActionExecutionError(LpxControlError):
    """An external action failed to spawn or exited non-zero."""

    def __init__(
        self,
        name: str,
        returncode: Optional[int] = None,
        stderr: str = "",
        original_error: Optional[str] = None,
    ):
        """
        Initialize action execution error.

        Args:
            name: Action name (e.g. "ON-CTL.39")
            returncode: Exit status if the process ran
            stderr: Captured standard error of the process
            original_error: Spawn failure message if the process never ran
        """
        if original_error is not None:
            technical = f"Failure: cmd {name} Err: {original_error}"
        else:
            technical = f"Not success: {name} (exit {returncode}) and stderr was: {stderr.strip()}"

        super().__init__(
            user_message=f"Action '{name}' failed",
            technical_message=technical,
            recoverable=True,
            recovery_hint="Check the script is executable and runs on its own",
        )
        self.name = name
        self.returncode = returncode
        self.stderr = stderr
        self.original_error = original_error

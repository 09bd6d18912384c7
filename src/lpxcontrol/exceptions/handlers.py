"""
Error handling utilities.

The daemon has no caller to return errors to, so recoverable failures
(sends, external actions) are logged and swallowed close to where they
happen. Fatal failures (device connection, configuration) propagate up to
the CLI, which formats them with `format_error_for_display`.

| Scenario | Use This |
|----------|----------|
| Config file failed pydantic validation | `raise wrap_pydantic_error(e, path) from e` |
| Best-effort step, log and carry on | `with ErrorContext("paint pads", re_raise=False): ...` |
| Show an error on the command line | `message, hint = format_error_for_display(e)` |
"""

import logging
from typing import Optional

from pydantic import ValidationError

from .base import LpxControlError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError

logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Example:
        ```python
        with ErrorContext("run OFF-CTL.39", re_raise=False) as ctx:
            runner.run("OFF-CTL.39")

        if ctx.error:
            ...
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[BaseException] = None

    def __enter__(self):
        """Enter the context."""
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Exit the context and handle any exceptions.

        Returns:
            True if exception should be suppressed, False otherwise
        """
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        if not issubclass(exc_type, Exception):
            # KeyboardInterrupt, SystemExit etc. always propagate
            return False

        self.error = exc_val

        if isinstance(exc_val, LpxControlError):
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)

        return not self.re_raise


def _field_name(location: tuple) -> str:
    return ".".join(str(part) for part in location) or "config"


def wrap_pydantic_error(error: ValidationError, file_path: str) -> ConfigurationError:
    """
    Convert a ValidationError raised while loading `file_path`.

    Malformed JSON becomes ConfigFileInvalidError. Bad values become a
    ConfigValidationError naming the field, or listing every field when
    several fail.
    """
    problems = error.errors()

    for problem in problems:
        if problem["type"] == "json_invalid":
            detail = problem.get("ctx", {}).get("error", problem["msg"])
            return ConfigFileInvalidError(file_path, str(detail))

    if len(problems) == 1:
        problem = problems[0]
        return ConfigValidationError(
            field=_field_name(problem["loc"]),
            value=problem.get("input"),
            error_msg=problem["msg"],
            file_path=file_path,
        )

    listing = "\n".join(f"  - {_field_name(p['loc'])}: {p['msg']}" for p in problems)
    return ConfigValidationError(
        field="multiple fields",
        value=None,
        error_msg=f"{len(problems)} validation errors:\n{listing}",
        file_path=file_path,
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, LpxControlError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None

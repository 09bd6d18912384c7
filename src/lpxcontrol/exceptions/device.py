"""Device link exceptions.

- DeviceError: Base class for control surface errors
- DeviceConnectionError: A MIDI port could not be found or opened (fatal at startup)
- SendError: An outbound frame could not be transmitted (logged, never fatal)
"""

from typing import Optional

from .base import LpxControlError


class DeviceError(LpxControlError):
    """Control surface communication failed."""
    pass


class DeviceConnectionError(DeviceError):
    """A MIDI port for the control surface is unavailable."""

    def __init__(self, port_name: str, direction: str, original_error: Optional[str] = None):
        """
        Initialize device connection error.

        Args:
            port_name: Port name prefix that was requested
            direction: "input" or "output"
            original_error: Error raised by the MIDI backend, if any
        """
        if original_error:
            user_msg = f"Could not open MIDI {direction} port '{port_name}'"
            technical = f"Opening MIDI {direction} '{port_name}' failed: {original_error}"
        else:
            user_msg = f"No MIDI {direction} port matches '{port_name}'"
            technical = f"No MIDI {direction} port name starts with '{port_name}'"

        super().__init__(
            user_message=user_msg,
            technical_message=technical,
            recoverable=False,
            recovery_hint=(
                "Check the Launchpad is plugged in and not held open by another program.\n"
                "Run 'lpxcontrol midi list' to see available ports and set "
                f"'{direction}_port' in your configuration"
            ),
        )
        self.port_name = port_name
        self.direction = direction
        self.original_error = original_error


class SendError(DeviceError):
    """An outbound frame could not be sent to the surface."""

    def __init__(self, frame: list[int], reason: str):
        """
        Initialize send error.

        Args:
            frame: The raw bytes that failed to send
            reason: Why the send failed
        """
        super().__init__(
            user_message="Failed to send message to the Launchpad",
            technical_message=f"Failed send of {bytes(frame).hex(' ')}: {reason}",
            recoverable=True,
        )
        self.frame = frame
        self.reason = reason

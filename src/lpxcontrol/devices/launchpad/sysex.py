"""
Low-level SysEx frame builder for the Launchpad X.

Frames are complete raw byte lists, including the 0xF0/0xF7 framing,
ready for `MidiConnection.send`::

    [0xF0] [0x00 0x20 0x29] [0x02 0x0C] [command] [data...] [0xF7]
     Start   Novation        Launchpad X                      End

Commands
--------

- **0x00**: Layout select (session, note, custom, programmer...)
- **0x03**: LED lighting

LED lighting data is ``[mode, pad, colour...]``:

- **STATIC (0)**: one palette colour (0-127)
- **FLASHING (1)**: flash between two palette colours
- **PULSING (2)**: pulse a palette colour. The control surface uses this
  as its "busy" flash while an action runs
- **RGB (3)**: three 7-bit components

A palette frame is always 11 bytes::

    [0xF0, 0x00, 0x20, 0x29, 0x02, 0x0C, 0x03, mode, pad, colour, 0xF7]

Pads are addressed by their programmer-mode number (11..99), which for the
control buttons is the same as their control change number.
"""

from enum import Enum

SYSEX_START = 0xF0
SYSEX_END = 0xF7
LAUNCHPAD_X_HEADER = [0x00, 0x20, 0x29, 0x02, 0x0C]

LAYOUT_COMMAND = 0x00
LED_COMMAND = 0x03


class LightingMode(Enum):
    """LED lighting modes."""

    STATIC = 0  # Static color from palette
    FLASHING = 1  # Flashing between two colors
    PULSING = 2  # Pulsing color
    RGB = 3  # Direct RGB color


class Layout(Enum):
    """Launchpad X layouts selectable with the layout command."""

    SESSION = 0x00  # Only selectable in DAW mode
    NOTE = 0x01
    CUSTOM_1 = 0x04  # Drum Rack by factory default
    CUSTOM_2 = 0x05  # Keys by factory default
    CUSTOM_3 = 0x06  # Lighting mode in Drum Rack layout by factory default
    CUSTOM_4 = 0x07  # Lighting mode in Session layout by factory default
    DAW_FADERS = 0x0D  # Only selectable in DAW mode
    PROGRAMMER = 0x7F


def _check_data_byte(name: str, value: int) -> int:
    if not 0 <= value <= 127:
        raise ValueError(f"{name} must be 0-127, got {value}")
    return value


class LaunchpadSysEx:
    """Builds raw SysEx frames for one Launchpad model."""

    def __init__(self, header: list[int] | None = None):
        """
        Initialize with SysEx header.

        Args:
            header: Manufacturer + model header bytes (default: Launchpad X)
        """
        self.header = list(header) if header is not None else list(LAUNCHPAD_X_HEADER)

    def _frame(self, command: int, data: list[int]) -> list[int]:
        return [SYSEX_START, *self.header, command, *data, SYSEX_END]

    def select_layout(self, layout: Layout | int) -> list[int]:
        """Build a layout select frame."""
        value = layout.value if isinstance(layout, Layout) else _check_data_byte("layout", layout)
        return self._frame(LAYOUT_COMMAND, [value])

    def led_palette(self, mode: LightingMode, pad: int, colour: int) -> list[int]:
        """
        Build an 11-byte palette LED frame.

        Args:
            mode: STATIC or PULSING
            pad: Programmer-mode pad number
            colour: Palette index (0-127)
        """
        if mode not in (LightingMode.STATIC, LightingMode.PULSING):
            raise ValueError(f"{mode.name} does not take a single palette colour")
        return self._frame(
            LED_COMMAND,
            [mode.value, _check_data_byte("pad", pad), _check_data_byte("colour", colour)],
        )

    def led_static(self, pad: int, colour: int) -> list[int]:
        """Steady palette colour."""
        return self.led_palette(LightingMode.STATIC, pad, colour)

    def led_pulsing(self, pad: int, colour: int) -> list[int]:
        """Pulsing palette colour."""
        return self.led_palette(LightingMode.PULSING, pad, colour)

    def led_rgb(self, pad: int, r: int, g: int, b: int) -> list[int]:
        """Build a 13-byte RGB LED frame (components 0-127)."""
        return self._frame(
            LED_COMMAND,
            [
                LightingMode.RGB.value,
                _check_data_byte("pad", pad),
                _check_data_byte("red", r),
                _check_data_byte("green", g),
                _check_data_byte("blue", b),
            ],
        )

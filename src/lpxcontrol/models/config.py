"""Application configuration model."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from lpxcontrol.utils.persistence import PydanticPersistence

DEFAULT_CONFIG_DIR = Path.home() / ".lpxcontrol"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.json"


class AppConfig(BaseModel):
    """Application configuration and settings."""

    # MIDI ports, matched by name prefix
    input_port: str = Field(
        default="Launchpad X:Launchpad X MIDI 2",
        description="Prefix of the MIDI input port that delivers control and note events",
    )
    output_port: str = Field(
        default="Launchpad X:Launchpad X MIDI 1",
        description="Prefix of the MIDI output port used for LED colour commands",
    )
    client_name: str = Field(
        default="120-Proof-CTL", description="Client name this program registers with the MIDI system"
    )

    # Palette colours used for feedback
    enabled_colour: int = Field(default=87, ge=0, le=127, description="Control pad ready")
    disabled_colour: int = Field(default=5, ge=0, le=127, description="Control pad suppressed")
    selected_colour: int = Field(default=67, ge=0, le=127, description="Control pad in use")

    # Debounce after notes are played
    cooldown_seconds: int = Field(
        default=2, ge=0, description="Seconds control pads stay inactive after a note is struck"
    )
    tick_interval: float = Field(
        default=0.1, gt=0.0, le=1.0, description="Activity timer period (seconds)"
    )

    # Control pad layout
    control_floor: int = Field(
        default=19,
        ge=0,
        le=127,
        description="Control ids below this are device noise and ignored",
    )
    control_pads: list[int] = Field(
        default_factory=lambda: [i * 10 + 9 for i in range(1, 9)],
        description="Right-hand column control pads that carry actions and status colours",
    )
    lock_sequence: list[int] = Field(
        default_factory=lambda: [91, 92, 93, 94],
        description="Pads pressed in ascending order to lock and descending order to unlock",
    )

    # External actions
    actions_home_env: str = Field(
        default="Home120Proof",
        description="Environment variable holding the base directory for actions",
    )
    actions_subdir: str = Field(default="subs", description="Sub directory holding action executables")

    @field_validator("control_pads")
    @classmethod
    def validate_control_pads(cls, pads: list[int]) -> list[int]:
        """Pads must be valid MIDI data bytes."""
        for pad in pads:
            if not 0 <= pad <= 127:
                raise ValueError(f"pad {pad} is outside 0-127")
        return pads

    @field_validator("lock_sequence")
    @classmethod
    def validate_lock_sequence(cls, sequence: list[int]) -> list[int]:
        """The gesture is compared step by step against last id + 1."""
        if len(sequence) < 2:
            raise ValueError("lock sequence needs at least two pads")
        if sequence[0] < 0 or sequence[-1] > 127:
            raise ValueError("lock sequence pads must be within 0-127")
        if any(b != a + 1 for a, b in zip(sequence, sequence[1:])):
            raise ValueError("lock sequence must be strictly consecutive ascending ids")
        return sequence

    @model_validator(mode="after")
    def validate_layout(self) -> "AppConfig":
        """Control pads must sit between the noise floor and the lock gesture."""
        for pad in self.control_pads:
            if pad < self.control_floor or pad >= self.lock_sequence[0]:
                raise ValueError(
                    f"control pad {pad} must be in [{self.control_floor}, {self.lock_sequence[0]})"
                )
        return self

    @property
    def actions_dir(self) -> Path:
        """Directory holding ON-CTL/OFF-CTL executables (resolved at call time)."""
        return Path(os.environ.get(self.actions_home_env, ".")) / self.actions_subdir

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        A missing file is created with defaults. A corrupted file is left
        untouched and defaults are used.

        Args:
            path: Path to config file. If None, uses ~/.lpxcontrol/config.json.
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        return PydanticPersistence.ensure_valid_or_create(path, cls)

    @classmethod
    def load(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config strictly, raising on a corrupted file.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        return PydanticPersistence.load_json_or_default(path, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        if path is None:
            path = DEFAULT_CONFIG_PATH

        PydanticPersistence.save_json(self, path)

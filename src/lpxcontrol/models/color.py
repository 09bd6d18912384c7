"""Color model for RGB LED control."""

from pydantic import BaseModel, ConfigDict, Field


class Color(BaseModel):
    """7-bit RGB color as the Launchpad SysEx RGB mode expects it (0-127)."""

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=127, description="Red (0-127)")
    g: int = Field(ge=0, le=127, description="Green (0-127)")
    b: int = Field(ge=0, le=127, description="Blue (0-127)")

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

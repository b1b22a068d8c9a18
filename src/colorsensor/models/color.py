"""RGB color model for display collaborators."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import DecidedColor


class Color(BaseModel):
    """Standard 8-bit RGB color.

    Frozen so instances can be shared across snapshots.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @classmethod
    def off(cls) -> "Color":
        """Create off (black) color."""
        return cls(r=0, g=0, b=0)

    @classmethod
    def from_raw(cls, r: int, g: int, b: int) -> "Color":
        """Build a color from unvalidated sensor components, clamped to 0-255."""
        return cls(
            r=min(max(r, 0), 255),
            g=min(max(g, 0), 255),
            b=min(max(b, 0), 255),
        )

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Convert to CSS hex color string (e.g., '#FF0000').

        Example:
            >>> Color(r=255, g=140, b=0).to_hex()
            '#FF8C00'
        """
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


# Swatch colors for each decided index
DECIDED_COLOR_RGB: dict[DecidedColor, Color] = {
    DecidedColor.UNDECIDED: Color.off(),
    DecidedColor.RED: Color(r=255, g=0, b=0),
    DecidedColor.BLUE: Color(r=0, g=0, b=255),
    DecidedColor.YELLOW: Color(r=255, g=235, b=4),
    DecidedColor.PURPLE: Color(r=140, g=51, b=191),
    DecidedColor.ORANGE: Color(r=255, g=140, b=0),
    DecidedColor.GREEN: Color(r=0, g=255, b=0),
}

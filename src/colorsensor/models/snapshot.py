"""Per-channel display snapshot.

The pipeline publishes a new immutable snapshot every tick by swapping a
single reference. Readers on any thread get a consistent view and never
see partially updated slots.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .color import Color
from .enums import BaseColor, DecidedColor

# Always four slots, independent of the active channel count
SNAPSHOT_SLOTS = 4


class ChannelDisplay(BaseModel):
    """One slot of the display snapshot."""

    model_config = ConfigDict(frozen=True)

    has_data: bool = False
    r: int = 0
    g: int = 0
    b: int = 0
    c: int = 0
    base_color: BaseColor = BaseColor.NONE
    final_color: DecidedColor = DecidedColor.UNDECIDED

    @property
    def base_color_name(self) -> str:
        return self.base_color.value

    @property
    def final_color_name(self) -> str:
        return self.final_color.display_name

    @property
    def raw_color(self) -> Color:
        """Raw RGB reading as a swatch color (black when there is no data)."""
        if not self.has_data:
            return Color.off()
        return Color.from_raw(self.r, self.g, self.b)


class DisplaySnapshot(BaseModel):
    """Fixed four-slot observability record."""

    model_config = ConfigDict(frozen=True)

    channels: tuple[ChannelDisplay, ...] = Field(
        default_factory=lambda: tuple(ChannelDisplay() for _ in range(SNAPSHOT_SLOTS))
    )

    @field_validator("channels")
    @classmethod
    def validate_length(cls, v: tuple[ChannelDisplay, ...]) -> tuple[ChannelDisplay, ...]:
        if len(v) != SNAPSHOT_SLOTS:
            raise ValueError(f"snapshot must have exactly {SNAPSHOT_SLOTS} slots")
        return v

    @classmethod
    def empty(cls) -> "DisplaySnapshot":
        """Snapshot with every slot in the no-data state."""
        return cls()

    def __len__(self) -> int:
        return len(self.channels)

    def __getitem__(self, index: int) -> ChannelDisplay:
        return self.channels[index]

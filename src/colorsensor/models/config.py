"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field

from colorsensor.utils.persistence import PydanticPersistence

from .enums import ClassifierStrategy

DEFAULT_CONFIG_PATH = Path.home() / ".colorsensor" / "config.json"


class SerialConfig(BaseModel):
    """Serial connection settings for the sensor board."""

    port: str = Field(
        default="COM3",
        description="Serial port the sensor board is attached to (e.g. COM3, /dev/ttyUSB0)",
    )
    baud_rate: int = Field(
        default=115200, gt=0, description="Must match Serial.begin() on the board"
    )
    read_timeout_ms: int = Field(
        default=50,
        gt=0,
        description="Per-byte read timeout; bounds how long the reader takes to notice a stop",
    )
    write_timeout_ms: int = Field(default=50, gt=0, description="Per-write timeout")
    dtr_enable: bool = Field(
        default=False,
        description="Assert DTR on open (ESP32 boards auto-reset when DTR/RTS toggle)",
    )
    rts_enable: bool = Field(default=False, description="Assert RTS on open")


class ClassifierConfig(BaseModel):
    """Per-channel base color classification settings."""

    strategy: ClassifierStrategy = Field(
        default=ClassifierStrategy.THRESHOLD,
        description="threshold: absolute component thresholds; ratio: normalized dominance",
    )
    no_data_timeout_ms: int = Field(
        default=700,
        ge=0,
        description="Channel is treated as empty when its last sample is older than this (0 = never)",
    )
    min_clear: int = Field(
        default=10, description="Readings with clear below this are too dark to classify"
    )

    # Threshold strategy (precedence: yellow, blue, red)
    yellow_r_min: int = Field(default=100, description="Yellow needs r at least this")
    yellow_g_min: int = Field(default=220, description="Yellow needs g at least this")
    blue_min: int = Field(default=100, description="Blue needs b at least this")
    red_min: int = Field(default=100, description="Red needs r at least this")

    # Ratio strategy (precedence: red, blue, yellow)
    red_dominant_min: float = Field(default=0.55, ge=0.0, le=1.0)
    blue_dominant_min: float = Field(default=0.50, ge=0.0, le=1.0)
    yellow_rg_min: float = Field(default=0.35, ge=0.0, le=1.0)
    yellow_b_max: float = Field(default=0.25, ge=0.0, le=1.0)


class AppConfig(BaseModel):
    """Application configuration and settings."""

    serial: SerialConfig = Field(default_factory=SerialConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)

    # Channels
    max_channels: int = Field(
        default=4, ge=1, le=4, description="Active sensor channels multiplexed on the link"
    )

    # Stabilization and apply gating
    stable_frames: int = Field(
        default=3, ge=1, description="Consecutive identical decisions needed to confirm"
    )
    apply_cooldown_ms: int = Field(
        default=120, ge=0, description="Minimum time between two applied color changes"
    )

    # Lifecycle
    warmup_ms: int = Field(
        default=800,
        ge=0,
        description="Delay between opening the port and starting the reader (board resets on open)",
    )
    reader_join_timeout_ms: int = Field(
        default=200, ge=0, description="How long shutdown waits for the reader thread"
    )
    fault_backoff_ms: int = Field(
        default=50, ge=0, description="Reader pause after a stream fault before retrying"
    )

    # Line framing
    line_buffer_limit: int = Field(
        default=256, gt=0, description="Longest accepted line; longer garbage is discarded"
    )
    line_queue_limit: int = Field(
        default=1024,
        gt=0,
        description="Pending lines kept when the consumer falls behind (oldest dropped first)",
    )

    # Host loop (used by the CLI)
    tick_interval_ms: int = Field(default=16, gt=0, description="Host loop period")

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses default location
                  (~/.colorsensor/config.json).

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

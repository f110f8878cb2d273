"""Configuration settings for DigitFlip."""

import os
from pathlib import Path

from pydantic import BaseModel, Field

PACKAGED_GLYPH_SETS_DIR = Path(__file__).resolve().parent.parent / "glyph_sets"

OVERRIDE_DIR_ENV = "DIGITFLIP_OVERRIDE_DIR"


class EncoderConfig(BaseModel):
    """Configuration for input validation and display formatting."""

    max_input_length: int = Field(
        default=50,
        ge=1,
        le=500,
        description="Maximum number of characters accepted after lowercasing",
    )
    word_break_separator: str = Field(
        default="   ",
        min_length=1,
        description="Separator emitted for every word break in the digit line",
    )


class PlaceholderPalette(BaseModel):
    """Colors used by the synthetic placeholder glyph."""

    background: str = "#1a1a2e"
    border: str = "#e94560"
    letter: str = "#e94560"
    code: str = "#0f3460"


class GlyphConfig(BaseModel):
    """Configuration for glyph documents and the placeholder tier."""

    default_view_box_width: float = Field(
        default=100.0,
        gt=0,
        description="View box width assumed when a document declares none",
    )
    default_view_box_height: float = Field(
        default=100.0,
        gt=0,
        description="View box height assumed when a document declares none",
    )
    placeholder_width: int = Field(default=60, gt=0, description="Placeholder frame width")
    placeholder_height: int = Field(default=80, gt=0, description="Placeholder frame height")
    placeholder_palette: PlaceholderPalette = Field(default_factory=PlaceholderPalette)


class StoreConfig(BaseModel):
    """Where symbol sets and their artwork are read from."""

    symbol_set: str = Field(
        default="classic",
        min_length=1,
        description="Symbol set selected at startup",
    )
    override_dir: Path | None = Field(
        default=None,
        description="Directory holding runtime-installed symbol sets (tier 1)",
    )
    packaged_dir: Path = Field(
        default=PACKAGED_GLYPH_SETS_DIR,
        description="Directory holding symbol sets shipped with the package (tier 2)",
    )
    config_file: str = Field(
        default="letter_map.json",
        description="Name of the configuration record inside each symbol set",
    )


class LayoutConfig(BaseModel):
    """Fixed cell geometry for preview rows."""

    cell_width: float = Field(default=60.0, gt=0, description="Width of one letter cell")
    cell_height: float = Field(default=80.0, gt=0, description="Height of one letter cell")
    word_gap: float = Field(default=30.0, ge=0, description="Width of one word break")
    spacing: float = Field(default=2.0, ge=0, description="Gap between neighbouring cells")
    row_gap: float = Field(default=24.0, ge=0, description="Gap between the two preview rows")
    background: str = Field(default="#f5f0eb", description="Paper color behind the preview rows")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class DigitFlipSettings(BaseModel):
    """Main application settings."""

    encoder: EncoderConfig = Field(default_factory=EncoderConfig)
    glyph: GlyphConfig = Field(default_factory=GlyphConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> DigitFlipSettings:
    """Get default application settings.

    The override directory is taken from ``DIGITFLIP_OVERRIDE_DIR`` when set.
    """
    override = os.environ.get(OVERRIDE_DIR_ENV)
    store = StoreConfig(override_dir=Path(override) if override else None)
    return DigitFlipSettings(store=store)

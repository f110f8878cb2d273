"""Configuration management for digitflip.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, the environment, or defaults.

Key classes:
- EncoderConfig: Input validation and digit line settings
- GlyphConfig: Glyph document defaults and placeholder appearance
- StoreConfig: Symbol set locations
- LayoutConfig: Preview row geometry
- LoggingConfig: Logging settings
- DigitFlipSettings: Main application settings
"""

from digitflip.config.settings import (
    OVERRIDE_DIR_ENV,
    PACKAGED_GLYPH_SETS_DIR,
    DigitFlipSettings,
    EncoderConfig,
    GlyphConfig,
    LayoutConfig,
    LoggingConfig,
    PlaceholderPalette,
    StoreConfig,
    get_default_settings,
)

__all__ = [
    "OVERRIDE_DIR_ENV",
    "PACKAGED_GLYPH_SETS_DIR",
    "DigitFlipSettings",
    "EncoderConfig",
    "GlyphConfig",
    "LayoutConfig",
    "LoggingConfig",
    "PlaceholderPalette",
    "StoreConfig",
    "get_default_settings",
]

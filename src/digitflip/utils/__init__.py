"""Utility modules for DigitFlip."""

from digitflip.utils.logging import (
    ResolutionLogger,
    ResolutionStats,
    configure_logging,
    get_logger,
)

__all__ = ["ResolutionLogger", "ResolutionStats", "configure_logging", "get_logger"]

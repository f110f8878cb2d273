"""Logging utilities for DigitFlip."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

import structlog

LOGGER_NAME = "digitflip"

# Fallback details kept per session; the counter keeps counting past it
MAX_RECORDED_FALLBACKS = 100


def get_logger() -> structlog.stdlib.BoundLogger:
    """Get the package logger used when a component is given none."""
    return structlog.get_logger(LOGGER_NAME)


@dataclass
class ResolutionStats:
    """Counts of glyph resolutions by tier."""

    override_count: int = 0
    packaged_count: int = 0
    synthetic_count: int = 0
    fallback_count: int = 0
    cache_hits: int = 0
    fallbacks: list[tuple[str, str]] = field(default_factory=list)

    @property
    def resolved_count(self) -> int:
        """Total number of glyphs parsed (cache misses)."""
        return self.override_count + self.packaged_count + self.synthetic_count

    def to_dict(self) -> dict[str, int]:
        """Serialize the counters."""
        return {
            "override": self.override_count,
            "packaged": self.packaged_count,
            "synthetic": self.synthetic_count,
            "fallback": self.fallback_count,
            "cache_hits": self.cache_hits,
        }


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls replace the handlers installed by earlier ones
    for handler in list(root_logger.handlers):
        if getattr(handler, "digitflip_handler", False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler.digitflip_handler = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler.digitflip_handler = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = get_logger()
    logger.debug("Logging initialized", log_file=str(log_file) if log_file else None, level=file_level)

    return logger


class ResolutionLogger:
    """Logger for tracking glyph resolution and cache activity."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger or get_logger()
        self._stats = ResolutionStats()

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        """The underlying structlog logger."""
        return self._logger

    def log_resolved(self, symbol_set_id: str, glyph_ref: str, source: str) -> None:
        """Log a glyph parsed from the given tier."""
        self._logger.debug("Glyph resolved", symbol_set=symbol_set_id, glyph=glyph_ref, source=source)
        if source == "override":
            self._stats.override_count += 1
        elif source == "packaged":
            self._stats.packaged_count += 1
        else:
            self._stats.synthetic_count += 1

    def log_cache_hit(self, symbol_set_id: str, glyph_ref: str) -> None:
        """Log a lookup served from the cache."""
        self._logger.debug("Glyph cache hit", symbol_set=symbol_set_id, glyph=glyph_ref)
        self._stats.cache_hits += 1

    def log_fallback(self, symbol_set_id: str, glyph_ref: str, source: str) -> None:
        """Log a real glyph that could not be parsed and was replaced."""
        self._logger.warning(
            "Glyph document could not be parsed, using placeholder",
            symbol_set=symbol_set_id,
            glyph=glyph_ref,
            source=source,
        )
        self._stats.fallback_count += 1
        if len(self._stats.fallbacks) < MAX_RECORDED_FALLBACKS:
            self._stats.fallbacks.append((glyph_ref, source))

    def log_invalidated(self, symbol_set_id: str | None, entries: int) -> None:
        """Log a cache flush."""
        self._logger.info("Glyph cache invalidated", symbol_set=symbol_set_id, entries=entries)

    @property
    def stats(self) -> ResolutionStats:
        """Get current resolution statistics."""
        return self._stats

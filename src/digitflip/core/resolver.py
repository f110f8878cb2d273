"""Tiered lookup of glyph documents and symbol set configuration.

Glyph documents are looked up through an ordered chain of strategies:

1. Override store (runtime-installed symbol sets, optional)
2. Packaged store (sets shipped inside the package)
3. Synthetic placeholder (always succeeds)

Configuration records use the two store tiers only; if neither yields a valid
record, ConfigurationError is raised.

Key classes:
- GlyphStore / DirectoryStore: Byte-stream providers
- RawDefinition: Document text tagged with the tier it came from
- GlyphResolver: Runs the strategy chain
"""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol
from xml.sax.saxutils import escape, quoteattr

import pydantic
import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

from digitflip.config import GlyphConfig, StoreConfig
from digitflip.domain import DigitCode, Letter, SymbolEntry, SymbolSet, SymbolSetInfo, SymbolSetStatus
from digitflip.exceptions import ConfigurationError, StoreError, UnsafeFileNameError
from digitflip.utils import get_logger

_SET_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")
_LETTER_KEY_RE = re.compile(r"^[a-z]$")
_GLYPH_FILE_FORBIDDEN = ("\x00", "/", "\\")


class DefinitionSource(Enum):
    """The tier a glyph document came from."""

    OVERRIDE = "override"
    PACKAGED = "packaged"
    SYNTHETIC = "synthetic"


@dataclass(frozen=True, slots=True)
class RawDefinition:
    """Unparsed glyph document.

    Attributes:
        text: Document text
        source: Tier that produced it
    """

    text: str
    source: DefinitionSource


class GlyphStore(Protocol):
    """A source of symbol set files."""

    source: DefinitionSource

    def read(self, symbol_set_id: str, file_name: str) -> bytes | None:
        """Return the file's bytes, or None if the store does not have it."""
        ...

    def list_sets(self) -> list[str]:
        """List the symbol set ids the store holds."""
        ...


class DirectoryStore:
    """Glyph store backed by a directory with one subdirectory per set.

    Files are read from ``<root>/<symbol_set_id>/<file_name>``. A root that
    does not exist is an empty store, not an error.

    Example:
        store = DirectoryStore(Path("~/.digitflip").expanduser(), DefinitionSource.OVERRIDE)
        data = store.read("classic", "a.svg")
    """

    def __init__(self, root: Path, source: DefinitionSource = DefinitionSource.PACKAGED) -> None:
        """Initialize the store.

        Args:
            root: Directory holding the symbol set directories
            source: Tier label reported for documents read from here
        """
        self.root = Path(root)
        self.source = source

    def _set_dir(self, symbol_set_id: str) -> Path:
        if not _SET_ID_RE.match(symbol_set_id):
            raise UnsafeFileNameError(symbol_set_id)
        return self.root / symbol_set_id

    def read(self, symbol_set_id: str, file_name: str) -> bytes | None:
        """Read one file of a symbol set.

        Args:
            symbol_set_id: Set directory name
            file_name: File name inside the set directory

        Returns:
            File contents, or None if the file does not exist

        Raises:
            UnsafeFileNameError: If the name escapes the set directory
            OSError: If the file exists but cannot be read
        """
        set_dir = self._set_dir(symbol_set_id)
        if not file_name:
            raise UnsafeFileNameError(file_name)

        try:
            target = (set_dir / file_name).resolve()
        except ValueError:
            # Embedded NUL bytes
            raise UnsafeFileNameError(file_name) from None
        if not target.is_relative_to(set_dir.resolve()):
            raise UnsafeFileNameError(file_name)

        if not target.is_file():
            return None
        return target.read_bytes()

    def list_sets(self) -> list[str]:
        """List set directories in name order."""
        if not self.root.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.root.iterdir()
            if entry.is_dir() and _SET_ID_RE.match(entry.name)
        )

    def __repr__(self) -> str:
        return f"DirectoryStore({str(self.root)!r}, {self.source.value})"


def open_stores(config: StoreConfig) -> list[DirectoryStore]:
    """Build the store chain for the given settings, override tier first."""
    stores: list[DirectoryStore] = []
    if config.override_dir is not None:
        stores.append(DirectoryStore(config.override_dir, DefinitionSource.OVERRIDE))
    stores.append(DirectoryStore(config.packaged_dir, DefinitionSource.PACKAGED))
    return stores


# ---------------------------------------------------------------------------
# Glyph documents
# ---------------------------------------------------------------------------


def placeholder_document(letter: str, code: DigitCode | str, config: GlyphConfig | None = None) -> str:
    """Generate the synthetic placeholder document for a letter.

    A rounded card showing the letter and its code, used whenever no real
    artwork exists. The code is written exactly as authored, so "01" keeps
    its leading zero.

    Args:
        letter: The letter shown on the card
        code: Its digit code
        config: Glyph settings (frame size and palette)

    Returns:
        Document text
    """
    config = config or GlyphConfig()
    palette = config.placeholder_palette
    width = config.placeholder_width
    height = config.placeholder_height
    center = width / 2

    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}"'
        f' viewBox="0 0 {width} {height}">'
        f'<rect x="2" y="2" width="{width - 4}" height="{height - 4}" rx="8"'
        f" fill={quoteattr(palette.background)} stroke={quoteattr(palette.border)} stroke-width=\"2\"/>"
        f'<text x="{center:g}" y="{height * 35 / 80:g}" text-anchor="middle"'
        f' fill={quoteattr(palette.letter)} font-size="24" font-family="monospace">{escape(letter)}</text>'
        f'<text x="{center:g}" y="{height * 60 / 80:g}" text-anchor="middle"'
        f' fill={quoteattr(palette.code)} font-size="16" font-family="monospace">{escape(str(code))}</text>'
        "</svg>"
    )


class ResolutionStrategy(Protocol):
    """One tier of the glyph lookup chain."""

    def resolve(self, letter: Letter, symbol_set_id: str) -> RawDefinition | None:
        ...


class StoreStrategy:
    """Looks a glyph up in a store.

    Store failures and bytes that are not valid UTF-8 count as a miss.
    """

    def __init__(self, store: GlyphStore, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self.store = store
        self._logger = logger or get_logger()

    def resolve(self, letter: Letter, symbol_set_id: str) -> RawDefinition | None:
        try:
            data = self.store.read(symbol_set_id, letter.glyph_ref)
        except (StoreError, OSError) as e:
            self._logger.warning(
                "Glyph store read failed",
                symbol_set=symbol_set_id,
                glyph=letter.glyph_ref,
                source=self.store.source.value,
                error=str(e),
            )
            return None

        if data is None:
            return None

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            self._logger.warning(
                "Glyph file is not valid UTF-8",
                symbol_set=symbol_set_id,
                glyph=letter.glyph_ref,
                source=self.store.source.value,
            )
            return None

        return RawDefinition(text=text, source=self.store.source)


class SyntheticStrategy:
    """Final tier: generates a placeholder document. Never misses."""

    def __init__(self, config: GlyphConfig | None = None) -> None:
        self._config = config or GlyphConfig()

    def resolve(self, letter: Letter, symbol_set_id: str) -> RawDefinition:
        return RawDefinition(
            text=placeholder_document(letter.char, letter.code, self._config),
            source=DefinitionSource.SYNTHETIC,
        )


class GlyphResolver:
    """Runs the glyph lookup chain.

    The chain always ends with the synthetic tier, so ``resolve`` never
    fails.

    Example:
        resolver = GlyphResolver.from_stores(open_stores(StoreConfig()))
        raw = resolver.resolve(letter, "classic")
    """

    def __init__(
        self,
        strategies: Sequence[ResolutionStrategy],
        glyph_config: GlyphConfig | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._synthetic = SyntheticStrategy(glyph_config)
        self._strategies = list(strategies)
        self._logger = logger or get_logger()

    @classmethod
    def from_stores(
        cls,
        stores: Iterable[GlyphStore],
        glyph_config: GlyphConfig | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> "GlyphResolver":
        """Build a resolver with one store strategy per store, in order."""
        return cls(
            [StoreStrategy(store, logger) for store in stores],
            glyph_config=glyph_config,
            logger=logger,
        )

    def resolve(self, letter: Letter, symbol_set_id: str) -> RawDefinition:
        """Find the document for a letter.

        Args:
            letter: Encoded letter (its glyph_ref names the file)
            symbol_set_id: Active symbol set

        Returns:
            The first hit in tier order, or the synthetic placeholder
        """
        for strategy in self._strategies:
            raw = strategy.resolve(letter, symbol_set_id)
            if raw is not None:
                return raw

        self._logger.debug(
            "No artwork found, using placeholder",
            symbol_set=symbol_set_id,
            glyph=letter.glyph_ref,
        )
        return self.synthesize(letter)

    def synthesize(self, letter: Letter) -> RawDefinition:
        """Generate the placeholder document for a letter."""
        return self._synthetic.resolve(letter, "")


# ---------------------------------------------------------------------------
# Configuration records
# ---------------------------------------------------------------------------


class LetterRecord(BaseModel):
    """One entry of the ``letters`` object."""

    model_config = ConfigDict(strict=True, populate_by_name=True)

    code: str = Field(min_length=1)
    glyph_file: str = Field(alias="glyphFile", min_length=1)

    @field_validator("glyph_file")
    @classmethod
    def _check_glyph_file(cls, value: str) -> str:
        if any(ch in value for ch in _GLYPH_FILE_FORBIDDEN) or value in (".", ".."):
            raise ValueError(f"glyphFile must be a plain file name, got {value!r}")
        return value


class SymbolSetHeader(BaseModel):
    """Metadata fields of a configuration record."""

    model_config = ConfigDict(strict=True, populate_by_name=True)

    glyph_set: str = Field(alias="glyphSet")
    display_name: str = Field(alias="displayName")
    status: SymbolSetStatus


class LetterMapRecord(SymbolSetHeader):
    """A complete configuration record."""

    letters: dict[str, LetterRecord]

    @field_validator("letters")
    @classmethod
    def _check_letter_keys(cls, value: dict[str, LetterRecord]) -> dict[str, LetterRecord]:
        for key in value:
            if not _LETTER_KEY_RE.match(key):
                raise ValueError(f"letter key must be a single a-z character, got {key!r}")
        return value


def decode_symbol_set(data: bytes | str, symbol_set_id: str) -> SymbolSet:
    """Decode and validate a configuration record.

    Args:
        data: Raw ``letter_map.json`` contents
        symbol_set_id: Id given to the resulting set

    Returns:
        The symbol set

    Raises:
        ConfigurationError: If the record is not structurally valid
    """
    try:
        record = LetterMapRecord.model_validate_json(data)
    except pydantic.ValidationError as e:
        raise ConfigurationError(symbol_set_id) from e

    return SymbolSet(
        id=symbol_set_id,
        display_name=record.display_name,
        status=record.status,
        symbols={
            key: SymbolEntry.of(entry.code, entry.glyph_file)
            for key, entry in record.letters.items()
        },
    )


def _read_config(
    store: GlyphStore,
    symbol_set_id: str,
    config_file: str,
    logger: structlog.stdlib.BoundLogger,
) -> bytes | None:
    try:
        return store.read(symbol_set_id, config_file)
    except (StoreError, OSError) as e:
        logger.warning(
            "Configuration read failed",
            symbol_set=symbol_set_id,
            source=store.source.value,
            error=str(e),
        )
        return None


def load_symbol_set(
    symbol_set_id: str,
    stores: Sequence[GlyphStore],
    config_file: str = "letter_map.json",
    logger: structlog.stdlib.BoundLogger | None = None,
) -> SymbolSet:
    """Load a symbol set's configuration record.

    Tiers are tried in order; a missing or invalid record falls through to
    the next tier.

    Args:
        symbol_set_id: Set to load
        stores: Store tiers, override first
        config_file: Record file name inside the set directory
        logger: Logger for tier diagnostics

    Returns:
        The first valid symbol set

    Raises:
        ConfigurationError: If no tier yields a valid record
    """
    logger = logger or get_logger()

    for store in stores:
        data = _read_config(store, symbol_set_id, config_file, logger)
        if data is None:
            continue
        try:
            symbol_set = decode_symbol_set(data, symbol_set_id)
        except ConfigurationError as e:
            logger.warning(
                "Invalid configuration record",
                symbol_set=symbol_set_id,
                source=store.source.value,
                error=str(e.__cause__),
            )
            continue

        logger.info(
            "Symbol set loaded",
            symbol_set=symbol_set_id,
            source=store.source.value,
            letters=len(symbol_set.symbols),
        )
        return symbol_set

    raise ConfigurationError(symbol_set_id)


def discover_symbol_sets(
    stores: Sequence[GlyphStore],
    config_file: str = "letter_map.json",
    logger: structlog.stdlib.BoundLogger | None = None,
) -> list[SymbolSetInfo]:
    """List the symbol sets available across all stores.

    Only the metadata fields are read. Sets whose record cannot be read are
    skipped. When several stores hold the same id, the earliest readable one
    wins.

    Returns:
        Available sets first, then by display name
    """
    logger = logger or get_logger()
    found: dict[str, SymbolSetInfo] = {}

    for store in stores:
        for symbol_set_id in store.list_sets():
            if symbol_set_id in found:
                continue
            data = _read_config(store, symbol_set_id, config_file, logger)
            if data is None:
                continue
            try:
                header = SymbolSetHeader.model_validate_json(data)
            except pydantic.ValidationError:
                logger.debug("Skipping unreadable symbol set", symbol_set=symbol_set_id)
                continue
            found[symbol_set_id] = SymbolSetInfo(
                id=symbol_set_id,
                display_name=header.display_name,
                status=header.status,
            )

    return sorted(found.values(), key=lambda info: (not info.is_available, info.display_name))

"""Flip session orchestration.

A FlipSession wires the stores, resolver, cache and encoder together for one
user: it owns the active symbol set and turns phrases into encoded elements
paired with their glyph records.
"""

from dataclasses import dataclass, field
from typing import Any

import structlog

from digitflip.config import DigitFlipSettings, get_default_settings
from digitflip.core.cache import GlyphCache
from digitflip.core.encoder import Encoder
from digitflip.core.resolver import (
    DefinitionSource,
    GlyphResolver,
    GlyphStore,
    discover_symbol_sets,
    load_symbol_set,
    open_stores,
)
from digitflip.domain import (
    EncodedElement,
    EncodedResult,
    GlyphRecord,
    Letter,
    SymbolSet,
    SymbolSetInfo,
    ValidationError,
)
from digitflip.exceptions import ConfigurationError, MissingMappingError
from digitflip.utils import get_logger


@dataclass(frozen=True)
class FlipResult:
    """Outcome of flipping one phrase.

    Attributes:
        text: The input as given
        validation_error: Why the input was rejected, if it was
        encoded: Encoded elements in display order (None when rejected)
        glyphs: One record per element, None for word breaks
        sources: One resolution tier per element, None for word breaks
    """

    text: str
    validation_error: ValidationError | None = None
    encoded: EncodedResult | None = None
    glyphs: tuple[GlyphRecord | None, ...] = field(default_factory=tuple)
    sources: tuple[DefinitionSource | None, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        """Check if the phrase was encoded."""
        return self.validation_error is None and self.encoded is not None

    @property
    def digit_display(self) -> str:
        """The "write these numbers" line ("" when nothing was encoded)."""
        return self.encoded.digit_display if self.encoded is not None else ""

    @property
    def elements(self) -> tuple[EncodedElement, ...]:
        """Encoded elements in display order."""
        return self.encoded.elements if self.encoded is not None else ()

    def pairs(self) -> list[tuple[EncodedElement, GlyphRecord | None]]:
        """Elements paired with their glyph records."""
        return list(zip(self.elements, self.glyphs, strict=True))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        elements: list[dict[str, Any]] = []
        for element, source in zip(self.elements, self.sources, strict=True):
            if isinstance(element, Letter):
                elements.append({
                    "type": "letter",
                    "char": element.char,
                    "code": element.code.text,
                    "glyph": element.glyph_ref,
                    "source": source.value if source else None,
                })
            else:
                elements.append({"type": "word_break"})
        return {
            "text": self.text,
            "error": self.validation_error.message if self.validation_error else None,
            "digits": self.digit_display,
            "elements": elements,
        }


class FlipSession:
    """Owns the active symbol set and everything needed to flip phrases.

    Example:
        session = FlipSession()
        session.select_symbol_set("classic")
        result = session.flip("hi you")
        print(result.digit_display)
    """

    def __init__(
        self,
        settings: DigitFlipSettings | None = None,
        stores: list[GlyphStore] | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            settings: Application settings (defaults honour DIGITFLIP_OVERRIDE_DIR)
            stores: Store tiers, override first (built from settings if None)
            logger: Logger shared by every component
        """
        self.settings = settings or get_default_settings()
        self.logger = logger or get_logger()
        self.stores: list[GlyphStore] = (
            stores if stores is not None else list(open_stores(self.settings.store))
        )
        self.resolver = GlyphResolver.from_stores(self.stores, self.settings.glyph, self.logger)
        self.cache = GlyphCache(self.resolver, self.settings.glyph, self.logger)
        self.encoder = Encoder(self.settings.encoder)

    @property
    def symbol_set(self) -> SymbolSet | None:
        """The active symbol set, if one has been selected."""
        return self.cache.symbol_set

    def available_sets(self) -> list[SymbolSetInfo]:
        """List the symbol sets found across all stores."""
        return discover_symbol_sets(self.stores, self.settings.store.config_file, self.logger)

    def select_symbol_set(self, symbol_set_id: str | None = None, preload: bool = True) -> SymbolSet:
        """Load a symbol set and make it active.

        The previous set stays active if loading fails.

        Args:
            symbol_set_id: Set to select (default from settings)
            preload: If True, resolve every glyph of the set right away

        Returns:
            The newly active set

        Raises:
            ConfigurationError: If the set cannot be loaded or is not available yet
        """
        symbol_set_id = symbol_set_id or self.settings.store.symbol_set
        symbol_set = load_symbol_set(
            symbol_set_id,
            self.stores,
            self.settings.store.config_file,
            self.logger,
        )
        if not symbol_set.is_available:
            raise ConfigurationError(
                symbol_set_id,
                message=f"Symbol set '{symbol_set.display_name}' is not available yet.",
            )

        self.cache.activate(symbol_set, preload=preload)
        return symbol_set

    def flip(self, text: str) -> FlipResult:
        """Encode a phrase and resolve its glyphs.

        Selects the default symbol set first if none is active.

        Args:
            text: User input

        Returns:
            The result; rejected input carries its validation error

        Raises:
            ConfigurationError: If no set was active and the default cannot be loaded
            MissingMappingError: If a letter has no entry in the active set
        """
        error = self.encoder.validate(text)
        if error is not None:
            return FlipResult(text=text, validation_error=error)

        symbol_set = self.symbol_set or self.select_symbol_set()

        if self.encoder.is_blank(text):
            empty = EncodedResult(
                elements=(),
                word_break_separator=self.settings.encoder.word_break_separator,
            )
            return FlipResult(text=text, encoded=empty)

        try:
            encoded = self.encoder.encode(text, symbol_set)
        except MissingMappingError as e:
            self.logger.warning("Missing letter mapping", symbol_set=symbol_set.id, char=e.char)
            raise

        # Codes and artwork both come from this one set, even if another
        # thread switches sets in between
        letters = [element for element in encoded.elements if isinstance(element, Letter)]
        resolved = iter(self.cache.lookup_many(symbol_set, letters))

        glyphs: list[GlyphRecord | None] = []
        sources: list[DefinitionSource | None] = []
        for element in encoded.elements:
            if isinstance(element, Letter):
                record, source = next(resolved)
                glyphs.append(record)
                sources.append(source)
            else:
                glyphs.append(None)
                sources.append(None)

        return FlipResult(
            text=text,
            encoded=encoded,
            glyphs=tuple(glyphs),
            sources=tuple(sources),
        )

    def glyph(self, char: str) -> tuple[Letter, GlyphRecord, DefinitionSource]:
        """Resolve the glyph for a single letter of the active set.

        Raises:
            MissingMappingError: If the letter has no entry
        """
        symbol_set = self.symbol_set or self.select_symbol_set()
        char = char.lower()
        entry = symbol_set.get(char)
        if entry is None:
            raise MissingMappingError(char)
        letter = Letter(char=char, code=entry.code, glyph_ref=entry.glyph_ref)
        [(record, source)] = self.cache.lookup_many(symbol_set, [letter])
        return letter, record, source

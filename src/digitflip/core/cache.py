"""Glyph record cache.

Parsed glyph records are memoized per (symbol set id, glyph reference).
Switching the active symbol set flushes every entry in one step.
"""

from collections.abc import Iterable
from threading import RLock

import structlog

from digitflip.config import GlyphConfig
from digitflip.core.document import parse_document
from digitflip.core.resolver import DefinitionSource, GlyphResolver
from digitflip.domain import GlyphRecord, Letter, Rect, SymbolSet
from digitflip.utils import ResolutionLogger, ResolutionStats

CacheKey = tuple[str, str]


class GlyphCache:
    """Memoizes parsed glyph records for the active symbol set.

    Lookup, preload and invalidation hold one re-entrant lock, so an entry is
    published only once fully parsed and invalidation never interleaves with
    a lookup in progress.

    Example:
        cache = GlyphCache(resolver)
        cache.activate(symbol_set)
        record = cache.lookup(letter)
    """

    def __init__(
        self,
        resolver: GlyphResolver,
        glyph_config: GlyphConfig | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            resolver: Lookup chain used on a miss
            glyph_config: Settings passed to the document parser
            logger: Logger for resolution and cache events
        """
        self._resolver = resolver
        self._glyph_config = glyph_config or GlyphConfig()
        self._log = ResolutionLogger(logger)
        self._lock = RLock()
        self._entries: dict[CacheKey, GlyphRecord] = {}
        self._sources: dict[CacheKey, DefinitionSource] = {}
        self._symbol_set: SymbolSet | None = None

    @property
    def symbol_set(self) -> SymbolSet | None:
        """The active symbol set, if any."""
        return self._symbol_set

    @property
    def stats(self) -> ResolutionStats:
        """Resolution counters since the cache was created."""
        return self._log.stats

    def activate(self, symbol_set: SymbolSet, preload: bool = True) -> None:
        """Make a symbol set active, dropping every cached record.

        Args:
            symbol_set: The newly selected set
            preload: If True, resolve every letter of the set immediately
        """
        with self._lock:
            self.invalidate()
            self._symbol_set = symbol_set
            if preload:
                self.preload(symbol_set)

    def invalidate(self) -> None:
        """Drop every cached record."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._sources.clear()
            self._log.log_invalidated(
                self._symbol_set.id if self._symbol_set else None,
                count,
            )

    def preload(self, symbol_set: SymbolSet) -> int:
        """Resolve and cache every letter of a set.

        Returns:
            Number of entries in the cache afterwards
        """
        with self._lock:
            for char, entry in sorted(symbol_set.symbols.items()):
                self._lookup(symbol_set.id, Letter(char, entry.code, entry.glyph_ref))
            return len(self._entries)

    def lookup(self, letter: Letter, symbol_set_id: str | None = None) -> GlyphRecord:
        """Get the record for a letter, parsing it on a miss.

        Args:
            letter: The letter to draw
            symbol_set_id: Set the letter was encoded from (default: the active set)

        Raises:
            RuntimeError: If no set is given and none is active
        """
        with self._lock:
            if symbol_set_id is None:
                if self._symbol_set is None:
                    raise RuntimeError("No symbol set is active. Call activate() first.")
                symbol_set_id = self._symbol_set.id
            return self._lookup_in(symbol_set_id, letter)[0]

    def lookup_many(
        self,
        symbol_set: SymbolSet,
        letters: Iterable[Letter],
    ) -> list[tuple[GlyphRecord, DefinitionSource]]:
        """Resolve the letters of one encoded phrase in a single step.

        The lock is held for the whole batch, so a concurrent activate()
        cannot land between two letters. If ``symbol_set`` is no longer the
        active set, its records are resolved but not cached.

        Returns:
            One (record, tier) pair per letter, in order
        """
        with self._lock:
            return [self._lookup_in(symbol_set.id, letter) for letter in letters]

    def get(self, glyph_ref: str) -> GlyphRecord | None:
        """Return a cached record without resolving anything."""
        with self._lock:
            if self._symbol_set is None:
                return None
            return self._entries.get((self._symbol_set.id, glyph_ref))

    def source(self, glyph_ref: str) -> DefinitionSource | None:
        """Return the tier a cached record was resolved from."""
        with self._lock:
            if self._symbol_set is None:
                return None
            return self._sources.get((self._symbol_set.id, glyph_ref))

    def _lookup_in(self, symbol_set_id: str, letter: Letter) -> tuple[GlyphRecord, DefinitionSource]:
        if self._symbol_set is not None and self._symbol_set.id == symbol_set_id:
            return self._lookup(symbol_set_id, letter)
        # Stale set: entries are only ever kept for the active one
        return self._load(symbol_set_id, letter)

    def _lookup(self, symbol_set_id: str, letter: Letter) -> tuple[GlyphRecord, DefinitionSource]:
        key = (symbol_set_id, letter.glyph_ref)
        record = self._entries.get(key)
        if record is not None:
            self._log.log_cache_hit(symbol_set_id, letter.glyph_ref)
            return record, self._sources[key]

        record, source = self._load(symbol_set_id, letter)
        self._entries[key] = record
        self._sources[key] = source
        return record, source

    def _load(self, symbol_set_id: str, letter: Letter) -> tuple[GlyphRecord, DefinitionSource]:
        raw = self._resolver.resolve(letter, symbol_set_id)
        record = parse_document(raw.text, self._glyph_config)

        if record is None and raw.source is not DefinitionSource.SYNTHETIC:
            self._log.log_fallback(symbol_set_id, letter.glyph_ref, raw.source.value)
            raw = self._resolver.synthesize(letter)
            record = parse_document(raw.text, self._glyph_config)

        if record is None:
            record = GlyphRecord(
                view_box=Rect(
                    0.0,
                    0.0,
                    self._glyph_config.default_view_box_width,
                    self._glyph_config.default_view_box_height,
                )
            )

        self._log.log_resolved(symbol_set_id, letter.glyph_ref, raw.source.value)
        return record, raw.source

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, glyph_ref: object) -> bool:
        with self._lock:
            if self._symbol_set is None or not isinstance(glyph_ref, str):
                return False
            return (self._symbol_set.id, glyph_ref) in self._entries

"""Core algorithms for digitflip.

This module contains:

- Phrase encoding (validation, letter mapping, reversal)
- Path command interpretation and arc conversion
- Transform parsing and nested composition
- Glyph document parsing
- Tiered glyph and configuration lookup
- Glyph record caching and session orchestration

Key functions:
- parse_path_data: Interpret a path command string into primitives
- arc_to_curves: Convert an elliptical arc to cubic Beziers
- parse_transform: Parse a transform attribute into a matrix
- parse_document: Parse a glyph document into a GlyphRecord
- load_symbol_set: Load a configuration record through the store tiers
- discover_symbol_sets: List the symbol sets across all stores

Key classes:
- Encoder: Validates and encodes phrases
- TransformStack: Scoped transform composition
- GlyphResolver: Override, packaged and synthetic lookup chain
- GlyphCache: Memoized glyph records for the active set
- FlipSession: Ties everything together for one user
"""

from digitflip.core.arc import arc_to_curves
from digitflip.core.cache import GlyphCache
from digitflip.core.document import DocumentParser, parse_color, parse_document
from digitflip.core.encoder import Encoder
from digitflip.core.path import parse_path_data, rect_primitives, transform_primitives
from digitflip.core.resolver import (
    DefinitionSource,
    DirectoryStore,
    GlyphResolver,
    GlyphStore,
    RawDefinition,
    decode_symbol_set,
    discover_symbol_sets,
    load_symbol_set,
    open_stores,
    placeholder_document,
)
from digitflip.core.session import FlipResult, FlipSession
from digitflip.core.transform import TransformStack, parse_transform

__all__ = [
    # Encoding
    "Encoder",
    # Geometry
    "TransformStack",
    "arc_to_curves",
    "parse_path_data",
    "parse_transform",
    "rect_primitives",
    "transform_primitives",
    # Documents
    "DocumentParser",
    "parse_color",
    "parse_document",
    # Resolution
    "DefinitionSource",
    "DirectoryStore",
    "GlyphCache",
    "GlyphResolver",
    "GlyphStore",
    "RawDefinition",
    "decode_symbol_set",
    "discover_symbol_sets",
    "load_symbol_set",
    "open_stores",
    "placeholder_document",
    # Session
    "FlipResult",
    "FlipSession",
]

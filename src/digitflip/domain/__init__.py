"""Domain models for digitflip.

This module contains the core domain models representing symbol sets, encoded
phrases and parsed glyph geometry. All models are designed to be:

- Immutable (using frozen dataclasses)
- Independent of file formats and storage
- Serializable to plain dictionaries for JSON output

Key classes:
- DigitCode: Opaque digit string that never becomes a number
- SymbolEntry / SymbolSet: Letter to code and glyph mapping
- Letter / WordBreak / EncodedResult: Encoder output
- Line / CubicCurve / ClosePath: Normalized path primitives
- Shape / TextLabel / GlyphRecord: Renderable glyph
"""

from digitflip.domain.encoding import (
    EncodedElement,
    EncodedResult,
    Letter,
    ValidationError,
    WordBreak,
    format_digits,
)
from digitflip.domain.geometry import (
    BLACK,
    TRANSPARENT,
    AnchorMode,
    ClosePath,
    Color,
    CubicCurve,
    GeometryPrimitive,
    GlyphRecord,
    Line,
    Point,
    Rect,
    Shape,
    TextLabel,
    draw_primitives,
)
from digitflip.domain.symbols import (
    DigitCode,
    SymbolEntry,
    SymbolSet,
    SymbolSetInfo,
    SymbolSetStatus,
)

__all__: list[str] = [
    # Enums
    "AnchorMode",
    "SymbolSetStatus",
    "ValidationError",
    # Symbol table
    "DigitCode",
    "SymbolEntry",
    "SymbolSet",
    "SymbolSetInfo",
    # Encoder output
    "EncodedElement",
    "EncodedResult",
    "Letter",
    "WordBreak",
    "format_digits",
    # Geometry
    "BLACK",
    "TRANSPARENT",
    "ClosePath",
    "Color",
    "CubicCurve",
    "GeometryPrimitive",
    "GlyphRecord",
    "Line",
    "Point",
    "Rect",
    "Shape",
    "TextLabel",
    "draw_primitives",
]

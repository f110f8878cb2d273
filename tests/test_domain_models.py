"""Tests for domain models to verify they work correctly."""

import pytest
from fontTools.misc.transform import Identity
from fontTools.pens.recordingPen import RecordingPen

from digitflip.domain import (
    BLACK,
    TRANSPARENT,
    AnchorMode,
    ClosePath,
    Color,
    CubicCurve,
    DigitCode,
    EncodedResult,
    GlyphRecord,
    Letter,
    Line,
    Point,
    Rect,
    Shape,
    SymbolEntry,
    SymbolSet,
    SymbolSetStatus,
    TextLabel,
    ValidationError,
    WordBreak,
    draw_primitives,
    format_digits,
)


def _letter(char: str, code: str) -> Letter:
    return Letter(char, DigitCode(code), f"{char}.svg")


class TestDigitCode:
    """Tests for DigitCode value type."""

    def test_keeps_leading_zero(self) -> None:
        """Test that the code text is kept exactly as authored."""
        code = DigitCode("01")
        assert code.text == "01"
        assert str(code) == "01"
        assert len(code) == 2

    def test_no_numeric_conversion(self) -> None:
        """Test that a code cannot be turned into a number."""
        with pytest.raises(TypeError):
            int(DigitCode("01"))  # type: ignore[call-overload]
        with pytest.raises(TypeError):
            float(DigitCode("7"))  # type: ignore[arg-type]

    def test_rejects_non_string(self) -> None:
        """Test that numbers are rejected at construction."""
        with pytest.raises(TypeError):
            DigitCode(1)  # type: ignore[arg-type]

    def test_rejects_empty(self) -> None:
        """Test that the empty string is rejected."""
        with pytest.raises(ValueError):
            DigitCode("")

    def test_immutable(self) -> None:
        """Test that a code is immutable."""
        code = DigitCode("4")
        with pytest.raises(AttributeError):
            code.text = "5"  # type: ignore[misc]


class TestSymbolSet:
    """Tests for SymbolEntry and SymbolSet."""

    def test_entry_of(self) -> None:
        """Test building an entry from plain strings."""
        entry = SymbolEntry.of("41", "m.svg")
        assert entry.code == DigitCode("41")
        assert entry.glyph_ref == "m.svg"

    def test_entry_requires_glyph_ref(self) -> None:
        """Test that an entry needs a glyph reference."""
        with pytest.raises(ValueError):
            SymbolEntry.of("4", "")

    def test_symbols_are_read_only(self) -> None:
        """Test that the symbol mapping cannot be modified."""
        symbols = {"a": SymbolEntry.of("0", "a.svg")}
        symbol_set = SymbolSet("test", "Test", SymbolSetStatus.AVAILABLE, symbols)

        with pytest.raises(TypeError):
            symbol_set.symbols["b"] = SymbolEntry.of("9", "b.svg")  # type: ignore[index]

        # The source dict is copied, so changing it has no effect
        symbols["b"] = SymbolEntry.of("9", "b.svg")
        assert symbol_set.get("b") is None

    def test_partial_map(self) -> None:
        """Test that a partial map reports its missing letters."""
        symbol_set = SymbolSet(
            "test",
            "Test",
            SymbolSetStatus.AVAILABLE,
            {c: SymbolEntry.of("1", f"{c}.svg") for c in "abcdefghijklmnopqrstuvwxy"},
        )
        assert symbol_set.missing_letters() == ["z"]

    def test_info_and_status(self) -> None:
        """Test the metadata view."""
        symbol_set = SymbolSet("soon", "Soon", SymbolSetStatus.COMING_SOON)
        info = symbol_set.info()
        assert info.id == "soon"
        assert info.display_name == "Soon"
        assert not info.is_available
        assert not symbol_set.is_available

    def test_to_dict_layout(self) -> None:
        """Test serialization to the configuration record layout."""
        symbol_set = SymbolSet(
            "classic",
            "Classic",
            SymbolSetStatus.AVAILABLE,
            {"p": SymbolEntry.of("01", "p.svg")},
        )
        data = symbol_set.to_dict()
        assert data["glyphSet"] == "classic"
        assert data["displayName"] == "Classic"
        assert data["status"] == "available"
        assert data["letters"] == {"p": {"code": "01", "glyphFile": "p.svg"}}


class TestEncodedResult:
    """Tests for encoder output types."""

    def test_format_digits_single_space_between_letters(self) -> None:
        """Test that letters in a word are joined by one space."""
        elements = [_letter("i", "1"), _letter("h", "4")]
        assert format_digits(elements) == "1 4"

    def test_format_digits_word_break(self) -> None:
        """Test that a word break is exactly three spaces."""
        elements = [_letter("u", "0"), WordBreak(), _letter("i", "1")]
        assert format_digits(elements) == "0   1"

    def test_format_digits_breaks_never_collapse(self) -> None:
        """Test that consecutive word breaks each emit their separator."""
        elements = [_letter("a", "0"), WordBreak(), WordBreak(), _letter("b", "9")]
        assert format_digits(elements) == "0" + " " * 6 + "9"

    def test_format_digits_only_breaks(self) -> None:
        """Test that N word breaks give N x 3 spaces."""
        assert format_digits([WordBreak()] * 4) == " " * 12

    def test_digit_display_and_glyph_refs(self) -> None:
        """Test the display helpers."""
        result = EncodedResult((_letter("p", "01"), WordBreak(), _letter("t", "7")))
        assert result.digit_display == "01   7"
        assert result.glyph_refs == ["p.svg", None, "t.svg"]
        assert [letter.char for letter in result.letters] == ["p", "t"]
        assert len(result) == 3

    def test_reversed_twice_is_identity(self) -> None:
        """Test that reversing twice gives the original sequence."""
        result = EncodedResult((_letter("h", "4"), WordBreak(), _letter("i", "1")))
        assert result.reversed().reversed() == result
        assert result.reversed().elements[0] == _letter("i", "1")

    def test_validation_error_messages(self) -> None:
        """Test the user-facing validation messages."""
        assert ValidationError.INVALID_CHARACTERS.message == "Invalid characters, use a-z characters only"
        assert ValidationError.CHARACTER_LIMIT_EXCEEDED.message == "Character limit exceeded"


class TestGeometry:
    """Tests for geometry types."""

    def test_point_transformed(self) -> None:
        """Test mapping a point through a transform."""
        p = Point(1.0, 2.0).transformed(Identity.translate(10, 20))
        assert p == Point(11.0, 22.0)

    def test_point_reflect_through(self) -> None:
        """Test reflecting a point through a center."""
        assert Point(3.0, 4.0).reflect_through(Point(5.0, 5.0)) == Point(7.0, 6.0)

    def test_color_hex(self) -> None:
        """Test hex formatting."""
        assert Color(1.0, 0.0, 0.0).to_hex() == "#ff0000"
        assert BLACK.to_hex() == "#000000"
        assert TRANSPARENT.is_transparent
        assert not BLACK.is_transparent

    def test_draw_primitives_closed_contour(self) -> None:
        """Test replaying a closed triangle into a pen."""
        prims = [
            Line(Point(0, 0), Point(10, 0)),
            Line(Point(10, 0), Point(10, 10)),
            ClosePath(Point(0, 0)),
        ]
        pen = RecordingPen()
        draw_primitives(prims, pen)
        assert pen.value == [
            ("moveTo", ((0, 0),)),
            ("lineTo", ((10, 0),)),
            ("lineTo", ((10, 10),)),
            ("closePath", ()),
        ]

    def test_draw_primitives_discontinuity_starts_new_contour(self) -> None:
        """Test that a jump in position ends the open contour."""
        prims = [
            Line(Point(0, 0), Point(10, 0)),
            CubicCurve(Point(20, 0), Point(25, 5), Point(30, 5), Point(35, 0)),
        ]
        pen = RecordingPen()
        draw_primitives(prims, pen)
        ops = [op for op, _ in pen.value]
        assert ops == ["moveTo", "lineTo", "endPath", "moveTo", "curveTo", "endPath"]

    def test_shape_to_dict(self) -> None:
        """Test shape serialization."""
        shape = Shape(
            geometry=(Line(Point(0, 0), Point(1, 1)),),
            fill_color=TRANSPARENT,
            stroke_color=Color(1.0, 0.0, 0.0),
            stroke_width=2.0,
        )
        data = shape.to_dict()
        assert data["fill"] == "none"
        assert data["stroke"] == "#ff0000"
        assert data["stroke_width"] == 2.0
        assert data["segments"][0]["type"] == "line"

    def test_glyph_record_bounds(self) -> None:
        """Test outline bounds through BoundsPen."""
        record = GlyphRecord(
            view_box=Rect(0, 0, 60, 80),
            shapes=(Shape(geometry=(Line(Point(5, 10), Point(50, 70)),)),),
        )
        assert record.bounds() == (5, 10, 50, 70)
        assert not record.is_empty()

    def test_empty_glyph_record(self) -> None:
        """Test a record with nothing to paint."""
        record = GlyphRecord(view_box=Rect(0, 0, 100, 100))
        assert record.is_empty()
        assert record.bounds() is None

    def test_label_to_dict(self) -> None:
        """Test text label serialization."""
        label = TextLabel("a", Point(30, 35), 24.0, AnchorMode.MIDDLE)
        data = label.to_dict()
        assert data["anchor"] == "middle"
        assert data["position"] == (30, 35)
        assert data["fill"] == "#000000"

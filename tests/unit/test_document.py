"""Unit tests for glyph document parsing."""

import pytest

from digitflip.config import GlyphConfig
from digitflip.core.document import (
    local_name,
    parse_color,
    parse_document,
    parse_length,
    parse_style,
    resolve_styles,
)
from digitflip.domain import (
    BLACK,
    TRANSPARENT,
    AnchorMode,
    ClosePath,
    Color,
    CubicCurve,
    Line,
    Point,
    Rect,
)

SVG_NS = 'xmlns="http://www.w3.org/2000/svg"'


def svg(body: str, attrs: str = 'viewBox="0 0 60 80"') -> str:
    return f"<svg {SVG_NS} {attrs}>{body}</svg>"


class TestParseColor:
    """Tests for parse_color."""

    def test_short_hex(self) -> None:
        """Test the three-digit form."""
        assert parse_color("#f00") == Color(1.0, 0.0, 0.0)

    def test_long_hex(self) -> None:
        """Test the six-digit form."""
        assert parse_color("#00FF00").to_hex() == "#00ff00"

    def test_named(self) -> None:
        """Test named colors."""
        assert parse_color("white") == Color(1.0, 1.0, 1.0)
        assert parse_color(" Red ") == Color(1.0, 0.0, 0.0)

    def test_none_is_transparent(self) -> None:
        """Test the none keyword."""
        assert parse_color("none") == TRANSPARENT

    @pytest.mark.parametrize("value", [None, "#12", "#zzzzzz", "chartreuse", ""])
    def test_unrecognized_is_black(self, value: str | None) -> None:
        """Test the fallback for anything unknown."""
        assert parse_color(value) == BLACK


class TestAttributeHelpers:
    """Tests for length, style and tag helpers."""

    def test_parse_length(self) -> None:
        """Test plain numbers and the px suffix."""
        assert parse_length("12") == 12.0
        assert parse_length("12px") == 12.0
        assert parse_length("abc", 3.0) == 3.0
        assert parse_length(None, 5.0) == 5.0

    def test_parse_style(self) -> None:
        """Test splitting a style block."""
        assert parse_style("fill: red; stroke:blue;;bad") == {"fill": "red", "stroke": "blue"}
        assert parse_style(None) == {}

    def test_style_wins_over_attribute(self) -> None:
        """Test property precedence."""
        styles = resolve_styles({"fill": "red", "stroke": "blue", "style": "fill: green"})
        assert styles == {"fill": "green", "stroke": "blue"}

    def test_local_name(self) -> None:
        """Test namespace stripping."""
        assert local_name("{http://www.w3.org/2000/svg}path") == "path"
        assert local_name("rect") == "rect"
        assert local_name(object()) is None


class TestDocumentFrame:
    """Tests for document acceptance and the view box."""

    @pytest.mark.parametrize("text", ["", "   ", "<svg", "not xml at all"])
    def test_unreadable_text(self, text: str) -> None:
        """Test that empty or malformed text gives no record."""
        assert parse_document(text) is None

    def test_non_svg_root(self) -> None:
        """Test that a different root element is rejected."""
        assert parse_document("<html><path d='M0 0 L1 1'/></html>") is None

    def test_entity_declarations_rejected(self) -> None:
        """Test that documents declaring entities are refused."""
        text = (
            '<?xml version="1.0"?>'
            '<!DOCTYPE svg [<!ENTITY boom "boom">]>'
            f"<svg {SVG_NS}><text>&boom;</text></svg>"
        )
        assert parse_document(text) is None

    def test_view_box(self) -> None:
        """Test an explicit view box."""
        record = parse_document(svg(""))
        assert record is not None
        assert record.view_box == Rect(0, 0, 60, 80)
        assert record.is_empty()

    def test_view_box_with_commas(self) -> None:
        """Test comma-separated view box values."""
        record = parse_document(svg("", 'viewBox="10,20,30,40"'))
        assert record.view_box == Rect(10, 20, 30, 40)

    def test_width_and_height(self) -> None:
        """Test the fallback to width and height."""
        record = parse_document(svg("", 'width="48px" height="64"'))
        assert record.view_box == Rect(0, 0, 48, 64)

    def test_default_frame(self) -> None:
        """Test the configured default when no size is declared."""
        record = parse_document(svg("", ""))
        assert record.view_box == Rect(0, 0, 100, 100)

    def test_configured_default_frame(self) -> None:
        """Test a custom default view box."""
        config = GlyphConfig(default_view_box_width=20, default_view_box_height=30)
        record = parse_document(svg("", ""), config)
        assert record.view_box == Rect(0, 0, 20, 30)

    @pytest.mark.parametrize("view_box", ["0 0 0 80", "0 0 60", "a b c d", "0 0 -5 5"])
    def test_invalid_view_box_uses_default(self, view_box: str) -> None:
        """Test that an unusable view box falls back to the default."""
        record = parse_document(svg("", f'viewBox="{view_box}"'))
        assert record.view_box == Rect(0, 0, 100, 100)

    def test_document_without_namespace(self) -> None:
        """Test that the namespace is optional."""
        record = parse_document('<svg viewBox="0 0 10 10"><path d="M0 0 L5 5"/></svg>')
        assert len(record.shapes) == 1


class TestShapes:
    """Tests for path and rect elements."""

    def test_path_defaults(self) -> None:
        """Test a path with no paint attributes."""
        record = parse_document(svg('<path d="M0 0 L10 0"/>'))
        shape = record.shapes[0]
        assert shape.geometry == (Line(Point(0, 0), Point(10, 0)),)
        assert shape.fill_color == BLACK
        assert shape.stroke_color is None
        assert shape.stroke_width == 0.0

    def test_stroke_defaults_width_to_one(self) -> None:
        """Test the stroke width default when a stroke is present."""
        record = parse_document(svg('<path d="M0 0 L10 0" fill="none" stroke="#00f"/>'))
        shape = record.shapes[0]
        assert shape.fill_color == TRANSPARENT
        assert shape.stroke_color == Color(0.0, 0.0, 1.0)
        assert shape.stroke_width == 1.0

    def test_stroke_none(self) -> None:
        """Test an explicit stroke of none."""
        record = parse_document(svg('<path d="M0 0 L10 0" stroke="none" stroke-width="4"/>'))
        shape = record.shapes[0]
        assert shape.stroke_color is None
        assert shape.stroke_width == 4.0

    def test_style_block_paint(self) -> None:
        """Test paint taken from the style block."""
        record = parse_document(
            svg('<path d="M0 0 L10 0" fill="red" style="fill:#00ff00; stroke:black; stroke-width:3"/>')
        )
        shape = record.shapes[0]
        assert shape.fill_color.to_hex() == "#00ff00"
        assert shape.stroke_color == BLACK
        assert shape.stroke_width == 3.0

    def test_empty_path_dropped(self) -> None:
        """Test that a path with no geometry is not kept."""
        record = parse_document(svg('<path d=""/><path/><path d="M5 5"/>'))
        assert record.shapes == ()

    def test_rect(self) -> None:
        """Test a plain rectangle."""
        record = parse_document(svg('<rect x="2" y="2" width="10" height="5"/>'))
        geometry = record.shapes[0].geometry
        assert geometry[0] == Line(Point(2, 2), Point(12, 2))
        assert geometry[-1] == ClosePath(Point(2, 2))

    def test_rounded_rect(self) -> None:
        """Test that rx rounds the corners."""
        record = parse_document(svg('<rect width="20" height="20" rx="5"/>'))
        curves = [p for p in record.shapes[0].geometry if isinstance(p, CubicCurve)]
        assert len(curves) == 4

    def test_zero_size_rect_dropped(self) -> None:
        """Test that a rect without size is not kept."""
        record = parse_document(svg('<rect width="0" height="10"/>'))
        assert record.shapes == ()

    def test_group_transform(self) -> None:
        """Test that group transforms apply to their children."""
        record = parse_document(svg('<g transform="translate(10 20)"><path d="M0 0 L1 0"/></g>'))
        assert record.shapes[0].geometry == (Line(Point(10, 20), Point(11, 20)),)

    def test_nested_group_transforms(self) -> None:
        """Test that inner group transforms apply first."""
        body = (
            '<g transform="translate(10 0)">'
            '<g transform="scale(2)"><path d="M1 1 L2 1"/></g>'
            '<path d="M0 0 L1 0"/>'
            "</g>"
        )
        record = parse_document(svg(body))
        assert record.shapes[0].geometry == (Line(Point(12, 2), Point(14, 2)),)
        # The scale does not leak to the sibling after the inner group closes
        assert record.shapes[1].geometry == (Line(Point(10, 0), Point(11, 0)),)

    def test_deeply_nested_groups(self) -> None:
        """Test nesting deeper than the interpreter's recursion limit."""
        depth = 1200
        body = '<g transform="translate(1 0)">' * depth + '<path d="M0 0 L1 1"/>' + "</g>" * depth
        record = parse_document(svg(body + '<path d="M0 0 L2 2"/>'))

        assert record.shapes[0].geometry == (Line(Point(depth, 0), Point(depth + 1, 1)),)
        # Every group scope is closed again before the sibling path
        assert record.shapes[1].geometry == (Line(Point(0, 0), Point(2, 2)),)

    def test_element_transform(self) -> None:
        """Test a transform on the shape element itself."""
        record = parse_document(
            svg('<g transform="translate(5 0)"><path d="M0 0 L1 0" transform="scale(3)"/></g>')
        )
        assert record.shapes[0].geometry == (Line(Point(5, 0), Point(8, 0)),)

    def test_unknown_elements_walked(self) -> None:
        """Test that shapes inside unsupported containers are found."""
        record = parse_document(svg('<defs/><a><path d="M0 0 L1 1"/></a><circle r="4"/>'))
        assert len(record.shapes) == 1

    def test_document_order(self) -> None:
        """Test that shapes keep their order."""
        record = parse_document(
            svg('<path d="M0 0 L1 0" fill="red"/><rect width="1" height="1" fill="blue"/>')
        )
        assert [s.fill_color.to_hex() for s in record.shapes] == ["#ff0000", "#0000ff"]


class TestLabels:
    """Tests for text elements."""

    def test_label(self) -> None:
        """Test a centered label."""
        record = parse_document(
            svg('<text x="30" y="35" font-size="24px" text-anchor="middle" fill="#e94560">a</text>')
        )
        label = record.labels[0]
        assert label.content == "a"
        assert label.position == Point(30, 35)
        assert label.font_size == 24.0
        assert label.anchor is AnchorMode.MIDDLE
        assert label.fill_color.to_hex() == "#e94560"

    def test_label_defaults(self) -> None:
        """Test a label with no attributes."""
        label = parse_document(svg("<text>hi</text>")).labels[0]
        assert label.position == Point(0, 0)
        assert label.font_size == 16.0
        assert label.anchor is AnchorMode.START
        assert label.fill_color == BLACK

    def test_label_position_transformed(self) -> None:
        """Test that labels follow group transforms."""
        record = parse_document(svg('<g transform="translate(5 5)"><text x="1" y="2">x</text></g>'))
        assert record.labels[0].position == Point(6, 7)

    def test_empty_label_dropped(self) -> None:
        """Test that whitespace-only text is skipped."""
        record = parse_document(svg("<text>   </text><text/>"))
        assert record.labels == ()

    def test_nested_text_content(self) -> None:
        """Test that child text runs are joined."""
        record = parse_document(svg("<text> 0<tspan>1</tspan> </text>"))
        assert record.labels[0].content == "01"

    def test_style_anchor(self) -> None:
        """Test the anchor taken from the style block."""
        record = parse_document(svg('<text style="text-anchor: middle; font-size: 12">q</text>'))
        label = record.labels[0]
        assert label.anchor is AnchorMode.MIDDLE
        assert label.font_size == 12.0

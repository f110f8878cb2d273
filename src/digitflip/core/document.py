"""Glyph document parsing.

This module reads a small drawing document (an SVG subset) and produces a
GlyphRecord. Supported elements are ``svg``, ``g``, ``path``, ``rect`` and
``text``; anything else is walked for children but draws nothing.

XML is parsed with defusedxml, so entity expansion and external references
are rejected instead of being resolved.
"""

import re
from collections.abc import Iterator
from xml.etree.ElementTree import Element

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from digitflip.config import GlyphConfig
from digitflip.core.path import parse_path_data, rect_primitives, transform_primitives
from digitflip.core.transform import TransformStack, parse_transform
from digitflip.domain import (
    BLACK,
    TRANSPARENT,
    AnchorMode,
    Color,
    GeometryPrimitive,
    GlyphRecord,
    Point,
    Rect,
    Shape,
    TextLabel,
)

NAMED_COLORS: dict[str, Color] = {
    "black": BLACK,
    "white": Color(1.0, 1.0, 1.0),
    "red": Color(1.0, 0.0, 0.0),
    "green": Color(0.0, 128 / 255, 0.0),
    "blue": Color(0.0, 0.0, 1.0),
    "gray": Color(128 / 255, 128 / 255, 128 / 255),
    "grey": Color(128 / 255, 128 / 255, 128 / 255),
    "yellow": Color(1.0, 1.0, 0.0),
    "orange": Color(1.0, 165 / 255, 0.0),
}

STYLE_KEYS = ("fill", "stroke", "stroke-width", "font-size", "font-family", "text-anchor")

DEFAULT_FONT_SIZE = 16.0

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")
_VIEW_BOX_SPLIT_RE = re.compile(r"[\s,]+")


def parse_color(value: str | None) -> Color:
    """Parse a paint value.

    Args:
        value: ``#rgb``, ``#rrggbb``, a named color or ``none``

    Returns:
        The color; ``none`` is transparent, anything unrecognized is black

    Examples:
        >>> parse_color("#f00").to_hex()
        '#ff0000'
        >>> parse_color("none").is_transparent
        True
    """
    if value is None:
        return BLACK

    text = value.strip().lower()
    if text == "none":
        return TRANSPARENT

    if text.startswith("#"):
        digits = text[1:]
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        if len(digits) != 6 or not _HEX_RE.match(digits):
            return BLACK
        rgb = int(digits, 16)
        return Color(
            ((rgb >> 16) & 0xFF) / 255,
            ((rgb >> 8) & 0xFF) / 255,
            (rgb & 0xFF) / 255,
        )

    return NAMED_COLORS.get(text, BLACK)


def parse_length(value: str | None, default: float | None = None) -> float | None:
    """Parse a numeric attribute, tolerating a ``px`` suffix."""
    if value is None:
        return default
    text = value.strip()
    if text.endswith("px"):
        text = text[:-2].strip()
    try:
        return float(text)
    except ValueError:
        return default


def parse_style(style: str | None) -> dict[str, str]:
    """Split an inline ``style`` block into property pairs."""
    result: dict[str, str] = {}
    if not style:
        return result
    for declaration in style.split(";"):
        key, sep, val = declaration.partition(":")
        if sep and key.strip():
            result[key.strip()] = val.strip()
    return result


def resolve_styles(attrs: dict[str, str]) -> dict[str, str]:
    """Merge presentation attributes with the inline style block.

    Properties set in ``style`` always win over the matching attribute.
    """
    styles = {key: attrs[key] for key in STYLE_KEYS if key in attrs}
    styles.update(parse_style(attrs.get("style")))
    return styles


def local_name(tag: object) -> str | None:
    """Tag name without its XML namespace (None for comments and the like)."""
    if not isinstance(tag, str):
        return None
    return tag.rsplit("}", 1)[-1]


class DocumentParser:
    """Walk over a parsed glyph document.

    One parser instance handles one document. Nested ``g`` transforms are
    kept on a TransformStack; shapes and labels are collected in document
    order.

    Example:
        record = DocumentParser(GlyphConfig()).parse(svg_text)
    """

    def __init__(self, config: GlyphConfig | None = None) -> None:
        self._config = config or GlyphConfig()
        self._stack = TransformStack()
        self._shapes: list[Shape] = []
        self._labels: list[TextLabel] = []

    def parse(self, text: str) -> GlyphRecord | None:
        """Parse document text.

        Args:
            text: The complete document

        Returns:
            The glyph record, or None if the text is empty, not well-formed
            XML, uses forbidden constructs, or its root is not ``svg``
        """
        if not text or not text.strip():
            return None

        try:
            root = ET.fromstring(text)
        except (ET.ParseError, DefusedXmlException):
            return None

        if local_name(root.tag) != "svg":
            return None

        view_box = self._view_box(root)
        self._walk(root)

        return GlyphRecord(
            view_box=view_box,
            shapes=tuple(self._shapes),
            labels=tuple(self._labels),
        )

    def _view_box(self, root: Element) -> Rect:
        default = Rect(
            0.0,
            0.0,
            self._config.default_view_box_width,
            self._config.default_view_box_height,
        )

        raw = root.get("viewBox")
        if raw is not None:
            try:
                parts = [float(p) for p in _VIEW_BOX_SPLIT_RE.split(raw.strip()) if p]
            except ValueError:
                parts = []
            if len(parts) == 4 and parts[2] > 0 and parts[3] > 0:
                return Rect(*parts)
            return default

        width = parse_length(root.get("width"))
        height = parse_length(root.get("height"))
        if width is not None and height is not None and width > 0 and height > 0:
            return Rect(0.0, 0.0, width, height)
        return default

    def _walk(self, root: Element) -> None:
        # Explicit frames instead of recursion: nesting depth is unbounded
        frames: list[tuple[Iterator[Element], bool]] = [(iter(root), False)]
        while frames:
            children, pushed = frames[-1]
            element = next(children, None)
            if element is None:
                frames.pop()
                if pushed:
                    self._stack.pop()
                continue

            name = local_name(element.tag)
            if name is None:
                continue

            if name == "g":
                self._stack.push(parse_transform(element.get("transform")))
                frames.append((iter(element), True))
            elif name == "path":
                primitives = parse_path_data(element.get("d", ""))
                self._add_shape(element, primitives)
            elif name == "rect":
                attrs = element.attrib
                primitives = rect_primitives(
                    parse_length(attrs.get("x"), 0.0),
                    parse_length(attrs.get("y"), 0.0),
                    parse_length(attrs.get("width"), 0.0),
                    parse_length(attrs.get("height"), 0.0),
                    parse_length(attrs.get("rx"), 0.0),
                )
                self._add_shape(element, primitives)
            elif name == "text":
                self._add_label(element)
            else:
                frames.append((iter(element), False))

    def _add_shape(self, element: Element, primitives: list[GeometryPrimitive]) -> None:
        if not primitives:
            return

        transform = self._stack.compose(parse_transform(element.get("transform")))
        styles = resolve_styles(dict(element.attrib))

        stroke_value = styles.get("stroke")
        stroke_color: Color | None = None
        if stroke_value is not None and stroke_value.strip().lower() != "none":
            stroke_color = parse_color(stroke_value)

        # A painted stroke without a width is 1 unit wide, as in SVG itself
        default_width = 1.0 if stroke_color is not None else 0.0
        stroke_width = parse_length(styles.get("stroke-width"), default_width)

        self._shapes.append(
            Shape(
                geometry=transform_primitives(primitives, transform),
                fill_color=parse_color(styles.get("fill")),
                stroke_color=stroke_color,
                stroke_width=stroke_width,
            )
        )

    def _add_label(self, element: Element) -> None:
        content = "".join(element.itertext()).strip()
        if not content:
            return

        styles = resolve_styles(dict(element.attrib))
        transform = self._stack.compose(parse_transform(element.get("transform")))
        origin = Point(
            parse_length(element.get("x"), 0.0),
            parse_length(element.get("y"), 0.0),
        )

        anchor = AnchorMode.MIDDLE if styles.get("text-anchor") == "middle" else AnchorMode.START
        self._labels.append(
            TextLabel(
                content=content,
                position=origin.transformed(transform),
                font_size=parse_length(styles.get("font-size"), DEFAULT_FONT_SIZE),
                anchor=anchor,
                fill_color=parse_color(styles.get("fill")),
            )
        )


def parse_document(text: str, config: GlyphConfig | None = None) -> GlyphRecord | None:
    """Parse a glyph document into a GlyphRecord.

    Never raises: any document that cannot be read gives None.

    Args:
        text: Document text
        config: Glyph settings (default view box size)

    Returns:
        The parsed record (possibly with no shapes), or None
    """
    return DocumentParser(config).parse(text)

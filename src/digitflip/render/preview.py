"""SVG preview of a flipped phrase.

Two rows are drawn: the glyphs in display order ("write this"), and the same
row turned by 180 degrees ("flipped preview"), which reads as the original
phrase. The flipped row is produced by one point reflection of the whole
row, not by flipping each glyph on its own.
"""

from dataclasses import dataclass
from pathlib import Path

import svgwrite
from fontTools.misc.transform import Identity, Transform
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.transformPen import TransformPen

from digitflip.config import LayoutConfig
from digitflip.core.session import FlipResult
from digitflip.domain import AnchorMode, EncodedElement, GlyphRecord, Letter, Rect, Shape, TextLabel


def _num(value: float) -> str:
    text = f"{round(value, 3):g}"
    return "0" if text == "-0" else text


def _matrix(transform: Transform) -> str:
    return "matrix({})".format(" ".join(_num(v) for v in transform))


def fit_transform(view_box: Rect, x: float, y: float, width: float, height: float) -> Transform:
    """Map a view box into a cell, preserving aspect ratio and centering.

    Args:
        view_box: Glyph coordinate frame
        x: Cell left edge
        y: Cell top edge
        width: Cell width
        height: Cell height

    Returns:
        Transform from view box units to preview units
    """
    scale = min(width / view_box.width, height / view_box.height)
    dx = x + (width - view_box.width * scale) / 2
    dy = y + (height - view_box.height * scale) / 2
    return Identity.translate(dx, dy).scale(scale).translate(-view_box.x, -view_box.y)


def flip_transform(width: float, height: float) -> Transform:
    """Point reflection (x, y) -> (-x, -y) that keeps a width x height row in frame."""
    return Transform(-1, 0, 0, -1, width, height)


@dataclass(frozen=True)
class Cell:
    """One placed element of a preview row.

    Attributes:
        element: The encoded element
        record: Its glyph (None for word breaks)
        x: Left edge in row units
        width: Cell width
    """

    element: EncodedElement
    record: GlyphRecord | None
    x: float
    width: float


@dataclass(frozen=True)
class RowLayout:
    """A laid out row of cells."""

    cells: tuple[Cell, ...]
    width: float
    height: float


def layout_row(
    elements: tuple[EncodedElement, ...],
    glyphs: tuple[GlyphRecord | None, ...],
    config: LayoutConfig | None = None,
) -> RowLayout:
    """Place elements left to right in fixed-size cells.

    Letters take a full cell, word breaks take the word gap, and neighbouring
    cells are separated by the configured spacing.

    Args:
        elements: Elements in display order
        glyphs: One record per element (None for word breaks)
        config: Cell geometry

    Returns:
        The row layout
    """
    config = config or LayoutConfig()
    cells: list[Cell] = []
    x = 0.0

    for element, record in zip(elements, glyphs, strict=True):
        if cells:
            x += config.spacing
        width = config.cell_width if isinstance(element, Letter) else config.word_gap
        cells.append(Cell(element=element, record=record, x=x, width=width))
        x += width

    return RowLayout(cells=tuple(cells), width=x, height=config.cell_height)


def shape_path_data(shape: Shape, transform: Transform) -> str:
    """Draw a shape through ``transform`` and return its path data."""
    svg_pen = SVGPathPen(None, ntos=_num)
    shape.draw(TransformPen(svg_pen, transform))
    return svg_pen.getCommands()


class PreviewRenderer:
    """Builds the SVG preview document.

    Example:
        renderer = PreviewRenderer(LayoutConfig())
        svg_text = renderer.render(session.flip("hi you"))
    """

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()

    def render(self, result: FlipResult) -> str:
        """Render both rows of a flip result.

        Args:
            result: An encoded flip result

        Returns:
            SVG document text
        """
        config = self.config
        row = layout_row(result.elements, result.glyphs, config)
        width = max(row.width, config.cell_width)
        height = row.height * 2 + config.row_gap

        dwg = svgwrite.Drawing(
            size=(_num(width), _num(height)),
            viewBox=f"0 0 {_num(width)} {_num(height)}",
            debug=False,
        )
        dwg.add(dwg.rect(insert=(0, 0), size=(_num(width), _num(height)), fill=config.background))

        written = dwg.g(id="write-this")
        content = self._draw_row(dwg, row)
        for element in content:
            written.add(element)
        dwg.add(written)

        # Reflect the whole row once, then move it below the first row
        flip = Identity.translate(0, row.height + config.row_gap).transform(
            flip_transform(row.width, row.height)
        )
        flipped = dwg.g(id="flipped-preview", transform=_matrix(flip))
        for element in content:
            flipped.add(element)
        dwg.add(flipped)

        return dwg.tostring()

    def save(self, result: FlipResult, path: Path) -> None:
        """Render a flip result and write it to ``path``."""
        path.write_text(self.render(result), encoding="utf-8")

    def _draw_row(self, dwg: svgwrite.Drawing, row: RowLayout) -> list[svgwrite.base.BaseElement]:
        elements: list[svgwrite.base.BaseElement] = []
        for cell in row.cells:
            if cell.record is None:
                continue
            transform = fit_transform(cell.record.view_box, cell.x, 0.0, cell.width, row.height)
            scale = min(cell.width / cell.record.view_box.width, row.height / cell.record.view_box.height)

            for shape in cell.record.shapes:
                d = shape_path_data(shape, transform)
                if not d:
                    continue
                attrs: dict[str, str] = {
                    "fill": "none" if shape.fill_color.is_transparent else shape.fill_color.to_hex(),
                }
                if shape.stroke_color is not None:
                    attrs["stroke"] = shape.stroke_color.to_hex()
                    attrs["stroke_width"] = _num(shape.stroke_width * scale)
                elements.append(dwg.path(d=d, **attrs))

            for label in cell.record.labels:
                elements.append(self._text(dwg, label, transform, scale))
        return elements

    @staticmethod
    def _text(
        dwg: svgwrite.Drawing,
        label: TextLabel,
        transform: Transform,
        scale: float,
    ) -> svgwrite.text.Text:
        x, y = transform.transformPoint(label.position.to_tuple())
        attrs: dict[str, str] = {
            "font_size": _num(label.font_size * scale),
            "font_family": "monospace",
            "fill": label.fill_color.to_hex(),
        }
        if label.anchor is AnchorMode.MIDDLE:
            attrs["text_anchor"] = "middle"
        return dwg.text(label.content, insert=(_num(x), _num(y)), **attrs)


def render_preview_svg(result: FlipResult, config: LayoutConfig | None = None) -> str:
    """Render the two-row SVG preview of a flip result."""
    return PreviewRenderer(config).render(result)

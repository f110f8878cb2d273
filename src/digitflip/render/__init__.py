"""Preview rendering for digitflip.

Key classes:
- PreviewRenderer: Builds the two-row SVG preview

Key functions:
- layout_row: Place elements in fixed-size cells
- flip_transform: Point reflection of a whole row
- render_preview_svg: Render a flip result to SVG text
"""

from digitflip.render.preview import (
    Cell,
    PreviewRenderer,
    RowLayout,
    fit_transform,
    flip_transform,
    layout_row,
    render_preview_svg,
    shape_path_data,
)

__all__ = [
    "Cell",
    "PreviewRenderer",
    "RowLayout",
    "fit_transform",
    "flip_transform",
    "layout_row",
    "render_preview_svg",
    "shape_path_data",
]

"""Coordinate transforms for glyph documents.

This module provides:
- parse_transform: Parse a transform attribute into an affine matrix
- TransformStack: Scoped composition of nested group transforms

Matrices are fontTools ``Transform`` objects, which use the same (a, b, c, d,
e, f) layout as the ``matrix()`` transform function.
"""

import math
import re
from collections.abc import Iterator
from contextlib import contextmanager

from fontTools.misc.transform import Identity, Transform

_FUNCTION_RE = re.compile(r"([A-Za-z]+)\s*\(([^)]*)\)")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def _parse_args(raw: str) -> list[float]:
    return [float(token) for token in _NUMBER_RE.findall(raw)]


def _parse_function(name: str, args: list[float]) -> Transform:
    """Build the matrix for a single transform function.

    Unsupported names or wrong argument counts give the identity.
    """
    if name == "matrix" and len(args) == 6:
        return Transform(*args)

    if name == "translate" and len(args) in (1, 2):
        tx = args[0]
        ty = args[1] if len(args) == 2 else 0.0
        return Identity.translate(tx, ty)

    if name == "scale" and len(args) in (1, 2):
        sx = args[0]
        sy = args[1] if len(args) == 2 else sx
        return Identity.scale(sx, sy)

    if name == "rotate" and len(args) in (1, 3):
        angle = math.radians(args[0])
        if len(args) == 3:
            cx, cy = args[1], args[2]
            return Identity.translate(cx, cy).rotate(angle).translate(-cx, -cy)
        return Identity.rotate(angle)

    return Identity


def parse_transform(value: str | None) -> Transform:
    """Parse a transform attribute.

    Supports ``matrix(a,b,c,d,e,f)``, ``translate(tx[,ty])``,
    ``scale(sx[,sy])`` and ``rotate(angle[,cx,cy])`` with the angle in
    degrees. A list of functions is composed left to right, so the rightmost
    function is applied to coordinates first.

    Args:
        value: Attribute value (None or empty gives the identity)

    Returns:
        The combined transform

    Examples:
        >>> parse_transform("translate(10, 5)").transformPoint((1, 1))
        (11.0, 6.0)
    """
    if not value:
        return Identity

    result = Identity
    for match in _FUNCTION_RE.finditer(value):
        name = match.group(1).strip()
        result = result.transform(_parse_function(name, _parse_args(match.group(2))))
    return result


class TransformStack:
    """Stack of composed transforms, one slot per nesting depth.

    Slot 0 holds the root transform. Entering a group pushes the group's own
    transform composed inside the current one (the group's transform applies
    to coordinates first); leaving pops it. The root slot is never popped.

    Example:
        stack = TransformStack()
        with stack.scoped(parse_transform("scale(2)")):
            point = stack.current.transformPoint((1, 1))
    """

    def __init__(self, root: Transform = Identity) -> None:
        self._slots: list[Transform] = [root]

    @property
    def current(self) -> Transform:
        """The transform in effect at the current depth."""
        return self._slots[-1]

    @property
    def depth(self) -> int:
        """Number of pushed scopes above the root."""
        return len(self._slots) - 1

    def compose(self, local: Transform) -> Transform:
        """Return ``local`` nested inside the current transform, without pushing."""
        return self.current.transform(local)

    def push(self, local: Transform = Identity) -> Transform:
        """Enter a scope with its own local transform.

        Returns:
            The newly effective transform
        """
        composed = self.compose(local)
        self._slots.append(composed)
        return composed

    def pop(self) -> Transform:
        """Leave the innermost scope.

        Returns:
            The transform that was removed

        Raises:
            IndexError: If only the root slot remains
        """
        if len(self._slots) == 1:
            raise IndexError("Cannot pop the root transform")
        return self._slots.pop()

    @contextmanager
    def scoped(self, local: Transform = Identity) -> Iterator[Transform]:
        """Push ``local`` for the duration of a ``with`` block."""
        composed = self.push(local)
        try:
            yield composed
        finally:
            self.pop()

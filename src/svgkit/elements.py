"""Factories for the primitive shapes.

Every factory centers its shape at the origin, ready to be translated and
rotated into place with :mod:`svgkit.core.transforms`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from svgkit.core.exceptions import InvalidPathCommandError
from svgkit.core.models import (
    Circle,
    Ellipse,
    Group,
    Image,
    Line,
    Path,
    PathCommand,
    Polygon,
    Polyline,
    Rect,
    Shape,
    Text,
    as_point,
)
from svgkit.core.style import Style
from svgkit.core.types import CommandKind, CoordMode
from svgkit.core.vector import distance, rotate_point_around_center

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from svgkit.core.models import Operand, PointLike

DEFAULT_FONT_SIZE = 12


def circle(r: float) -> Circle:
    """Emit a circle of radius ``r`` centered at the origin."""
    return Circle(0, 0, r)


def ellipse(rx: float, ry: float) -> Ellipse:
    """Emit an ellipse with radii ``rx`` and ``ry`` centered at the origin."""
    return Ellipse(0, 0, rx, ry)


def line(a: PointLike, b: PointLike) -> Line:
    """Emit a line from ``a`` to ``b``."""
    ax, ay = a
    bx, by = b
    return Line(ax, ay, bx, by)


def polygon(points: Iterable[PointLike]) -> Polygon:
    """Emit a closed polygon through ``points``."""
    return Polygon(tuple(points))


def polyline(points: Iterable[PointLike]) -> Polyline:
    """Emit an open polyline through ``points``."""
    return Polyline(tuple(points))


def rect(w: float, h: float) -> Rect:
    """Emit a ``w`` by ``h`` rectangle centered at the origin.

    Examples:
        >>> r = rect(10, 20)
        >>> (r.x, r.y)
        (-5.0, -10.0)
    """
    return Rect(w / -2.0, h / -2.0, w, h)


def image(href: str, w: float, h: float) -> Image:
    """Emit an image of ``href`` sized ``w`` by ``h`` centered at the origin."""
    return Image(w / -2.0, h / -2.0, w, h, href=href)


def text(content: str, font_size: float = DEFAULT_FONT_SIZE) -> Text:
    """Emit a text element centered on the origin."""
    style = Style(extra={"text-anchor": "middle", "dominant-baseline": "middle"})
    return Text(0, 0, content, font_size, style=style)


def g(content: Shape | Sequence[Shape] = ()) -> Group:
    """Emit a group around one shape or a list of shapes."""
    children = (content,) if isinstance(content, Shape) else tuple(content)
    return Group(children)


def command(letter: str, *operands: Operand | PointLike, cursor: PointLike | None = None) -> PathCommand:
    """Build a path command from its SVG letter.

    Lowercase letters are relative, uppercase absolute.

    Examples:
        >>> command("l", (10, 0)).mode
        <CoordMode.RELATIVE: 'rel'>
    """
    try:
        kind = CommandKind(letter.upper())
    except ValueError as exc:
        raise InvalidPathCommandError(letter, "unknown command letter") from exc
    mode = CoordMode.ABSOLUTE if letter.isupper() else CoordMode.RELATIVE
    return PathCommand(kind, mode, tuple(operands), as_point(cursor) if cursor is not None else None)


def path(commands: Iterable[PathCommand]) -> Path:
    """Emit a path element from a sequence of commands."""
    return Path(tuple(commands), style=Style(extra={"fill-rule": "evenodd"}))


def arc(start: PointLike, center: PointLike, deg: float) -> Path:
    """Emit a circular arc sweeping ``deg`` degrees from ``start`` around ``center``."""
    r = distance(start, center)
    end = rotate_point_around_center(start, deg, center)
    large_arc = 0 if deg <= 180 else 1
    return path([command("M", start), command("A", r, r, 0, large_arc, 1, end)])

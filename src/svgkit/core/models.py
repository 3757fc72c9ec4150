"""Core domain models for svgkit shapes.

Every model is a frozen dataclass: transforms return new values and never
mutate their input. Shapes form a strict tree; a group owns its children.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import ClassVar, Union

from svgkit.core.exceptions import InvalidPathCommandError, InvalidShapeError
from svgkit.core.style import Style
from svgkit.core.types import CommandKind, CoordMode, ShapeKind


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or vector) in 2D user space.

    Unpacks like a pair, so ``x, y = point`` works.

    Attributes:
        x: X-coordinate.
        y: Y-coordinate.
    """

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


PointLike = Union[Point, Sequence[float]]


def as_point(value: PointLike) -> Point:
    """Coerce an ``(x, y)`` pair into a :class:`Point`."""
    if isinstance(value, Point):
        return value
    x, y = value
    return Point(x, y)


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box.

    Attributes:
        min_x: Smallest x-coordinate.
        min_y: Smallest y-coordinate.
        max_x: Largest x-coordinate.
        max_y: Largest y-coordinate.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def corners(self) -> list[Point]:
        """The four corners, in the order top-left, top-right, bottom-right, bottom-left."""
        return [
            Point(self.min_x, self.min_y),
            Point(self.max_x, self.min_y),
            Point(self.max_x, self.max_y),
            Point(self.min_x, self.max_y),
        ]

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        """Centroid of the four corners."""
        return Point(round((self.min_x + self.max_x) / 2, 5), round((self.min_y + self.max_y) / 2, 5))

    def contains(self, point: PointLike) -> bool:
        """Check whether ``point`` lies inside the box, edges included."""
        x, y = point
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def __iter__(self) -> Iterator[Point]:
        return iter(self.corners)


_ROTATE_RE = re.compile(r"^\s*rotate\(\s*([^\s,()]+)(?:[\s,]+([^\s,()]+)[\s,]+([^\s,()]+))?\s*\)\s*$")


@dataclass(frozen=True, slots=True)
class Rotation:
    """Render-time rotation for shapes whose fields cannot encode orientation.

    Attributes:
        angle: Rotation angle in degrees.
        pivot_x: X-coordinate of the rotation pivot.
        pivot_y: Y-coordinate of the rotation pivot.
    """

    angle: float = 0
    pivot_x: float = 0
    pivot_y: float = 0

    @property
    def pivot(self) -> Point:
        return Point(self.pivot_x, self.pivot_y)

    def to_transform(self) -> str:
        """Format as an SVG ``transform`` attribute value."""
        from svgkit.core.vector import format_number

        args = " ".join(format_number(v) for v in (self.angle, self.pivot_x, self.pivot_y))
        return f"rotate({args})"

    @classmethod
    def parse(cls, transform: str) -> Rotation:
        """Parse a ``rotate(angle [px py])`` transform string.

        Raises:
            InvalidShapeError: If ``transform`` is not a single rotate call.
        """
        match = _ROTATE_RE.match(transform)
        if match is None:
            msg = f"Unsupported transform: {transform!r}"
            raise InvalidShapeError(msg)
        angle, px, py = match.groups()
        return cls(float(angle), float(px or 0), float(py or 0))


# Points per operand group for point-carrying commands.
_POINT_ARITY = {
    CommandKind.MOVE: 1,
    CommandKind.LINE: 1,
    CommandKind.SMOOTH_QUADRATIC: 1,
    CommandKind.CUBIC: 3,
    CommandKind.SMOOTH_CUBIC: 2,
    CommandKind.QUADRATIC: 2,
}

Operand = Union[float, Point]


@dataclass(frozen=True, slots=True)
class PathCommand:
    """One instruction of a path's drawing sequence.

    Point-carrying commands may repeat their operand group (``L`` with three
    points draws three segments). Arc operands are
    ``(rx, ry, x_axis_rotation, large_arc, sweep, end)``; the end may also be
    given as two trailing numbers.

    Attributes:
        kind: The drawing command.
        mode: Whether operands are absolute or relative to the current point.
        operands: Numbers and points, in SVG order.
        cursor: Pen position the command was authored from. Only consulted
            when a path must synthesize its leading move.
    """

    kind: CommandKind
    mode: CoordMode = CoordMode.ABSOLUTE
    operands: tuple[Operand, ...] = ()
    cursor: Point | None = None

    def __post_init__(self) -> None:
        """Coerce operands and validate them against the command kind."""
        kind = CommandKind(self.kind)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "mode", CoordMode(self.mode))
        if self.cursor is not None:
            object.__setattr__(self, "cursor", as_point(self.cursor))
        object.__setattr__(self, "operands", _coerce_operands(kind, tuple(self.operands)))

    @property
    def letter(self) -> str:
        """The SVG command letter: uppercase for absolute, lowercase for relative."""
        return self.kind.value if self.mode is CoordMode.ABSOLUTE else self.kind.value.lower()

    @property
    def points(self) -> list[Point]:
        """Point operands in order."""
        return [op for op in self.operands if isinstance(op, Point)]


def _coerce_operands(kind: CommandKind, operands: tuple) -> tuple[Operand, ...]:
    if kind is CommandKind.CLOSE:
        if operands:
            raise InvalidPathCommandError(kind, "closepath takes no operands")
        return ()

    if kind in (CommandKind.HLINE, CommandKind.VLINE):
        if not operands or any(not isinstance(op, (int, float)) for op in operands):
            raise InvalidPathCommandError(kind, "expected one or more numbers")
        return operands

    if kind is CommandKind.ARC:
        if len(operands) == 7:
            operands = (*operands[:5], Point(operands[5], operands[6]))
        if len(operands) != 6:
            raise InvalidPathCommandError(kind, "expected rx ry x-axis-rotation large-arc sweep end")
        rx, ry, rotation, large_arc, sweep, end = operands
        if large_arc not in (0, 1) or sweep not in (0, 1):
            raise InvalidPathCommandError(kind, "arc flags must be 0 or 1")
        if rx < 0 or ry < 0:
            raise InvalidPathCommandError(kind, "arc radii must be non-negative")
        return (rx, ry, rotation, int(large_arc), int(sweep), as_point(end))

    arity = _POINT_ARITY[kind]
    try:
        points = tuple(as_point(op) for op in operands)
    except (TypeError, ValueError) as exc:
        raise InvalidPathCommandError(kind, "operands must be points") from exc
    if not points or len(points) % arity:
        raise InvalidPathCommandError(kind, f"expected a multiple of {arity} point(s), got {len(points)}")
    return points


@dataclass(frozen=True)
class Shape:
    """Base class for all drawable shapes.

    Attributes:
        style: Presentation attributes, keyword-only on every subclass.
    """

    kind: ClassVar[ShapeKind]
    style: Style = field(default_factory=Style, kw_only=True)


def _require_non_negative(shape: Shape, **values: float) -> None:
    for name, value in values.items():
        if value < 0:
            msg = f"{shape.kind.value} {name} must be non-negative, got {value}"
            raise InvalidShapeError(msg)


@dataclass(frozen=True)
class Circle(Shape):
    """A circle centered at ``(cx, cy)``."""

    kind: ClassVar[ShapeKind] = ShapeKind.CIRCLE

    cx: float
    cy: float
    r: float
    rotation: Rotation | None = None

    def __post_init__(self) -> None:
        _require_non_negative(self, r=self.r)


@dataclass(frozen=True)
class Ellipse(Shape):
    """An axis-aligned ellipse; orientation lives in ``rotation``."""

    kind: ClassVar[ShapeKind] = ShapeKind.ELLIPSE

    cx: float
    cy: float
    rx: float
    ry: float
    rotation: Rotation | None = None

    def __post_init__(self) -> None:
        _require_non_negative(self, rx=self.rx, ry=self.ry)


@dataclass(frozen=True)
class Line(Shape):
    """A straight segment from ``(x1, y1)`` to ``(x2, y2)``."""

    kind: ClassVar[ShapeKind] = ShapeKind.LINE

    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class Polygon(Shape):
    """A closed outline through ``points``."""

    kind: ClassVar[ShapeKind] = ShapeKind.POLYGON

    points: tuple[Point, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(as_point(p) for p in self.points))


@dataclass(frozen=True)
class Polyline(Polygon):
    """An open outline through ``points``."""

    kind: ClassVar[ShapeKind] = ShapeKind.POLYLINE


@dataclass(frozen=True)
class Rect(Shape):
    """A rectangle with top-left corner ``(x, y)``."""

    kind: ClassVar[ShapeKind] = ShapeKind.RECT

    x: float
    y: float
    width: float
    height: float
    rotation: Rotation | None = None

    def __post_init__(self) -> None:
        _require_non_negative(self, width=self.width, height=self.height)


@dataclass(frozen=True)
class Image(Rect):
    """A raster image placed in the rectangle ``(x, y, width, height)``."""

    kind: ClassVar[ShapeKind] = ShapeKind.IMAGE

    href: str = ""


@dataclass(frozen=True)
class Text(Shape):
    """A run of text anchored at ``(x, y)``."""

    kind: ClassVar[ShapeKind] = ShapeKind.TEXT

    x: float
    y: float
    content: str = ""
    font_size: float = 12
    rotation: Rotation | None = None

    def __post_init__(self) -> None:
        _require_non_negative(self, font_size=self.font_size)


@dataclass(frozen=True)
class Path(Shape):
    """A compound outline described by drawing commands.

    The first command is always a move. When ``commands`` does not start with
    one, a move to the first command's ``cursor`` (or the origin) is
    prepended.
    """

    kind: ClassVar[ShapeKind] = ShapeKind.PATH

    commands: tuple[PathCommand, ...] = ()

    def __post_init__(self) -> None:
        commands = tuple(self.commands)
        if not commands or commands[0].kind is not CommandKind.MOVE:
            start = commands[0].cursor if commands and commands[0].cursor is not None else Point(0, 0)
            commands = (PathCommand(CommandKind.MOVE, CoordMode.ABSOLUTE, (start,)), *commands)
        elif commands[0].mode is CoordMode.RELATIVE:
            # A leading relative move is measured from the origin.
            x = y = 0
            absolute = []
            for point in commands[0].points:
                x, y = x + point.x, y + point.y
                absolute.append(Point(x, y))
            commands = (PathCommand(CommandKind.MOVE, CoordMode.ABSOLUTE, tuple(absolute)), *commands[1:])
        object.__setattr__(self, "commands", commands)


@dataclass(frozen=True)
class Group(Shape):
    """A container whose geometry is derived entirely from its children."""

    kind: ClassVar[ShapeKind] = ShapeKind.GROUP

    children: tuple[Shape, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True)
class Document:
    """Root ``svg`` container wrapping a list of shapes.

    Not a shape itself: transforms apply to ``children``, not the document.

    Attributes:
        children: Top-level shapes in paint order.
        width: Viewport width in user units.
        height: Viewport height in user units.
        view_box: ``(min_x, min_y, width, height)`` of the visible region.
        scale: Optional uniform scale applied to all children.
    """

    children: tuple[Shape, ...] = ()
    width: float = 0
    height: float = 0
    view_box: tuple[float, float, float, float] = (0, 0, 0, 0)
    scale: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "view_box", tuple(self.view_box))

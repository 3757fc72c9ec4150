"""Path-command model: point approximation, transforms and ``d`` formatting.

Curves are approximated by their control polygons and arcs by points every
90 degrees along the sweep, so path bounds and centroids are estimates rather
than true geometric extrema.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import TYPE_CHECKING

import structlog

from svgkit.core.models import Path, PathCommand, Point, as_point
from svgkit.core.types import CommandKind, CoordMode
from svgkit.core.vector import (
    add,
    bounds_of_points,
    centroid_of_points,
    format_number,
    point_str,
    rnd,
    rotate_point,
    rotate_point_around_center,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from svgkit.core.models import BoundingBox, PointLike

logger = structlog.get_logger(__name__)

_GROUP_SIZE = {
    CommandKind.MOVE: 1,
    CommandKind.LINE: 1,
    CommandKind.SMOOTH_QUADRATIC: 1,
    CommandKind.CUBIC: 3,
    CommandKind.SMOOTH_CUBIC: 2,
    CommandKind.QUADRATIC: 2,
}

ORIGIN = Point(0, 0)


def absolute_points(cmd: PathCommand, cursor: PointLike = ORIGIN) -> list[Point]:
    """Resolve a command's point operands to absolute coordinates.

    Relative operand groups are measured from the end of the previous group,
    starting at ``cursor``. Arcs yield their end point; closepath yields
    nothing.
    """
    cursor = as_point(cursor)
    absolute = cmd.mode is CoordMode.ABSOLUTE

    if cmd.kind is CommandKind.CLOSE:
        return []

    if cmd.kind in (CommandKind.HLINE, CommandKind.VLINE):
        points = []
        x, y = cursor
        for value in cmd.operands:
            if cmd.kind is CommandKind.HLINE:
                x = value if absolute else x + value
            else:
                y = value if absolute else y + value
            points.append(Point(x, y))
        return points

    if cmd.kind is CommandKind.ARC:
        end = cmd.operands[5]
        return [end if absolute else add(cursor, end)]

    if absolute:
        return list(cmd.operands)

    size = _GROUP_SIZE[cmd.kind]
    points = []
    base = cursor
    for i in range(0, len(cmd.operands), size):
        group = [add(base, p) for p in cmd.operands[i : i + size]]
        points.extend(group)
        base = group[-1]
    return points


def walk(commands: Iterable[PathCommand]) -> Iterator[tuple[PathCommand, Point]]:
    """Yield each command with the absolute pen position before it."""
    cursor = ORIGIN
    subpath_start = ORIGIN
    for cmd in commands:
        yield cmd, cursor
        if cmd.kind is CommandKind.CLOSE:
            cursor = subpath_start
            continue
        points = absolute_points(cmd, cursor)
        if cmd.kind is CommandKind.MOVE:
            subpath_start = points[0]
        cursor = points[-1]


def arc_points(
    start: PointLike,
    rx: float,
    ry: float,
    large_arc: int,
    sweep: int,
    end: PointLike,
) -> list[Point]:
    """Sample an arc every 90 degrees from ``start`` to ``end``.

    The arc is treated as circular with radius ``rx`` (``ry`` when ``rx`` is
    zero), enlarged to half the chord when too small to span it. The returned
    list excludes ``start`` and ends with ``end``.
    """
    start = as_point(start)
    end = as_point(end)
    if start == end:
        return []
    radius = rx or ry
    if radius == 0:
        return [end]

    hx = (start.x - end.x) / 2
    hy = (start.y - end.y) / 2
    half_chord_sq = hx * hx + hy * hy
    radius_sq = max(radius * radius, half_chord_sq)
    coef = math.sqrt(max(0.0, (radius_sq - half_chord_sq) / half_chord_sq))
    if large_arc == sweep:
        coef = -coef
    center = Point(coef * hy + (start.x + end.x) / 2, -coef * hx + (start.y + end.y) / 2)

    theta_start = math.atan2(start.y - center.y, start.x - center.x)
    theta_end = math.atan2(end.y - center.y, end.x - center.x)
    sweep_deg = math.degrees(theta_end - theta_start)
    if sweep and sweep_deg < 0:
        sweep_deg += 360
    elif not sweep and sweep_deg > 0:
        sweep_deg -= 360

    steps = math.ceil(round(abs(sweep_deg), 3) / 90)
    step = math.copysign(90, sweep_deg)
    mids = [rotate_point_around_center(start, step * k, center) for k in range(1, steps)]
    return [*mids, end]


def to_approximate_points(cmd: PathCommand, cursor: PointLike = ORIGIN) -> list[Point]:
    """Approximate a command by points, excluding the starting ``cursor``.

    Lines and moves give their end points, curves their control polygon, arcs
    90-degree samples along the sweep, and closepath nothing.
    """
    if cmd.kind is CommandKind.ARC:
        rx, ry, _rotation, large_arc, sweep, _end = cmd.operands
        (end,) = absolute_points(cmd, cursor)
        return arc_points(cursor, rx, ry, large_arc, sweep, end)
    return absolute_points(cmd, cursor)


def rotate_command(cmd: PathCommand, pivot: PointLike, degrees: float, cursor: PointLike = ORIGIN) -> PathCommand:
    """Rotate one command around ``pivot``.

    Relative operands are offsets, so they rotate around the origin instead.
    Arcs rotate their end point and add ``degrees`` to the x-axis rotation.
    Horizontal and vertical lines become line commands: once turned they are
    no longer axis aligned. Rotating back restores the geometry but not the
    original command letter.
    """
    pivot = as_point(pivot)
    absolute = cmd.mode is CoordMode.ABSOLUTE

    def turn(point: Point) -> Point:
        if absolute:
            return rotate_point_around_center(point, degrees, pivot)
        return rotate_point(point, degrees)

    if cmd.kind is CommandKind.CLOSE:
        return cmd

    if cmd.kind is CommandKind.ARC:
        rx, ry, x_rotation, large_arc, sweep, end = cmd.operands
        return replace(cmd, operands=(rx, ry, rnd(x_rotation + degrees), large_arc, sweep, turn(end)))

    if cmd.kind in (CommandKind.HLINE, CommandKind.VLINE):
        if absolute:
            targets = absolute_points(cmd, cursor)
        else:
            horizontal = cmd.kind is CommandKind.HLINE
            targets = [Point(v, 0) if horizontal else Point(0, v) for v in cmd.operands]
        return replace(cmd, kind=CommandKind.LINE, operands=tuple(turn(p) for p in targets))

    return replace(cmd, operands=tuple(turn(p) for p in cmd.operands))


def translate_command(cmd: PathCommand, delta: PointLike) -> PathCommand:
    """Shift an absolute command by ``delta``; relative commands are unchanged."""
    if cmd.mode is CoordMode.RELATIVE or cmd.kind is CommandKind.CLOSE:
        return cmd
    dx, dy = delta
    if cmd.kind is CommandKind.HLINE:
        return replace(cmd, operands=tuple(rnd(v + dx) for v in cmd.operands))
    if cmd.kind is CommandKind.VLINE:
        return replace(cmd, operands=tuple(rnd(v + dy) for v in cmd.operands))
    if cmd.kind is CommandKind.ARC:
        *params, end = cmd.operands
        return replace(cmd, operands=(*params, add(end, delta)))
    return replace(cmd, operands=tuple(add(p, delta) for p in cmd.operands))


def to_markup_fragment(cmd: PathCommand) -> str:
    """Format a command for a ``d`` attribute, e.g. ``"L10,20"`` or ``"Z"``."""
    operands = " ".join(point_str(op) if isinstance(op, Point) else format_number(op) for op in cmd.operands)
    return f"{cmd.letter}{operands}"


def path_data(commands: Iterable[PathCommand]) -> str:
    """Join command fragments into a complete ``d`` attribute value."""
    return " ".join(to_markup_fragment(cmd) for cmd in commands)


def path_points(path: Path) -> list[Point]:
    """Approximate points of every command in ``path``."""
    points: list[Point] = []
    for cmd, cursor in walk(path.commands):
        points.extend(to_approximate_points(cmd, cursor))
    return points


def bounds(path: Path) -> BoundingBox:
    """Approximate axis-aligned bounding box of ``path``."""
    return bounds_of_points(path_points(path))


def centroid(path: Path) -> Point:
    """Mean position of the approximate points of ``path``.

    May be inaccurate for paths with curved segments.
    """
    return centroid_of_points(path_points(path))


def translate(path: Path, delta: PointLike) -> Path:
    """Shift every absolute command of ``path`` by ``delta``."""
    return replace(path, commands=tuple(translate_command(cmd, delta) for cmd in path.commands))


def rotate(path: Path, degrees: float) -> Path:
    """Rotate ``path`` by ``degrees`` around its own centroid.

    ``H`` and ``V`` commands come back as ``L``; see :func:`rotate_command`.
    """
    pivot = centroid(path)
    logger.debug("Rotating path", degrees=degrees, pivot=tuple(pivot), commands=len(path.commands))
    commands = tuple(rotate_command(cmd, pivot, degrees, cursor) for cmd, cursor in walk(path.commands))
    return replace(path, commands=commands)


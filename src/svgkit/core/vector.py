"""Vector math primitives over 2D points.

Every derived float is rounded to ``PRECISION`` decimal places as soon as it
is computed. Serialized output and equality checks rely on that digit count,
so callers should not re-round.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from svgkit.core.exceptions import DivisionByZeroError, EmptyGeometryError
from svgkit.core.models import BoundingBox, Point, PointLike, as_point

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

PRECISION = 5


def rnd(num: float) -> float:
    """Round a float to ``PRECISION`` digits; integers pass through unchanged."""
    if isinstance(num, float):
        return round(num, PRECISION)
    return num


def add(a: PointLike, b: PointLike) -> Point:
    """Element-wise sum of ``a`` and ``b``.

    Examples:
        >>> add((1, 2), (3, 4))
        Point(x=4, y=6)
    """
    ax, ay = a
    bx, by = b
    return Point(rnd(ax + bx), rnd(ay + by))


def sub(a: PointLike, b: PointLike) -> Point:
    """Element-wise difference ``a - b``."""
    ax, ay = a
    bx, by = b
    return Point(rnd(ax - bx), rnd(ay - by))


def mul(a: PointLike, b: PointLike) -> Point:
    """Element-wise product of ``a`` and ``b``."""
    ax, ay = a
    bx, by = b
    return Point(rnd(ax * bx), rnd(ay * by))


def div(a: PointLike, b: PointLike) -> Point:
    """Element-wise quotient ``a / b``.

    Raises:
        DivisionByZeroError: If either component of ``b`` is zero.
    """
    ax, ay = a
    bx, by = b
    if bx == 0 or by == 0:
        raise DivisionByZeroError(a, b)
    return Point(rnd(ax / bx), rnd(ay / by))


def neg(a: PointLike) -> Point:
    """Negate both components of ``a``."""
    return mul(a, (-1, -1))


def deg_to_rad(deg: float) -> float:
    return rnd(math.radians(deg))


def rad_to_deg(rad: float) -> float:
    return rnd(math.degrees(rad))


def rotate_point(point: PointLike, degrees: float) -> Point:
    """Rotate ``point`` counter-clockwise around the origin.

    Examples:
        >>> rotate_point((1, 2), 90)
        Point(x=-2.0, y=1.0)
    """
    x, y = point
    rad = math.radians(degrees)
    c = math.cos(rad)
    s = math.sin(rad)
    return Point(rnd(x * c - y * s), rnd(x * s + y * c))


def rotate_point_around_center(point: PointLike, degrees: float, center: PointLike) -> Point:
    """Rotate ``point`` counter-clockwise around ``center``."""
    return add(rotate_point(sub(point, center), degrees), center)


def distance(a: PointLike, b: PointLike) -> float:
    """Euclidean distance between ``a`` and ``b``.

    Examples:
        >>> distance((1, 2), (3, 4))
        2.82843
    """
    dx, dy = sub(b, a)
    return rnd(math.sqrt(dx * dx + dy * dy))


def centroid_of_points(points: Iterable[PointLike]) -> Point:
    """Arithmetic mean position of ``points``.

    Raises:
        EmptyGeometryError: If ``points`` is empty.

    Examples:
        >>> centroid_of_points([(1, 2), (3, 4)])
        Point(x=2.0, y=3.0)
    """
    sum_x = 0.0
    sum_y = 0.0
    count = 0
    for x, y in points:
        sum_x += x
        sum_y += y
        count += 1
    if count == 0:
        raise EmptyGeometryError("points")
    return Point(rnd(sum_x / count), rnd(sum_y / count))


def bounds_of_points(points: Iterable[PointLike]) -> BoundingBox:
    """Axis-aligned bounding box of ``points``.

    Raises:
        EmptyGeometryError: If ``points`` is empty.
    """
    iterator = iter(points)
    try:
        min_x, min_y = next(iterator)
    except StopIteration:
        raise EmptyGeometryError("points") from None
    max_x, max_y = min_x, min_y
    for x, y in iterator:
        min_x = min(min_x, x)
        max_x = max(max_x, x)
        min_y = min(min_y, y)
        max_y = max(max_y, y)
    return BoundingBox(min_x, min_y, max_x, max_y)


def bounding_box_dimensions(points: Iterable[PointLike]) -> Point:
    """Width and height of the box enclosing ``points``."""
    box = bounds_of_points(points)
    return Point(box.width, box.height)


def points_to_vector(text: str) -> list[Point]:
    """Parse an SVG ``points`` string such as ``"1,2 3,4"``.

    Examples:
        >>> points_to_vector("1,2 3,4")
        [Point(x=1, y=2), Point(x=3, y=4)]
    """
    numbers = [string_to_numeric(token) for token in text.replace(",", " ").split()]
    if len(numbers) % 2:
        msg = f"Odd number of coordinates in points string: {text!r}"
        raise ValueError(msg)
    return [Point(numbers[i], numbers[i + 1]) for i in range(0, len(numbers), 2)]


def vector_to_string(points: Sequence[PointLike]) -> str:
    """Format points as an SVG ``points`` string."""
    return " ".join(point_str(as_point(p)) for p in points)


def string_to_numeric(text: str) -> int | float:
    """Parse ``text`` as an int when it is integral, else as a float."""
    value = float(text)
    if value.is_integer() and "e" not in text.lower() and "." not in text:
        return int(value)
    return value


def format_number(value: float) -> str:
    """Format a number for markup: integral floats lose their ``.0``."""
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float):
        if value == 0:
            return "0"
        if value.is_integer():
            return str(int(value))
        return repr(rnd(value))
    return str(value)


def point_str(point: Point) -> str:
    """Format a point as ``"x,y"``."""
    return f"{format_number(point.x)},{format_number(point.y)}"

"""Geometric transforms over shapes: bounds, centroid, translate and rotate.

Each operation dispatches over the closed set of shape classes in
:mod:`svgkit.core.models` and also accepts a list of shapes. Every operation
returns a new value.

Circles, ellipses, rects, images and text cannot encode orientation in their
own fields, so ``rotate`` records an auxiliary :class:`Rotation` for them that
is applied at render time. Lines, polygons, polylines and paths are rotated
by rewriting their coordinates.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any, TypeVar

import structlog

from svgkit.core import paths
from svgkit.core.exceptions import EmptyGeometryError, UnsupportedShapeError
from svgkit.core.models import (
    Circle,
    Ellipse,
    Group,
    Line,
    Path,
    Point,
    Polygon,
    Rect,
    Rotation,
    Shape,
    Text,
    as_point,
)
from svgkit.core.vector import (
    add,
    bounds_of_points,
    centroid_of_points,
    neg,
    rnd,
    rotate_point,
    rotate_point_around_center,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from svgkit.core.models import BoundingBox, PointLike

logger = structlog.get_logger(__name__)

# Width of an average glyph relative to the font size.
GLYPH_ASPECT = 0.6

S = TypeVar("S", bound=Shape)


def _unsupported(shape: Any, operation: str) -> UnsupportedShapeError:
    logger.error("Unsupported shape", operation=operation, shape_type=type(shape).__name__)
    return UnsupportedShapeError(shape, operation)


def _rotate_corners(corners: Sequence[Point], rotation: Rotation | None) -> list[Point]:
    if rotation is None:
        return list(corners)
    return [rotate_point_around_center(p, rotation.angle, rotation.pivot) for p in corners]


def _require_points(shape: Polygon) -> tuple[Point, ...]:
    if not shape.points:
        raise EmptyGeometryError(f"{shape.kind.value} points")
    return shape.points


def _has_geometry(shape: Shape) -> bool:
    match shape:
        case Polygon(points=points):
            return bool(points)
        case Group(children=children):
            return any(_has_geometry(child) for child in children)
        case _:
            return True


def _require_children(group: Group) -> list[Shape]:
    children = [child for child in group.children if _has_geometry(child)]
    if not children:
        raise EmptyGeometryError("group")
    return children


def _union(boxes: Sequence[BoundingBox]) -> BoundingBox:
    return bounds_of_points(corner for box in boxes for corner in box.corners)


def bounds(shape: Shape | Sequence[Shape]) -> BoundingBox:
    """Calculate the axis-aligned bounding box of a shape or list of shapes.

    Ellipse and circle bounds under an auxiliary rotation are approximate:
    the result is the midpoint envelope of the unrotated box and the box of
    the rotated cardinal points. Text bounds are estimated from the font size
    and character count. Path bounds come from control points.

    Raises:
        EmptyGeometryError: If there are no points to bound.
        UnsupportedShapeError: If ``shape`` is not a known shape.
    """
    match shape:
        case list() | tuple():
            if not shape:
                raise EmptyGeometryError("shape list")
            return _union([bounds(s) for s in shape])
        case Circle(cx=cx, cy=cy, r=r, rotation=rotation):
            return _radial_bounds(Point(cx, cy), r, r, rotation)
        case Ellipse(cx=cx, cy=cy, rx=rx, ry=ry, rotation=rotation):
            return _radial_bounds(Point(cx, cy), rx, ry, rotation)
        case Line(x1=x1, y1=y1, x2=x2, y2=y2):
            return bounds_of_points([Point(x1, y1), Point(x2, y2)])
        case Polygon():
            return bounds_of_points(_require_points(shape))
        case Rect(x=x, y=y, width=w, height=h, rotation=rotation):
            corners = [add((x, y), offset) for offset in ((0, 0), (w, 0), (w, h), (0, h))]
            return bounds_of_points(_rotate_corners(corners, rotation))
        case Text(x=x, y=y, font_size=fs, content=content, rotation=rotation):
            half_w = GLYPH_ASPECT * fs * len(content) / 2
            half_h = fs / 2
            offsets = ((-half_w, -half_h), (half_w, -half_h), (half_w, half_h), (-half_w, half_h))
            corners = [add((x, y), offset) for offset in offsets]
            if rotation is not None:
                corners = [rotate_point_around_center(p, rotation.angle, (x, y)) for p in corners]
            return bounds_of_points(corners)
        case Path():
            return paths.bounds(shape)
        case Group():
            return _union([bounds(child) for child in _require_children(shape)])
        case _:
            raise _unsupported(shape, "bounds")


def _radial_bounds(center: Point, rx: float, ry: float, rotation: Rotation | None) -> BoundingBox:
    cardinal = [add(center, v) for v in ((rx, 0), (0, ry), (-rx, 0), (0, -ry))]
    unrotated = bounds_of_points(cardinal)
    if rotation is None:
        return unrotated
    rotated = bounds_of_points(_rotate_corners(cardinal, rotation))
    midpoints = [centroid_of_points([a, b]) for a, b in zip(unrotated.corners, rotated.corners, strict=True)]
    return bounds_of_points(midpoints)


def centroid(shape: Shape | Sequence[Shape]) -> Point:
    """Calculate the arithmetic mean position of a shape or list of shapes.

    A group's centroid is the mean of its children's centroids, not the
    center of its bounding box. Children without geometry (empty groups and
    point-less polygons) are left out, here and in :func:`bounds`.

    Raises:
        EmptyGeometryError: If there are no points to average.
        UnsupportedShapeError: If ``shape`` is not a known shape.
    """
    match shape:
        case list() | tuple():
            if not shape:
                raise EmptyGeometryError("shape list")
            return centroid_of_points([centroid(s) for s in shape])
        case Circle(cx=cx, cy=cy) | Ellipse(cx=cx, cy=cy):
            return Point(cx, cy)
        case Line(x1=x1, y1=y1, x2=x2, y2=y2):
            return centroid_of_points([Point(x1, y1), Point(x2, y2)])
        case Polygon():
            return centroid_of_points(_require_points(shape))
        case Rect(x=x, y=y, width=w, height=h):
            return Point(rnd(x + w / 2), rnd(y + h / 2))
        case Text(x=x, y=y):
            return Point(x, y)
        case Path():
            return paths.centroid(shape)
        case Group():
            return centroid_of_points([centroid(child) for child in _require_children(shape)])
        case _:
            raise _unsupported(shape, "centroid")


def bounds_center(shape: Shape | Sequence[Shape]) -> Point:
    """Centroid of the corners of ``shape``'s bounding box."""
    return centroid_of_points(bounds(shape).corners)


def _shift_rotation(rotation: Rotation | None, delta: Point) -> Rotation | None:
    if rotation is None:
        return None
    return Rotation(rotation.angle, *add(rotation.pivot, delta))


def translate(shape: S | Sequence[S], delta: PointLike) -> S | list[S]:
    """Translate a shape or list of shapes by ``delta``.

    Auxiliary rotation pivots move with the shape. Coordinates are rounded
    like any other derived value, so translating by ``a`` then ``b`` gives
    the same shape as translating by ``a + b`` once both land on the same
    ``PRECISION`` digits.

    Raises:
        UnsupportedShapeError: If ``shape`` is not a known shape.
    """
    d = as_point(delta)
    match shape:
        case list() | tuple():
            return [translate(s, d) for s in shape]
        case Circle() | Ellipse():
            cx, cy = add((shape.cx, shape.cy), d)
            return replace(shape, cx=cx, cy=cy, rotation=_shift_rotation(shape.rotation, d))
        case Line():
            (x1, y1), (x2, y2) = add((shape.x1, shape.y1), d), add((shape.x2, shape.y2), d)
            return replace(shape, x1=x1, y1=y1, x2=x2, y2=y2)
        case Polygon():
            return replace(shape, points=tuple(add(p, d) for p in shape.points))
        case Rect() | Text():
            x, y = add((shape.x, shape.y), d)
            return replace(shape, x=x, y=y, rotation=_shift_rotation(shape.rotation, d))
        case Path():
            return paths.translate(shape, d)
        case Group():
            return replace(shape, children=tuple(translate(child, d) for child in shape.children))
        case _:
            raise _unsupported(shape, "translate")


def _accumulate(rotation: Rotation | None, degrees: float, pivot: Point) -> Rotation | None:
    angle = rnd((rotation.angle if rotation is not None else 0) + degrees)
    if angle == 0:
        return None
    return Rotation(angle, pivot.x, pivot.y)


def rotate_by_transform(shape: S, degrees: float) -> S:
    """Add ``degrees`` to the auxiliary rotation of ``shape``, keeping its pivot.

    Shapes without a rotation yet pivot around their centroid.

    Raises:
        UnsupportedShapeError: If ``shape`` cannot carry an auxiliary rotation.
    """
    match shape:
        case Circle() | Ellipse() | Rect() | Text():
            pivot = shape.rotation.pivot if shape.rotation is not None else centroid(shape)
            return replace(shape, rotation=_accumulate(shape.rotation, degrees, pivot))
        case _:
            raise _unsupported(shape, "rotate_by_transform")


def _rotate_about(points: Sequence[Point], degrees: float, pivot: Point) -> tuple[Point, ...]:
    return tuple(rotate_point_around_center(p, degrees, pivot) for p in points)


def rotate(shape: S | Sequence[S], degrees: float) -> S | list[S]:
    """Rotate a shape or list of shapes counter-clockwise by ``degrees``.

    Single shapes rotate around their own centroid. Groups rotate rigidly
    around the center of their bounding box; see :func:`rotate_group`.

    Raises:
        EmptyGeometryError: If a polygon or polyline has no points.
        UnsupportedShapeError: If ``shape`` is not a known shape.
    """
    match shape:
        case list() | tuple():
            return [rotate(s, degrees) for s in shape]
        case Circle() | Ellipse() | Rect() | Text():
            return replace(shape, rotation=_accumulate(shape.rotation, degrees, centroid(shape)))
        case Line(x1=x1, y1=y1, x2=x2, y2=y2):
            (nx1, ny1), (nx2, ny2) = _rotate_about([Point(x1, y1), Point(x2, y2)], degrees, centroid(shape))
            return replace(shape, x1=nx1, y1=ny1, x2=nx2, y2=ny2)
        case Polygon():
            return replace(shape, points=_rotate_about(_require_points(shape), degrees, centroid(shape)))
        case Path():
            return paths.rotate(shape, degrees)
        case Group():
            return rotate_group(shape, degrees)
        case _:
            raise _unsupported(shape, "rotate")


def rotate_group(group: Group, degrees: float) -> Group:
    """Rotate a group rigidly around the center of its bounding box.

    Each child is moved into the frame of the group's pivot, recentered on
    its own centroid, spun by ``degrees`` and then placed at its rotated
    orbit position. Nested groups use their bounding-box center as their own
    centroid. Children without geometry are kept in place, and a group with
    none to rotate comes back unchanged.
    """
    if not any(_has_geometry(child) for child in group.children):
        return group
    pivot = bounds_center(group)
    logger.debug("Rotating group", degrees=degrees, pivot=tuple(pivot), children=len(group.children))

    children = []
    for child in group.children:
        if not _has_geometry(child):
            children.append(child)
            continue
        local = translate(child, neg(pivot))
        center = bounds_center(local) if isinstance(local, Group) else centroid(local)
        orbit = add(rotate_point(center, degrees), pivot)
        spun = rotate(translate(local, neg(center)), degrees)
        children.append(translate(spun, orbit))
    return replace(group, children=tuple(children))


def with_style(shape: S, **attrs: Any) -> S:
    """Return ``shape`` with presentation attributes merged into its style."""
    if not isinstance(shape, Shape):
        raise _unsupported(shape, "with_style")
    return replace(shape, style=shape.style.merge(**attrs))

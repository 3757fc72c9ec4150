"""Tests for geometric transforms over shapes."""

from __future__ import annotations

import pytest

from svgkit.core import transforms
from svgkit.core.exceptions import EmptyGeometryError, UnsupportedShapeError
from svgkit.core.models import (
    BoundingBox,
    Circle,
    Ellipse,
    Group,
    Image,
    Line,
    Path,
    PathCommand,
    Point,
    Polygon,
    Polyline,
    Rect,
    Rotation,
    Shape,
    Text,
)
from svgkit.core.paths import path_points
from svgkit.core.style import Style
from svgkit.core.types import CommandKind, CoordMode


def _path() -> Path:
    return Path(
        (
            PathCommand(CommandKind.MOVE, CoordMode.ABSOLUTE, (Point(0, 0),)),
            PathCommand(CommandKind.LINE, CoordMode.ABSOLUTE, (Point(8, 0),)),
            PathCommand(CommandKind.CUBIC, CoordMode.ABSOLUTE, (Point(9, 1), Point(9, 3), Point(8, 4))),
            PathCommand(CommandKind.LINE, CoordMode.RELATIVE, (Point(-3, 2),)),
            PathCommand(CommandKind.ARC, CoordMode.ABSOLUTE, (10, 10, 0, 0, 1, Point(0, 5))),
            PathCommand(CommandKind.CLOSE),
        )
    )


SAMPLE_SHAPES: list[Shape] = [
    Circle(3, 4, 5),
    Ellipse(1, 2, 6, 3),
    Line(0, 0, 4, 2),
    Polygon([(0, 0), (6, 1), (2, 5)]),
    Polyline([(1, 1), (4, 1), (4, 7)]),
    Rect(2, 3, 10, 4),
    Image(0, 0, 8, 6, href="tile.png"),
    Text(5, 5, "label", 10),
    _path(),
]

POINT_SHAPES: list[Shape] = [shape for shape in SAMPLE_SHAPES if isinstance(shape, (Line, Polygon, Path))]
TRANSLATABLE: list[Shape] = [*SAMPLE_SHAPES, Group(SAMPLE_SHAPES[:3])]


def _ids(shapes: list[Shape]) -> list[str]:
    return [type(shape).__name__ for shape in shapes]


def _vertices(shape: Shape) -> list[Point]:
    match shape:
        case Circle(cx=cx, cy=cy, r=r):
            return [Point(cx + r, cy), Point(cx, cy + r), Point(cx - r, cy), Point(cx, cy - r)]
        case Ellipse(cx=cx, cy=cy, rx=rx, ry=ry):
            return [Point(cx + rx, cy), Point(cx, cy + ry), Point(cx - rx, cy), Point(cx, cy - ry)]
        case Line(x1=x1, y1=y1, x2=x2, y2=y2):
            return [Point(x1, y1), Point(x2, y2)]
        case Polygon(points=points):
            return list(points)
        case Rect(x=x, y=y, width=w, height=h):
            return [Point(x, y), Point(x + w, y), Point(x + w, y + h), Point(x, y + h)]
        case Text(x=x, y=y):
            return [Point(x, y)]
        case Path():
            return path_points(shape)
    raise AssertionError(shape)


def _area(points: tuple[Point, ...]) -> float:
    total = 0.0
    for a, b in zip(points, points[1:] + points[:1]):
        total += a.x * b.y - b.x * a.y
    return abs(total) / 2


class TestBounds:
    """Tests for bounding boxes."""

    def test_circle(self) -> None:
        """Test a circle is boxed by its radius."""
        box = transforms.bounds(Circle(0, 0, 10))

        assert box.corners == [Point(-10, -10), Point(10, -10), Point(10, 10), Point(-10, 10)]

    def test_ellipse(self) -> None:
        """Test an ellipse is boxed by its two radii."""
        assert transforms.bounds(Ellipse(0, 0, 10, 5)) == BoundingBox(-10, -5, 10, 5)

    def test_rotated_ellipse_is_midpoint_envelope(self) -> None:
        """Test rotated ellipse bounds average the unrotated and rotated boxes."""
        ellipse = Ellipse(0, 0, 10, 5, rotation=Rotation(90, 0, 0))

        assert transforms.bounds(ellipse) == BoundingBox(-7.5, -7.5, 7.5, 7.5)

    def test_rotated_circle_stays_centered(self) -> None:
        """Test a rotated circle keeps its center and never grows."""
        box = transforms.bounds(transforms.rotate(Circle(2, 2, 3), 33))

        assert box.center.x == pytest.approx(2, abs=1e-4)
        assert box.center.y == pytest.approx(2, abs=1e-4)
        assert box.width <= 6

    def test_line(self) -> None:
        """Test a line is boxed by its endpoints in any order."""
        assert transforms.bounds(Line(4, 0, 0, 3)) == BoundingBox(0, 0, 4, 3)

    def test_rect(self) -> None:
        """Test a rect is its own bounding box."""
        assert transforms.bounds(Rect(1, 2, 3, 4)) == BoundingBox(1, 2, 4, 6)

    def test_rotated_rect(self) -> None:
        """Test a quarter-turned rect swaps width and height."""
        rect = Rect(-5, -10, 10, 20, rotation=Rotation(90, 0, 0))

        assert transforms.bounds(rect) == BoundingBox(-10, -5, 10, 5)

    def test_text(self) -> None:
        """Test text bounds come from the font size and character count."""
        assert transforms.bounds(Text(0, 0, "abcd", 10)) == BoundingBox(-12, -5, 12, 5)

    def test_rotated_text(self) -> None:
        """Test rotated text is boxed around its anchor."""
        text = Text(0, 0, "abcd", 10, rotation=Rotation(90, 0, 0))

        assert transforms.bounds(text) == BoundingBox(-5, -12, 5, 12)

    def test_group_unions_children(self) -> None:
        """Test a group is boxed by the union of its children."""
        group = Group([Circle(0, 0, 1), Rect(5, 5, 2, 2)])

        assert transforms.bounds(group) == BoundingBox(-1, -1, 7, 7)

    def test_list_matches_group(self) -> None:
        """Test a list of shapes bounds like a group of them."""
        shapes = [Circle(0, 0, 1), Line(3, 3, 9, -2)]

        assert transforms.bounds(shapes) == transforms.bounds(Group(shapes))

    def test_group_skips_children_without_geometry(self) -> None:
        """Test empty groups and point-less polygons add nothing to a group box."""
        group = Group([Group(), Polygon(), Circle(0, 0, 1)])

        assert transforms.bounds(group) == BoundingBox(-1, -1, 1, 1)

    def test_group_of_empty_children_raises(self) -> None:
        """Test a group whose children are all empty cannot be bounded."""
        with pytest.raises(EmptyGeometryError):
            transforms.bounds(Group([Group(), Polyline()]))

    @pytest.mark.parametrize("shape", SAMPLE_SHAPES, ids=_ids(SAMPLE_SHAPES))
    def test_contains_every_vertex(self, shape: Shape) -> None:
        """Test every vertex lies inside the bounding box."""
        box = transforms.bounds(shape)

        assert all(box.contains(p) for p in _vertices(shape))

    @pytest.mark.parametrize("shape", POINT_SHAPES, ids=_ids(POINT_SHAPES))
    def test_contains_every_vertex_after_rotation(self, shape: Shape) -> None:
        """Test the box still covers every vertex after rotation."""
        rotated = transforms.rotate(shape, 37)
        box = transforms.bounds(rotated)

        assert all(box.contains(p) for p in _vertices(rotated))

    def test_group_contains_children_bounds(self, scene: Group) -> None:
        """Test a group box covers every child box."""
        box = transforms.bounds(scene)

        for child in scene.children:
            assert all(box.contains(corner) for corner in transforms.bounds(child).corners)

    @pytest.mark.parametrize("empty", [Polygon(), Polyline(), Group(), []], ids=["polygon", "polyline", "group", "list"])
    def test_empty_raises(self, empty: Shape | list) -> None:
        """Test shapes without points cannot be bounded."""
        with pytest.raises(EmptyGeometryError):
            transforms.bounds(empty)

    @pytest.mark.parametrize("value", ["circle", object(), 42, None])
    def test_unsupported(self, value: object) -> None:
        """Test values that are not shapes are rejected."""
        with pytest.raises(UnsupportedShapeError) as exc_info:
            transforms.bounds(value)  # type: ignore[arg-type]

        assert exc_info.value.operation == "bounds"


class TestCentroid:
    """Tests for centroids."""

    def test_circle(self) -> None:
        """Test a circle centroid is its center."""
        assert transforms.centroid(Circle(3, 4, 1)) == Point(3, 4)

    def test_line_midpoint(self) -> None:
        """Test a line centroid is its midpoint."""
        assert transforms.centroid(Line(0, 0, 4, 2)) == Point(2, 1)

    def test_polygon_mean_of_points(self, square: Polygon) -> None:
        """Test a polygon centroid is the mean of its points."""
        assert transforms.centroid(square) == Point(5, 5)

    def test_rect_center(self) -> None:
        """Test a rect centroid is its center."""
        assert transforms.centroid(Rect(0, 0, 10, 4)) == Point(5, 2)

    def test_text_anchor(self) -> None:
        """Test a text centroid is its anchor."""
        assert transforms.centroid(Text(7, 8, "hello")) == Point(7, 8)

    def test_group_mean_of_child_centroids(self) -> None:
        """Test a group centroid averages its child centroids."""
        group = Group([Circle(0, 0, 1), Rect(0, 0, 4, 4)])

        assert transforms.centroid(group) == Point(1, 1)

    def test_group_centroid_differs_from_bounds_center(self) -> None:
        """Test a group centroid is not its bounding box center."""
        group = Group([Circle(0, 0, 1), Circle(1, 0, 1), Circle(10, 0, 1)])

        assert transforms.centroid(group) == Point(3.66667, 0)
        assert transforms.bounds_center(group) == Point(5, 0)

    def test_group_skips_children_without_geometry(self) -> None:
        """Test empty children do not pull a group centroid toward the origin."""
        group = Group([Group(), Circle(3, 4, 1), Polygon()])

        assert transforms.centroid(group) == Point(3, 4)

    @pytest.mark.parametrize("empty", [Polygon(), Group(), []], ids=["polygon", "group", "list"])
    def test_empty_raises(self, empty: Shape | list) -> None:
        """Test shapes without points have no centroid."""
        with pytest.raises(EmptyGeometryError):
            transforms.centroid(empty)

    def test_unsupported(self) -> None:
        """Test values that are not shapes are rejected."""
        with pytest.raises(UnsupportedShapeError):
            transforms.centroid(Point(1, 2))  # type: ignore[arg-type]


class TestTranslate:
    """Tests for translation."""

    def test_line(self) -> None:
        """Test both line endpoints move."""
        assert transforms.translate(Line(0, 0, 2, 2), (1, 1)) == Line(1, 1, 3, 3)

    def test_circle_keeps_missing_rotation(self) -> None:
        """Test an unrotated circle stays unrotated."""
        assert transforms.translate(Circle(0, 0, 1), (2, 3)) == Circle(2, 3, 1)

    def test_rotation_pivot_moves_with_shape(self) -> None:
        """Test the auxiliary rotation pivot moves by the same delta."""
        rect = Rect(0, 0, 10, 4, rotation=Rotation(30, 5, 2))

        moved = transforms.translate(rect, (1, -1))

        assert moved == Rect(1, -1, 10, 4, rotation=Rotation(30, 6, 1))

    def test_text_keeps_content(self) -> None:
        """Test text keeps its content and font size."""
        moved = transforms.translate(Text(0, 0, "hi", 9), Point(4, 4))

        assert moved == Text(4, 4, "hi", 9)

    def test_polygon(self, square: Polygon) -> None:
        """Test every polygon point moves."""
        moved = transforms.translate(square, (1, 2))

        assert moved.points == (Point(1, 2), Point(11, 2), Point(11, 12), Point(1, 12))

    def test_group_translates_children(self) -> None:
        """Test a group translates each child."""
        group = Group([Circle(0, 0, 1), Line(0, 0, 1, 1)])

        moved = transforms.translate(group, (5, 5))

        assert moved.children == (Circle(5, 5, 1), Line(5, 5, 6, 6))

    def test_list(self) -> None:
        """Test a list translates element by element."""
        moved = transforms.translate([Circle(0, 0, 1), Circle(1, 1, 1)], (1, 0))

        assert moved == [Circle(1, 0, 1), Circle(2, 1, 1)]

    def test_style_preserved(self) -> None:
        """Test translation keeps the style."""
        circle = Circle(0, 0, 1, style=Style(fill="blue"))

        assert transforms.translate(circle, (1, 1)).style == Style(fill="blue")

    def test_input_not_mutated(self, square: Polygon) -> None:
        """Test the input shape is left untouched."""
        transforms.translate(square, (3, 3))

        assert square.points[0] == Point(0, 0)

    def test_style_shared_but_read_only(self) -> None:
        """Test a translated copy cannot change the style of its source."""
        source = transforms.with_style(Circle(0, 0, 1), stroke_dasharray="4 2")
        moved = transforms.translate(source, (1, 1))

        with pytest.raises(TypeError):
            moved.style.extra["stroke-dasharray"] = "1 1"  # type: ignore[index]

        restyled = transforms.with_style(moved, stroke_dasharray="1 1")

        assert source.style.extra == {"stroke-dasharray": "4 2"}
        assert restyled.style.extra == {"stroke-dasharray": "1 1"}

    @pytest.mark.parametrize("shape", TRANSLATABLE, ids=_ids(TRANSLATABLE))
    def test_additive(self, shape: Shape) -> None:
        """Test translating twice equals translating once by the sum."""
        twice = transforms.translate(transforms.translate(shape, (0.1, -0.7)), (0.2, 1.3))
        once = transforms.translate(shape, (0.3, 0.6))

        assert twice == once

    def test_fractional_steps_are_exact(self) -> None:
        """Test small fractional steps do not leave float noise behind."""
        line = transforms.translate(transforms.translate(Line(0, 0, 0, 0), (0.1, 0.1)), (0.2, 0.2))

        assert line == Line(0.3, 0.3, 0.3, 0.3)

    def test_rotation_pivot_rounded(self) -> None:
        """Test the auxiliary rotation pivot is rounded with the shape."""
        circle = Circle(0.1, 0.1, 1, rotation=Rotation(30, 0.1, 0.1))

        moved = transforms.translate(circle, (0.2, 0.2))

        assert moved == Circle(0.3, 0.3, 1, rotation=Rotation(30, 0.3, 0.3))

    def test_unsupported(self) -> None:
        """Test values that are not shapes are rejected."""
        with pytest.raises(UnsupportedShapeError):
            transforms.translate({"kind": "circle"}, (1, 1))  # type: ignore[arg-type]


class TestRotate:
    """Tests for rotation of single shapes."""

    def test_polygon_around_centroid(self, square: Polygon) -> None:
        """Test a polygon turns around its centroid."""
        rotated = transforms.rotate(square, 90)

        assert rotated.points == (Point(10, 0), Point(10, 10), Point(0, 10), Point(0, 0))
        assert transforms.centroid(rotated) == Point(5, 5)

    def test_polygon_preserves_area(self) -> None:
        """Test rotation keeps a polygon area."""
        triangle = Polygon([(0, 0), (6, 1), (2, 5)])

        rotated = transforms.rotate(triangle, 37)

        assert _area(rotated.points) == pytest.approx(_area(triangle.points), abs=1e-3)

    def test_line_around_midpoint(self) -> None:
        """Test a line turns around its midpoint."""
        rotated = transforms.rotate(Line(0, 0, 4, 0), 90)

        assert rotated == Line(2, -2, 2, 2)

    def test_circle_records_rotation(self) -> None:
        """Test a circle keeps its center and records a rotation."""
        rotated = transforms.rotate(Circle(3, 4, 1), 30)

        assert rotated.rotation == Rotation(30, 3, 4)
        assert (rotated.cx, rotated.cy) == (3, 4)

    def test_rotations_accumulate(self) -> None:
        """Test repeated rotations add up their angles."""
        circle = transforms.rotate(transforms.rotate(Circle(3, 4, 1), 30), 15)

        assert circle.rotation == Rotation(45, 3, 4)

    def test_opposite_rotation_clears(self) -> None:
        """Test rotating back to zero drops the auxiliary rotation."""
        rect = transforms.rotate(transforms.rotate(Rect(0, 0, 10, 4), 30), -30)

        assert rect.rotation is None

    def test_rect_pivot_is_center(self) -> None:
        """Test a rect rotation pivots on its center."""
        assert transforms.rotate(Rect(0, 0, 10, 4), 90).rotation == Rotation(90, 5, 2)

    def test_text_pivot_is_anchor(self) -> None:
        """Test a text rotation pivots on its anchor."""
        assert transforms.rotate(Text(7, 8, "x"), 45).rotation == Rotation(45, 7, 8)

    def test_image_keeps_href(self) -> None:
        """Test an image stays an image with the same href."""
        rotated = transforms.rotate(Image(0, 0, 2, 2, href="a.png"), 10)

        assert isinstance(rotated, Image)
        assert rotated.href == "a.png"

    def test_list(self) -> None:
        """Test each shape in a list turns around its own centroid."""
        rotated = transforms.rotate([Circle(0, 0, 1), Circle(5, 5, 1)], 90)

        assert [c.rotation for c in rotated] == [Rotation(90, 0, 0), Rotation(90, 5, 5)]

    def test_empty_polygon_raises(self) -> None:
        """Test a polygon without points cannot be rotated."""
        with pytest.raises(EmptyGeometryError):
            transforms.rotate(Polygon(), 90)

    def test_unsupported(self) -> None:
        """Test values that are not shapes are rejected."""
        with pytest.raises(UnsupportedShapeError):
            transforms.rotate(3.5, 90)  # type: ignore[arg-type]

    @pytest.mark.parametrize("shape", SAMPLE_SHAPES, ids=_ids(SAMPLE_SHAPES))
    def test_round_trip(self, shape: Shape, shapes_close) -> None:
        """Test rotating by an angle and back restores the shape."""
        restored = transforms.rotate(transforms.rotate(shape, 37), -37)

        assert shapes_close(restored, shape)

    @pytest.mark.parametrize("shape", SAMPLE_SHAPES, ids=_ids(SAMPLE_SHAPES))
    def test_centroid_invariant(self, shape: Shape) -> None:
        """Test rotation keeps the centroid in place."""
        before = transforms.centroid(shape)
        after = transforms.centroid(transforms.rotate(shape, 37))

        assert after.x == pytest.approx(before.x, abs=1e-3)
        assert after.y == pytest.approx(before.y, abs=1e-3)


class TestRotateByTransform:
    """Tests for rotation that keeps an existing pivot."""

    def test_keeps_stored_pivot(self) -> None:
        """Test an existing pivot is kept and the angle accumulates."""
        circle = Circle(0, 0, 1, rotation=Rotation(10, 5, 5))

        assert transforms.rotate_by_transform(circle, 30).rotation == Rotation(40, 5, 5)

    def test_defaults_to_centroid(self) -> None:
        """Test an unrotated shape pivots on its centroid."""
        rect = Rect(0, 0, 4, 4)

        assert transforms.rotate_by_transform(rect, 30).rotation == Rotation(30, 2, 2)

    def test_point_shapes_unsupported(self) -> None:
        """Test shapes rotated by their coordinates are rejected."""
        with pytest.raises(UnsupportedShapeError):
            transforms.rotate_by_transform(Line(0, 0, 1, 1), 30)


class TestRotateGroup:
    """Tests for rigid group rotation."""

    def test_children_orbit_bounds_center(self) -> None:
        """Test children orbit the group bounding box center."""
        group = Group([Rect(9, -1, 2, 2), Rect(-11, -1, 2, 2)])

        rotated = transforms.rotate(group, 90)

        assert rotated.children == (
            Rect(-1, 9, 2, 2, rotation=Rotation(90, 0, 10)),
            Rect(-1, -11, 2, 2, rotation=Rotation(90, 0, -10)),
        )

    def test_point_children_rotate_rigidly(self) -> None:
        """Test point-based children keep their relative layout."""
        group = Group([Line(0, 0, 10, 0), Polygon([(0, 10), (10, 10), (10, 20)])])

        rotated = transforms.rotate(group, 180)

        line = rotated.children[0]
        assert (line.x1, line.y1, line.x2, line.y2) == pytest.approx((10, 20, 0, 20), abs=1e-4)

    def test_preserves_bounds_for_quarter_turns(self, scene: Group) -> None:
        """Test a quarter turn keeps the box center and swaps its sides."""
        before = transforms.bounds(scene)
        after = transforms.bounds(transforms.rotate(scene, 90))

        assert after.center.x == pytest.approx(before.center.x, abs=1e-3)
        assert after.center.y == pytest.approx(before.center.y, abs=1e-3)
        assert after.width == pytest.approx(before.height, abs=1e-3)
        assert after.height == pytest.approx(before.width, abs=1e-3)

    def test_composition(self, scene: Group, shapes_close) -> None:
        """Test two quarter turns equal one half turn."""
        twice = transforms.rotate(transforms.rotate(scene, 90), 90)
        once = transforms.rotate(scene, 180)

        assert shapes_close(twice, once)

    @pytest.mark.parametrize("degrees", [90, 180, 270])
    def test_round_trip(self, scene: Group, degrees: int, shapes_close) -> None:
        """Test rotating a group and back restores it."""
        restored = transforms.rotate(transforms.rotate(scene, degrees), -degrees)

        assert shapes_close(restored, scene)

    def test_nested_group(self, scene: Group, shapes_close) -> None:
        """Test nested groups round trip as a unit."""
        nested = Group([scene, Circle(-5, -5, 1)])

        restored = transforms.rotate(transforms.rotate(nested, 90), -90)

        assert len(restored.children) == 2
        assert shapes_close(restored, nested)

    def test_empty_group_unchanged(self) -> None:
        """Test an empty group comes back as is."""
        group = Group()

        assert transforms.rotate(group, 45) is group

    def test_empty_child_kept_in_place(self) -> None:
        """Test an empty child group survives rotation of its parent."""
        group = Group([Group(), Circle(0, 0, 1)])

        rotated = transforms.rotate(group, 90)

        assert rotated.children == (Group(), Circle(0, 0, 1, rotation=Rotation(90, 0, 0)))

    def test_empty_children_ignored_for_pivot(self) -> None:
        """Test children without geometry neither move nor shift the pivot."""
        group = Group([Polygon(), Rect(9, -1, 2, 2), Group(), Rect(-11, -1, 2, 2)])

        rotated = transforms.rotate(group, 90)

        assert rotated.children == (
            Polygon(),
            Rect(-1, 9, 2, 2, rotation=Rotation(90, 0, 10)),
            Group(),
            Rect(-1, -11, 2, 2, rotation=Rotation(90, 0, -10)),
        )

    def test_only_empty_children_unchanged(self) -> None:
        """Test a group holding nothing but empty children comes back as is."""
        group = Group([Group(), Polyline()])

        assert transforms.rotate(group, 45) is group


class TestWithStyle:
    """Tests for style merging."""

    def test_merges_attributes(self) -> None:
        """Test known attributes land on the style fields."""
        circle = transforms.with_style(Circle(0, 0, 1), fill="red", stroke_width=2)

        assert circle.style.to_attrs() == {"fill": "red", "stroke-width": 2}

    def test_svg_names_go_to_extra(self) -> None:
        """Test other SVG attributes land in extra."""
        circle = transforms.with_style(Circle(0, 0, 1), **{"stroke-dasharray": "4 2"})

        assert circle.style.extra == {"stroke-dasharray": "4 2"}

    def test_unsupported(self) -> None:
        """Test values that are not shapes are rejected."""
        with pytest.raises(UnsupportedShapeError):
            transforms.with_style("circle", fill="red")  # type: ignore[arg-type]

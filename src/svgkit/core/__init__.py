"""Core shape model and geometry for svgkit."""

from svgkit.core.exceptions import (
    DivisionByZeroError,
    EmptyGeometryError,
    InvalidPathCommandError,
    InvalidShapeError,
    SvgKitError,
    UnsupportedShapeError,
)
from svgkit.core.models import (
    BoundingBox,
    Circle,
    Document,
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
from svgkit.core.style import Style
from svgkit.core.transforms import bounds, centroid, rotate, rotate_by_transform, translate, with_style
from svgkit.core.types import CommandKind, CoordMode, ShapeKind

__all__ = [
    "BoundingBox",
    "Circle",
    "CommandKind",
    "CoordMode",
    "DivisionByZeroError",
    "Document",
    "Ellipse",
    "EmptyGeometryError",
    "Group",
    "Image",
    "InvalidPathCommandError",
    "InvalidShapeError",
    "Line",
    "Path",
    "PathCommand",
    "Point",
    "Polygon",
    "Polyline",
    "Rect",
    "Rotation",
    "Shape",
    "ShapeKind",
    "Style",
    "SvgKitError",
    "Text",
    "UnsupportedShapeError",
    "bounds",
    "centroid",
    "rotate",
    "rotate_by_transform",
    "translate",
    "with_style",
]

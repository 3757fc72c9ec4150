"""svgkit: build SVG shapes, transform them geometrically, and render markup.

Shapes are immutable values. Transforms return new shapes, and the export
service renders any shape tree to SVG text.

Quick Start:
    >>> from svgkit import ExportService, elements, transforms
    >>>
    >>> square = transforms.translate(elements.rect(10, 10), (20, 20))
    >>> tilted = transforms.rotate(square, 45)
    >>> markup = ExportService().to_svg(tilted)
"""

from __future__ import annotations

from svgkit import composites, elements
from svgkit.config import SvgKitConfig
from svgkit.core import (
    BoundingBox,
    Circle,
    CommandKind,
    CoordMode,
    DivisionByZeroError,
    Document,
    Ellipse,
    EmptyGeometryError,
    Group,
    Image,
    InvalidPathCommandError,
    InvalidShapeError,
    Line,
    Path,
    PathCommand,
    Point,
    Polygon,
    Polyline,
    Rect,
    Rotation,
    Shape,
    ShapeKind,
    Style,
    SvgKitError,
    Text,
    UnsupportedShapeError,
    transforms,
)
from svgkit.services import ExportService

__all__ = [
    "BoundingBox",
    "Circle",
    "CommandKind",
    "CoordMode",
    "DivisionByZeroError",
    "Document",
    "Ellipse",
    "EmptyGeometryError",
    "ExportService",
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
    "SvgKitConfig",
    "SvgKitError",
    "Text",
    "UnsupportedShapeError",
    "composites",
    "elements",
    "transforms",
]

__version__ = "0.1.0"

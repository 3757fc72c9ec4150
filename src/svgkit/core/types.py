"""Core type definitions for svgkit."""

from __future__ import annotations

from enum import StrEnum


class ShapeKind(StrEnum):
    """Enumeration of the drawable shape variants.

    Values double as the SVG tag names.
    """

    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    LINE = "line"
    POLYGON = "polygon"
    POLYLINE = "polyline"
    RECT = "rect"
    IMAGE = "image"
    TEXT = "text"
    PATH = "path"
    GROUP = "g"


class CommandKind(StrEnum):
    """Enumeration of path drawing commands, keyed by their absolute letter."""

    MOVE = "M"
    LINE = "L"
    HLINE = "H"
    VLINE = "V"
    CUBIC = "C"
    SMOOTH_CUBIC = "S"
    QUADRATIC = "Q"
    SMOOTH_QUADRATIC = "T"
    ARC = "A"
    CLOSE = "Z"


class CoordMode(StrEnum):
    """Coordinate system a path command's operands are expressed in."""

    ABSOLUTE = "abs"
    RELATIVE = "rel"

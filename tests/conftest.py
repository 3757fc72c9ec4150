"""Pytest configuration and fixtures for svgkit tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import fields, is_dataclass
from typing import Any

import pytest

from svgkit.config import SvgKitConfig
from svgkit.core.models import Circle, Group, Path, PathCommand, Point, Polygon, Rect, Text
from svgkit.core.types import CommandKind, CoordMode
from svgkit.services.export import ExportService


def _close(a: Any, b: Any, tol: float) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return abs(a - b) <= tol
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return len(a) == len(b) and all(_close(x, y, tol) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(_close(a[k], b[k], tol) for k in a)
    if is_dataclass(a) and is_dataclass(b):
        if type(a) is not type(b):
            return False
        return all(_close(getattr(a, f.name), getattr(b, f.name), tol) for f in fields(a))
    return a == b


# Comparison fixtures


@pytest.fixture
def shapes_close() -> Callable[..., bool]:
    """Compare shapes field by field, allowing for rounding in float coordinates."""

    def compare(a: Any, b: Any, tol: float = 1e-3) -> bool:
        return _close(a, b, tol)

    return compare


# Service fixtures


@pytest.fixture
def config() -> SvgKitConfig:
    """Create a config that ignores the environment."""
    return SvgKitConfig(debug=False, json_logs=False, json_indent=2, xml_declaration=False)


@pytest.fixture
def export_service(config: SvgKitConfig) -> ExportService:
    """Create an ExportService instance."""
    return ExportService(config)


# Model fixtures


@pytest.fixture
def square() -> Polygon:
    """Create a 10x10 square polygon with a corner at the origin."""
    return Polygon([(0, 0), (10, 0), (10, 10), (0, 10)])


@pytest.fixture
def square_path() -> Path:
    """Create a closed 10x10 square path with a corner at the origin."""
    return Path(
        (
            PathCommand(CommandKind.MOVE, CoordMode.ABSOLUTE, (Point(0, 0),)),
            PathCommand(CommandKind.LINE, CoordMode.ABSOLUTE, (Point(10, 0), Point(10, 10), Point(0, 10))),
            PathCommand(CommandKind.CLOSE),
        )
    )


@pytest.fixture
def scene() -> Group:
    """Create a small group mixing auxiliary-rotated and point-based shapes."""
    return Group(
        (
            Polygon([(0, 0), (4, 0), (0, 3)]),
            Rect(0, 0, 4, 2),
            Circle(10, 10, 2),
            Text(6, 1, "hi", 4),
        )
    )

"""Shapes composed from primitives and transforms."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from svgkit import elements
from svgkit.config import SvgKitConfig
from svgkit.core import transforms
from svgkit.core.models import Document, Group, Polygon, Shape, Text
from svgkit.core.style import Style
from svgkit.core.vector import add, neg, rad_to_deg, rotate_point, sub

if TYPE_CHECKING:
    from collections.abc import Sequence

    from svgkit.core.models import PointLike

# Arrow head pointing along +x with its tip at the origin.
DEFAULT_ARROW_TIP = ((0, 0), (-8, -3), (-8, 3))


def svg(
    content: Shape | Sequence[Shape],
    width: float | None = None,
    height: float | None = None,
    scale: float | None = None,
) -> Document:
    """Wrap ``content`` in a root document.

    Without an explicit size the viewBox is fitted to the content's bounds.
    """
    children = (content,) if isinstance(content, Shape) else tuple(content)
    if width is None or height is None:
        box = transforms.bounds(list(children))
        return Document(children, box.width, box.height, (box.min_x, box.min_y, box.width, box.height), scale)
    return Document(children, width, height, (0, 0, width, height), scale)


def _place(shape: Shape, angle: float, at: PointLike) -> Shape:
    # Rotate around the origin of the shape's own frame, then move to ``at``.
    center = transforms.centroid(shape)
    spun = transforms.rotate(transforms.translate(shape, neg(center)), angle)
    return transforms.translate(spun, add(rotate_point(center, angle), at))


def arrow(a: PointLike, b: PointLike, tip: Shape | None = None) -> Group:
    """Draw a line from ``a`` to ``b`` with ``tip`` placed at ``b``.

    ``tip`` must point along +x with its tip at the origin.
    """
    tip = tip if tip is not None else Polygon(DEFAULT_ARROW_TIP)
    dx, dy = sub(b, a)
    angle = rad_to_deg(math.atan2(dy, dx))
    return Group((elements.line(a, b), _place(tip, angle, b)))


def label(content: str, font_size: float = elements.DEFAULT_FONT_SIZE) -> Text:
    """Draw a Verdana text label centered on the origin."""
    style = Style(
        extra={"font-family": "Verdana", "text-anchor": "middle", "dominant-baseline": "middle"},
    )
    return Text(0, 0, content, font_size, style=style)


def show_debug(shape: Shape, config: SvgKitConfig | None = None) -> Group:
    """Overlay ``shape``'s bounding box and centroid marker."""
    config = config or SvgKitConfig()
    box = transforms.bounds(shape)
    outline = transforms.with_style(
        elements.polygon(box.corners),
        fill="none",
        stroke=config.debug_color,
        stroke_width="1px",
        opacity=config.debug_opacity,
    )
    marker = transforms.with_style(
        elements.circle(config.debug_marker_radius),
        fill=config.debug_color,
        opacity=config.debug_opacity,
    )
    marker = transforms.translate(marker, transforms.centroid(shape))
    return elements.g([shape, elements.g([outline, marker])])

"""Export service for rendering shapes to markup and plain data."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import structlog

from svgkit.config import SvgKitConfig
from svgkit.core.exceptions import InvalidShapeError, UnsupportedShapeError
from svgkit.core.models import (
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
from svgkit.core.paths import path_data
from svgkit.core.style import Style
from svgkit.core.types import ShapeKind
from svgkit.core.vector import format_number, points_to_vector, vector_to_string

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = structlog.get_logger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
DOCUMENT_KIND = "svg"

Exportable = Shape | Document

_SIMPLE_KINDS: dict[str, type[Shape]] = {
    ShapeKind.CIRCLE: Circle,
    ShapeKind.ELLIPSE: Ellipse,
    ShapeKind.LINE: Line,
    ShapeKind.RECT: Rect,
    ShapeKind.IMAGE: Image,
    ShapeKind.TEXT: Text,
}


class ExportService:
    """Service for exporting shapes to various formats.

    Supports exporting to:
    - SVG: markup text, for a document, a single shape or a list of shapes
    - dict/JSON: a plain tree that :meth:`from_dict` reads back
    """

    def __init__(self, config: SvgKitConfig | None = None) -> None:
        """Initialize the service.

        Args:
            config: Export settings. Defaults are read from the environment.
        """
        self.config = config or SvgKitConfig()

    # SVG

    def to_svg(self, item: Exportable | Sequence[Shape]) -> str:
        """Render markup for a document, a shape, or a list of shapes.

        Args:
            item: What to render.

        Returns:
            SVG markup. Documents produce a complete ``svg`` element.
        """
        if isinstance(item, Document):
            return self._document_to_svg(item)
        if isinstance(item, Shape):
            return self._element_to_svg(item, 0)
        return "\n".join(self._element_to_svg(shape, 0) for shape in item)

    def _document_to_svg(self, document: Document) -> str:
        indent = self.config.indent_markup
        level = 1
        body: list[str] = []
        if document.scale is not None:
            body.append(f'{indent}<g transform="scale({format_number(document.scale)})">')
            level = 2
        body.extend(self._element_to_svg(child, level) for child in document.children)
        if document.scale is not None:
            body.append(f"{indent}</g>")

        view_box = " ".join(format_number(v) for v in document.view_box)
        header = '<?xml version="1.0" encoding="UTF-8"?>\n' if self.config.xml_declaration else ""
        return (
            f"{header}"
            f'<svg xmlns="{SVG_NAMESPACE}" width="{format_number(document.width)}" '
            f'height="{format_number(document.height)}" viewBox="{view_box}">\n'
            f"{chr(10).join(body)}\n"
            f"</svg>"
        )

    def _element_to_svg(self, shape: Shape, level: int) -> str:
        """Convert a shape to SVG markup indented to ``level``."""
        pad = self.config.indent_markup * level
        attrs = self._format_attrs(self.svg_attributes(shape))
        tag = shape.kind.value

        if isinstance(shape, Group):
            if not shape.children:
                return f"{pad}<{tag}{attrs} />"
            children = "\n".join(self._element_to_svg(child, level + 1) for child in shape.children)
            return f"{pad}<{tag}{attrs}>\n{children}\n{pad}</{tag}>"
        if isinstance(shape, Text):
            return f"{pad}<{tag}{attrs}>{self._escape_xml(shape.content)}</{tag}>"
        return f"{pad}<{tag}{attrs} />"

    def svg_attributes(self, shape: Shape) -> dict[str, Any]:
        """Collect the attributes of ``shape`` in render order.

        Geometry comes first, then the ``transform`` assembled from the
        auxiliary rotation, then presentation attributes.

        Raises:
            UnsupportedShapeError: If ``shape`` is not a known shape.
        """
        match shape:
            case Circle(cx=cx, cy=cy, r=r):
                attrs: dict[str, Any] = {"cx": cx, "cy": cy, "r": r}
            case Ellipse(cx=cx, cy=cy, rx=rx, ry=ry):
                attrs = {"cx": cx, "cy": cy, "rx": rx, "ry": ry}
            case Line(x1=x1, y1=y1, x2=x2, y2=y2):
                attrs = {"x1": x1, "y1": y1, "x2": x2, "y2": y2}
            case Polygon(points=points):
                attrs = {"points": vector_to_string(points)}
            case Image(x=x, y=y, width=w, height=h, href=href):
                attrs = {"href": href, "x": x, "y": y, "width": w, "height": h}
            case Rect(x=x, y=y, width=w, height=h):
                attrs = {"x": x, "y": y, "width": w, "height": h}
            case Text(x=x, y=y, font_size=fs):
                attrs = {"x": x, "y": y, "font-size": fs}
            case Path(commands=commands):
                attrs = {"d": path_data(commands)}
            case Group():
                attrs = {}
            case _:
                raise UnsupportedShapeError(shape, "to_svg")

        rotation = getattr(shape, "rotation", None)
        if rotation is not None:
            attrs["transform"] = rotation.to_transform()
        attrs.update(shape.style.to_attrs())
        return attrs

    def _format_attrs(self, attrs: dict[str, Any]) -> str:
        parts = []
        for key, value in attrs.items():
            text = format_number(value) if isinstance(value, (int, float)) else str(value)
            parts.append(f' {key}="{self._escape_xml(text)}"')
        return "".join(parts)

    def _escape_xml(self, text: str) -> str:
        """Escape special XML characters."""
        return (
            text.replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace('"', "&quot;")
            .replace("'", "&apos;")
        )

    # dict / JSON

    def to_json(self, item: Exportable | Sequence[Shape], *, compact: bool = False) -> str:
        """Export to JSON.

        Args:
            item: A document, shape, or list of shapes.
            compact: Emit without indentation instead of the configured indent.

        Returns:
            JSON string representation.
        """
        return json.dumps(self.to_dict(item), indent=None if compact else self.config.json_indent)

    def to_dict(self, item: Exportable | Sequence[Shape]) -> Any:
        """Export to plain dictionaries and lists."""
        if isinstance(item, Document):
            return {
                "kind": DOCUMENT_KIND,
                "width": item.width,
                "height": item.height,
                "view_box": list(item.view_box),
                "scale": item.scale,
                "children": [self._element_to_dict(child) for child in item.children],
            }
        if isinstance(item, Shape):
            return self._element_to_dict(item)
        return [self._element_to_dict(shape) for shape in item]

    def _element_to_dict(self, shape: Shape) -> dict[str, Any]:
        """Convert a shape to a dictionary."""
        base: dict[str, Any] = {"kind": shape.kind.value}

        match shape:
            case Circle():
                base.update(cx=shape.cx, cy=shape.cy, r=shape.r)
            case Ellipse():
                base.update(cx=shape.cx, cy=shape.cy, rx=shape.rx, ry=shape.ry)
            case Line():
                base.update(x1=shape.x1, y1=shape.y1, x2=shape.x2, y2=shape.y2)
            case Polygon():
                base["points"] = [[p.x, p.y] for p in shape.points]
            case Rect():
                base.update(x=shape.x, y=shape.y, width=shape.width, height=shape.height)
                if isinstance(shape, Image):
                    base["href"] = shape.href
            case Text():
                base.update(x=shape.x, y=shape.y, content=shape.content, font_size=shape.font_size)
            case Path():
                base["commands"] = [self._command_to_dict(cmd) for cmd in shape.commands]
            case Group():
                base["children"] = [self._element_to_dict(child) for child in shape.children]
            case _:
                raise UnsupportedShapeError(shape, "to_dict")

        rotation = getattr(shape, "rotation", None)
        if rotation is not None:
            base["rotation"] = {"angle": rotation.angle, "pivot_x": rotation.pivot_x, "pivot_y": rotation.pivot_y}
        style = shape.style.to_attrs()
        if style:
            base["style"] = style
        return base

    def _command_to_dict(self, cmd: PathCommand) -> dict[str, Any]:
        return {
            "command": cmd.kind.value,
            "mode": cmd.mode.value,
            "operands": [[op.x, op.y] if isinstance(op, Point) else op for op in cmd.operands],
        }

    def from_json(self, data: str) -> Any:
        """Load a document, shape or list of shapes from JSON."""
        return self.from_dict(json.loads(data))

    def from_dict(self, data: Any) -> Any:
        """Rebuild a document, shape or list of shapes from :meth:`to_dict` output.

        Polygon and polyline ``points`` may also be given as an SVG points
        string such as ``"0,0 10,0 5,8"``.

        Raises:
            InvalidShapeError: If the data does not describe a known shape.
        """
        if isinstance(data, list):
            return [self._element_from_dict(item) for item in data]
        if not isinstance(data, dict):
            msg = f"Expected an object or list, got {type(data).__name__}"
            raise InvalidShapeError(msg)
        if data.get("kind") == DOCUMENT_KIND:
            return Document(
                children=tuple(self._element_from_dict(child) for child in data.get("children", [])),
                width=data.get("width", 0),
                height=data.get("height", 0),
                view_box=tuple(data.get("view_box", (0, 0, 0, 0))),
                scale=data.get("scale"),
            )
        return self._element_from_dict(data)

    def _element_from_dict(self, data: dict[str, Any]) -> Shape:
        kind = data.get("kind")
        style = Style.from_attrs(data.get("style", {}))
        try:
            if kind in (ShapeKind.POLYGON, ShapeKind.POLYLINE):
                cls = Polygon if kind == ShapeKind.POLYGON else Polyline
                points = data["points"]
                if isinstance(points, str):
                    points = points_to_vector(points)
                return cls(tuple(points), style=style)
            if kind == ShapeKind.PATH:
                commands = tuple(
                    PathCommand(cmd["command"], cmd.get("mode", "abs"), tuple(cmd.get("operands", ())))
                    for cmd in data.get("commands", [])
                )
                return Path(commands, style=style)
            if kind == ShapeKind.GROUP:
                return Group(tuple(self._element_from_dict(child) for child in data.get("children", [])), style=style)
            if kind in _SIMPLE_KINDS:
                return self._simple_from_dict(_SIMPLE_KINDS[kind], data, style)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed shape data", kind=kind, error=str(exc))
            msg = f"Malformed {kind} data: {exc}"
            raise InvalidShapeError(msg) from exc
        msg = f"Unknown shape kind: {kind!r}"
        raise InvalidShapeError(msg)

    def _simple_from_dict(self, cls: type[Shape], data: dict[str, Any], style: Style) -> Shape:
        fields = {k: v for k, v in data.items() if k not in {"kind", "style", "rotation", "transform"}}
        if cls in (Circle, Ellipse, Rect, Image, Text):
            fields["rotation"] = self._rotation_from_dict(data)
        return cls(**fields, style=style)

    def _rotation_from_dict(self, data: dict[str, Any]) -> Rotation | None:
        if "transform" in data:
            return Rotation.parse(data["transform"])
        rotation = data.get("rotation")
        if rotation is None:
            return None
        return Rotation(rotation.get("angle", 0), rotation.get("pivot_x", 0), rotation.get("pivot_y", 0))

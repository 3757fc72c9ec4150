"""Style definitions for svgkit shapes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

_FIELD_ATTRS = {
    "fill": "fill",
    "stroke": "stroke",
    "stroke_width": "stroke-width",
    "opacity": "opacity",
}


@dataclass(frozen=True)
class Style:
    """Presentation attributes carried by a shape.

    Attributes:
        fill: Fill paint, e.g. ``"none"`` or a hex color.
        stroke: Stroke paint.
        stroke_width: Stroke width in user units (or a string with units).
        opacity: Opacity level from 0.0 (transparent) to 1.0 (opaque).
        extra: Any other presentation attribute, keyed by its SVG name.
            Stored as a read-only copy, so styles can be shared between
            shapes and hashed.
    """

    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | str | None = None
    opacity: float | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    def __hash__(self) -> int:
        return hash((self.fill, self.stroke, self.stroke_width, self.opacity, tuple(sorted(self.extra.items()))))

    def merge(self, **attrs: Any) -> Style:
        """Return a copy with ``attrs`` merged in.

        Keys may be given in Python form (``stroke_width``) or SVG form
        (``"stroke-width"``); unknown keys land in ``extra``.
        """
        known: dict[str, Any] = {}
        extra = dict(self.extra)
        for key, value in attrs.items():
            name = key.replace("-", "_")
            if name in _FIELD_ATTRS:
                known[name] = value
            else:
                extra[key.replace("_", "-")] = value
        return replace(self, extra=extra, **known)

    def to_attrs(self) -> dict[str, Any]:
        """Return the attributes that are set, keyed by SVG attribute name."""
        attrs = {
            attr: getattr(self, name) for name, attr in _FIELD_ATTRS.items() if getattr(self, name) is not None
        }
        attrs.update(self.extra)
        return attrs

    @classmethod
    def from_attrs(cls, attrs: Mapping[str, Any]) -> Style:
        """Build a style from an SVG-named attribute mapping."""
        return cls().merge(**attrs)

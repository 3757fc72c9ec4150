"""Configuration for svgkit."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_indent() -> int | None:
    value = os.getenv("SVGKIT_INDENT", "2").strip()
    if value.lower() in {"", "none"}:
        return None
    return int(value)


@dataclass
class SvgKitConfig:
    """Configuration for logging, export and debug overlays.

    Environment variables:
        SVGKIT_DEBUG: Enable debug logging.
        SVGKIT_JSON_LOGS: Emit logs as JSON.
        SVGKIT_INDENT: JSON indentation, or "none" for compact output.
        SVGKIT_XML_DECLARATION: Prefix rendered documents with an XML declaration.
    """

    debug: bool = field(default_factory=lambda: _env_flag("SVGKIT_DEBUG"))
    json_logs: bool = field(default_factory=lambda: _env_flag("SVGKIT_JSON_LOGS"))

    # Export
    json_indent: int | None = field(default_factory=_env_indent)
    xml_declaration: bool = field(default_factory=lambda: _env_flag("SVGKIT_XML_DECLARATION"))
    indent_markup: str = "  "

    # Debug overlay
    debug_color: str = "red"
    debug_opacity: float = 0.5
    debug_marker_radius: float = 3

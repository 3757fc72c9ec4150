"""Services for svgkit."""

from svgkit.services.export import ExportService

__all__ = ["ExportService"]

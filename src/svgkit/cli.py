"""Command line interface for svgkit.

Reads documents in the JSON layout produced by
:meth:`svgkit.services.export.ExportService.to_json`.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import rich_click as click
import structlog
from rich.console import Console
from rich.table import Table

from svgkit.composites import show_debug, svg
from svgkit.config import SvgKitConfig
from svgkit.core import transforms
from svgkit.core.exceptions import SvgKitError
from svgkit.core.logging import configure_logging
from svgkit.core.models import Document, Shape
from svgkit.services.export import ExportService

if TYPE_CHECKING:
    from collections.abc import Generator, Sequence

console = Console()
error_console = Console(stderr=True)
logger = structlog.get_logger(__name__)


@contextmanager
def reporting_errors() -> Generator[None, None, None]:
    """Print svgkit errors and exit with status 1."""
    try:
        yield
    except SvgKitError as exc:
        error_console.print(f"[red]Error: {exc}[/red]")
        raise SystemExit(1) from exc


def load_shapes(service: ExportService, file: Path) -> list[Shape]:
    """Read the top-level shapes of a JSON document, shape or shape list."""
    loaded: Any = service.from_json(file.read_text(encoding="utf-8"))
    if isinstance(loaded, Document):
        return list(loaded.children)
    if isinstance(loaded, Shape):
        return [loaded]
    return loaded


def _fmt(value: float) -> str:
    return f"{value:g}"


@click.group(name="svgkit", help="Inspect and transform SVG shape documents.")
@click.option("--debug/--no-debug", default=None, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON")
@click.pass_context
def cli(ctx: click.Context, debug: bool | None, json_logs: bool) -> None:
    """Inspect and transform SVG shape documents."""
    config = SvgKitConfig()
    if debug is not None:
        config.debug = debug
    if json_logs:
        config.json_logs = True
    configure_logging(debug=config.debug, json_logs=config.json_logs)
    ctx.obj = ExportService(config)


@cli.command(name="render", help="Render a JSON document to SVG markup.")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--translate", "-t", nargs=2, type=float, default=None, help="Translate by X Y")
@click.option("--rotate", "-r", type=float, default=None, help="Rotate by degrees (counter-clockwise)")
@click.option("--debug-overlay", is_flag=True, help="Draw bounding box and centroid overlays")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Output file")
@click.pass_obj
def render(
    service: ExportService,
    file: Path,
    translate: Sequence[float] | None,
    rotate: float | None,
    debug_overlay: bool,
    output: Path | None,
) -> None:
    """Render a JSON document to SVG markup."""
    with reporting_errors():
        shapes = load_shapes(service, file)
        if rotate is not None:
            shapes = transforms.rotate(shapes, rotate)
        if translate is not None:
            shapes = transforms.translate(shapes, translate)
        if debug_overlay:
            shapes = [show_debug(shape, service.config) for shape in shapes]
        markup = service.to_svg(svg(shapes))

    logger.debug("Rendered document", source=str(file), shapes=len(shapes))
    if output is None:
        click.echo(markup)
    else:
        output.write_text(markup + "\n", encoding="utf-8")
        console.print(f"[green]Wrote {output}[/green]")


@cli.command(name="bounds", help="Show the bounding box of every top-level shape.")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def bounds(service: ExportService, file: Path) -> None:
    """Show the bounding box of every top-level shape."""
    with reporting_errors():
        shapes = load_shapes(service, file)
        boxes = [transforms.bounds(shape) for shape in shapes]

    table = Table(title=f"Bounds ({len(shapes)} shapes)")
    table.add_column("#", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Min", style="green")
    table.add_column("Max", style="green")
    table.add_column("Size", style="magenta")

    for index, (shape, box) in enumerate(zip(shapes, boxes, strict=True)):
        table.add_row(
            str(index),
            shape.kind.value,
            f"{_fmt(box.min_x)}, {_fmt(box.min_y)}",
            f"{_fmt(box.max_x)}, {_fmt(box.max_y)}",
            f"{_fmt(box.width)} x {_fmt(box.height)}",
        )

    console.print(table)


@cli.command(name="centroid", help="Show the centroid of every top-level shape.")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def centroid(service: ExportService, file: Path) -> None:
    """Show the centroid of every top-level shape."""
    with reporting_errors():
        shapes = load_shapes(service, file)
        centers = [transforms.centroid(shape) for shape in shapes]

    table = Table(title=f"Centroids ({len(shapes)} shapes)")
    table.add_column("#", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Centroid", style="green")

    for index, (shape, (x, y)) in enumerate(zip(shapes, centers, strict=True)):
        table.add_row(str(index), shape.kind.value, f"{_fmt(x)}, {_fmt(y)}")

    console.print(table)

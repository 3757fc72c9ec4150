"""Minimal example showing svgkit usage.

This example builds a small scene from primitives, rotates the whole group
rigidly, and writes the result with a debug overlay.

The script will:
    - Place a square, a circle and a label with ``translate``
    - Connect them with an arrow
    - Rotate the group by 30 degrees around its bounding-box center

Running the Example:
    python examples/scene.py > scene.svg
"""

from __future__ import annotations

from svgkit import ExportService, composites, elements, transforms
from svgkit.core.logging import configure_logging

configure_logging(debug=True)

square = transforms.with_style(transforms.translate(elements.rect(40, 40), (40, 40)), fill="#4f46e5")
dot = transforms.with_style(transforms.translate(elements.circle(15), (140, 60)), fill="#f59e0b")
caption = transforms.translate(composites.label("svgkit", 14), (90, 110))
link = composites.arrow((62, 40), (123, 55))

scene = transforms.rotate(elements.g([square, dot, caption, link]), 30)

if __name__ == "__main__":
    document = composites.svg(composites.show_debug(scene))
    print(ExportService().to_svg(document))

"""Patch cable drawing component."""

from typing import Optional
from dataclasses import dataclass

from ..layout import ConnectorCurve
from ..primitives import SVGCanvas, DrawingStyle


@dataclass
class ConnectionDrawingConfig:
    """Configuration for patch cables."""
    stroke_width: float = 2
    opacity: float = 0.7


def draw_connection(
    canvas: SVGCanvas,
    curve: ConnectorCurve,
    config: Optional[ConnectionDrawingConfig] = None
):
    """
    Draw a patch cable as a smooth S-curve between two ports.

    Args:
        canvas: SVG canvas to draw on
        curve: Connector curve from the layout
        config: Optional configuration
    """
    cfg = config or ConnectionDrawingConfig()

    canvas.draw_path(
        curve.path(),
        DrawingStyle(stroke=curve.connection.color, stroke_width=cfg.stroke_width),
        opacity=cfg.opacity,
        css_class="connection",
    )

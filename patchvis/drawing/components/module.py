"""Module drawing component: box, name label and ports."""

from typing import Optional
from dataclasses import dataclass

from ..layout import ModulePlacement, PortPlacement
from ..primitives import SVGCanvas, DrawingStyle, STYLE_MODULE_NAME, STYLE_PORT_LABEL
from ...models import RenderOptions


@dataclass
class ModuleDrawingConfig:
    """Configuration for module boxes and ports."""
    fill: str = "#e0e0e0"
    outline: str = "#333"
    stroke_width: float = 2
    corner_radius: float = 5
    port_radius: float = 5
    port_color: str = "#555"
    label_offset: float = 10  # Port label distance from the port center

    @classmethod
    def from_options(cls, options: RenderOptions) -> "ModuleDrawingConfig":
        return cls(
            fill=options.module_color,
            stroke_width=options.stroke_width,
            port_radius=options.port_radius,
            port_color=options.port_color,
        )


def draw_port(
    canvas: SVGCanvas,
    port: PortPlacement,
    config: Optional[ModuleDrawingConfig] = None
):
    """
    Draw a port dot and its label.

    Input labels sit inside the box to the right of the dot, output labels
    to the left of the dot, right-aligned.
    """
    cfg = config or ModuleDrawingConfig()
    direction = "input" if port.is_input else "output"

    canvas.draw_circle(
        port.center,
        cfg.port_radius,
        style=None,
        fill=cfg.port_color,
        css_class=f"port {direction}",
    )

    if port.is_input:
        canvas.draw_text(
            port.center.offset(cfg.label_offset, 4),
            port.name,
            STYLE_PORT_LABEL,
            css_class="port-label",
        )
    else:
        canvas.draw_text(
            port.center.offset(-cfg.label_offset, 4),
            port.name,
            STYLE_PORT_LABEL,
            anchor="end",
            css_class="port-label",
        )


def draw_module(
    canvas: SVGCanvas,
    placement: ModulePlacement,
    config: Optional[ModuleDrawingConfig] = None
):
    """
    Draw a module box with its name, inputs and outputs.

    Knobs are drawn separately, after the ports.

    Args:
        canvas: SVG canvas to draw on
        placement: Module placement from the layout
        config: Optional configuration
    """
    cfg = config or ModuleDrawingConfig()

    canvas.draw_rect(
        placement.origin,
        placement.width,
        placement.height,
        DrawingStyle(stroke=cfg.outline, stroke_width=cfg.stroke_width),
        fill=cfg.fill,
        corner_radius=cfg.corner_radius,
        css_class="module",
    )

    canvas.draw_text(
        placement.name_label_position(),
        placement.name,
        STYLE_MODULE_NAME,
        anchor="middle",
        css_class="module-name",
    )

    for port in placement.inputs:
        draw_port(canvas, port, cfg)

    for port in placement.outputs:
        draw_port(canvas, port, cfg)

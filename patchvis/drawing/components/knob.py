"""Knob drawing component."""

from typing import Optional
from dataclasses import dataclass

from ..layout import KnobPlacement
from ..primitives import SVGCanvas, DrawingStyle, STYLE_KNOB_LABEL, STYLE_KNOB_VALUE


@dataclass
class KnobDrawingConfig:
    """Configuration for knob dials."""
    face: str = "#fff"
    outline: str = "#333"
    outline_width: float = 2
    ring_color: str = "#4CAF50"
    ring_width: float = 3
    indicator_width: float = 2


def draw_knob(
    canvas: SVGCanvas,
    placement: KnobPlacement,
    config: Optional[KnobDrawingConfig] = None
):
    """
    Draw a knob dial with its value ring, indicator and labels.

    The knob looks like:

           50            <- value (percentage or position label)
         .----.
        /      \\        <- ring, from 6 o'clock clockwise
        |  dial |
        \\   |  /        <- indicator
         '----'
         CUTOFF          <- knob name

    Args:
        canvas: SVG canvas to draw on
        placement: Knob placement from the layout
        config: Optional configuration
    """
    cfg = config or KnobDrawingConfig()
    outline = DrawingStyle(stroke=cfg.outline, stroke_width=cfg.outline_width)

    canvas.draw_circle(
        placement.center,
        placement.radius,
        outline,
        fill=cfg.face,
        css_class="knob",
    )

    if placement.shows_value:
        ring = DrawingStyle(stroke=cfg.ring_color, stroke_width=cfg.ring_width)
        if placement.is_full:
            canvas.draw_circle(
                placement.center,
                placement.ring_radius,
                ring,
                css_class="knob-ring",
            )
        else:
            canvas.draw_path(
                placement.ring_path(),
                ring,
                linecap="round",
                css_class="knob-ring",
            )

        canvas.draw_line(
            placement.center,
            placement.indicator_end(),
            DrawingStyle(stroke=cfg.outline, stroke_width=cfg.indicator_width),
            css_class="knob-indicator",
        )

    canvas.draw_text(
        placement.value_label_position(),
        placement.reading.label,
        STYLE_KNOB_VALUE,
        anchor="middle",
        css_class="knob-value",
    )

    canvas.draw_text(
        placement.name_label_position(),
        placement.knob.name,
        STYLE_KNOB_LABEL,
        anchor="middle",
        css_class="knob-label",
    )

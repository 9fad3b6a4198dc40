"""SVG drawing primitives for patch diagrams."""

import math
import svgwrite
from typing import Tuple, Optional, Union
from dataclasses import dataclass


Number = Union[int, float]


def snap(value: Number, digits: int = 2) -> Number:
    """
    Round a coordinate for output.

    Whole values come back as int so they print without a trailing ".0".
    """
    value = round(float(value), digits)
    if value.is_integer():
        return int(value)
    return value


@dataclass
class Point:
    """2D point."""
    x: float
    y: float

    def to_tuple(self) -> Tuple[Number, Number]:
        return (snap(self.x), snap(self.y))

    def offset(self, dx: float = 0, dy: float = 0) -> "Point":
        """Return a new point moved by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def midpoint(self, other: "Point") -> "Point":
        return Point((self.x + other.x) / 2, (self.y + other.y) / 2)

    def polar(self, angle_deg: float, radius: float) -> "Point":
        """Point at the given angle (degrees, clockwise from 3 o'clock) and distance."""
        radians = math.radians(angle_deg)
        return Point(
            self.x + math.cos(radians) * radius,
            self.y + math.sin(radians) * radius,
        )


@dataclass
class DrawingStyle:
    """Drawing style configuration."""
    stroke: str = "#333"
    stroke_width: float = 2
    fill: str = "none"
    font_family: str = "Arial"
    font_size: float = 10
    font_weight: str = "normal"


# Default styles
STYLE_NORMAL = DrawingStyle()
STYLE_TITLE = DrawingStyle(stroke="#333", font_size=18, font_weight="bold")
STYLE_MODULE_NAME = DrawingStyle(stroke="#000", font_size=14, font_weight="bold")
STYLE_PORT_LABEL = DrawingStyle(stroke="#000", font_size=10)
STYLE_KNOB_LABEL = DrawingStyle(stroke="#000", font_size=9)
STYLE_KNOB_VALUE = DrawingStyle(stroke="#666", font_size=9)


def path_data(*commands) -> str:
    """
    Join path commands and coordinates into an SVG "d" string.

    Points and numbers are snapped; strings (command letters, flags) are
    passed through.
    """
    parts = []
    for item in commands:
        if isinstance(item, Point):
            parts.extend(str(v) for v in item.to_tuple())
        elif isinstance(item, (int, float)):
            parts.append(str(snap(item)))
        else:
            parts.append(str(item))
    return " ".join(parts)


class SVGCanvas:
    """SVG canvas for drawing patch diagrams, sized in pixels."""

    def __init__(self, width: float, height: float):
        """
        Initialize SVG canvas.

        Args:
            width: Width in pixels
            height: Height in pixels
        """
        self.width = snap(width)
        self.height = snap(height)

        # Colors come straight from user config, so attribute checking is off
        self.dwg = svgwrite.Drawing(
            size=(self.width, self.height),
            viewBox=f"0 0 {self.width} {self.height}",
            debug=False,
        )

    def draw_background(self, color: str):
        """Fill the whole canvas."""
        self.dwg.add(self.dwg.rect(
            insert=(0, 0),
            size=("100%", "100%"),
            fill=color,
            class_="background",
        ))

    def draw_line(
        self,
        start: Point,
        end: Point,
        style: DrawingStyle = STYLE_NORMAL,
        css_class: Optional[str] = None
    ):
        """Draw a line."""
        self.dwg.add(self.dwg.line(
            start=start.to_tuple(),
            end=end.to_tuple(),
            stroke=style.stroke,
            stroke_width=style.stroke_width,
            class_=css_class,
        ))

    def draw_rect(
        self,
        origin: Point,
        width: float,
        height: float,
        style: DrawingStyle = STYLE_NORMAL,
        fill: Optional[str] = None,
        corner_radius: float = 0,
        css_class: Optional[str] = None
    ):
        """Draw a rectangle."""
        self.dwg.add(self.dwg.rect(
            insert=origin.to_tuple(),
            size=(snap(width), snap(height)),
            rx=snap(corner_radius) if corner_radius else None,
            stroke=style.stroke,
            stroke_width=style.stroke_width,
            fill=fill or style.fill,
            class_=css_class,
        ))

    def draw_circle(
        self,
        center: Point,
        radius: float,
        style: Optional[DrawingStyle] = STYLE_NORMAL,
        fill: Optional[str] = None,
        css_class: Optional[str] = None
    ):
        """
        Draw a circle.

        Pass style=None for a filled circle without outline.
        """
        extra = {}
        if style is not None:
            extra = {"stroke": style.stroke, "stroke_width": style.stroke_width}
        self.dwg.add(self.dwg.circle(
            center=center.to_tuple(),
            r=snap(radius),
            fill=fill or (style.fill if style is not None else None),
            class_=css_class,
            **extra
        ))

    def draw_text(
        self,
        position: Point,
        text: str,
        style: DrawingStyle = STYLE_NORMAL,
        anchor: str = "start",
        css_class: Optional[str] = None
    ):
        """
        Draw text.

        Args:
            position: Baseline position
            text: Text content (escaped on output)
            style: Drawing style; the stroke color is used as text color
            anchor: Text anchor (start, middle, end)
            css_class: Optional class attribute
        """
        self.dwg.add(self.dwg.text(
            str(text),
            insert=position.to_tuple(),
            font_family=style.font_family,
            font_size=snap(style.font_size),
            font_weight=style.font_weight if style.font_weight != "normal" else None,
            text_anchor=anchor if anchor != "start" else None,
            fill=style.stroke,
            class_=css_class,
        ))

    def draw_path(
        self,
        d: str,
        style: DrawingStyle = STYLE_NORMAL,
        opacity: Optional[float] = None,
        linecap: Optional[str] = None,
        css_class: Optional[str] = None
    ):
        """Draw an unfilled path from an SVG "d" string."""
        self.dwg.add(self.dwg.path(
            d=d,
            fill="none",
            stroke=style.stroke,
            stroke_width=style.stroke_width,
            stroke_linecap=linecap,
            opacity=opacity,
            class_=css_class,
        ))

    def tostring(self) -> str:
        """Return SVG as string."""
        return self.dwg.tostring()

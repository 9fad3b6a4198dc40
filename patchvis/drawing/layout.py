"""Layout calculator for patch diagrams.

All geometry is computed here, before anything is drawn:

1. canvas size from the module extents,
2. module, port and knob placement (ports are indexed by "module:port"),
3. knob ring and indicator geometry from the knob value,
4. connector curves between placed ports.
"""

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
from dataclasses import dataclass, field

from .primitives import Point, path_data
from ..models import (
    CanonicalConfig,
    Connection,
    KnobSpec,
    ModuleInstance,
    RenderOptions,
)
from ..parsers import normalize, is_number

logger = logging.getLogger(__name__)


# Extra top margin reserved for the title
TITLE_BAND_HEIGHT = 40

# First port sits this far below the module top, under the name label
PORT_TOP_OFFSET = 40

# Auto-placed knobs sit on a row this far above the module bottom
KNOB_ROW_OFFSET = 40

# Value ring sits outside the dial, indicator ends inside it
RING_GAP = 3
INDICATOR_INSET = 3

# Ring and indicator start at 6 o'clock and turn clockwise
START_ANGLE = 90

INPUT = "input"
OUTPUT = "output"


@dataclass
class KnobReading:
    """Displayed state of a knob."""
    fraction: float  # 0..1, drives the ring and indicator
    label: str       # Text shown above the knob


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(max(float(value), low), high)


def _is_whole(value: Any) -> bool:
    return is_number(value) and float(value).is_integer()


def knob_reading(knob: KnobSpec) -> KnobReading:
    """
    Compute the displayed fraction and label of a knob.

    With discrete positions, a whole value is an index into the labels and
    any other value is a 0-1 fraction mapped onto them. Without positions,
    the value is a 0-1 fraction shown as a percentage. Out-of-range values
    are clamped.

    Args:
        knob: Knob specification

    Returns:
        KnobReading with fraction in [0, 1] and label text
    """
    value = knob.value

    if knob.is_discrete:
        last = len(knob.positions) - 1
        if _is_whole(value):
            index = min(max(int(value), 0), last)
            fraction = index / last if last > 0 else 0.0
        else:
            fraction = _clamp(value)
            index = int(math.floor(fraction * last + 0.5))
        return KnobReading(fraction=fraction, label=knob.positions[index])

    fraction = _clamp(value)
    return KnobReading(fraction=fraction, label=str(int(math.floor(fraction * 100 + 0.5))))


@dataclass
class PortPlacement:
    """A port with its absolute position."""
    module: ModuleInstance
    name: str
    direction: str  # INPUT or OUTPUT
    center: Point

    @property
    def key(self) -> str:
        return self.module.port_key(self.name)

    @property
    def is_input(self) -> bool:
        return self.direction == INPUT


@dataclass
class KnobPlacement:
    """A knob with its absolute position and displayed state."""
    knob: KnobSpec
    center: Point
    radius: float
    reading: KnobReading

    @property
    def ring_radius(self) -> float:
        return self.radius + RING_GAP

    @property
    def end_angle(self) -> float:
        """Angle in degrees where the ring ends and the indicator points."""
        return START_ANGLE + self.reading.fraction * 360

    @property
    def shows_value(self) -> bool:
        """Ring and indicator are only drawn for a positive fraction."""
        return self.reading.fraction > 0

    @property
    def is_full(self) -> bool:
        return self.reading.fraction >= 1.0

    def ring_path(self) -> str:
        """
        Arc from 6 o'clock, clockwise, sweeping fraction * 360 degrees.

        Only meaningful for 0 < fraction < 1; a full ring is drawn as a circle.
        """
        start = self.center.polar(START_ANGLE, self.ring_radius)
        end = self.center.polar(self.end_angle, self.ring_radius)
        large_arc = 1 if self.reading.fraction > 0.5 else 0
        return path_data(
            "M", start,
            "A", self.ring_radius, self.ring_radius, 0, large_arc, 1, end,
        )

    def indicator_end(self) -> Point:
        return self.center.polar(self.end_angle, self.radius - INDICATOR_INSET)

    def value_label_position(self) -> Point:
        return self.center.offset(dy=-(self.ring_radius + 4))

    def name_label_position(self) -> Point:
        return self.center.offset(dy=self.radius + 12)


@dataclass
class ModulePlacement:
    """A module with its absolute box, ports and knobs."""
    module: ModuleInstance
    origin: Point
    width: float
    height: float
    inputs: List[PortPlacement] = field(default_factory=list)
    outputs: List[PortPlacement] = field(default_factory=list)
    knobs: List[KnobPlacement] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.module.name

    @property
    def ports(self) -> List[PortPlacement]:
        return self.inputs + self.outputs

    def name_label_position(self) -> Point:
        return self.origin.offset(dx=self.width / 2, dy=20)


@dataclass
class ConnectorCurve:
    """Curve between two placed ports."""
    connection: Connection
    start: Point
    end: Point

    @property
    def midpoint(self) -> Point:
        return self.start.midpoint(self.end)

    @property
    def control(self) -> Point:
        """Control point level with the source, halfway across."""
        return Point(self.midpoint.x, self.start.y)

    def path(self) -> str:
        # Quadratic to the midpoint, then mirrored (T) to the target
        return path_data(
            "M", self.start,
            "Q", self.control, self.midpoint,
            "T", self.end,
        )


@dataclass
class PatchLayout:
    """Complete geometry of one render pass."""
    width: float
    height: float
    top_padding: float
    title: Optional[str] = None
    modules: List[ModulePlacement] = field(default_factory=list)
    port_positions: Dict[str, Point] = field(default_factory=dict)
    curves: List[ConnectorCurve] = field(default_factory=list)
    dropped_connections: List[Connection] = field(default_factory=list)

    @property
    def port_count(self) -> int:
        return sum(len(m.ports) for m in self.modules)

    @property
    def knob_count(self) -> int:
        return sum(len(m.knobs) for m in self.modules)


class LayoutCalculator:
    """Calculator for positioning patch elements."""

    def __init__(self, options: Optional[RenderOptions] = None):
        """
        Initialize the layout calculator.

        Args:
            options: Optional render options (defaults if omitted)
        """
        self.options = options or RenderOptions()

    def module_size(self, module: ModuleInstance) -> Tuple[float, float]:
        """Module width and height, falling back to the configured defaults."""
        width = module.width if module.width is not None else self.options.module_width
        height = module.height if module.height is not None else self.options.module_height
        return width, height

    def top_padding(self, title: Optional[str]) -> float:
        """Top margin, including the title band when there is a title."""
        return self.options.padding + (TITLE_BAND_HEIGHT if title else 0)

    def canvas_size(self, config: CanonicalConfig) -> Tuple[float, float]:
        """
        Calculate canvas size from module extents.

        Args:
            config: Normalized patch

        Returns:
            Tuple of (width, height) in pixels
        """
        max_x = 0
        max_y = 0

        for module in config.modules:
            width, height = self.module_size(module)
            max_x = max(max_x, module.position.x + width)
            max_y = max(max_y, module.position.y + height)

        width = max_x + self.options.padding * 2
        height = max_y + self.options.padding + self.top_padding(config.title)
        return width, height

    def place_ports(
        self,
        module: ModuleInstance,
        origin: Point,
        width: float
    ) -> Tuple[List[PortPlacement], List[PortPlacement]]:
        """Place inputs down the left edge and outputs down the right edge."""
        spacing = self.options.port_spacing

        inputs = [
            PortPlacement(module, port, INPUT,
                          Point(origin.x, origin.y + PORT_TOP_OFFSET + i * spacing))
            for i, port in enumerate(module.inputs)
        ]
        outputs = [
            PortPlacement(module, port, OUTPUT,
                          Point(origin.x + width, origin.y + PORT_TOP_OFFSET + i * spacing))
            for i, port in enumerate(module.outputs)
        ]
        return inputs, outputs

    def place_knobs(
        self,
        module: ModuleInstance,
        origin: Point,
        width: float,
        height: float
    ) -> List[KnobPlacement]:
        """
        Place knobs.

        Knobs with an explicit position are offset from the module origin.
        The rest are spread on a row near the bottom, centered, with
        knob_spacing between centers.
        """
        count = len(module.knobs)
        placements = []

        for i, knob in enumerate(module.knobs):
            if knob.position is not None:
                center = origin.offset(knob.position.x, knob.position.y)
            else:
                center = Point(
                    origin.x + width / 2 + (i - (count - 1) / 2) * self.options.knob_spacing,
                    origin.y + height - KNOB_ROW_OFFSET,
                )

            radius = knob.radius if knob.radius is not None else self.options.knob_radius
            placements.append(KnobPlacement(
                knob=knob,
                center=center,
                radius=radius,
                reading=knob_reading(knob),
            ))

        return placements

    def place_module(self, module: ModuleInstance, top_padding: float) -> ModulePlacement:
        """Place one module with its ports and knobs."""
        width, height = self.module_size(module)
        origin = Point(
            module.position.x + self.options.padding,
            module.position.y + top_padding,
        )
        inputs, outputs = self.place_ports(module, origin, width)

        return ModulePlacement(
            module=module,
            origin=origin,
            width=width,
            height=height,
            inputs=inputs,
            outputs=outputs,
            knobs=self.place_knobs(module, origin, width, height),
        )

    def route_connections(
        self,
        connections: List[Connection],
        port_positions: Mapping[str, Point]
    ) -> Tuple[List[ConnectorCurve], List[Connection]]:
        """
        Build curves for connections whose ports were placed.

        Returns:
            Tuple of (curves, dropped connections)
        """
        curves = []
        dropped = []

        for conn in connections:
            start = port_positions.get(conn.source)
            end = port_positions.get(conn.target)

            if start is None or end is None:
                logger.warning(
                    "Connection %s -> %s references unknown port", conn.source, conn.target
                )
                dropped.append(conn)
                continue

            curves.append(ConnectorCurve(connection=conn, start=start, end=end))

        return curves, dropped

    def layout(self, config: CanonicalConfig) -> PatchLayout:
        """
        Compute the full layout of a normalized patch.

        The port lookup is built here and lives only in the returned layout.
        """
        width, height = self.canvas_size(config)
        top_padding = self.top_padding(config.title)
        logger.debug("Canvas size %sx%s for %d modules", width, height, config.module_count)

        modules = []
        port_positions: Dict[str, Point] = {}

        for module in config.modules:
            placement = self.place_module(module, top_padding)
            for port in placement.ports:
                if port.key in port_positions:
                    logger.debug("Port %s placed twice, keeping the last one", port.key)
                port_positions[port.key] = port.center
            modules.append(placement)

        curves, dropped = self.route_connections(config.connections, port_positions)

        return PatchLayout(
            width=width,
            height=height,
            top_padding=top_padding,
            title=config.title,
            modules=modules,
            port_positions=port_positions,
            curves=curves,
            dropped_connections=dropped,
        )


def resolve_options(
    config: CanonicalConfig,
    options: Union[RenderOptions, Mapping[str, Any], None] = None
) -> RenderOptions:
    """
    Build the options for one render call.

    Defaults, then the config's own "options", then the caller's options.
    A RenderOptions instance from the caller is used as is.
    """
    if isinstance(options, RenderOptions):
        return options
    return RenderOptions.from_mapping(config.options).merged(options)


def layout_patch(
    config: Union[CanonicalConfig, Mapping[str, Any]],
    options: Union[RenderOptions, Mapping[str, Any], None] = None
) -> PatchLayout:
    """
    Normalize a patch configuration and compute its layout.

    Args:
        config: Raw configuration mapping or CanonicalConfig
        options: Render option overrides

    Returns:
        PatchLayout
    """
    canonical = normalize(config)
    calculator = LayoutCalculator(resolve_options(canonical, options))
    return calculator.layout(canonical)

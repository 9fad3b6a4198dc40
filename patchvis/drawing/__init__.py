"""Drawing module for patch diagrams."""

from .primitives import (
    Point,
    DrawingStyle,
    SVGCanvas,
    STYLE_NORMAL,
    STYLE_TITLE,
    STYLE_MODULE_NAME,
    STYLE_PORT_LABEL,
    STYLE_KNOB_LABEL,
    STYLE_KNOB_VALUE,
    snap,
    path_data,
)

from .layout import (
    KnobReading,
    PortPlacement,
    KnobPlacement,
    ModulePlacement,
    ConnectorCurve,
    PatchLayout,
    LayoutCalculator,
    knob_reading,
    layout_patch,
    resolve_options,
    TITLE_BAND_HEIGHT,
)

from .renderer import (
    PatchRenderer,
    render_patch,
    generate_svg_from_config,
)

from .components import (
    ModuleDrawingConfig,
    draw_module,
    draw_port,
    KnobDrawingConfig,
    draw_knob,
    ConnectionDrawingConfig,
    draw_connection,
)

__all__ = [
    # Primitives
    "Point",
    "DrawingStyle",
    "SVGCanvas",
    "STYLE_NORMAL",
    "STYLE_TITLE",
    "STYLE_MODULE_NAME",
    "STYLE_PORT_LABEL",
    "STYLE_KNOB_LABEL",
    "STYLE_KNOB_VALUE",
    "snap",
    "path_data",
    # Layout
    "KnobReading",
    "PortPlacement",
    "KnobPlacement",
    "ModulePlacement",
    "ConnectorCurve",
    "PatchLayout",
    "LayoutCalculator",
    "knob_reading",
    "layout_patch",
    "resolve_options",
    "TITLE_BAND_HEIGHT",
    # Renderer
    "PatchRenderer",
    "render_patch",
    "generate_svg_from_config",
    # Components
    "ModuleDrawingConfig",
    "draw_module",
    "draw_port",
    "KnobDrawingConfig",
    "draw_knob",
    "ConnectionDrawingConfig",
    "draw_connection",
]

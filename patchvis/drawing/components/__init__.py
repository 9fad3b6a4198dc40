"""Drawing components for patch diagrams."""

from .module import (
    ModuleDrawingConfig,
    draw_module,
    draw_port,
)

from .knob import (
    KnobDrawingConfig,
    draw_knob,
)

from .connection import (
    ConnectionDrawingConfig,
    draw_connection,
)

__all__ = [
    # Module
    "ModuleDrawingConfig",
    "draw_module",
    "draw_port",
    # Knob
    "KnobDrawingConfig",
    "draw_knob",
    # Connection
    "ConnectionDrawingConfig",
    "draw_connection",
]

"""Patch diagram renderer.

Turns a declarative modular-synthesizer patch (modules, ports, knobs and
patch cables) into an SVG diagram.
"""

__version__ = "1.0.0"

from .models import (
    Position,
    KnobSpec,
    Definition,
    ModuleInstance,
    Connection,
    CanonicalConfig,
    RenderOptions,
)

from .parsers import (
    ValidationError,
    LegacyKnobList,
    NamedKnobOverrides,
    normalize,
)

from .drawing import (
    KnobReading,
    PatchLayout,
    PatchRenderer,
    knob_reading,
    layout_patch,
    render_patch,
    generate_svg_from_config,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "Position",
    "KnobSpec",
    "Definition",
    "ModuleInstance",
    "Connection",
    "CanonicalConfig",
    "RenderOptions",
    # Parsers
    "ValidationError",
    "LegacyKnobList",
    "NamedKnobOverrides",
    "normalize",
    # Drawing
    "KnobReading",
    "PatchLayout",
    "PatchRenderer",
    "knob_reading",
    "layout_patch",
    "render_patch",
    "generate_svg_from_config",
]

"""Data models for the patch diagram renderer."""

from .patch import (
    Position,
    KnobSpec,
    Definition,
    ModuleInstance,
    Connection,
    CanonicalConfig,
    DEFAULT_CONNECTION_COLOR,
    DEFAULT_KNOB_VALUE,
    DEFAULT_MODULE_TYPE,
)

from .options import (
    RenderOptions,
    DEFAULT_OPTIONS,
)

__all__ = [
    # Patch
    "Position",
    "KnobSpec",
    "Definition",
    "ModuleInstance",
    "Connection",
    "CanonicalConfig",
    "DEFAULT_CONNECTION_COLOR",
    "DEFAULT_KNOB_VALUE",
    "DEFAULT_MODULE_TYPE",
    # Options
    "RenderOptions",
    "DEFAULT_OPTIONS",
]

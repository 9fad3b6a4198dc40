"""Rendering options for patch diagrams."""

import logging
import math
import re
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


def _snake_case(key: str) -> str:
    """Convert a camelCase option key ("moduleWidth") to snake_case."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _coerce(value: Any, default: Any) -> Any:
    """
    Convert an option value to the type of its default.

    Numeric options accept numbers and numeric strings ("140"); anything
    else, or a non-finite number, gives None. Color options are stringified.
    """
    if isinstance(default, str):
        return str(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    try:
        finite = math.isfinite(value)
    except OverflowError:
        finite = False
    return value if finite else None


@dataclass(frozen=True)
class RenderOptions:
    """
    Layout and style settings for one render call.

    Every field has a default; overlays replace individual fields only.
    Keys may be given in camelCase ("moduleWidth") or snake_case
    ("module_width").
    """
    # Module box size when the module does not set its own
    module_width: float = 120
    module_height: float = 250

    # Ports and knobs
    port_radius: float = 5
    knob_radius: float = 15
    port_spacing: float = 20
    knob_spacing: float = 30

    # Canvas margin on every side
    padding: float = 20

    # Colors
    background_color: str = "#f5f5f5"
    module_color: str = "#e0e0e0"
    port_color: str = "#555"

    # Module outline
    stroke_width: float = 2

    @classmethod
    def from_mapping(cls, overrides: Optional[Mapping[str, Any]] = None) -> "RenderOptions":
        """Create options from defaults plus a mapping of overrides."""
        return cls().merged(overrides)

    def merged(self, overrides: Optional[Mapping[str, Any]] = None) -> "RenderOptions":
        """
        Return a copy with the given overrides applied.

        Args:
            overrides: Mapping of option keys to values. Unknown keys and
                non-numeric values for numeric options are ignored;
                numeric strings are converted. None values keep the
                current setting.

        Returns:
            New RenderOptions instance
        """
        if not overrides:
            return self

        defaults = {f.name: f.default for f in fields(self)}
        changes: Dict[str, Any] = {}

        for key, value in overrides.items():
            name = _snake_case(str(key))
            if name not in defaults:
                logger.debug("Ignoring unknown render option %r", key)
                continue
            if value is None:
                continue
            value = _coerce(value, defaults[name])
            if value is None:
                logger.debug(
                    "Ignoring render option %r with unusable value %r", key, overrides[key]
                )
                continue
            changes[name] = value

        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_OPTIONS = RenderOptions()

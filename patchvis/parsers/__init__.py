"""Parsers for patch configurations."""

from .validators import (
    ValidationError,
    describe,
    is_mapping,
    is_number,
    is_sequence,
    require_fields,
    require_mapping,
    require_sequence,
)

from .config_parser import (
    KnobOverride,
    LegacyKnobList,
    NamedKnobOverrides,
    KnobField,
    normalize,
    parse_definitions,
    parse_module,
    parse_connections,
    parse_position,
    parse_knob_spec,
    parse_knob_field,
    resolve_knobs,
)

__all__ = [
    # Validators
    "ValidationError",
    "describe",
    "is_mapping",
    "is_number",
    "is_sequence",
    "require_fields",
    "require_mapping",
    "require_sequence",
    # Config parser
    "KnobOverride",
    "LegacyKnobList",
    "NamedKnobOverrides",
    "KnobField",
    "normalize",
    "parse_definitions",
    "parse_module",
    "parse_connections",
    "parse_position",
    "parse_knob_spec",
    "parse_knob_field",
    "resolve_knobs",
]

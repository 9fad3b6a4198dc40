"""Patch configuration parser.

Turns a raw configuration mapping (as loaded from YAML or JSON) into a
CanonicalConfig: definitions are applied to the modules that reference them
and both knob encodings are resolved into plain KnobSpec lists.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Union

from ..models import (
    CanonicalConfig,
    Connection,
    Definition,
    KnobSpec,
    ModuleInstance,
    Position,
    DEFAULT_CONNECTION_COLOR,
    DEFAULT_KNOB_VALUE,
    DEFAULT_MODULE_TYPE,
)
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

logger = logging.getLogger(__name__)


@dataclass
class KnobOverride:
    """Per-instance settings for one definition knob."""
    value: Optional[float] = None
    position: Optional[Position] = None
    radius: Optional[float] = None

    def apply(self, knob: KnobSpec) -> KnobSpec:
        """Return a copy of the definition knob with these settings applied."""
        return replace(
            knob,
            value=self.value if self.value is not None else knob.value,
            position=self.position or knob.position,
            radius=self.radius if self.radius is not None else knob.radius,
        )


@dataclass
class LegacyKnobList:
    """Instance knobs given as a full list; replaces the definition's knobs."""
    knobs: List[KnobSpec] = field(default_factory=list)


@dataclass
class NamedKnobOverrides:
    """Instance knobs given as a mapping of definition knob name to override."""
    overrides: Dict[str, KnobOverride] = field(default_factory=dict)


KnobField = Union[LegacyKnobList, NamedKnobOverrides]


def _is_finite(value: Any) -> bool:
    # Integers past the float range overflow here
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _number(value: Any, where: str, index: Optional[int] = None) -> float:
    if not is_number(value) or not _is_finite(value):
        raise ValidationError(
            f"{where} must be a finite number, got {value!r}",
            field=where,
            index=index,
        )
    return value


def parse_position(raw: Any, where: str, index: Optional[int] = None) -> Position:
    """
    Parse an {x, y} mapping. Missing coordinates default to 0.

    Args:
        raw: Raw position value (None means origin)
        where: Description used in error messages
        index: Index of the owning entry, if any
    """
    if raw is None:
        return Position()
    require_mapping(raw, where, index)
    x = raw.get("x")
    y = raw.get("y")
    return Position(
        x=0 if x is None else _number(x, f"{where} x", index),
        y=0 if y is None else _number(y, f"{where} y", index),
    )


def _parse_port_names(raw: Any, where: str, index: Optional[int] = None) -> List[str]:
    require_sequence(raw, where, index)
    return [str(port) for port in raw]


def parse_knob_spec(raw: Any, where: str, index: Optional[int] = None) -> KnobSpec:
    """Parse a fully specified knob: {name, value?, position?, radius?, positions?}."""
    require_mapping(raw, where, index)
    require_fields(raw, ["name"], where, index)

    value = raw.get("value")
    radius = raw.get("radius")
    positions = raw.get("positions")

    return KnobSpec(
        name=str(raw["name"]),
        value=DEFAULT_KNOB_VALUE if value is None else _number(value, f"{where} value", index),
        position=(
            parse_position(raw["position"], f"{where} position", index)
            if raw.get("position") is not None else None
        ),
        radius=None if radius is None else _number(radius, f"{where} radius", index),
        positions=(
            [str(label) for label in require_sequence(positions, f"{where} positions", index)]
            if positions is not None else None
        ),
    )


def _parse_knob_override(raw: Any, where: str, index: int) -> KnobOverride:
    # A bare number is shorthand for {value: number}
    if is_number(raw):
        return KnobOverride(value=_number(raw, f"{where} value", index))

    if is_mapping(raw):
        value = raw.get("value")
        radius = raw.get("radius")
        return KnobOverride(
            value=None if value is None else _number(value, f"{where} value", index),
            position=(
                parse_position(raw["position"], f"{where} position", index)
                if raw.get("position") is not None else None
            ),
            radius=None if radius is None else _number(radius, f"{where} radius", index),
        )

    # Anything else keeps the definition defaults
    return KnobOverride()


def parse_knob_field(raw: Any, module_index: int) -> Optional[KnobField]:
    """
    Classify the instance "knobs" field.

    A list is the legacy, fully specified encoding. A mapping holds named
    overrides for the referenced definition's knobs.

    Args:
        raw: Raw "knobs" value of a module entry
        module_index: Index of the module, for error messages

    Returns:
        LegacyKnobList, NamedKnobOverrides, or None if the field is absent
    """
    if raw is None:
        return None

    where = describe("Module", module_index)

    if is_sequence(raw):
        return LegacyKnobList(knobs=[
            parse_knob_spec(entry, f"{where} knob {knob_index}", module_index)
            for knob_index, entry in enumerate(raw)
        ])

    if is_mapping(raw):
        return NamedKnobOverrides(overrides={
            str(name): _parse_knob_override(entry, f"{where} knob {name!r}", module_index)
            for name, entry in raw.items()
        })

    raise ValidationError(
        f'{where} "knobs" must be a list or a mapping, got {type(raw).__name__}',
        field="knobs",
        index=module_index,
    )


def resolve_knobs(
    knob_field: Optional[KnobField],
    base_knobs: List[KnobSpec],
    module_name: str = "",
) -> List[KnobSpec]:
    """
    Resolve the final knob list of a module instance.

    Args:
        knob_field: Parsed instance knob field
        base_knobs: Knobs of the referenced definition (empty if none)
        module_name: Module name for log messages

    Returns:
        New list of KnobSpec objects
    """
    if knob_field is None:
        return [replace(knob) for knob in base_knobs]

    if isinstance(knob_field, LegacyKnobList):
        return list(knob_field.knobs)

    known = {knob.name for knob in base_knobs}
    for name in knob_field.overrides:
        if name not in known:
            logger.debug(
                "Module %r: knob override %r matches no definition knob",
                module_name, name,
            )

    resolved = []
    for knob in base_knobs:
        override = knob_field.overrides.get(knob.name)
        resolved.append(override.apply(knob) if override else replace(knob))
    return resolved


def parse_definitions(raw: Any) -> Dict[str, Definition]:
    """Parse the "definitions" mapping of module templates."""
    if raw is None:
        return {}
    require_mapping(raw, "definitions")

    definitions = {}
    for key, entry in raw.items():
        key = str(key)
        where = f'Definition "{key}"'
        entry = require_mapping(entry if entry is not None else {}, where)

        knobs = entry.get("knobs")
        width = entry.get("width")
        height = entry.get("height")

        definitions[key] = Definition(
            type=str(entry.get("type") or key),
            inputs=_parse_port_names(entry.get("inputs") or [], f"{where} inputs"),
            outputs=_parse_port_names(entry.get("outputs") or [], f"{where} outputs"),
            knobs=[
                parse_knob_spec(knob, f"{where} knob {i}")
                for i, knob in enumerate(require_sequence(knobs or [], f"{where} knobs"))
            ],
            width=None if width is None else _number(width, f"{where} width"),
            height=None if height is None else _number(height, f"{where} height"),
        )

    return definitions


def parse_module(
    raw: Any,
    index: int,
    definitions: Mapping[str, Definition],
) -> ModuleInstance:
    """
    Parse one module entry, applying its definition if it references one.

    Fields present on the entry override the definition field by field.

    Args:
        raw: Raw module mapping
        index: Index in the "modules" list
        definitions: Parsed definitions by key

    Returns:
        ModuleInstance
    """
    where = describe("Module", index)
    require_mapping(raw, where, index)
    require_fields(raw, ["name"], where, index)
    name = str(raw["name"])

    base: Optional[Definition] = None
    definition_key = raw.get("definition")
    if definition_key is not None:
        definition_key = str(definition_key)
        base = definitions.get(definition_key)
        if base is None:
            logger.warning(
                "Module %r references unknown definition %r", name, definition_key
            )

    def pick(key: str, default: Any = None) -> Any:
        value = raw.get(key)
        if value is not None:
            return value
        if base is not None:
            return getattr(base, key)
        return default

    width = pick("width")
    height = pick("height")

    return ModuleInstance(
        name=name,
        type=str(pick("type", DEFAULT_MODULE_TYPE)),
        position=parse_position(raw.get("position"), f"{where} position", index),
        inputs=_parse_port_names(pick("inputs", []), f"{where} inputs", index),
        outputs=_parse_port_names(pick("outputs", []), f"{where} outputs", index),
        knobs=resolve_knobs(
            parse_knob_field(raw.get("knobs"), index),
            base.knobs if base is not None else [],
            module_name=name,
        ),
        width=None if width is None else _number(width, f"{where} width", index),
        height=None if height is None else _number(height, f"{where} height", index),
        definition=definition_key,
    )


def parse_connections(raw: Any) -> List[Connection]:
    """Parse the "connections" list. Every entry needs "from" and "to"."""
    if raw is None:
        return []
    require_sequence(raw, "connections")

    connections = []
    for index, entry in enumerate(raw):
        where = describe("Connection", index)
        require_mapping(entry, where, index)
        require_fields(entry, ["from", "to"], where, index)
        connections.append(Connection(
            source=str(entry["from"]),
            target=str(entry["to"]),
            color=str(entry.get("color") or DEFAULT_CONNECTION_COLOR),
        ))
    return connections


def normalize(config: Union[Mapping[str, Any], CanonicalConfig]) -> CanonicalConfig:
    """
    Normalize a patch configuration.

    Args:
        config: Raw configuration mapping with keys title, definitions,
            modules, connections and options; or an already normalized
            CanonicalConfig, which is returned unchanged.

    Returns:
        CanonicalConfig

    Raises:
        ValidationError: If required structure is missing
    """
    if isinstance(config, CanonicalConfig):
        return config

    require_mapping(config, "Configuration")

    definitions = parse_definitions(config.get("definitions"))

    raw_modules = config.get("modules")
    if not is_sequence(raw_modules):
        raise ValidationError(
            'Configuration must have a "modules" list',
            field="modules",
        )

    modules = [
        parse_module(entry, index, definitions)
        for index, entry in enumerate(raw_modules)
    ]

    options = config.get("options") or {}
    if not is_mapping(options):
        logger.warning("Ignoring non-mapping options: %r", options)
        options = {}

    title = config.get("title")

    return CanonicalConfig(
        title=str(title) if title else None,
        definitions=definitions,
        modules=modules,
        connections=parse_connections(config.get("connections")),
        options=dict(options),
    )

"""Patch data models: definitions, module instances, knobs and connections."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


DEFAULT_CONNECTION_COLOR = "#333"
DEFAULT_KNOB_VALUE = 0.5
DEFAULT_MODULE_TYPE = "default"


@dataclass
class Position:
    """Offset in pixels, relative to the canvas or to a module."""
    x: float = 0
    y: float = 0

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass
class KnobSpec:
    """A rotary control on a module."""

    name: str
    value: float = DEFAULT_KNOB_VALUE
    position: Optional[Position] = None    # Offset from module top-left
    radius: Optional[float] = None         # Falls back to RenderOptions.knob_radius
    positions: Optional[List[str]] = None  # Discrete labels, e.g. ["SIN", "SAW"]

    @property
    def is_discrete(self) -> bool:
        """Check if the knob selects from a list of labels."""
        return bool(self.positions)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "value": self.value}
        if self.position is not None:
            data["position"] = self.position.to_dict()
        if self.radius is not None:
            data["radius"] = self.radius
        if self.positions is not None:
            data["positions"] = list(self.positions)
        return data


@dataclass
class Definition:
    """Reusable module template referenced by name from instances."""

    type: str
    inputs: List[str] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)
    knobs: List[KnobSpec] = field(default_factory=list)
    width: Optional[float] = None
    height: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type,
            "inputs": list(self.inputs),
            "outputs": list(self.outputs),
            "knobs": [knob.to_dict() for knob in self.knobs],
        }
        if self.width is not None:
            data["width"] = self.width
        if self.height is not None:
            data["height"] = self.height
        return data


@dataclass
class ModuleInstance:
    """One concrete module placed in a patch."""

    name: str
    type: str = DEFAULT_MODULE_TYPE
    position: Position = field(default_factory=Position)
    inputs: List[str] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)
    knobs: List[KnobSpec] = field(default_factory=list)
    width: Optional[float] = None
    height: Optional[float] = None
    definition: Optional[str] = None  # Key of the Definition it came from

    def port_key(self, port: str) -> str:
        """Key used by connections to address one of this module's ports."""
        return f"{self.name}:{port}"

    @property
    def port_count(self) -> int:
        return len(self.inputs) + len(self.outputs)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "position": self.position.to_dict(),
            "inputs": list(self.inputs),
            "outputs": list(self.outputs),
            # Serialized as a list so the knobs come back fully specified
            "knobs": [knob.to_dict() for knob in self.knobs],
        }
        if self.width is not None:
            data["width"] = self.width
        if self.height is not None:
            data["height"] = self.height
        if self.definition is not None:
            data["definition"] = self.definition
        return data


@dataclass
class Connection:
    """A patch cable between two ports, addressed as "module:port"."""

    source: str
    target: str
    color: str = DEFAULT_CONNECTION_COLOR

    def to_dict(self) -> Dict[str, str]:
        return {"from": self.source, "to": self.target, "color": self.color}


@dataclass
class CanonicalConfig:
    """A patch with every template and knob encoding resolved."""

    modules: List[ModuleInstance] = field(default_factory=list)
    connections: List[Connection] = field(default_factory=list)
    definitions: Dict[str, Definition] = field(default_factory=dict)
    title: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def module_count(self) -> int:
        return len(self.modules)

    def get_module(self, name: str) -> Optional[ModuleInstance]:
        """Get a module instance by name."""
        for module in self.modules:
            if module.name == name:
                return module
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the raw configuration shape."""
        data: Dict[str, Any] = {
            "definitions": {
                key: definition.to_dict()
                for key, definition in self.definitions.items()
            },
            "modules": [module.to_dict() for module in self.modules],
            "connections": [conn.to_dict() for conn in self.connections],
            "options": dict(self.options),
        }
        if self.title is not None:
            data["title"] = self.title
        return data

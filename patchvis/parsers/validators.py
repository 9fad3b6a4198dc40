"""Structural validation helpers for patch configurations."""

from collections.abc import Mapping, Sequence
from typing import Any, Iterable, Optional


class ValidationError(ValueError):
    """Exception raised when a patch configuration is structurally invalid."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        index: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        self.index = index


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    """Check for a list-like value (strings and mappings excluded)."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def is_number(value: Any) -> bool:
    """Check for an int or float, excluding booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def describe(kind: str, index: Optional[int] = None) -> str:
    """
    Human-readable location of a config entry.

    Returns:
        e.g. 'Module at index 1' for describe("Module", 1)
    """
    if index is None:
        return kind
    return f"{kind} at index {index}"


def require_mapping(value: Any, where: str, index: Optional[int] = None) -> Mapping:
    """Raise ValidationError unless value is a mapping."""
    if not is_mapping(value):
        raise ValidationError(
            f"{where} must be a mapping, got {type(value).__name__}",
            index=index,
        )
    return value


def require_sequence(value: Any, where: str, index: Optional[int] = None) -> Sequence:
    """Raise ValidationError unless value is a list-like sequence."""
    if not is_sequence(value):
        raise ValidationError(
            f"{where} must be a list, got {type(value).__name__}",
            index=index,
        )
    return value


def require_fields(
    entry: Mapping,
    required: Iterable[str],
    where: str,
    index: Optional[int] = None,
):
    """
    Raise ValidationError if any required key is missing or empty.

    Args:
        entry: Mapping to check
        required: Keys that must be present with a non-empty value
        where: Location used in the error message ("Module at index 1")
        index: Position of the entry in its list
    """
    required = list(required)
    missing = [key for key in required if entry.get(key) in (None, "")]
    if missing:
        names = " and ".join(f'"{key}"' for key in required)
        noun = "property" if len(required) == 1 else "properties"
        raise ValidationError(
            f"{where} must have {names} {noun}",
            field=missing[0],
            index=index,
        )

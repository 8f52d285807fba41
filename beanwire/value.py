"""
Value Descriptor

Tagged values used for constructor arguments and property values.
A value is either a LITERAL (a scalar, or a list/tuple/dict whose elements
may themselves be values) or a REFERENCE to another bean by name.

Example::

    from beanwire import literal, ref

    ref("db")                        # resolved to app.get("db")
    literal(30)                      # passed as-is
    literal([ref("db"), "backup"])   # list with one resolved element
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import InvalidDefinitionError

# Collection types whose elements are scanned for nested values
COLLECTION_TYPES = (list, tuple, dict)


class ValueKind(Enum):
    """Kind of a value descriptor"""
    LITERAL = "literal"
    REFERENCE = "reference"


@dataclass(frozen=True)
class Value:
    """Literal-or-reference descriptor.

    Attributes:
        kind: LITERAL or REFERENCE
        value: The literal itself, or the referenced bean name
    """
    kind: ValueKind
    value: Any

    def __post_init__(self):
        if self.kind is ValueKind.REFERENCE and (
            not isinstance(self.value, str) or not self.value
        ):
            raise InvalidDefinitionError(
                f"Reference target must be a non-empty bean name, got {self.value!r}"
            )

    @property
    def is_ref(self) -> bool:
        return self.kind is ValueKind.REFERENCE

    @property
    def is_collection(self) -> bool:
        return self.kind is ValueKind.LITERAL and isinstance(self.value, COLLECTION_TYPES)

    def __repr__(self) -> str:
        if self.is_ref:
            return f"ref({self.value!r})"
        return f"literal({self.value!r})"


def ref(name: str) -> Value:
    """Reference another bean by name."""
    return Value(ValueKind.REFERENCE, name)


def literal(value: Any) -> Value:
    """Wrap a plain value. Collections may contain further values."""
    return Value(ValueKind.LITERAL, value)


def as_value(value: Any) -> Value:
    """Return value unchanged if it is a Value, else wrap it as a literal."""
    if isinstance(value, Value):
        return value
    return literal(value)

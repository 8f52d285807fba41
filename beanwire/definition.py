"""
Definition

Data class describing how to build one named bean
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Tuple, Type, Union

from .exceptions import InvalidDefinitionError
from .scope import Scope
from .value import Value, as_value

# A class object, or an import path such as "app.db.DbConn" / "app.db:DbConn"
ClassName = Union[Type, str]


@dataclass(frozen=True)
class Definition:
    """Bean definition.

    Raw constructor arguments and property values are wrapped as literals,
    so ``Definition(Cache, properties={"ttl": 30, "store": ref("db")})``
    is equivalent to spelling ``literal(30)`` out.
    """
    class_name: Optional[ClassName] = None
    scope: Scope = Scope.SINGLETON
    alias: Optional[str] = None
    constructor_args: Sequence[Any] = ()
    properties: Mapping[str, Any] = field(default_factory=dict)

    # properties is a read-only mapping view, which cannot be hashed
    __hash__ = None

    def __post_init__(self):
        if self.class_name is None and not self.alias:
            raise InvalidDefinitionError(
                "A definition needs a class_name or an alias. "
                "Hint: Definition(DbConn) or Definition(alias=\"db\")"
            )
        if self.alias is not None and not isinstance(self.alias, str):
            raise InvalidDefinitionError(f"Alias must be a bean name, got {self.alias!r}")

        try:
            scope = Scope(self.scope)
        except ValueError as e:
            raise InvalidDefinitionError(f"Unknown scope {self.scope!r}") from e

        args: Tuple[Value, ...] = tuple(as_value(arg) for arg in self.constructor_args)
        properties = MappingProxyType(
            {name: as_value(value) for name, value in dict(self.properties).items()}
        )

        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "scope", scope)
        object.__setattr__(self, "constructor_args", args)
        object.__setattr__(self, "properties", properties)

    @classmethod
    def alias_of(cls, target: str) -> "Definition":
        """Definition that forwards every resolution to target."""
        return cls(alias=target)

    @property
    def is_singleton(self) -> bool:
        return self.scope is Scope.SINGLETON

    @property
    def is_alias(self) -> bool:
        return bool(self.alias)

    def __repr__(self) -> str:
        if self.is_alias:
            return f"Definition(alias={self.alias!r})"
        target = getattr(self.class_name, "__qualname__", self.class_name)
        return f"Definition(class={target}, scope={self.scope.value})"

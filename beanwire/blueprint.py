"""
Blueprint

This module turns a bean class into a construction recipe that the
container can replay cheaply:

- How to construct it (with or without positional arguments)
- Which attributes may be injected, and how to assign each of them
- Which post-construction initializer to call, if any

The class is analyzed once and the result is cached, so resolution never
re-inspects a class it has already seen.
"""

import importlib
import inspect
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, ClassVar, Dict, FrozenSet, Mapping, Optional, Sequence, Set, Type, get_origin

from .definition import ClassName
from .exceptions import ConstructionError


def load_class(class_name: ClassName) -> Type:
    """Return the class a definition points at.

    Args:
        class_name: A class, or an import path in either
            ``"package.module.Class"`` or ``"package.module:Class"`` form

    Returns:
        The class object

    Raises:
        ConstructionError: When the path cannot be imported or does not
            name a class
    """
    if isinstance(class_name, type):
        return class_name

    if not isinstance(class_name, str) or not class_name:
        raise ConstructionError(f"Invalid class name {class_name!r}")

    module_path, sep, attr_path = class_name.partition(":")
    if not sep:
        module_path, _, attr_path = class_name.rpartition(".")
    if not module_path or not attr_path:
        raise ConstructionError(
            f"Cannot import '{class_name}': expected 'package.module.Class' "
            f"or 'package.module:Class'"
        )

    try:
        target: Any = importlib.import_module(module_path)
        for part in attr_path.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as e:
        raise ConstructionError(f"Cannot import '{class_name}': {e}") from e

    if not isinstance(target, type):
        raise ConstructionError(f"'{class_name}' is not a class")
    return target


@dataclass(frozen=True)
class Blueprint:
    """Construction recipe for one class.

    Attributes:
        cls: The class to instantiate
        accepts_arguments: False when the class defines neither ``__init__``
            nor ``__new__``; constructor arguments are then not passed
        fields: Attribute names declared on the class (annotations, slots,
            class-level defaults)
        setters: Property name -> setter function, for properties with a setter
        excluded: Names never injected (ClassVar, methods, read-only properties)
        init_method: Name of the initializer to call after injection, or None
    """
    cls: Type
    accepts_arguments: bool
    fields: FrozenSet[str]
    setters: Mapping[str, Callable[[Any, Any], None]]
    excluded: FrozenSet[str]
    init_method: Optional[str]

    @classmethod
    def of(cls, target: Type, init_method: Optional[str] = "init") -> "Blueprint":
        """Return the (cached) blueprint of target."""
        return _blueprint_for(target, init_method)

    def construct(self, args: Sequence[Any]) -> Any:
        if not self.accepts_arguments:
            return self.cls()
        return self.cls(*args)

    def injectable_names(self, instance: Any) -> Set[str]:
        """Names that may receive an injected value on this instance.

        Attributes assigned by ``__init__`` count as declared, the same way
        class-level declarations do.
        """
        names = set(self.fields)
        names.update(self.setters)
        names.update(getattr(instance, "__dict__", ()))
        return names - self.excluded

    def assign(self, instance: Any, name: str, value: Any) -> None:
        setter = self.setters.get(name)
        if setter is not None:
            setter(instance, value)
        else:
            # Bypasses frozen dataclasses and __setattr__ guards
            object.__setattr__(instance, name, value)

    def initialize(self, instance: Any) -> None:
        if self.init_method is not None:
            getattr(instance, self.init_method)()


@lru_cache(maxsize=1024)
def _blueprint_for(target: Type, init_method: Optional[str]) -> Blueprint:
    fields: Set[str] = set()
    setters: Dict[str, Callable[[Any, Any], None]] = {}
    excluded: Set[str] = set()

    def mark_field(name: str) -> None:
        fields.add(name)
        excluded.discard(name)

    def mark_excluded(name: str) -> None:
        excluded.add(name)
        fields.discard(name)
        setters.pop(name, None)

    # Base classes first so subclasses override
    for klass in reversed(target.__mro__):
        if klass is object:
            continue

        for name, attr in vars(klass).items():
            if name.startswith("__") and name.endswith("__"):
                continue
            if isinstance(attr, property):
                if attr.fset is None:
                    mark_excluded(name)
                else:
                    excluded.discard(name)
                    setters[name] = attr.fset
            elif inspect.ismemberdescriptor(attr):
                mark_field(name)  # __slots__ entry
            elif isinstance(attr, (staticmethod, classmethod, type)) or inspect.isroutine(attr):
                mark_excluded(name)
            else:
                mark_field(name)

        for name, annotation in _own_annotations(klass).items():
            if _is_class_var(annotation):
                mark_excluded(name)
            elif name not in setters:
                mark_field(name)

    has_init = init_method is not None and callable(getattr(target, init_method, None))

    return Blueprint(
        cls=target,
        accepts_arguments=(
            target.__init__ is not object.__init__
            or target.__new__ is not object.__new__
        ),
        fields=frozenset(fields),
        setters=dict(setters),
        excluded=frozenset(excluded),
        init_method=init_method if has_init else None,
    )


def _own_annotations(klass: Type) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(klass))
    except Exception:
        # Unresolvable forward references - fall back to the raw mapping
        return dict(klass.__dict__.get("__annotations__", {}))


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.replace("typing.", "").startswith("ClassVar")
    return annotation is ClassVar or get_origin(annotation) is ClassVar

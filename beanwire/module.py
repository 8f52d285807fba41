"""
BeanWireModule

This module provides the DI module class for defining beans in code.
A BeanWireModule is a definition source: it collects named definitions,
which are then merged into a container with ``load_modules()`` or
``add_definitions(module.definitions)``.

Key features:
- One call per bean: module.singleton(...), module.prototype(...),
  module.alias(...)
- References to other beans with ref("name")
- Context manager support for cleaner definition blocks

Example::

    module = BeanWireModule()
    with module:
        module.singleton("db", DbConn)
        module.prototype("repo", Repo, args=[ref("db")])
        module.singleton("cache", Cache, properties={"ttl": 30, "store": ref("db")})
        module.alias("database", "db")

    app = BeanWireCore(modules=[module])
"""

from typing import Any, Dict, Mapping, Optional, Sequence

from .definition import ClassName, Definition
from .exceptions import DuplicateDefinitionError
from .scope import Scope


class BeanWireModule:
    """DI Module for defining bean registrations.

    Attributes:
        _definitions: Name -> Definition, in registration order

    Example::

        module = BeanWireModule()
        with module:
            # Singleton - same instance every time
            module.singleton("db", DbConn)

            # Prototype - new instance every time
            module.prototype("repo", Repo, args=[ref("db")])
    """

    def __init__(self):
        self._definitions: Dict[str, Definition] = {}

    def __enter__(self) -> 'BeanWireModule':
        """Enter context manager for cleaner definition blocks.

        The context manager is optional but provides visual structure
        for module definitions.

        Returns:
            The module instance itself
        """
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        return False

    @property
    def definitions(self) -> Dict[str, Definition]:
        """Registered definitions (a copy, in registration order)."""
        return dict(self._definitions)

    def add(self, name: str, definition: Definition) -> Definition:
        """Register a prebuilt definition under name.

        Raises:
            DuplicateDefinitionError: When name is already registered in
                this module
        """
        if name in self._definitions:
            raise DuplicateDefinitionError(
                f"Bean '{name}' is already registered in this module"
            )
        self._definitions[name] = definition
        return definition

    def singleton(
        self,
        name: str,
        class_name: ClassName,
        args: Sequence[Any] = (),
        properties: Optional[Mapping[str, Any]] = None,
    ) -> Definition:
        """Register a bean built once and shared.

        Args:
            name: Bean name
            class_name: Class, or import path of the class
            args: Positional constructor arguments (values, refs or raw literals)
            properties: Attribute name -> value injected after construction

        Example::

            module.singleton("cache", Cache, properties={"store": ref("db")})
        """
        return self.add(name, Definition(
            class_name=class_name,
            scope=Scope.SINGLETON,
            constructor_args=args,
            properties=properties or {},
        ))

    def prototype(
        self,
        name: str,
        class_name: ClassName,
        args: Sequence[Any] = (),
        properties: Optional[Mapping[str, Any]] = None,
    ) -> Definition:
        """Register a bean built anew on every get().

        Takes the same arguments as singleton().
        """
        return self.add(name, Definition(
            class_name=class_name,
            scope=Scope.PROTOTYPE,
            constructor_args=args,
            properties=properties or {},
        ))

    def alias(self, name: str, target: str) -> Definition:
        """Register name as another name for target."""
        return self.add(name, Definition.alias_of(target))

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

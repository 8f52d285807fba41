"""
BeanWireContainer

This module provides the resolution engine of BeanWire. It is the heart of
the package, responsible for:

- Storing bean definitions (DefinitionRegistry) and built singletons
  (InstanceCache)
- Turning a bean name into a fully wired object
- Resolving references inside constructor arguments, properties and nested
  list/tuple/dict literals
- Enforcing singleton and prototype scopes
- Asking the interceptor bean for a substitute class before construction
- Detecting circular references

The container is typically not used directly. Use BeanWireCore instead.
"""

import copy
import logging
from contextlib import contextmanager
from threading import Lock, RLock
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Type

from .blueprint import Blueprint, load_class
from .definition import Definition
from .exceptions import BeanWireError, ConstructionError
from .instance_cache import InstanceCache
from .interception import INTERCEPTOR_BEAN_NAME, collect_method_annotations
from .registry import DefinitionRegistry
from .resolution_context import ResolutionContext, _resolution_context
from .value import COLLECTION_TYPES, Value

logger = logging.getLogger(__name__)

# Method called on every new bean after property injection, when it exists
DEFAULT_INIT_METHOD = "init"


class BeanWireContainer:
    """Core container with bean resolution and scope management.

    Resolution of a name follows these steps:

    1. Return the cached instance if the name holds a built singleton
    2. Look up the definition (DefinitionNotFoundError when missing)
    3. Follow an alias by resolving the target instead
    4. Resolve the interceptor bean, if one is registered
    5. Resolve constructor arguments
    6. Let the interceptor substitute the class
    7. Construct, inject properties, call the initializer
    8. Cache the instance when the definition is a singleton

    Each singleton name has its own re-entrant build lock, so a singleton is
    built at most once even when several threads ask for it at the same
    time, while unrelated beans and prototypes are built concurrently.

    Attributes:
        _registry: Registered definitions
        _instances: Singletons built so far
        _init_method: Initializer name called after injection (None disables it)
        _lock: Guards definition merges and the build lock table
        _build_locks: Singleton name -> build lock

    Note:
        This class is typically not instantiated directly. Use BeanWireCore
        instead.
    """

    def __init__(self, init_method: Optional[str] = DEFAULT_INIT_METHOD):
        self._registry = DefinitionRegistry()
        self._instances = InstanceCache()
        self._init_method = init_method
        self._lock = Lock()
        self._build_locks: Dict[str, RLock] = {}

    @property
    def registry(self) -> DefinitionRegistry:
        return self._registry

    @property
    def instances(self) -> InstanceCache:
        return self._instances

    def add_definitions(self, definitions: Mapping[str, Definition]) -> None:
        """Merge definitions; names already registered keep their definition."""
        with self._lock:
            self._registry.add_definitions(definitions)

    def has(self, name: str) -> bool:
        return self._registry.has(name)

    def resolve(self, name: str) -> Any:
        """Resolve a bean by name.

        Args:
            name: The bean name

        Returns:
            The bean instance. Singletons return the same object every time;
            prototypes return a new object on every call.

        Raises:
            DefinitionNotFoundError: When name, or a name it references,
                is not registered
            CircularReferenceError: When the bean depends on itself
            ConstructionError: When the class cannot be imported, built,
                injected or initialized

        Example::

            repo = container.resolve("repo")
        """
        return self._resolve(name)

    def clear(self) -> None:
        """Drop every cached singleton."""
        with self._lock:
            self._instances.clear()
            self._build_locks.clear()

    def _resolve(self, name: str) -> Any:
        if name in self._instances:
            return self._instances.get(name)

        definition = self._registry.get(name)

        if definition.is_alias:
            with self._resolving(name):
                logger.debug("Bean '%s' is an alias of '%s'", name, definition.alias)
                # The alias holder itself is never cached
                return self._resolve(definition.alias)

        interceptor = self._interceptor_for(name)

        if not definition.is_singleton:
            with self._resolving(name):
                return self._build(name, definition, interceptor)

        with self._build_lock(name):
            # Built meanwhile by another thread or by the interceptor
            if name in self._instances:
                return self._instances.get(name)
            with self._resolving(name):
                instance = self._build(name, definition, interceptor)
            self._instances.put(name, instance)
            return instance

    def _build_lock(self, name: str) -> RLock:
        with self._lock:
            lock = self._build_locks.get(name)
            if lock is None:
                lock = self._build_locks[name] = RLock()
            return lock

    @contextmanager
    def _resolving(self, name: str) -> Iterator[ResolutionContext]:
        """Track name on the resolution path of the current thread/task."""
        ctx = _resolution_context.get()
        token = None
        if ctx is None or ctx.container is not self:
            ctx = ResolutionContext(self)
            token = _resolution_context.set(ctx)
        try:
            ctx.enter(name)
            try:
                yield ctx
            finally:
                ctx.leave(name)
        finally:
            if token is not None:
                _resolution_context.reset(token)

    def _interceptor_for(self, name: str) -> Any:
        """Resolve the interceptor bean before name enters the resolution path.

        Returns None for the interceptor itself, when none is registered, and
        for beans resolved while the interceptor is being built.
        """
        if name == INTERCEPTOR_BEAN_NAME or not self._registry.has(INTERCEPTOR_BEAN_NAME):
            return None
        ctx = _resolution_context.get()
        if ctx is not None and ctx.container is self and ctx.is_resolving(INTERCEPTOR_BEAN_NAME):
            return None
        return self._resolve(INTERCEPTOR_BEAN_NAME)

    def _build(self, name: str, definition: Definition, interceptor: Any) -> Any:
        args = self._resolve_arguments(definition.constructor_args)

        try:
            cls = load_class(definition.class_name)
        except ConstructionError as e:
            raise ConstructionError(f"Cannot build bean '{name}': {e}", name=name) from e

        if interceptor is not None:
            cls = self._intercepted_class(name, cls, interceptor)
        blueprint = Blueprint.of(cls, self._init_method)
        logger.debug("Building bean '%s' as %s", name, cls.__qualname__)

        try:
            instance = blueprint.construct(args)
        except BeanWireError:
            raise
        except Exception as e:
            raise ConstructionError(
                f"Failed to construct bean '{name}' ({cls.__name__}) "
                f"with {len(args)} argument(s): {e}",
                name=name,
            ) from e

        self._inject_properties(name, instance, blueprint, definition.properties)

        try:
            blueprint.initialize(instance)
        except BeanWireError:
            raise
        except Exception as e:
            raise ConstructionError(
                f"{cls.__name__}.{blueprint.init_method}() failed for bean '{name}': {e}",
                name=name,
            ) from e

        return instance

    def _intercepted_class(self, name: str, cls: Type, interceptor: Any) -> Type:
        """Return the class to instantiate for name, asking the interceptor."""
        substitute_class_for = getattr(interceptor, "substitute_class_for", None)
        if substitute_class_for is None:
            raise ConstructionError(
                f"Bean '{INTERCEPTOR_BEAN_NAME}' is a {type(interceptor).__name__}, "
                f"which has no substitute_class_for() method",
                name=name,
            )

        try:
            substitute = substitute_class_for(name, cls, collect_method_annotations(cls))
        except BeanWireError:
            raise
        except Exception as e:
            raise ConstructionError(
                f"Interceptor failed for bean '{name}' ({cls.__name__}): {e}",
                name=name,
            ) from e

        if substitute is None or substitute is cls:
            return cls
        if not isinstance(substitute, type):
            raise ConstructionError(
                f"Interceptor returned {substitute!r} for bean '{name}', expected a class",
                name=name,
            )
        return substitute

    def _inject_properties(
        self,
        name: str,
        instance: Any,
        blueprint: Blueprint,
        properties: Mapping[str, Value],
    ) -> None:
        if not properties:
            return

        injectable = blueprint.injectable_names(instance)
        for prop_name, value in properties.items():
            if prop_name not in injectable:
                logger.debug(
                    "Bean '%s': %s has no injectable attribute '%s', skipped",
                    name, blueprint.cls.__name__, prop_name,
                )
                continue

            resolved = self._resolve_value(value)
            if resolved is None:
                continue

            try:
                blueprint.assign(instance, prop_name, resolved)
            except BeanWireError:
                raise
            except Exception as e:
                raise ConstructionError(
                    f"Cannot set {blueprint.cls.__name__}.{prop_name} on bean '{name}': {e}",
                    name=name,
                ) from e

    def _resolve_arguments(self, args: Sequence[Value]) -> List[Any]:
        return [self._resolve_value(arg) for arg in args]

    def _resolve_value(self, value: Value) -> Any:
        if value.is_collection:
            return self._resolve_collection(value.value)
        if value.is_ref:
            return self._resolve(value.value)
        return value.value

    def _resolve_element(self, item: Any) -> Any:
        if isinstance(item, Value):
            return self._resolve_value(item)
        if isinstance(item, COLLECTION_TYPES):
            return self._resolve_collection(item)
        return item

    def _resolve_collection(self, items: Any) -> Any:
        """Resolve every value nested in a list, tuple or dict.

        The original collection is returned as-is when nothing in it needed
        resolving. Otherwise a copy of the same type is returned, so
        subclasses such as ``defaultdict`` or ``OrderedDict`` keep their type
        and state.
        """
        if isinstance(items, dict):
            resolved: Dict[Any, Any] = {
                key: self._resolve_element(item) for key, item in items.items()
            }
            if all(resolved[key] is item for key, item in items.items()):
                return items
            rebuilt = copy.copy(items)
            # Same keys, so order is kept
            rebuilt.update(resolved)
            return rebuilt

        elements = [self._resolve_element(item) for item in items]
        if all(new is old for new, old in zip(elements, items)):
            return items
        if isinstance(items, tuple):
            if hasattr(items, "_fields"):
                return type(items)(*elements)  # namedtuple
            if type(items) is tuple:
                return tuple(elements)
            return type(items)(elements)
        rebuilt = copy.copy(items)
        rebuilt[:] = elements
        return rebuilt

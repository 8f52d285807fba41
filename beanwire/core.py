"""
BeanWireCore

This module provides the container instance applications work with.
Each BeanWireCore owns its definitions, its singleton cache and its
properties; there is no process-wide container. Create one at startup and
close it at shutdown (or use it as a context manager).

Example::

    app = BeanWireCore(modules=[my_module], properties={"autoInitBean": True})
    app.init_beans()
    repo = app.get("repo")

    # Use as context manager for automatic cleanup
    with BeanWireCore(modules=[module]) as app:
        repo = app.get("repo")
    # close() is called automatically
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from .container import DEFAULT_INIT_METHOD, BeanWireContainer
from .definition import Definition
from .exceptions import ConfigurationError, ContainerClosedError
from .module import BeanWireModule
from .settings import ContainerSettings

logger = logging.getLogger(__name__)


class BeanWireCore:
    """Isolated BeanWire container instance.

    Attributes:
        _container: Internal BeanWireContainer doing the resolution
        _properties: Raw properties mapping, as given to set_properties()
        _settings: Validated view of the properties the container reads
        _closed: Flag indicating if the container has been closed

    Example::

        module = BeanWireModule()
        with module:
            module.singleton("db", DbConn)
            module.prototype("repo", Repo, args=[ref("db")])

        app = BeanWireCore(modules=[module])
        repo1 = app.get("repo")
        repo2 = app.get("repo")
        assert repo1 is not repo2
        assert repo1.db is repo2.db
    """

    def __init__(
        self,
        modules: Optional[List[BeanWireModule]] = None,
        properties: Optional[Mapping[str, Any]] = None,
        init_method: Optional[str] = DEFAULT_INIT_METHOD,
    ):
        """Initialize an isolated container instance.

        Args:
            modules: Modules whose definitions are loaded, first one winning
                on name collisions (optional)
            properties: Container properties, see set_properties() (optional)
            init_method: Name of the method called on each new bean after
                injection; None disables the call
        """
        self._container = BeanWireContainer(init_method=init_method)
        self._properties: Dict[str, Any] = {}
        self._settings = ContainerSettings()
        self._closed = False

        if properties is not None:
            self.set_properties(properties)
        if modules:
            self.load_modules(modules)

    def _ensure_not_closed(self) -> None:
        """Raise ContainerClosedError when the container has been closed."""
        if self._closed:
            raise ContainerClosedError("This container is already closed")

    def get(self, name: str) -> Any:
        """Get a bean by name.

        Raises:
            ContainerClosedError: When the container has been closed
            DefinitionNotFoundError: When name is not registered
            CircularReferenceError: When the bean depends on itself
            ConstructionError: When the bean cannot be built
        """
        self._ensure_not_closed()
        return self._container.resolve(name)

    def has(self, name: str) -> bool:
        """Check whether a definition exists for name.

        ``has(name)`` being true does not mean ``get(name)`` cannot fail;
        it only rules out DefinitionNotFoundError for name itself.
        """
        self._ensure_not_closed()
        return self._container.has(name)

    def add_definitions(self, definitions: Mapping[str, Definition]) -> None:
        """Merge definitions into the container.

        Names that are already registered keep their existing definition.

        Raises:
            ContainerClosedError: When the container has been closed
            InvalidDefinitionError: When an entry is not a Definition
        """
        self._ensure_not_closed()
        self._container.add_definitions(definitions)

    def load_modules(self, modules: List[BeanWireModule]) -> None:
        """Merge the definitions of each module, in order."""
        self._ensure_not_closed()
        for module in modules:
            self._container.add_definitions(module.definitions)

    def get_definitions(self) -> Dict[str, Definition]:
        self._ensure_not_closed()
        return self._container.registry.all()

    def get_bean_names(self) -> List[str]:
        self._ensure_not_closed()
        return self._container.registry.names()

    def init_beans(self) -> None:
        """Build every registered bean now, if autoInitBean is set.

        Beans are resolved in registration order. Without the setting this
        method does nothing.
        """
        self._ensure_not_closed()
        if not self._settings.auto_init_bean:
            return

        names = self._container.registry.names()
        logger.debug("Initializing %d bean(s)", len(names))
        for name in names:
            self._container.resolve(name)

    def set_properties(self, properties: Mapping[str, Any]) -> None:
        """Replace the container properties.

        Only ``autoInitBean``, ``bootScan`` and ``beanScan`` are read by the
        container; every other key is stored untouched.

        Raises:
            ConfigurationError: When a known setting has an invalid value
        """
        self._ensure_not_closed()
        try:
            settings = ContainerSettings.model_validate(dict(properties))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid container properties: {e}") from e
        self._properties = dict(properties)
        self._settings = settings

    def get_properties(self) -> Dict[str, Any]:
        self._ensure_not_closed()
        return dict(self._properties)

    @property
    def settings(self) -> ContainerSettings:
        return self._settings

    def get_scan_namespaces(self, key: str) -> List[str]:
        """Namespace list stored under key, or [] when missing or not a list.

        Example::

            app.set_properties({"beanScan": ["app.services"]})
            app.get_scan_namespaces("beanScan")  # ["app.services"]
        """
        self._ensure_not_closed()
        namespaces = self._properties.get(key)
        if not isinstance(namespaces, (list, tuple)):
            return []
        return list(namespaces)

    def close(self) -> None:
        """Close the container and release its singletons.

        This method is idempotent - calling it multiple times has no effect.
        """
        if not self._closed:
            self._closed = True
            self._container.clear()

    @property
    def is_closed(self) -> bool:
        return self._closed

    def __enter__(self) -> 'BeanWireCore':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Exit context manager and close the container.

        Returns:
            False (exceptions are not suppressed)
        """
        self.close()
        return False

    def __getitem__(self, name: str) -> Any:
        """Support subscript syntax: app["repo"]."""
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

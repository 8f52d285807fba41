"""
BeanWire Exceptions

Custom exception hierarchy for the BeanWire container
"""


class BeanWireError(Exception):
    """
    Base exception for all BeanWire errors.

    All BeanWire-specific exceptions inherit from this class.
    You can catch this to handle any container error generically.

    Example:
        >>> try:
        ...     repo = app.get("repo")
        ... except BeanWireError as e:
        ...     print(f"Container error: {e}")
    """

    pass


class ContainerClosedError(BeanWireError):
    """
    Raised when attempting to use a closed container.

    This error occurs when calling any operation on a ``BeanWireCore``
    after ``close()`` has been called.

    Common causes:
        - Using a container after calling ``app.close()``
        - Using a container after exiting a ``with`` block

    Solution:
        Create a new ``BeanWireCore`` instead of reusing a closed one::

            with BeanWireCore(modules=[module]) as app:
                db = app.get("db")  # OK
            # Container is now closed

            app2 = BeanWireCore(modules=[module])
    """

    pass


class DefinitionNotFoundError(BeanWireError):
    """
    Raised when a requested bean name has no definition.

    This error occurs when calling ``get(name)`` for a name that was never
    registered, and also when a ``ref(name)`` used inside constructor
    arguments or properties points at an unregistered name. Both cases go
    through the same resolution path, so they surface identically.

    Common causes:
        - Typo in the bean name or in a ``ref()``
        - Module containing the definition not loaded
        - Alias pointing at a name that was never registered

    Solution:
        Register the definition before resolving it::

            module = BeanWireModule()
            with module:
                module.singleton("db", DbConn)

            app = BeanWireCore(modules=[module])
            db = app.get("db")

    Note:
        The error message lists the registered names to help spot typos.
    """

    def __init__(self, message: str, name: str = None):
        super().__init__(message)
        self.name = name


# Short name used throughout the container docs
NotFoundError = DefinitionNotFoundError


class ConstructionError(BeanWireError):
    """
    Raised when a bean cannot be built.

    This error wraps failures that happen while turning a resolved
    definition into an object: importing the class, calling its
    constructor, assigning an injected property or running its
    ``init()`` method. The original exception is chained as ``__cause__``.

    Common causes:
        - Wrong number of constructor arguments in the definition
        - Constructor raising on the given arguments
        - Import path in ``class_name`` that does not exist
        - Property setter rejecting the injected value

    Solution:
        Inspect ``error.__cause__`` and fix the definition::

            module.singleton("repo", Repo, args=[ref("db")])  # Repo(db)
    """

    def __init__(self, message: str, name: str = None):
        super().__init__(message)
        self.name = name


class CircularReferenceError(BeanWireError):
    """
    Raised when a circular reference is detected during resolution.

    This error occurs when bean ``a`` (directly or indirectly) needs bean
    ``a`` again before it is finished, through constructor arguments,
    properties or alias chains.

    Example of a circular reference::

        module.singleton("a", ServiceA, args=[ref("b")])
        module.singleton("b", ServiceB, args=[ref("a")])  # Circular!

    Solution:
        1. Refactor to remove the cycle
        2. Move one side of the dependency to a property resolved later
           by application code
        3. Extract the shared part into a third bean

    Attributes:
        chain: The bean names forming the cycle, first name repeated last
    """

    def __init__(self, chain):
        self.chain = list(chain)
        super().__init__(
            "Circular reference detected: " + " -> ".join(self.chain)
        )


class InvalidDefinitionError(BeanWireError):
    """
    Raised when a definition or value descriptor is malformed.

    Common causes:
        - A definition with neither a class nor an alias
        - ``ref()`` called with an empty or non-string name
        - A scope that is not a ``Scope`` member or its string value

    Solution:
        Every definition needs something to build or something to forward
        to::

            Definition(DbConn)
            Definition(alias="db")
    """

    pass


class DuplicateDefinitionError(BeanWireError):
    """
    Raised when the same name is registered twice in one module.

    A module maps names to definitions, so a second registration for a name
    inside the same module would silently hide the first. Across modules
    the container keeps the first definition instead (earlier batches win).

    Solution:
        Use one registration per name in a module::

            with module:
                module.singleton("db", DbConn)
                # module.singleton("db", OtherConn)  # Don't do this!
    """

    pass


class ConfigurationError(BeanWireError):
    """
    Raised when the container properties fail validation.

    ``set_properties()`` validates the known settings (``autoInitBean``,
    ``bootScan``, ``beanScan``). The pydantic ``ValidationError`` is chained
    as ``__cause__``.

    Solution:
        Pass values of the expected types::

            app.set_properties({"autoInitBean": True, "beanScan": ["app.beans"]})
    """

    pass

"""
ResolutionContext

This module provides the context management for bean resolution.
The ResolutionContext tracks:

- Bean names currently being resolved (for circular reference detection)
- The container performing the resolution

The context is stored in a ContextVar so that resolutions running in
different threads or tasks never see each other's state.
"""

from contextvars import ContextVar
from typing import List, Optional, TYPE_CHECKING

from .exceptions import CircularReferenceError

if TYPE_CHECKING:
    from .container import BeanWireContainer


class ResolutionContext:
    """Context for one top-level resolution and everything it pulls in.

    Attributes:
        container: The container performing the resolution
        resolving: Bean names on the current resolution path, outermost first

    Note:
        This class is used internally by BeanWireContainer.
        Users should not need to interact with it directly.

    Example (internal usage)::

        ctx = ResolutionContext(container)
        ctx.enter("repo")
        ctx.enter("db")
        ctx.enter("repo")  # Raises CircularReferenceError: repo -> db -> repo
    """

    def __init__(self, container: 'BeanWireContainer'):
        self.container = container
        self.resolving: List[str] = []

    def enter(self, name: str) -> None:
        """Push name onto the resolution path.

        Raises:
            CircularReferenceError: When name is already being resolved
        """
        if name in self.resolving:
            start = self.resolving.index(name)
            raise CircularReferenceError(self.resolving[start:] + [name])
        self.resolving.append(name)

    def leave(self, name: str) -> None:
        if self.resolving and self.resolving[-1] == name:
            self.resolving.pop()

    def is_resolving(self, name: str) -> bool:
        return name in self.resolving


# Resolution context of the current thread/task
_resolution_context: ContextVar[Optional[ResolutionContext]] = ContextVar(
    '_BEANWIRE_RESOLUTION_CONTEXT',
    default=None
)

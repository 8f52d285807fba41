"""
Interception Seam

The container can hand every class it is about to build to an interception
collaborator, which may answer with a substitute class to instantiate
instead. The collaborator is an ordinary bean registered under
``INTERCEPTOR_BEAN_NAME``.

The container only gathers, per method, the tags attached with
``@annotate(...)`` and passes them along. Deciding what those tags mean is
entirely up to the interceptor.

Example::

    class OrderService:
        @annotate("transactional", "logged")
        def place(self, order):
            ...

    collect_method_annotations(OrderService)
    # {"place": ("transactional", "logged")}
"""

from abc import ABC, abstractmethod
import inspect
from typing import Any, Callable, Dict, Hashable, Mapping, Optional, Tuple, Type, TypeVar

# Bean name the container looks up to find the interceptor
INTERCEPTOR_BEAN_NAME = "beanwire.interceptor"

# Function attribute holding the tags attached by @annotate
ANNOTATIONS_ATTR = "__bean_annotations__"

F = TypeVar('F', bound=Callable[..., Any])

MethodAnnotations = Mapping[str, Tuple[Hashable, ...]]


def annotate(*tags: Hashable) -> Callable[[F], F]:
    """Attach interception tags to a method.

    Tags accumulate when the decorator is stacked.
    """

    def decorator(func: F) -> F:
        existing = getattr(func, ANNOTATIONS_ATTR, ())
        setattr(func, ANNOTATIONS_ATTR, tuple(existing) + tags)
        return func

    return decorator


def collect_method_annotations(cls: Type) -> Dict[str, Tuple[Hashable, ...]]:
    """Collect the deduplicated tags of every method of cls.

    Every method is listed, including methods without tags (empty tuple).
    Duplicates keep their first position.
    """
    collected: Dict[str, Tuple[Hashable, ...]] = {}
    for name, member in inspect.getmembers(cls, callable):
        if isinstance(member, type):
            continue
        func = getattr(member, "__func__", member)
        tags = getattr(func, ANNOTATIONS_ATTR, ())
        collected[name] = tuple(dict.fromkeys(tags))
    return collected


class Interceptor(ABC):
    """Interception collaborator used by the container.

    Implementations decide which methods of a class should be intercepted
    and return the class to instantiate in its place.
    """

    @abstractmethod
    def substitute_class_for(
        self,
        bean_name: str,
        cls: Type,
        method_annotations: MethodAnnotations,
    ) -> Optional[Type]:
        """Return the class to build for bean_name.

        Args:
            bean_name: Name of the bean being resolved
            cls: The class the definition asks for
            method_annotations: Method name -> deduplicated tags

        Returns:
            A substitute class, or None / cls to keep the original
        """
        return NotImplemented

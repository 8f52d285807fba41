"""
AdviceInterceptor

A ready-made interception collaborator. Tags attached with ``@annotate``
are mapped to advice callables; a class whose methods carry registered tags
is replaced by a subclass that routes each tagged method through its advice
chain.

Advice receives an ``Invocation`` and decides whether, when and how to call
the original method via ``invocation.proceed()``::

    def timed(invocation):
        started = time.perf_counter()
        try:
            return invocation.proceed()
        finally:
            log.info("%s took %.3fs", invocation.method_name,
                     time.perf_counter() - started)

    module.singleton(INTERCEPTOR_BEAN_NAME, AdviceInterceptor,
                     args=[{"timed": timed}])
"""

import functools
import inspect
import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional, Sequence, Tuple, Type

from .interception import Interceptor, MethodAnnotations

logger = logging.getLogger(__name__)

Advice = Callable[['Invocation'], Any]

# Class attributes set on generated proxy classes
TARGET_CLASS_ATTR = "__intercepted_class__"
HOOKS_ATTR = "__intercept_hooks__"


class Invocation:
    """One call of an intercepted method, travelling down the advice chain.

    Attributes:
        target: The bean instance the method was called on
        method_name: Name of the intercepted method
        args: Positional arguments of the call
        kwargs: Keyword arguments of the call
    """

    def __init__(
        self,
        target: Any,
        method_name: str,
        method: Callable[..., Any],
        args: Tuple[Any, ...],
        kwargs: Dict[str, Any],
        advices: Sequence[Advice],
    ):
        self.target = target
        self.method_name = method_name
        self.args = args
        self.kwargs = kwargs
        self._method = method
        self._advices = advices
        self._position = 0

    def proceed(self) -> Any:
        """Run the next advice, or the original method after the last one."""
        if self._position < len(self._advices):
            advice = self._advices[self._position]
            self._position += 1
            try:
                return advice(self)
            finally:
                self._position -= 1
        return self._method(self.target, *self.args, **self.kwargs)

    def __repr__(self) -> str:
        return f"<Invocation {type(self.target).__name__}.{self.method_name}>"


def build_proxy_class(cls: Type, hooks: Mapping[str, Sequence[Advice]]) -> Type:
    """Create a subclass of cls whose hooked methods run through advice.

    Args:
        cls: The class to intercept
        hooks: Method name -> advice chain, outermost first. Static and
            class methods are left alone.

    Returns:
        The proxy subclass. It keeps the name, module and constructor of cls,
        so isinstance checks and injection behave as for cls.
    """
    frozen_hooks = MappingProxyType({name: tuple(chain) for name, chain in hooks.items()})
    namespace: Dict[str, Any] = {
        "__module__": cls.__module__,
        "__qualname__": cls.__qualname__,
        "__doc__": cls.__doc__,
        TARGET_CLASS_ATTR: cls,
        HOOKS_ATTR: frozen_hooks,
    }

    for method_name, chain in frozen_hooks.items():
        raw = inspect.getattr_static(cls, method_name, None)
        if raw is None or isinstance(raw, (staticmethod, classmethod)) or not callable(raw):
            logger.debug("Skipping %s.%s: not an instance method", cls.__name__, method_name)
            continue
        namespace[method_name] = _intercepted(method_name, raw, chain)

    return type(cls.__name__, (cls,), namespace)


def _intercepted(method_name: str, method: Callable[..., Any], chain: Tuple[Advice, ...]):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        return Invocation(self, method_name, method, args, kwargs, chain).proceed()

    return wrapper


class AdviceInterceptor(Interceptor):
    """Interceptor mapping method tags to advice.

    Proxy classes are built once per target class and reused until the
    advice table changes.

    Example::

        interceptor = AdviceInterceptor()
        interceptor.register("audited", audit_advice)

        module.singleton(INTERCEPTOR_BEAN_NAME, AdviceInterceptor,
                         args=[{"audited": audit_advice}])
    """

    def __init__(self, advices: Optional[Mapping[Hashable, Advice]] = None):
        self._advices: Dict[Hashable, List[Advice]] = {}
        self._proxies: Dict[Type, Type] = {}
        for tag, advice in (advices or {}).items():
            self.register(tag, advice)

    def register(self, tag: Hashable, advice: Advice) -> None:
        """Add advice for tag. Advice registered first runs outermost."""
        self._advices.setdefault(tag, []).append(advice)
        self._proxies.clear()

    def substitute_class_for(
        self,
        bean_name: str,
        cls: Type,
        method_annotations: MethodAnnotations,
    ) -> Optional[Type]:
        proxy = self._proxies.get(cls)
        if proxy is not None:
            return proxy

        hooks: Dict[str, List[Advice]] = {}
        for method_name, tags in method_annotations.items():
            chain = [advice for tag in tags for advice in self._advices.get(tag, ())]
            if chain:
                hooks[method_name] = chain

        if not hooks:
            return None

        proxy = build_proxy_class(cls, hooks)
        self._proxies[cls] = proxy
        logger.debug(
            "Bean '%s': intercepting %s on %s",
            bean_name, ", ".join(sorted(hooks)), cls.__name__,
        )
        return proxy

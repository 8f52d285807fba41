# Public API
from .core import BeanWireCore
from .container import BeanWireContainer
from .definition import Definition
from .exceptions import (
    BeanWireError,
    CircularReferenceError,
    ConfigurationError,
    ConstructionError,
    ContainerClosedError,
    DefinitionNotFoundError,
    DuplicateDefinitionError,
    InvalidDefinitionError,
    NotFoundError,
)
from .interception import INTERCEPTOR_BEAN_NAME, Interceptor, annotate, collect_method_annotations
from .module import BeanWireModule
from .proxy import AdviceInterceptor, Invocation
from .scope import Scope
from .settings import ContainerSettings
from .value import Value, ValueKind, literal, ref

__all__ = [
    "BeanWireCore",
    "BeanWireContainer",
    "BeanWireModule",
    "ContainerSettings",
    # Definitions
    "Definition",
    "Scope",
    "Value",
    "ValueKind",
    "literal",
    "ref",
    # Interception
    "INTERCEPTOR_BEAN_NAME",
    "Interceptor",
    "AdviceInterceptor",
    "Invocation",
    "annotate",
    "collect_method_annotations",
    # Exceptions
    "BeanWireError",
    "NotFoundError",
    "DefinitionNotFoundError",
    "ConstructionError",
    "CircularReferenceError",
    "InvalidDefinitionError",
    "DuplicateDefinitionError",
    "ConfigurationError",
    "ContainerClosedError",
]

__version__ = '0.1.0'

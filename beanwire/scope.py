"""
Scope Enum

Defines how many instances a definition produces
"""

from enum import Enum


class Scope(Enum):
    """Scope of a bean definition"""
    SINGLETON = "singleton"  # One shared instance per container
    PROTOTYPE = "prototype"  # New instance on every get()

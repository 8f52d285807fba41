"""
Test Fixtures

Common test classes used across test modules
"""

from typing import ClassVar, Optional


class DbConn:
    """Test connection without a constructor of its own"""
    pass


class Repo:
    """Test repository taking its connection positionally"""

    def __init__(self, db):
        self.db = db


class Cache:
    """Test cache configured through properties"""
    ttl: int = 0
    store: Optional[DbConn] = None


class Holder:
    """Keeps whatever it is given"""

    def __init__(self, items):
        self.items = items


class Settings:
    """Class with static, instance and private attributes"""
    shared: ClassVar[int] = 1
    level: int = 0

    def __init__(self):
        self.name = "default"
        self._secret = None

    def describe(self) -> str:
        return f"{self.name}:{self.level}"


class Endpoint:
    """Property with a converting setter and a read-only property"""

    def __init__(self):
        self._port = 0

    @property
    def port(self) -> int:
        return self._port

    @port.setter
    def port(self, value) -> None:
        self._port = int(value)

    @property
    def version(self) -> int:
        return 1


class Slotted:
    """Slots-only class"""
    __slots__ = ("name",)

"""
InstanceCache

Singleton instances already built by a container, keyed by bean name
"""

from typing import Any, Dict, Iterator, Optional


class InstanceCache:
    """Name -> singleton instance. No eviction; cleared only on close."""

    def __init__(self):
        self._instances: Dict[str, Any] = {}

    def get(self, name: str) -> Optional[Any]:
        return self._instances.get(name)

    def put(self, name: str, instance: Any) -> None:
        self._instances[name] = instance

    def clear(self) -> None:
        self._instances.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._instances

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._instances))

    def __len__(self) -> int:
        return len(self._instances)

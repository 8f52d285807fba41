"""
DefinitionRegistry

Owns the mapping from bean name to Definition. Batches of definitions
coming from several sources are merged append-only: a name that is already
registered keeps its first definition.
"""

import logging
from typing import Dict, Iterator, List, Mapping

from .definition import Definition
from .exceptions import DefinitionNotFoundError, InvalidDefinitionError

logger = logging.getLogger(__name__)


class DefinitionRegistry:
    """Name -> Definition mapping with earlier-wins merging."""

    def __init__(self):
        self._definitions: Dict[str, Definition] = {}

    def add_definitions(self, definitions: Mapping[str, Definition]) -> None:
        """Merge a batch of definitions.

        Names already present are not overwritten; the colliding entries of
        the new batch are dropped.

        Args:
            definitions: Mapping of bean name to Definition

        Raises:
            InvalidDefinitionError: When an entry is not a Definition
        """
        for name, definition in definitions.items():
            if not isinstance(definition, Definition):
                raise InvalidDefinitionError(
                    f"Bean '{name}' must be a Definition, got {type(definition).__name__}"
                )
            if name in self._definitions:
                logger.debug("Bean '%s' already defined, keeping the first definition", name)
                continue
            self._definitions[name] = definition

    def has(self, name: str) -> bool:
        return name in self._definitions

    def get(self, name: str) -> Definition:
        """Return the definition registered under name.

        Raises:
            DefinitionNotFoundError: When name is not registered
        """
        definition = self._definitions.get(name)
        if definition is None:
            registered = ", ".join(self._definitions) or "None"
            raise DefinitionNotFoundError(
                f"Bean '{name}' is not registered.\n"
                f"Registered beans: {registered}\n"
                f"Hint: module.singleton(\"{name}\", SomeClass)",
                name=name,
            )
        return definition

    def names(self) -> List[str]:
        return list(self._definitions)

    def all(self) -> Dict[str, Definition]:
        return dict(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._definitions))

    def __len__(self) -> int:
        return len(self._definitions)

"""Property registry.

PropertyRegistry is immutable once built: lookups and iteration never lock,
so worker threads read it freely. Duplicate ids or names are rejected at
construction with a RegistryError, which aborts the run before any property
executes.

Python 3.13+.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from b64verify.diagnostics.errors import FaultContext, RegistryError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from b64verify.properties.model import Property

__all__ = ["PropertyRegistry"]


def _register_context(property_id: int) -> FaultContext:
    return FaultContext(component="registry", operation="register", property_id=property_id)


class PropertyRegistry:
    """Immutable id-ordered catalog of properties.

    Example:
        >>> from b64verify.properties import default_registry
        >>> registry = default_registry()
        >>> registry.get(1).name
        'encode_decode_roundtrip'
        >>> [p.id for p in registry.select([3, 1])]
        [1, 3]
    """

    __slots__ = ("_by_id", "_by_name", "_ordered")

    def __init__(self, properties: Iterable[Property]) -> None:
        """Build the registry.

        Raises:
            RegistryError: If two properties share an id or a name
        """
        by_id: dict[int, Property] = {}
        by_name: dict[str, Property] = {}
        for prop in properties:
            if prop.id in by_id:
                msg = f"Duplicate property id {prop.id} ({by_id[prop.id].name!r} and {prop.name!r})"
                raise RegistryError(msg, _register_context(prop.id))
            if prop.name in by_name:
                msg = f"Duplicate property name {prop.name!r}"
                raise RegistryError(msg, _register_context(prop.id))
            by_id[prop.id] = prop
            by_name[prop.name] = prop
        self._ordered = tuple(by_id[key] for key in sorted(by_id))
        self._by_id = MappingProxyType(by_id)
        self._by_name = MappingProxyType(by_name)

    def get(self, property_id: int) -> Property:
        """Look up a property by id.

        Raises:
            RegistryError: If no property has that id
        """
        prop = self._by_id.get(property_id)
        if prop is None:
            msg = f"Unknown property id {property_id}"
            raise RegistryError(
                msg, FaultContext(component="registry", operation="get", property_id=property_id)
            )
        return prop

    def by_name(self, name: str) -> Property:
        """Look up a property by name.

        Raises:
            RegistryError: If no property has that name
        """
        prop = self._by_name.get(name)
        if prop is None:
            msg = f"Unknown property name {name!r}"
            raise RegistryError(
                msg, FaultContext(component="registry", operation="get", detail=name)
            )
        return prop

    def select(self, property_ids: Iterable[int] | None) -> tuple[Property, ...]:
        """Properties with the given ids in id order; None selects all.

        Raises:
            RegistryError: If an id is unknown
        """
        if property_ids is None:
            return self._ordered
        wanted = {self.get(property_id).id for property_id in property_ids}
        return tuple(prop for prop in self._ordered if prop.id in wanted)

    def __iter__(self) -> Iterator[Property]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, property_id: object) -> bool:
        return property_id in self._by_id

    def __repr__(self) -> str:
        return f"PropertyRegistry({len(self._ordered)} properties)"

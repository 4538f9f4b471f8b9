from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol, TypeVar

T = TypeVar("T")


class EntityRepository(Protocol[T]):
    """Uniform CRUD contract shared by every entity type.

    Lookups that miss return ``None`` / ``False``; services decide whether
    that is an error.
    """

    def get(self, entity_id: int) -> Optional[T]:
        raise NotImplementedError

    def list(self, *, for_update: bool = False, **filters: Any) -> List[T]:
        """Rows matching every ``column=value`` filter, ordered by id.

        ``for_update`` locks the matched rows for the enclosing transaction.
        """

        raise NotImplementedError

    def create(self, values: Mapping[str, Any]) -> T:
        raise NotImplementedError

    def update(self, entity_id: int, changes: Mapping[str, Any]) -> Optional[T]:
        raise NotImplementedError

    def delete(self, entity_id: int) -> bool:
        raise NotImplementedError

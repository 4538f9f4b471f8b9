from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import Any, Callable, ContextManager, Dict, FrozenSet, Generic, List, Mapping, Optional, Sequence, Set, TypeVar

from ..core.actor import Actor
from ..core.exceptions import AuthorizationError, NotFoundError
from .repository import EntityRepository
from .validators import Field, validate_fields

T = TypeVar("T")

Transaction = Callable[[], ContextManager[Any]]

logger = logging.getLogger(__name__)


class CrudService(Generic[T]):
    """Validated CRUD over one repository.

    Subclasses declare ``fields`` (the input contract) and may narrow access:

    - ``owner_field``: non-admin callers only see, create and edit records
      whose owner is themselves; omitted on create, it defaults to the caller.
    - ``admin_fields``: fields only an admin may set.

    ``_before_create`` / ``_before_update`` hooks add server-managed values and
    business rules.
    """

    label = "Record"
    fields: Sequence[Field] = ()
    owner_field: Optional[str] = None
    admin_fields: FrozenSet[str] = frozenset()

    def __init__(self, repo: EntityRepository[T], *, transaction: Optional[Transaction] = None):
        self._repo = repo
        self._transaction: Transaction = transaction or nullcontext

    def not_found(self) -> NotFoundError:
        return NotFoundError(f"{self.label} not found")

    def get(self, entity_id: int, *, actor: Optional[Actor] = None) -> T:
        entity = self._repo.get(int(entity_id))
        if entity is None:
            raise self.not_found()
        if self.owner_field and actor is not None and not actor.is_admin:
            if getattr(entity, self.owner_field) != actor.user_id:
                raise AuthorizationError(f"You can only view your own {self.label.lower()} records")
        return entity

    def list(self, *, actor: Optional[Actor] = None, **filters: Any) -> List[T]:
        criteria = {k: v for k, v in filters.items() if v is not None}
        if self.owner_field and actor is not None and not actor.is_admin:
            requested = criteria.get(self.owner_field)
            if requested is not None and requested != actor.user_id:
                raise AuthorizationError(f"You can only view your own {self.label.lower()} records")
            criteria[self.owner_field] = actor.user_id
        return self._repo.list(**criteria)

    def create(self, payload: Mapping[str, Any], *, actor: Optional[Actor] = None) -> T:
        payload = self._with_default_owner(payload, actor)
        values = validate_fields(self.fields, payload)
        supplied = {f.name for f in self.fields if f.key in payload}
        self._check_access(actor, supplied, owner=values.get(self.owner_field) if self.owner_field else None)
        values = self._before_create(values, actor)
        created = self._repo.create(values)
        logger.debug("%s #%s created", self.label, getattr(created, "id", "?"))
        return created

    def update(self, entity_id: int, payload: Mapping[str, Any], *, actor: Optional[Actor] = None) -> T:
        changes = validate_fields(self.fields, payload, partial=True)
        existing = self.get(entity_id)
        owner = getattr(existing, self.owner_field) if self.owner_field else None
        self._check_access(actor, set(changes), owner=owner)
        if self.owner_field and self.owner_field in changes:
            self._check_access(actor, set(changes), owner=changes[self.owner_field])
        changes = self._before_update(existing, changes, actor)
        updated = self._repo.update(int(entity_id), changes)
        if updated is None:
            raise self.not_found()
        return updated

    def delete(self, entity_id: int, *, actor: Optional[Actor] = None) -> None:
        if not self._repo.delete(int(entity_id)):
            raise self.not_found()
        logger.info("%s #%s deleted", self.label, entity_id)

    def _with_default_owner(self, payload: Mapping[str, Any], actor: Optional[Actor]) -> Mapping[str, Any]:
        if not self.owner_field or actor is None or actor.is_admin:
            return payload
        key = next(f.key for f in self.fields if f.name == self.owner_field)
        if isinstance(payload, Mapping) and key not in payload:
            return {**payload, key: actor.user_id}
        return payload

    def _check_access(self, actor: Optional[Actor], supplied: Set[str], *, owner: Any) -> None:
        if actor is None or actor.is_admin:
            return
        if self.owner_field and owner != actor.user_id:
            raise AuthorizationError(f"You can only manage your own {self.label.lower()} records")
        blocked = sorted(self.admin_fields & supplied)
        if blocked:
            raise AuthorizationError(f"Only admins may set: {', '.join(blocked)}")

    def _before_create(self, values: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        return values

    def _before_update(self, existing: T, changes: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        return changes

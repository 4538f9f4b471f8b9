from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..common.crud import CrudService
from ..common.validators import validate_fields
from ..core.actor import Actor
from ..core.exceptions import ConflictError
from .model import SYSTEM_CONFIG_FIELDS, SYSTEM_CONFIG_UPDATE_FIELDS, SystemConfig


class SystemConfigService(CrudService[SystemConfig]):
    """Key/value settings addressed by their key."""

    label = "Config"
    fields = SYSTEM_CONFIG_FIELDS

    def get_by_key(self, key: str) -> SystemConfig:
        matches = self._repo.list(key=key)
        if not matches:
            raise self.not_found()
        return matches[0]

    def _before_create(self, values: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        if self._repo.list(key=values["key"]):
            raise ConflictError("Config key already exists")
        return values

    def update_by_key(self, key: str, payload: Mapping[str, Any]) -> SystemConfig:
        changes = validate_fields(SYSTEM_CONFIG_UPDATE_FIELDS, payload, partial=True)
        entry = self.get_by_key(key)
        updated = self._repo.update(entry.id, changes)
        if updated is None:
            raise self.not_found()
        return updated

    def delete_by_key(self, key: str) -> None:
        self.delete(self.get_by_key(key).id)

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import Field


@dataclass(frozen=True)
class SystemConfig:
    id: int
    key: str
    value: str
    description: Optional[str] = None


SYSTEM_CONFIG_FIELDS = (
    Field("key", str, required=True),
    Field("value", str, required=True),
    Field("description"),
)

# The key addresses the entry, so it cannot be changed through an update.
SYSTEM_CONFIG_UPDATE_FIELDS = tuple(f for f in SYSTEM_CONFIG_FIELDS if f.name != "key")

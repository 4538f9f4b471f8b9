from __future__ import annotations

import dataclasses
from typing import Any, Mapping, TypeVar

T = TypeVar("T")


def merge_updates(entity: T, updates: Mapping[str, Any]) -> T:
    """Return ``entity`` with only the supplied fields overwritten.

    Absent fields keep their current value; an explicit ``None`` clears a
    field. The id is never overwritten.
    """

    known = {f.name for f in dataclasses.fields(entity)}
    unknown = set(updates) - known
    if unknown:
        raise KeyError(f"Unknown fields for {type(entity).__name__}: {sorted(unknown)}")
    changes = {k: v for k, v in updates.items() if k != "id"}
    return dataclasses.replace(entity, **changes)

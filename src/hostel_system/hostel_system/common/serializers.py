from __future__ import annotations

import dataclasses
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_wire(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def to_json(entity: Any, *, exclude: Iterable[str] = ()) -> Dict[str, Any]:
    """Dataclass entity -> camelCase JSON-ready dict."""
    skip = set(exclude)
    return {
        to_camel(f.name): to_wire(getattr(entity, f.name))
        for f in dataclasses.fields(entity)
        if f.name not in skip
    }

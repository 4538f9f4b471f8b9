from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..core.constants import MAX_INT_VALUE, MAX_MONEY_VALUE, MIN_INT_VALUE, MONEY_PLACES
from ..core.exceptions import FieldIssue, ValidationError
from .datetime_utils import parse_iso_date, parse_iso_datetime
from .serializers import to_camel

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_MONEY_QUANTUM = Decimal(1).scaleb(-MONEY_PLACES)
_MONEY_MAX = Decimal(MAX_MONEY_VALUE)
_INT_RE = re.compile(r"^[+-]?[0-9]+$")


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(
            f"{field_name} must be at least {min_len} characters",
            [FieldIssue(field_name, f"Must be at least {min_len} characters")],
        )
    return value


def require_object(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError("Invalid input", [FieldIssue("body", "Expected a JSON object")])
    return payload


def require_email(value: Any, field_name: str = "email") -> str:
    if not isinstance(value, str) or not _EMAIL_RE.match(value.strip()):
        raise ValidationError("Please enter a valid email", [FieldIssue(field_name, "Please enter a valid email")])
    return value.strip()


@dataclass(frozen=True)
class Field:
    """Input contract for one entity attribute.

    ``kind`` is one of str, int, bool, Decimal, date, datetime or an Enum
    subclass. Values arrive under the camelCase ``key`` and leave validation
    under the snake_case ``name``.
    """

    name: str
    kind: Any = str
    required: bool = False
    default: Any = None
    nullable: bool = True
    minimum: Optional[Any] = None
    maximum: Optional[Any] = None

    @property
    def key(self) -> str:
        return to_camel(self.name)


def _coerce(field: Field, value: Any) -> Any:
    kind = field.kind

    if isinstance(kind, type) and issubclass(kind, Enum):
        try:
            return kind(value)
        except ValueError:
            allowed = ", ".join(m.value for m in kind)
            raise ValueError(f"Must be one of: {allowed}")

    if kind is bool:
        if isinstance(value, bool):
            return value
        raise ValueError("Expected boolean")

    if kind is int:
        if isinstance(value, bool):
            raise ValueError("Expected integer")
        if isinstance(value, int):
            number = value
        elif isinstance(value, str) and _INT_RE.match(value.strip()):
            number = int(value.strip())
        else:
            raise ValueError("Expected integer")
        if field.minimum is not None and number < field.minimum:
            raise ValueError(f"Must be at least {field.minimum}")
        if number < MIN_INT_VALUE:
            raise ValueError(f"Must be at least {MIN_INT_VALUE}")
        maximum = MAX_INT_VALUE if field.maximum is None else field.maximum
        if number > maximum:
            raise ValueError(f"Must be at most {maximum}")
        return number

    if kind is Decimal:
        if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
            raise ValueError("Expected number")
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError("Expected number")
        if not amount.is_finite():
            raise ValueError("Expected number")
        if field.minimum is not None and amount < field.minimum:
            raise ValueError(f"Must be at least {field.minimum}")
        maximum = _MONEY_MAX if field.maximum is None else Decimal(field.maximum)
        if amount < -_MONEY_MAX:
            raise ValueError(f"Must be at least -{_MONEY_MAX}")
        if amount > maximum:
            raise ValueError(f"Must be at most {maximum}")
        try:
            return amount.quantize(_MONEY_QUANTUM)
        except InvalidOperation:
            raise ValueError("Expected number")

    if kind is date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return parse_iso_date(value)
            except ValueError:
                raise ValueError("Invalid date (YYYY-MM-DD)")
        raise ValueError("Invalid date (YYYY-MM-DD)")

    if kind is datetime:
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                return parse_iso_datetime(value)
            except ValueError:
                raise ValueError("Invalid timestamp")
        raise ValueError("Invalid timestamp")

    if not isinstance(value, str):
        raise ValueError("Expected string")
    if field.required and not value.strip():
        raise ValueError("Required")
    return value


def validate_fields(
    fields: Sequence[Field],
    payload: Mapping[str, Any],
    *,
    partial: bool = False,
) -> Dict[str, Any]:
    """Validate a camelCase payload against ``fields``.

    Full mode fills defaults for absent optional fields and reports missing
    required ones. Partial mode returns only the supplied fields. Unknown keys
    are ignored. Every problem is collected before raising.
    """

    require_object(payload)

    values: Dict[str, Any] = {}
    issues: List[FieldIssue] = []

    for field in fields:
        if field.key not in payload:
            if partial:
                continue
            if field.required and field.default is None:
                issues.append(FieldIssue(field.key, "Required"))
            else:
                values[field.name] = field.default
            continue

        raw = payload[field.key]
        if raw is None:
            if field.required or not field.nullable:
                issues.append(FieldIssue(field.key, "Required"))
            else:
                values[field.name] = None
            continue

        try:
            values[field.name] = _coerce(field, raw)
        except ValueError as e:
            issues.append(FieldIssue(field.key, str(e)))

    if issues:
        raise ValidationError("Invalid input", issues)
    return values
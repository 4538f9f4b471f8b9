from __future__ import annotations

import logging
from contextlib import nullcontext
from datetime import date
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Sequence, TypeVar

from ..core.exceptions import FieldIssue, ValidationError
from .crud import Transaction
from .repository import EntityRepository
from .validators import Field, validate_fields

T = TypeVar("T")

logger = logging.getLogger(__name__)

_DAY = Field("date", date, required=True)


class DailyRecordUpserter(Generic[T]):
    """Idempotent day-level save for records keyed by (subject, date).

    For every entry: an existing record for the same subject and day gets only
    the supplied fields merged in; otherwise a record is created with defaults
    for the rest. Invalid entries are skipped. Everything runs in one
    transaction, reading only that day's rows.
    """

    def __init__(
        self,
        repo: EntityRepository[T],
        *,
        fields: Sequence[Field],
        subject_field: str,
        transaction: Optional[Transaction] = None,
        subject_exists: Optional[Callable[[int], bool]] = None,
    ):
        self._repo = repo
        self._fields = fields
        self._subject = next(f for f in fields if f.name == subject_field)
        self._transaction: Transaction = transaction or nullcontext
        self._subject_exists = subject_exists

    def upsert(self, raw_day: Any, entries: Any, *, entries_key: str) -> List[T]:
        issues: List[FieldIssue] = []
        try:
            day = validate_fields((_DAY,), {"date": raw_day})["date"]
        except ValidationError as e:
            issues.extend(e.errors)
            day = None
        if not isinstance(entries, list):
            issues.append(FieldIssue(entries_key, "Expected a list"))
        if issues:
            raise ValidationError(f"Invalid input: date and {entries_key} array required", issues)

        results: List[T] = []
        skipped = 0
        with self._transaction():
            by_subject: Dict[Any, T] = {
                getattr(r, self._subject.name): r for r in self._repo.list(date=day, for_update=True)
            }
            for entry in entries:
                parsed = self._parse(entry, day)
                if parsed is None:
                    skipped += 1
                    continue
                values, supplied = parsed
                subject = values[self._subject.name]

                existing = by_subject.get(subject)
                if existing is None:
                    record = self._repo.create(values)
                else:
                    changes = {k: values[k] for k in supplied if k not in (self._subject.name, "date")}
                    record = self._repo.update(getattr(existing, "id"), changes) if changes else existing
                    if record is None:
                        skipped += 1
                        continue

                by_subject[subject] = record
                results.append(record)

        logger.info("bulk save for %s: %d saved, %d skipped", day, len(results), skipped)
        return results

    def _parse(self, entry: Any, day: date) -> Optional[tuple]:
        if not isinstance(entry, Mapping):
            return None
        # null means "leave as is", same as an absent key
        payload = {k: v for k, v in entry.items() if v is not None}
        payload["date"] = day
        try:
            values = validate_fields(self._fields, payload)
        except ValidationError:
            return None

        subject = values[self._subject.name]
        if self._subject_exists is not None and not self._subject_exists(subject):
            return None

        supplied = {f.name for f in self._fields if f.key in payload}
        return values, supplied

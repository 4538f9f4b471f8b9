from __future__ import annotations

import dataclasses
import logging
import typing
from enum import Enum
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

import mysql.connector

from ..core.exceptions import ConflictError
from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall, fetchone

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _unwrap_optional(hint: Any) -> Any:
    if typing.get_origin(hint) is typing.Union:
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


class MySQLTableRepository(Generic[T]):
    """Uniform CRUD over one table whose columns mirror the entity's fields.

    Subclasses set ``table`` and ``entity``. Column names equal the dataclass
    field names and are always backquoted (``key``, ``date`` and ``type`` are
    MySQL keywords).
    """

    table: str = ""
    entity: Type[T]

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._columns = [f.name for f in dataclasses.fields(self.entity)]
        hints = typing.get_type_hints(self.entity)
        self._kinds = {name: _unwrap_optional(hints[name]) for name in self._columns}

    def _select_sql(self) -> str:
        cols = ", ".join(f"`{c}`" for c in self._columns)
        return f"SELECT {cols} FROM `{self.table}`"

    def _to_entity(self, row: Mapping[str, Any]) -> T:
        values: Dict[str, Any] = {}
        for name in self._columns:
            value = row.get(name)
            kind = self._kinds[name]
            if value is not None:
                if kind is bool:
                    value = bool(value)
                elif isinstance(kind, type) and issubclass(kind, Enum):
                    value = kind(value)
            values[name] = value
        return self.entity(**values)

    def _check_columns(self, names: Sequence[str]) -> None:
        unknown = [n for n in names if n not in self._columns]
        if unknown:
            raise ValueError(f"Unknown columns for {self.table}: {unknown}")

    @staticmethod
    def _param(value: Any) -> Any:
        return value.value if isinstance(value, Enum) else value

    def get(self, entity_id: int) -> Optional[T]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{self._select_sql()} WHERE `id`=%s", (int(entity_id),))
            row = fetchone(cur)
            return self._to_entity(row) if row else None

    def list(self, *, for_update: bool = False, **filters: Any) -> List[T]:
        self._check_columns(list(filters))
        clauses: list[str] = []
        params: list[object] = []
        for name, value in filters.items():
            if value is None:
                clauses.append(f"`{name}` IS NULL")
            else:
                clauses.append(f"`{name}`=%s")
                params.append(self._param(value))

        sql = self._select_sql()
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY `id` ASC"
        if for_update:
            sql += " FOR UPDATE"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [self._to_entity(r) for r in fetchall(cur)]

    def create(self, values: Mapping[str, Any]) -> T:
        names = [n for n in values if n != "id"]
        self._check_columns(names)
        cols = ", ".join(f"`{n}`" for n in names)
        marks = ",".join(["%s"] * len(names))
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO `{self.table}`({cols}) VALUES({marks})",
                    tuple(self._param(values[n]) for n in names),
                )
                new_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            logger.info("insert into %s rejected: %s", self.table, e)
            raise ConflictError("Record conflicts with an existing one")

        created = self.get(new_id)
        if created is None:
            raise RuntimeError(f"Inserted row {self.table}#{new_id} not readable")
        return created

    def update(self, entity_id: int, changes: Mapping[str, Any]) -> Optional[T]:
        names = [n for n in changes if n != "id"]
        self._check_columns(names)
        if names:
            assignments = ", ".join(f"`{n}`=%s" for n in names)
            params = [self._param(changes[n]) for n in names]
            params.append(int(entity_id))
            try:
                with db_cursor(self._conn_factory) as (_, cur):
                    cur.execute(f"UPDATE `{self.table}` SET {assignments} WHERE `id`=%s", tuple(params))
            except mysql.connector.IntegrityError as e:
                logger.info("update of %s#%s rejected: %s", self.table, entity_id, e)
                raise ConflictError("Record conflicts with an existing one")
        # rowcount is 0 for no-op updates in MySQL, so re-read to tell "missing" apart.
        return self.get(entity_id)

    def delete(self, entity_id: int) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"DELETE FROM `{self.table}` WHERE `id`=%s", (int(entity_id),))
                return cur.rowcount > 0
        except mysql.connector.IntegrityError as e:
            logger.info("delete of %s#%s rejected: %s", self.table, entity_id, e)
            raise ConflictError("Record is still referenced by other records")

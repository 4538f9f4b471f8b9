from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "hostel_db")),
    )


def _connect(target: DBTarget):
    return mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        database=target.database,
        use_pure=True,
    )


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql(cur, sql: str) -> None:
    for stmt in _iter_sql_statements(sql):
        cur.execute(stmt)


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    target = _as_target(db_config)
    ensure_database_exists(db_config)

    schema_path = Path(schema_path)
    sql = _strip_create_db_and_use(schema_path.read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()


DEMO_USERS = (
    ("Admin User", "admin@hms.com", "admin123", "ADMIN", "2024-01-01"),
    ("John Student", "student@hms.com", "student123", "STUDENT", "2024-06-01"),
)


def ensure_demo_data(db_config: dict) -> None:
    """Demo accounts plus Block A / Room 101. Safe to run repeatedly."""
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        for name, email, password, role, joined in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT `id` FROM users WHERE `email`=%s", (email,))
            if cur.fetchone():
                cur.execute(
                    "UPDATE users SET `name`=%s, `password_hash`=%s, `role`=%s, `is_active`=1 WHERE `email`=%s",
                    (name, password_hash, role, email),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (`name`, `email`, `password_hash`, `role`, `joining_date`)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (name, email, password_hash, role, joined),
                )

        cur.execute("SELECT `id` FROM blocks WHERE `name`=%s", ("Block A",))
        row = cur.fetchone()
        if row:
            block_id = int(row["id"])
        else:
            cur.execute("INSERT INTO blocks (`name`, `floor_count`) VALUES (%s, %s)", ("Block A", 3))
            block_id = int(cur.lastrowid)

        cur.execute("SELECT `id` FROM rooms WHERE `block_id`=%s AND `room_number`=%s", (block_id, "101"))
        if not cur.fetchone():
            cur.execute(
                """
                INSERT INTO rooms (`block_id`, `room_number`, `capacity`, `type`, `floor`, `monthly_rent`)
                VALUES (%s, %s, %s, %s, %s, %s)
                """,
                (block_id, "101", 4, "AC", 1, "5000.00"),
            )

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()

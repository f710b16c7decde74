from __future__ import annotations

import logging
import re
import uuid
from datetime import date
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        connection_timeout=target.timeout,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
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
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)

    sql = _strip_comments(_strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8")))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied to %s@%s/%s", target.user, target.host, target.database)


def ensure_demo_users(db_config: dict) -> None:
    """Create (or reset) one admin and one member account for local use."""

    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)

        def upsert_identity(*, name: str, email: str, password: str, position: str, department: str) -> str:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT id FROM identities WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                identity_id = str(existing["id"])
                cur.execute("UPDATE identities SET password_hash=%s WHERE id=%s", (password_hash, identity_id))
                cur.execute(
                    "UPDATE profiles SET name=%s, position=%s, department=%s WHERE id=%s",
                    (name, position, department, identity_id),
                )
                return identity_id

            identity_id = str(uuid.uuid4())
            cur.execute(
                "INSERT INTO identities (id, email, password_hash) VALUES (%s, %s, %s)",
                (identity_id, email, password_hash),
            )
            cur.execute(
                """
                INSERT INTO profiles (id, name, email, position, department, hire_date)
                VALUES (%s, %s, %s, %s, %s, %s)
                """,
                (identity_id, name, email, position, department, date.today()),
            )
            return identity_id

        admin_id = upsert_identity(
            name="Admin Demo",
            email="admin@peopleops.local",
            password="admin123",
            position="HR Manager",
            department="People",
        )
        upsert_identity(
            name="Member Demo",
            email="member@peopleops.local",
            password="member123",
            position="Engineer",
            department="Engineering",
        )
        cur.execute("INSERT IGNORE INTO user_roles (user_id, role) VALUES (%s, 'admin')", (admin_id,))

        conn.commit()
    finally:
        conn.close()
    logger.info("Demo accounts ready on %s/%s", target.host, target.database)


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()

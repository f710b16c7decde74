from __future__ import annotations

import uuid
from datetime import date
from typing import Optional

from ..common.datetime_utils import now_local
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Identity
from .repository import IdentityRepository


class MySQLIdentityRepository(IdentityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, email, password_hash, created_at FROM identities WHERE email=%s",
                (email,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Identity(
                identity_id=str(r["id"]),
                email=r["email"],
                password_hash=r["password_hash"],
                created_at=r["created_at"],
            )

    def create_with_profile(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        position: str,
        department: str,
        hire_date: date,
    ) -> Identity:
        identity_id = str(uuid.uuid4())
        created_at = now_local()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO identities (id, email, password_hash, created_at) VALUES (%s, %s, %s, %s)",
                (identity_id, email, password_hash, created_at),
            )
            cur.execute(
                """
                INSERT INTO profiles (id, name, email, position, department, hire_date)
                VALUES (%s, %s, %s, %s, %s, %s)
                """,
                (identity_id, name, email, position, department, hire_date),
            )
        return Identity(identity_id=identity_id, email=email, password_hash=password_hash, created_at=created_at)

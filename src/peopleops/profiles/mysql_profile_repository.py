from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchcount, fetchone
from .model import EmployeeRow, Profile
from .repository import ProfileRepository


def _to_profile(r: dict) -> Profile:
    return Profile(
        profile_id=str(r["id"]),
        name=r["name"],
        email=r["email"],
        position=r.get("position"),
        department=r.get("department"),
        hire_date=r.get("hire_date"),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, email, position, department, hire_date FROM profiles WHERE id=%s",
                (profile_id,),
            )
            r = fetchone(cur)
            return _to_profile(r) if r else None

    def list_with_roles(self) -> Sequence[EmployeeRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.id, p.name, p.email, p.position, p.department, p.hire_date,
                       MAX(r.role = 'admin') AS is_admin
                FROM profiles p
                LEFT JOIN user_roles r ON r.user_id = p.id
                GROUP BY p.id, p.name, p.email, p.position, p.department, p.hire_date
                ORDER BY p.name
                """
            )
            return [
                EmployeeRow(
                    profile=_to_profile(r),
                    role=Role.ADMIN if r.get("is_admin") else Role.MEMBER,
                )
                for r in fetchall(cur)
            ]

    def update_details(
        self,
        profile_id: str,
        *,
        name: str,
        position: Optional[str],
        department: Optional[str],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE profiles SET name=%s, position=%s, department=%s WHERE id=%s",
                (name, position, department, profile_id),
            )

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM profiles")
            return fetchcount(cur)

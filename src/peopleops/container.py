from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .activity.mysql_activity_repository import MySQLActivityRepository
from .activity.repository import ActivityRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.mysql_identity_repository import MySQLIdentityRepository
from .auth.repository import IdentityRepository
from .auth.service import AuthService
from .core.constants import DEFAULT_ROLE_CACHE_SECONDS
from .core.enums import AttendanceMode
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.repository import ProfileRepository
from .profiles.service import DirectoryService
from .roles.mysql_role_repository import MySQLRoleRepository
from .roles.repository import RoleRepository
from .roles.resolver import RoleResolver


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    identities_repo: IdentityRepository
    profiles_repo: ProfileRepository
    roles_repo: RoleRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    activity_repo: ActivityRepository

    role_resolver: RoleResolver
    auth_service: AuthService
    directory_service: DirectoryService
    attendance_service: AttendanceService
    leave_service: LeaveService
    dashboard_service: DashboardService


def assemble_container(
    *,
    identities: IdentityRepository,
    profiles: ProfileRepository,
    roles: RoleRepository,
    attendance: AttendanceRepository,
    leaves: LeaveRepository,
    activity: ActivityRepository,
    conn: Optional[DatabaseConnection] = None,
    attendance_mode: AttendanceMode | str = AttendanceMode.SELF_SERVICE,
    role_cache_seconds: int = DEFAULT_ROLE_CACHE_SECONDS,
) -> Container:
    """Wire services over any set of repositories (MySQL or in-memory)."""

    role_resolver = RoleResolver(roles, ttl_seconds=role_cache_seconds)

    return Container(
        conn=conn,
        identities_repo=identities,
        profiles_repo=profiles,
        roles_repo=roles,
        attendance_repo=attendance,
        leaves_repo=leaves,
        activity_repo=activity,
        role_resolver=role_resolver,
        auth_service=AuthService(identities, profiles),
        directory_service=DirectoryService(profiles, role_resolver),
        attendance_service=AttendanceService(
            attendance,
            activity,
            role_resolver,
            mode=AttendanceMode(attendance_mode),
        ),
        leave_service=LeaveService(leaves, activity, role_resolver),
        dashboard_service=DashboardService(profiles, leaves, attendance, activity),
    )


def build_container(
    *,
    db_config: dict,
    attendance_mode: AttendanceMode | str = AttendanceMode.SELF_SERVICE,
    role_cache_seconds: int = DEFAULT_ROLE_CACHE_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble_container(
        conn=conn,
        identities=MySQLIdentityRepository(conn),
        profiles=MySQLProfileRepository(conn),
        roles=MySQLRoleRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        leaves=MySQLLeaveRepository(conn),
        activity=MySQLActivityRepository(conn),
        attendance_mode=attendance_mode,
        role_cache_seconds=role_cache_seconds,
    )

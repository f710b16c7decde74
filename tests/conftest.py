from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from types import SimpleNamespace
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from peopleops.activity.model import ActivityEntry
from peopleops.attendance.model import AttendanceRecord, AttendanceRow
from peopleops.auth.model import Identity
from peopleops.container import assemble_container
from peopleops.core.enums import AttendanceMode, LeaveStatus, Role
from peopleops.core.exceptions import DuplicateError
from peopleops.leaves.model import LeaveRequest, LeaveRow
from peopleops.main import create_app
from peopleops.profiles.model import EmployeeRow, Profile

ADMIN_ID = "00000000-0000-0000-0000-00000000000a"
MEMBER_ID = "00000000-0000-0000-0000-00000000000b"
OTHER_ID = "00000000-0000-0000-0000-00000000000c"


@dataclass
class InMemoryRoles:
    admins: set[str] = field(default_factory=set)
    lookups: int = 0

    def has_role(self, user_id: str, role: str) -> bool:
        self.lookups += 1
        return role == Role.ADMIN.value and user_id in self.admins


@dataclass
class InMemoryProfiles:
    roles: InMemoryRoles
    profiles: dict[str, Profile] = field(default_factory=dict)

    def add(self, profile: Profile) -> Profile:
        self.profiles[profile.profile_id] = profile
        return profile

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        return self.profiles.get(profile_id)

    def list_with_roles(self):
        rows = [
            EmployeeRow(profile=p, role=Role.ADMIN if p.profile_id in self.roles.admins else Role.MEMBER)
            for p in self.profiles.values()
        ]
        return sorted(rows, key=lambda r: r.profile.name)

    def update_details(self, profile_id: str, *, name, position, department) -> None:
        p = self.profiles[profile_id]
        self.profiles[profile_id] = Profile(
            profile_id=p.profile_id,
            name=name,
            email=p.email,
            position=position,
            department=department,
            hire_date=p.hire_date,
        )

    def count(self) -> int:
        return len(self.profiles)


@dataclass
class InMemoryIdentities:
    profiles: InMemoryProfiles
    by_email: dict[str, Identity] = field(default_factory=dict)

    def get_by_email(self, email: str) -> Optional[Identity]:
        return self.by_email.get(email)

    def create_with_profile(self, *, email, password_hash, name, position, department, hire_date) -> Identity:
        if email in self.by_email:
            raise DuplicateError("Duplicate entry for key 'uq_identities_email'")
        identity = Identity(
            identity_id=f"id-{len(self.by_email) + 1}",
            email=email,
            password_hash=password_hash,
            created_at=datetime(2024, 6, 1, 9, 0),
        )
        self.by_email[email] = identity
        self.profiles.add(
            Profile(
                profile_id=identity.identity_id,
                name=name,
                email=email,
                position=position,
                department=department,
                hire_date=hire_date,
            )
        )
        return identity


@dataclass
class InMemoryAttendance:
    profiles: InMemoryProfiles
    rows: list[AttendanceRecord] = field(default_factory=list)

    def _find(self, user_id: str, work_date: date) -> Optional[int]:
        for i, r in enumerate(self.rows):
            if r.user_id == user_id and r.work_date == work_date:
                return i
        return None

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        i = self._find(user_id, work_date)
        return self.rows[i] if i is not None else None

    def create_checkin(self, *, user_id: str, work_date: date, check_in: datetime) -> AttendanceRecord:
        # mirrors the unique key on (user_id, date)
        if self._find(user_id, work_date) is not None:
            raise DuplicateError("Duplicate entry for key 'uq_attendance_user_date'")
        rec = AttendanceRecord(
            attendance_id=len(self.rows) + 1,
            user_id=user_id,
            work_date=work_date,
            check_in=check_in,
            check_out=None,
        )
        self.rows.append(rec)
        return rec

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> bool:
        for i, r in enumerate(self.rows):
            if r.attendance_id == attendance_id and r.check_out is None:
                self.rows[i] = AttendanceRecord(
                    attendance_id=r.attendance_id,
                    user_id=r.user_id,
                    work_date=r.work_date,
                    check_in=r.check_in,
                    check_out=check_out,
                )
                return True
        return False

    def list_recent(self, *, limit: int, user_id: Optional[str] = None):
        items = [r for r in self.rows if user_id is None or r.user_id == user_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return [
            AttendanceRow(record=r, employee_name=getattr(self.profiles.get_by_id(r.user_id), "name", None))
            for r in items[:limit]
        ]

    def count_for_date(self, work_date: date) -> int:
        return sum(1 for r in self.rows if r.work_date == work_date)


@dataclass
class InMemoryLeaves:
    profiles: InMemoryProfiles
    requests: dict[int, LeaveRequest] = field(default_factory=dict)

    def create(self, *, user_id, leave_type, start_date, end_date, reason, created_at) -> LeaveRequest:
        req = LeaveRequest(
            request_id=len(self.requests) + 1,
            user_id=user_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=created_at,
        )
        self.requests[req.request_id] = req
        return req

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        return self.requests.get(int(request_id))

    def decide(self, *, request_id, status, reviewed_by, reviewed_at, review_notes=None) -> bool:
        req = self.requests.get(int(request_id))
        if not req or req.status != LeaveStatus.PENDING:
            return False
        self.requests[req.request_id] = LeaveRequest(
            request_id=req.request_id,
            user_id=req.user_id,
            leave_type=req.leave_type,
            start_date=req.start_date,
            end_date=req.end_date,
            reason=req.reason,
            status=status,
            created_at=req.created_at,
            reviewed_by=reviewed_by,
            reviewed_at=reviewed_at,
            review_notes=review_notes,
        )
        return True

    def list_requests(self, *, user_id: Optional[str] = None):
        items = [r for r in self.requests.values() if user_id is None or r.user_id == user_id]
        items.sort(key=lambda r: r.created_at, reverse=True)
        return [
            LeaveRow(request=r, employee_name=getattr(self.profiles.get_by_id(r.user_id), "name", None))
            for r in items
        ]

    def count_by_status(self, status: LeaveStatus) -> int:
        return sum(1 for r in self.requests.values() if r.status == status)


@dataclass
class InMemoryActivity:
    profiles: InMemoryProfiles
    entries: list[ActivityEntry] = field(default_factory=list)

    def append(self, *, user_id, action, description, created_at) -> int:
        entry_id = len(self.entries) + 1
        self.entries.append(
            ActivityEntry(
                entry_id=entry_id,
                user_id=user_id,
                action=action.value,
                description=description,
                created_at=created_at,
                actor_name=getattr(self.profiles.get_by_id(user_id), "name", None),
            )
        )
        return entry_id

    def list_recent(self, limit: int):
        return sorted(self.entries, key=lambda e: (e.created_at, e.entry_id), reverse=True)[:limit]


def _profile(profile_id: str, name: str, email: str, position: str, department: str) -> Profile:
    return Profile(
        profile_id=profile_id,
        name=name,
        email=email,
        position=position,
        department=department,
        hire_date=date(2023, 1, 9),
    )


@pytest.fixture
def repos():
    roles = InMemoryRoles(admins={ADMIN_ID})
    profiles = InMemoryProfiles(roles)
    profiles.add(_profile(ADMIN_ID, "Alice Admin", "alice@example.com", "HR Manager", "People"))
    profiles.add(_profile(MEMBER_ID, "Bob Member", "bob@example.com", "Engineer", "Engineering"))
    profiles.add(_profile(OTHER_ID, "Carol Other", "carol@example.com", "Designer", "Product"))

    identities = InMemoryIdentities(profiles)
    identities.by_email["bob@example.com"] = Identity(
        identity_id=MEMBER_ID,
        email="bob@example.com",
        password_hash=generate_password_hash("secret123"),
        created_at=datetime(2023, 1, 9, 9, 0),
    )

    return SimpleNamespace(
        roles=roles,
        profiles=profiles,
        identities=identities,
        attendance=InMemoryAttendance(profiles),
        leaves=InMemoryLeaves(profiles),
        activity=InMemoryActivity(profiles),
    )


@pytest.fixture
def make_container(repos):
    def _make(mode: AttendanceMode = AttendanceMode.SELF_SERVICE, role_cache_seconds: int = 0):
        return assemble_container(
            identities=repos.identities,
            profiles=repos.profiles,
            roles=repos.roles,
            attendance=repos.attendance,
            leaves=repos.leaves,
            activity=repos.activity,
            attendance_mode=mode,
            role_cache_seconds=role_cache_seconds,
        )

    return _make


@pytest.fixture
def container(make_container):
    return make_container()


@pytest.fixture
def app(container):
    return create_app(container, settings_module="peopleops.settings.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(identity_id: str, name: str = "Test User", email: str = "test@example.com"):
        with client.session_transaction() as sess:
            sess["identity_id"] = identity_id
            sess["name"] = name
            sess["email"] = email

    return _login


@pytest.fixture
def ids():
    return SimpleNamespace(admin=ADMIN_ID, member=MEMBER_ID, other=OTHER_ID)

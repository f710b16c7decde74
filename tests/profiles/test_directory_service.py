from __future__ import annotations

from datetime import date

import pytest

from peopleops.core.enums import Role
from peopleops.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_directory_is_sorted_by_name_with_roles(container):
    rows = container.directory_service.list_employees()

    assert [r.profile.name for r in rows] == ["Alice Admin", "Bob Member", "Carol Other"]
    assert [r.role for r in rows] == [Role.ADMIN, Role.MEMBER, Role.MEMBER]


@pytest.mark.parametrize(
    "term, expected",
    [
        ("bob", ["Bob Member"]),
        ("ENGINEER", ["Bob Member"]),
        ("product", ["Carol Other"]),
        ("example.com", ["Alice Admin", "Bob Member", "Carol Other"]),
        ("zzz", []),
        ("  ", ["Alice Admin", "Bob Member", "Carol Other"]),
    ],
)
def test_directory_search(container, term, expected):
    rows = container.directory_service.list_employees(search=term)
    assert [r.profile.name for r in rows] == expected


def test_owner_updates_own_profile_but_not_email_or_hire_date(container, repos, ids):
    updated = container.directory_service.update_profile(
        ids.member,
        name=" Robert Member ",
        position=" Senior Engineer ",
        department="Platform",
    )

    assert updated.name == "Robert Member"
    assert updated.position == "Senior Engineer"
    assert updated.department == "Platform"
    assert updated.email == "bob@example.com"
    assert updated.hire_date == date(2023, 1, 9)
    assert repos.profiles.get_by_id(ids.member) == updated


def test_admin_can_update_someone_else(container, ids):
    updated = container.directory_service.update_profile(
        ids.admin, ids.other, name="Carol O.", position="Lead Designer", department="Product"
    )
    assert updated.profile_id == ids.other


def test_member_cannot_update_someone_else(container, repos, ids):
    with pytest.raises(AuthorizationError):
        container.directory_service.update_profile(
            ids.member, ids.other, name="Hacked", position=None, department=None
        )
    assert repos.profiles.get_by_id(ids.other).name == "Carol Other"


def test_name_is_required(container, ids):
    with pytest.raises(ValidationError):
        container.directory_service.update_profile(ids.member, name="", position=None, department=None)


def test_missing_profile(container):
    with pytest.raises(NotFoundError):
        container.directory_service.get_profile("missing")


@pytest.mark.parametrize(
    "position, department",
    [
        ("", "Platform"),
        ("Engineer", "   "),
        ("X", "Platform"),
        ("Engineer", "P"),
    ],
)
def test_position_and_department_are_required_on_update(container, repos, ids, position, department):
    before = repos.profiles.get_by_id(ids.member)
    with pytest.raises(ValidationError):
        container.directory_service.update_profile(
            ids.member, name="Bob Member", position=position, department=department
        )
    assert repos.profiles.get_by_id(ids.member) == before

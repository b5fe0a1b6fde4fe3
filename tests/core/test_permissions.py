"""
tests/core/test_permissions.py

Unit tests for the role and permission map.
"""

import pytest

from app.core.permissions import (
    ASSIGNABLE_ROLES,
    can_change_role_to,
    can_create_role,
    has_higher_or_equal_role,
    has_permission,
    is_admin,
    is_moderator,
)
from app.database.enums import UserRole


@pytest.mark.parametrize(
    "role, permission, allowed",
    [
        (UserRole.SUPER_ADMIN, "manage_global_settings", True),
        (UserRole.SUPERVISOR, "manage_global_settings", False),
        (UserRole.CONTENT_EDITOR, "approve_profiles", True),
        (UserRole.CONTENT_EDITOR, "delete_profiles", False),
        (UserRole.SUPPORT_AGENT, "handle_complaints", True),
        (UserRole.CONSULTANT, "view_users", False),
        (UserRole.USER, "view_profiles", False),
        (UserRole.SUPER_ADMIN, "no_such_permission", False),
    ],
)
def test_has_permission(role: UserRole, permission: str, allowed: bool) -> None:
    assert has_permission(role, permission) is allowed


def test_nobody_can_create_super_admin() -> None:
    assert not any(UserRole.SUPER_ADMIN in roles for roles in ASSIGNABLE_ROLES.values())
    assert not has_permission(UserRole.SUPER_ADMIN, "create_super_admin")


def test_supervisor_assignable_roles() -> None:
    assert can_create_role(UserRole.SUPERVISOR, UserRole.CONTENT_EDITOR)
    assert not can_create_role(UserRole.SUPERVISOR, UserRole.SUPERVISOR)
    assert not can_change_role_to(UserRole.CONTENT_EDITOR, UserRole.USER)


def test_role_hierarchy() -> None:
    assert has_higher_or_equal_role(UserRole.SUPERVISOR, UserRole.CONTENT_EDITOR)
    assert has_higher_or_equal_role(UserRole.CONSULTANT, UserRole.CONTENT_EDITOR)
    assert not has_higher_or_equal_role(UserRole.SUPPORT_AGENT, UserRole.CONSULTANT)


def test_role_groups() -> None:
    assert is_admin(UserRole.SUPPORT_AGENT)
    assert not is_admin(UserRole.USER)
    assert is_moderator(UserRole.CONSULTANT)
    assert not is_moderator(UserRole.SUPPORT_AGENT)

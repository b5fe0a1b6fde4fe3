"""
app/core/permissions.py

Role-Based Permission Model

Maps named back-office permissions to the roles allowed to use them, and
defines which roles may create or promote accounts into which other roles.
"""

from typing import Final

from app.database.enums import UserRole

SA = UserRole.SUPER_ADMIN
SV = UserRole.SUPERVISOR
CE = UserRole.CONTENT_EDITOR
CO = UserRole.CONSULTANT
SUP = UserRole.SUPPORT_AGENT

# ---------------------------------------------------
# Permission Map
# ---------------------------------------------------
PERMISSIONS: Final[dict[str, frozenset[UserRole]]] = {
    # Users
    "view_users": frozenset({SA, SV, CE, SUP}),
    "view_user_details": frozenset({SA, SV}),
    "ban_users": frozenset({SA, SV}),
    "suspend_users": frozenset({SA, SV}),
    "reactivate_users": frozenset({SA, SV}),
    "delete_users": frozenset({SA}),
    "verify_email_manually": frozenset({SA, SV}),
    "verify_phone_manually": frozenset({SA, SV}),
    # Profiles
    "view_profiles": frozenset({SA, SV, CE}),
    "approve_profiles": frozenset({SA, SV, CE}),
    "reject_profiles": frozenset({SA, SV, CE}),
    "edit_profiles": frozenset({SA, SV, CE}),
    "delete_profiles": frozenset({SA, SV}),
    # Admin management
    "create_super_admin": frozenset(),
    "create_supervisor": frozenset({SA}),
    "create_content_editor": frozenset({SA, SV}),
    "create_consultant": frozenset({SA, SV}),
    "create_support_agent": frozenset({SA, SV}),
    "manage_admins": frozenset({SA}),
    "view_admin_list": frozenset({SA, SV}),
    # Role changes
    "change_role_to_super_admin": frozenset(),
    "change_role_to_supervisor": frozenset({SA}),
    "change_role_to_content_editor": frozenset({SA, SV}),
    "change_role_to_consultant": frozenset({SA, SV}),
    "change_role_to_support_agent": frozenset({SA, SV}),
    "change_role_to_user": frozenset({SA, SV}),
    # Subscriptions
    "upgrade_subscriptions": frozenset({SA, SV}),
    "downgrade_subscriptions": frozenset({SA, SV}),
    "manage_subscriptions": frozenset({SA, SV}),
    # System
    "manage_global_settings": frozenset({SA}),
    "view_system_analytics": frozenset({SA}),
    "view_team_analytics": frozenset({SA, SV}),
    # Support
    "handle_complaints": frozenset({SA, SV, SUP}),
    "mark_refunds": frozenset({SA, SV, SUP}),
    "view_support_tickets": frozenset({SA, SV, SUP}),
    # Wallets
    "adjust_credits": frozenset({SA, SV}),
    "view_wallet_details": frozenset({SA, SV}),
    "freeze_wallet": frozenset({SA, SV}),
    "unfreeze_wallet": frozenset({SA, SV}),
}

ROLE_HIERARCHY: Final[dict[UserRole, int]] = {
    UserRole.USER: 0,
    UserRole.SUPPORT_AGENT: 1,
    UserRole.CONTENT_EDITOR: 2,
    UserRole.CONSULTANT: 2,
    UserRole.SUPERVISOR: 3,
    UserRole.SUPER_ADMIN: 4,
}

# Roles each creator may assign; SUPER_ADMIN is never assignable
ASSIGNABLE_ROLES: Final[dict[UserRole, frozenset[UserRole]]] = {
    SA: frozenset({UserRole.USER, SUP, CE, CO, SV}),
    SV: frozenset({UserRole.USER, CE, CO, SUP}),
}

ADMIN_ROLES: Final[tuple[UserRole, ...]] = (SA, SV, CE, CO, SUP)
MODERATOR_ROLES: Final[tuple[UserRole, ...]] = (SA, SV, CE, CO)
SUPERVISOR_ROLES: Final[tuple[UserRole, ...]] = (SA, SV)


# ---------------------------------------------------
# Predicates
# ---------------------------------------------------
def has_permission(role: UserRole, permission: str) -> bool:
    """Unknown permission names are denied."""
    return role in PERMISSIONS.get(permission, frozenset())


def is_admin(role: UserRole) -> bool:
    return role != UserRole.USER


def is_moderator(role: UserRole) -> bool:
    return role in MODERATOR_ROLES


def is_supervisor(role: UserRole) -> bool:
    return role in SUPERVISOR_ROLES


def is_super_admin(role: UserRole) -> bool:
    return role == UserRole.SUPER_ADMIN


def has_higher_or_equal_role(role: UserRole, other: UserRole) -> bool:
    return ROLE_HIERARCHY[role] >= ROLE_HIERARCHY[other]


def can_create_role(creator: UserRole, target: UserRole) -> bool:
    return target in ASSIGNABLE_ROLES.get(creator, frozenset())


def can_change_role_to(changer: UserRole, target: UserRole) -> bool:
    return can_create_role(changer, target)

"""
app/admin/services.py

Admin Service Layer
Provides back-office account management:
- Member and staff listings with headline stats
- Account edit, deletion and creation within the role hierarchy
- Support-relayed phone verification queue
- Sidebar badge counts
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.admin import schemas
from app.core.permissions import can_change_role_to, can_create_role
from app.core.security import generate_strong_password, get_password_hash
from app.core.validators import normalize_email, normalize_phone
from app.database.enums import (
    ModerationStatus,
    SubscriptionTier,
    TopUpStatus,
    UserRole,
    UserStatus,
)
from app.database.models import PhoneVerification, User
from app.profile.models import Profile
from app.wallet.models import FundingWallet, RedeemWallet, TopUpRequest, Transaction
from app.wallet.services import create_default_wallets

logger = logging.getLogger(__name__)

MIN_ADMIN_RESET_PASSWORD_LENGTH = 6


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def count_users(db: AsyncSession, *filters) -> int:
    return (await db.execute(select(func.count(User.id)).where(*filters))).scalar_one()


def _search_filter(search: str | None, *columns):
    if not search:
        return None
    pattern = f"%{search.strip()}%"
    return or_(*(column.ilike(pattern) for column in columns))


# ---------------------------------------------------
# UserService
# ---------------------------------------------------
class UserService:
    """Account management for supervisors and super admins."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, *filters) -> int:
        return await count_users(self.db, *filters)

    async def _get_user_or_404(self, user_id: UUID) -> User:
        user = await self.db.get(User, user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    async def _ensure_unique(self, email: str, phone: str | None, exclude_id: UUID | None = None) -> None:
        email_filters = [User.email == email]
        if exclude_id:
            email_filters.append(User.id != exclude_id)
        if (await self.db.execute(select(User.id).where(*email_filters))).first():
            detail = "Email already in use by another user" if exclude_id else "User with this email already exists"
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
        if phone:
            phone_filters = [User.phone == phone]
            if exclude_id:
                phone_filters.append(User.id != exclude_id)
            if (await self.db.execute(select(User.id).where(*phone_filters))).first():
                detail = "Phone number already in use by another user" if exclude_id else "User with this phone number already exists"
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

    # --- Listings ---
    async def list_regular_users(self) -> schemas.RegularUsersResponse:
        now = _now()
        start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        start_of_month = start_of_today.replace(day=1)
        is_member = User.role == UserRole.USER

        stats = schemas.RegularUserStats(
            total_users=await self._count(is_member),
            active_today=await self._count(is_member, User.last_login_at >= start_of_today),
            premium_users=await self._count(is_member, User.subscription_tier != SubscriptionTier.FREE),
            new_this_month=await self._count(is_member, User.created_at >= start_of_month),
        )

        profile_count = (
            select(func.count(Profile.id)).where(Profile.user_id == User.id).scalar_subquery()
        )
        rows = await self.db.execute(
            select(User, profile_count.label("profile_count"))
            .where(is_member)
            .order_by(User.created_at.desc())
        )
        users = [
            schemas.RegularUserRow(
                id=user.id,
                name=user.name,
                email=user.email,
                phone=user.phone,
                subscription_tier=user.subscription_tier,
                status=user.status,
                profile_count=count,
                created_at=user.created_at,
                last_login_at=user.last_login_at,
            )
            for user, count in rows.all()
        ]
        return schemas.RegularUsersResponse(stats=stats, users=users)

    async def list_admin_users(self) -> schemas.AdminUsersResponse:
        counts = dict(
            (
                await self.db.execute(
                    select(User.role, func.count(User.id))
                    .where(User.role != UserRole.USER)
                    .group_by(User.role)
                )
            ).all()
        )
        admins = (
            (
                await self.db.execute(
                    select(User)
                    .where(User.role != UserRole.USER)
                    .order_by(User.role, User.created_at.desc())
                )
            )
            .scalars()
            .all()
        )
        return schemas.AdminUsersResponse(
            stats=schemas.AdminRoleStats(
                super_admin_count=counts.get(UserRole.SUPER_ADMIN, 0),
                supervisor_count=counts.get(UserRole.SUPERVISOR, 0),
                content_editor_count=counts.get(UserRole.CONTENT_EDITOR, 0),
                consultant_count=counts.get(UserRole.CONSULTANT, 0),
                support_agent_count=counts.get(UserRole.SUPPORT_AGENT, 0),
            ),
            admins=[schemas.AdminUserRow.model_validate(a) for a in admins],
        )

    async def get_user(self, user_id: UUID) -> schemas.AdminUserDetail:
        return schemas.AdminUserDetail.model_validate(await self._get_user_or_404(user_id))

    # --- Edit ---
    async def update_user(
        self, actor: User, user_id: UUID, data: schemas.AdminUserUpdate
    ) -> schemas.AdminUserUpdateResponse:
        """
        Applies an admin edit. Role changes are limited by the actor's role and
        only a super admin may edit another super admin.
        """
        user = await self._get_user_or_404(user_id)

        if user.role == UserRole.SUPER_ADMIN and actor.role != UserRole.SUPER_ADMIN:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only a super admin can edit a super admin account",
            )
        if data.role != user.role and not can_change_role_to(actor.role, data.role):
            logger.warning(f"[RBAC] {actor.id} ({actor.role.value}) tried to set role {data.role.value} on {user.id}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"You cannot assign the {data.role.value} role",
            )

        email = normalize_email(data.email)
        phone = normalize_phone(data.phone)
        await self._ensure_unique(email, phone, exclude_id=user.id)

        password_changed = False
        if data.new_password and data.new_password.strip():
            if len(data.new_password) < MIN_ADMIN_RESET_PASSWORD_LENGTH:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Password must be at least 6 characters long",
                )
            user.hashed_password = get_password_hash(data.new_password)
            password_changed = True

        user.name = data.name
        user.email = email
        user.phone = phone
        user.role = data.role
        user.status = data.status
        if data.email_verified is not None:
            user.email_verified = data.email_verified
        if data.phone_verified is not None:
            user.phone_verified = data.phone_verified
        if data.is_verified is not None:
            user.is_verified = data.is_verified

        await self.db.commit()
        await self.db.refresh(user)
        logger.info(f"[ADMIN] {actor.id} updated user {user.id} (password_changed={password_changed})")
        return schemas.AdminUserUpdateResponse(
            detail="User updated successfully (password changed)" if password_changed else "User updated successfully",
            user=schemas.AdminUserDetail.model_validate(user),
        )

    # --- Delete ---
    async def delete_user(self, actor: User, user_id: UUID) -> str:
        if actor.id == user_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account"
            )
        user = await self._get_user_or_404(user_id)
        if user.role == UserRole.SUPER_ADMIN and actor.role != UserRole.SUPER_ADMIN:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only a super admin can delete a super admin account",
            )
        label = f"{user.name} ({user.email})"

        await self.db.execute(delete(TopUpRequest).where(TopUpRequest.user_id == user_id))
        await self.db.execute(delete(PhoneVerification).where(PhoneVerification.user_id == user_id))
        await self.db.execute(delete(Profile).where(Profile.user_id == user_id))
        await self.db.execute(delete(Transaction).where(Transaction.user_id == user_id))
        await self.db.execute(delete(RedeemWallet).where(RedeemWallet.user_id == user_id))
        await self.db.execute(delete(FundingWallet).where(FundingWallet.user_id == user_id))
        await self.db.delete(user)
        await self.db.commit()
        logger.info(f"[ADMIN] {actor.id} deleted user {user_id}")
        return f"User {label} deleted successfully"

    # --- Create ---
    async def _create_account(
        self,
        *,
        email: str,
        name: str,
        role: UserRole,
        password: str | None,
        phone: str | None = None,
        status_: UserStatus = UserStatus.ACTIVE,
        tier: SubscriptionTier = SubscriptionTier.FREE,
        email_verified: bool = False,
        phone_verified: bool = False,
        is_verified: bool = False,
    ) -> tuple[User, str | None]:
        email = normalize_email(email)
        phone = normalize_phone(phone)
        await self._ensure_unique(email, phone)

        generated = None if password else generate_strong_password()
        user = User(
            email=email,
            name=name,
            phone=phone,
            hashed_password=get_password_hash(password or generated),
            role=role,
            status=status_,
            subscription_tier=tier,
            email_verified=email_verified,
            phone_verified=phone_verified,
            is_verified=is_verified,
        )
        self.db.add(user)
        await self.db.flush()
        create_default_wallets(self.db, user.id)
        await self.db.commit()
        await self.db.refresh(user)
        return user, generated

    async def create_regular_user(
        self, actor: User, data: schemas.CreateRegularUserRequest
    ) -> schemas.CreateUserResponse:
        if not can_create_role(actor.role, UserRole.USER):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to create user accounts",
            )
        user, generated = await self._create_account(
            email=data.email,
            name=data.name,
            role=UserRole.USER,
            password=data.password,
            phone=data.phone,
            status_=data.status,
            tier=data.subscription_tier,
            email_verified=data.email_verified,
            phone_verified=data.phone_verified,
            is_verified=data.is_verified,
        )
        logger.info(f"[ADMIN] {actor.id} created member account {user.id}")
        return schemas.CreateUserResponse(
            detail="User account created successfully",
            user=schemas.AdminUserDetail.model_validate(user),
            generated_password=generated,
        )

    async def create_admin_user(
        self, actor: User, data: schemas.CreateAdminRequest
    ) -> schemas.CreateUserResponse:
        if not can_create_role(actor.role, data.role):
            logger.warning(f"[RBAC] {actor.id} ({actor.role.value}) tried to create {data.role.value}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"You cannot create a {data.role.value} account",
            )
        user, generated = await self._create_account(
            email=data.email,
            name=data.name,
            role=data.role,
            password=data.password,
            email_verified=True,
            is_verified=True,
        )
        logger.info(f"[ADMIN] {actor.id} created {data.role.value} account {user.id}")
        return schemas.CreateUserResponse(
            detail=f"{data.role.value} account created successfully",
            user=schemas.AdminUserDetail.model_validate(user),
            generated_password=generated,
        )


# ---------------------------------------------------
# AdminService
# ---------------------------------------------------
class AdminService:
    """Phone verification queue and sidebar counters."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _pending_filters(self) -> list:
        return [PhoneVerification.verified.is_(False), PhoneVerification.expires_at > _now()]

    async def count_pending_verifications(self) -> int:
        return (
            await self.db.execute(select(func.count(PhoneVerification.id)).where(*self._pending_filters()))
        ).scalar_one()

    async def list_verification_queue(
        self, tab: schemas.VerificationTab, search: str | None, skip: int, limit: int
    ) -> tuple[list[schemas.VerificationQueueItem], int]:
        if tab == "pending":
            filters = self._pending_filters()
            matched = _search_filter(search, User.name, User.email, PhoneVerification.phone)
            if matched is not None:
                filters.append(matched)
            base = select(PhoneVerification, User).join(User, PhoneVerification.user_id == User.id).where(*filters)
            total = (
                await self.db.execute(
                    select(func.count(PhoneVerification.id))
                    .join(User, PhoneVerification.user_id == User.id)
                    .where(*filters)
                )
            ).scalar_one()
            rows = await self.db.execute(
                base.order_by(PhoneVerification.created_at.desc()).offset(skip).limit(limit)
            )
            items = [
                schemas.VerificationQueueItem(
                    user_id=user.id,
                    name=user.name,
                    email=user.email,
                    phone=user.phone,
                    phone_verified=user.phone_verified,
                    created_at=user.created_at,
                    last_login_at=user.last_login_at,
                    verification_id=request.id,
                    requested_phone=request.phone,
                    requested_at=request.created_at,
                    expires_at=request.expires_at,
                    attempts=request.attempts,
                )
                for request, user in rows.all()
            ]
            return items, total

        filters = [User.phone.is_not(None), User.role == UserRole.USER]
        if tab == "unverified":
            filters.append(User.phone_verified.is_(False))
        matched = _search_filter(search, User.name, User.email, User.phone)
        if matched is not None:
            filters.append(matched)

        total = await count_users(self.db, *filters)
        users = (
            (
                await self.db.execute(
                    select(User).where(*filters).order_by(User.created_at.desc()).offset(skip).limit(limit)
                )
            )
            .scalars()
            .all()
        )
        items = [
            schemas.VerificationQueueItem(
                user_id=user.id,
                name=user.name,
                email=user.email,
                phone=user.phone,
                phone_verified=user.phone_verified,
                created_at=user.created_at,
                last_login_at=user.last_login_at,
            )
            for user in users
        ]
        return items, total

    async def process_verification(
        self, actor: User, data: schemas.VerificationActionRequest
    ) -> str:
        """Verifies a phone (by request or directly by user) or rejects a request."""
        if data.action == "verify":
            if data.verification_id:
                verification = await self.db.get(PhoneVerification, data.verification_id)
                if not verification:
                    raise HTTPException(
                        status_code=status.HTTP_404_NOT_FOUND, detail="Verification request not found"
                    )
                user = await self.db.get(User, verification.user_id)
                verification.verified = True
                verification.verified_at = _now()
                verification.verified_by_id = actor.id
                user.phone_verified = True
                await self.db.commit()
                logger.info(f"[PHONE] {actor.id} verified request {verification.id} for {user.id}")
                return f"Phone number verified for {user.name or user.email}"

            if data.user_id:
                user = await self.db.get(User, data.user_id)
                if not user:
                    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
                user.phone_verified = True
                await self.db.commit()
                logger.info(f"[PHONE] {actor.id} verified phone of {user.id} directly")
                return f"Phone number verified for {user.name or user.email}"

            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="verification_id or user_id required"
            )

        if not data.verification_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="verification_id required")
        verification = await self.db.get(PhoneVerification, data.verification_id)
        if not verification:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Verification request not found")
        verification.expires_at = _now()
        await self.db.commit()
        logger.info(f"[PHONE] {actor.id} rejected request {verification.id}")
        return "Verification request rejected"

    async def get_sidebar_counts(self) -> schemas.SidebarCounts:
        pending_profiles = (
            await self.db.execute(
                select(func.count(Profile.id)).where(Profile.moderation_status == ModerationStatus.PENDING)
            )
        ).scalar_one()
        pending_topups = (
            await self.db.execute(
                select(func.count(TopUpRequest.id)).where(TopUpRequest.status == TopUpStatus.PENDING)
            )
        ).scalar_one()
        return schemas.SidebarCounts(
            regular_users=await count_users(self.db, User.role == UserRole.USER),
            admin_users=await count_users(self.db, User.role != UserRole.USER),
            pending_profiles=pending_profiles,
            pending_topups=pending_topups,
            pending_phone_verifications=await self.count_pending_verifications(),
        )

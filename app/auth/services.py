"""
auth/services.py

Handles authentication-related business logic:
- Email OTP issue and verification
- Registration after OTP verification, with free-tier wallets
- Login (JSON / OAuth2 form) with Redis brute-force protection
- Logout via JWT blacklist
- Password reset and change
- Account settings and phone verification through support staff
"""

import asyncio
import logging
import random
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from jose import JWTError
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.schemas import (
    AccountResponse,
    AccountUpdateRequest,
    AuthSuccessResponse,
    AuthUserResponse,
    ChangePasswordRequest,
    LoginRequest,
    PhoneVerificationStatus,
    RegisteredUser,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    SendOtpRequest,
    SendOtpResponse,
    VerifyOtpRequest,
)
from app.core import cache
from app.core.blacklist import blacklist_token
from app.core.config import settings
from app.core.email import (
    send_otp_email,
    send_phone_update_email,
    send_phone_verification_request_email,
    send_welcome_email,
)
from app.core.schemas import MessageResponse
from app.core.security import generate_otp, get_password_hash, verify_password
from app.core.tokens import create_access_token, decode_access_token, seconds_until_expiry
from app.core.validators import is_valid_otp, normalize_email, normalize_phone
from app.database.enums import (
    NotificationPriority,
    NotificationType,
    SubscriptionTier,
    UserRole,
    UserStatus,
    VerificationType,
)
from app.database.models import EmailVerification, PhoneVerification, User
from app.notifications.services import SUPPORT_ROLES, notify_admins
from app.wallet.models import RedeemWallet
from app.wallet.services import create_default_wallets

logger = logging.getLogger(__name__)


# ------------------------------------------------
# Brute-Force Protection Settings (Redis Keys and Thresholds)
# ------------------------------------------------
FAILED_LOGIN_PREFIX = "failed_logins:ip:"
IP_PENALTY_PREFIX = "ip_penalty:"

MAX_FAILED_ATTEMPTS = settings.MAX_FAILED_ATTEMPTS
IP_PENALTY_DURATION = settings.IP_PENALTY_DURATION
FAILED_ATTEMPTS_WINDOW = settings.FAILED_ATTEMPTS_WINDOW

BLOCKED_STATUSES = (UserStatus.SUSPENDED, UserStatus.BANNED)


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ------------------------------------------------
# Pure Helpers
# ------------------------------------------------
def phone_cooldown(
    phone_changed_at: datetime | None, now: datetime | None = None
) -> tuple[int, datetime | None]:
    """
    Days left before the phone number may change again, and when that window ends.
    Returns (0, None) once the cooldown has passed or the phone was never changed.
    """
    if phone_changed_at is None:
        return 0, None
    now = now or _now()
    ends_at = phone_changed_at + timedelta(days=settings.PHONE_CHANGE_COOLDOWN_DAYS)
    if ends_at <= now:
        return 0, None
    remaining = ends_at - now
    days = remaining.days + (1 if remaining.seconds or remaining.microseconds else 0)
    return days, ends_at


async def _get_user_by_email(db: AsyncSession, email: str) -> User | None:
    return (await db.execute(select(User).where(User.email == email))).scalar_one_or_none()


# ------------------------------------------------
# Email OTP
# ------------------------------------------------
async def send_otp(payload: SendOtpRequest, db: AsyncSession) -> SendOtpResponse:
    """Issues a fresh code, enforcing the resend cooldown."""
    email = normalize_email(payload.email)
    otp_type = payload.type

    if otp_type == VerificationType.REGISTRATION:
        existing = await _get_user_by_email(db, email)
        if existing and existing.email_verified:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="An account with this email already exists. Please login instead.",
            )

    latest = (
        await db.execute(
            select(EmailVerification)
            .where(
                EmailVerification.email == email,
                EmailVerification.type == otp_type,
                EmailVerification.verified.is_(False),
            )
            .order_by(EmailVerification.created_at.desc())
            .limit(1)
        )
    ).scalar_one_or_none()
    if latest is not None:
        elapsed = (_now() - latest.created_at).total_seconds()
        if elapsed < settings.OTP_RESEND_COOLDOWN_SECONDS:
            wait = int(settings.OTP_RESEND_COOLDOWN_SECONDS - elapsed) + 1
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=f"Please wait {wait} seconds before requesting a new code",
            )

    await db.execute(
        delete(EmailVerification).where(
            EmailVerification.email == email,
            EmailVerification.type == otp_type,
            EmailVerification.verified.is_(False),
        )
    )
    code = generate_otp()
    verification = EmailVerification(
        email=email,
        code=code,
        type=otp_type,
        expires_at=_now() + timedelta(minutes=settings.OTP_EXPIRE_MINUTES),
        attempts=0,
        verified=False,
    )
    db.add(verification)
    await db.commit()

    try:
        await send_otp_email(email, code, otp_type)
    except Exception as e:
        logger.error(f"[OTP] Failed to send {otp_type.value} code to {email}: {e}")
        await db.delete(verification)
        await db.commit()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send verification email. Please try again.",
        )

    logger.info(f"[OTP] {otp_type.value} code issued for {email}")
    return SendOtpResponse(
        detail="Verification code sent to your email",
        expires_in=settings.OTP_EXPIRE_MINUTES * 60,
    )


async def verify_otp(payload: VerifyOtpRequest, db: AsyncSession) -> MessageResponse:
    """Checks a code; failures count against the attempt limit."""
    email = normalize_email(payload.email)
    verification = (
        await db.execute(
            select(EmailVerification)
            .where(
                EmailVerification.email == email,
                EmailVerification.type == payload.type,
                EmailVerification.verified.is_(False),
            )
            .order_by(EmailVerification.created_at.desc())
            .limit(1)
        )
    ).scalar_one_or_none()

    if verification is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No verification code found. Please request a new one.",
        )
    if verification.expires_at < _now():
        await db.delete(verification)
        await db.commit()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Verification code has expired. Please request a new one.",
        )
    if verification.attempts >= settings.OTP_MAX_ATTEMPTS:
        await db.delete(verification)
        await db.commit()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Too many failed attempts. Please request a new code.",
        )
    if verification.code != payload.code:
        verification.attempts += 1
        await db.commit()
        remaining = settings.OTP_MAX_ATTEMPTS - verification.attempts
        logger.warning(f"[OTP] Wrong code for {email} ({remaining} attempts left)")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid verification code. {remaining} attempt(s) remaining.",
        )

    verification.verified = True
    if payload.type == VerificationType.EMAIL_CHANGE:
        user = await _get_user_by_email(db, email)
        if user:
            user.email_verified = True
    await db.commit()
    logger.info(f"[OTP] {payload.type.value} code verified for {email}")
    return MessageResponse(detail="Email verified successfully")


async def _has_recent_verified_code(
    db: AsyncSession, email: str, otp_type: VerificationType
) -> bool:
    window_start = _now() - timedelta(minutes=settings.REGISTRATION_OTP_WINDOW_MINUTES)
    row = (
        await db.execute(
            select(EmailVerification.id).where(
                EmailVerification.email == email,
                EmailVerification.type == otp_type,
                EmailVerification.verified.is_(True),
                EmailVerification.created_at >= window_start,
            )
        )
    ).first()
    return row is not None


# ------------------------------------------------
# Registration
# ------------------------------------------------
async def register_user(payload: RegisterRequest, db: AsyncSession) -> RegisterResponse:
    """Creates (or completes) a member account once the email is verified."""
    email = normalize_email(payload.email)

    existing = await _get_user_by_email(db, email)
    if existing and existing.email_verified:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An account with this email already exists",
        )

    if not await _has_recent_verified_code(db, email, VerificationType.REGISTRATION):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Please verify your email first"
        )

    hashed_password = get_password_hash(payload.password)
    if existing:
        user = existing
        user.hashed_password = hashed_password
        user.name = payload.name or user.name
        user.email_verified = True
        user.is_verified = True
        has_wallet = (
            await db.execute(select(RedeemWallet.id).where(RedeemWallet.user_id == user.id))
        ).first()
        if not has_wallet:
            create_default_wallets(db, user.id)
    else:
        user = User(
            email=email,
            name=payload.name,
            hashed_password=hashed_password,
            role=UserRole.USER,
            status=UserStatus.ACTIVE,
            subscription_tier=SubscriptionTier.FREE,
            email_verified=True,
            is_verified=True,
        )
        db.add(user)
        await db.flush()
        create_default_wallets(db, user.id)

    await db.execute(
        delete(EmailVerification).where(
            EmailVerification.email == email,
            EmailVerification.type == VerificationType.REGISTRATION,
        )
    )
    await db.commit()
    await db.refresh(user)
    logger.info(f"[AUTH] New account registered: {user.email} (ID: {user.id})")

    try:
        await send_welcome_email(user.email, user.name)
    except Exception as e:
        logger.error(f"[AUTH] Failed to send welcome email to {user.email}: {e}")

    return RegisterResponse(
        detail="Account created successfully",
        user=RegisteredUser(id=user.id, email=user.email),
    )


# ------------------------------------------------
# Login
# ------------------------------------------------
async def _authenticate_user(
    email: str, password: str, db: AsyncSession, client_ip: str
) -> User:
    """Validates credentials with per-IP throttling."""
    redis_client = cache.redis_client
    penalty_key = f"{IP_PENALTY_PREFIX}{client_ip}"
    if redis_client and await redis_client.exists(penalty_key):
        logger.warning(f"[AUTH] Login attempt from penalized IP: {client_ip}")
        await asyncio.sleep(random.uniform(1, 3))
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many failed login attempts. Please try again later.",
        )

    user = await _get_user_by_email(db, normalize_email(email))
    if not user or not verify_password(password, user.hashed_password):
        logger.warning(f"[AUTH] Failed login attempt for email: {email} from IP: {client_ip}")

        if redis_client:
            failed_attempts_key = f"{FAILED_LOGIN_PREFIX}{client_ip}"
            failed_attempts = await redis_client.incr(failed_attempts_key)
            if await redis_client.ttl(failed_attempts_key) == -1:
                await redis_client.expire(failed_attempts_key, FAILED_ATTEMPTS_WINDOW)

            if failed_attempts >= MAX_FAILED_ATTEMPTS:
                await redis_client.setex(penalty_key, IP_PENALTY_DURATION, "penalized")
                logger.warning(f"[AUTH] IP address penalized: {client_ip}")
                await asyncio.sleep(random.uniform(5, 10))
                raise HTTPException(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    detail="Too many failed login attempts. Please try again later.",
                )
            await asyncio.sleep(random.uniform(0.5, 1.5))

        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if user.status in BLOCKED_STATUSES:
        logger.warning(f"[AUTH] Login by {user.status.value} account: {user.email}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Your account is {user.status.value.lower()}. Please contact support.",
        )

    if redis_client:
        await redis_client.delete(f"{FAILED_LOGIN_PREFIX}{client_ip}")
    return user


async def _issue_session(user: User, db: AsyncSession, client_ip: str) -> AuthSuccessResponse:
    user.last_login_at = _now()
    await db.commit()
    access_token = create_access_token({"sub": str(user.id), "role": user.role.value})
    logger.info(f"[AUTH] User logged in: {user.email} from IP: {client_ip}")
    return AuthSuccessResponse(
        access_token=access_token, user=AuthUserResponse.model_validate(user)
    )


async def login_user_json(
    payload: LoginRequest, db: AsyncSession, client_ip: str
) -> AuthSuccessResponse:
    """Authenticates a user via JSON email/password."""
    user = await _authenticate_user(payload.email, payload.password, db, client_ip)
    return await _issue_session(user, db, client_ip)


async def login_user_oauth(
    form_data: OAuth2PasswordRequestForm, db: AsyncSession, client_ip: str
) -> AuthSuccessResponse:
    """Authenticates a user via the OAuth2 password form (username = email)."""
    user = await _authenticate_user(form_data.username, form_data.password, db, client_ip)
    return await _issue_session(user, db, client_ip)


async def logout_user_token(token: str) -> MessageResponse:
    """Blacklists the presented access token for its remaining lifetime."""
    try:
        payload = decode_access_token(token, verify_exp=False)
    except JWTError as e:
        logger.warning(f"[AUTH] Error decoding token during logout: {e}")
        return MessageResponse(detail="Logout successful")

    jti = payload.get("jti")
    ttl = seconds_until_expiry(payload)
    if jti and ttl > 0:
        await blacklist_token(jti, ttl)
        logger.info(f"[AUTH] Access token blacklisted (JTI: {jti}) for {ttl} seconds.")
    return MessageResponse(detail="Logout successful")


# ------------------------------------------------
# Password Reset / Change
# ------------------------------------------------
async def reset_password(payload: ResetPasswordRequest, db: AsyncSession) -> MessageResponse:
    """Sets a new password once a PASSWORD_RESET code was verified."""
    email = normalize_email(payload.email)
    if not await _has_recent_verified_code(db, email, VerificationType.PASSWORD_RESET):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please verify the reset code sent to your email first",
        )
    user = await _get_user_by_email(db, email)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    user.hashed_password = get_password_hash(payload.new_password)
    await db.execute(
        delete(EmailVerification).where(
            EmailVerification.email == email,
            EmailVerification.type == VerificationType.PASSWORD_RESET,
        )
    )
    await db.commit()
    logger.info(f"[AUTH] Password reset for {email}")
    return MessageResponse(detail="Password reset successfully. You can now log in.")


async def change_password(
    payload: ChangePasswordRequest, user: User, db: AsyncSession
) -> MessageResponse:
    if not verify_password(payload.current_password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect"
        )
    if payload.current_password == payload.new_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="New password must be different from the current password",
        )
    user.hashed_password = get_password_hash(payload.new_password)
    await db.commit()
    logger.info(f"[AUTH] Password changed for {user.id}")
    return MessageResponse(detail="Password changed successfully")


# ------------------------------------------------
# Account Settings
# ------------------------------------------------
def build_account_response(user: User) -> AccountResponse:
    days, ends_at = phone_cooldown(user.phone_changed_at)
    account = AccountResponse.model_validate(user)
    account.phone_cooldown_days = days
    account.phone_cooldown_ends_at = ends_at
    return account


async def update_account(
    payload: AccountUpdateRequest, user: User, db: AsyncSession
) -> MessageResponse:
    """Updates name, email and phone; a phone change needs re-verification."""
    name = payload.name.strip()
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Name is required")

    email = normalize_email(payload.email)
    phone = normalize_phone(payload.phone)

    email_changed = email != user.email
    if email_changed:
        taken = (
            await db.execute(select(User.id).where(User.email == email, User.id != user.id))
        ).first()
        if taken:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use")

    old_phone = user.phone
    phone_changed = phone != old_phone
    if phone_changed:
        days, _ = phone_cooldown(user.phone_changed_at)
        if days > 0:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=f"You can change your phone number again in {days} day(s)",
            )
        if phone:
            taken = (
                await db.execute(select(User.id).where(User.phone == phone, User.id != user.id))
            ).first()
            if taken:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT, detail="Phone number already in use"
                )

    user.name = name
    if email_changed:
        user.email = email
        user.email_verified = False
    if phone_changed:
        user.phone = phone
        user.phone_verified = False
        user.phone_changed_at = _now()
        notify_admins(
            db,
            NotificationType.PHONE_UPDATE,
            title="Phone number updated",
            message=f"{user.name or user.email} changed phone from {old_phone or 'none'} to {phone or 'none'}",
            data={
                "user_id": str(user.id),
                "email": user.email,
                "old_phone": old_phone,
                "new_phone": phone,
            },
            target_roles=SUPPORT_ROLES,
            priority=NotificationPriority.NORMAL,
        )
    await db.commit()
    logger.info(f"[AUTH] Account {user.id} updated (email_changed={email_changed}, phone_changed={phone_changed})")

    if phone_changed:
        try:
            await send_phone_update_email(user.name, user.email, old_phone, phone)
        except Exception as e:
            logger.error(f"[PHONE] Failed to email support about phone change for {user.id}: {e}")
        return MessageResponse(detail="Account updated successfully. Phone verification required.")
    return MessageResponse(detail="Account updated successfully")


# ------------------------------------------------
# Phone Verification
# ------------------------------------------------
async def _latest_pending_phone_request(db: AsyncSession, user: User) -> PhoneVerification | None:
    return (
        await db.execute(
            select(PhoneVerification)
            .where(
                PhoneVerification.user_id == user.id,
                PhoneVerification.phone == user.phone,
                PhoneVerification.verified.is_(False),
                PhoneVerification.expires_at > _now(),
            )
            .order_by(PhoneVerification.created_at.desc())
            .limit(1)
        )
    ).scalar_one_or_none()


async def get_phone_status(user: User, db: AsyncSession) -> PhoneVerificationStatus:
    pending = await _latest_pending_phone_request(db, user) if user.phone else None
    return PhoneVerificationStatus(
        phone=user.phone,
        phone_verified=user.phone_verified,
        pending_verification=pending is not None,
    )


async def request_phone_verification(user: User, db: AsyncSession) -> MessageResponse:
    """Creates a code for support staff to relay by phone."""
    if not user.phone:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Please add a phone number first"
        )
    if user.phone_verified:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Phone number is already verified"
        )

    cooldown_start = _now() - timedelta(minutes=settings.PHONE_REQUEST_COOLDOWN_MINUTES)
    recent = (
        await db.execute(
            select(PhoneVerification)
            .where(
                PhoneVerification.user_id == user.id,
                PhoneVerification.verified.is_(False),
                PhoneVerification.created_at > cooldown_start,
            )
            .order_by(PhoneVerification.created_at.desc())
            .limit(1)
        )
    ).scalar_one_or_none()
    if recent:
        elapsed = _now() - recent.created_at
        wait = settings.PHONE_REQUEST_COOLDOWN_MINUTES - int(elapsed.total_seconds() // 60)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Please wait {max(wait, 1)} minute(s) before requesting again",
        )

    code = generate_otp()
    db.add(
        PhoneVerification(
            user_id=user.id,
            phone=user.phone,
            code=code,
            expires_at=_now() + timedelta(hours=settings.PHONE_OTP_EXPIRE_HOURS),
            attempts=0,
            verified=False,
        )
    )
    notify_admins(
        db,
        NotificationType.PHONE_VERIFY_REQUEST,
        title="Phone verification requested",
        message=f"{user.name or user.email} requested verification of {user.phone}",
        data={
            "user_id": str(user.id),
            "name": user.name,
            "email": user.email,
            "phone": user.phone,
            "code": code,
        },
        target_roles=SUPPORT_ROLES,
        priority=NotificationPriority.HIGH,
    )
    await db.commit()
    logger.info(f"[PHONE] Verification requested by {user.id} for {user.phone}")

    try:
        await send_phone_verification_request_email(user.name, user.email, user.phone, code)
    except Exception as e:
        logger.error(f"[PHONE] Failed to email support for {user.id}: {e}")

    return MessageResponse(
        detail="Verification request sent. Our support team will call you with your code."
    )


async def confirm_phone_verification(otp: str, user: User, db: AsyncSession) -> MessageResponse:
    if not is_valid_otp(otp):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Please enter a valid 6-digit code"
        )

    verification = await _latest_pending_phone_request(db, user)
    if verification is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No pending verification found. Please request a new code.",
        )
    if verification.attempts >= settings.PHONE_OTP_MAX_ATTEMPTS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Too many failed attempts. Please request a new code.",
        )
    if verification.code != otp:
        verification.attempts += 1
        await db.commit()
        remaining = settings.PHONE_OTP_MAX_ATTEMPTS - verification.attempts
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid code. {remaining} attempt(s) remaining.",
        )

    verification.verified = True
    verification.verified_at = _now()
    user.phone_verified = True
    await db.commit()
    logger.info(f"[PHONE] Phone verified for {user.id}")
    return MessageResponse(detail="Phone number verified successfully")

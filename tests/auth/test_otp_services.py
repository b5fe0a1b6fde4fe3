"""
tests/auth/test_otp_services.py

Email OTP verification against a real (in-memory) database: expiry,
the attempt limit and the email-change side effect.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.schemas import VerifyOtpRequest
from app.auth.services import verify_otp
from app.core.config import settings
from app.database.enums import VerificationType
from app.database.models import EmailVerification, User

EMAIL = "new.member@example.com"


async def _code(
    db: AsyncSession,
    *,
    email: str = EMAIL,
    code: str = "482913",
    type_: VerificationType = VerificationType.REGISTRATION,
    attempts: int = 0,
    expires_in: timedelta = timedelta(minutes=10),
) -> EmailVerification:
    verification = EmailVerification(
        email=email,
        code=code,
        type=type_,
        expires_at=datetime.now(timezone.utc) + expires_in,
        attempts=attempts,
        verified=False,
    )
    db.add(verification)
    await db.commit()
    return verification


async def _stored_codes(db: AsyncSession) -> int:
    return (await db.execute(select(func.count(EmailVerification.id)))).scalar_one()


@pytest.mark.asyncio
async def test_verify_otp_success(db_session: AsyncSession) -> None:
    verification = await _code(db_session)

    result = await verify_otp(VerifyOtpRequest(email=EMAIL, code="482913"), db_session)

    assert result.detail == "Email verified successfully"
    assert verification.verified is True


@pytest.mark.asyncio
async def test_verify_otp_normalizes_email(db_session: AsyncSession) -> None:
    verification = await _code(db_session)

    await verify_otp(VerifyOtpRequest(email="New.Member@Example.com", code="482913"), db_session)

    assert verification.verified is True


@pytest.mark.asyncio
async def test_verify_otp_wrong_code_counts_attempt(db_session: AsyncSession) -> None:
    verification = await _code(db_session)

    with pytest.raises(HTTPException) as exc:
        await verify_otp(VerifyOtpRequest(email=EMAIL, code="000000"), db_session)

    remaining = settings.OTP_MAX_ATTEMPTS - 1
    assert exc.value.status_code == status.HTTP_400_BAD_REQUEST
    assert exc.value.detail == f"Invalid verification code. {remaining} attempt(s) remaining."
    assert verification.attempts == 1
    assert verification.verified is False


@pytest.mark.asyncio
async def test_verify_otp_after_attempt_limit_discards_code(db_session: AsyncSession) -> None:
    await _code(db_session, attempts=settings.OTP_MAX_ATTEMPTS)

    with pytest.raises(HTTPException) as exc:
        await verify_otp(VerifyOtpRequest(email=EMAIL, code="482913"), db_session)

    assert exc.value.detail == "Too many failed attempts. Please request a new code."
    assert await _stored_codes(db_session) == 0


@pytest.mark.asyncio
async def test_verify_otp_last_attempt_still_accepted(db_session: AsyncSession) -> None:
    verification = await _code(db_session, attempts=settings.OTP_MAX_ATTEMPTS - 1)

    await verify_otp(VerifyOtpRequest(email=EMAIL, code="482913"), db_session)

    assert verification.verified is True


@pytest.mark.asyncio
async def test_verify_otp_expired_code_discarded(db_session: AsyncSession) -> None:
    await _code(db_session, expires_in=timedelta(minutes=-1))

    with pytest.raises(HTTPException) as exc:
        await verify_otp(VerifyOtpRequest(email=EMAIL, code="482913"), db_session)

    assert exc.value.detail == "Verification code has expired. Please request a new one."
    assert await _stored_codes(db_session) == 0


@pytest.mark.asyncio
async def test_verify_otp_without_code(db_session: AsyncSession) -> None:
    with pytest.raises(HTTPException) as exc:
        await verify_otp(VerifyOtpRequest(email=EMAIL, code="482913"), db_session)

    assert exc.value.status_code == status.HTTP_400_BAD_REQUEST
    assert exc.value.detail == "No verification code found. Please request a new one."


@pytest.mark.asyncio
async def test_verify_otp_code_is_scoped_by_type(db_session: AsyncSession) -> None:
    await _code(db_session, type_=VerificationType.PASSWORD_RESET)

    with pytest.raises(HTTPException) as exc:
        await verify_otp(VerifyOtpRequest(email=EMAIL, code="482913"), db_session)

    assert exc.value.detail == "No verification code found. Please request a new one."


@pytest.mark.asyncio
async def test_verify_email_change_marks_account_verified(
    db_session: AsyncSession, db_member: User
) -> None:
    db_member.email_verified = False
    await db_session.commit()
    await _code(db_session, email=db_member.email, type_=VerificationType.EMAIL_CHANGE)

    await verify_otp(
        VerifyOtpRequest(email=db_member.email, code="482913", type=VerificationType.EMAIL_CHANGE),
        db_session,
    )

    assert db_member.email_verified is True

"""
app/users/routes.py

Member Plan Routes
- GET /user/plan: the caller's subscription plan
- GET /user/profile-limit: profiles used against the plan's allowance
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user
from app.core.limiter import limiter
from app.database.models import User
from app.database.session import get_db
from app.users import schemas
from app.users.services import PlanService

router = APIRouter(prefix="/user", tags=["User"])
logger = logging.getLogger(__name__)

DBDep = Annotated[AsyncSession, Depends(get_db)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]


@router.get(
    "/plan",
    response_model=schemas.UserPlanResponse,
    status_code=status.HTTP_200_OK,
    summary="Get My Plan",
)
@limiter.limit("30/minute")
async def get_my_plan(
    request: Request, db: DBDep, current_user: CurrentUserDep
) -> schemas.UserPlanResponse:
    """Return the plan behind the caller's subscription tier."""
    return await PlanService(db).get_plan(current_user)


@router.get(
    "/profile-limit",
    response_model=schemas.ProfileLimitResponse,
    status_code=status.HTTP_200_OK,
    summary="Get My Profile Limit",
    description="How many profiles the caller has and how many the plan allows.",
)
@limiter.limit("30/minute")
async def get_my_profile_limit(
    request: Request, db: DBDep, current_user: CurrentUserDep
) -> schemas.ProfileLimitResponse:
    """Return profile usage against the plan limit."""
    return await PlanService(db).get_profile_limit(current_user)

"""
app/users/services.py

Member Plan Service

Resolves the subscription plan behind a member's tier and the number of
profiles that plan allows.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.enums import SubscriptionTier
from app.database.models import User
from app.profile.models import Profile
from app.users import schemas
from app.wallet.models import SubscriptionPlan

logger = logging.getLogger(__name__)

DEFAULT_PLAN_NAME = "Free Plan"
DEFAULT_PROFILE_LIMIT = 1


class PlanService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _plan_for(self, user: User) -> SubscriptionPlan | None:
        return (
            await self.db.execute(
                select(SubscriptionPlan).where(SubscriptionPlan.slug == user.subscription_tier.value)
            )
        ).scalar_one_or_none()

    async def get_plan(self, user: User) -> schemas.UserPlanResponse:
        plan = await self._plan_for(user)
        if plan is None:
            return schemas.UserPlanResponse(
                plan_name=DEFAULT_PLAN_NAME,
                plan_slug=SubscriptionTier.FREE.value,
                is_free=user.subscription_tier == SubscriptionTier.FREE,
            )
        return schemas.UserPlanResponse(
            plan_name=plan.name,
            plan_slug=plan.slug,
            is_free=plan.slug == SubscriptionTier.FREE.value,
        )

    async def get_profile_limit(self, user: User) -> schemas.ProfileLimitResponse:
        """Counts the member's profiles against the plan's profile limit."""
        plan = await self._plan_for(user)
        limit = plan.profile_limit if plan else DEFAULT_PROFILE_LIMIT
        plan_name = plan.name if plan else DEFAULT_PLAN_NAME
        count = (
            await self.db.execute(select(func.count(Profile.id)).where(Profile.user_id == user.id))
        ).scalar_one()
        reached = count >= limit
        logger.debug(f"[PROFILE] Limit check for {user.id}: {count}/{limit}")
        return schemas.ProfileLimitResponse(
            profile_count=count,
            profile_limit=limit,
            plan_name=plan_name,
            limit_reached=reached,
            can_create=not reached,
        )

"""
app/users/schemas.py

Member Plan Schemas
"""

from pydantic import BaseModel, Field


class UserPlanResponse(BaseModel):
    plan_name: str = Field(..., description="Display name of the member's plan")
    plan_slug: str = Field(..., description="Plan slug, matching the subscription tier")
    is_free: bool


class ProfileLimitResponse(BaseModel):
    profile_count: int
    profile_limit: int
    plan_name: str
    limit_reached: bool
    can_create: bool

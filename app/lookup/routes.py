"""
app/lookup/routes.py

Public Lookup API

- GET /lookup: dropdown options for a reference table
- GET /subscription-plans: active plans for the pricing page
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.limiter import limiter
from app.database.session import get_db
from app.lookup.schemas import LookupResponse, SubscriptionPlanListResponse
from app.lookup.services import LookupService

router = APIRouter(tags=["Lookup"])
logger = logging.getLogger(__name__)

DBDep = Annotated[AsyncSession, Depends(get_db)]


@router.get(
    "/lookup",
    response_model=LookupResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Get Lookup Options",
    description="Active options for a reference table, optionally filtered by parent.",
)
@limiter.limit("60/minute")
async def get_lookup(
    request: Request,
    db: DBDep,
    table: str = Query(..., description="origin, ethnicity, caste, country, stateProvince, city, sect, maslak, height, educationLevel, educationField, incomeRange or language"),
    parent_id: UUID | None = Query(None, description="Parent row used to filter dependent tables"),
) -> LookupResponse:
    """Return dropdown options for one lookup table."""
    return LookupResponse(data=await LookupService(db).get_options(table, parent_id))


@router.get(
    "/subscription-plans",
    response_model=SubscriptionPlanListResponse,
    status_code=status.HTTP_200_OK,
    summary="List Subscription Plans",
)
@limiter.limit("30/minute")
async def list_subscription_plans(request: Request, db: DBDep) -> SubscriptionPlanListResponse:
    """Return active subscription plans ordered for display."""
    return SubscriptionPlanListResponse(data=await LookupService(db).list_subscription_plans())

"""
app/wallet/routes.py

Member Wallet API

- GET  /wallet/balance: funding and redeem balances
- GET  /transactions: own ledger with summary totals
- GET  /topup/options: purchasable packages and payment methods
- GET  /topup: own top-up requests
- POST /topup: submit a top-up request
- POST /topup/{request_id}/cancel: cancel a pending request
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user
from app.core.limiter import limiter
from app.core.schemas import MessageResponse
from app.database.enums import TransactionType, WalletType
from app.database.models import User
from app.database.session import get_db
from app.wallet import schemas
from app.wallet.services import WalletService

router = APIRouter(tags=["Wallet"])
logger = logging.getLogger(__name__)

DBDep = Annotated[AsyncSession, Depends(get_db)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]


@router.get(
    "/wallet/balance",
    response_model=schemas.WalletBalanceResponse,
    status_code=status.HTTP_200_OK,
    summary="Get Wallet Balance",
)
@limiter.limit("30/minute")
async def get_wallet_balance(
    request: Request, db: DBDep, current_user: CurrentUserDep
) -> schemas.WalletBalanceResponse:
    """Return the caller's funding and redeem balances."""
    return await WalletService(db).get_balance(current_user.id)


@router.get(
    "/transactions",
    response_model=schemas.TransactionListResponse,
    status_code=status.HTTP_200_OK,
    summary="List My Transactions",
    description="Newest first, optionally filtered by transaction and wallet type.",
)
@limiter.limit("30/minute")
async def list_my_transactions(
    request: Request,
    db: DBDep,
    current_user: CurrentUserDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    type: TransactionType | None = Query(None, description="Transaction type filter"),
    wallet_type: WalletType | None = Query(None, description="Wallet filter"),
) -> schemas.TransactionListResponse:
    """Return the caller's ledger with totals."""
    items, total, summary = await WalletService(db).list_transactions(
        current_user.id, skip=skip, limit=limit, type_=type, wallet_type=wallet_type
    )
    return schemas.TransactionListResponse(
        total_count=total,
        has_next_page=(skip + limit) < total,
        items=items,
        summary=summary,
    )


@router.get(
    "/topup/options",
    response_model=schemas.TopUpOptionsResponse,
    status_code=status.HTTP_200_OK,
    summary="Get Top-up Options",
)
@limiter.limit("30/minute")
async def get_topup_options(
    request: Request, db: DBDep, current_user: CurrentUserDep
) -> schemas.TopUpOptionsResponse:
    """Return active credit packages and payment methods."""
    return await WalletService(db).get_topup_options()


@router.get(
    "/topup",
    response_model=list[schemas.TopUpRequestRead],
    status_code=status.HTTP_200_OK,
    summary="List My Top-up Requests",
)
@limiter.limit("30/minute")
async def list_my_topups(
    request: Request, db: DBDep, current_user: CurrentUserDep
) -> list[schemas.TopUpRequestRead]:
    """Return the caller's top-up requests, newest first."""
    return await WalletService(db).list_topups(current_user.id)


@router.post(
    "/topup",
    response_model=schemas.TopUpCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request a Top-up",
    description="Creates a pending top-up request; credits are added once an admin approves the payment.",
)
@limiter.limit("5/minute")
async def create_topup(
    request: Request,
    payload: schemas.TopUpCreateRequest,
    db: DBDep,
    current_user: CurrentUserDep,
) -> schemas.TopUpCreateResponse:
    """Submit a manual payment claim."""
    logger.info(f"[TOPUP] User {current_user.id} requesting package {payload.package_id}")
    return await WalletService(db).create_topup(current_user, payload)


@router.post(
    "/topup/{request_id}/cancel",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Cancel a Top-up Request",
)
@limiter.limit("10/minute")
async def cancel_topup(
    request: Request, request_id: UUID, db: DBDep, current_user: CurrentUserDep
) -> MessageResponse:
    """Cancel one of the caller's pending requests."""
    return MessageResponse(detail=await WalletService(db).cancel_topup(current_user, request_id))

"""
app/finance/routes.py

Admin Finance Routes

- /admin/credits/*: manual credit additions, wallet adjustments, overviews
- /admin/topup-requests/*: review of member payment claims
- /admin/transactions/*: platform-wide ledger

Credit and top-up operations need a supervisor or super admin; the ledger is
readable by any admin role and deletable by super admins only.
"""

import logging
from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.admin.schemas import CountResponse
from app.core.dependencies import PaginationParams, require_roles
from app.core.limiter import limiter
from app.core.permissions import ADMIN_ROLES, SUPERVISOR_ROLES
from app.core.schemas import MessageResponse
from app.database.enums import TopUpStatus, TransactionType, UserRole, WalletType
from app.database.models import User
from app.database.session import get_db
from app.finance import schemas
from app.finance.services import FinanceService

router = APIRouter(prefix="/admin", tags=["Admin Finance"])
logger = logging.getLogger(__name__)

DBDep = Annotated[AsyncSession, Depends(get_db)]
FinanceStaffDep = Annotated[User, Depends(require_roles(*SUPERVISOR_ROLES))]
AdminDep = Annotated[User, Depends(require_roles(*ADMIN_ROLES))]
SuperAdminDep = Annotated[User, Depends(require_roles(UserRole.SUPER_ADMIN))]


# ---------------------------------------------------
# Credits
# ---------------------------------------------------
@router.post(
    "/credits/add",
    response_model=schemas.AddCreditsResponse,
    status_code=status.HTTP_200_OK,
    summary="Add Funding Credits",
)
@limiter.limit("20/minute")
async def add_credits(
    request: Request,
    payload: schemas.AddCreditsRequest,
    db: DBDep,
    current_user: FinanceStaffDep,
) -> schemas.AddCreditsResponse:
    """Add credits to a member's funding wallet."""
    return await FinanceService(db).add_credits(current_user, payload)


@router.post(
    "/credits/adjust",
    response_model=schemas.AdjustWalletResponse,
    status_code=status.HTTP_200_OK,
    summary="Adjust Wallet",
    description="Set a wallet balance, and the limit for redeem wallets.",
)
@limiter.limit("20/minute")
async def adjust_wallet(
    request: Request,
    payload: schemas.AdjustWalletRequest,
    db: DBDep,
    current_user: FinanceStaffDep,
) -> schemas.AdjustWalletResponse:
    return await FinanceService(db).adjust_wallet(current_user, payload)


@router.get(
    "/credits/overview",
    response_model=schemas.CreditsOverviewResponse,
    status_code=status.HTTP_200_OK,
    summary="Credits Overview",
)
@limiter.limit("20/minute")
async def get_credits_overview(
    request: Request, db: DBDep, current_user: FinanceStaffDep
) -> schemas.CreditsOverviewResponse:
    """Recent members with both balances plus platform totals."""
    return await FinanceService(db).get_credits_overview()


@router.get(
    "/credits/user/{user_id}",
    response_model=schemas.UserCreditsResponse,
    status_code=status.HTTP_200_OK,
    summary="Member Credits",
)
@limiter.limit("30/minute")
async def get_user_credits(
    request: Request, user_id: UUID, db: DBDep, current_user: FinanceStaffDep
) -> schemas.UserCreditsResponse:
    return await FinanceService(db).get_user_credits(user_id)


# ---------------------------------------------------
# Top-up Requests
# ---------------------------------------------------
@router.get(
    "/topup-requests",
    response_model=schemas.TopUpListResponse,
    status_code=status.HTTP_200_OK,
    summary="List Top-up Requests",
)
@limiter.limit("30/minute")
async def list_topup_requests(
    request: Request,
    db: DBDep,
    current_user: FinanceStaffDep,
    status_filter: TopUpStatus | None = Query(None, alias="status"),
) -> schemas.TopUpListResponse:
    """Requests newest first with counts per status."""
    return await FinanceService(db).list_topups(status_filter)


@router.get(
    "/topup-requests/pending-count",
    response_model=CountResponse,
    status_code=status.HTTP_200_OK,
    summary="Pending Top-up Count",
)
@limiter.limit("60/minute")
async def get_pending_topup_count(
    request: Request, db: DBDep, current_user: FinanceStaffDep
) -> CountResponse:
    return CountResponse(count=await FinanceService(db).count_pending_topups())


@router.get(
    "/topup-requests/{request_id}",
    response_model=schemas.AdminTopUpDetail,
    status_code=status.HTTP_200_OK,
    summary="Get Top-up Request",
)
@limiter.limit("30/minute")
async def get_topup_request(
    request: Request, request_id: UUID, db: DBDep, current_user: FinanceStaffDep
) -> schemas.AdminTopUpDetail:
    return await FinanceService(db).get_topup(request_id)


@router.put(
    "/topup-requests/{request_id}",
    response_model=schemas.TopUpProcessResponse,
    status_code=status.HTTP_200_OK,
    summary="Approve or Reject Top-up",
    description="Approval credits the package credits plus bonus to the funding wallet.",
)
@limiter.limit("20/minute")
async def process_topup_request(
    request: Request,
    request_id: UUID,
    payload: schemas.TopUpProcessRequest,
    db: DBDep,
    current_user: FinanceStaffDep,
) -> schemas.TopUpProcessResponse:
    """Process a pending top-up request."""
    return await FinanceService(db).process_topup(current_user, request_id, payload)


# ---------------------------------------------------
# Transactions
# ---------------------------------------------------
@router.get(
    "/transactions",
    response_model=schemas.AdminTransactionListResponse,
    status_code=status.HTTP_200_OK,
    summary="List Transactions",
)
@limiter.limit("30/minute")
async def list_transactions(
    request: Request,
    db: DBDep,
    current_user: AdminDep,
    pagination: PaginationParams = Depends(),
    type_: TransactionType | None = Query(None, alias="type"),
    wallet_type: WalletType | None = Query(None),
    user_id: UUID | None = Query(None),
    search: str | None = Query(None, description="User name/email, description or reference type"),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None, description="Inclusive"),
) -> schemas.AdminTransactionListResponse:
    """Ledger rows newest first with totals per type and wallet."""
    filters = schemas.TransactionFilters(
        type=type_,
        wallet_type=wallet_type,
        user_id=user_id,
        search=search,
        start_date=start_date,
        end_date=end_date,
    )
    return await FinanceService(db).list_transactions(filters, pagination.skip, pagination.limit)


@router.get(
    "/transactions/{transaction_id}",
    response_model=schemas.AdminTransactionDetail,
    status_code=status.HTTP_200_OK,
    summary="Get Transaction",
)
@limiter.limit("30/minute")
async def get_transaction(
    request: Request, transaction_id: UUID, db: DBDep, current_user: AdminDep
) -> schemas.AdminTransactionDetail:
    return await FinanceService(db).get_transaction(transaction_id)


@router.delete(
    "/transactions/{transaction_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete Transaction",
    description="Removes the ledger row only; balances are not reversed.",
)
@limiter.limit("5/minute")
async def delete_transaction(
    request: Request, transaction_id: UUID, db: DBDep, current_user: SuperAdminDep
) -> MessageResponse:
    return MessageResponse(
        detail=await FinanceService(db).delete_transaction(current_user, transaction_id)
    )

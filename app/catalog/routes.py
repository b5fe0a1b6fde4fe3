"""
app/catalog/routes.py

Global Settings Routes (super admin only)

One set of endpoints serves every catalog, addressed by name
(origins, ethnicities, castes, countries, states, cities, country-languages,
sects, maslaks, heights, education-levels, education-fields, income-ranges,
languages, subscription-plans, credit-actions, credit-packages,
payment-settings, redeem-actions):

- GET    /admin/global-settings/{catalog}?parent_id=
- POST   /admin/global-settings/{catalog}
- PUT    /admin/global-settings/{catalog}/reorder
- GET    /admin/global-settings/{catalog}/{item_id}
- PATCH  /admin/global-settings/{catalog}/{item_id}
- DELETE /admin/global-settings/{catalog}/{item_id}
"""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog import schemas
from app.catalog.services import CatalogService, get_catalog
from app.core.dependencies import require_permission
from app.core.limiter import limiter
from app.core.schemas import MessageResponse
from app.database.models import User
from app.database.session import get_db

router = APIRouter(prefix="/admin/global-settings", tags=["Admin Global Settings"])

DBDep = Annotated[AsyncSession, Depends(get_db)]
SettingsAdminDep = Annotated[User, Depends(require_permission("manage_global_settings"))]


def _service(db: AsyncSession, catalog: str) -> CatalogService:
    return CatalogService(db, get_catalog(catalog))


@router.get(
    "/{catalog}",
    response_model=schemas.CatalogListResponse,
    status_code=status.HTTP_200_OK,
    summary="List Catalog Items",
    description="Inactive rows included. `parent_id` filters dependent catalogs.",
)
@limiter.limit("60/minute")
async def list_items(
    request: Request,
    catalog: str,
    db: DBDep,
    current_user: SettingsAdminDep,
    parent_id: UUID | None = Query(None),
) -> schemas.CatalogListResponse:
    return await _service(db, catalog).list_items(parent_id)


@router.post(
    "/{catalog}",
    response_model=schemas.CatalogItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Catalog Item",
)
@limiter.limit("30/minute")
async def create_item(
    request: Request,
    catalog: str,
    db: DBDep,
    current_user: SettingsAdminDep,
    payload: dict[str, Any] = Body(...),
) -> schemas.CatalogItemResponse:
    """Fields depend on the catalog."""
    service = _service(db, catalog)
    item = await service.create_item(current_user, payload)
    return schemas.CatalogItemResponse(detail=f"{service.catalog.name} created successfully", item=item)


@router.put(
    "/{catalog}/reorder",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Reorder Catalog Items",
)
@limiter.limit("20/minute")
async def reorder_items(
    request: Request,
    catalog: str,
    payload: schemas.ReorderRequest,
    db: DBDep,
    current_user: SettingsAdminDep,
) -> MessageResponse:
    """Assign sort_order by position in `ordered_ids`."""
    return MessageResponse(detail=await _service(db, catalog).reorder(current_user, payload.ordered_ids))


@router.get(
    "/{catalog}/{item_id}",
    response_model=schemas.CatalogItemResponse,
    status_code=status.HTTP_200_OK,
    summary="Get Catalog Item",
)
@limiter.limit("60/minute")
async def get_item(
    request: Request, catalog: str, item_id: UUID, db: DBDep, current_user: SettingsAdminDep
) -> schemas.CatalogItemResponse:
    return schemas.CatalogItemResponse(item=await _service(db, catalog).get_item(item_id))


@router.patch(
    "/{catalog}/{item_id}",
    response_model=schemas.CatalogItemResponse,
    status_code=status.HTTP_200_OK,
    summary="Update Catalog Item",
)
@limiter.limit("30/minute")
async def update_item(
    request: Request,
    catalog: str,
    item_id: UUID,
    db: DBDep,
    current_user: SettingsAdminDep,
    payload: dict[str, Any] = Body(...),
) -> schemas.CatalogItemResponse:
    """Partial update; omitted fields are left unchanged."""
    service = _service(db, catalog)
    item = await service.update_item(current_user, item_id, payload)
    return schemas.CatalogItemResponse(detail=f"{service.catalog.name} updated successfully", item=item)


@router.delete(
    "/{catalog}/{item_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete Catalog Item",
    description="Rows used by profiles or with child rows cannot be deleted; deactivate them instead.",
)
@limiter.limit("20/minute")
async def delete_item(
    request: Request, catalog: str, item_id: UUID, db: DBDep, current_user: SettingsAdminDep
) -> MessageResponse:
    return MessageResponse(detail=await _service(db, catalog).delete_item(current_user, item_id))

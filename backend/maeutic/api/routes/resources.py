"""Resource Routes — curated links per page (chill, methodology, administrative)."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.api.deps import get_optional_user
from maeutic.api.presenters import resource_payload
from maeutic.infrastructure.database import get_db
from maeutic.models.user import User
from maeutic.schemas.library import ResourceCreate, ResourceUpdate
from maeutic.services.resource_service import ResourceService

router = APIRouter(prefix="/api/resources", tags=["resources"])


@router.get("/{page}")
async def list_resources(page: str, db: AsyncSession = Depends(get_db)):
    resources = await ResourceService(db).list_page(page)
    return {"resources": [resource_payload(r) for r in resources]}


@router.post("/{page}", status_code=status.HTTP_201_CREATED)
async def create_resource(
    page: str,
    body: ResourceCreate,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    resource = await ResourceService(db).create(user, page, body)
    return {"message": "Resource created", "resource": resource_payload(resource)}


@router.api_route("/{page}/{resource_id}", methods=["PUT", "PATCH"])
async def update_resource(
    page: str,
    resource_id: int,
    body: ResourceUpdate,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    resource = await ResourceService(db).update(user, page, resource_id, body)
    return {"message": "Resource updated", "resource": resource_payload(resource)}


@router.delete("/{page}/{resource_id}")
async def delete_resource(
    page: str,
    resource_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    await ResourceService(db).delete(user, page, resource_id)
    return {"message": "Resource deleted"}

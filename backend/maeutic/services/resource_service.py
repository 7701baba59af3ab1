"""Resource Service — curated links on the chill, methodology and administrative pages.

Invariants:
    - Unknown page names are rejected (400) before anything else
    - Only admins create, edit or delete; anonymous callers get 403 like members
    - A resource is only reachable through its own page (404 otherwise)
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.core.domain_types import ResourcePage
from maeutic.core.errors import (
    ErrorContext, InvalidOperationError, PermissionDeniedError, ResourceNotFoundError,
)
from maeutic.models.resource import Resource
from maeutic.models.user import User
from maeutic.schemas.library import ResourceCreate, ResourceUpdate

logger = logging.getLogger(__name__)


def parse_page(page: str) -> ResourcePage:
    try:
        return ResourcePage(page)
    except ValueError:
        raise InvalidOperationError("Invalid page", ErrorContext(resource_id=page))


def _require_admin(user: User | None) -> User:
    if user is None or not user.is_admin:
        raise PermissionDeniedError("Access denied")
    return user


class ResourceService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_page(self, page: str) -> list[Resource]:
        page = parse_page(page)
        result = await self.db.execute(
            select(Resource).where(Resource.page == page.value).order_by(Resource.id)
        )
        return list(result.scalars().all())

    async def _get_on_page(self, page: ResourcePage, resource_id: int) -> Resource:
        resource = await self.db.get(Resource, resource_id)
        if not resource or resource.page != page.value:
            raise ResourceNotFoundError("Resource", str(resource_id))
        return resource

    async def create(self, user: User | None, page: str, body: ResourceCreate) -> Resource:
        page = parse_page(page)
        user = _require_admin(user)
        resource = Resource(
            title=body.title,
            description=body.description,
            link=body.link,
            page=page.value,
            user_id=user.id,
        )
        self.db.add(resource)
        await self.db.commit()
        logger.info(f"Resource {resource.id} added to {page.value}", extra={"user_id": user.id})
        return resource

    async def update(
        self, user: User | None, page: str, resource_id: int, body: ResourceUpdate,
    ) -> Resource:
        page = parse_page(page)
        _require_admin(user)
        resource = await self._get_on_page(page, resource_id)
        for name, value in body.model_dump(exclude_none=True).items():
            setattr(resource, name, value)
        await self.db.commit()
        return resource

    async def delete(self, user: User | None, page: str, resource_id: int) -> None:
        page = parse_page(page)
        _require_admin(user)
        resource = await self._get_on_page(page, resource_id)
        await self.db.delete(resource)
        await self.db.commit()

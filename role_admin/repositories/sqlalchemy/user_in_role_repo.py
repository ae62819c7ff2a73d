"""
UserInRole Repository SQLAlchemy Implementation

Provides concrete database operation implementation for UserInRole data.
"""

from typing import Any, Optional, Sequence
from uuid import UUID

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from role_admin.common.time import utc_now_naive
from role_admin.db.models import UserInRole as UserInRoleORM
from role_admin.domain.filter import FilterCriteria
from role_admin.domain.user_in_role import (
    SETTABLE_FIELDS,
    UserInRole,
    UserInRoleCreate,
    UserInRoleUpdate,
)
from role_admin.query.fields import EntityFields, user_in_role_fields
from role_admin.query.filters import FilterService
from role_admin.repositories.user_in_role_repo import UserInRoleRepository


class SQLAlchemyUserInRoleRepository(UserInRoleRepository):
    """
    UserInRole Repository SQLAlchemy Implementation

    Uses SQLAlchemy ORM to implement database operations for UserInRoles.
    Every write commits the session once.
    """

    def __init__(self, session: AsyncSession, fields: EntityFields = user_in_role_fields):
        """
        Initialize Repository

        Args:
            session: Async database session
            fields: Field registry used for filtering and sorting
        """
        self.session = session
        self.fields = fields
        self.filter_service = FilterService(fields)

    def _to_domain(self, entity: UserInRoleORM) -> UserInRole:
        """
        Convert ORM entity to domain model

        Navigation properties are copied only when already loaded; touching an
        unloaded relationship would trigger lazy IO outside the async context.
        """
        unloaded = sa_inspect(entity).unloaded
        data: dict[str, Any] = {key: getattr(entity, key) for key in self.fields.columns}
        for name in self.fields.navigations:
            if name not in unloaded:
                data[name] = getattr(entity, name)
        return UserInRole.model_validate(data, from_attributes=True)

    async def _get_entity(self, id: UUID) -> Optional[UserInRoleORM]:
        result = await self.session.execute(
            select(UserInRoleORM).where(UserInRoleORM.id == id)
        )
        return result.scalar_one_or_none()

    async def get_by_id(
        self, id: UUID, include: Sequence[str] = ()
    ) -> Optional[UserInRole]:
        """Get UserInRole by ID, eagerly loading the requested navigations"""
        stmt = select(UserInRoleORM).where(UserInRoleORM.id == id)
        for name in include:
            stmt = stmt.options(selectinload(self.fields.relationship(name)))
        result = await self.session.execute(
            stmt.execution_options(populate_existing=True)
        )
        entity = result.scalar_one_or_none()
        return self._to_domain(entity) if entity else None

    async def get_all(
        self,
        filters: Optional[Sequence[FilterCriteria]] = None,
        search_term: Optional[str] = "",
        page: int = 1,
        page_size: int = 1,
        sort_field: Optional[str] = None,
        sort_order: str = "asc",
    ) -> list[UserInRole]:
        """Get UserInRole list"""
        query = select(UserInRoleORM).options(
            *(selectinload(self.fields.relationship(name)) for name in self.fields.navigations)
        )
        query = self.filter_service.apply_filter(query, filters, search_term)

        # Sorting, ties broken by id so pages stay stable
        if sort_field:
            sort_column = self.fields.column(sort_field)
            if sort_order.lower() == "desc":
                query = query.order_by(sort_column.desc(), UserInRoleORM.id)
            else:
                query = query.order_by(sort_column.asc(), UserInRoleORM.id)
        else:
            query = query.order_by(UserInRoleORM.created_on, UserInRoleORM.id)

        # Pagination
        query = query.offset((page - 1) * page_size).limit(page_size)

        result = await self.session.execute(
            query.execution_options(populate_existing=True)
        )
        return [self._to_domain(e) for e in result.scalars().all()]

    async def create(self, data: UserInRoleCreate) -> UserInRole:
        """Create UserInRole (id generated on insert)"""
        entity = UserInRoleORM(**data.model_dump(include=SETTABLE_FIELDS))
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return self._to_domain(entity)

    async def replace(self, id: UUID, data: UserInRoleUpdate) -> Optional[UserInRole]:
        """Replace UserInRole"""
        entity = await self._get_entity(id)

        if not entity:
            return None

        # Full replace: omitted optional fields are cleared
        for key, value in data.model_dump(include=SETTABLE_FIELDS).items():
            setattr(entity, key, value)

        entity.updated_on = utc_now_naive()

        await self.session.commit()
        await self.session.refresh(entity)
        return self._to_domain(entity)

    async def delete(self, id: UUID) -> bool:
        """Delete UserInRole"""
        entity = await self._get_entity(id)

        if not entity:
            return False

        await self.session.delete(entity)
        await self.session.commit()
        return True

"""
UserInRole Service Module

Provides business logic processing for UserInRole assignments: lookup with
field projection, filtered list, create, full update, JSON Patch and delete.
"""

import logging
from typing import Any, Optional, Sequence, Union
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from role_admin.common.errors import ConflictError, NotFoundError, ValidationError
from role_admin.domain.filter import FilterCriteria
from role_admin.domain.patch import PatchOperation
from role_admin.domain.user_in_role import (
    SETTABLE_FIELDS,
    UserInRole,
    UserInRoleCreate,
    UserInRoleUpdate,
)
from role_admin.query.fields import EntityFields, user_in_role_fields
from role_admin.query.patch import apply_patch
from role_admin.query.projection import FieldMapper, split_fields
from role_admin.repositories.user_in_role_repo import UserInRoleRepository

logger = logging.getLogger(__name__)

SORT_ORDERS = ("asc", "desc")


class UserInRoleService:
    """
    UserInRole Service

    Stateless; one instance serves one unit of work. All failures raise
    AppError subclasses and propagate to the caller.
    """

    def __init__(
        self,
        repo: UserInRoleRepository,
        mapper: Optional[FieldMapper] = None,
        fields: EntityFields = user_in_role_fields,
        raise_on_missing: bool = False,
    ):
        """
        Initialize Service

        Args:
            repo: UserInRole Repository
            mapper: Field mapper for projections
            fields: Field registry of the entity
            raise_on_missing: get_by_id raises NotFoundError instead of
                returning an empty projection
        """
        self.repo = repo
        self.fields = fields
        self.mapper = mapper or FieldMapper(fields)
        self.raise_on_missing = raise_on_missing

    async def get_by_id(self, id: UUID, fields: Optional[str] = None) -> dict[str, Any]:
        """
        Get UserInRole projection by ID

        Args:
            id: UserInRole ID
            fields: Comma-separated field list; "id" is always included

        Returns:
            dict: Projection, empty when no row matches

        Raises:
            ValidationError: Unknown field
            NotFoundError: No row matches and raise_on_missing is set
        """
        requested = split_fields(fields)
        fields = ",".join(["id", *requested]) if requested else "id"

        # Validate before touching the store
        self.mapper.resolve(fields)
        include = self.fields.navigations_in(requested)

        entity = await self.repo.get_by_id(id, include=include)
        if entity is None:
            logger.debug("UserInRole %s not found", id)
            if self.raise_on_missing:
                raise NotFoundError(
                    message=f"UserInRole with id {id} not found",
                    code="user_in_role_not_found",
                )
        return self.mapper.map_to_fields(entity, fields)

    async def get(
        self,
        filters: Optional[Sequence[FilterCriteria]] = None,
        search_term: Optional[str] = "",
        page_number: int = 1,
        page_size: int = 1,
        sort_field: Optional[str] = None,
        sort_order: str = "asc",
    ) -> list[UserInRole]:
        """
        Get UserInRole List

        Args:
            filters: Filter criteria, combined with AND
            search_term: Free text matched against tenant, role and user names
            page_number: Page number, starting at 1
            page_size: Items per page
            sort_field: Column to sort by
            sort_order: "asc" or "desc" (case-insensitive)

        Returns:
            list[UserInRole]: One page, navigations loaded

        Raises:
            ValidationError: Invalid paging, sort order or sort field
        """
        if page_size < 1:
            raise ValidationError(message="Page size invalid", code="invalid_page_size")

        if page_number < 1:
            raise ValidationError(message="Page number invalid", code="invalid_page_number")

        if sort_field:
            if (sort_order or "").lower() not in SORT_ORDERS:
                raise ValidationError(
                    message="Invalid sort order. Use 'asc' or 'desc'",
                    code="invalid_sort_order",
                )
            if self.fields.column_name(sort_field) is None:
                raise ValidationError(
                    message=f"Invalid sort field '{sort_field}'",
                    code="invalid_sort_field",
                    details={"field": sort_field},
                )

        logger.debug(
            "Listing UserInRoles page=%s size=%s filters=%d sort=%s %s",
            page_number,
            page_size,
            len(filters or []),
            sort_field,
            sort_order,
        )
        return await self.repo.get_all(
            filters=filters,
            search_term=search_term,
            page=page_number,
            page_size=page_size,
            sort_field=sort_field or None,
            sort_order=sort_order,
        )

    async def create(self, data: UserInRoleCreate) -> UUID:
        """
        Create UserInRole

        Args:
            data: Creation data; a supplied id is ignored

        Returns:
            UUID: Generated ID
        """
        created = await self.repo.create(data)
        logger.info(
            "Created UserInRole %s (user=%s role=%s)", created.id, created.user_id, created.role_id
        )
        return created.id

    async def update(self, id: UUID, data: UserInRoleUpdate) -> bool:
        """
        Update UserInRole (full replace)

        Args:
            id: UserInRole ID
            data: Replacement data

        Returns:
            bool: True on success

        Raises:
            ConflictError: data carries a different id
            NotFoundError: UserInRole not found
        """
        if data.id is not None and data.id != id:
            raise ConflictError(
                message=f"Body id {data.id} does not match UserInRole id {id}",
                code="id_mismatch",
            )

        updated = await self.repo.replace(id, data)
        if updated is None:
            raise NotFoundError(code="user_in_role_not_found")
        logger.info("Updated UserInRole %s", id)
        return True

    async def patch(
        self,
        id: UUID,
        operations: Optional[Sequence[Union[PatchOperation, dict[str, Any]]]],
    ) -> bool:
        """
        Patch UserInRole

        Args:
            id: UserInRole ID
            operations: JSON Patch operations, applied in order

        Returns:
            bool: True on success

        Raises:
            ValidationError: Missing document, bad path or invalid result
            NotFoundError: UserInRole not found
        """
        if operations is None:
            raise ValidationError(
                message="Patch document is missing",
                code="missing_patch_document",
            )

        existing = await self.repo.get_by_id(id)
        if existing is None:
            raise NotFoundError(code="user_in_role_not_found")

        document = existing.model_dump(mode="json", include=SETTABLE_FIELDS)
        patched = apply_patch(document, operations, self.fields, SETTABLE_FIELDS)

        try:
            data = UserInRoleUpdate.model_validate(patched)
        except PydanticValidationError as e:
            raise ValidationError(
                message="Patched UserInRole is invalid",
                code="invalid_patch",
                details={"errors": e.errors(include_url=False, include_context=False)},
            )

        if await self.repo.replace(id, data) is None:
            raise NotFoundError(code="user_in_role_not_found")
        logger.info("Patched UserInRole %s with %d operation(s)", id, len(operations))
        return True

    async def delete(self, id: UUID) -> bool:
        """
        Delete UserInRole

        Raises:
            NotFoundError: UserInRole not found
        """
        if not await self.repo.delete(id):
            raise NotFoundError(code="user_in_role_not_found")
        logger.info("Deleted UserInRole %s", id)
        return True

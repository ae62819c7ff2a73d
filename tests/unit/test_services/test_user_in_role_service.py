"""
UserInRoleService unit tests (mocked repository)
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from role_admin.common.errors import ConflictError, NotFoundError, ValidationError
from role_admin.domain.user_in_role import RoleRef, UserInRole, UserInRoleCreate, UserInRoleUpdate
from role_admin.repositories.user_in_role_repo import UserInRoleRepository
from role_admin.services.user_in_role_service import UserInRoleService


def _assignment(**overrides) -> UserInRole:
    data = {
        "id": uuid.uuid4(),
        "tenant_id": uuid.uuid4(),
        "role_id": uuid.uuid4(),
        "user_id": uuid.uuid4(),
        "created_on": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return UserInRole(**data)


@pytest.fixture
def repo():
    return AsyncMock(spec=UserInRoleRepository)


@pytest.fixture
def service(repo):
    return UserInRoleService(repo)


@pytest.mark.asyncio
class TestGetById:

    async def test_defaults_to_id_only(self, service, repo):
        entity = _assignment()
        repo.get_by_id.return_value = entity

        assert await service.get_by_id(entity.id) == {"id": str(entity.id)}
        repo.get_by_id.assert_awaited_once_with(entity.id, include=[])

    async def test_id_is_always_projected(self, service, repo):
        entity = _assignment()
        repo.get_by_id.return_value = entity

        result = await service.get_by_id(entity.id, "RoleId")

        assert result == {"id": str(entity.id), "role_id": str(entity.role_id)}

    async def test_navigation_fields_request_eager_load(self, service, repo):
        role = RoleRef(id=uuid.uuid4(), name="Administrator")
        entity = _assignment(role_id=role.id, role=role)
        repo.get_by_id.return_value = entity

        result = await service.get_by_id(entity.id, "RoleId_Role.Name")

        assert result == {"id": str(entity.id), "role": {"name": "Administrator"}}
        repo.get_by_id.assert_awaited_once_with(entity.id, include=["role"])

    async def test_unknown_field_does_not_touch_store(self, service, repo):
        with pytest.raises(ValidationError):
            await service.get_by_id(uuid.uuid4(), "Id,Nickname")
        repo.get_by_id.assert_not_awaited()

    async def test_missing_returns_empty(self, service, repo):
        repo.get_by_id.return_value = None
        assert await service.get_by_id(uuid.uuid4(), "RoleId") == {}

    async def test_missing_raises_when_configured(self, repo):
        repo.get_by_id.return_value = None
        service = UserInRoleService(repo, raise_on_missing=True)

        with pytest.raises(NotFoundError) as exc:
            await service.get_by_id(uuid.uuid4())
        assert exc.value.code == "user_in_role_not_found"


@pytest.mark.asyncio
class TestGet:

    async def test_passes_arguments_through(self, service, repo):
        repo.get_all.return_value = []

        await service.get(search_term="ali", page_number=3, page_size=20, sort_field="RoleId", sort_order="DESC")

        repo.get_all.assert_awaited_once_with(
            filters=None,
            search_term="ali",
            page=3,
            page_size=20,
            sort_field="RoleId",
            sort_order="DESC",
        )

    async def test_blank_sort_field_means_default_order(self, service, repo):
        repo.get_all.return_value = []

        await service.get(sort_field="", sort_order="sideways")

        assert repo.get_all.await_args.kwargs["sort_field"] is None

    @pytest.mark.parametrize(
        "kwargs, message, code",
        [
            ({"page_size": 0}, "Page size invalid", "invalid_page_size"),
            ({"page_number": 0}, "Page number invalid", "invalid_page_number"),
            (
                {"sort_field": "RoleId", "sort_order": "up"},
                "Invalid sort order. Use 'asc' or 'desc'",
                "invalid_sort_order",
            ),
            ({"sort_field": "colour"}, "Invalid sort field 'colour'", "invalid_sort_field"),
        ],
    )
    async def test_rejects_before_store(self, service, repo, kwargs, message, code):
        with pytest.raises(ValidationError) as exc:
            await service.get(**kwargs)

        assert exc.value.message == message
        assert exc.value.code == code
        repo.get_all.assert_not_awaited()

    async def test_page_size_checked_first(self, service, repo):
        with pytest.raises(ValidationError) as exc:
            await service.get(page_number=0, page_size=0)
        assert exc.value.code == "invalid_page_size"


@pytest.mark.asyncio
class TestWrites:

    async def test_create_returns_generated_id(self, service, repo):
        created = _assignment()
        repo.create.return_value = created
        data = UserInRoleCreate(role_id=created.role_id, user_id=created.user_id)

        assert await service.create(data) == created.id
        repo.create.assert_awaited_once_with(data)

    async def test_update(self, service, repo):
        entity = _assignment()
        repo.replace.return_value = entity
        data = UserInRoleUpdate(id=entity.id, role_id=entity.role_id, user_id=entity.user_id)

        assert await service.update(entity.id, data) is True
        repo.replace.assert_awaited_once_with(entity.id, data)

    async def test_update_id_mismatch(self, service, repo):
        data = UserInRoleUpdate(id=uuid.uuid4(), role_id=uuid.uuid4(), user_id=uuid.uuid4())

        with pytest.raises(ConflictError) as exc:
            await service.update(uuid.uuid4(), data)

        assert exc.value.code == "id_mismatch"
        repo.replace.assert_not_awaited()

    async def test_update_missing(self, service, repo):
        repo.replace.return_value = None

        with pytest.raises(NotFoundError):
            await service.update(uuid.uuid4(), UserInRoleUpdate(role_id=uuid.uuid4(), user_id=uuid.uuid4()))

    async def test_delete(self, service, repo):
        repo.delete.return_value = True
        assert await service.delete(uuid.uuid4()) is True

    async def test_delete_missing(self, service, repo):
        repo.delete.return_value = False
        with pytest.raises(NotFoundError):
            await service.delete(uuid.uuid4())


@pytest.mark.asyncio
class TestPatch:

    async def test_missing_document(self, service, repo):
        with pytest.raises(ValidationError) as exc:
            await service.patch(uuid.uuid4(), None)

        assert exc.value.message == "Patch document is missing"
        repo.get_by_id.assert_not_awaited()

    async def test_missing_entity(self, service, repo):
        repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.patch(uuid.uuid4(), [{"op": "replace", "path": "RoleId", "value": str(uuid.uuid4())}])
        repo.replace.assert_not_awaited()

    async def test_replaces_with_patched_values(self, service, repo):
        entity = _assignment(created_by=uuid.uuid4())
        repo.get_by_id.return_value = entity
        new_role = uuid.uuid4()

        assert await service.patch(entity.id, [{"op": "replace", "path": "RoleId", "value": str(new_role)}]) is True

        replaced_id, data = repo.replace.await_args.args
        assert replaced_id == entity.id
        assert data.role_id == new_role
        assert data.user_id == entity.user_id
        assert data.tenant_id == entity.tenant_id
        assert data.created_by == entity.created_by

    async def test_row_removed_before_write(self, service, repo):
        entity = _assignment()
        repo.get_by_id.return_value = entity
        repo.replace.return_value = None

        with pytest.raises(NotFoundError) as exc:
            await service.patch(entity.id, [{"op": "replace", "path": "RoleId", "value": str(uuid.uuid4())}])
        assert exc.value.code == "user_in_role_not_found"

    async def test_invalid_result_is_rejected(self, service, repo):
        entity = _assignment()
        repo.get_by_id.return_value = entity

        with pytest.raises(ValidationError) as exc:
            await service.patch(entity.id, [{"op": "replace", "path": "/user_id", "value": "nobody"}])

        assert exc.value.code == "invalid_patch"
        repo.replace.assert_not_awaited()

    async def test_removing_required_field_is_rejected(self, service, repo):
        entity = _assignment()
        repo.get_by_id.return_value = entity

        with pytest.raises(ValidationError):
            await service.patch(entity.id, [{"op": "remove", "path": "/role_id"}])
        repo.replace.assert_not_awaited()

    async def test_id_is_not_patchable(self, service, repo):
        entity = _assignment()
        repo.get_by_id.return_value = entity

        with pytest.raises(ValidationError) as exc:
            await service.patch(entity.id, [{"op": "replace", "path": "/id", "value": str(uuid.uuid4())}])
        assert exc.value.code == "invalid_patch_path"

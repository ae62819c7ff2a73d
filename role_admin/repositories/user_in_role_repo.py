"""
UserInRole Repository Interface

Defines the data access interface for UserInRole assignments.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from uuid import UUID

from role_admin.domain.filter import FilterCriteria
from role_admin.domain.user_in_role import UserInRole, UserInRoleCreate, UserInRoleUpdate


class UserInRoleRepository(ABC):
    """UserInRole Repository Interface"""

    @abstractmethod
    async def get_by_id(
        self, id: UUID, include: Sequence[str] = ()
    ) -> Optional[UserInRole]:
        """
        Get UserInRole by ID

        Args:
            id: UserInRole ID
            include: Navigation properties to load eagerly
        """
        pass

    @abstractmethod
    async def get_all(
        self,
        filters: Optional[Sequence[FilterCriteria]] = None,
        search_term: Optional[str] = "",
        page: int = 1,
        page_size: int = 1,
        sort_field: Optional[str] = None,
        sort_order: str = "asc",
    ) -> list[UserInRole]:
        """Get one page of UserInRoles with every navigation loaded"""
        pass

    @abstractmethod
    async def create(self, data: UserInRoleCreate) -> UserInRole:
        """Create UserInRole"""
        pass

    @abstractmethod
    async def replace(self, id: UUID, data: UserInRoleUpdate) -> Optional[UserInRole]:
        """Replace all settable fields of a UserInRole, None if it does not exist"""
        pass

    @abstractmethod
    async def delete(self, id: UUID) -> bool:
        """Delete UserInRole, False if it does not exist"""
        pass

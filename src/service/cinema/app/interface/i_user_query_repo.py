from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.service.cinema.domain.entity.user_entity import UserEntity, UserRole


class IUserQueryRepo(ABC):
    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def verify_password(self, email: str, plain_password: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def list_users(
        self,
        *,
        page: int,
        limit: int,
        search: Optional[str] = None,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[UserEntity], int]:
        """Newest first. Returns (page items, total count)"""
        pass

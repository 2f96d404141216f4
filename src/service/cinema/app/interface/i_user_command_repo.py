from abc import ABC, abstractmethod
from typing import Optional

from src.service.cinema.domain.entity.user_entity import UserEntity, UserRole


class IUserCommandRepo(ABC):
    @abstractmethod
    async def create(self, user_entity: UserEntity) -> UserEntity:
        """Persist a new user; raises ConflictError when the email is taken"""
        pass

    @abstractmethod
    async def update(
        self,
        *,
        user_id: int,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
    ) -> Optional[UserEntity]:
        """Change role and/or active flag; None when the user does not exist"""
        pass

    @abstractmethod
    async def delete_without_active_bookings(self, *, user_id: int) -> bool:
        """Delete the user unless a pending or confirmed booking still belongs to them"""
        pass

from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, InvalidStateError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.cinema.domain.entity.user_entity import UserEntity, UserRole


class ManageUserUseCase:
    """Admin account management: block or unblock, change role, delete."""

    def __init__(
        self, *, user_query_repo: IUserQueryRepo, user_command_repo: IUserCommandRepo
    ) -> None:
        self.user_query_repo = user_query_repo
        self.user_command_repo = user_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
    ) -> Self:
        return cls(user_query_repo=user_query_repo, user_command_repo=user_command_repo)

    async def _get_existing(self, user_id: int) -> UserEntity:
        user = await self.user_query_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError('User not found')
        return user

    @Logger.io
    async def update_user(
        self,
        *,
        user_id: int,
        admin: UserEntity,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
    ) -> UserEntity:
        user = await self._get_existing(user_id)
        if user.id == admin.id and is_active is False:
            raise DomainError('Cannot block your own account')
        if role is not None:
            UserEntity.validate_role(role)

        updated = await self.user_command_repo.update(
            user_id=user_id, role=role, is_active=is_active
        )
        if updated is None:
            raise NotFoundError('User not found')

        Logger.base.info(
            f'👤 [USER-ADMIN] User {user_id} role={updated.role} active={updated.is_active} '
            f'by admin {admin.id}'
        )
        return updated

    @Logger.io
    async def delete_user(self, *, user_id: int, admin: UserEntity) -> None:
        user = await self._get_existing(user_id)
        if user.id == admin.id:
            raise DomainError('Cannot delete your own account')

        if not await self.user_command_repo.delete_without_active_bookings(user_id=user_id):
            raise InvalidStateError('Cannot delete user with active bookings')

        Logger.base.info(f'🗑️ [USER-ADMIN] User {user_id} deleted by admin {admin.id}')

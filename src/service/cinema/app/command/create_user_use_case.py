from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema.domain.entity.user_entity import UserEntity, UserRole


class CreateUserUseCase:
    def __init__(
        self, *, user_command_repo: IUserCommandRepo, password_hasher: IPasswordHasher
    ) -> None:
        self.user_command_repo = user_command_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(user_command_repo=user_command_repo, password_hasher=password_hasher)

    @Logger.io
    async def create_user(
        self,
        *,
        email: str,
        password: str,
        name: str,
        role: UserRole = UserRole.USER,
    ) -> UserEntity:
        UserEntity.validate_role(role)
        user_entity = UserEntity(email=email.lower(), name=name.strip(), role=UserRole(role))
        user_entity.set_password(password, self.password_hasher)

        return await self.user_command_repo.create(user_entity)

from typing import AsyncContextManager, Callable, List, Optional, Tuple

from pydantic import SecretStr
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.cinema.domain.entity.user_entity import UserEntity, UserRole
from src.service.cinema.driven_adapter.model.user_model import UserModel


class UserQueryRepoImpl(IUserQueryRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]],
        password_hasher: IPasswordHasher,
    ) -> None:
        self.session_factory = session_factory
        self.password_hasher = password_hasher

    @Logger.io
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.email == email))
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            return self._model_to_entity(user_model)

    @Logger.io
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            user_model = await session.get(UserModel, user_id)
            return self._model_to_entity(user_model) if user_model else None

    @Logger.io
    async def verify_password(self, email: str, plain_password: str) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.email == email))
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            if not self.password_hasher.verify_password(
                plain_password=SecretStr(plain_password), hashed_password=user_model.hashed_password
            ):
                return None

            return self._model_to_entity(user_model)

    @Logger.io
    async def list_users(
        self,
        *,
        page: int,
        limit: int,
        search: Optional[str] = None,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[UserEntity], int]:
        filters = []
        if search:
            pattern = f'%{search}%'
            filters.append(or_(UserModel.name.ilike(pattern), UserModel.email.ilike(pattern)))
        if role is not None:
            filters.append(UserModel.role == UserRole(role).value)
        if is_active is not None:
            filters.append(UserModel.is_active.is_(is_active))

        async with self.session_factory() as session:
            total = await session.scalar(select(func.count()).select_from(UserModel).where(*filters))
            result = await session.execute(
                select(UserModel)
                .where(*filters)
                .order_by(UserModel.created_at.desc(), UserModel.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            users = [self._model_to_entity(user_model) for user_model in result.scalars().all()]

        return users, total or 0

    def _model_to_entity(self, user_model: UserModel) -> UserEntity:
        return UserEntity(
            id=user_model.id,
            email=user_model.email,
            name=user_model.name,
            role=UserRole(user_model.role),
            is_active=user_model.is_active,
            created_at=user_model.created_at,
        )

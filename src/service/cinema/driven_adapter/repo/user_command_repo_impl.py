from typing import AsyncContextManager, Callable, Optional

from sqlalchemy import delete, exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema.domain.entity.booking_entity import ACTIVE_BOOKING_STATUSES
from src.service.cinema.domain.entity.user_entity import UserEntity, UserRole
from src.service.cinema.driven_adapter.model.booking_model import BookingModel
from src.service.cinema.driven_adapter.model.user_model import UserModel


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, user_entity: UserEntity) -> UserEntity:
        async with self.session_factory() as session:
            user_model = UserModel(
                email=user_entity.email,
                hashed_password=user_entity.hashed_password,
                name=user_entity.name,
                role=user_entity.role,
                is_active=user_entity.is_active,
            )

            session.add(user_model)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise ConflictError(f'User with email {user_entity.email} already exists') from e
            await session.refresh(user_model)

            return self._model_to_entity(user_model)

    @Logger.io
    async def update(
        self,
        *,
        user_id: int,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
    ) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            user_model = await session.get(UserModel, user_id)
            if not user_model:
                return None

            if role is not None:
                user_model.role = UserRole(role).value
            if is_active is not None:
                user_model.is_active = is_active

            await session.commit()
            await session.refresh(user_model)

            return self._model_to_entity(user_model)

    @Logger.io
    async def delete_without_active_bookings(self, *, user_id: int) -> bool:
        # One statement, so a booking committed after the check cannot slip in between
        active_booking = exists().where(
            BookingModel.user_id == user_id,
            BookingModel.status.in_([status.value for status in ACTIVE_BOOKING_STATUSES]),
        )
        async with self.session_factory() as session:
            result = await session.execute(
                delete(UserModel)
                .where(UserModel.id == user_id, ~active_booking)
                .execution_options(synchronize_session=False)
            )
            await session.commit()

        return result.rowcount == 1  # type: ignore[attr-defined]

    def _model_to_entity(self, user_model: UserModel) -> UserEntity:
        return UserEntity(
            id=user_model.id,
            email=user_model.email,
            name=user_model.name,
            role=UserRole(user_model.role),
            is_active=user_model.is_active,
            created_at=user_model.created_at,
        )

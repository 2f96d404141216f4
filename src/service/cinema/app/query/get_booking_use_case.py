from typing import Any, Dict, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema.domain.entity.user_entity import UserEntity


class GetBookingUseCase:
    def __init__(self, *, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @staticmethod
    def _ensure_visible(booking: Dict[str, Any], viewer: UserEntity) -> Dict[str, Any]:
        if not (viewer.is_admin or booking['user_id'] == viewer.id):
            raise ForbiddenError('Not authorized to view this booking')
        return booking

    @Logger.io
    async def get_booking(self, *, booking_id: UUID, viewer: UserEntity) -> Dict[str, Any]:
        booking = await self.booking_query_repo.get_by_id_with_details(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        return self._ensure_visible(booking, viewer)

    @Logger.io
    async def get_booking_by_code(self, *, code: str, viewer: UserEntity) -> Dict[str, Any]:
        booking = await self.booking_query_repo.get_by_code_with_details(
            code=code.strip().upper()
        )
        if not booking:
            raise NotFoundError('Booking not found')
        return self._ensure_visible(booking, viewer)

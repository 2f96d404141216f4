from datetime import datetime
from typing import Any, Dict, List, Optional, Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.pagination import Pagination
from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema.domain.entity.booking_entity import BookingStatus


class ListBookingsUseCase:
    def __init__(self, *, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io
    async def list_user_bookings(
        self,
        *,
        user_id: int,
        page: int = 1,
        limit: int = 10,
        status: Optional[BookingStatus] = None,
    ) -> Tuple[List[Dict[str, Any]], Pagination]:
        bookings, total = await self.booking_query_repo.list_bookings_with_details(
            page=page,
            limit=limit,
            user_id=user_id,
            status=status.value if status else None,
        )
        return bookings, Pagination.build(page=page, limit=limit, total=total)

    @Logger.io
    async def list_all_bookings(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        status: Optional[BookingStatus] = None,
        user_id: Optional[int] = None,
        movie_id: Optional[int] = None,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> Tuple[List[Dict[str, Any]], Pagination]:
        """Admin listing across all users; the date range filters on creation time."""
        bookings, total = await self.booking_query_repo.list_bookings_with_details(
            page=page,
            limit=limit,
            user_id=user_id,
            status=status.value if status else None,
            movie_id=movie_id,
            created_from=created_from,
            created_to=created_to,
        )
        return bookings, Pagination.build(page=page, limit=limit, total=total)

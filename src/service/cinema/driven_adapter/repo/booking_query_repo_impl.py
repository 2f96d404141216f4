from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncContextManager, AsyncIterator, Callable, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.booking_view import to_booking_view
from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema.driven_adapter.model.booking_model import BookingModel
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.user_model import UserModel
from src.service.cinema.driven_adapter.repo.booking_mapper import booking_to_entity


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        """Use the injected session if any, otherwise open one from session_factory."""
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _details_query() -> Select:
        # Outer joins: a booking outlives a deleted movie
        return (
            select(
                BookingModel,
                MovieModel.title,
                MovieModel.poster,
                UserModel.name,
                UserModel.email,
            )
            .outerjoin(MovieModel, MovieModel.id == BookingModel.movie_id)
            .outerjoin(UserModel, UserModel.id == BookingModel.user_id)
        )

    @staticmethod
    def _to_booking_dict(row: Any) -> Dict[str, Any]:
        db_booking, movie_title, movie_poster, user_name, user_email = row
        return to_booking_view(
            booking_to_entity(db_booking),
            movie_title=movie_title,
            movie_poster=movie_poster,
            user_name=user_name,
            user_email=user_email,
        )

    @Logger.io
    async def get_by_id_with_details(self, *, booking_id: UUID) -> Optional[Dict[str, Any]]:
        async with self._get_session() as session:
            result = await session.execute(
                self._details_query().where(BookingModel.id == booking_id)
            )
            row = result.first()
            return self._to_booking_dict(row) if row else None

    @Logger.io
    async def get_by_code_with_details(self, *, code: str) -> Optional[Dict[str, Any]]:
        async with self._get_session() as session:
            result = await session.execute(
                self._details_query().where(BookingModel.booking_code == code)
            )
            row = result.first()
            return self._to_booking_dict(row) if row else None

    @Logger.io
    async def list_bookings_with_details(
        self,
        *,
        page: int,
        limit: int,
        user_id: Optional[int] = None,
        status: Optional[str] = None,
        movie_id: Optional[int] = None,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> Tuple[List[Dict[str, Any]], int]:
        filters = []
        if user_id is not None:
            filters.append(BookingModel.user_id == user_id)
        if status:
            filters.append(BookingModel.status == status)
        if movie_id is not None:
            filters.append(BookingModel.movie_id == movie_id)
        if created_from is not None:
            filters.append(BookingModel.created_at >= created_from)
        if created_to is not None:
            filters.append(BookingModel.created_at <= created_to)

        async with self._get_session() as session:
            total = await session.scalar(
                select(func.count()).select_from(BookingModel).where(*filters)
            )
            result = await session.execute(
                self._details_query()
                .where(*filters)
                .order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            bookings = [self._to_booking_dict(row) for row in result.all()]

        return bookings, total or 0

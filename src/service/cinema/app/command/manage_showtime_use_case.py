"""
Admin mutations of a movie's showtimes

available_seats changes here only on resize; bookings and cancellations go
through the conditional updates of the booking use cases.
"""

from datetime import date
from typing import Optional, Self

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.cinema.domain.entity.movie_entity import Movie, Showtime


class ManageShowtimeUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    async def _load_movie(self, movie_id: int, *, lock_showtimes: bool = False) -> Movie:
        movie = await self.uow.movie_command_repo.get_by_id(
            movie_id=movie_id, lock_showtimes=lock_showtimes
        )
        if not movie:
            raise NotFoundError('Movie not found')
        return movie

    @Logger.io
    async def add_showtime(
        self, *, movie_id: int, date: date, time: str, price: float, total_seats: int
    ) -> Showtime:
        async with self.uow:
            movie = await self._load_movie(movie_id)
            showtime = movie.add_showtime(
                Showtime.create(date=date, time=time, price=price, total_seats=total_seats)
            )
            created = await self.uow.movie_command_repo.add_showtime(
                movie_id=movie_id, showtime=showtime
            )
            await self.uow.commit()

        Logger.base.info(
            f'🕒 [SHOWTIME] Added {created.date} {created.time} to movie {movie_id} '
            f'({created.total_seats} seats)'
        )
        return created

    @Logger.io
    async def update_showtime(
        self,
        *,
        movie_id: int,
        showtime_id: int,
        date: Optional[date] = None,
        time: Optional[str] = None,
        price: Optional[float] = None,
        total_seats: Optional[int] = None,
        is_active: Optional[bool] = None,
    ) -> Showtime:
        async with self.uow:
            # Lock so a concurrent booking cannot slip between read and recompute
            movie = await self._load_movie(movie_id, lock_showtimes=True)
            current = movie.get_showtime(showtime_id)
            updated = current.apply_update(
                date=date,
                time=time,
                price=price,
                total_seats=total_seats,
                is_active=is_active,
            )
            if (updated.date, updated.time) != (current.date, current.time):
                movie.ensure_slot_free(date=updated.date, time=updated.time, exclude_id=showtime_id)

            updated = await self.uow.movie_command_repo.update_showtime(showtime=updated)
            await self.uow.commit()

        metrics.update_available_seats(
            movie_id=movie_id, showtime_id=showtime_id, available=updated.available_seats
        )
        return updated

    @Logger.io
    async def delete_showtime(self, *, movie_id: int, showtime_id: int) -> None:
        async with self.uow:
            movie = await self._load_movie(movie_id)
            movie.get_showtime(showtime_id)
            await self.uow.movie_command_repo.delete_showtime(showtime_id=showtime_id)
            await self.uow.commit()

        Logger.base.info(f'🗑️ [SHOWTIME] Deleted showtime {showtime_id} of movie {movie_id}')

"""
Movie Command Repository Implementation - write side, bound to the unit of work session

Seat inventory is changed with conditional UPDATE statements so concurrent
bookings can never push available_seats below zero or above total_seats.
"""

from typing import Optional

from sqlalchemy import case, delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_command_repo import IMovieCommandRepo
from src.service.cinema.domain.entity.movie_entity import Movie, Showtime
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.repo.movie_mapper import (
    movie_to_entity,
    showtime_to_entity,
    showtime_to_model,
)


DUPLICATE_SHOWTIME_MESSAGE = 'Showtime already exists for this date and time'


class MovieCommandRepoImpl(IMovieCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _get_model(self, movie_id: int) -> Optional[MovieModel]:
        result = await self.session.execute(
            select(MovieModel)
            .where(MovieModel.id == movie_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @Logger.io
    async def get_by_id(self, *, movie_id: int, lock_showtimes: bool = False) -> Optional[Movie]:
        if lock_showtimes:
            # Row locks on Postgres; SQLite serialises writers and ignores FOR UPDATE
            await self.session.execute(
                select(ShowtimeModel.id)
                .where(ShowtimeModel.movie_id == movie_id)
                .with_for_update()
            )

        db_movie = await self._get_model(movie_id)
        return movie_to_entity(db_movie) if db_movie else None

    @Logger.io
    async def create(self, *, movie: Movie) -> Movie:
        db_movie = MovieModel(
            title=movie.title,
            description=movie.description,
            genre=list(movie.genre),
            duration=movie.duration,
            rating=movie.rating,
            poster=movie.poster,
            trailer=movie.trailer,
            director=movie.director,
            cast=list(movie.cast),
            release_date=movie.release_date,
            language=movie.language,
            is_active=movie.is_active,
            featured=movie.featured,
            created_at=movie.created_at,
            updated_at=movie.updated_at,
            showtimes=[showtime_to_model(st) for st in movie.showtimes],
        )
        self.session.add(db_movie)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DomainError(DUPLICATE_SHOWTIME_MESSAGE) from e

        Logger.base.info(f'🎬 [MOVIE] Created movie {db_movie.id} "{db_movie.title}"')
        return movie_to_entity(db_movie)

    @Logger.io
    async def update(self, *, movie: Movie) -> Movie:
        if movie.id is None:
            raise ValueError('Movie must be persisted before update')

        db_movie = await self._get_model(movie.id)
        if not db_movie:
            raise NotFoundError('Movie not found')

        db_movie.title = movie.title
        db_movie.description = movie.description
        db_movie.genre = list(movie.genre)
        db_movie.duration = movie.duration
        db_movie.rating = movie.rating
        db_movie.poster = movie.poster
        db_movie.trailer = movie.trailer
        db_movie.director = movie.director
        db_movie.cast = list(movie.cast)
        db_movie.release_date = movie.release_date
        db_movie.language = movie.language
        db_movie.is_active = movie.is_active
        db_movie.featured = movie.featured
        db_movie.updated_at = movie.updated_at  # type: ignore[assignment]

        await self.session.flush()
        return movie_to_entity(db_movie)

    @Logger.io
    async def delete(self, *, movie_id: int) -> None:
        await self.session.execute(delete(ShowtimeModel).where(ShowtimeModel.movie_id == movie_id))
        await self.session.execute(delete(MovieModel).where(MovieModel.id == movie_id))
        Logger.base.info(f'🗑️ [MOVIE] Deleted movie {movie_id}')

    @Logger.io
    async def add_showtime(self, *, movie_id: int, showtime: Showtime) -> Showtime:
        db_showtime = showtime_to_model(showtime, movie_id=movie_id)
        self.session.add(db_showtime)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DomainError(DUPLICATE_SHOWTIME_MESSAGE) from e

        return showtime_to_entity(db_showtime)

    @Logger.io
    async def update_showtime(self, *, showtime: Showtime) -> Showtime:
        try:
            result = await self.session.execute(
                update(ShowtimeModel)
                .where(ShowtimeModel.id == showtime.id)
                .values(
                    date=showtime.date,
                    time=showtime.time,
                    price=showtime.price,
                    total_seats=showtime.total_seats,
                    available_seats=showtime.available_seats,
                    is_active=showtime.is_active,
                )
                .execution_options(synchronize_session=False)
            )
        except IntegrityError as e:
            raise DomainError(DUPLICATE_SHOWTIME_MESSAGE) from e

        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise NotFoundError('Showtime not found')
        return showtime

    @Logger.io
    async def delete_showtime(self, *, showtime_id: int) -> None:
        await self.session.execute(
            delete(ShowtimeModel)
            .where(ShowtimeModel.id == showtime_id)
            .execution_options(synchronize_session=False)
        )

    @Logger.io
    async def reserve_seats(self, *, showtime_id: int, quantity: int) -> Optional[int]:
        result = await self.session.execute(
            update(ShowtimeModel)
            .where(
                ShowtimeModel.id == showtime_id,
                ShowtimeModel.available_seats >= quantity,
            )
            .values(available_seats=ShowtimeModel.available_seats - quantity)
            .returning(ShowtimeModel.available_seats)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none()

    @Logger.io
    async def release_seats(self, *, showtime_id: int, quantity: int) -> Optional[int]:
        restored = ShowtimeModel.available_seats + quantity
        result = await self.session.execute(
            update(ShowtimeModel)
            .where(ShowtimeModel.id == showtime_id)
            .values(
                available_seats=case(
                    (restored > ShowtimeModel.total_seats, ShowtimeModel.total_seats),
                    else_=restored,
                )
            )
            .returning(ShowtimeModel.available_seats)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none()

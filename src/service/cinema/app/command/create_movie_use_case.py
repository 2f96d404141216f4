from datetime import date
from typing import Any, Dict, List, Optional, Self

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.movie_entity import Movie, Showtime


class CreateMovieUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create_movie(
        self,
        *,
        title: str,
        description: str,
        genre: List[str],
        duration: int,
        director: str,
        cast: List[str],
        release_date: date,
        language: str,
        poster: str,
        rating: float = 0,
        trailer: Optional[str] = None,
        featured: bool = False,
        showtimes: Optional[List[Dict[str, Any]]] = None,
    ) -> Movie:
        """
        Create a movie, optionally with its initial showtimes.

        Each showtime dict carries date, time, price and total_seats; every
        showtime starts fully available.
        """
        movie = Movie.create(
            title=title,
            description=description,
            genre=genre,
            duration=duration,
            director=director,
            cast=cast,
            release_date=release_date,
            language=language,
            poster=poster,
            rating=rating,
            trailer=trailer,
            featured=featured,
            showtimes=[
                Showtime.create(
                    date=st['date'],
                    time=st['time'],
                    price=st['price'],
                    total_seats=st['total_seats'],
                )
                for st in showtimes or []
            ],
        )

        async with self.uow:
            created = await self.uow.movie_command_repo.create(movie=movie)
            await self.uow.commit()

        return created

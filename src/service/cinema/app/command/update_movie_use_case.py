from typing import Any, Self

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.movie_entity import Movie


UPDATABLE_MOVIE_FIELDS = frozenset(
    {
        'title',
        'description',
        'genre',
        'duration',
        'rating',
        'poster',
        'trailer',
        'director',
        'cast',
        'release_date',
        'language',
        'is_active',
        'featured',
    }
)


class UpdateMovieUseCase:
    """Partial update of catalogue fields; showtimes have their own use case."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def update_movie(self, *, movie_id: int, **fields: Any) -> Movie:
        unknown = set(fields) - UPDATABLE_MOVIE_FIELDS
        if unknown:
            raise ValueError(f'Cannot update movie fields: {", ".join(sorted(unknown))}')

        async with self.uow:
            movie = await self.uow.movie_command_repo.get_by_id(movie_id=movie_id)
            if not movie:
                raise NotFoundError('Movie not found')

            updated = await self.uow.movie_command_repo.update(movie=movie.update(**fields))
            await self.uow.commit()

        return updated

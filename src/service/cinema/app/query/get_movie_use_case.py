from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_query_repo import IMovieQueryRepo
from src.service.cinema.domain.entity.movie_entity import Movie


class GetMovieUseCase:
    def __init__(self, *, movie_query_repo: IMovieQueryRepo) -> None:
        self.movie_query_repo = movie_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        movie_query_repo: IMovieQueryRepo = Depends(Provide[Container.movie_query_repo]),
    ) -> Self:
        return cls(movie_query_repo=movie_query_repo)

    @Logger.io
    async def get_movie(self, *, movie_id: int) -> Movie:
        """Movie with all of its showtimes, whether or not the movie is listed."""
        movie = await self.movie_query_repo.get_by_id(movie_id=movie_id)
        if movie is None:
            Logger.base.warning(f'⚠️ [GET_MOVIE] Movie {movie_id} not found')
            raise NotFoundError('Movie not found')
        return movie

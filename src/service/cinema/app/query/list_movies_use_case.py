from typing import List, Optional, Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.pagination import Pagination
from src.service.cinema.app.interface.i_movie_query_repo import IMovieQueryRepo
from src.service.cinema.domain.entity.movie_entity import Movie


class ListMoviesUseCase:
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
    async def list_movies(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        genre: Optional[str] = None,
        featured: Optional[bool] = None,
    ) -> Tuple[List[Movie], Pagination]:
        movies, total = await self.movie_query_repo.list_movies(
            page=page,
            limit=limit,
            search=search.strip() if search else None,
            genre=genre.strip() if genre else None,
            featured=featured,
        )
        return movies, Pagination.build(page=page, limit=limit, total=total)

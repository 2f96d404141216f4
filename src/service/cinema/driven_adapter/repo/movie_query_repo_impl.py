from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional, Tuple

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_query_repo import IMovieQueryRepo
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.repo.movie_mapper import movie_to_entity


class MovieQueryRepoImpl(IMovieQueryRepo):
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

    @Logger.io
    async def get_by_id(self, *, movie_id: int) -> Optional[Movie]:
        async with self._get_session() as session:
            db_movie = await session.get(MovieModel, movie_id)
            return movie_to_entity(db_movie) if db_movie else None

    @Logger.io
    async def list_movies(
        self,
        *,
        page: int,
        limit: int,
        search: Optional[str] = None,
        genre: Optional[str] = None,
        featured: Optional[bool] = None,
    ) -> Tuple[List[Movie], int]:
        filters = [MovieModel.is_active.is_(True)]
        if search:
            pattern = f'%{search}%'
            filters.append(
                or_(MovieModel.title.ilike(pattern), MovieModel.description.ilike(pattern))
            )
        if genre:
            # genre is a JSON array of strings; match the quoted element
            filters.append(cast(MovieModel.genre, String).ilike(f'%"{genre}"%'))
        if featured is not None:
            filters.append(MovieModel.featured.is_(featured))

        async with self._get_session() as session:
            total = await session.scalar(select(func.count()).select_from(MovieModel).where(*filters))
            result = await session.execute(
                select(MovieModel)
                .where(*filters)
                .order_by(MovieModel.created_at.desc(), MovieModel.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            movies = [movie_to_entity(db_movie) for db_movie in result.scalars().all()]

        return movies, total or 0

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.service.cinema.domain.entity.movie_entity import Movie


class IMovieQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, movie_id: int) -> Optional[Movie]:
        pass

    @abstractmethod
    async def list_movies(
        self,
        *,
        page: int,
        limit: int,
        search: Optional[str] = None,
        genre: Optional[str] = None,
        featured: Optional[bool] = None,
    ) -> Tuple[List[Movie], int]:
        """Active movies, newest first. Returns (page items, total count)"""
        pass

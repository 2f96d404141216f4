from abc import ABC, abstractmethod
from typing import Optional

from src.service.cinema.domain.entity.movie_entity import Movie, Showtime


class IMovieCommandRepo(ABC):
    """Write side of the movie catalogue; always used inside a unit of work."""

    @abstractmethod
    async def get_by_id(self, *, movie_id: int, lock_showtimes: bool = False) -> Optional[Movie]:
        """Load a movie with its showtimes; lock_showtimes takes row locks where supported"""
        pass

    @abstractmethod
    async def create(self, *, movie: Movie) -> Movie:
        pass

    @abstractmethod
    async def update(self, *, movie: Movie) -> Movie:
        """Update catalogue fields only, showtimes are changed through the showtime methods"""
        pass

    @abstractmethod
    async def delete(self, *, movie_id: int) -> None:
        pass

    @abstractmethod
    async def add_showtime(self, *, movie_id: int, showtime: Showtime) -> Showtime:
        pass

    @abstractmethod
    async def update_showtime(self, *, showtime: Showtime) -> Showtime:
        pass

    @abstractmethod
    async def delete_showtime(self, *, showtime_id: int) -> None:
        pass

    @abstractmethod
    async def reserve_seats(self, *, showtime_id: int, quantity: int) -> Optional[int]:
        """
        Atomically take quantity seats if at least that many are available.

        Returns:
            Remaining available seats, or None when capacity was insufficient
        """
        pass

    @abstractmethod
    async def release_seats(self, *, showtime_id: int, quantity: int) -> Optional[int]:
        """Give quantity seats back, never exceeding total_seats. Returns None if the showtime is gone."""
        pass

from typing import Self

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import InvalidStateError, NotFoundError
from src.platform.logging.loguru_io import Logger


class DeleteMovieUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def delete_movie(self, *, movie_id: int) -> None:
        async with self.uow:
            movie = await self.uow.movie_command_repo.get_by_id(movie_id=movie_id)
            if not movie:
                raise NotFoundError('Movie not found')

            # Active bookings must keep pointing at an existing movie and showtime
            if await self.uow.booking_command_repo.has_active_bookings(movie_id=movie_id):
                raise InvalidStateError('Cannot delete movie with active bookings')

            await self.uow.movie_command_repo.delete(movie_id=movie_id)
            await self.uow.commit()

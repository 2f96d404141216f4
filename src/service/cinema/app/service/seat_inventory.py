from typing import Optional

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.cinema.domain.entity.booking_entity import Booking


@Logger.io
async def release_booking_seats(*, uow: AbstractUnitOfWork, booking: Booking) -> Optional[int]:
    """
    Give a cancelled booking's seats back to its showtime.

    The showtime is re-resolved by (date, time) whether active or not. When it
    no longer exists only the seat claims are dropped and None is returned.
    """
    await uow.booking_command_repo.release_seat_claims(booking_id=booking.id)

    movie = await uow.movie_command_repo.get_by_id(movie_id=booking.movie_id)
    showtime = (
        movie.find_showtime(date=booking.showtime_date, time=booking.showtime_time)
        if movie
        else None
    )
    if not showtime or showtime.id is None:
        Logger.base.warning(
            f'🪑 [RELEASE-SEATS] Showtime {booking.showtime_date} {booking.showtime_time} of movie '
            f'{booking.movie_id} is gone, skipping inventory restore for {booking.booking_code}'
        )
        return None

    available = await uow.movie_command_repo.release_seats(
        showtime_id=showtime.id, quantity=booking.quantity
    )
    if available is not None:
        metrics.update_available_seats(
            movie_id=booking.movie_id, showtime_id=showtime.id, available=available
        )
    return available

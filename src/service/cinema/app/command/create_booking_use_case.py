from datetime import date
import time
from typing import Any, Dict, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils.compat

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import (
    CapacityExceededError,
    CustomBaseError,
    NotFoundError,
    SeatConflictError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.cinema.app.dto.booking_view import to_booking_view
from src.service.cinema.app.service.booking_code_generator import BookingCodeGenerator
from src.service.cinema.domain.entity.booking_entity import (
    Booking,
    PaymentMethod,
    normalize_seat_labels,
)
from src.service.cinema.domain.entity.movie_entity import normalize_time_label


_RESULT_BY_ERROR = {
    CapacityExceededError: 'capacity_exceeded',
    SeatConflictError: 'seat_conflict',
    NotFoundError: 'not_found',
}


class CreateBookingUseCase:
    """
    Reserve seats of one showtime in a single transaction.

    Flow:
    1. Validate the seat selection
    2. Load the movie and its active showtime for (date, time)
    3. Fail fast on seats held by active bookings, then on capacity
    4. Insert the booking with a fresh booking code and its seat claims
    5. Atomically decrement available_seats (WHERE available_seats >= quantity)
    6. Commit

    Steps 4 and 5 re-check 3 inside the database, so two concurrent requests
    cannot both win: the loser rolls back with SeatConflictError or
    CapacityExceededError.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        code_generator: BookingCodeGenerator,
    ) -> None:
        self.uow = uow
        self.code_generator = code_generator
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        code_generator: BookingCodeGenerator = Depends(
            Provide[Container.booking_code_generator]
        ),
    ) -> Self:
        return cls(uow=uow, code_generator=code_generator)

    @Logger.io
    async def create_booking(
        self,
        *,
        user_id: int,
        movie_id: int,
        showtime_date: date,
        showtime_time: str,
        seats: List[str],
        quantity: int,
        payment_method: PaymentMethod,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        start_time = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={
                'user.id': user_id,
                'movie.id': movie_id,
                'showtime.date': showtime_date.isoformat(),
                'showtime.time': showtime_time,
                'booking.quantity': quantity,
            },
        ) as span:
            try:
                view = await self._create_booking(
                    user_id=user_id,
                    movie_id=movie_id,
                    showtime_date=showtime_date,
                    showtime_time=showtime_time,
                    seats=seats,
                    quantity=quantity,
                    payment_method=payment_method,
                    notes=notes,
                )
            except CustomBaseError as e:
                result = _RESULT_BY_ERROR.get(type(e), 'rejected')
                span.set_attribute('booking.result', result)
                metrics.record_booking_attempt(
                    result=result, duration=time.perf_counter() - start_time
                )
                raise

            span.set_attribute('booking.id', str(view['id']))
            span.set_attribute('booking.result', 'success')
            metrics.record_booking_attempt(
                result='success', duration=time.perf_counter() - start_time
            )
            return view

    async def _create_booking(
        self,
        *,
        user_id: int,
        movie_id: int,
        showtime_date: date,
        showtime_time: str,
        seats: List[str],
        quantity: int,
        payment_method: PaymentMethod,
        notes: Optional[str],
    ) -> Dict[str, Any]:
        seat_labels = normalize_seat_labels(seats, quantity)
        showtime_time = normalize_time_label(showtime_time)

        async with self.uow:
            movie = await self.uow.movie_command_repo.get_by_id(movie_id=movie_id)
            if not movie:
                raise NotFoundError('Movie not found')

            showtime = movie.find_bookable_showtime(date=showtime_date, time=showtime_time)
            if not showtime or showtime.id is None:
                raise NotFoundError('Showtime not found or inactive')

            booked_seats = await self.uow.booking_command_repo.get_booked_seats(
                movie_id=movie_id, showtime_date=showtime_date, showtime_time=showtime_time
            )
            conflicts = [seat for seat in seat_labels if seat in booked_seats]
            if conflicts:
                raise SeatConflictError(conflicts)

            if not showtime.has_capacity_for(quantity):
                raise CapacityExceededError()

            booking_code = await self.code_generator.generate(
                code_exists=self.uow.booking_command_repo.code_exists
            )
            booking = Booking.create(
                id=uuid_utils.compat.uuid7(),
                user_id=user_id,
                movie_id=movie_id,
                showtime_date=showtime_date,
                showtime_time=showtime_time,
                seats=seat_labels,
                quantity=quantity,
                price=showtime.price,
                payment_method=payment_method,
                booking_code=booking_code,
                notes=notes,
            )
            booking = await self.uow.booking_command_repo.create(booking=booking)

            available = await self.uow.movie_command_repo.reserve_seats(
                showtime_id=showtime.id, quantity=quantity
            )
            if available is None:
                raise CapacityExceededError()

            await self.uow.commit()

        Logger.base.info(
            f'🎟️ [CREATE-BOOKING] {booking.booking_code} user={user_id} movie={movie_id} '
            f'{showtime_date} {showtime_time} seats={booking.seats} available={available}'
        )
        metrics.record_seats_booked(
            movie_id=movie_id, showtime_id=showtime.id, quantity=quantity, available=available
        )

        return to_booking_view(booking, movie_title=movie.title, movie_poster=movie.poster)

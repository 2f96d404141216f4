"""
Booking Command Repository Implementation - write side, bound to the unit of work session

Every seat of an active booking is also written to seat_claim. Its unique key
(movie, date, time, seat) is what finally rejects two concurrent requests for
the same seat, after the optimistic scan in the use case.
"""

from datetime import date
from typing import List, Optional, Set
from uuid import UUID

from sqlalchemy import delete, exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError, SeatConflictError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.cinema.domain.entity.booking_entity import (
    ACTIVE_BOOKING_STATUSES,
    Booking,
    BookingStatus,
)
from src.service.cinema.driven_adapter.model.booking_model import BookingModel
from src.service.cinema.driven_adapter.model.seat_claim_model import SeatClaimModel
from src.service.cinema.driven_adapter.repo.booking_mapper import booking_to_entity


_ACTIVE_STATUS_VALUES = [status.value for status in ACTIVE_BOOKING_STATUSES]


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingModel)
            .where(BookingModel.id == booking_id)
            .execution_options(populate_existing=True)
        )
        db_booking = result.scalar_one_or_none()
        return booking_to_entity(db_booking) if db_booking else None

    @Logger.io
    async def code_exists(self, code: str) -> bool:
        result = await self.session.execute(
            select(exists().where(BookingModel.booking_code == code))
        )
        return bool(result.scalar())

    @Logger.io
    async def get_booked_seats(
        self, *, movie_id: int, showtime_date: date, showtime_time: str
    ) -> Set[str]:
        result = await self.session.execute(
            select(BookingModel.seats).where(
                BookingModel.movie_id == movie_id,
                BookingModel.showtime_date == showtime_date,
                BookingModel.showtime_time == showtime_time,
                BookingModel.status.in_(_ACTIVE_STATUS_VALUES),
            )
        )
        return {seat for seats in result.scalars() for seat in seats or []}

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        db_booking = BookingModel(
            id=booking.id,
            user_id=booking.user_id,
            movie_id=booking.movie_id,
            showtime_date=booking.showtime_date,
            showtime_time=booking.showtime_time,
            seats=list(booking.seats),
            quantity=booking.quantity,
            total_amount=booking.total_amount,
            status=booking.status.value,
            payment_method=booking.payment_method.value,
            payment_status=booking.payment_status.value,
            booking_code=booking.booking_code,
            notes=booking.notes,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )
        self.session.add(db_booking)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError('Booking code already in use, please retry') from e

        claims = [
            SeatClaimModel(
                booking_id=booking.id,
                movie_id=booking.movie_id,
                showtime_date=booking.showtime_date,
                showtime_time=booking.showtime_time,
                seat=seat,
            )
            for seat in booking.seats
        ]
        try:
            # Savepoint keeps the outer transaction usable for the lookup below
            async with self.session.begin_nested():
                self.session.add_all(claims)
                await self.session.flush()
        except IntegrityError as e:
            taken = await self._claimed_seats(booking)
            Logger.base.warning(
                f'⚔️ [SEAT-CLAIM] Concurrent claim on {taken} for movie {booking.movie_id} '
                f'{booking.showtime_date} {booking.showtime_time}'
            )
            raise SeatConflictError(taken or list(booking.seats)) from e

        return booking

    async def _claimed_seats(self, booking: Booking) -> List[str]:
        result = await self.session.execute(
            select(SeatClaimModel.seat).where(
                SeatClaimModel.movie_id == booking.movie_id,
                SeatClaimModel.showtime_date == booking.showtime_date,
                SeatClaimModel.showtime_time == booking.showtime_time,
                SeatClaimModel.seat.in_(booking.seats),
            )
        )
        claimed = set(result.scalars())
        return [seat for seat in booking.seats if seat in claimed]

    @Logger.io
    async def update(self, *, booking: Booking, expected_status: BookingStatus) -> bool:
        result = await self.session.execute(
            update(BookingModel)
            .where(
                BookingModel.id == booking.id,
                BookingModel.status == BookingStatus(expected_status).value,
            )
            .values(
                status=booking.status.value,
                payment_status=booking.payment_status.value,
                cancelled_at=booking.cancelled_at,
                cancelled_by=booking.cancelled_by,
                cancellation_reason=booking.cancellation_reason,
                updated_at=booking.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def release_seat_claims(self, *, booking_id: UUID) -> int:
        result = await self.session.execute(
            delete(SeatClaimModel)
            .where(SeatClaimModel.booking_id == booking_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount  # type: ignore[attr-defined]

    @Logger.io
    async def has_active_bookings(self, *, movie_id: int) -> bool:
        result = await self.session.execute(
            select(
                exists().where(
                    BookingModel.movie_id == movie_id,
                    BookingModel.status.in_(_ACTIVE_STATUS_VALUES),
                )
            )
        )
        return bool(result.scalar())

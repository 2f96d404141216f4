from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, Set
from uuid import UUID

from src.service.cinema.domain.entity.booking_entity import Booking, BookingStatus


class IBookingCommandRepo(ABC):
    """Write side of bookings; always used inside a unit of work."""

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def code_exists(self, code: str) -> bool:
        pass

    @abstractmethod
    async def get_booked_seats(
        self, *, movie_id: int, showtime_date: date, showtime_time: str
    ) -> Set[str]:
        """Union of seat labels held by active bookings of one showtime"""
        pass

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Insert the booking and one seat claim per seat.

        Raises:
            SeatConflictError: a concurrent booking already claimed one of the seats
        """
        pass

    @abstractmethod
    async def update(self, *, booking: Booking, expected_status: BookingStatus) -> bool:
        """Write status and cancellation fields if the stored status is still expected_status"""
        pass

    @abstractmethod
    async def release_seat_claims(self, *, booking_id: UUID) -> int:
        pass

    @abstractmethod
    async def has_active_bookings(self, *, movie_id: int) -> bool:
        pass

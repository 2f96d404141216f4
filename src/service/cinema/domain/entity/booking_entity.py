from datetime import date, datetime, timedelta, timezone, tzinfo
from enum import StrEnum
from typing import List, Optional
from uuid import UUID

import attrs

from src.platform.exception.exceptions import (
    CancellationWindowExpiredError,
    DomainError,
    InvalidStateError,
)
from src.platform.logging.loguru_io import Logger


MAX_NOTES_LENGTH = 500
MAX_CANCELLATION_REASON_LENGTH = 200


class BookingStatus(StrEnum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'


# Bookings in these states hold seats and count against showtime inventory
ACTIVE_BOOKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})


class PaymentMethod(StrEnum):
    CREDIT_CARD = 'credit_card'
    DEBIT_CARD = 'debit_card'
    CASH = 'cash'
    ONLINE = 'online'


class PaymentStatus(StrEnum):
    PENDING = 'pending'
    COMPLETED = 'completed'
    FAILED = 'failed'
    REFUNDED = 'refunded'


def normalize_seat_labels(seats: List[str], quantity: int) -> List[str]:
    """Trim and upper-case seat labels, rejecting empty, duplicated or miscounted selections."""
    labels = [seat.strip().upper() for seat in seats if seat and seat.strip()]
    if not labels:
        raise DomainError('At least one seat must be selected')
    if quantity < 1:
        raise DomainError('Quantity must be at least 1')

    duplicates = sorted({label for label in labels if labels.count(label) > 1})
    if duplicates:
        raise DomainError(f'Duplicate seats in request: {", ".join(duplicates)}')

    if quantity != len(labels):
        raise DomainError('Quantity must match the number of selected seats')

    return labels


@attrs.define
class Booking:
    id: UUID
    user_id: int
    movie_id: int
    showtime_date: date
    showtime_time: str
    seats: List[str]
    quantity: int
    total_amount: float
    payment_method: PaymentMethod
    booking_code: str
    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    cancelled_by: Optional[int] = None
    cancellation_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        user_id: int,
        movie_id: int,
        showtime_date: date,
        showtime_time: str,
        seats: List[str],
        quantity: int,
        price: float,
        payment_method: PaymentMethod,
        booking_code: str,
        notes: Optional[str] = None,
    ) -> 'Booking':
        labels = normalize_seat_labels(seats, quantity)

        if notes is not None and len(notes) > MAX_NOTES_LENGTH:
            raise DomainError(f'Notes cannot exceed {MAX_NOTES_LENGTH} characters')

        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            user_id=user_id,
            movie_id=movie_id,
            showtime_date=showtime_date,
            showtime_time=showtime_time,
            seats=labels,
            quantity=quantity,
            total_amount=round(price * quantity, 2),
            payment_method=PaymentMethod(payment_method),
            booking_code=booking_code,
            status=BookingStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_BOOKING_STATUSES

    def is_owned_by(self, user_id: Optional[int]) -> bool:
        return user_id is not None and self.user_id == user_id

    def showtime_starts_at(self, tz: tzinfo) -> datetime:
        """Start of the booked showtime; the time label is wall-clock time in the cinema zone."""
        hours, minutes = (int(part) for part in self.showtime_time.split(':'))
        return datetime(
            self.showtime_date.year,
            self.showtime_date.month,
            self.showtime_date.day,
            hours,
            minutes,
            tzinfo=tz,
        )

    @Logger.io
    def ensure_cancellable(self, *, now: datetime, tz: tzinfo, window_hours: int) -> None:
        """
        Raises:
            InvalidStateError: booking is already cancelled or completed
            CancellationWindowExpiredError: less than window_hours before the showtime
        """
        if self.status == BookingStatus.CANCELLED:
            raise InvalidStateError('Booking is already cancelled')
        if self.status == BookingStatus.COMPLETED:
            raise InvalidStateError('Cannot cancel completed booking')

        # Exactly window_hours before the start is still allowed
        if self.showtime_starts_at(tz) - now < timedelta(hours=window_hours):
            raise CancellationWindowExpiredError(window_hours)

    @Logger.io
    def cancel(self, *, cancelled_by: int, reason: str, now: datetime) -> 'Booking':
        if len(reason) > MAX_CANCELLATION_REASON_LENGTH:
            raise DomainError(
                f'Cancellation reason cannot exceed {MAX_CANCELLATION_REASON_LENGTH} characters'
            )

        return attrs.evolve(
            self,
            status=BookingStatus.CANCELLED,
            cancelled_at=now,
            cancelled_by=cancelled_by,
            cancellation_reason=reason,
            updated_at=now,
        )

    @Logger.io
    def change_status(
        self, *, status: BookingStatus, changed_by: int, reason: Optional[str], now: datetime
    ) -> 'Booking':
        """
        Administrative status change.

        Active bookings may move to any status. Cancelled and completed bookings
        are final: their seats may already be resold.
        """
        status = BookingStatus(status)
        if status == self.status:
            return self

        if self.status == BookingStatus.CANCELLED:
            raise InvalidStateError('Cannot reactivate a cancelled booking')
        if self.status == BookingStatus.COMPLETED:
            raise InvalidStateError('Cannot change status of completed booking')

        if status == BookingStatus.CANCELLED:
            return self.cancel(cancelled_by=changed_by, reason=reason or 'Cancelled by admin', now=now)

        return attrs.evolve(self, status=status, updated_at=now)

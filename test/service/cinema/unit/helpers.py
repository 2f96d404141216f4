from datetime import date, datetime, timezone
from typing import List, Optional
from unittest.mock import AsyncMock, MagicMock
import uuid

from src.service.cinema.domain.entity.booking_entity import Booking, BookingStatus, PaymentMethod
from src.service.cinema.domain.entity.movie_entity import Movie, Showtime
from src.service.cinema.domain.entity.user_entity import UserEntity, UserRole


SHOW_DATE = date(2025, 1, 10)
SHOW_TIME = '19:30'
BOOKING_ID = uuid.UUID('01940000-0000-7000-8000-00000000000a')


def make_showtime(
    *,
    id: int = 11,
    total_seats: int = 10,
    available_seats: Optional[int] = None,
    is_active: bool = True,
    price: float = 12.5,
) -> Showtime:
    return Showtime(
        id=id,
        date=SHOW_DATE,
        time=SHOW_TIME,
        price=price,
        total_seats=total_seats,
        available_seats=total_seats if available_seats is None else available_seats,
        is_active=is_active,
    )


def make_movie(*, showtimes: Optional[List[Showtime]] = None, id: int = 1) -> Movie:
    return Movie(
        id=id,
        title='The Grand Premiere',
        description='A story about a cinema that never closes.',
        genre=['Drama'],
        duration=120,
        director='Jane Doe',
        cast=['Actor One'],
        release_date=date(2025, 1, 1),
        language='English',
        poster='poster.jpg',
        showtimes=[make_showtime()] if showtimes is None else showtimes,
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )


def make_booking(
    *,
    status: BookingStatus = BookingStatus.PENDING,
    user_id: int = 2,
    seats: Optional[List[str]] = None,
) -> Booking:
    seats = seats or ['A1', 'A2']
    return Booking(
        id=BOOKING_ID,
        user_id=user_id,
        movie_id=1,
        showtime_date=SHOW_DATE,
        showtime_time=SHOW_TIME,
        seats=seats,
        quantity=len(seats),
        total_amount=12.5 * len(seats),
        payment_method=PaymentMethod.CREDIT_CARD,
        booking_code='ABCD1234',
        status=status,
        created_at=datetime(2025, 1, 5, tzinfo=timezone.utc),
        updated_at=datetime(2025, 1, 5, tzinfo=timezone.utc),
    )


def make_user(*, id: int = 2, role: UserRole = UserRole.USER) -> UserEntity:
    return UserEntity(id=id, email=f'user{id}@test.com', name=f'User {id}', role=role)


def make_uow() -> MagicMock:
    """Unit of work double: async context manager holding AsyncMock repositories."""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=None)
    uow.commit = AsyncMock()
    uow.movie_command_repo = AsyncMock()
    uow.booking_command_repo = AsyncMock()
    return uow

"""
Seat claims at the repository level

Two bookings racing for the same seat both pass the application-level scan;
the seat_claim unique key is what rejects the second insert.
"""

from datetime import date, datetime, timezone
import os
import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.exception.exceptions import SeatConflictError
from src.service.cinema.domain.entity.booking_entity import (
    Booking,
    BookingStatus,
    PaymentMethod,
)
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel


SHOW_DATE = date(2030, 6, 1)
SHOW_TIME = '20:00'


def new_booking(seats: list[str], code: str) -> Booking:
    return Booking.create(
        id=uuid.uuid4(),
        user_id=1,
        movie_id=1,
        showtime_date=SHOW_DATE,
        showtime_time=SHOW_TIME,
        seats=seats,
        quantity=len(seats),
        price=10.0,
        payment_method=PaymentMethod.CASH,
        booking_code=code,
    )


@pytest.fixture
async def session_maker():
    engine = create_async_engine(os.environ['DATABASE_URL'])
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    now = datetime.now(timezone.utc)
    async with maker() as session:
        session.add(
            MovieModel(
                id=1,
                title='Race Condition',
                description='Two viewers, one seat.',
                genre=['Thriller'],
                duration=95,
                rating=7.0,
                poster='poster.jpg',
                director='Jane Doe',
                cast=['Actor One'],
                release_date=date(2030, 1, 1),
                language='English',
                is_active=True,
                featured=False,
                created_at=now,
                updated_at=now,
                showtimes=[
                    ShowtimeModel(
                        date=SHOW_DATE,
                        time=SHOW_TIME,
                        price=10.0,
                        total_seats=5,
                        available_seats=5,
                        is_active=True,
                    )
                ],
            )
        )
        await session.commit()
    yield maker
    await engine.dispose()


@pytest.mark.integration
class TestSeatClaims:
    @pytest.mark.asyncio
    async def test_overlapping_claim_is_rejected(self, session_maker):
        # Arrange
        async with session_maker() as session:
            async with SqlAlchemyUnitOfWork(session) as uow:
                await uow.booking_command_repo.create(booking=new_booking(['A1', 'A2'], 'FIRST001'))
                await uow.commit()

        # Act & Assert
        async with session_maker() as session:
            async with SqlAlchemyUnitOfWork(session) as uow:
                with pytest.raises(SeatConflictError) as exc:
                    await uow.booking_command_repo.create(
                        booking=new_booking(['A2', 'A3'], 'SECOND02')
                    )

        assert exc.value.status_code == 400
        assert exc.value.seats == ['A2']
        async with session_maker() as session:
            async with SqlAlchemyUnitOfWork(session) as uow:
                booked = await uow.booking_command_repo.get_booked_seats(
                    movie_id=1, showtime_date=SHOW_DATE, showtime_time=SHOW_TIME
                )
                assert await uow.booking_command_repo.code_exists('SECOND02') is False
        assert booked == {'A1', 'A2'}

    @pytest.mark.asyncio
    async def test_released_claims_free_the_seats(self, session_maker):
        first = new_booking(['A1'], 'FIRST001')
        async with session_maker() as session:
            async with SqlAlchemyUnitOfWork(session) as uow:
                await uow.booking_command_repo.create(booking=first)
                await uow.commit()

        async with session_maker() as session:
            async with SqlAlchemyUnitOfWork(session) as uow:
                cancelled = first.cancel(
                    cancelled_by=1, reason='Changed plans', now=datetime.now(timezone.utc)
                )
                assert await uow.booking_command_repo.update(
                    booking=cancelled, expected_status=BookingStatus.PENDING
                )
                # A second writer still expecting pending loses
                assert not await uow.booking_command_repo.update(
                    booking=cancelled, expected_status=BookingStatus.PENDING
                )
                await uow.booking_command_repo.release_seat_claims(booking_id=first.id)
                await uow.commit()

        async with session_maker() as session:
            async with SqlAlchemyUnitOfWork(session) as uow:
                await uow.booking_command_repo.create(booking=new_booking(['A1'], 'AGAIN003'))
                await uow.commit()

    @pytest.mark.asyncio
    async def test_conditional_decrement_never_goes_negative(self, session_maker):
        async with session_maker() as session:
            async with SqlAlchemyUnitOfWork(session) as uow:
                movie = await uow.movie_command_repo.get_by_id(movie_id=1)
                showtime_id = movie.showtimes[0].id

                assert await uow.movie_command_repo.reserve_seats(
                    showtime_id=showtime_id, quantity=5
                ) == 0
                assert await uow.movie_command_repo.reserve_seats(
                    showtime_id=showtime_id, quantity=1
                ) is None
                assert await uow.movie_command_repo.release_seats(
                    showtime_id=showtime_id, quantity=2
                ) == 2

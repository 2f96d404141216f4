"""
Unit tests for CreateBookingUseCase

Test Focus:
1. Success path: seats reserved, inventory decremented, transaction committed
2. Fail Fast: movie missing, showtime missing or inactive, capacity, seat conflict
3. Database-side guards: conditional decrement losing the race
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.platform.exception.exceptions import (
    CapacityExceededError,
    DomainError,
    NotFoundError,
    SeatConflictError,
)
from src.service.cinema.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.cinema.app.service.booking_code_generator import BookingCodeGenerator
from src.service.cinema.domain.entity.booking_entity import BookingStatus, PaymentMethod
from test.service.cinema.unit.helpers import (
    SHOW_DATE,
    SHOW_TIME,
    make_movie,
    make_showtime,
    make_uow,
)


@pytest.mark.unit
class TestCreateBooking:
    @pytest.fixture
    def uow(self) -> MagicMock:
        uow = make_uow()
        uow.movie_command_repo.get_by_id = AsyncMock(return_value=make_movie())
        uow.movie_command_repo.reserve_seats = AsyncMock(return_value=8)
        uow.booking_command_repo.get_booked_seats = AsyncMock(return_value=set())
        uow.booking_command_repo.code_exists = AsyncMock(return_value=False)
        uow.booking_command_repo.create = AsyncMock(side_effect=lambda *, booking: booking)
        return uow

    @pytest.fixture
    def use_case(self, uow: MagicMock) -> CreateBookingUseCase:
        return CreateBookingUseCase(uow=uow, code_generator=BookingCodeGenerator())

    async def _book(self, use_case: CreateBookingUseCase, seats: list[str], **overrides):
        params = {
            'user_id': 2,
            'movie_id': 1,
            'showtime_date': SHOW_DATE,
            'showtime_time': SHOW_TIME,
            'seats': seats,
            'quantity': len(seats),
            'payment_method': PaymentMethod.CREDIT_CARD,
        }
        return await use_case.create_booking(**(params | overrides))

    @pytest.mark.asyncio
    async def test_successful_booking_reserves_seats(
        self, use_case: CreateBookingUseCase, uow: MagicMock
    ):
        # Act
        result = await self._book(use_case, ['a1', 'A2'])

        # Assert
        assert result['seats'] == ['A1', 'A2']
        assert result['quantity'] == 2
        assert result['total_amount'] == 25.0
        assert result['status'] == BookingStatus.PENDING.value
        assert result['movie'] == {'id': 1, 'title': 'The Grand Premiere', 'poster': 'poster.jpg'}
        assert len(result['booking_code']) == 8

        uow.movie_command_repo.reserve_seats.assert_awaited_once_with(showtime_id=11, quantity=2)
        created = uow.booking_command_repo.create.await_args.kwargs['booking']
        assert created.id.version == 7
        uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_accepts_unpadded_time_label(
        self, use_case: CreateBookingUseCase, uow: MagicMock
    ):
        morning = make_showtime()
        morning.time = '09:30'
        uow.movie_command_repo.get_by_id = AsyncMock(return_value=make_movie(showtimes=[morning]))

        result = await self._book(use_case, ['A1'], showtime_time='9:30')

        assert result['showtime']['time'] == '09:30'

    @pytest.mark.asyncio
    async def test_fail_when_movie_not_found(self, use_case: CreateBookingUseCase, uow: MagicMock):
        uow.movie_command_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError, match='Movie not found'):
            await self._book(use_case, ['A1'])

        uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fail_when_showtime_inactive(
        self, use_case: CreateBookingUseCase, uow: MagicMock
    ):
        uow.movie_command_repo.get_by_id = AsyncMock(
            return_value=make_movie(showtimes=[make_showtime(is_active=False)])
        )

        with pytest.raises(NotFoundError, match='Showtime not found or inactive'):
            await self._book(use_case, ['A1'])

    @pytest.mark.asyncio
    async def test_fail_when_not_enough_seats(
        self, use_case: CreateBookingUseCase, uow: MagicMock
    ):
        uow.movie_command_repo.get_by_id = AsyncMock(
            return_value=make_movie(showtimes=[make_showtime(total_seats=2, available_seats=1)])
        )

        with pytest.raises(CapacityExceededError, match='Not enough seats available'):
            await self._book(use_case, ['A1', 'A2'])

        uow.booking_command_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fail_when_seats_already_booked(
        self, use_case: CreateBookingUseCase, uow: MagicMock
    ):
        uow.booking_command_repo.get_booked_seats = AsyncMock(return_value={'A1', 'A2', 'B5'})

        with pytest.raises(SeatConflictError, match='Seats A1, A2 are already booked') as exc:
            await self._book(use_case, ['A1', 'A2', 'A3'])

        assert exc.value.extra == {'seats': ['A1', 'A2']}
        uow.booking_command_repo.create.assert_not_awaited()
        uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fail_when_conditional_decrement_loses_race(
        self, use_case: CreateBookingUseCase, uow: MagicMock
    ):
        # Upfront check passed, but a concurrent booking took the last seats
        uow.movie_command_repo.reserve_seats = AsyncMock(return_value=None)

        with pytest.raises(CapacityExceededError):
            await self._book(use_case, ['A1'])

        uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fail_on_duplicate_seats(self, use_case: CreateBookingUseCase, uow: MagicMock):
        with pytest.raises(DomainError, match='Duplicate seats in request'):
            await self._book(use_case, ['A1', 'a1'])

        uow.movie_command_repo.get_by_id.assert_not_awaited()


@pytest.mark.unit
class TestTwoSeatShowtimeScenario:
    """total_seats=2: {A1,A2} fills it, {A1} conflicts, {A3} exceeds capacity."""

    @pytest.mark.asyncio
    async def test_second_and_third_requests_are_rejected(self):
        # Arrange: a tiny in-memory showtime behind the repository doubles
        showtime = make_showtime(total_seats=2)
        booked: set[str] = set()
        uow = make_uow()
        uow.movie_command_repo.get_by_id = AsyncMock(
            side_effect=lambda **_: make_movie(
                showtimes=[make_showtime(total_seats=2, available_seats=showtime.available_seats)]
            )
        )
        uow.booking_command_repo.get_booked_seats = AsyncMock(side_effect=lambda **_: set(booked))
        uow.booking_command_repo.code_exists = AsyncMock(return_value=False)

        async def create(*, booking):
            booked.update(booking.seats)
            return booking

        async def reserve_seats(*, showtime_id, quantity):
            showtime.available_seats -= quantity
            return showtime.available_seats

        uow.booking_command_repo.create = AsyncMock(side_effect=create)
        uow.movie_command_repo.reserve_seats = AsyncMock(side_effect=reserve_seats)
        use_case = CreateBookingUseCase(uow=uow, code_generator=BookingCodeGenerator())
        common = {
            'user_id': 2,
            'movie_id': 1,
            'showtime_date': SHOW_DATE,
            'showtime_time': SHOW_TIME,
            'payment_method': PaymentMethod.CASH,
        }

        # Act & Assert
        await use_case.create_booking(seats=['A1', 'A2'], quantity=2, **common)
        assert showtime.available_seats == 0

        with pytest.raises(SeatConflictError, match='Seats A1 are already booked'):
            await use_case.create_booking(seats=['A1'], quantity=1, **common)

        with pytest.raises(CapacityExceededError):
            await use_case.create_booking(seats=['A3'], quantity=1, **common)

        assert showtime.available_seats == 0

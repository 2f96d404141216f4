from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.service.cinema.app.query.get_booking_use_case import GetBookingUseCase
from src.service.cinema.domain.entity.user_entity import UserRole
from test.service.cinema.unit.helpers import BOOKING_ID, make_user


BOOKING = {'id': BOOKING_ID, 'user_id': 2, 'booking_code': 'ABCD1234'}


@pytest.mark.unit
class TestGetBooking:
    @pytest.mark.asyncio
    async def test_owner_and_admin_can_view(self):
        repo = AsyncMock()
        repo.get_by_id_with_details = AsyncMock(return_value=BOOKING)
        use_case = GetBookingUseCase(booking_query_repo=repo)

        assert await use_case.get_booking(booking_id=BOOKING_ID, viewer=make_user(id=2)) == BOOKING
        assert (
            await use_case.get_booking(
                booking_id=BOOKING_ID, viewer=make_user(id=1, role=UserRole.ADMIN)
            )
            == BOOKING
        )

    @pytest.mark.asyncio
    async def test_other_user_is_forbidden(self):
        repo = AsyncMock()
        repo.get_by_id_with_details = AsyncMock(return_value=BOOKING)

        with pytest.raises(ForbiddenError, match='Not authorized to view this booking'):
            await GetBookingUseCase(booking_query_repo=repo).get_booking(
                booking_id=BOOKING_ID, viewer=make_user(id=3)
            )

    @pytest.mark.asyncio
    async def test_lookup_by_code_is_case_insensitive(self):
        repo = AsyncMock()
        repo.get_by_code_with_details = AsyncMock(return_value=BOOKING)

        await GetBookingUseCase(booking_query_repo=repo).get_booking_by_code(
            code=' abcd1234 ', viewer=make_user(id=2)
        )

        repo.get_by_code_with_details.assert_awaited_once_with(code='ABCD1234')

    @pytest.mark.asyncio
    async def test_unknown_code(self):
        repo = AsyncMock()
        repo.get_by_code_with_details = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError, match='Booking not found'):
            await GetBookingUseCase(booking_query_repo=repo).get_booking_by_code(
                code='ZZZZ9999', viewer=make_user(id=2)
            )

from typing import Any, Dict, Optional
from unittest.mock import AsyncMock

import attrs
import pytest

from src.platform.exception.exceptions import DomainError, InvalidStateError, NotFoundError
from src.service.cinema.app.command.manage_user_use_case import ManageUserUseCase
from src.service.cinema.app.query.get_user_use_case import GetUserUseCase
from src.service.cinema.app.query.list_users_use_case import ListUsersUseCase
from src.service.cinema.domain.entity.user_entity import UserRole
from test.service.cinema.unit.helpers import make_user


ADMIN = make_user(id=1, role=UserRole.ADMIN)
CUSTOMER = make_user(id=2)


def _updated_customer(*, user_id: int, role: Optional[UserRole], is_active: Optional[bool]):
    changes: Dict[str, Any] = {}
    if role is not None:
        changes['role'] = role
    if is_active is not None:
        changes['is_active'] = is_active
    return attrs.evolve(CUSTOMER, **changes)


@pytest.fixture
def user_query_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=CUSTOMER)
    return repo


@pytest.fixture
def user_command_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.update = AsyncMock(side_effect=_updated_customer)
    repo.delete_without_active_bookings = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def use_case(user_query_repo: AsyncMock, user_command_repo: AsyncMock) -> ManageUserUseCase:
    return ManageUserUseCase(user_query_repo=user_query_repo, user_command_repo=user_command_repo)


@pytest.mark.unit
class TestUpdateUser:
    @pytest.mark.asyncio
    async def test_block_customer(self, use_case: ManageUserUseCase, user_command_repo: AsyncMock):
        user = await use_case.update_user(user_id=2, admin=ADMIN, is_active=False)

        assert user.is_active is False
        user_command_repo.update.assert_awaited_once_with(user_id=2, role=None, is_active=False)

    @pytest.mark.asyncio
    async def test_promote_customer(self, use_case: ManageUserUseCase):
        user = await use_case.update_user(user_id=2, admin=ADMIN, role=UserRole.ADMIN)

        assert user.role == UserRole.ADMIN
        assert user.is_active is True

    @pytest.mark.asyncio
    async def test_fail_to_block_own_account(
        self, use_case: ManageUserUseCase, user_query_repo: AsyncMock, user_command_repo: AsyncMock
    ):
        user_query_repo.get_by_id = AsyncMock(return_value=ADMIN)

        with pytest.raises(DomainError, match='Cannot block your own account'):
            await use_case.update_user(user_id=1, admin=ADMIN, is_active=False)

        user_command_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_admin_may_keep_own_account_active(
        self, use_case: ManageUserUseCase, user_query_repo: AsyncMock, user_command_repo: AsyncMock
    ):
        user_query_repo.get_by_id = AsyncMock(return_value=ADMIN)

        await use_case.update_user(user_id=1, admin=ADMIN, is_active=True)

        user_command_repo.update.assert_awaited_once_with(user_id=1, role=None, is_active=True)

    @pytest.mark.asyncio
    async def test_fail_when_user_missing(
        self, use_case: ManageUserUseCase, user_query_repo: AsyncMock
    ):
        user_query_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError, match='User not found'):
            await use_case.update_user(user_id=99, admin=ADMIN, is_active=False)


@pytest.mark.unit
class TestDeleteUser:
    @pytest.mark.asyncio
    async def test_delete_customer(self, use_case: ManageUserUseCase, user_command_repo: AsyncMock):
        await use_case.delete_user(user_id=2, admin=ADMIN)

        user_command_repo.delete_without_active_bookings.assert_awaited_once_with(user_id=2)

    @pytest.mark.asyncio
    async def test_fail_to_delete_own_account(
        self, use_case: ManageUserUseCase, user_query_repo: AsyncMock, user_command_repo: AsyncMock
    ):
        user_query_repo.get_by_id = AsyncMock(return_value=ADMIN)

        with pytest.raises(DomainError, match='Cannot delete your own account'):
            await use_case.delete_user(user_id=1, admin=ADMIN)

        user_command_repo.delete_without_active_bookings.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fail_when_user_has_active_bookings(
        self, use_case: ManageUserUseCase, user_command_repo: AsyncMock
    ):
        user_command_repo.delete_without_active_bookings = AsyncMock(return_value=False)

        with pytest.raises(InvalidStateError, match='Cannot delete user with active bookings'):
            await use_case.delete_user(user_id=2, admin=ADMIN)

    @pytest.mark.asyncio
    async def test_missing_user_is_checked_before_self(
        self, use_case: ManageUserUseCase, user_query_repo: AsyncMock
    ):
        user_query_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await use_case.delete_user(user_id=1, admin=ADMIN)


@pytest.mark.unit
class TestReadUsers:
    @pytest.mark.asyncio
    async def test_list_trims_search_and_builds_pagination(self, user_query_repo: AsyncMock):
        user_query_repo.list_users = AsyncMock(return_value=([CUSTOMER], 11))

        users, pagination = await ListUsersUseCase(user_query_repo=user_query_repo).list_users(
            page=2, limit=5, search='  alice ', role=UserRole.USER, is_active=True
        )

        assert users == [CUSTOMER]
        assert pagination.total_items == 11
        assert pagination.total_pages == 3
        assert pagination.has_prev_page is True
        user_query_repo.list_users.assert_awaited_once_with(
            page=2, limit=5, search='alice', role=UserRole.USER, is_active=True
        )

    @pytest.mark.asyncio
    async def test_get_missing_user(self, user_query_repo: AsyncMock):
        user_query_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError, match='User not found'):
            await GetUserUseCase(user_query_repo=user_query_repo).get_user(user_id=404)

from fastapi.testclient import TestClient
import pytest

from src.platform.constant.route_constant import (
    ADMIN_USER_DETAIL,
    ADMIN_USER_LIST,
    BOOKING_CANCEL,
    BOOKING_CREATE,
    USER_LOGIN,
)
from test.constants import (
    ANOTHER_CUSTOMER_EMAIL,
    DEFAULT_PASSWORD,
    TEST_ADMIN_EMAIL,
    TEST_CUSTOMER_EMAIL,
)
from test.shared.utils import assert_response_status, create_movie, login_user


@pytest.fixture
def admin_client(client: TestClient, admin_user, customer_user, another_customer_user):
    login_user(client, TEST_ADMIN_EMAIL, DEFAULT_PASSWORD)
    return client


def book_one_seat(client: TestClient) -> dict:
    login_user(client, TEST_ADMIN_EMAIL, DEFAULT_PASSWORD)
    movie = create_movie(client)
    showtime = movie['showtimes'][0]
    login_user(client, TEST_CUSTOMER_EMAIL, DEFAULT_PASSWORD)
    response = client.post(
        BOOKING_CREATE,
        json={
            'movie_id': movie['id'],
            'showtime_date': showtime['date'],
            'showtime_time': showtime['time'],
            'seats': ['A1'],
            'quantity': 1,
            'payment_method': 'cash',
        },
    )
    assert_response_status(response, 201)
    login_user(client, TEST_ADMIN_EMAIL, DEFAULT_PASSWORD)
    return response.json()


@pytest.mark.integration
class TestAdminUserList:
    def test_lists_newest_first_with_pagination(self, admin_client: TestClient):
        response = admin_client.get(ADMIN_USER_LIST, params={'limit': 2})

        assert_response_status(response, 200)
        body = response.json()
        assert [user['email'] for user in body['users']] == [
            ANOTHER_CUSTOMER_EMAIL,
            TEST_CUSTOMER_EMAIL,
        ]
        assert body['pagination'] == {
            'current_page': 1,
            'total_pages': 2,
            'total_items': 3,
            'has_next_page': True,
            'has_prev_page': False,
        }
        assert 'hashed_password' not in body['users'][0]

    def test_filters(self, admin_client: TestClient, customer_user):
        admin_client.put(
            ADMIN_USER_DETAIL.format(user_id=customer_user['id']), json={'is_active': False}
        )

        by_search = admin_client.get(ADMIN_USER_LIST, params={'search': 'ANOTHER'}).json()
        by_role = admin_client.get(ADMIN_USER_LIST, params={'role': 'admin'}).json()
        blocked = admin_client.get(ADMIN_USER_LIST, params={'is_active': False}).json()

        assert [user['email'] for user in by_search['users']] == [ANOTHER_CUSTOMER_EMAIL]
        assert [user['email'] for user in by_role['users']] == [TEST_ADMIN_EMAIL]
        assert [user['id'] for user in blocked['users']] == [customer_user['id']]

    def test_customer_is_forbidden(self, admin_client: TestClient):
        login_user(admin_client, TEST_CUSTOMER_EMAIL, DEFAULT_PASSWORD)

        assert_response_status(admin_client.get(ADMIN_USER_LIST), 403)


@pytest.mark.integration
class TestAdminUserDetail:
    def test_get_user(self, admin_client: TestClient, customer_user):
        response = admin_client.get(ADMIN_USER_DETAIL.format(user_id=customer_user['id']))

        assert_response_status(response, 200)
        assert response.json()['email'] == TEST_CUSTOMER_EMAIL
        assert response.json()['created_at'] is not None

    def test_unknown_user(self, admin_client: TestClient):
        response = admin_client.get(ADMIN_USER_DETAIL.format(user_id=999999))

        assert_response_status(response, 404)
        assert response.json()['detail'] == 'User not found'


@pytest.mark.integration
class TestAdminUserUpdate:
    def test_blocked_user_cannot_log_in(self, admin_client: TestClient, customer_user):
        response = admin_client.put(
            ADMIN_USER_DETAIL.format(user_id=customer_user['id']), json={'is_active': False}
        )

        assert_response_status(response, 200)
        assert response.json()['is_active'] is False
        admin_client.cookies.clear()
        login = admin_client.post(
            USER_LOGIN, json={'email': TEST_CUSTOMER_EMAIL, 'password': DEFAULT_PASSWORD}
        )
        assert_response_status(login, 403)

    def test_change_role(self, admin_client: TestClient, customer_user):
        response = admin_client.put(
            ADMIN_USER_DETAIL.format(user_id=customer_user['id']), json={'role': 'admin'}
        )

        assert_response_status(response, 200)
        assert response.json()['role'] == 'admin'
        assert response.json()['is_active'] is True

    def test_cannot_block_own_account(self, admin_client: TestClient, admin_user):
        response = admin_client.put(
            ADMIN_USER_DETAIL.format(user_id=admin_user['id']), json={'is_active': False}
        )

        assert_response_status(response, 400)
        assert response.json()['detail'] == 'Cannot block your own account'

    def test_invalid_role(self, admin_client: TestClient, customer_user):
        response = admin_client.put(
            ADMIN_USER_DETAIL.format(user_id=customer_user['id']), json={'role': 'owner'}
        )

        assert_response_status(response, 400)


@pytest.mark.integration
class TestAdminUserDelete:
    def test_delete_user(self, admin_client: TestClient, another_customer_user):
        url = ADMIN_USER_DETAIL.format(user_id=another_customer_user['id'])

        response = admin_client.delete(url)

        assert_response_status(response, 200)
        assert response.json()['message'] == 'User deleted successfully'
        assert_response_status(admin_client.get(url), 404)

    def test_cannot_delete_own_account(self, admin_client: TestClient, admin_user):
        response = admin_client.delete(ADMIN_USER_DETAIL.format(user_id=admin_user['id']))

        assert_response_status(response, 400)
        assert response.json()['detail'] == 'Cannot delete your own account'

    def test_user_with_active_booking_is_kept_until_cancelled(
        self, admin_client: TestClient, customer_user
    ):
        booking = book_one_seat(admin_client)
        url = ADMIN_USER_DETAIL.format(user_id=customer_user['id'])

        rejected = admin_client.delete(url)

        assert_response_status(rejected, 400)
        assert rejected.json()['detail'] == 'Cannot delete user with active bookings'
        assert_response_status(admin_client.get(url), 200)

        assert_response_status(
            admin_client.put(BOOKING_CANCEL.format(booking_id=booking['id']), json={}), 200
        )
        assert_response_status(admin_client.delete(url), 200)

    def test_unknown_user(self, admin_client: TestClient):
        response = admin_client.delete(ADMIN_USER_DETAIL.format(user_id=999999))

        assert_response_status(response, 404)

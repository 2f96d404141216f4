from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from fastapi.testclient import TestClient

from src.platform.config.core_setting import settings
from src.platform.constant.route_constant import (
    MOVIE_CREATE,
    USER_CREATE,
    USER_LOGIN,
)
from test.constants import DEFAULT_MOVIE, DEFAULT_SHOWTIME_PRICE


def login_user(client: TestClient, email: str, password: str) -> Any:
    """Helper function to login a user and set cookies."""
    client.cookies.clear()
    login_response = client.post(
        USER_LOGIN,
        json={'email': email, 'password': password},
    )
    assert login_response.status_code == 200, f'Login failed: {login_response.text}'
    if settings.AUTH_COOKIE_NAME in login_response.cookies:
        client.cookies.set(
            settings.AUTH_COOKIE_NAME, login_response.cookies[settings.AUTH_COOKIE_NAME]
        )
    return login_response


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def create_user(client: TestClient, email: str, password: str, name: str, role: str) -> Dict[str, Any]:
    user_data = {
        'email': email,
        'password': password,
        'name': name,
        'role': role,
    }
    response = client.post(USER_CREATE, json=user_data)
    assert_response_status(response, 201, f'Failed to create {role} user')
    return response.json()


def showtime_slot(hours_from_now: float) -> Dict[str, str]:
    """Date and HH:MM label of a showtime starting roughly that many hours from now (UTC)."""
    start = datetime.now(timezone.utc) + timedelta(hours=hours_from_now)
    return {'date': start.date().isoformat(), 'time': start.strftime('%H:%M')}


def create_movie(
    client: TestClient,
    *,
    total_seats: int = 10,
    hours_from_now: float = 48,
    **overrides: Any,
) -> Dict[str, Any]:
    """Create a movie with a single showtime; caller must be logged in as admin."""
    movie_data = {
        **DEFAULT_MOVIE,
        'showtimes': [
            {
                **showtime_slot(hours_from_now),
                'price': DEFAULT_SHOWTIME_PRICE,
                'total_seats': total_seats,
            }
        ],
        **overrides,
    }
    response = client.post(MOVIE_CREATE, json=movie_data)
    assert_response_status(response, 201, 'Failed to create movie')
    return response.json()

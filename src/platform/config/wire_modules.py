"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.cinema.app.command import (
    cancel_booking_use_case,
    create_booking_use_case,
    create_user_use_case,
    manage_user_use_case,
)
from src.service.cinema.app.query import (
    get_booking_use_case,
    get_movie_use_case,
    get_user_use_case,
    list_bookings_use_case,
    list_movies_use_case,
    list_users_use_case,
)
from src.service.cinema.driving_adapter.http_controller import user_controller
from src.service.cinema.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_user_use_case,
    create_booking_use_case,
    cancel_booking_use_case,
    get_booking_use_case,
    list_bookings_use_case,
    get_movie_use_case,
    list_movies_use_case,
    get_user_use_case,
    list_users_use_case,
    manage_user_use_case,
    user_controller,
    role_auth,
]

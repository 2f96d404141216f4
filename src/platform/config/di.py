"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.db_setting import Database
from src.service.cinema.app.service.booking_code_generator import BookingCodeGenerator
from src.service.cinema.driven_adapter.repo.booking_query_repo_impl import BookingQueryRepoImpl
from src.service.cinema.driven_adapter.repo.movie_query_repo_impl import MovieQueryRepoImpl
from src.service.cinema.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.cinema.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.cinema.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager, event-loop aware)
    database = providers.Singleton(Database)

    # Security
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    jwt_auth = providers.Singleton(JwtAuth, settings=config_service)

    # Query repositories (stateless - use session_factory per call)
    # Command repositories live in the unit of work, see platform/database/unit_of_work.py
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl,
        session_factory=database.provided.session,
        password_hasher=password_hasher,
    )
    movie_query_repo = providers.Singleton(
        MovieQueryRepoImpl, session_factory=database.provided.session
    )
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )

    # Booking rules
    booking_code_generator = providers.Singleton(
        BookingCodeGenerator,
        length=config_service.provided.BOOKING_CODE_LENGTH,
        max_attempts=config_service.provided.BOOKING_CODE_MAX_ATTEMPTS,
    )


container = Container()


def cleanup() -> None:
    container.reset_singletons()

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Request

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.cinema.domain.entity.user_entity import UserEntity, UserRole
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class RoleAuthStrategy:
    @staticmethod
    def is_admin(user: UserEntity) -> bool:
        return user.role == UserRole.ADMIN


@inject
async def get_current_user(
    request: Request,
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserEntity:
    """Rebuild the caller from the auth cookie (stateless, no DB query)"""
    return jwt_auth.get_current_user_info_from_jwt(request.cookies.get(jwt_auth.cookie_name))


async def require_admin(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    if not RoleAuthStrategy.is_admin(current_user):
        raise ForbiddenError('Admin access required')
    return current_user

from datetime import date, datetime, time, timezone
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.manage_user_use_case import ManageUserUseCase
from src.service.cinema.app.command.update_booking_status_use_case import (
    UpdateBookingStatusUseCase,
)
from src.service.cinema.app.query.get_user_use_case import GetUserUseCase
from src.service.cinema.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.cinema.app.query.list_users_use_case import ListUsersUseCase
from src.service.cinema.domain.entity.booking_entity import BookingStatus
from src.service.cinema.domain.entity.user_entity import UserEntity, UserRole
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.cinema.driving_adapter.http_controller.schema.booking_schema import (
    BookingListResponse,
    BookingResponse,
    BookingStatusUpdateRequest,
)
from src.service.cinema.driving_adapter.http_controller.schema.common_schema import (
    MessageResponse,
    PaginationResponse,
)
from src.service.cinema.driving_adapter.http_controller.schema.user_schema import (
    AdminUserResponse,
    UserListResponse,
    UserUpdateRequest,
)


router = APIRouter()


@router.get('/booking', status_code=status.HTTP_200_OK)
@Logger.io
async def list_all_bookings(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[BookingStatus] = None,
    user_id: Optional[int] = None,
    movie_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    current_user: UserEntity = Depends(require_admin),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingListResponse:
    # Whole days: end_date is inclusive
    bookings, pagination = await use_case.list_all_bookings(
        page=page,
        limit=limit,
        status=status,
        user_id=user_id,
        movie_id=movie_id,
        created_from=datetime.combine(start_date, time.min, tzinfo=timezone.utc)
        if start_date
        else None,
        created_to=datetime.combine(end_date, time.max, tzinfo=timezone.utc)
        if end_date
        else None,
    )
    return BookingListResponse(
        bookings=[BookingResponse(**booking) for booking in bookings],
        pagination=PaginationResponse(**pagination.to_dict()),
    )


@router.put('/booking/{booking_id}/status', status_code=status.HTTP_200_OK)
@Logger.io
async def update_booking_status(
    booking_id: UUID,
    request: BookingStatusUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateBookingStatusUseCase = Depends(UpdateBookingStatusUseCase.depends),
) -> BookingResponse:
    booking = await use_case.update_status(
        booking_id=booking_id,
        status=request.status,
        admin=current_user,
        reason=request.reason,
    )
    return BookingResponse(**booking)


# ============================ Admin users ============================


def _to_admin_user_response(user: UserEntity) -> AdminUserResponse:
    return AdminUserResponse(
        id=user.id or 0,
        email=user.email,
        name=user.name,
        role=user.role,
        is_active=user.is_active,
        created_at=user.created_at,
    )


@router.get('/user', status_code=status.HTTP_200_OK)
@Logger.io
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=100),
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
    current_user: UserEntity = Depends(require_admin),
    use_case: ListUsersUseCase = Depends(ListUsersUseCase.depends),
) -> UserListResponse:
    users, pagination = await use_case.list_users(
        page=page, limit=limit, search=search, role=role, is_active=is_active
    )
    return UserListResponse(
        users=[_to_admin_user_response(user) for user in users],
        pagination=PaginationResponse(**pagination.to_dict()),
    )


@router.get('/user/{user_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_user(
    user_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: GetUserUseCase = Depends(GetUserUseCase.depends),
) -> AdminUserResponse:
    return _to_admin_user_response(await use_case.get_user(user_id=user_id))


@router.put('/user/{user_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_user(
    user_id: int,
    request: UserUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: ManageUserUseCase = Depends(ManageUserUseCase.depends),
) -> AdminUserResponse:
    user = await use_case.update_user(
        user_id=user_id,
        admin=current_user,
        role=request.role,
        is_active=request.is_active,
    )
    return _to_admin_user_response(user)


@router.delete('/user/{user_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def delete_user(
    user_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: ManageUserUseCase = Depends(ManageUserUseCase.depends),
) -> MessageResponse:
    await use_case.delete_user(user_id=user_id, admin=current_user)
    return MessageResponse(message='User deleted successfully')

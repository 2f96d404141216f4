from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.cinema.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.cinema.app.query.get_booking_use_case import GetBookingUseCase
from src.service.cinema.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.cinema.domain.entity.booking_entity import BookingStatus
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import get_current_user
from src.service.cinema.driving_adapter.http_controller.schema.booking_schema import (
    BookingCancelRequest,
    BookingCreateRequest,
    BookingListResponse,
    BookingResponse,
)
from src.service.cinema.driving_adapter.http_controller.schema.common_schema import (
    PaginationResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('movie_id', request.movie_id)
        span.set_attribute('user_id', current_user.id or 0)

        booking = await use_case.create_booking(
            user_id=current_user.id or 0,
            movie_id=request.movie_id,
            showtime_date=request.showtime_date,
            showtime_time=request.showtime_time,
            seats=request.seats,
            quantity=request.quantity,
            payment_method=request.payment_method,
            notes=request.notes,
        )
        return BookingResponse(**booking)


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_my_bookings(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[BookingStatus] = None,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingListResponse:
    bookings, pagination = await use_case.list_user_bookings(
        user_id=current_user.id or 0, page=page, limit=limit, status=status
    )
    return BookingListResponse(
        bookings=[BookingResponse(**booking) for booking in bookings],
        pagination=PaginationResponse(**pagination.to_dict()),
    )


# Registered before /{booking_id} so "code" is never read as a booking id
@router.get('/code/{code}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_booking_by_code(
    code: str,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.get_booking_by_code(code=code, viewer=current_user)
    return BookingResponse(**booking)


@router.get('/{booking_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_booking(
    booking_id: UUID,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.get_booking(booking_id=booking_id, viewer=current_user)
    return BookingResponse(**booking)


@router.put('/{booking_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_booking(
    booking_id: UUID,
    request: Optional[BookingCancelRequest] = Body(None),
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.cancel_booking(
        booking_id=booking_id,
        actor=current_user,
        reason=request.reason if request else None,
    )
    return BookingResponse(**booking)

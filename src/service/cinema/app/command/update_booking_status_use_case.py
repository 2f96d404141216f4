from typing import Any, Dict, Optional, Self
from uuid import UUID

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import InvalidStateError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.cinema.app.command.cancel_booking_use_case import utc_now
from src.service.cinema.app.dto.booking_view import to_booking_view
from src.service.cinema.app.service.seat_inventory import release_booking_seats
from src.service.cinema.domain.entity.booking_entity import BookingStatus
from src.service.cinema.domain.entity.user_entity import UserEntity


class UpdateBookingStatusUseCase:
    """Admin override of a booking's status; cancelling through here skips the time window."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def update_status(
        self,
        *,
        booking_id: UUID,
        status: BookingStatus,
        admin: UserEntity,
        reason: Optional[str] = None,
    ) -> Dict[str, Any]:
        async with self.uow:
            booking = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
            if not booking:
                raise NotFoundError('Booking not found')

            updated = booking.change_status(
                status=status,
                changed_by=admin.id,  # type: ignore[arg-type]
                reason=reason,
                now=utc_now(),
            )
            if updated is booking:
                return to_booking_view(booking)

            if not await self.uow.booking_command_repo.update(
                booking=updated, expected_status=booking.status
            ):
                raise InvalidStateError('Booking status changed concurrently, please retry')

            released = booking.is_active and updated.status == BookingStatus.CANCELLED
            if released:
                await release_booking_seats(uow=self.uow, booking=updated)
            elif booking.is_active and not updated.is_active:
                # a completed booking frees its seats for resale but never restores inventory
                await self.uow.booking_command_repo.release_seat_claims(booking_id=updated.id)

            await self.uow.commit()

        Logger.base.info(
            f'🛠️ [BOOKING-STATUS] {updated.booking_code} {booking.status} -> {updated.status} '
            f'by admin {admin.id}'
        )
        if released:
            metrics.record_cancellation(cancelled_by='admin')

        return to_booking_view(updated)

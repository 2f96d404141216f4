from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Self
from uuid import UUID
from zoneinfo import ZoneInfo

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import ForbiddenError, InvalidStateError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.cinema.app.dto.booking_view import to_booking_view
from src.service.cinema.app.service.seat_inventory import release_booking_seats
from src.service.cinema.domain.entity.user_entity import UserEntity


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CancelBookingUseCase:
    """
    Cancel a booking on behalf of its owner or an admin.

    The cancellation window applies to everyone, admins included. Inventory is
    restored in the same transaction that flips the status.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        cinema_timezone: str = 'UTC',
        window_hours: int = 2,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.uow = uow
        self.tz = ZoneInfo(cinema_timezone)
        self.window_hours = window_hours
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            uow=uow,
            cinema_timezone=settings.CINEMA_TIMEZONE,
            window_hours=settings.CANCELLATION_WINDOW_HOURS,
        )

    @Logger.io
    async def cancel_booking(
        self, *, booking_id: UUID, actor: UserEntity, reason: Optional[str] = None
    ) -> Dict[str, Any]:
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'booking.id': str(booking_id), 'user.id': actor.id or 0},
        ):
            async with self.uow:
                booking = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
                if not booking:
                    raise NotFoundError('Booking not found')

                if not (booking.is_owned_by(actor.id) or actor.is_admin):
                    raise ForbiddenError('Not authorized to cancel this booking')

                now = self.clock()
                booking.ensure_cancellable(now=now, tz=self.tz, window_hours=self.window_hours)

                default_reason = 'Cancelled by admin' if actor.is_admin else 'Cancelled by user'
                cancelled = booking.cancel(
                    cancelled_by=actor.id,  # type: ignore[arg-type]
                    reason=reason or default_reason,
                    now=now,
                )

                # Guards against a concurrent cancel of the same booking
                if not await self.uow.booking_command_repo.update(
                    booking=cancelled, expected_status=booking.status
                ):
                    raise InvalidStateError('Booking is already cancelled')

                available = await release_booking_seats(uow=self.uow, booking=cancelled)
                await self.uow.commit()

            Logger.base.info(
                f'❎ [CANCEL-BOOKING] {cancelled.booking_code} by user {actor.id}, '
                f'restored {cancelled.quantity} seat(s), available={available}'
            )
            metrics.record_cancellation(cancelled_by='admin' if actor.is_admin else 'user')

            return to_booking_view(cancelled)

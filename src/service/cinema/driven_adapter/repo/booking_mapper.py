from src.service.cinema.domain.entity.booking_entity import (
    Booking,
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.cinema.driven_adapter.model.booking_model import BookingModel


def booking_to_entity(db_booking: BookingModel) -> Booking:
    return Booking(
        id=db_booking.id,
        user_id=db_booking.user_id,
        movie_id=db_booking.movie_id,
        showtime_date=db_booking.showtime_date,
        showtime_time=db_booking.showtime_time,
        seats=list(db_booking.seats or []),
        quantity=db_booking.quantity,
        total_amount=db_booking.total_amount,
        payment_method=PaymentMethod(db_booking.payment_method),
        booking_code=db_booking.booking_code,
        status=BookingStatus(db_booking.status),
        payment_status=PaymentStatus(db_booking.payment_status),
        notes=db_booking.notes,
        cancelled_at=db_booking.cancelled_at,
        cancelled_by=db_booking.cancelled_by,
        cancellation_reason=db_booking.cancellation_reason,
        created_at=db_booking.created_at,
        updated_at=db_booking.updated_at,
    )

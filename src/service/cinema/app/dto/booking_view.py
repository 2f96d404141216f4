from typing import Any, Dict, Optional

from src.service.cinema.domain.entity.booking_entity import Booking


def to_booking_view(
    booking: Booking,
    *,
    movie_title: Optional[str] = None,
    movie_poster: Optional[str] = None,
    user_name: Optional[str] = None,
    user_email: Optional[str] = None,
) -> Dict[str, Any]:
    """Flatten a booking plus the movie (and user) details shown alongside it."""
    view: Dict[str, Any] = {
        'id': booking.id,
        'user_id': booking.user_id,
        'movie': {'id': booking.movie_id, 'title': movie_title, 'poster': movie_poster},
        'showtime': {'date': booking.showtime_date, 'time': booking.showtime_time},
        'seats': list(booking.seats),
        'quantity': booking.quantity,
        'total_amount': booking.total_amount,
        'status': booking.status.value,
        'payment_method': booking.payment_method.value,
        'payment_status': booking.payment_status.value,
        'booking_code': booking.booking_code,
        'notes': booking.notes,
        'cancelled_at': booking.cancelled_at,
        'cancelled_by': booking.cancelled_by,
        'cancellation_reason': booking.cancellation_reason,
        'created_at': booking.created_at,
        'updated_at': booking.updated_at,
    }
    if user_name is not None or user_email is not None:
        view['user'] = {'id': booking.user_id, 'name': user_name, 'email': user_email}
    return view

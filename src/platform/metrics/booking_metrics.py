from prometheus_client import Counter, Gauge, Histogram


class BookingMetrics:
    """
    Booking reservation metrics, exposed on /metrics

    result label values: success, capacity_exceeded, seat_conflict, not_found, rejected
    """

    def __init__(self):
        self.booking_requests = Counter(
            'cinema_booking_requests_total',
            'Total booking creation attempts',
            ['result'],
        )

        self.booking_duration = Histogram(
            'cinema_booking_duration_seconds',
            'Booking creation processing time',
            ['result'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        self.seats_booked = Counter(
            'cinema_seats_booked_total',
            'Total seats reserved by successful bookings',
        )

        self.booking_cancellations = Counter(
            'cinema_booking_cancellations_total',
            'Total cancelled bookings',
            ['cancelled_by'],  # user/admin
        )

        self.showtime_available_seats = Gauge(
            'cinema_showtime_available_seats',
            'Available seats of a showtime after the last mutation',
            ['movie_id', 'showtime_id'],
        )

    # ========== Helper Methods ==========

    def record_booking_attempt(self, *, result: str, duration: float) -> None:
        self.booking_requests.labels(result=result).inc()
        self.booking_duration.labels(result=result).observe(duration)

    def record_seats_booked(self, *, movie_id: int, showtime_id: int, quantity: int, available: int) -> None:
        self.seats_booked.inc(quantity)
        self.update_available_seats(movie_id=movie_id, showtime_id=showtime_id, available=available)

    def record_cancellation(self, *, cancelled_by: str) -> None:
        self.booking_cancellations.labels(cancelled_by=cancelled_by).inc()

    def update_available_seats(self, *, movie_id: int, showtime_id: int, available: int) -> None:
        self.showtime_available_seats.labels(movie_id=movie_id, showtime_id=showtime_id).set(
            available
        )


# Global metrics instance
metrics = BookingMetrics()

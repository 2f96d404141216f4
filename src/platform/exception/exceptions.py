from typing import Any, Optional


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(
        self, message: str, status_code: int = 500, extra: Optional[dict[str, Any]] = None
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.extra = extra or {}
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(
        self, message: str, status_code: int = 400, extra: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message, status_code, extra)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class LoginError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class CapacityExceededError(DomainError):
    def __init__(self, message: str = 'Not enough seats available') -> None:
        super().__init__(message)


class SeatConflictError(DomainError):
    def __init__(self, seats: list[str]) -> None:
        self.seats = list(seats)
        super().__init__(
            f'Seats {", ".join(self.seats)} are already booked', extra={'seats': self.seats}
        )


class InvalidStateError(DomainError):
    pass


class CancellationWindowExpiredError(DomainError):
    def __init__(self, window_hours: int = 2) -> None:
        super().__init__(f'Cannot cancel booking less than {window_hours} hours before showtime')

from datetime import date, datetime, timezone
import re
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger


TIME_LABEL_PATTERN = re.compile(r'^([01]?\d|2[0-3]):[0-5]\d$')


def normalize_time_label(label: str) -> str:
    """'9:30' -> '09:30'; rejects anything that is not a 24h HH:MM label."""
    label = label.strip()
    if not TIME_LABEL_PATTERN.match(label):
        raise DomainError(f'Invalid showtime time: {label}. Expected HH:MM')
    hours, minutes = label.split(':')
    return f'{int(hours):02d}:{minutes}'


@attrs.define
class Showtime:
    date: date
    time: str
    price: float
    total_seats: int
    available_seats: int
    is_active: bool = True
    id: Optional[int] = None

    @classmethod
    def create(cls, *, date: date, time: str, price: float, total_seats: int) -> 'Showtime':
        if price < 0:
            raise DomainError('Price must be a positive number')
        if total_seats < 1:
            raise DomainError('Total seats must be at least 1')

        return cls(
            date=date,
            time=normalize_time_label(time),
            price=price,
            total_seats=total_seats,
            available_seats=total_seats,
        )

    def matches(self, *, date: date, time: str) -> bool:
        return self.date == date and self.time == time

    def has_capacity_for(self, quantity: int) -> bool:
        return self.available_seats >= quantity

    @property
    def booked_seats(self) -> int:
        return self.total_seats - self.available_seats

    def apply_update(
        self,
        *,
        date: Optional[date] = None,
        time: Optional[str] = None,
        price: Optional[float] = None,
        total_seats: Optional[int] = None,
        is_active: Optional[bool] = None,
    ) -> 'Showtime':
        """
        Return an updated copy.

        Resizing keeps the number of seats already sold and clamps at zero:
        available = max(0, new_total - (old_total - old_available))
        """
        changes: dict = {}
        if date is not None:
            changes['date'] = date
        if time is not None:
            changes['time'] = normalize_time_label(time)
        if price is not None:
            if price < 0:
                raise DomainError('Price must be a positive number')
            changes['price'] = price
        if is_active is not None:
            changes['is_active'] = is_active
        if total_seats is not None:
            if total_seats < 1:
                raise DomainError('Total seats must be at least 1')
            changes['total_seats'] = total_seats
            changes['available_seats'] = max(0, total_seats - self.booked_seats)

        return attrs.evolve(self, **changes)


@attrs.define
class Movie:
    title: str
    description: str
    genre: List[str]
    duration: int
    director: str
    cast: List[str]
    release_date: date
    language: str
    poster: str
    rating: float = 0
    trailer: Optional[str] = None
    is_active: bool = True
    featured: bool = False
    showtimes: List[Showtime] = attrs.field(factory=list)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        title: str,
        description: str,
        genre: List[str],
        duration: int,
        director: str,
        cast: List[str],
        release_date: date,
        language: str,
        poster: str,
        rating: float = 0,
        trailer: Optional[str] = None,
        featured: bool = False,
        showtimes: Optional[List[Showtime]] = None,
    ) -> 'Movie':
        movie = cls(
            title=title.strip(),
            description=description.strip(),
            genre=genre,
            duration=duration,
            director=director.strip(),
            cast=cast,
            release_date=release_date,
            language=language.strip(),
            poster=poster,
            rating=rating,
            trailer=trailer,
            featured=featured,
        )
        movie.validate()

        for showtime in showtimes or []:
            movie.add_showtime(showtime)

        now = datetime.now(timezone.utc)
        movie.created_at = now
        movie.updated_at = now
        return movie

    def validate(self) -> None:
        if not self.title:
            raise DomainError('Title is required')
        if not self.genre:
            raise DomainError('At least one genre is required')
        if not self.cast:
            raise DomainError('At least one cast member is required')
        if self.duration < 1:
            raise DomainError('Duration must be at least 1 minute')
        if not 0 <= self.rating <= 10:
            raise DomainError('Rating must be between 0 and 10')

    @Logger.io
    def update(self, **fields) -> 'Movie':
        """Return a copy with the given catalogue fields replaced; None values are ignored."""
        changes = {key: value for key, value in fields.items() if value is not None}
        updated = attrs.evolve(self, **changes, updated_at=datetime.now(timezone.utc))
        updated.validate()
        return updated

    def find_bookable_showtime(self, *, date: date, time: str) -> Optional[Showtime]:
        """Showtime on that calendar day and time label that is open for booking."""
        return next(
            (st for st in self.showtimes if st.matches(date=date, time=time) and st.is_active),
            None,
        )

    def find_showtime(self, *, date: date, time: str) -> Optional[Showtime]:
        return next((st for st in self.showtimes if st.matches(date=date, time=time)), None)

    def get_showtime(self, showtime_id: int) -> Showtime:
        showtime = next((st for st in self.showtimes if st.id == showtime_id), None)
        if not showtime:
            raise NotFoundError('Showtime not found')
        return showtime

    def ensure_slot_free(self, *, date: date, time: str, exclude_id: Optional[int] = None) -> None:
        for showtime in self.showtimes:
            if showtime.id is not None and showtime.id == exclude_id:
                continue
            if showtime.matches(date=date, time=time):
                raise DomainError('Showtime already exists for this date and time')

    def add_showtime(self, showtime: Showtime) -> Showtime:
        self.ensure_slot_free(date=showtime.date, time=showtime.time)
        self.showtimes.append(showtime)
        return showtime

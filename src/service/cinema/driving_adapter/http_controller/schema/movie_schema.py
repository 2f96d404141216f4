"""
Movie API Schemas - catalogue entries and their showtimes
"""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.service.cinema.driving_adapter.http_controller.schema.common_schema import (
    PaginationResponse,
)


TIME_LABEL_REGEX = r'^([01]?\d|2[0-3]):[0-5]\d$'


def to_calendar_day(value: object) -> object:
    # Accept '2025-01-10' as well as full ISO datetimes; only the day is kept
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, str) and 'T' in value:
        return dt.datetime.fromisoformat(value.replace('Z', '+00:00')).date()
    return value


class ShowtimeCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {'date': '2025-01-10', 'time': '19:30', 'price': 12.5, 'total_seats': 100}
        }
    )

    date: dt.date
    time: str = Field(..., pattern=TIME_LABEL_REGEX)
    price: float = Field(..., ge=0)
    total_seats: int = Field(..., ge=1)

    @field_validator('date', mode='before')
    @classmethod
    def normalize_date(cls, v: object) -> object:
        return to_calendar_day(v)


class ShowtimeUpdateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={'example': {'price': 15.0, 'total_seats': 120, 'is_active': True}}
    )

    date: Optional[dt.date] = None
    time: Optional[str] = Field(None, pattern=TIME_LABEL_REGEX)
    price: Optional[float] = Field(None, ge=0)
    total_seats: Optional[int] = Field(None, ge=1)
    is_active: Optional[bool] = None

    @field_validator('date', mode='before')
    @classmethod
    def normalize_date(cls, v: object) -> object:
        return to_calendar_day(v)


class ShowtimeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: dt.date
    time: str
    price: float
    total_seats: int
    available_seats: int
    is_active: bool


class MovieCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'title': 'The Grand Premiere',
                'description': 'A story about a cinema that never closes.',
                'genre': ['Drama'],
                'duration': 120,
                'rating': 8.1,
                'poster': 'https://example.com/poster.jpg',
                'director': 'Jane Doe',
                'cast': ['Actor One', 'Actor Two'],
                'release_date': '2025-01-01',
                'language': 'English',
                'featured': True,
                'showtimes': [
                    {'date': '2025-01-10', 'time': '19:30', 'price': 12.5, 'total_seats': 100}
                ],
            }
        }
    )

    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    genre: List[str] = Field(..., min_length=1)
    duration: int = Field(..., ge=1)
    rating: float = Field(0, ge=0, le=10)
    poster: str = Field(..., min_length=1)
    trailer: Optional[str] = None
    director: str = Field(..., min_length=1)
    cast: List[str] = Field(..., min_length=1)
    release_date: dt.date
    language: str = Field(..., min_length=1)
    featured: bool = False
    showtimes: List[ShowtimeCreateRequest] = []

    @field_validator('release_date', mode='before')
    @classmethod
    def normalize_release_date(cls, v: object) -> object:
        return to_calendar_day(v)


class MovieUpdateRequest(BaseModel):
    model_config = ConfigDict(json_schema_extra={'example': {'featured': False, 'rating': 7.9}})

    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=1000)
    genre: Optional[List[str]] = Field(None, min_length=1)
    duration: Optional[int] = Field(None, ge=1)
    rating: Optional[float] = Field(None, ge=0, le=10)
    poster: Optional[str] = Field(None, min_length=1)
    trailer: Optional[str] = None
    director: Optional[str] = Field(None, min_length=1)
    cast: Optional[List[str]] = Field(None, min_length=1)
    release_date: Optional[dt.date] = None
    language: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None
    featured: Optional[bool] = None

    @field_validator('release_date', mode='before')
    @classmethod
    def normalize_release_date(cls, v: object) -> object:
        return to_calendar_day(v)


class MovieResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    genre: List[str]
    duration: int
    rating: float
    poster: str
    trailer: Optional[str] = None
    director: str
    cast: List[str]
    release_date: dt.date
    language: str
    is_active: bool
    featured: bool
    showtimes: List[ShowtimeResponse]
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


class MovieListResponse(BaseModel):
    movies: List[MovieResponse]
    pagination: PaginationResponse

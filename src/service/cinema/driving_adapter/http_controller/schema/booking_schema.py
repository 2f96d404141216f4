"""
Booking API Schemas - Pydantic models for request/response
"""

import datetime as dt
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.service.cinema.domain.entity.booking_entity import BookingStatus, PaymentMethod
from src.service.cinema.driving_adapter.http_controller.schema.common_schema import (
    PaginationResponse,
)
from src.service.cinema.driving_adapter.http_controller.schema.movie_schema import (
    TIME_LABEL_REGEX,
    to_calendar_day,
)


class BookingCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'movie_id': 1,
                'showtime_date': '2025-01-10',
                'showtime_time': '19:30',
                'seats': ['A1', 'A2'],
                'quantity': 2,
                'payment_method': 'credit_card',
                'notes': 'Aisle seats please',
            }
        }
    )

    movie_id: int
    showtime_date: dt.date
    showtime_time: str = Field(..., pattern=TIME_LABEL_REGEX)
    seats: List[str] = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    payment_method: PaymentMethod
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator('showtime_date', mode='before')
    @classmethod
    def normalize_showtime_date(cls, v: object) -> object:
        return to_calendar_day(v)


class BookingCancelRequest(BaseModel):
    model_config = ConfigDict(json_schema_extra={'example': {'reason': 'Change of plans'}})

    reason: Optional[str] = Field(None, max_length=200)


class BookingStatusUpdateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={'example': {'status': 'confirmed', 'reason': None}}
    )

    status: BookingStatus
    reason: Optional[str] = Field(None, max_length=200)


class BookingMovieInfo(BaseModel):
    id: int
    title: Optional[str] = None
    poster: Optional[str] = None


class BookingShowtimeInfo(BaseModel):
    date: dt.date
    time: str


class BookingUserInfo(BaseModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None


class BookingResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'id': '01234567-89ab-7def-0123-456789abcdef',
                'user_id': 1,
                'movie': {'id': 1, 'title': 'The Grand Premiere', 'poster': 'poster.jpg'},
                'showtime': {'date': '2025-01-10', 'time': '19:30'},
                'seats': ['A1', 'A2'],
                'quantity': 2,
                'total_amount': 25.0,
                'status': 'pending',
                'payment_method': 'credit_card',
                'payment_status': 'pending',
                'booking_code': 'K7Q2M9XA',
                'created_at': '2025-01-05T10:30:00Z',
            }
        }
    )

    id: UUID
    user_id: int
    movie: BookingMovieInfo
    showtime: BookingShowtimeInfo
    seats: List[str]
    quantity: int
    total_amount: float
    status: BookingStatus
    payment_method: PaymentMethod
    payment_status: str
    booking_code: str
    notes: Optional[str] = None
    cancelled_at: Optional[dt.datetime] = None
    cancelled_by: Optional[int] = None
    cancellation_reason: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
    user: Optional[BookingUserInfo] = None


class BookingListResponse(BaseModel):
    bookings: List[BookingResponse]
    pagination: PaginationResponse

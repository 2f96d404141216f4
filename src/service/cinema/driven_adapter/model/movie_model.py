from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.db_setting import Base


if TYPE_CHECKING:
    from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel


class MovieModel(Base):
    __tablename__ = 'movie'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    genre: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    poster: Mapped[str] = mapped_column(String(500), nullable=False)
    trailer: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    director: Mapped[str] = mapped_column(String(100), nullable=False)
    cast: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    release_date: Mapped[date] = mapped_column(Date, nullable=False)
    language: Mapped[str] = mapped_column(String(50), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    showtimes: Mapped[List['ShowtimeModel']] = relationship(
        'ShowtimeModel',
        back_populates='movie',
        cascade='all, delete-orphan',
        order_by='ShowtimeModel.id',
        lazy='selectin',
    )

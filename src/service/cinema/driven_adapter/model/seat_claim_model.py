from datetime import date
import uuid

from sqlalchemy import Date, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base


class SeatClaimModel(Base):
    """One row per seat held by an active booking; the unique key rejects double-booking."""

    __tablename__ = 'seat_claim'
    __table_args__ = (
        UniqueConstraint(
            'movie_id', 'showtime_date', 'showtime_time', 'seat', name='uq_seat_claim_showtime_seat'
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    movie_id: Mapped[int] = mapped_column(Integer, nullable=False)
    showtime_date: Mapped[date] = mapped_column(Date, nullable=False)
    showtime_time: Mapped[str] = mapped_column(String(5), nullable=False)
    seat: Mapped[str] = mapped_column(String(20), nullable=False)

from src.service.cinema.driven_adapter.model.booking_model import BookingModel
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.seat_claim_model import SeatClaimModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.model.user_model import UserModel


__all__ = ['BookingModel', 'MovieModel', 'SeatClaimModel', 'ShowtimeModel', 'UserModel']

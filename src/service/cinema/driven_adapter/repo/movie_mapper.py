from src.service.cinema.domain.entity.movie_entity import Movie, Showtime
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel


def showtime_to_entity(db_showtime: ShowtimeModel) -> Showtime:
    return Showtime(
        id=db_showtime.id,
        date=db_showtime.date,
        time=db_showtime.time,
        price=db_showtime.price,
        total_seats=db_showtime.total_seats,
        available_seats=db_showtime.available_seats,
        is_active=db_showtime.is_active,
    )


def movie_to_entity(db_movie: MovieModel) -> Movie:
    return Movie(
        id=db_movie.id,
        title=db_movie.title,
        description=db_movie.description,
        genre=list(db_movie.genre or []),
        duration=db_movie.duration,
        rating=db_movie.rating,
        poster=db_movie.poster,
        trailer=db_movie.trailer,
        director=db_movie.director,
        cast=list(db_movie.cast or []),
        release_date=db_movie.release_date,
        language=db_movie.language,
        is_active=db_movie.is_active,
        featured=db_movie.featured,
        showtimes=sorted(
            (showtime_to_entity(st) for st in db_movie.showtimes),
            key=lambda st: (st.date, st.time),
        ),
        created_at=db_movie.created_at,
        updated_at=db_movie.updated_at,
    )


def showtime_to_model(showtime: Showtime, *, movie_id: int | None = None) -> ShowtimeModel:
    db_showtime = ShowtimeModel(
        date=showtime.date,
        time=showtime.time,
        price=showtime.price,
        total_seats=showtime.total_seats,
        available_seats=showtime.available_seats,
        is_active=showtime.is_active,
    )
    if movie_id is not None:
        db_showtime.movie_id = movie_id
    return db_showtime

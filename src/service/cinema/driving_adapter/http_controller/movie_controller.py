from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_movie_use_case import CreateMovieUseCase
from src.service.cinema.app.command.delete_movie_use_case import DeleteMovieUseCase
from src.service.cinema.app.command.manage_showtime_use_case import ManageShowtimeUseCase
from src.service.cinema.app.command.update_movie_use_case import UpdateMovieUseCase
from src.service.cinema.app.query.get_movie_use_case import GetMovieUseCase
from src.service.cinema.app.query.list_movies_use_case import ListMoviesUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.cinema.driving_adapter.http_controller.schema.common_schema import (
    MessageResponse,
    PaginationResponse,
)
from src.service.cinema.driving_adapter.http_controller.schema.movie_schema import (
    MovieCreateRequest,
    MovieListResponse,
    MovieResponse,
    MovieUpdateRequest,
    ShowtimeCreateRequest,
    ShowtimeResponse,
    ShowtimeUpdateRequest,
)


router = APIRouter()


# ============================ Public catalogue ============================


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_movies(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    genre: Optional[str] = None,
    featured: Optional[bool] = None,
    use_case: ListMoviesUseCase = Depends(ListMoviesUseCase.depends),
) -> MovieListResponse:
    movies, pagination = await use_case.list_movies(
        page=page, limit=limit, search=search, genre=genre, featured=featured
    )
    return MovieListResponse(
        movies=[MovieResponse.model_validate(movie) for movie in movies],
        pagination=PaginationResponse(**pagination.to_dict()),
    )


@router.get('/{movie_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_movie(
    movie_id: int,
    use_case: GetMovieUseCase = Depends(GetMovieUseCase.depends),
) -> MovieResponse:
    movie = await use_case.get_movie(movie_id=movie_id)
    return MovieResponse.model_validate(movie)


# ============================ Admin catalogue ============================


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_movie(
    request: MovieCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateMovieUseCase = Depends(CreateMovieUseCase.depends),
) -> MovieResponse:
    movie = await use_case.create_movie(
        title=request.title,
        description=request.description,
        genre=request.genre,
        duration=request.duration,
        director=request.director,
        cast=request.cast,
        release_date=request.release_date,
        language=request.language,
        poster=request.poster,
        rating=request.rating,
        trailer=request.trailer,
        featured=request.featured,
        showtimes=[showtime.model_dump() for showtime in request.showtimes],
    )
    return MovieResponse.model_validate(movie)


@router.put('/{movie_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_movie(
    movie_id: int,
    request: MovieUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateMovieUseCase = Depends(UpdateMovieUseCase.depends),
) -> MovieResponse:
    movie = await use_case.update_movie(movie_id=movie_id, **request.model_dump(exclude_unset=True))
    return MovieResponse.model_validate(movie)


@router.delete('/{movie_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def delete_movie(
    movie_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: DeleteMovieUseCase = Depends(DeleteMovieUseCase.depends),
) -> MessageResponse:
    await use_case.delete_movie(movie_id=movie_id)
    return MessageResponse(message='Movie deleted successfully')


# ============================ Admin showtimes ============================


@router.post('/{movie_id}/showtime', status_code=status.HTTP_201_CREATED)
@Logger.io
async def add_showtime(
    movie_id: int,
    request: ShowtimeCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: ManageShowtimeUseCase = Depends(ManageShowtimeUseCase.depends),
) -> ShowtimeResponse:
    showtime = await use_case.add_showtime(
        movie_id=movie_id,
        date=request.date,
        time=request.time,
        price=request.price,
        total_seats=request.total_seats,
    )
    return ShowtimeResponse.model_validate(showtime)


@router.put('/{movie_id}/showtime/{showtime_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_showtime(
    movie_id: int,
    showtime_id: int,
    request: ShowtimeUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: ManageShowtimeUseCase = Depends(ManageShowtimeUseCase.depends),
) -> ShowtimeResponse:
    showtime = await use_case.update_showtime(
        movie_id=movie_id,
        showtime_id=showtime_id,
        **request.model_dump(exclude_unset=True),
    )
    return ShowtimeResponse.model_validate(showtime)


@router.delete('/{movie_id}/showtime/{showtime_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def delete_showtime(
    movie_id: int,
    showtime_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: ManageShowtimeUseCase = Depends(ManageShowtimeUseCase.depends),
) -> MessageResponse:
    await use_case.delete_showtime(movie_id=movie_id, showtime_id=showtime_id)
    return MessageResponse(message='Showtime deleted successfully')

from datetime import date

import pytest

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.service.cinema.domain.entity.movie_entity import Movie, Showtime, normalize_time_label
from test.service.cinema.unit.helpers import SHOW_DATE, SHOW_TIME, make_movie, make_showtime


@pytest.mark.unit
class TestTimeLabel:
    @pytest.mark.parametrize(
        ('label', 'expected'),
        [('9:30', '09:30'), ('19:05', '19:05'), (' 00:00 ', '00:00'), ('23:59', '23:59')],
    )
    def test_normalizes_valid_labels(self, label: str, expected: str):
        assert normalize_time_label(label) == expected

    @pytest.mark.parametrize('label', ['24:00', '7pm', '12:60', ''])
    def test_rejects_invalid_labels(self, label: str):
        with pytest.raises(DomainError, match='Invalid showtime time'):
            normalize_time_label(label)


@pytest.mark.unit
class TestShowtime:
    def test_create_starts_fully_available(self):
        showtime = Showtime.create(date=SHOW_DATE, time='9:00', price=10, total_seats=50)

        assert showtime.available_seats == 50
        assert showtime.time == '09:00'
        assert showtime.is_active

    def test_create_rejects_zero_seats(self):
        with pytest.raises(DomainError, match='Total seats must be at least 1'):
            Showtime.create(date=SHOW_DATE, time='9:00', price=10, total_seats=0)

    def test_create_rejects_negative_price(self):
        with pytest.raises(DomainError, match='Price must be a positive number'):
            Showtime.create(date=SHOW_DATE, time='9:00', price=-1, total_seats=10)

    def test_resize_keeps_sold_seats(self):
        # 8 of 10 sold
        showtime = make_showtime(total_seats=10, available_seats=2)

        assert showtime.apply_update(total_seats=20).available_seats == 12

    def test_shrinking_below_sold_clamps_at_zero(self):
        showtime = make_showtime(total_seats=10, available_seats=2)

        resized = showtime.apply_update(total_seats=5)

        assert resized.total_seats == 5
        assert resized.available_seats == 0

    def test_update_without_resize_keeps_inventory(self):
        showtime = make_showtime(total_seats=10, available_seats=4)

        updated = showtime.apply_update(price=20, is_active=False)

        assert updated.available_seats == 4
        assert updated.price == 20
        assert updated.is_active is False


@pytest.mark.unit
class TestMovie:
    def test_find_bookable_showtime_skips_inactive(self):
        movie = make_movie(showtimes=[make_showtime(is_active=False)])

        assert movie.find_bookable_showtime(date=SHOW_DATE, time=SHOW_TIME) is None
        assert movie.find_showtime(date=SHOW_DATE, time=SHOW_TIME) is not None

    def test_find_bookable_showtime_matches_date_and_time(self):
        movie = make_movie()

        assert movie.find_bookable_showtime(date=SHOW_DATE, time=SHOW_TIME) is not None
        assert movie.find_bookable_showtime(date=SHOW_DATE, time='21:00') is None
        assert movie.find_bookable_showtime(date=date(2025, 1, 11), time=SHOW_TIME) is None

    def test_add_showtime_rejects_duplicate_slot(self):
        movie = make_movie()

        with pytest.raises(DomainError, match='Showtime already exists for this date and time'):
            movie.add_showtime(
                Showtime.create(date=SHOW_DATE, time=SHOW_TIME, price=10, total_seats=10)
            )

    def test_ensure_slot_free_ignores_the_showtime_being_moved(self):
        movie = make_movie()

        movie.ensure_slot_free(date=SHOW_DATE, time=SHOW_TIME, exclude_id=11)

    def test_get_showtime_raises_when_missing(self):
        with pytest.raises(NotFoundError, match='Showtime not found'):
            make_movie().get_showtime(999)

    def test_update_ignores_none_and_validates(self):
        movie = make_movie()

        updated = movie.update(title='New Title', trailer=None)

        assert updated.title == 'New Title'
        assert updated.showtimes == movie.showtimes
        with pytest.raises(DomainError, match='Rating must be between 0 and 10'):
            movie.update(rating=11)

    def test_create_validates_catalogue_fields(self):
        with pytest.raises(DomainError, match='At least one genre is required'):
            Movie.create(
                title='Title',
                description='Long enough description',
                genre=[],
                duration=100,
                director='Someone',
                cast=['A'],
                release_date=date(2025, 1, 1),
                language='English',
                poster='p.jpg',
            )

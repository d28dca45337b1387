"""
BookingWindowPolicy unit tests
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.platform.exception.exceptions import BookingWindowClosedError
from src.service.seat_inventory.domain.booking_window_policy import BookingWindowPolicy


STARTS_AT = datetime(2026, 12, 24, 19, 30, tzinfo=timezone.utc)


class TestBookingWindowPolicy:
    @pytest.fixture
    def policy(self):
        return BookingWindowPolicy()

    @pytest.mark.parametrize('show_type', ['movie', 'theater', 'concert'])
    def test_open_before_start_for_every_show_type(self, policy, show_type):
        policy.ensure_open(
            show_type=show_type, starts_at=STARTS_AT, now=STARTS_AT - timedelta(minutes=1)
        )

    def test_open_exactly_at_start(self, policy):
        policy.ensure_open(show_type='theater', starts_at=STARTS_AT, now=STARTS_AT)

    def test_movie_within_grace_period(self, policy):
        policy.ensure_open(
            show_type='movie', starts_at=STARTS_AT, now=STARTS_AT + timedelta(minutes=10)
        )

    def test_movie_at_grace_boundary_still_open(self, policy):
        policy.ensure_open(
            show_type='Movie', starts_at=STARTS_AT, now=STARTS_AT + timedelta(minutes=15)
        )

    def test_movie_closed_within_minute_after_grace_boundary(self, policy):
        with pytest.raises(BookingWindowClosedError) as exc_info:
            policy.ensure_open(
                show_type='movie',
                starts_at=STARTS_AT,
                now=STARTS_AT + timedelta(minutes=15, seconds=30),
            )

        assert exc_info.value.minutes_late == 15

    def test_movie_after_grace_period_closed(self, policy):
        with pytest.raises(BookingWindowClosedError) as exc_info:
            policy.ensure_open(
                show_type='movie', starts_at=STARTS_AT, now=STARTS_AT + timedelta(minutes=20)
            )

        assert exc_info.value.minutes_late == 20
        assert exc_info.value.rule == 'late_booking_grace_15_minutes'
        assert exc_info.value.status_code == 422

    def test_theater_closed_once_started(self, policy):
        with pytest.raises(BookingWindowClosedError) as exc_info:
            policy.ensure_open(
                show_type='theater', starts_at=STARTS_AT, now=STARTS_AT + timedelta(minutes=1)
            )

        assert exc_info.value.rule == 'no_booking_after_start'
        assert 'theater' in exc_info.value.message

    def test_from_settings_normalizes_show_types(self):
        policy = BookingWindowPolicy.from_settings(
            late_show_types=['MOVIE', 'Opera'], grace_minutes=5
        )

        policy.ensure_open(
            show_type='opera', starts_at=STARTS_AT, now=STARTS_AT + timedelta(minutes=5)
        )
        with pytest.raises(BookingWindowClosedError):
            policy.ensure_open(
                show_type='movie', starts_at=STARTS_AT, now=STARTS_AT + timedelta(minutes=6)
            )

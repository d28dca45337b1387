import attrs
import pytest

from src.service.seat_inventory.domain.capacity_withholding_domain import withheld_seat_ids
from src.service.seat_inventory.domain.seat_layout_domain import plan_seat_layout


@pytest.fixture
def hall_seats():
    seats = plan_seat_layout(venue_id=1, capacity=100)
    return [attrs.evolve(seat, id=i + 1) for i, seat in enumerate(seats)]


def _labels(seats, ids):
    return {s.label for s in seats if s.id in ids}


class TestWithheldSeats:
    def test_nothing_withheld_at_full_capacity(self, hall_seats):
        assert withheld_seat_ids(hall_seats, 100) == set()
        assert withheld_seat_ids(hall_seats, 120) == set()

    def test_surplus_split_across_categories_from_the_back(self, hall_seats):
        withheld = withheld_seat_ids(hall_seats, 90)

        assert len(withheld) == 10
        assert _labels(hall_seats, withheld) == {
            'J10', 'J9', 'J8', 'J7', 'J6', 'J5', 'J4', 'J3',  # standard, 80%
            'B10',  # vip, 10%
            'E10',  # premium, remainder
        }  # fmt: skip

    def test_exactly_surplus_seats_withheld_when_a_category_runs_short(self, hall_seats):
        # Only 20 VIP seats exist; a 10% quota of 95 is still satisfiable, the
        # 80% standard quota of 76 is not (50 standard seats)
        withheld = withheld_seat_ids(hall_seats, 5)

        assert len(withheld) == 95
        assert len(hall_seats) - len(withheld) == 5

    def test_result_is_deterministic(self, hall_seats):
        assert withheld_seat_ids(hall_seats, 73) == withheld_seat_ids(
            list(reversed(hall_seats)), 73
        )

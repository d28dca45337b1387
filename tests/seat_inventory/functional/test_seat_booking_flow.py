from pathlib import Path

from pytest_bdd import scenarios


scenarios(Path(__file__).parent.parent.parent / 'features' / 'seat_booking.feature')

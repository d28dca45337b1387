from decimal import Decimal

import pytest

from src.service.seat_inventory.driven_adapter.policy.static_discount_policy import (
    StaticDiscountPolicy,
)


@pytest.fixture
def policy():
    return StaticDiscountPolicy(promotion_codes={'save10': 10, 'THIRD': 33, 'FREE': 150})


class TestStaticDiscountPolicy:
    def test_no_code_keeps_amount(self, policy):
        assert policy.apply_discount(code=None, amount=Decimal('100.00')) == Decimal('100.00')

    def test_codes_are_case_insensitive(self, policy):
        assert policy.apply_discount(code=' Save10 ', amount=Decimal('400.00')) == Decimal(
            '360.00'
        )

    def test_rounds_half_up_to_cents(self, policy):
        # 0.67 * 10.05 = 6.7335
        assert policy.apply_discount(code='THIRD', amount=Decimal('10.05')) == Decimal('6.73')

    def test_percent_is_clamped(self, policy):
        assert policy.apply_discount(code='FREE', amount=Decimal('80.00')) == Decimal('0.00')

    def test_unknown_code_is_ignored(self, policy):
        assert policy.apply_discount(code='NOPE', amount=Decimal('50.00')) == Decimal('50.00')

"""Seat Inventory Domain Value Objects"""

from src.service.seat_inventory.domain.value_object.row_label import (
    row_label_for_index,
    row_sort_key,
)

__all__ = ['row_label_for_index', 'row_sort_key']

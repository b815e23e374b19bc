# FILE: seating_core/seat.py
from __future__ import annotations
from functools import cmp_to_key
from typing import Iterable, List, Optional, Tuple

from .constants import SEAT_KEY_PATTERN
from .models import Layout, SeatKey


def make_seat_key(row: int, col: int) -> SeatKey:
    return f"r{row}c{col}"


def parse_seat_key(seat: str) -> Optional[Tuple[int, int]]:
    """Return (row, col) for a well-formed seat key, None otherwise. Never raises."""
    if not isinstance(seat, str):
        return None
    m = SEAT_KEY_PATTERN.fullmatch(seat)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2))


def is_seat_inside_layout(layout: Layout, seat: str) -> bool:
    parsed = parse_seat_key(seat)
    if parsed is None:
        return False
    row, col = parsed
    return 1 <= row <= layout.rows and 1 <= col <= layout.cols


def is_adjacent_seat(a: str, b: str) -> bool:
    # orthogonal neighbours only
    pa, pb = parse_seat_key(a), parse_seat_key(b)
    if pa is None or pb is None:
        return False
    return abs(pa[0] - pb[0]) + abs(pa[1] - pb[1]) == 1


def list_all_seats(layout: Layout) -> List[SeatKey]:
    """Every seat in row-major order (rows outer, cols inner, both ascending)."""
    return [
        make_seat_key(row, col)
        for row in range(1, layout.rows + 1)
        for col in range(1, layout.cols + 1)
    ]


def list_assignable_seats(layout: Layout) -> List[SeatKey]:
    disabled = set(layout.disabled_seats)
    return [s for s in list_all_seats(layout) if s not in disabled]


def compare_seat_key(a: str, b: str) -> int:
    pa, pb = parse_seat_key(a), parse_seat_key(b)
    if pa is None or pb is None:
        return (a > b) - (a < b)
    if pa[0] != pb[0]:
        return pa[0] - pb[0]
    return pa[1] - pb[1]


seat_sort_key = cmp_to_key(compare_seat_key)


def sort_seats(seats: Iterable[str]) -> List[str]:
    return sorted(seats, key=seat_sort_key)

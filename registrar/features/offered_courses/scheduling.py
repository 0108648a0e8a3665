"""Time-slot arithmetic for class schedules.

Slots are half-open ``[start, end)`` intervals on a weekday, so a class
ending at 10:00 and another starting at 10:00 in the same room do not clash.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from itertools import combinations
from typing import Iterable, Optional, Tuple
from uuid import UUID

from .models import WeekDay


@dataclass(frozen=True)
class Slot:
    day_of_week: WeekDay
    start_time: time
    end_time: time
    room_id: UUID
    faculty_id: UUID


def intervals_overlap(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    return start_a < end_b and start_b < end_a


def slots_clash(a: Slot, b: Slot) -> Optional[str]:
    """Return ``"room"`` or ``"faculty"`` when the two slots collide, else None."""
    if a.day_of_week != b.day_of_week:
        return None
    if not intervals_overlap(a.start_time, a.end_time, b.start_time, b.end_time):
        return None
    if a.room_id == b.room_id:
        return "room"
    if a.faculty_id == b.faculty_id:
        return "faculty"
    return None


def first_batch_clash(slots: Iterable[Slot]) -> Optional[Tuple[str, Slot, Slot]]:
    for a, b in combinations(list(slots), 2):
        kind = slots_clash(a, b)
        if kind:
            return kind, a, b
    return None

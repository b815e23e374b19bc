# FILE: seating_core/generator.py
from __future__ import annotations
import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple, TypeVar
import numpy as np

from .constants import DEFAULT_MAX_RETRIES
from .exceptions import CapacityError
from .models import FixedSeatRule, GenerateResult, Project, SeatKey, SeatToPersonMap
from .seat import list_assignable_seats
from .validation import count_hard, validate_assignment

logger = logging.getLogger(__name__)

T = TypeVar("T")


def shuffle(items: Sequence[T], rng: np.random.Generator) -> List[T]:
    """Fisher-Yates over a copy; the input is left untouched."""
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = int(rng.integers(0, i + 1))
        out[i], out[j] = out[j], out[i]
    return out


def place_fixed_seats(project: Project) -> Tuple[SeatToPersonMap, Set[str]]:
    """Pinned seat -> person mapping from FixedSeat rules of active persons."""
    active = {p.id for p in project.active_persons()}
    pinned: SeatToPersonMap = {}
    pinned_pids: Set[str] = set()
    for rule in project.rules:
        if not isinstance(rule, FixedSeatRule):
            continue
        if rule.person_id not in active:
            continue
        pinned[rule.seat] = rule.person_id
        pinned_pids.add(rule.person_id)
    return pinned, pinned_pids


def check_capacity(project: Project) -> None:
    persons = len(project.active_persons())
    seats = len(list_assignable_seats(project.layout))
    if persons > seats:
        raise CapacityError(persons, seats)


def generate_seat_to_person(
    project: Project,
    max_retries: int = DEFAULT_MAX_RETRIES,
    rng: Optional[np.random.Generator] = None,
) -> GenerateResult:
    """
    Random-restart generation:
    - pin FixedSeat rules, shuffle the rest of the seats and persons, zip them
    - return the first candidate with zero HARD violations
    - otherwise the candidate with the fewest HARD violations (first seen wins ties)
    Raises CapacityError up front when active persons exceed assignable seats.
    """
    check_capacity(project)
    rng = rng if rng is not None else np.random.default_rng()

    active = project.active_persons()
    seats = list_assignable_seats(project.layout)
    if max_retries <= 0 or (not active and not seats):
        return GenerateResult()

    pinned, pinned_pids = place_fixed_seats(project)
    free_seats = [s for s in seats if s not in pinned]
    free_pids = [p.id for p in active if p.id not in pinned_pids]

    best: Optional[GenerateResult] = None
    best_hard = 0
    for attempt in range(1, max_retries + 1):
        candidate: Dict[SeatKey, str] = dict(pinned)
        for seat, pid in zip(shuffle(free_seats, rng), shuffle(free_pids, rng)):
            candidate[seat] = pid

        violations = validate_assignment(project, candidate)
        hard = count_hard(violations)
        if best is None or hard < best_hard:
            best = GenerateResult(seat_to_person=candidate, violations=violations, attempts=attempt)
            best_hard = hard
        if hard == 0:
            logger.debug("generation succeeded on attempt %d for project %s", attempt, project.id)
            return best

    logger.warning(
        "no violation-free mapping after %d attempts for project %s; best has %d hard violations",
        max_retries, project.id, best_hard,
    )
    return best

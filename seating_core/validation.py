# FILE: seating_core/validation.py
"""
Hard-constraint checks for a seat -> person mapping.

Categories are evaluated in a fixed order so the output is stable:
disabled seats, fixed seats, duplicates, unassigned persons, separations.
"""
from __future__ import annotations
from typing import Dict, List, Set

from .models import (
    FixedSeatRule, Project, SeatKey, SeatToPersonMap, SeparateRule, Violation,
)
from .seat import is_adjacent_seat, is_seat_inside_layout


def build_person_to_seats(seat_to_person: SeatToPersonMap) -> Dict[str, List[SeatKey]]:
    """Group occupied seats by person id, keeping map iteration order."""
    out: Dict[str, List[SeatKey]] = {}
    for seat, pid in seat_to_person.items():
        if not pid:
            continue
        out.setdefault(pid, []).append(seat)
    return out


def is_hard(violation: Violation) -> bool:
    return violation.severity == "HARD"


def count_hard(violations: List[Violation]) -> int:
    return sum(1 for v in violations if is_hard(v))


def _check_disabled_seats(project: Project, seat_to_person: SeatToPersonMap) -> List[Violation]:
    disabled = set(project.layout.disabled_seats)
    out = []
    for seat, pid in seat_to_person.items():
        if not pid:
            continue
        if not is_seat_inside_layout(project.layout, seat) or seat in disabled:
            out.append(Violation(
                type="DISABLED_SEAT_USED",
                message=f"Disabled seat {seat} is assigned to {pid}.",
                detail={"seat": seat, "personId": pid},
            ))
    return out


def _check_fixed_seats(project: Project, seat_to_person: SeatToPersonMap, active: Set[str]) -> List[Violation]:
    out = []
    for rule in project.rules:
        if not isinstance(rule, FixedSeatRule):
            continue
        if rule.person_id not in active:
            continue
        if seat_to_person.get(rule.seat) != rule.person_id:
            out.append(Violation(
                type="FIXED_SEAT_BROKEN",
                message=f"Fixed seat broken: {rule.person_id} must sit at {rule.seat}.",
                detail={"personId": rule.person_id, "seat": rule.seat},
            ))
    return out


def _check_duplicates(person_to_seats: Dict[str, List[SeatKey]]) -> List[Violation]:
    out = []
    for pid, seats in person_to_seats.items():
        if len(seats) <= 1:
            continue
        out.append(Violation(
            type="DUPLICATE_PERSON",
            message=f"{pid} is assigned to more than one seat.",
            detail={"personId": pid, "seats": ",".join(seats)},
        ))
    return out


def _check_unassigned(project: Project, person_to_seats: Dict[str, List[SeatKey]]) -> List[Violation]:
    out = []
    for p in project.active_persons():
        if person_to_seats.get(p.id):
            continue
        out.append(Violation(
            type="UNASSIGNED_PERSON",
            message=f"{p.id} has no seat.",
            detail={"personId": p.id},
        ))
    return out


def _check_separation(rule: SeparateRule, active: Set[str],
                      person_to_seats: Dict[str, List[SeatKey]]) -> List[Violation]:
    if rule.person_a_id not in active or rule.person_b_id not in active:
        return []
    # first seat only; duplicates are already reported as DUPLICATE_PERSON
    seat_a = (person_to_seats.get(rule.person_a_id) or [None])[0]
    seat_b = (person_to_seats.get(rule.person_b_id) or [None])[0]
    if not seat_a or not seat_b:
        return []
    if not is_adjacent_seat(seat_a, seat_b):
        return []
    return [Violation(
        type="NOT_ADJACENT",
        message=f"{rule.person_a_id} and {rule.person_b_id} are seated next to each other.",
        detail={
            "personAId": rule.person_a_id,
            "personBId": rule.person_b_id,
            "seatA": seat_a,
            "seatB": seat_b,
        },
    )]


def validate_assignment(project: Project, seat_to_person: SeatToPersonMap) -> List[Violation]:
    """Return the ordered list of violations for a candidate mapping."""
    active = {p.id for p in project.active_persons()}
    person_to_seats = build_person_to_seats(seat_to_person)

    violations: List[Violation] = []
    violations += _check_disabled_seats(project, seat_to_person)
    violations += _check_fixed_seats(project, seat_to_person, active)
    violations += _check_duplicates(person_to_seats)
    violations += _check_unassigned(project, person_to_seats)
    for rule in project.rules:
        # AvoidSameSeatFromLastRule is declared but not evaluated
        if isinstance(rule, SeparateRule):
            violations += _check_separation(rule, active, person_to_seats)
    return violations

# FILE: seating_core/editing.py
"""
Project edits. Each function returns a new Project (or mapping) and leaves
its input untouched; invalid input raises ProjectEditError.
"""
from __future__ import annotations
from typing import Iterable, List, Optional, Tuple

from .constants import DEFAULT_COLS, DEFAULT_ROWS, MAX_LAYOUT_DIM
from .exceptions import ProjectEditError
from .models import (
    AssignmentEdit, FixedSeatRule, Layout, Person, Project, Rule, SeatKey,
    SeatToPersonMap, SeparateRule, now_iso,
)
from .seat import is_seat_inside_layout, parse_seat_key, sort_seats


def _touch(project: Project, **changes) -> Project:
    changes["updated_at"] = now_iso()
    return project.model_copy(update=changes, deep=True)


def _require_name(name: str, what: str = "Name") -> str:
    name = (name or "").strip()
    if not name:
        raise ProjectEditError(f"{what} must not be blank.")
    return name


def _require_person(project: Project, person_id: str) -> Person:
    for p in project.persons:
        if p.id == person_id:
            return p
    raise ProjectEditError(f"Unknown person: {person_id}")


def _require_seat(project: Project, seat: str) -> SeatKey:
    seat = (seat or "").strip()
    if parse_seat_key(seat) is None:
        raise ProjectEditError("Seat must look like r{row}c{col}.")
    if not is_seat_inside_layout(project.layout, seat):
        raise ProjectEditError(f"Seat {seat} is outside the current layout.")
    return seat


# -----------------------
# Project
# -----------------------
def create_project(name: str, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> Project:
    return Project(name=_require_name(name, "Project name"), layout=Layout(rows=rows, cols=cols))


def rename_project(project: Project, name: str) -> Project:
    return _touch(project, name=_require_name(name, "Project name"))


# -----------------------
# Layout
# -----------------------
def _drop_fixed_rules_at(rules: Iterable[Rule], keep_seat) -> List[Rule]:
    return [r for r in rules if not isinstance(r, FixedSeatRule) or keep_seat(r.seat)]


def resize_layout(project: Project, rows: int, cols: int, max_dim: int = MAX_LAYOUT_DIM) -> Project:
    """Clamp to 1..max_dim; drop disabled seats and fixed seats that no longer fit."""
    rows = max(1, min(max_dim, int(rows)))
    cols = max(1, min(max_dim, int(cols)))
    bounds = Layout(rows=rows, cols=cols)
    disabled = [s for s in project.layout.disabled_seats if is_seat_inside_layout(bounds, s)]
    rules = _drop_fixed_rules_at(
        project.rules,
        lambda seat: is_seat_inside_layout(bounds, seat) and seat not in disabled,
    )
    return _touch(project, layout=Layout(rows=rows, cols=cols, disabled_seats=disabled), rules=rules)


def toggle_disabled_seat(project: Project, seat: SeatKey) -> Project:
    seat = _require_seat(project, seat)
    disabled = set(project.layout.disabled_seats)
    if seat in disabled:
        disabled.remove(seat)
    else:
        disabled.add(seat)
    layout = project.layout.model_copy(update={"disabled_seats": sort_seats(disabled)})
    rules = _drop_fixed_rules_at(project.rules, lambda s: s not in disabled)
    return _touch(project, layout=layout, rules=rules)


# -----------------------
# Persons
# -----------------------
def add_person(project: Project, name: str) -> Project:
    person = Person(name=_require_name(name))
    return _touch(project, persons=project.persons + [person])


def add_persons_bulk(project: Project, text: str) -> Project:
    """One name per line; blank lines are skipped."""
    names = [line.strip() for line in (text or "").splitlines() if line.strip()]
    if not names:
        raise ProjectEditError("No names to add.")
    return _touch(project, persons=project.persons + [Person(name=n) for n in names])


def _replace_person(project: Project, person_id: str, **changes) -> Project:
    _require_person(project, person_id)
    persons = [p.model_copy(update=changes) if p.id == person_id else p for p in project.persons]
    return _touch(project, persons=persons)


def toggle_absent(project: Project, person_id: str) -> Project:
    return _replace_person(project, person_id, absent=not _require_person(project, person_id).absent)


def toggle_gender(project: Project, person_id: str) -> Project:
    cur = _require_person(project, person_id).gender
    return _replace_person(project, person_id, gender="female" if cur == "male" else "male")


def filter_rules_by_existing_persons(rules: Iterable[Rule], persons: Iterable[Person]) -> List[Rule]:
    ids = {p.id for p in persons}
    out = []
    for r in rules:
        if isinstance(r, FixedSeatRule) and r.person_id not in ids:
            continue
        if isinstance(r, SeparateRule) and (r.person_a_id not in ids or r.person_b_id not in ids):
            continue
        out.append(r)
    return out


def remove_person(project: Project, person_id: str) -> Project:
    _require_person(project, person_id)
    persons = [p for p in project.persons if p.id != person_id]
    return _touch(project, persons=persons, rules=filter_rules_by_existing_persons(project.rules, persons))


# -----------------------
# Rules
# -----------------------
def add_fixed_seat_rule(project: Project, person_id: str, seat: str) -> Project:
    _require_person(project, person_id)
    seat = _require_seat(project, seat)
    if seat in project.layout.disabled_seats:
        raise ProjectEditError(f"Seat {seat} is disabled and cannot be a fixed seat.")
    # one fixed seat per person: the new rule replaces the old one
    rules = [r for r in project.rules if not (isinstance(r, FixedSeatRule) and r.person_id == person_id)]
    rules.append(FixedSeatRule(person_id=person_id, seat=seat))
    return _touch(project, rules=rules)


def add_separate_rule(project: Project, person_a_id: str, person_b_id: str) -> Project:
    if not person_a_id or not person_b_id:
        raise ProjectEditError("Pick two persons to separate.")
    if person_a_id == person_b_id:
        raise ProjectEditError("A person cannot be separated from themselves.")
    _require_person(project, person_a_id)
    _require_person(project, person_b_id)
    pair = {person_a_id, person_b_id}
    for r in project.rules:
        if isinstance(r, SeparateRule) and {r.person_a_id, r.person_b_id} == pair:
            raise ProjectEditError("This separation rule already exists.")
    rule = SeparateRule(person_a_id=person_a_id, person_b_id=person_b_id)
    return _touch(project, rules=project.rules + [rule])


def remove_rule(project: Project, rule_id: str) -> Project:
    return _touch(project, rules=[r for r in project.rules if r.id != rule_id])


# -----------------------
# Draft mapping helpers
# -----------------------
def prune_disabled_seats(seat_to_person: SeatToPersonMap, disabled_seats: Iterable[SeatKey]) -> SeatToPersonMap:
    disabled = set(disabled_seats)
    return {s: pid for s, pid in seat_to_person.items() if s not in disabled}


def remove_person_from_mapping(seat_to_person: SeatToPersonMap, person_id: str) -> SeatToPersonMap:
    return {s: pid for s, pid in seat_to_person.items() if pid != person_id}


def apply_seat_edit(
    project: Project,
    seat_to_person: SeatToPersonMap,
    from_seat: SeatKey,
    to_seat: SeatKey,
    at: Optional[str] = None,
) -> Tuple[SeatToPersonMap, Optional[AssignmentEdit]]:
    """
    Move the occupant of from_seat to to_seat, swapping if to_seat is taken.
    Returns (mapping, edit); edit is None when nothing changed.
    Seats that are malformed or outside the layout raise ProjectEditError.
    """
    from_seat = _require_seat(project, from_seat)
    to_seat = _require_seat(project, to_seat)
    disabled = set(project.layout.disabled_seats)
    if from_seat == to_seat or from_seat in disabled or to_seat in disabled:
        return dict(seat_to_person), None
    mover = seat_to_person.get(from_seat)
    if not mover:
        return dict(seat_to_person), None

    out = dict(seat_to_person)
    other = out.get(to_seat)
    if other:
        out[from_seat] = other
        kind = "swap"
    else:
        del out[from_seat]
        kind = "move"
    out[to_seat] = mover
    edit = AssignmentEdit(type=kind, from_seat=from_seat, to_seat=to_seat, at=at or now_iso())
    return out, edit

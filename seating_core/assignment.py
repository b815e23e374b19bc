# FILE: seating_core/assignment.py
from __future__ import annotations
from typing import List, Optional
import numpy as np

from .constants import COMMIT_ADJUSTED, DEFAULT_MAX_RETRIES, commit_generated
from .generator import generate_seat_to_person
from .models import Assignment, AssignmentEdit, Project, SeatToPersonMap
from .validation import validate_assignment


def build_generated_assignment(
    project: Project,
    max_retries: int = DEFAULT_MAX_RETRIES,
    rng: Optional[np.random.Generator] = None,
) -> Assignment:
    """Generate a mapping and wrap it as a fresh snapshot. CapacityError propagates."""
    generated = generate_seat_to_person(project, max_retries=max_retries, rng=rng)
    return Assignment(
        project_id=project.id,
        seat_to_person=dict(generated.seat_to_person),
        violations=list(generated.violations),
        commit=commit_generated(generated.attempts),
    )


def build_adjusted_assignment(
    project: Project,
    seat_to_person: SeatToPersonMap,
    edits: List[AssignmentEdit],
    base_assignment_id: Optional[str] = None,
) -> Assignment:
    """
    Wrap a manually adjusted mapping as a new snapshot.
    The mapping is re-validated; the base snapshot is only referenced, never touched.
    """
    mapping = dict(seat_to_person)
    return Assignment(
        project_id=project.id,
        seat_to_person=mapping,
        violations=validate_assignment(project, mapping),
        edits=list(edits),
        commit=COMMIT_ADJUSTED,
        base_assignment_id=base_assignment_id,
    )

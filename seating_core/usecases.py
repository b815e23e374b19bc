# FILE: seating_core/usecases.py
"""
Application use cases: core operations plus persistence in a MemoryStore.
"""
from __future__ import annotations
import logging
import time
from typing import Callable, List, Optional
import numpy as np

from .assignment import build_adjusted_assignment, build_generated_assignment
from .config import AppConfig, make_rng
from .editing import create_project
from .exceptions import NotFoundError
from .models import (
    Assignment, AssignmentEdit, Project, RevealMode, RevealSession, SeatToPersonMap,
    Violation, now_iso,
)
from .repository import MemoryStore
from .reveal import (
    advance_reveal_step, finish_reveal_session, pause_reveal_session,
    resume_reveal_session, run_reveal, start_reveal_session,
)
from .validation import count_hard, validate_assignment

logger = logging.getLogger(__name__)


def hard_violation_count(violations: List[Violation]) -> int:
    return count_hard(violations)


# ---- projects ----
def create_project_usecase(store: MemoryStore, name: str, config: Optional[AppConfig] = None) -> Project:
    config = config or AppConfig()
    project = create_project(name, rows=config.default_rows, cols=config.default_cols)
    store.put_project(project)
    logger.info("created project %s (%s)", project.id, project.name)
    return project


def update_project_usecase(store: MemoryStore, project: Project) -> Project:
    updated = project.model_copy(update={"updated_at": now_iso()}, deep=True)
    store.put_project(updated)
    return updated


def get_project_usecase(store: MemoryStore, project_id: str) -> Optional[Project]:
    return store.get_project(project_id)


def require_project(store: MemoryStore, project_id: str) -> Project:
    p = store.get_project(project_id)
    if p is None:
        raise NotFoundError("Project", project_id)
    return p


def list_projects_usecase(store: MemoryStore) -> List[Project]:
    return store.list_projects()


def delete_project_usecase(store: MemoryStore, project_id: str) -> None:
    store.delete_project(project_id)


# ---- assignments ----
def generate_assignment_usecase(
    store: MemoryStore,
    project: Project,
    config: Optional[AppConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> Assignment:
    config = config or AppConfig()
    rng = rng if rng is not None else make_rng(config)
    assignment = build_generated_assignment(project, max_retries=config.max_retries, rng=rng)
    store.put_assignment(assignment)
    hard = hard_violation_count(assignment.violations)
    if hard:
        logger.warning("assignment %s saved with %d hard violations", assignment.id, hard)
    else:
        logger.info("assignment %s generated (%s)", assignment.id, assignment.commit)
    return assignment


def get_assignment_usecase(store: MemoryStore, assignment_id: str) -> Optional[Assignment]:
    return store.get_assignment(assignment_id)


def require_assignment(store: MemoryStore, assignment_id: str) -> Assignment:
    a = store.get_assignment(assignment_id)
    if a is None:
        raise NotFoundError("Assignment", assignment_id)
    return a


def list_assignments_usecase(store: MemoryStore, project_id: str) -> List[Assignment]:
    return store.list_assignments(project_id)


def save_adjusted_assignment_usecase(
    store: MemoryStore,
    project: Project,
    seat_to_person: SeatToPersonMap,
    edits: List[AssignmentEdit],
    base_assignment_id: Optional[str] = None,
) -> Assignment:
    assignment = build_adjusted_assignment(project, seat_to_person, edits, base_assignment_id)
    store.put_assignment(assignment)
    logger.info("adjusted assignment %s saved from base %s with %d edits",
                assignment.id, base_assignment_id, len(edits))
    return assignment


def validate_draft_assignment_usecase(project: Project, seat_to_person: SeatToPersonMap) -> List[Violation]:
    return validate_assignment(project, seat_to_person)


# ---- reveal sessions ----
def start_reveal_session_usecase(
    store: MemoryStore,
    project_id: str,
    assignment: Assignment,
    mode: RevealMode,
    rng: Optional[np.random.Generator] = None,
) -> RevealSession:
    session = start_reveal_session(project_id, assignment, mode, rng=rng)
    store.put_reveal_session(session)
    return session


def advance_reveal_step_usecase(store: MemoryStore, session: RevealSession) -> RevealSession:
    updated = advance_reveal_step(session)
    store.put_reveal_session(updated)
    return updated


def pause_reveal_session_usecase(store: MemoryStore, session: RevealSession) -> RevealSession:
    updated = pause_reveal_session(session)
    store.put_reveal_session(updated)
    return updated


def resume_reveal_session_usecase(store: MemoryStore, session: RevealSession) -> RevealSession:
    updated = resume_reveal_session(session)
    store.put_reveal_session(updated)
    return updated


def finish_reveal_session_usecase(store: MemoryStore, session: RevealSession) -> RevealSession:
    updated = finish_reveal_session(session)
    store.put_reveal_session(updated)
    return updated


def list_reveal_sessions_usecase(store: MemoryStore, project_id: str) -> List[RevealSession]:
    return store.list_reveal_sessions(project_id)


def play_reveal_usecase(
    store: MemoryStore,
    session: RevealSession,
    config: Optional[AppConfig] = None,
    on_step: Optional[Callable[[RevealSession], None]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RevealSession:
    """Advance on the configured tick until the session leaves REVEALING, persisting every step."""
    config = config or AppConfig()

    def _step(s: RevealSession) -> None:
        store.put_reveal_session(s)
        if on_step is not None:
            on_step(s)

    return run_reveal(session, on_step=_step, tick_seconds=config.reveal_tick_seconds, sleep=sleep)

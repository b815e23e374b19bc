# FILE: seating_core/repository.py
"""
In-memory key-value store for projects, assignments and reveal sessions.

Records are copied on the way in and on the way out so callers never share
state with the store.
"""
from __future__ import annotations
import logging
from typing import Dict, List, Optional

from .models import Assignment, Project, RevealSession

logger = logging.getLogger(__name__)


class MemoryStore:
    def __init__(self):
        self._projects: Dict[str, Project] = {}
        self._assignments: Dict[str, Assignment] = {}
        self._sessions: Dict[str, RevealSession] = {}

    # ---- projects ----
    def list_projects(self) -> List[Project]:
        out = [p.model_copy(deep=True) for p in self._projects.values()]
        return sorted(out, key=lambda p: p.updated_at, reverse=True)

    def get_project(self, project_id: str) -> Optional[Project]:
        p = self._projects.get(project_id)
        return p.model_copy(deep=True) if p is not None else None

    def put_project(self, project: Project) -> None:
        self._projects[project.id] = project.model_copy(deep=True)

    def delete_project(self, project_id: str) -> None:
        """Drop the project with its assignments and reveal sessions."""
        self._projects.pop(project_id, None)
        gone_a = [k for k, a in self._assignments.items() if a.project_id == project_id]
        gone_s = [k for k, s in self._sessions.items() if s.project_id == project_id]
        for k in gone_a:
            del self._assignments[k]
        for k in gone_s:
            del self._sessions[k]
        logger.info("deleted project %s (%d assignments, %d reveal sessions)",
                    project_id, len(gone_a), len(gone_s))

    # ---- assignments ----
    def list_assignments(self, project_id: str) -> List[Assignment]:
        out = [a.model_copy(deep=True) for a in self._assignments.values() if a.project_id == project_id]
        return sorted(out, key=lambda a: a.created_at, reverse=True)

    def get_assignment(self, assignment_id: str) -> Optional[Assignment]:
        a = self._assignments.get(assignment_id)
        return a.model_copy(deep=True) if a is not None else None

    def put_assignment(self, assignment: Assignment) -> None:
        self._assignments[assignment.id] = assignment.model_copy(deep=True)

    def delete_assignment(self, assignment_id: str) -> None:
        self._assignments.pop(assignment_id, None)

    # ---- reveal sessions ----
    def list_reveal_sessions(self, project_id: str) -> List[RevealSession]:
        out = [s.model_copy(deep=True) for s in self._sessions.values() if s.project_id == project_id]
        return sorted(out, key=lambda s: s.started_at, reverse=True)

    def list_reveal_sessions_for_assignment(self, assignment_id: str) -> List[RevealSession]:
        out = [s.model_copy(deep=True) for s in self._sessions.values() if s.assignment_id == assignment_id]
        return sorted(out, key=lambda s: s.started_at, reverse=True)

    def get_reveal_session(self, session_id: str) -> Optional[RevealSession]:
        s = self._sessions.get(session_id)
        return s.model_copy(deep=True) if s is not None else None

    def put_reveal_session(self, session: RevealSession) -> None:
        self._sessions[session.id] = session.model_copy(deep=True)

    def delete_reveal_session(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

# FILE: seating_core/reveal.py
"""
Reveal session state machine.

Every transition takes a session and returns a session; calls that do not
apply to the current state return the input unchanged.

    REVEALING --advance--> REVEALING | FINISHED
    REVEALING --pause----> PAUSED --resume--> REVEALING
    any       --finish---> FINISHED
"""
from __future__ import annotations
import time
from typing import Callable, Iterator, List, Optional
import numpy as np

from .constants import REVEAL_TICK_SECONDS
from .generator import shuffle
from .models import Assignment, RevealMode, RevealSession
from .seat import seat_sort_key


def build_reveal_order(assignment: Assignment, mode: RevealMode,
                       rng: Optional[np.random.Generator] = None) -> List[str]:
    entries = [(seat, pid) for seat, pid in assignment.seat_to_person.items() if pid]
    if mode == "roulette":
        rng = rng if rng is not None else np.random.default_rng()
        return shuffle([pid for _, pid in entries], rng)
    # revealAll and block share the row-major order
    return [pid for _, pid in sorted(entries, key=lambda e: seat_sort_key(e[0]))]


def start_reveal_session(project_id: str, assignment: Assignment, mode: RevealMode,
                         rng: Optional[np.random.Generator] = None) -> RevealSession:
    order = build_reveal_order(assignment, mode, rng)
    if mode == "revealAll":
        return RevealSession(
            project_id=project_id, assignment_id=assignment.id,
            state="FINISHED", mode=mode, order=order, revealed_person_ids=list(order),
        )
    return RevealSession(
        project_id=project_id, assignment_id=assignment.id,
        state="REVEALING", mode=mode, order=order, revealed_person_ids=[],
    )


def advance_reveal_step(session: RevealSession) -> RevealSession:
    if session.state != "REVEALING":
        return session
    nxt = len(session.revealed_person_ids)
    if nxt >= len(session.order):
        return session.model_copy(update={"state": "FINISHED"}, deep=True)
    revealed = session.revealed_person_ids + [session.order[nxt]]
    if len(revealed) >= len(session.order):
        return session.model_copy(update={"revealed_person_ids": revealed, "state": "FINISHED"}, deep=True)
    return session.model_copy(update={"revealed_person_ids": revealed}, deep=True)


def pause_reveal_session(session: RevealSession) -> RevealSession:
    if session.state != "REVEALING":
        return session
    return session.model_copy(update={"state": "PAUSED"}, deep=True)


def resume_reveal_session(session: RevealSession) -> RevealSession:
    if session.state != "PAUSED":
        return session
    return session.model_copy(update={"state": "REVEALING"}, deep=True)


def finish_reveal_session(session: RevealSession) -> RevealSession:
    return session.model_copy(update={"state": "FINISHED", "revealed_person_ids": list(session.order)}, deep=True)


def iter_reveal_steps(session: RevealSession) -> Iterator[RevealSession]:
    """Yield each successive session until the session stops REVEALING."""
    while session.state == "REVEALING" and session.mode != "revealAll":
        session = advance_reveal_step(session)
        yield session


def run_reveal(
    session: RevealSession,
    on_step: Optional[Callable[[RevealSession], None]] = None,
    tick_seconds: float = REVEAL_TICK_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> RevealSession:
    """Timer-driven reveal: one advance per tick until the session leaves REVEALING."""
    while session.state == "REVEALING" and session.mode != "revealAll":
        sleep(tick_seconds)
        session = advance_reveal_step(session)
        if on_step is not None:
            on_step(session)
    return session

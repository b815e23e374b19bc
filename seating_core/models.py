# seating_core/models.py
from __future__ import annotations
import uuid
from datetime import datetime, timezone
from typing import Annotated, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .constants import DEFAULT_COLS, DEFAULT_ROWS

SeatKey = str
SeatToPersonMap = Dict[SeatKey, str]

ViolationType = Literal[
    "DISABLED_SEAT_USED",
    "FIXED_SEAT_BROKEN",
    "NOT_ADJACENT",
    "DUPLICATE_PERSON",
    "UNASSIGNED_PERSON",
]
Severity = Literal["HARD", "SOFT"]
RevealState = Literal["IDLE", "REVEALING", "PAUSED", "FINISHED"]
RevealMode = Literal["roulette", "revealAll", "block"]


def new_id() -> str:
    return str(uuid.uuid4())


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class _Record(BaseModel):
    # snake_case in Python, camelCase at the storage/export boundary
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _FrozenRecord(_Record):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Layout(_Record):
    rows: int = Field(default=DEFAULT_ROWS, gt=0)
    cols: int = Field(default=DEFAULT_COLS, gt=0)
    disabled_seats: List[SeatKey] = Field(default_factory=list)


class Person(_Record):
    id: str = Field(default_factory=new_id)
    name: str
    gender: Literal["male", "female"] = "male"
    absent: bool = False

    @field_validator("gender", mode="before")
    @classmethod
    def _binary_gender(cls, v):
        return "female" if v == "female" else "male"


class FixedSeatRule(_Record):
    id: str = Field(default_factory=new_id)
    type: Literal["fixedSeat"] = "fixedSeat"
    person_id: str
    seat: SeatKey
    hard: Literal[True] = True


class SeparateRule(_Record):
    id: str = Field(default_factory=new_id)
    type: Literal["separate"] = "separate"
    person_a_id: str
    person_b_id: str
    kind: Literal["notAdjacent"] = "notAdjacent"
    hard: Literal[True] = True


class AvoidSameSeatFromLastRule(_Record):
    """Soft rule reserved for later use; the validator does not evaluate it."""
    id: str = Field(default_factory=new_id)
    type: Literal["avoidSameSeatFromLast"] = "avoidSameSeatFromLast"
    mode: Literal["soft"] = "soft"
    scope: Literal["last"] = "last"


Rule = Annotated[
    Union[FixedSeatRule, SeparateRule, AvoidSameSeatFromLastRule],
    Field(discriminator="type"),
]


class Project(_Record):
    id: str = Field(default_factory=new_id)
    name: str
    layout: Layout = Field(default_factory=Layout)
    persons: List[Person] = Field(default_factory=list)
    rules: List[Rule] = Field(default_factory=list)
    created_at: str = Field(default_factory=now_iso)
    updated_at: str = Field(default_factory=now_iso)

    def active_persons(self) -> List[Person]:
        return [p for p in self.persons if not p.absent]

    def person_by_id(self) -> Dict[str, Person]:
        return {p.id: p for p in self.persons}


class Violation(_FrozenRecord):
    type: ViolationType
    severity: Severity = "HARD"
    message: str
    detail: Optional[Dict[str, str]] = None


class AssignmentEdit(_FrozenRecord):
    type: Literal["swap", "move"]
    from_seat: SeatKey
    to_seat: SeatKey
    at: str = Field(default_factory=now_iso)


class Assignment(_FrozenRecord):
    """
    Immutable snapshot of one seating. Frozen only blocks field assignment, so
    the mapping and lists are not to be mutated either; derive a new snapshot
    with build_adjusted_assignment instead.
    """
    id: str = Field(default_factory=new_id)
    project_id: str
    created_at: str = Field(default_factory=now_iso)
    seat_to_person: SeatToPersonMap = Field(default_factory=dict)
    violations: List[Violation] = Field(default_factory=list)
    edits: Optional[List[AssignmentEdit]] = None
    commit: Optional[str] = None
    base_assignment_id: Optional[str] = None


class RevealSession(_FrozenRecord):
    """Reveal progress. Transitions in reveal.py return deep copies; never mutate order in place."""
    id: str = Field(default_factory=new_id)
    project_id: str
    assignment_id: str
    started_at: str = Field(default_factory=now_iso)
    state: RevealState = "IDLE"
    mode: RevealMode = "block"
    order: List[str] = Field(default_factory=list)
    revealed_person_ids: List[str] = Field(default_factory=list)


class GenerateResult(_FrozenRecord):
    """Generator output; treat seat_to_person and violations as read-only."""
    seat_to_person: SeatToPersonMap = Field(default_factory=dict)
    violations: List[Violation] = Field(default_factory=list)
    attempts: int = 0

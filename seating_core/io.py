# seating_core/io.py
from __future__ import annotations
import io
import logging
from typing import Dict, Iterable, List
import pandas as pd
import yaml

from .constants import DISABLED_CELL, PERSON_CSV_HEADERS, PERSON_HEADER_ALIASES
from .models import Assignment, Person, Project, new_id
from .seat import make_seat_key

logger = logging.getLogger(__name__)

_TRUE_TOKENS = {"1", "true", "yes", "y", "x"}


def _header_map(cols: Iterable[str]) -> Dict[str, str]:
    """
    Build a mapping from provided column -> canonical header.
    Case-insensitive, uses PERSON_HEADER_ALIASES, leaves unknown columns untouched.
    """
    out = {}
    for c in cols:
        lc = str(c).strip().lower()
        mapped = None
        for canon, aliases in PERSON_HEADER_ALIASES.items():
            if lc == canon or lc in aliases:
                mapped = canon
                break
        out[c] = mapped if mapped else c
    return out


def _as_bool(v) -> bool:
    if isinstance(v, bool):
        return v
    return str(v).strip().lower() in _TRUE_TOKENS


def persons_to_dataframe(persons: List[Person]) -> pd.DataFrame:
    rows = [{"id": p.id, "name": p.name, "gender": p.gender, "absent": p.absent} for p in persons]
    return pd.DataFrame(rows, columns=PERSON_CSV_HEADERS)


def dataframe_to_persons(df: pd.DataFrame) -> List[Person]:
    df = df.rename(columns=_header_map(df.columns))
    if "name" not in df.columns:
        raise ValueError("Missing required column: name")
    for c in PERSON_CSV_HEADERS:
        if c not in df.columns:
            df[c] = ""
    df = df[PERSON_CSV_HEADERS].fillna("")

    persons: List[Person] = []
    for _, r in df.iterrows():
        name = str(r["name"]).strip()
        if not name:
            continue
        persons.append(Person(
            id=str(r["id"]).strip() or new_id(),
            name=name,
            gender=str(r["gender"]).strip().lower(),
            absent=_as_bool(r["absent"]),
        ))
    return persons


def load_persons_csv(file) -> List[Person]:
    """Parse an uploaded CSV (bytes or file-like) into persons."""
    if isinstance(file, (bytes, bytearray)):
        file = io.BytesIO(file)
    df = pd.read_csv(file, dtype=str, keep_default_na=False)
    persons = dataframe_to_persons(df)
    logger.info("loaded %d persons from csv", len(persons))
    return persons


def save_persons_csv_bytes(persons: List[Person]) -> bytes:
    buf = io.StringIO()
    persons_to_dataframe(persons).to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


def assignment_grid_df(project: Project, assignment: Assignment) -> pd.DataFrame:
    """rows x cols grid of person names; "" for an empty seat, DISABLED_CELL for a disabled one."""
    names = {p.id: p.name for p in project.persons}
    disabled = set(project.layout.disabled_seats)
    data = {}
    for col in range(1, project.layout.cols + 1):
        cells = []
        for row in range(1, project.layout.rows + 1):
            seat = make_seat_key(row, col)
            if seat in disabled:
                cells.append(DISABLED_CELL)
                continue
            pid = assignment.seat_to_person.get(seat)
            # stale ids show up raw rather than disappearing
            cells.append(names.get(pid, pid) if pid else "")
        data[col] = cells
    return pd.DataFrame(data, index=list(range(1, project.layout.rows + 1)))


def load_project_yaml(path: str) -> Project:
    with open(path, "r", encoding="utf-8") as f:
        obj = yaml.safe_load(f) or {}
    if not isinstance(obj, dict):
        raise ValueError(f"Project file {path} must contain a mapping.")
    return Project.model_validate(obj)


def save_project_yaml(project: Project, path: str) -> None:
    text = yaml.safe_dump(project.model_dump(mode="json", by_alias=True), allow_unicode=True, sort_keys=False)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)

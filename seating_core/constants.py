# FILE: seating_core/constants.py
from __future__ import annotations
import re
from typing import Dict

# --- Seat keys ---
SEAT_KEY_PATTERN = re.compile(r"r([0-9]+)c([0-9]+)")

# --- Layout defaults / bounds ---
DEFAULT_ROWS = 6
DEFAULT_COLS = 6
MAX_LAYOUT_DIM = 20

# --- Generation ---
DEFAULT_MAX_RETRIES = 500

# --- Reveal ---
REVEAL_TICK_SECONDS = 0.85

# --- Commit labels ---
COMMIT_ADJUSTED = "adjusted"


def commit_generated(attempts: int) -> str:
    return f"generated(attempts={attempts})"


# --- Grid rendering ---
DISABLED_CELL = "×"

# --- Person CSV ---
PERSON_CSV_HEADERS = ["id", "name", "gender", "absent"]
PERSON_HEADER_ALIASES: Dict[str, set] = {
    # canonical -> set of aliases
    "id": {"id", "person_id", "personid"},
    "name": {"name", "full name", "person"},
    "gender": {"gender", "sex"},
    "absent": {"absent", "is_absent", "away"},
}

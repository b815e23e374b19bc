# FILE: seating_core/__init__.py
"""
seating_core package: seat geometry, constraint validation, randomized seat
generation, assignment snapshots, reveal sessions, project edits, IO and config.
"""
__all__ = [
    "constants",
    "models",
    "exceptions",
    "seat",
    "validation",
    "generator",
    "assignment",
    "reveal",
    "editing",
    "io",
    "repository",
    "usecases",
    "config",
]

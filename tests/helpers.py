# FILE: tests/helpers.py
"""Small project builders shared by the tests."""
from seating_core.models import FixedSeatRule, Layout, Person, Project, SeparateRule


def person(pid, gender="male", absent=False):
    return Person(id=pid, name=pid.capitalize(), gender=gender, absent=absent)


def classroom_3x3():
    # 3x3, r3c3 disabled, alice pinned to r1c1, bob and carol kept apart
    return Project(
        id="p1", name="class-a",
        layout=Layout(rows=3, cols=3, disabled_seats=["r3c3"]),
        persons=[person("alice", "female"), person("bob"), person("carol", "female"), person("dave")],
        rules=[
            FixedSeatRule(id="f1", person_id="alice", seat="r1c1"),
            SeparateRule(id="s1", person_a_id="bob", person_b_id="carol"),
        ],
    )


def classroom_2x2():
    # 2x2, r2c2 disabled, alice pinned to r1c1, alice and bob kept apart
    return Project(
        id="p1", name="class-a",
        layout=Layout(rows=2, cols=2, disabled_seats=["r2c2"]),
        persons=[person("alice", "female"), person("bob"), person("carol", "female")],
        rules=[
            FixedSeatRule(id="f1", person_id="alice", seat="r1c1"),
            SeparateRule(id="s1", person_a_id="alice", person_b_id="bob"),
        ],
    )

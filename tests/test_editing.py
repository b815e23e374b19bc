# FILE: tests/test_editing.py
import pytest

from seating_core.editing import (
    create_project, rename_project, resize_layout, toggle_disabled_seat,
    add_person, add_persons_bulk, toggle_absent, toggle_gender, remove_person,
    add_fixed_seat_rule, add_separate_rule, remove_rule, filter_rules_by_existing_persons,
    prune_disabled_seats, remove_person_from_mapping, apply_seat_edit,
)
from seating_core.exceptions import ProjectEditError
from seating_core.models import FixedSeatRule, SeparateRule
from helpers import classroom_2x2, classroom_3x3


def test_create_and_rename_project():
    p = create_project("  Class B ")
    assert p.name == "Class B"
    assert (p.layout.rows, p.layout.cols) == (6, 6)
    assert rename_project(p, "Class C").name == "Class C"
    with pytest.raises(ProjectEditError):
        create_project("   ")
    with pytest.raises(ProjectEditError):
        rename_project(p, "")


def test_resize_clamps_and_drops_out_of_range():
    p = classroom_3x3()
    p.layout.disabled_seats = ["r3c3", "r1c2"]
    p.rules.append(FixedSeatRule(person_id="dave", seat="r2c3"))
    out = resize_layout(p, 2, 2)
    assert (out.layout.rows, out.layout.cols) == (2, 2)
    assert out.layout.disabled_seats == ["r1c2"]
    fixed = [r for r in out.rules if isinstance(r, FixedSeatRule)]
    assert [(r.person_id, r.seat) for r in fixed] == [("alice", "r1c1")]
    assert any(isinstance(r, SeparateRule) for r in out.rules)
    # input untouched
    assert p.layout.rows == 3 and len(p.rules) == 3

    big = resize_layout(p, 99, 0)
    assert (big.layout.rows, big.layout.cols) == (20, 1)


def test_resize_drops_fixed_rule_on_disabled_seat():
    p = classroom_3x3()
    p.layout.disabled_seats = ["r1c1"]
    out = resize_layout(p, 3, 3)
    assert not any(isinstance(r, FixedSeatRule) for r in out.rules)


def test_toggle_disabled_seat_keeps_sorted_and_drops_fixed_rule():
    p = classroom_3x3()
    out = toggle_disabled_seat(p, "r1c1")
    assert out.layout.disabled_seats == ["r1c1", "r3c3"]
    assert not any(isinstance(r, FixedSeatRule) for r in out.rules)
    back = toggle_disabled_seat(out, "r3c3")
    assert back.layout.disabled_seats == ["r1c1"]


def test_toggle_disabled_seat_rejects_bad_seats():
    p = create_project("x", 2, 2)
    for seat in ["garbage", "r9c9", "r0c1", "r1c3", ""]:
        with pytest.raises(ProjectEditError):
            toggle_disabled_seat(p, seat)
    assert p.layout.disabled_seats == []
    assert toggle_disabled_seat(p, " r2c2 ").layout.disabled_seats == ["r2c2"]


def test_add_persons_single_and_bulk():
    p = add_person(create_project("x"), " Zoe ")
    assert [(q.name, q.gender, q.absent) for q in p.persons] == [("Zoe", "male", False)]
    p = add_persons_bulk(p, "Amy\n\n  Ben  \r\nCy\n")
    assert [q.name for q in p.persons] == ["Zoe", "Amy", "Ben", "Cy"]
    assert len({q.id for q in p.persons}) == 4
    with pytest.raises(ProjectEditError):
        add_person(p, " ")
    with pytest.raises(ProjectEditError):
        add_persons_bulk(p, "\n  \n")


def test_toggle_absent_and_gender():
    p = classroom_2x2()
    p2 = toggle_absent(p, "bob")
    assert p2.person_by_id()["bob"].absent is True
    assert p.person_by_id()["bob"].absent is False
    p3 = toggle_gender(p2, "alice")
    assert p3.person_by_id()["alice"].gender == "male"
    with pytest.raises(ProjectEditError):
        toggle_absent(p, "nobody")


def test_remove_person_drops_their_rules():
    p = remove_person(classroom_2x2(), "alice")
    assert [q.id for q in p.persons] == ["bob", "carol"]
    assert p.rules == []


def test_filter_rules_keeps_soft_rules():
    p = classroom_2x2()
    kept = filter_rules_by_existing_persons(p.rules, [q for q in p.persons if q.id != "bob"])
    assert [r.id for r in kept] == ["f1"]


def test_add_fixed_seat_rule_validation_and_replacement():
    p = classroom_2x2()
    with pytest.raises(ProjectEditError):
        add_fixed_seat_rule(p, "bob", "seat-1")
    with pytest.raises(ProjectEditError):
        add_fixed_seat_rule(p, "bob", "r3c1")
    with pytest.raises(ProjectEditError):
        add_fixed_seat_rule(p, "bob", "r2c2")
    with pytest.raises(ProjectEditError):
        add_fixed_seat_rule(p, "ghost", "r1c2")
    out = add_fixed_seat_rule(p, "alice", " r1c2 ")
    fixed = [r for r in out.rules if isinstance(r, FixedSeatRule)]
    assert [(r.person_id, r.seat) for r in fixed] == [("alice", "r1c2")]


def test_add_separate_rule_validation():
    p = classroom_2x2()
    with pytest.raises(ProjectEditError):
        add_separate_rule(p, "bob", "bob")
    with pytest.raises(ProjectEditError):
        add_separate_rule(p, "bob", "alice")  # same pair, reversed
    with pytest.raises(ProjectEditError):
        add_separate_rule(p, "bob", "")
    out = add_separate_rule(p, "bob", "carol")
    assert len([r for r in out.rules if isinstance(r, SeparateRule)]) == 2
    assert len(remove_rule(out, "s1").rules) == 2


def test_mapping_helpers():
    mapping = {"r1c1": "a", "r2c2": "b", "r1c2": "a"}
    assert prune_disabled_seats(mapping, ["r2c2"]) == {"r1c1": "a", "r1c2": "a"}
    assert remove_person_from_mapping(mapping, "a") == {"r2c2": "b"}


def test_apply_seat_edit_move_and_swap():
    p = classroom_3x3()
    mapping = {"r1c1": "alice", "r1c2": "bob"}
    moved, edit = apply_seat_edit(p, mapping, "r1c2", "r2c2", at="t0")
    assert moved == {"r1c1": "alice", "r2c2": "bob"}
    assert (edit.type, edit.from_seat, edit.to_seat, edit.at) == ("move", "r1c2", "r2c2", "t0")
    swapped, edit = apply_seat_edit(p, moved, "r1c1", "r2c2")
    assert swapped == {"r1c1": "bob", "r2c2": "alice"}
    assert edit.type == "swap" and edit.at
    assert mapping == {"r1c1": "alice", "r1c2": "bob"}


def test_apply_seat_edit_no_ops():
    p = classroom_3x3()
    mapping = {"r1c1": "alice"}
    for src, dst in [("r1c1", "r1c1"), ("r1c1", "r3c3"), ("r2c2", "r1c2")]:
        out, edit = apply_seat_edit(p, mapping, src, dst)
        assert out == mapping and edit is None


def test_apply_seat_edit_rejects_bad_seats():
    p = classroom_3x3()
    mapping = {"r1c1": "alice"}
    for src, dst in [("r1c1", "r4c1"), ("r1c1", "r1c9"), ("r1c1", "seat"), ("r0c0", "r1c2")]:
        with pytest.raises(ProjectEditError):
            apply_seat_edit(p, mapping, src, dst)
    assert mapping == {"r1c1": "alice"}

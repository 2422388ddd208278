"""
Namespaced ids for synthetic records.

Why:
    Mock records of different categories must never share an id; the prefix
    is part of the value and the generator never repeats within a category.
"""
from __future__ import annotations

import pytest

from backend.identity_access.ids import (
    IdGenerator,
    IdPrefix,
    ensure_prefix,
    entity_type_of,
    ids_match,
    make_id,
    strip_prefix,
    student_piece_id,
)


def test_make_id_adds_prefix_once():
    assert make_id(IdPrefix.STUDENT, 1) == "s-1"
    assert make_id(IdPrefix.STUDENT, "s-1") == "s-1"
    assert make_id(IdPrefix.LINK, "7") == "link-7"


def test_same_suffix_in_different_categories_yields_distinct_ids():
    assert make_id(IdPrefix.STUDENT, 1) != make_id(IdPrefix.LESSON, 1)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("s-1", IdPrefix.STUDENT),
        ("sp-1-2", IdPrefix.STUDENT_PIECE),
        ("p-3", IdPrefix.PIECE),
        ("link-4", IdPrefix.LINK),
        ("l-9", IdPrefix.LESSON),
        ("x-1", None),
    ],
)
def test_entity_type_of_prefers_longest_prefix(value, expected):
    assert entity_type_of(value) is expected


def test_strip_and_ensure_prefix():
    assert strip_prefix("sp-1-2") == "1-2"
    assert strip_prefix("plain") == "plain"
    assert ensure_prefix("p-5", IdPrefix.STUDENT) == "s-5"
    assert ensure_prefix("5", IdPrefix.LESSON) == "l-5"
    assert ensure_prefix("l-5", IdPrefix.LESSON) == "l-5"


def test_ids_match_ignores_prefix():
    assert ids_match("s-1", "1")
    assert ids_match("s-1", "p-1")
    assert not ids_match("s-1", "s-2")


def test_student_piece_id_combines_parents():
    assert student_piece_id("s-1", "p-2") == "sp-1-2"
    assert student_piece_id(3, 4) == "sp-3-4"


def test_generator_never_repeats_within_category():
    gen = IdGenerator()
    students = [gen.next(IdPrefix.STUDENT) for _ in range(5)]
    lessons = [gen.next(IdPrefix.LESSON) for _ in range(2)]
    assert students == ["s-1", "s-2", "s-3", "s-4", "s-5"]
    assert lessons == ["l-1", "l-2"]
    assert len(set(students + lessons)) == 7

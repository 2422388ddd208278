"""
Deterministic mock datasets served as the last fallback in augmented mode.

Why:
    Development must work without a reachable backend. Rows mirror the live
    table shapes (profiles, students, lessons, master_repertoire) and use fixed
    UUIDs and fixed dates, so the same request always returns the same data and
    cached live rows can be compared against them.

Conventions:
    - `id` is the row UUID; `ref` is the namespaced id (``s-1``, ``l-1``, ...)
      assigned while the dataset is built.
    - `mock_dataset()` returns deep copies; the registry itself is never
      handed out.
"""
from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List

from backend.identity_access.domain import DEV_TEACHER_ID
from backend.identity_access.ids import IdGenerator, IdPrefix, student_piece_id

TEACHER_PROFILE = "teacher_profile"
STUDENTS = "students"
LESSONS = "lessons"
REPERTOIRE = "repertoire"

_CREATED_AT = "2023-08-01T09:00:00+00:00"

DEV_STUDENT_IDS = (
    "7c9e6679-7425-40de-944b-e07fc1f90ae7",
    "6c84fb90-12c4-11e1-840d-7b25c5ee775a",
    "110ec58a-a0f2-4ac4-8393-c866d813b8d1",
    "6ba7b814-9dad-11d1-80b4-00c04fd430c8",
    "6ba7b815-9dad-11d1-80b4-00c04fd430c8",
)

DEV_LESSON_IDS = (
    "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
    "6ba7b811-9dad-11d1-80b4-00c04fd430c8",
    "6ba7b812-9dad-11d1-80b4-00c04fd430c8",
    "6ba7b813-9dad-11d1-80b4-00c04fd430c8",
)

DEV_PIECE_IDS = (
    "6ba7b816-9dad-11d1-80b4-00c04fd430c8",
    "6ba7b817-9dad-11d1-80b4-00c04fd430c8",
    "6ba7b818-9dad-11d1-80b4-00c04fd430c8",
    "6ba7b819-9dad-11d1-80b4-00c04fd430c8",
)

_STUDENTS = (
    ("Emma Thompson", "advanced", "2023-09-01"),
    ("William Taylor", "beginner", "2023-09-05"),
    ("Sophia Chen", "advanced", "2023-08-20"),
    ("James Wilson", "beginner", "2023-09-10"),
    ("Olivia Martinez", "intermediate", "2023-08-28"),
)

_LESSONS = (
    (0, "2023-09-15", "09:00", "10:00", "Studio A", "Worked on Mendelssohn Violin Concerto first movement."),
    (3, "2023-09-15", "11:00", "12:00", "Studio A", "Introduction to shifting positions."),
    (2, "2023-09-15", "14:00", "15:00", "Studio B", "Prepared Bach Partita No. 2 for upcoming recital."),
    (0, "2023-09-22", "09:00", "10:00", "Studio A", "Continued work on the Mendelssohn cadenza."),
)

_PIECES = (
    ("Partita No. 2 in D minor", "J.S. Bach", "advanced"),
    ("Violin Concerto in E minor", "F. Mendelssohn", "advanced"),
    ("Concertino in G major", "F. Küchler", "beginner"),
    ("Meditation from Thaïs", "J. Massenet", "intermediate"),
)


def _teacher_profile() -> Dict[str, Any]:
    return {
        "id": DEV_TEACHER_ID,
        "name": "Developer Teacher",
        "avatar_url": None,
        "created_at": _CREATED_AT,
        "updated_at": _CREATED_AT,
    }


def _build() -> Dict[str, Any]:
    gen = IdGenerator()
    students: List[Dict[str, Any]] = []
    for uid, (name, level, start) in zip(DEV_STUDENT_IDS, _STUDENTS):
        students.append(
            {
                "id": uid,
                "ref": gen.next(IdPrefix.STUDENT),
                "user_id": DEV_TEACHER_ID,
                "name": name,
                "email": None,
                "level": level,
                "difficulty_level": level,
                "start_date": start,
                "unread_messages": 0,
                "created_at": _CREATED_AT,
                "updated_at": _CREATED_AT,
            }
        )

    pieces: List[Dict[str, Any]] = []
    for uid, (title, composer, difficulty) in zip(DEV_PIECE_IDS, _PIECES):
        pieces.append(
            {
                "id": uid,
                "ref": gen.next(IdPrefix.PIECE),
                "teacher_id": DEV_TEACHER_ID,
                "title": title,
                "composer": composer,
                "difficulty": difficulty,
                "created_at": _CREATED_AT,
            }
        )

    lessons: List[Dict[str, Any]] = []
    for uid, (student_idx, date, start, end, location, summary) in zip(DEV_LESSON_IDS, _LESSONS):
        student = students[student_idx]
        lessons.append(
            {
                "id": uid,
                "ref": gen.next(IdPrefix.LESSON),
                "teacher_id": DEV_TEACHER_ID,
                "student_id": student["id"],
                "student_ref": student["ref"],
                "date": date,
                "start_time": start,
                "end_time": end,
                "location": location,
                "summary": summary,
                "status": "completed",
                "created_at": _CREATED_AT,
                "updated_at": _CREATED_AT,
            }
        )
    # Newest first, like the live query.
    lessons.sort(key=lambda row: (row["date"], row["start_time"]), reverse=True)

    # Student repertoire assignments are addressed by the composite id.
    for student, piece in ((students[0], pieces[0]), (students[0], pieces[1]), (students[1], pieces[2])):
        student.setdefault("repertoire", []).append(student_piece_id(student["ref"], piece["ref"]))

    return {
        TEACHER_PROFILE: _teacher_profile(),
        STUDENTS: students,
        LESSONS: lessons,
        REPERTOIRE: pieces,
    }


_DATASETS: Dict[str, Any] = _build()


def mock_names() -> List[str]:
    return sorted(_DATASETS)


def has_mock(logical_name: str) -> bool:
    return logical_name in _DATASETS


def mock_dataset(logical_name: str) -> Any:
    """Return a copy of the mock dataset for `logical_name`.

    Raises:
        KeyError: when no dataset is registered under that name.
    """
    return copy.deepcopy(_DATASETS[logical_name])


MockProvider = Callable[[str], Any]

__all__ = [
    "TEACHER_PROFILE",
    "STUDENTS",
    "LESSONS",
    "REPERTOIRE",
    "DEV_STUDENT_IDS",
    "DEV_LESSON_IDS",
    "DEV_PIECE_IDS",
    "MockProvider",
    "has_mock",
    "mock_dataset",
    "mock_names",
]

# tests/test_sanitizer.py

import pytest

from core import errors
from integrity import sanitizer


@pytest.mark.parametrize(
    "kind, field",
    [
        ("course", "code"),
        ("student", "student_id"),
        ("lecturer", "email"),
        ("grade", "student"),
        ("grade", "course"),
    ],
)
def test_identity_fields_are_rejected(kind, field):
    with pytest.raises(errors.ImmutableFieldMutationAttempt) as exc_info:
        sanitizer.sanitize(kind, {field: "anything"})

    assert exc_info.value.field == field
    assert exc_info.value.entity == kind


def test_identity_field_with_null_value_is_still_rejected():
    with pytest.raises(errors.ImmutableFieldMutationAttempt):
        sanitizer.sanitize("course", {"code": None, "title": "Intro"})


def test_course_title_is_trimmed():
    assert sanitizer.sanitize("course", {"title": "  Intro  "}) == {"title": "Intro"}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("cs", "Cs"),
        ("MATHEMATICS", "Mathematics"),
        ("  science ", "Science"),
        ("hUMANITIES", "Humanities"),
    ],
)
def test_department_is_capitalized(raw, expected):
    assert sanitizer.sanitize("lecturer", {"department": raw})["department"] == expected


def test_student_email_and_course_list_are_normalized():
    clean = sanitizer.sanitize("student", {"email": " A@X.COM ", "courses": [" cs101", "ma201"]})

    assert clean == {"email": "a@x.com", "courses": ["CS101", "MA201"]}


def test_unrecognized_fields_pass_through():
    payload = {"title": "Intro", "room": "B12", "credits": "three"}

    clean = sanitizer.sanitize("course", payload)

    assert clean["room"] == "B12"
    assert clean["credits"] == "three"


def test_non_string_values_are_left_for_schema_validation():
    assert sanitizer.sanitize("lecturer", {"department": 7}) == {"department": 7}


def test_sanitize_does_not_mutate_input():
    payload = {"title": "  Intro "}

    sanitizer.sanitize("course", payload)

    assert payload == {"title": "  Intro "}


def test_normalize_canonicalizes_identity_on_create():
    clean = sanitizer.normalize("course", {"code": " cs101 ", "title": " Intro "})

    assert clean == {"code": "CS101", "title": "Intro"}


def test_normalize_lowercases_lecturer_email():
    clean = sanitizer.normalize("lecturer", {"email": "Ada@Uni.edu", "department": "cs"})

    assert clean == {"email": "ada@uni.edu", "department": "Cs"}

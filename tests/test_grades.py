# tests/test_grades.py

import pytest

from core import errors
from grades import service


@pytest.fixture
async def records(store, anyio_backend):
    await store.insert_course(code="CS101", title="Intro", credits=3)
    await store.insert_course(code="MA201", title="Algebra", credits=4)
    await store.insert_student(student_id="S1", email="a@x.com", name="A", year=1, courses=["CS101"])
    await store.insert_student(student_id="S2", email="b@x.com", name="B", year=2, courses=[])
    store.calls.clear()
    return store


# --- create ---


@pytest.mark.anyio
async def test_create_then_fetch_returns_value(records):
    created = await service.create_grade({"student": "S1", "course": "cs101", "grade": "A"})
    fetched = await service.get_grade("S1", "CS101")

    assert created["grade"] == "A"
    assert fetched["grade"] == "A"
    assert fetched["course_code"] == "CS101"


@pytest.mark.anyio
@pytest.mark.parametrize("second_value", ["A", "B+", "F"])
async def test_second_grade_for_same_pair_is_a_duplicate(records, second_value):
    await service.create_grade({"student": "S1", "course": "CS101", "grade": "A"})

    with pytest.raises(errors.DuplicateAssignment):
        await service.create_grade({"student": "S1", "course": "CS101", "grade": second_value})

    assert len(records.grades) == 1
    assert records.grades[0]["grade"] == "A"


@pytest.mark.anyio
async def test_unknown_student_is_not_found_and_nothing_is_persisted(records):
    with pytest.raises(errors.NotFound) as exc_info:
        await service.create_grade({"student": "S404", "course": "CS101", "grade": "A"})

    assert exc_info.value.entity == "student"
    assert records.grades == []
    assert not any(name == "insert_grade" for name, _ in records.calls)


@pytest.mark.anyio
async def test_unknown_course_is_not_found(records):
    with pytest.raises(errors.NotFound) as exc_info:
        await service.create_grade({"student": "S1", "course": "PH100", "grade": "A"})

    assert exc_info.value.entity == "course"
    assert records.grades == []


@pytest.mark.anyio
@pytest.mark.parametrize(
    "payload, missing",
    [
        ({"course": "CS101", "grade": "A"}, ["student"]),
        ({"student": "S1", "course": "CS101"}, ["grade"]),
        ({"student": "  ", "grade": ""}, ["student", "grade"]),
    ],
)
async def test_missing_fields_are_reported_before_any_store_access(records, payload, missing):
    with pytest.raises(errors.MissingField) as exc_info:
        await service.create_grade(payload)

    assert exc_info.value.fields == missing
    assert records.calls == []


@pytest.mark.anyio
async def test_malformed_student_reference_is_an_identifier_format_error(records):
    with pytest.raises(errors.InvalidIdentifierFormat):
        await service.create_grade({"student": {"$ne": None}, "grade": "A"})


@pytest.mark.anyio
async def test_course_is_optional_and_course_less_pair_is_unique(records):
    created = await service.create_grade({"student": "S1", "grade": "Pass"})

    assert created["course_code"] is None
    assert created["course"] is None

    with pytest.raises(errors.DuplicateAssignment):
        await service.create_grade({"student": "S1", "course": None, "grade": "Fail"})

    await service.create_grade({"student": "S2", "grade": "Pass"})
    assert len(records.grades) == 2


@pytest.mark.anyio
async def test_numeric_grade_is_stored_as_text(records):
    created = await service.create_grade({"student": "S1", "course": "CS101", "grade": 85})

    assert created["grade"] == "85"


@pytest.mark.anyio
async def test_result_is_enriched_with_display_fields(records):
    created = await service.create_grade({"student": "S1", "course": "CS101", "grade": "A"})

    assert created["student"] == {"student_id": "S1", "name": "A", "email": "a@x.com"}
    assert created["course"] == {"code": "CS101", "title": "Intro"}


# --- update ---


@pytest.mark.anyio
async def test_update_overwrites_value_only(records):
    await service.create_grade({"student": "S1", "course": "CS101", "grade": "B"})

    updated = await service.update_grade("S1", "cs101", {"grade": "A-"})

    assert updated["grade"] == "A-"
    assert updated["student_id"] == "S1"
    assert updated["course_code"] == "CS101"


@pytest.mark.anyio
async def test_update_of_missing_pair_is_not_found_and_state_is_unchanged(records):
    await service.create_grade({"student": "S1", "course": "CS101", "grade": "B"})

    with pytest.raises(errors.NotFound) as exc_info:
        await service.update_grade("S1", "MA201", {"grade": "A"})

    assert exc_info.value.entity == "grade"
    assert (await service.get_grade("S1", "CS101"))["grade"] == "B"
    with pytest.raises(errors.NotFound):
        await service.get_grade("S1", "MA201")


@pytest.mark.anyio
async def test_update_requires_value(records):
    with pytest.raises(errors.MissingField):
        await service.update_grade("S1", "CS101", {})
    assert records.calls == []


@pytest.mark.anyio
async def test_update_for_unknown_student_is_student_not_found(records):
    with pytest.raises(errors.NotFound) as exc_info:
        await service.update_grade("S404", "CS101", {"grade": "A"})

    assert exc_info.value.entity == "student"


@pytest.mark.anyio
@pytest.mark.parametrize("field", ["student", "course"])
async def test_update_cannot_rekey_a_grade(records, field):
    await service.create_grade({"student": "S1", "course": "CS101", "grade": "B"})

    with pytest.raises(errors.ImmutableFieldMutationAttempt):
        await service.update_grade("S1", "CS101", {"grade": "A", field: "S2" if field == "student" else "MA201"})

    assert records.grades[0]["student_id"] == "S1"
    assert records.grades[0]["course_code"] == "CS101"


# --- delete ---


@pytest.mark.anyio
async def test_delete_removes_grade(records):
    await service.create_grade({"student": "S1", "course": "CS101", "grade": "B"})

    result = await service.delete_grade("S1", "CS101")

    assert result["ok"] is True
    assert result["grade"]["grade"] == "B"
    assert records.grades == []


@pytest.mark.anyio
async def test_delete_of_missing_grade_is_not_found(records):
    with pytest.raises(errors.NotFound) as exc_info:
        await service.delete_grade("S1", "CS101")

    assert exc_info.value.entity == "grade"


# --- queries ---


@pytest.mark.anyio
async def test_list_filters_by_student_and_course(records):
    await service.create_grade({"student": "S1", "course": "CS101", "grade": "A"})
    await service.create_grade({"student": "S1", "course": "MA201", "grade": "B"})
    await service.create_grade({"student": "S2", "course": "CS101", "grade": "C"})

    assert len(await service.list_grades()) == 3
    assert [g["course_code"] for g in await service.list_grades(student="S1")] == ["CS101", "MA201"]
    assert [g["student_id"] for g in await service.list_grades(course="cs101")] == ["S1", "S2"]
    assert [g["grade"] for g in await service.list_grades(student="S2", course="CS101")] == ["C"]


@pytest.mark.anyio
async def test_student_grades_require_existing_student(records):
    with pytest.raises(errors.NotFound):
        await service.list_student_grades("S404")

    assert await service.list_student_grades("S2") == []


@pytest.mark.anyio
async def test_course_grades_include_course_title(records):
    await service.create_grade({"student": "S1", "course": "CS101", "grade": "A"})

    result = await service.list_course_grades("cs101")

    assert result["course"] == "Intro"
    assert result["code"] == "CS101"
    assert len(result["grades"]) == 1


@pytest.mark.anyio
async def test_course_grades_for_unknown_course(records):
    with pytest.raises(errors.NotFound) as exc_info:
        await service.list_course_grades("PH100")

    assert exc_info.value.entity == "course"


# --- HTTP ---


def test_grade_scenario_over_http(seed, admin_headers, student_headers):
    created = seed.post(
        "/api/grades",
        json={"student": "S1", "course": "CS101", "grade": "A"},
        headers=admin_headers,
    )
    assert created.status_code == 201

    listed = seed.get("/api/grades", params={"course": "CS101"}, headers=student_headers)
    assert listed.status_code == 200
    body = listed.json()
    assert body["count"] == 1
    assert body["grades"][0]["student_id"] == "S1"
    assert body["grades"][0]["student"]["email"] == "a@x.com"


def test_duplicate_grade_over_http_is_conflict(seed, admin_headers):
    payload = {"student": "S1", "course": "CS101", "grade": "A"}
    seed.post("/api/grades", json=payload, headers=admin_headers)

    response = seed.post("/api/grades", json={**payload, "grade": "B"}, headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["error"] == "duplicate_assignment"


def test_missing_grade_value_over_http(seed, admin_headers):
    response = seed.post("/api/grades", json={"student": "S1"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {
        "error": "missing_field",
        "message": "Missing required fields: grade.",
        "fields": ["grade"],
    }


def test_invalid_identifier_over_http(seed, admin_headers):
    response = seed.post("/api/grades", json={"student": 17, "grade": "A"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_identifier_format"


def test_update_and_delete_over_http(seed, admin_headers):
    seed.post("/api/grades", json={"student": "S1", "course": "CS101", "grade": "B"}, headers=admin_headers)

    updated = seed.put("/api/grades/student/S1/course/cs101", json={"grade": "A"}, headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json()["grade"] == "A"

    fetched = seed.get("/api/grades/student/S1/course/CS101", headers=admin_headers)
    assert fetched.json()["grade"] == "A"

    deleted = seed.delete("/api/grades/student/S1/course/CS101", headers=admin_headers)
    assert deleted.status_code == 200

    missing = seed.delete("/api/grades/student/S1/course/CS101", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["entity"] == "grade"


def test_course_less_grade_routes(seed, admin_headers):
    seed.post("/api/grades", json={"student": "S1", "grade": "Pass"}, headers=admin_headers)

    updated = seed.put("/api/grades/student/S1/no-course", json={"grade": "Merit"}, headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json()["grade"] == "Merit"

    assert seed.get("/api/grades/student/S1/no-course", headers=admin_headers).json()["grade"] == "Merit"
    assert seed.delete("/api/grades/student/S1/no-course", headers=admin_headers).status_code == 200


def test_students_cannot_write_grades(seed, student_headers):
    response = seed.post(
        "/api/grades",
        json={"student": "S1", "course": "CS101", "grade": "A+"},
        headers=student_headers,
    )

    assert response.status_code == 403

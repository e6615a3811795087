"""Course catalogue and departmental curriculum listing tests."""

import uuid

import pytest

from app.errors import NotFound
from app.models.course import Course, DepartmentalCourse
from app.services import course_service


async def _seed_catalogue(db) -> None:
    db.add_all(
        [
            Course(code="MTH101", title="Calculus", level="100", semester="first", department="Mathematics"),
            Course(code="CSC201", title="Data Structures", level="200", semester="first", department="Computer Science"),
            Course(code="BIO101", title="Cell Biology", level="100", semester="second"),
        ]
    )
    await db.commit()


@pytest.mark.asyncio
async def test_list_courses_is_ordered_by_code(db) -> None:
    await _seed_catalogue(db)

    courses = await course_service.list_courses(db)

    assert [course.code for course in courses] == ["BIO101", "CSC201", "MTH101"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("search", "codes"),
    [
        ("csc", ["CSC201"]),
        ("biology", ["BIO101"]),
        ("computer", ["CSC201"]),
        ("101", ["BIO101", "MTH101"]),
        ("   ", ["BIO101", "CSC201", "MTH101"]),
    ],
)
async def test_list_courses_search(db, search: str, codes: list[str]) -> None:
    await _seed_catalogue(db)

    courses = await course_service.list_courses(db, search)

    assert [course.code for course in courses] == codes


@pytest.mark.asyncio
async def test_get_course(db) -> None:
    await _seed_catalogue(db)
    course = await course_service.find_course_by_code(db, " csc201")

    assert (await course_service.get_course(db, course.id)).title == "Data Structures"
    with pytest.raises(NotFound):
        await course_service.get_course(db, uuid.uuid4())


@pytest.mark.asyncio
async def test_departmental_listing_filters_and_orders(db) -> None:
    def row(department: str, level: str, code: str, semester: str = "1st semester"):
        return DepartmentalCourse(
            department=department,
            level=level,
            semester=semester,
            session="2024/2025",
            course_code=code,
            course_title=code,
        )

    db.add_all(
        [
            row("Physics", "200", "PHY201"),
            row("Physics", "100", "PHY102"),
            row("Physics", "100", "PHY101"),
            row("Physics", "100", "PHY104", semester="2nd semester"),
            row("Chemistry", "100", "CHM101"),
        ]
    )
    await db.commit()

    everything = await course_service.list_departmental_courses(db)
    assert [course.course_code for course in everything] == [
        "CHM101",
        "PHY101",
        "PHY102",
        "PHY104",
        "PHY201",
    ]

    first_year = await course_service.list_departmental_courses(
        db, department="Physics", level="100", semester="1st Semester"
    )
    assert [course.course_code for course in first_year] == ["PHY101", "PHY102"]

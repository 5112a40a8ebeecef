"""AssignmentService against an in-memory Mongo."""

from unittest.mock import MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from repositories.errors import (
    AlreadyAssignedError,
    NotFoundError,
    StoreUnavailableError,
    ValidationFailureError,
)
from repositories.mentor_repo import MentorRepository
from repositories.student_repo import StudentRepository
from services.assignment_service import AssignmentService


@pytest.fixture
def service(db):
    return AssignmentService(db)


@pytest.mark.asyncio
async def test_assign_sets_both_sides(service, db):
    mentor = await service.mentor_repo.create({"name": "Ada"})
    student = await service.student_repo.create({"name": "Lin"})

    updated = await service.assign_student_to_mentor(mentor.id, student.id)

    assert updated.students == [student.id]
    stored_student = await service.student_repo.find_by_id(student.id)
    stored_mentor = await service.mentor_repo.find_by_id(mentor.id)
    assert stored_student.mentor == mentor.id
    assert stored_mentor.students == [student.id]


@pytest.mark.asyncio
async def test_assign_twice_is_rejected(service):
    m1 = await service.mentor_repo.create({"name": "Ada"})
    m2 = await service.mentor_repo.create({"name": "Grace"})
    student = await service.student_repo.create({"name": "Lin"})
    await service.assign_student_to_mentor(m1.id, student.id)

    with pytest.raises(AlreadyAssignedError):
        await service.assign_student_to_mentor(m2.id, student.id)

    assert (await service.mentor_repo.find_by_id(m2.id)).students == []
    assert (await service.student_repo.find_by_id(student.id)).mentor == m1.id


@pytest.mark.asyncio
async def test_assign_unknown_ids_writes_nothing(service):
    mentor = await service.mentor_repo.create({"name": "Ada"})
    student = await service.student_repo.create({"name": "Lin"})

    with pytest.raises(NotFoundError):
        await service.assign_student_to_mentor("missing", student.id)
    with pytest.raises(NotFoundError):
        await service.assign_student_to_mentor(mentor.id, "missing")

    assert (await service.mentor_repo.find_by_id(mentor.id)).students == []
    assert (await service.student_repo.find_by_id(student.id)).mentor is None


@pytest.mark.asyncio
async def test_assign_loses_race_when_student_changed_after_read(service, monkeypatch):
    mentor = await service.mentor_repo.create({"name": "Ada"})
    student = await service.student_repo.create({"name": "Lin"})

    async def lost(student_id, mentor_id):
        return False

    monkeypatch.setattr(service.student_repo, "set_mentor_if_unassigned", lost)

    with pytest.raises(AlreadyAssignedError):
        await service.assign_student_to_mentor(mentor.id, student.id)
    assert (await service.mentor_repo.find_by_id(mentor.id)).students == []


@pytest.mark.asyncio
async def test_reassign_records_previous_mentor_and_prunes_old_roster(service):
    m1 = await service.mentor_repo.create({"name": "Ada"})
    m2 = await service.mentor_repo.create({"name": "Grace"})
    student = await service.student_repo.create({"name": "Lin"})
    await service.assign_student_to_mentor(m1.id, student.id)

    updated = await service.reassign_student_mentor(student.id, m2.id)

    assert updated.mentor == m2.id
    assert updated.previousMentor == m1.id
    stored = await service.student_repo.find_by_id(student.id)
    assert stored.mentor == m2.id
    assert stored.previousMentor == m1.id
    assert (await service.mentor_repo.find_by_id(m1.id)).students == []
    assert (await service.mentor_repo.find_by_id(m2.id)).students == [student.id]


@pytest.mark.asyncio
async def test_reassign_keeps_only_one_previous_mentor(service):
    m1 = await service.mentor_repo.create({"name": "Ada"})
    m2 = await service.mentor_repo.create({"name": "Grace"})
    m3 = await service.mentor_repo.create({"name": "Barbara"})
    student = await service.student_repo.create({"name": "Lin"})
    await service.assign_student_to_mentor(m1.id, student.id)

    await service.reassign_student_mentor(student.id, m2.id)
    updated = await service.reassign_student_mentor(student.id, m3.id)

    assert updated.mentor == m3.id
    assert updated.previousMentor == m2.id
    previous = await service.previous_mentor_for_student(student.id)
    assert previous.id == m2.id


@pytest.mark.asyncio
async def test_reassign_unassigned_student_leaves_previous_empty(service):
    mentor = await service.mentor_repo.create({"name": "Ada"})
    student = await service.student_repo.create({"name": "Lin"})

    updated = await service.reassign_student_mentor(student.id, mentor.id)

    assert updated.mentor == mentor.id
    assert updated.previousMentor is None
    assert (await service.mentor_repo.find_by_id(mentor.id)).students == [student.id]


@pytest.mark.asyncio
async def test_reassign_to_same_mentor_does_not_duplicate_roster(service):
    mentor = await service.mentor_repo.create({"name": "Ada"})
    student = await service.student_repo.create({"name": "Lin"})
    await service.assign_student_to_mentor(mentor.id, student.id)

    updated = await service.reassign_student_mentor(student.id, mentor.id)

    assert updated.previousMentor == mentor.id
    assert (await service.mentor_repo.find_by_id(mentor.id)).students == [student.id]


@pytest.mark.asyncio
async def test_reassign_unknown_ids(service):
    mentor = await service.mentor_repo.create({"name": "Ada"})
    student = await service.student_repo.create({"name": "Lin"})

    with pytest.raises(NotFoundError):
        await service.reassign_student_mentor(student.id, "missing")
    with pytest.raises(NotFoundError):
        await service.reassign_student_mentor("missing", mentor.id)
    assert (await service.student_repo.find_by_id(student.id)).mentor is None


@pytest.mark.asyncio
async def test_students_for_mentor_populates_in_roster_order(service):
    mentor = await service.mentor_repo.create({"name": "Ada"})
    s1 = await service.student_repo.create({"name": "Lin"})
    s2 = await service.student_repo.create({"name": "Kai"})
    await service.assign_student_to_mentor(mentor.id, s2.id)
    await service.assign_student_to_mentor(mentor.id, s1.id)

    students = await service.students_for_mentor(mentor.id)

    assert [s.name for s in students] == ["Kai", "Lin"]
    assert all(s.mentor == mentor.id for s in students)


@pytest.mark.asyncio
async def test_queries_raise_not_found(service):
    with pytest.raises(NotFoundError):
        await service.students_for_mentor("missing")
    with pytest.raises(NotFoundError):
        await service.previous_mentor_for_student("missing")


@pytest.mark.asyncio
async def test_previous_mentor_is_none_before_reassignment(service):
    student = await service.student_repo.create({"name": "Lin"})
    assert await service.previous_mentor_for_student(student.id) is None


@pytest.mark.asyncio
async def test_repository_create_rejects_bad_shape(db):
    with pytest.raises(ValidationFailureError):
        await MentorRepository(db).create({"name": {"first": "Ada"}})
    assert await MentorRepository(db).list_all() == []


@pytest.mark.asyncio
async def test_repository_wraps_store_errors():
    db = MagicMock()
    db.students.find.side_effect = ServerSelectionTimeoutError("no servers available")
    db.students.find_one.side_effect = ServerSelectionTimeoutError("no servers available")
    repo = StudentRepository(db)

    with pytest.raises(StoreUnavailableError):
        await repo.list_all()
    with pytest.raises(StoreUnavailableError):
        await repo.find_by_id("s1")


@pytest.mark.asyncio
async def test_assign_returns_roster_as_stored(service, db):
    mentor = await service.mentor_repo.create({"name": "Ada"})
    student = await service.student_repo.create({"name": "Lin"})
    add_student = service.mentor_repo.add_student

    async def add_with_concurrent_write(mentor_id, student_id):
        await db.mentors.update_one({"id": mentor_id}, {"$addToSet": {"students": "other"}})
        await add_student(mentor_id, student_id)

    service.mentor_repo.add_student = add_with_concurrent_write

    updated = await service.assign_student_to_mentor(mentor.id, student.id)

    assert updated.students == ["other", student.id]

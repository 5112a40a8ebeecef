# services/assignment_service.py
import logging
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from models.mentor import Mentor
from models.student import Student
from repositories.errors import AlreadyAssignedError, NotFoundError
from repositories.mentor_repo import MentorRepository
from repositories.student_repo import StudentRepository

logger = logging.getLogger(__name__)


class AssignmentService:
    """Mentor/student relationship changes and lookups.

    Each mutation touches two documents with two separate writes and no
    transaction. If the second write fails the first one stays in place, and
    the caller sees the error.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.mentor_repo = MentorRepository(db)
        self.student_repo = StudentRepository(db)

    async def assign_student_to_mentor(self, mentor_id: str, student_id: str) -> Mentor:
        """
        Assigns an unassigned student to a mentor.
        1. Both ids must resolve, else NotFoundError.
        2. A student that already has a mentor is rejected with AlreadyAssignedError;
           only reassignment can change it.
        3. Writes the student first, then adds the student to the mentor's roster.
        """
        mentor = await self.mentor_repo.find_by_id(mentor_id)
        student = await self.student_repo.find_by_id(student_id)
        if mentor is None or student is None:
            raise NotFoundError("Mentor or Student not found")

        if student.mentor:
            logger.warning(f"Student {student_id} already has mentor {student.mentor}")
            raise AlreadyAssignedError("Student already has a mentor")

        if not await self.student_repo.set_mentor_if_unassigned(student_id, mentor_id):
            logger.warning(f"Student {student_id} was assigned concurrently")
            raise AlreadyAssignedError("Student already has a mentor")

        await self.mentor_repo.add_student(mentor_id, student_id)
        logger.info(f"Assigned student {student_id} to mentor {mentor_id}")

        # Re-read so roster additions from other requests show up too
        updated = await self.mentor_repo.find_by_id(mentor_id)
        return updated if updated is not None else mentor

    async def reassign_student_mentor(self, student_id: str, new_mentor_id: str) -> Student:
        """
        Replaces the student's current mentor, keeping the replaced one in
        previousMentor. Only one previous mentor is kept. The old mentor's
        roster no longer lists the student afterwards.
        """
        student = await self.student_repo.find_by_id(student_id)
        new_mentor = await self.mentor_repo.find_by_id(new_mentor_id)
        if student is None or new_mentor is None:
            raise NotFoundError("Student or Mentor not found")

        old_mentor_id = student.mentor or None
        await self.student_repo.replace_mentor(student_id, new_mentor_id, old_mentor_id)
        await self.mentor_repo.add_student(new_mentor_id, student_id)
        if old_mentor_id and old_mentor_id != new_mentor_id:
            await self.mentor_repo.remove_student(old_mentor_id, student_id)

        logger.info(f"Student {student_id} mentor changed from {old_mentor_id} to {new_mentor_id}")

        if old_mentor_id:
            student.previousMentor = old_mentor_id
        student.mentor = new_mentor_id
        return student

    async def students_for_mentor(self, mentor_id: str) -> List[Student]:
        mentor = await self.mentor_repo.find_by_id(mentor_id)
        if mentor is None:
            raise NotFoundError("Mentor not found")
        return await self.student_repo.find_by_ids(mentor.students)

    async def previous_mentor_for_student(self, student_id: str) -> Optional[Mentor]:
        student = await self.student_repo.find_by_id(student_id)
        if student is None:
            raise NotFoundError("Student not found")
        if not student.previousMentor:
            return None
        # The referenced mentor may be gone; populate yields null then
        return await self.mentor_repo.find_by_id(student.previousMentor)

# repositories/student_repo.py
import logging
from typing import List, Optional

from bson.errors import InvalidDocument
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from pymongo.errors import PyMongoError, WriteError

from models.student import Student, StudentCreate
from .errors import StoreUnavailableError, ValidationFailureError

logger = logging.getLogger(__name__)

PROJECTION = {"_id": 0}


class StudentRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.students

    async def list_all(self) -> List[Student]:
        try:
            docs = await self.collection.find({}, PROJECTION).to_list(None)
        except PyMongoError as e:
            logger.error(f"Failed to list students: {e}")
            raise StoreUnavailableError(str(e)) from e
        return [Student.from_document(doc) for doc in docs]

    async def create(self, fields: dict) -> Student:
        try:
            student = Student.new(StudentCreate.model_validate(fields))
        except ValidationError as e:
            raise ValidationFailureError(str(e)) from e
        try:
            await self.collection.insert_one(student.to_document())
        except (InvalidDocument, WriteError) as e:
            logger.error(f"Student document rejected: {e}")
            raise ValidationFailureError(str(e)) from e
        except PyMongoError as e:
            logger.error(f"Failed to insert student: {e}")
            raise StoreUnavailableError(str(e)) from e
        logger.info(f"Created student {student.id}")
        return student

    async def find_by_id(self, student_id: str) -> Optional[Student]:
        try:
            doc = await self.collection.find_one({"id": student_id}, PROJECTION)
        except PyMongoError as e:
            logger.error(f"Failed to fetch student {student_id}: {e}")
            raise StoreUnavailableError(str(e)) from e
        if doc is None:
            logger.warning(f"Student not found: {student_id}")
            return None
        return Student.from_document(doc)

    async def find_by_ids(self, student_ids: List[str]) -> List[Student]:
        """Populate student ids in roster order, skipping ids that no longer resolve."""
        if not student_ids:
            return []
        try:
            docs = await self.collection.find({"id": {"$in": list(student_ids)}}, PROJECTION).to_list(None)
        except PyMongoError as e:
            logger.error(f"Failed to fetch students: {e}")
            raise StoreUnavailableError(str(e)) from e
        by_id = {doc["id"]: Student.from_document(doc) for doc in docs}
        return [by_id[i] for i in student_ids if i in by_id]

    async def set_mentor_if_unassigned(self, student_id: str, mentor_id: str) -> bool:
        """Set the mentor only while the student has none. Returns False if another write got there first."""
        try:
            result = await self.collection.update_one(
                {"id": student_id, "mentor": None},
                {"$set": {"mentor": mentor_id}},
            )
        except PyMongoError as e:
            logger.error(f"Failed to assign mentor {mentor_id} to student {student_id}: {e}")
            raise StoreUnavailableError(str(e)) from e
        return result.matched_count == 1

    async def replace_mentor(self, student_id: str, mentor_id: str, previous_mentor_id: Optional[str]):
        update = {"mentor": mentor_id}
        if previous_mentor_id is not None:
            update["previousMentor"] = previous_mentor_id
        try:
            await self.collection.update_one({"id": student_id}, {"$set": update})
        except PyMongoError as e:
            logger.error(f"Failed to change mentor of student {student_id}: {e}")
            raise StoreUnavailableError(str(e)) from e

# repositories/mentor_repo.py
import logging
from typing import List, Optional

from bson.errors import InvalidDocument
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from pymongo.errors import PyMongoError, WriteError

from models.mentor import Mentor, MentorCreate
from .errors import StoreUnavailableError, ValidationFailureError

logger = logging.getLogger(__name__)

PROJECTION = {"_id": 0}


class MentorRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.mentors

    async def list_all(self) -> List[Mentor]:
        try:
            docs = await self.collection.find({}, PROJECTION).to_list(None)
        except PyMongoError as e:
            logger.error(f"Failed to list mentors: {e}")
            raise StoreUnavailableError(str(e)) from e
        return [Mentor.from_document(doc) for doc in docs]

    async def create(self, fields: dict) -> Mentor:
        try:
            mentor = Mentor.new(MentorCreate.model_validate(fields))
        except ValidationError as e:
            raise ValidationFailureError(str(e)) from e
        try:
            await self.collection.insert_one(mentor.to_document())
        except (InvalidDocument, WriteError) as e:
            logger.error(f"Mentor document rejected: {e}")
            raise ValidationFailureError(str(e)) from e
        except PyMongoError as e:
            logger.error(f"Failed to insert mentor: {e}")
            raise StoreUnavailableError(str(e)) from e
        logger.info(f"Created mentor {mentor.id}")
        return mentor

    async def find_by_id(self, mentor_id: str) -> Optional[Mentor]:
        try:
            doc = await self.collection.find_one({"id": mentor_id}, PROJECTION)
        except PyMongoError as e:
            logger.error(f"Failed to fetch mentor {mentor_id}: {e}")
            raise StoreUnavailableError(str(e)) from e
        if doc is None:
            logger.warning(f"Mentor not found: {mentor_id}")
            return None
        return Mentor.from_document(doc)

    async def find_by_ids(self, mentor_ids: List[str]) -> List[Mentor]:
        """Populate mentor ids in the given order, skipping ids that no longer resolve."""
        if not mentor_ids:
            return []
        try:
            docs = await self.collection.find({"id": {"$in": list(mentor_ids)}}, PROJECTION).to_list(None)
        except PyMongoError as e:
            logger.error(f"Failed to fetch mentors: {e}")
            raise StoreUnavailableError(str(e)) from e
        by_id = {doc["id"]: Mentor.from_document(doc) for doc in docs}
        return [by_id[i] for i in mentor_ids if i in by_id]

    async def add_student(self, mentor_id: str, student_id: str):
        try:
            await self.collection.update_one({"id": mentor_id}, {"$addToSet": {"students": student_id}})
        except PyMongoError as e:
            logger.error(f"Failed to add student {student_id} to mentor {mentor_id}: {e}")
            raise StoreUnavailableError(str(e)) from e

    async def remove_student(self, mentor_id: str, student_id: str):
        try:
            await self.collection.update_one({"id": mentor_id}, {"$pull": {"students": student_id}})
        except PyMongoError as e:
            logger.error(f"Failed to remove student {student_id} from mentor {mentor_id}: {e}")
            raise StoreUnavailableError(str(e)) from e

# models/mentor.py
from pydantic import BaseModel, ConfigDict, Field
from bson import ObjectId
from typing import List, Optional


class MentorCreate(BaseModel):
    # Relationship fields and ids in the request body are ignored
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None


class Mentor(BaseModel):
    id: str = Field(default_factory=lambda: str(ObjectId()))
    name: Optional[str] = None
    students: List[str] = []

    @classmethod
    def new(cls, fields: MentorCreate) -> "Mentor":
        return cls(name=fields.name)

    @classmethod
    def from_document(cls, doc: dict) -> "Mentor":
        return cls(
            id=doc["id"],
            name=doc.get("name"),
            students=list(doc.get("students") or []),
        )

    def to_document(self) -> dict:
        return {"id": self.id, "name": self.name, "students": list(self.students)}

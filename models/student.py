# models/student.py
from pydantic import BaseModel, ConfigDict, Field
from bson import ObjectId
from typing import Optional


class StudentCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None


class Student(BaseModel):
    id: str = Field(default_factory=lambda: str(ObjectId()))
    name: Optional[str] = None
    mentor: Optional[str] = None  # current mentor id
    previousMentor: Optional[str] = None  # single slot, overwritten on reassignment

    @classmethod
    def new(cls, fields: StudentCreate) -> "Student":
        return cls(name=fields.name)

    @classmethod
    def from_document(cls, doc: dict) -> "Student":
        return cls(
            id=doc["id"],
            name=doc.get("name"),
            mentor=doc.get("mentor"),
            previousMentor=doc.get("previousMentor"),
        )

    def to_document(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "mentor": self.mentor,
            "previousMentor": self.previousMentor,
        }

# routes/mentors.py
from fastapi import APIRouter, Depends, Request, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List

from database import get_db
from models.mentor import Mentor
from models.student import Student
from repositories.mentor_repo import MentorRepository
from services.assignment_service import AssignmentService
from .common import read_fields, to_http_exception

router = APIRouter(prefix="/mentors", tags=["mentors"])


@router.get("", response_model=List[Mentor])
async def get_mentors(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await MentorRepository(db).list_all()
    except Exception as e:
        raise to_http_exception(e, "Error fetching mentors")


@router.post("", response_model=Mentor, status_code=status.HTTP_201_CREATED)
async def create_mentor(request: Request, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await MentorRepository(db).create(await read_fields(request))
    except Exception as e:
        raise to_http_exception(e, "Error creating mentor")


@router.post("/{mentorId}/students/{studentId}", response_model=Mentor)
async def assign_student(mentorId: str, studentId: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await AssignmentService(db).assign_student_to_mentor(mentorId, studentId)
    except Exception as e:
        raise to_http_exception(e, "Error assigning student to mentor")


@router.get("/{mentorId}/students", response_model=List[Student])
async def get_mentor_students(mentorId: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await AssignmentService(db).students_for_mentor(mentorId)
    except Exception as e:
        raise to_http_exception(e, "Error fetching students for mentor")

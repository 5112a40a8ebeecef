# routes/students.py
from fastapi import APIRouter, Depends, Request, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List, Optional

from database import get_db
from models.mentor import Mentor
from models.student import Student
from repositories.student_repo import StudentRepository
from services.assignment_service import AssignmentService
from .common import read_fields, to_http_exception

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=List[Student])
async def get_students(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await StudentRepository(db).list_all()
    except Exception as e:
        raise to_http_exception(e, "Error fetching students")


@router.post("", response_model=Student, status_code=status.HTTP_201_CREATED)
async def create_student(request: Request, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await StudentRepository(db).create(await read_fields(request))
    except Exception as e:
        raise to_http_exception(e, "Error creating student")


@router.put("/{studentId}/mentor/{mentorId}", response_model=Student)
async def change_mentor(studentId: str, mentorId: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await AssignmentService(db).reassign_student_mentor(studentId, mentorId)
    except Exception as e:
        raise to_http_exception(e, "Error updating student mentor")


@router.get("/{studentId}/previous-mentor", response_model=Optional[Mentor])
async def get_previous_mentor(studentId: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await AssignmentService(db).previous_mentor_for_student(studentId)
    except Exception as e:
        raise to_http_exception(e, "Error fetching previous mentor for student")

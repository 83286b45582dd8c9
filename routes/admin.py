from fastapi import APIRouter, Depends, HTTPException
from typing import List

from routes.auth import require_role
from schemas.student import AdminStatsOut, PaymentOut, StudentOut
from services.repository import SchoolRepository, get_repository

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_role("admin"))])


@router.get("/students", response_model=List[StudentOut])
def list_students(repo: SchoolRepository = Depends(get_repository)):
    return repo.list_students()


@router.get("/students/{nisn}", response_model=StudentOut)
def get_student(nisn: str, repo: SchoolRepository = Depends(get_repository)):
    student = repo.get_student_by_nisn(nisn)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.get("/payments", response_model=List[PaymentOut])
def list_payments(repo: SchoolRepository = Depends(get_repository)):
    return repo.list_payments()


@router.get("/stats", response_model=AdminStatsOut)
def stats(repo: SchoolRepository = Depends(get_repository)):
    return repo.get_stats()

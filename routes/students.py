from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List

from routes.auth import require_role
from schemas.auth import Identity
from schemas.student import BillOut, PaymentOut
from services.repository import SchoolRepository, get_repository

router = APIRouter(prefix="/api/students", tags=["students"])


@router.get("/me/bills", response_model=List[BillOut])
def my_bills(
    status: str = Query(default="all", pattern="^(all|unpaid|paid)$"),
    identity: Identity = Depends(require_role("student")),
    repo: SchoolRepository = Depends(get_repository),
):
    student_id = identity.student.id
    if status == "unpaid":
        return repo.get_unpaid_bills_by_student(student_id)
    if status == "paid":
        return repo.get_paid_bills_by_student(student_id)
    return repo.get_bills_by_student(student_id)


@router.get("/me/history", response_model=List[PaymentOut])
def my_history(
    identity: Identity = Depends(require_role("student")),
    repo: SchoolRepository = Depends(get_repository),
):
    return repo.get_payments_by_student(identity.student.id)


@router.get("/me/bills/{bill_id}", response_model=BillOut)
def my_bill(
    bill_id: str,
    identity: Identity = Depends(require_role("student")),
    repo: SchoolRepository = Depends(get_repository),
):
    bill = next((b for b in repo.get_bills_by_student(identity.student.id) if b.id == bill_id), None)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    return bill

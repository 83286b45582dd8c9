from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import List, Optional

from sqlalchemy.orm import Session

from core.config import settings
from models.bill import Bill
from models.payment import Payment
from models.student import Student
from services import seed

UNPAID_STATUSES = ("UNPAID", "EXPIRED")


class SchoolRepository(ABC):
    """Read access to students, bills and payments.

    Every backend returns lists in the same order: students by name, bills by
    due date (latest first) and payments by creation time (newest first).
    """

    @abstractmethod
    def get_student(self, student_id: str) -> Optional[Student]:
        ...

    @abstractmethod
    def get_student_by_nisn(self, nisn: str) -> Optional[Student]:
        ...

    @abstractmethod
    def list_students(self) -> List[Student]:
        ...

    @abstractmethod
    def get_bills_by_student(self, student_id: str) -> List[Bill]:
        ...

    @abstractmethod
    def list_bills(self) -> List[Bill]:
        ...

    @abstractmethod
    def list_payments(self) -> List[Payment]:
        ...

    def get_unpaid_bills_by_student(self, student_id: str) -> List[Bill]:
        return [b for b in self.get_bills_by_student(student_id) if b.status in UNPAID_STATUSES]

    def get_paid_bills_by_student(self, student_id: str) -> List[Bill]:
        return [b for b in self.get_bills_by_student(student_id) if b.status == "PAID"]

    def get_payments_by_student(self, student_id: str) -> List[Payment]:
        return [p for p in self.list_payments() if p.student_id == student_id]

    def get_stats(self) -> dict:
        bills = self.list_bills()
        payments = self.list_payments()
        settled = sorted((p for p in payments if p.status == "success"), key=lambda p: p.created_at)

        monthly: "OrderedDict[str, int]" = OrderedDict()
        for p in settled:
            key = p.created_at.strftime("%Y-%m")
            monthly[key] = monthly.get(key, 0) + p.amount

        return {
            "total_students": len(self.list_students()),
            "total_bills": len(bills),
            "total_paid": sum(1 for b in bills if b.status == "PAID"),
            "total_unpaid": sum(1 for b in bills if b.status in UNPAID_STATUSES),
            "total_revenue": sum(p.amount for p in settled),
            "monthly_revenue": [{"month": m, "revenue": r} for m, r in monthly.items()],
        }


class InMemorySchoolRepository(SchoolRepository):
    def __init__(self, students: List[Student], bills: List[Bill], payments: List[Payment]):
        self._students = list(students)
        self._bills = list(bills)
        self._payments = list(payments)

    @classmethod
    def with_demo_data(cls) -> "InMemorySchoolRepository":
        return cls(seed.demo_students(), seed.demo_bills(), seed.demo_payments())

    def get_student(self, student_id: str) -> Optional[Student]:
        return next((s for s in self._students if s.id == student_id), None)

    def get_student_by_nisn(self, nisn: str) -> Optional[Student]:
        return next((s for s in self._students if s.nisn == nisn), None)

    def list_students(self) -> List[Student]:
        return sorted(self._students, key=lambda s: s.name)

    def get_bills_by_student(self, student_id: str) -> List[Bill]:
        return [b for b in self.list_bills() if b.student_id == student_id]

    def list_bills(self) -> List[Bill]:
        return sorted(self._bills, key=lambda b: b.due_date, reverse=True)

    def list_payments(self) -> List[Payment]:
        return sorted(self._payments, key=lambda p: p.created_at, reverse=True)


class SqlSchoolRepository(SchoolRepository):
    def __init__(self, db: Session):
        self.db = db

    def get_student(self, student_id: str) -> Optional[Student]:
        return self.db.query(Student).filter(Student.id == student_id).one_or_none()

    def get_student_by_nisn(self, nisn: str) -> Optional[Student]:
        return self.db.query(Student).filter(Student.nisn == nisn).one_or_none()

    def list_students(self) -> List[Student]:
        return self.db.query(Student).order_by(Student.name).all()

    def get_bills_by_student(self, student_id: str) -> List[Bill]:
        return self.db.query(Bill).filter(Bill.student_id == student_id).order_by(Bill.due_date.desc()).all()

    def list_bills(self) -> List[Bill]:
        return self.db.query(Bill).order_by(Bill.due_date.desc()).all()

    def list_payments(self) -> List[Payment]:
        return self.db.query(Payment).order_by(Payment.created_at.desc()).all()

    def get_payments_by_student(self, student_id: str) -> List[Payment]:
        return (
            self.db.query(Payment)
            .filter(Payment.student_id == student_id)
            .order_by(Payment.created_at.desc())
            .all()
        )


_memory_repository: Optional[InMemorySchoolRepository] = None


def get_repository():
    """FastAPI dependency yielding the configured repository."""
    global _memory_repository
    if settings.DATA_BACKEND == "sql":
        from core.db import get_db

        sessions = get_db()
        try:
            yield SqlSchoolRepository(next(sessions))
        finally:
            sessions.close()
        return
    if _memory_repository is None:
        _memory_repository = InMemorySchoolRepository.with_demo_data()
    yield _memory_repository

import pytest
from datetime import date, datetime
from unittest.mock import Mock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core import config as core_config
from core import db as core_db
from core.db import Base
from models.bill import Bill
from models.payment import Payment
from models.student import Student
from services import seed
from services.repository import InMemorySchoolRepository, SqlSchoolRepository, get_repository


@pytest.fixture
def db_session():
    """Create a test database session seeded with the demo data"""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    session.add_all(seed.demo_students())
    session.flush()
    session.add_all(seed.demo_bills() + seed.demo_payments())
    session.commit()
    yield session
    session.close()


@pytest.fixture(params=["memory", "sql"])
def repository(request, db_session):
    if request.param == "memory":
        return InMemorySchoolRepository.with_demo_data()
    return SqlSchoolRepository(db_session)


class TestSchoolRepository:
    """Both repository backends answer the same queries"""

    def test_student_lookup(self, repository):
        assert repository.get_student("3").name == "Muhammad Farhan"
        assert repository.get_student("99") is None

    def test_student_by_nisn(self, repository):
        assert repository.get_student_by_nisn("0012345681").name == "Dewi Anggraini"
        assert repository.get_student_by_nisn("0000000000") is None

    def test_bills_by_student(self, repository):
        assert len(repository.get_bills_by_student("1")) == 4
        assert repository.get_bills_by_student("5") == []

    def test_unpaid_and_paid_bills(self, repository):
        unpaid = repository.get_unpaid_bills_by_student("1")
        assert {b.id for b in unpaid} == {"bill-001", "bill-003", "bill-004"}
        assert [b.id for b in repository.get_paid_bills_by_student("1")] == ["bill-002"]

    def test_pending_bill_is_not_unpaid(self, repository):
        assert repository.get_unpaid_bills_by_student("2") == []

    def test_payments_by_student(self, repository):
        payments = repository.get_payments_by_student("2")
        assert {p.transaction_id for p in payments} == {"TXN-002-2026", "TXN-PENDING-001"}

    def test_stats(self, repository):
        stats = repository.get_stats()
        assert stats["total_revenue"] == 1750000
        assert stats["total_unpaid"] == 3

    def test_both_backends_share_ordering(self, repository):
        assert [s.id for s in repository.list_students()] == ["1", "5", "4", "3", "2"]
        assert [b.id for b in repository.get_bills_by_student("1")] == [
            "bill-003", "bill-001", "bill-002", "bill-004",
        ]
        assert [b.id for b in repository.get_unpaid_bills_by_student("1")] == ["bill-003", "bill-001", "bill-004"]
        assert [p.id for p in repository.list_payments()] == ["pay-004", "pay-003", "pay-002", "pay-001"]
        assert [p.id for p in repository.get_payments_by_student("2")] == ["pay-004", "pay-002"]


class TestGetRepository:
    def test_sql_backend_uses_db_session(self, monkeypatch):
        session = Mock()
        monkeypatch.setattr(core_config.settings, "DATA_BACKEND", "sql")
        monkeypatch.setattr(core_db, "SessionLocal", Mock(return_value=session))

        dependency = get_repository()
        repository = next(dependency)
        assert isinstance(repository, SqlSchoolRepository)
        assert repository.db is session
        session.close.assert_not_called()

        dependency.close()
        session.close.assert_called_once()

    def test_memory_backend_is_shared(self, monkeypatch):
        monkeypatch.setattr(core_config.settings, "DATA_BACKEND", "memory")

        first = next(get_repository())
        second = next(get_repository())
        assert isinstance(first, InMemorySchoolRepository)
        assert first is second


class TestModels:
    """Test cases for the school models"""

    def test_bill_defaults(self, db_session):
        bill = Bill(id="bill-100", student_id="5", title="SPP Maret", amount=500000, due_date=date(2026, 3, 31))
        db_session.add(bill)
        db_session.commit()
        db_session.refresh(bill)

        assert bill.status == "UNPAID"
        assert bill.description == ""
        assert bill.paid_at is None
        assert bill.student.name == "Budi Santoso"

    def test_payment_created_at_default(self, db_session):
        payment = Payment(id="pay-100", bill_id="bill-001", student_id="1", student_name="Ahmad Rizky Pratama",
                          amount=500000, method="GoPay", transaction_id="TXN-100")
        db_session.add(payment)
        db_session.commit()
        db_session.refresh(payment)

        assert payment.status == "pending"
        assert isinstance(payment.created_at, datetime)

    def test_student_bills_relationship(self, db_session):
        student = db_session.get(Student, "1")

        assert len(student.bills) == 4

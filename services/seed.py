"""Demo records served by the in-memory school repository."""
from datetime import date, datetime
from typing import List

from models.bill import Bill
from models.payment import Payment
from models.student import Student


def _avatar(seed: str) -> str:
    return f"https://api.dicebear.com/7.x/avataaars/svg?seed={seed}"


def demo_students() -> List[Student]:
    return [
        Student(id="1", nisn="0012345678", name="Ahmad Rizky Pratama", class_name="XII IPA 1",
                avatar=_avatar("Ahmad"), email="ahmad.rizky@student.edu", phone="081234567890"),
        Student(id="2", nisn="0012345679", name="Siti Nurhaliza", class_name="XII IPA 2",
                avatar=_avatar("Siti"), email="siti.nur@student.edu", phone="081234567891"),
        Student(id="3", nisn="0012345680", name="Muhammad Farhan", class_name="XI IPS 1",
                avatar=_avatar("Farhan"), email="farhan.m@student.edu", phone="081234567892"),
        Student(id="4", nisn="0012345681", name="Dewi Anggraini", class_name="XI IPA 3",
                avatar=_avatar("Dewi"), email="dewi.a@student.edu", phone="081234567893"),
        Student(id="5", nisn="0012345682", name="Budi Santoso", class_name="X IPA 1",
                avatar=_avatar("Budi"), email="budi.s@student.edu", phone="081234567894"),
    ]


def demo_bills() -> List[Bill]:
    return [
        Bill(id="bill-001", student_id="1", title="SPP Bulan Februari 2026", description="Pembayaran SPP bulanan",
             amount=500000, due_date=date(2026, 2, 28), status="UNPAID"),
        Bill(id="bill-002", student_id="1", title="SPP Bulan Januari 2026", description="Pembayaran SPP bulanan",
             amount=500000, due_date=date(2026, 1, 31), status="PAID",
             paid_at=datetime(2026, 1, 15, 10, 30), payment_method="BCA Virtual Account",
             transaction_id="TXN-001-2026"),
        Bill(id="bill-003", student_id="1", title="Uang Praktikum Semester 2",
             description="Biaya praktikum laboratorium",
             amount=750000, due_date=date(2026, 3, 15), status="UNPAID"),
        Bill(id="bill-004", student_id="1", title="SPP Bulan Desember 2025", description="Pembayaran SPP bulanan",
             amount=500000, due_date=date(2025, 12, 31), status="EXPIRED"),
        Bill(id="bill-005", student_id="2", title="SPP Bulan Februari 2026", description="Pembayaran SPP bulanan",
             amount=500000, due_date=date(2026, 2, 28), status="PENDING", transaction_id="TXN-PENDING-001"),
    ]


def demo_payments() -> List[Payment]:
    return [
        Payment(id="pay-001", bill_id="bill-002", student_id="1", student_name="Ahmad Rizky Pratama",
                amount=500000, status="success", method="BCA Virtual Account",
                transaction_id="TXN-001-2026", created_at=datetime(2026, 1, 15, 10, 30)),
        Payment(id="pay-002", bill_id="bill-010", student_id="2", student_name="Siti Nurhaliza",
                amount=500000, status="success", method="Mandiri Virtual Account",
                transaction_id="TXN-002-2026", created_at=datetime(2026, 1, 18, 14, 20)),
        Payment(id="pay-003", bill_id="bill-011", student_id="3", student_name="Muhammad Farhan",
                amount=750000, status="success", method="QRIS",
                transaction_id="TXN-003-2026", created_at=datetime(2026, 1, 20, 9, 15)),
        Payment(id="pay-004", bill_id="bill-005", student_id="2", student_name="Siti Nurhaliza",
                amount=500000, status="pending", method="BNI Virtual Account",
                transaction_id="TXN-PENDING-001", created_at=datetime(2026, 2, 9, 8, 0)),
    ]

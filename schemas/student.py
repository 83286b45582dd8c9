from datetime import date, datetime
from pydantic import BaseModel
from typing import List, Optional


class StudentOut(BaseModel):
    id: str
    nisn: str
    name: str
    class_name: str
    avatar: Optional[str] = None
    email: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True


class BillOut(BaseModel):
    id: str
    student_id: str
    title: str
    description: str
    amount: int
    due_date: date
    status: str
    paid_at: Optional[datetime] = None
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None

    class Config:
        from_attributes = True


class PaymentOut(BaseModel):
    id: str
    bill_id: str
    student_id: str
    student_name: str
    amount: int
    status: str
    method: str
    transaction_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class MonthlyRevenue(BaseModel):
    month: str
    revenue: int


class AdminStatsOut(BaseModel):
    total_students: int
    total_bills: int
    total_paid: int
    total_unpaid: int
    total_revenue: int
    monthly_revenue: List[MonthlyRevenue]

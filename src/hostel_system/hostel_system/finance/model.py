from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.validators import Field
from ..core.constants import DEFAULT_PAYMENT_METHOD
from ..core.enums import PaymentStatus

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class StudentPayment:
    id: int
    student_id: int
    amount: Decimal
    payment_type: str
    month: str
    year: int
    payment_method: Optional[str] = DEFAULT_PAYMENT_METHOD
    status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: Optional[str] = None
    remarks: Optional[str] = None
    paid_date: Optional[datetime] = None
    approved_by: Optional[int] = None
    approved_date: Optional[datetime] = None


@dataclass(frozen=True)
class VendorPayment:
    id: int
    vendor_name: str
    amount: Decimal
    purpose: str
    payment_date: date
    payment_method: Optional[str] = DEFAULT_PAYMENT_METHOD
    invoice_number: Optional[str] = None
    remarks: Optional[str] = None


@dataclass(frozen=True)
class Expense:
    id: int
    category: str
    description: str
    amount: Decimal
    expense_date: date
    paid_by: Optional[int] = None
    receipt_number: Optional[str] = None
    remarks: Optional[str] = None


@dataclass(frozen=True)
class Salary:
    id: int
    employee_id: int
    amount: Decimal
    month: str
    year: int
    payment_date: date
    payment_method: Optional[str] = DEFAULT_PAYMENT_METHOD
    bonus: Optional[Decimal] = ZERO
    deductions: Optional[Decimal] = ZERO
    remarks: Optional[str] = None


# approved_by / approved_date are stamped by the service, never taken from input.
STUDENT_PAYMENT_FIELDS = (
    Field("student_id", int, required=True),
    Field("amount", Decimal, required=True, minimum=0),
    Field("payment_type", str, required=True),
    Field("month", str, required=True),
    Field("year", int, required=True, minimum=1900),
    Field("payment_method", default=DEFAULT_PAYMENT_METHOD),
    Field("status", PaymentStatus, default=PaymentStatus.PENDING, nullable=False),
    Field("transaction_id"),
    Field("remarks"),
    Field("paid_date", datetime),
)

VENDOR_PAYMENT_FIELDS = (
    Field("vendor_name", str, required=True),
    Field("amount", Decimal, required=True, minimum=0),
    Field("purpose", str, required=True),
    Field("payment_date", date, required=True),
    Field("payment_method", default=DEFAULT_PAYMENT_METHOD),
    Field("invoice_number"),
    Field("remarks"),
)

EXPENSE_FIELDS = (
    Field("category", str, required=True),
    Field("description", str, required=True),
    Field("amount", Decimal, required=True, minimum=0),
    Field("expense_date", date, required=True),
    Field("paid_by", int),
    Field("receipt_number"),
    Field("remarks"),
)

SALARY_FIELDS = (
    Field("employee_id", int, required=True),
    Field("amount", Decimal, required=True, minimum=0),
    Field("month", str, required=True),
    Field("year", int, required=True, minimum=1900),
    Field("payment_date", date, required=True),
    Field("payment_method", default=DEFAULT_PAYMENT_METHOD),
    Field("bonus", Decimal, default=ZERO, minimum=0),
    Field("deductions", Decimal, default=ZERO, minimum=0),
    Field("remarks"),
)

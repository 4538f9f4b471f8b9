from __future__ import annotations

from ..database.mysql_repository import MySQLTableRepository
from .model import Expense, Salary, StudentPayment, VendorPayment


class MySQLStudentPaymentRepository(MySQLTableRepository[StudentPayment]):
    table = "student_payments"
    entity = StudentPayment


class MySQLVendorPaymentRepository(MySQLTableRepository[VendorPayment]):
    table = "vendor_payments"
    entity = VendorPayment


class MySQLExpenseRepository(MySQLTableRepository[Expense]):
    table = "expenses"
    entity = Expense


class MySQLSalaryRepository(MySQLTableRepository[Salary]):
    table = "salaries"
    entity = Salary

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.model import Attendance
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .auth.guards import Guard
from .auth.session_store import SessionStore
from .common.crud import Transaction
from .common.repository import EntityRepository
from .complaints.model import Complaint
from .complaints.mysql_complaint_repository import MySQLComplaintRepository
from .complaints.service import ComplaintService
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .dining.model import MealRate, MealRecord
from .dining.mysql_dining_repository import MySQLMealRateRepository, MySQLMealRecordRepository
from .dining.service import MealRateService, MealRecordService
from .finance.model import Expense, Salary, StudentPayment, VendorPayment
from .finance.mysql_finance_repository import (
    MySQLExpenseRepository,
    MySQLSalaryRepository,
    MySQLStudentPaymentRepository,
    MySQLVendorPaymentRepository,
)
from .finance.service import ExpenseService, SalaryService, StudentPaymentService, VendorPaymentService
from .notices.model import Notice
from .notices.mysql_notice_repository import MySQLNoticeRepository
from .notices.service import NoticeService
from .rooms.model import Block, Room, SeatAllocation
from .rooms.mysql_room_repository import MySQLBlockRepository, MySQLRoomRepository, MySQLSeatAllocationRepository
from .rooms.service import AllocationService, BlockService, RoomService
from .system_config.model import SystemConfig
from .system_config.mysql_system_config_repository import MySQLSystemConfigRepository
from .system_config.service import SystemConfigService
from .users.model import User
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Repositories:
    users: EntityRepository[User]
    blocks: EntityRepository[Block]
    rooms: EntityRepository[Room]
    allocations: EntityRepository[SeatAllocation]
    student_payments: EntityRepository[StudentPayment]
    vendor_payments: EntityRepository[VendorPayment]
    expenses: EntityRepository[Expense]
    salaries: EntityRepository[Salary]
    meal_rates: EntityRepository[MealRate]
    meal_records: EntityRepository[MealRecord]
    notices: EntityRepository[Notice]
    complaints: EntityRepository[Complaint]
    attendance: EntityRepository[Attendance]
    system_config: EntityRepository[SystemConfig]


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    repos: Repositories
    sessions: SessionStore
    guard: Guard

    auth_service: AuthService
    user_service: UserService
    block_service: BlockService
    room_service: RoomService
    allocation_service: AllocationService
    student_payment_service: StudentPaymentService
    vendor_payment_service: VendorPaymentService
    expense_service: ExpenseService
    salary_service: SalaryService
    meal_rate_service: MealRateService
    meal_record_service: MealRecordService
    notice_service: NoticeService
    complaint_service: ComplaintService
    attendance_service: AttendanceService
    system_config_service: SystemConfigService
    dashboard_service: DashboardService


def wire_container(
    repos: Repositories,
    *,
    transaction: Transaction,
    conn: Optional[DatabaseConnection] = None,
    sessions: Optional[SessionStore] = None,
) -> Container:
    """Build every service on top of ``repos``.

    ``transaction`` opens a unit of work shared by all repositories (for MySQL,
    ``DatabaseConnection.transaction``).
    """

    sessions = sessions or SessionStore()
    meal_rate_service = MealRateService(repos.meal_rates)

    return Container(
        conn=conn,
        repos=repos,
        sessions=sessions,
        guard=Guard(sessions, repos.users),
        auth_service=AuthService(repos.users),
        user_service=UserService(repos.users),
        block_service=BlockService(repos.blocks, repos.rooms),
        room_service=RoomService(repos.rooms, repos.blocks),
        allocation_service=AllocationService(repos.allocations, repos.users, repos.rooms, transaction=transaction),
        student_payment_service=StudentPaymentService(repos.student_payments),
        vendor_payment_service=VendorPaymentService(repos.vendor_payments),
        expense_service=ExpenseService(repos.expenses),
        salary_service=SalaryService(repos.salaries, repos.users),
        meal_rate_service=meal_rate_service,
        meal_record_service=MealRecordService(
            repos.meal_records, repos.users, meal_rate_service, transaction=transaction
        ),
        notice_service=NoticeService(repos.notices),
        complaint_service=ComplaintService(repos.complaints),
        attendance_service=AttendanceService(repos.attendance, repos.users, transaction=transaction),
        system_config_service=SystemConfigService(repos.system_config),
        dashboard_service=DashboardService(
            repos.users, repos.blocks, repos.rooms, repos.allocations, repos.complaints, repos.notices
        ),
    )


def build_container(*, db_config: dict) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    repos = Repositories(
        users=MySQLUserRepository(conn),
        blocks=MySQLBlockRepository(conn),
        rooms=MySQLRoomRepository(conn),
        allocations=MySQLSeatAllocationRepository(conn),
        student_payments=MySQLStudentPaymentRepository(conn),
        vendor_payments=MySQLVendorPaymentRepository(conn),
        expenses=MySQLExpenseRepository(conn),
        salaries=MySQLSalaryRepository(conn),
        meal_rates=MySQLMealRateRepository(conn),
        meal_records=MySQLMealRecordRepository(conn),
        notices=MySQLNoticeRepository(conn),
        complaints=MySQLComplaintRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        system_config=MySQLSystemConfigRepository(conn),
    )
    return wire_container(repos, transaction=conn.transaction, conn=conn)

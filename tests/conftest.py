from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

import pytest

from src.hostel_system.hostel_system.attendance.model import Attendance
from src.hostel_system.hostel_system.common.entities import merge_updates
from src.hostel_system.hostel_system.complaints.model import Complaint
from src.hostel_system.hostel_system.container import Repositories, wire_container
from src.hostel_system.hostel_system.dining.model import MealRate, MealRecord
from src.hostel_system.hostel_system.finance.model import Expense, Salary, StudentPayment, VendorPayment
from src.hostel_system.hostel_system.main import create_app
from src.hostel_system.hostel_system.notices.model import Notice
from src.hostel_system.hostel_system.rooms.model import Block, Room, SeatAllocation
from src.hostel_system.hostel_system.system_config.model import SystemConfig
from src.hostel_system.hostel_system.users.model import User

T = TypeVar("T")


class InMemoryRepository(Generic[T]):
    def __init__(self, entity: Type[T]):
        self._entity = entity
        self._rows: Dict[int, T] = {}
        self._next_id = 1

    def get(self, entity_id: int) -> Optional[T]:
        return self._rows.get(int(entity_id))

    def list(self, *, for_update: bool = False, **filters: Any) -> List[T]:
        return [
            row
            for _, row in sorted(self._rows.items())
            if all(getattr(row, k) == v for k, v in filters.items())
        ]

    def create(self, values: Dict[str, Any]) -> T:
        row = self._entity(id=self._next_id, **values)
        self._rows[self._next_id] = row
        self._next_id += 1
        return row

    def update(self, entity_id: int, changes: Dict[str, Any]) -> Optional[T]:
        row = self._rows.get(int(entity_id))
        if row is None:
            return None
        row = merge_updates(row, changes)
        self._rows[row.id] = row
        return row

    def delete(self, entity_id: int) -> bool:
        return self._rows.pop(int(entity_id), None) is not None


class FakeTransaction:
    """One lock shared by every unit of work; nested use re-enters.

    The outermost unit snapshots every repository and restores it when the
    block raises, so a failed unit leaves nothing behind.
    """

    def __init__(self, repos: Optional[Repositories] = None):
        self._lock = threading.RLock()
        self._repos = repos
        self._depth = 0
        self.opened = 0
        self.rolled_back = 0

    def _snapshot(self):
        if self._repos is None:
            return []
        return [(repo, dict(repo._rows), repo._next_id) for repo in vars(self._repos).values()]

    @contextmanager
    def __call__(self):
        with self._lock:
            self.opened += 1
            snapshot = self._snapshot() if self._depth == 0 else None
            self._depth += 1
            try:
                yield None
            except BaseException:
                if snapshot is not None:
                    for repo, rows, next_id in snapshot:
                        repo._rows = rows
                        repo._next_id = next_id
                    self.rolled_back += 1
                raise
            finally:
                self._depth -= 1


@pytest.fixture
def repos() -> Repositories:
    return Repositories(
        users=InMemoryRepository(User),
        blocks=InMemoryRepository(Block),
        rooms=InMemoryRepository(Room),
        allocations=InMemoryRepository(SeatAllocation),
        student_payments=InMemoryRepository(StudentPayment),
        vendor_payments=InMemoryRepository(VendorPayment),
        expenses=InMemoryRepository(Expense),
        salaries=InMemoryRepository(Salary),
        meal_rates=InMemoryRepository(MealRate),
        meal_records=InMemoryRepository(MealRecord),
        notices=InMemoryRepository(Notice),
        complaints=InMemoryRepository(Complaint),
        attendance=InMemoryRepository(Attendance),
        system_config=InMemoryRepository(SystemConfig),
    )


@pytest.fixture
def transaction(repos) -> FakeTransaction:
    return FakeTransaction(repos)


@pytest.fixture
def container(repos, transaction):
    return wire_container(repos, transaction=transaction)


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def admin(container) -> User:
    return container.user_service.create(
        {"name": "Admin User", "email": "admin@hms.com", "password": "admin123", "role": "ADMIN"}
    )


@pytest.fixture
def student(container) -> User:
    return container.user_service.create(
        {"name": "John Student", "email": "student@hms.com", "password": "student123", "role": "STUDENT"}
    )


@pytest.fixture
def other_student(container) -> User:
    return container.user_service.create(
        {"name": "Jane Student", "email": "jane@hms.com", "password": "jane1234", "role": "STUDENT"}
    )


@pytest.fixture
def login(app):
    """login(email, password) -> a test client holding that user's session."""

    def _login(email: str, password: str):
        client = app.test_client()
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return client

    return _login


@pytest.fixture
def admin_client(admin, login):
    return login("admin@hms.com", "admin123")


@pytest.fixture
def student_client(student, login):
    return login("student@hms.com", "student123")

from __future__ import annotations

from src.hostel_system.hostel_system.auth.session_store import SessionStore
from src.hostel_system.hostel_system.core.actor import Actor
from src.hostel_system.hostel_system.core.enums import ROLE_IS_ADMIN, Role, is_admin_role


def test_every_role_has_an_admin_entry():
    assert set(ROLE_IS_ADMIN) == set(Role)


def test_only_admin_roles_are_admin():
    assert is_admin_role(Role.SUPER_ADMIN)
    assert is_admin_role(Role.ADMIN)
    assert not is_admin_role(Role.EMPLOYEE)
    assert not is_admin_role("STUDENT")
    assert Actor(user_id=1, role=Role.ADMIN).is_admin
    assert not Actor(user_id=2, role=Role.STUDENT).is_admin


def test_session_tokens_resolve_until_destroyed():
    store = SessionStore()
    token = store.create(7)

    assert store.resolve(token) == 7
    assert store.resolve("not-a-token") is None
    assert store.resolve(None) is None

    assert store.destroy(token) is True
    assert store.resolve(token) is None
    assert store.destroy(token) is False


def test_each_login_gets_its_own_token():
    store = SessionStore()
    first = store.create(1)
    second = store.create(1)
    store.create(2)

    assert first != second
    assert store.destroy_user(1) == 2
    assert store.resolve(first) is None
    assert len(store) == 1

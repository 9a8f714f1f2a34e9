import sqlite3

import pytest

from pharmacy.domain.entities import User
from pharmacy.ports.repo import UsernameTakenError


def test_save_and_get_user(user_repo):
    user = User(
        username="cashier1",
        password_hash="hashed_secret",
        role="CASHIER",
    )

    saved = user_repo.save(user)
    assert saved is user

    fetched = user_repo.get_by_username("cashier1")
    assert fetched is not None
    assert fetched.id == user.id
    assert fetched.role == "CASHIER"
    assert fetched.active is True
    assert fetched.created_at == user.created_at


def test_exists_by_username(user_repo):
    assert user_repo.exists_by_username("admin") is False

    user_repo.save(User(username="admin", password_hash="h", role="ADMIN"))

    assert user_repo.exists_by_username("admin") is True
    assert user_repo.exists_by_username("Admin") is False


def test_get_missing_user(user_repo):
    assert user_repo.get_by_username("missing") is None


def test_update_user(user_repo):
    user = User(username="cashier", password_hash="h", role="CASHIER")
    user_repo.save(user)

    user.active = False
    user.role = "ADMIN"
    user_repo.save(user)

    fetched = user_repo.get_by_username("cashier")
    assert fetched.active is False
    assert fetched.role == "ADMIN"
    assert len(user_repo.list_all()) == 1


def test_duplicate_username_raises_taken(user_repo):
    user_repo.save(User(username="admin", password_hash="h1", role="ADMIN"))

    with pytest.raises(UsernameTakenError) as exc_info:
        user_repo.save(User(username="admin", password_hash="h2", role="ADMIN"))

    assert exc_info.value.username == "admin"
    users = user_repo.list_all()
    assert len(users) == 1
    assert users[0].password_hash == "h1"


def test_schema_only_accepts_known_roles(db_path):
    conn = sqlite3.connect(db_path)
    try:
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO users (id, username, password_hash, role, created_at, updated_at) "
                "VALUES ('x', 'p', 'h', 'PHARMACIST', '2025-01-01', '2025-01-01')"
            )
    finally:
        conn.close()


def test_list_all_sorted_by_username(user_repo):
    for name in ["zed", "amy", "mia"]:
        user_repo.save(User(username=name, password_hash="h"))

    assert [u.username for u in user_repo.list_all()] == ["amy", "mia", "zed"]

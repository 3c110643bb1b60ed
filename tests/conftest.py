from __future__ import annotations

import os

import pytest

os.environ.setdefault("APP_ENV", "testing")

from src.mess_system.mess_system.core.enums import Role  # noqa: E402
from src.mess_system.mess_system.users.tokens import TokenService  # noqa: E402
from tests.fakes import InMemoryStore, build_fake_container  # noqa: E402


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def tokens():
    return TokenService("test-jwt-secret", expires_minutes=60)


@pytest.fixture
def container(store, tokens):
    return build_fake_container(store, tokens)


@pytest.fixture
def owner(store):
    return store.add_user("Owner", "owner@mess.local", role=Role.MESS_OWNER, phone="9800000001")


@pytest.fixture
def student(store):
    return store.add_user("Student", "student@mess.local", phone="9800000002")


@pytest.fixture
def mess(store, owner):
    return store.add_mess(owner)


@pytest.fixture
def monthly_plan(store, mess):
    return store.add_plan(mess)

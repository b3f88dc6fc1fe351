"""Pytest configuration for django-pool-access tests."""

import pytest

from django_pool_access.config import update_config
from django_pool_access.directory import register_guest
from django_pool_access.persons import Owner


@pytest.fixture
def pool(db):
    """Pool configuration factory. Returns the updated PoolConfig."""

    def configure(**changes):
        return update_config(**changes)

    return configure


@pytest.fixture
def owner_a():
    return Owner(id="owner-a", department_code="603A", name="Ana Torres")


@pytest.fixture
def owner_b():
    return Owner(id="owner-b", department_code="704B", name="Bruno Diaz")


@pytest.fixture
def owner_c():
    return Owner(id="owner-c", department_code="101A", name="Carla Ruiz")


@pytest.fixture
def guest_entry(db):
    """A friend registered by department 603A."""
    return register_guest(
        first_name="Lucia",
        last_name="Mendez",
        guest_type="friend",
        department_code="603A",
        registered_by="owner-a",
        document_number="44556677",
    )


@pytest.fixture
def user(db, django_user_model):
    """An owner account in department 603A."""
    return django_user_model.objects.create_user(
        username="owner603a",
        password="testpass123",
        first_name="Ana",
        last_name="Torres",
    )


@pytest.fixture
def other_user(db, django_user_model):
    """An owner account in department 704B."""
    return django_user_model.objects.create_user(
        username="owner704b",
        password="testpass123",
    )


@pytest.fixture
def staff_user(db, django_user_model):
    """A building staff account with no department."""
    return django_user_model.objects.create_user(
        username="staff",
        password="testpass123",
        is_staff=True,
    )


@pytest.fixture
def login(client):
    """Log a user in with a department code stored in the session."""

    def _login(user, department_code=""):
        client.force_login(user)
        if department_code:
            session = client.session
            session["department_code"] = department_code
            session.save()
        return client

    return _login

import itertools
from unittest.mock import MagicMock

import pytest

import database.config
from database import (
    POLICY_MAKER, RESEARCHER, SCIENTIST,
    add_water_sample, create_project, create_tables, create_user,
)


@pytest.fixture()
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "test.sqlite"
    monkeypatch.setattr(database.config, "DB_PATH", str(path))
    create_tables()
    return path


@pytest.fixture(autouse=True)
def emitted(monkeypatch):
    """Replaces the Socket.IO server used for alert broadcasts."""
    mock = MagicMock()
    monkeypatch.setattr("alerter.socketio", mock)
    return mock


@pytest.fixture()
def make_project(db_path):
    def _make(name="Pune Wells", location="Pune, Maharashtra", **extra):
        data = {"name": name, "location": location}
        data.update(extra)
        return create_project(data)
    return _make


@pytest.fixture()
def make_sample(make_project):
    """Stores a sample with the given {metal: concentration} readings."""
    def _make(project_id=None, readings=None, sample_name="S-1", collection_date="2024-05-01", **fields):
        if project_id is None:
            project_id = make_project()
        sample_data = {"sample_name": sample_name, "collection_date": collection_date}
        sample_data.update(fields)
        metals = [
            {"metal_type": metal, "concentration_mg_l": value}
            for metal, value in (readings or {}).items()
        ]
        sample_id, _ = add_water_sample(project_id, sample_data, metals)
        return sample_id
    return _make


@pytest.fixture()
def app(db_path):
    from app import create_app
    return create_app({"TESTING": True, "SECRET_KEY": "test-secret"})


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def login_as(app):
    """Returns a test client whose session belongs to a new user of the given role."""
    counter = itertools.count(1)

    def _login(role):
        n = next(counter)
        user_id = create_user(f"Test {role} {n}", f"{role}{n}@example.org", "secret-pass", role)
        test_client = app.test_client()
        with test_client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["user_name"] = f"Test {role} {n}"
            sess["user_role"] = role
        test_client.user_id = user_id
        return test_client
    return _login


@pytest.fixture()
def scientist(login_as):
    return login_as(SCIENTIST)


@pytest.fixture()
def policy_maker(login_as):
    return login_as(POLICY_MAKER)


@pytest.fixture()
def researcher(login_as):
    return login_as(RESEARCHER)

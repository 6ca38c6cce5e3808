"""Shared fixtures for Daily Track tests.

The Flask fixtures run against an in-memory SQLite database; ``FakeStore``
exercises the statistics engine without touching a database at all.
"""

from types import SimpleNamespace

import pytest

from daily_track import create_app
from daily_track.config import TestingConfig
from daily_track.models import db


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def register(client):
    """Register a user and return ``(user, headers)`` for authenticated calls."""

    def _register(name="Ada", email="ada@example.com", password="secret123"):
        response = client.post("/auth/register", json={"name": name, "email": email, "password": password})
        assert response.status_code == 201, response.get_json()
        data = response.get_json()["data"]
        return data["user"], {"Authorization": f"Bearer {data['token']}"}

    return _register


@pytest.fixture
def auth_headers(register):
    _, headers = register()
    return headers


@pytest.fixture
def make_routine(client, auth_headers):
    """Create a routine with the given task names through the API."""

    def _make_routine(name="Morning", frequency=None, tasks=(), headers=None):
        headers = headers or auth_headers
        frequency = frequency or ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]
        response = client.post("/routines", json={"name": name, "frequency": frequency}, headers=headers)
        assert response.status_code == 201, response.get_json()
        routine = response.get_json()["data"]
        created = []
        for order, task_name in enumerate(tasks):
            response = client.post(
                "/tasks",
                json={"routineId": routine["id"], "name": task_name, "order": order},
                headers=headers,
            )
            assert response.status_code == 201, response.get_json()
            created.append(response.get_json()["data"])
        return routine, created

    return _make_routine


class FakeStore:
    """Dictionary-backed stand-in for ``daily_track.store.Store``."""

    def __init__(self):
        self.routines = []
        self.tasks = []
        self.completions = {}

    def add_routine(self, routine_id, user_id="u1", name=None, frequency=("mon", "tue", "wed", "thu", "fri", "sat", "sun")):
        routine = SimpleNamespace(id=routine_id, user_id=user_id, name=name or routine_id, frequency=list(frequency))
        self.routines.append(routine)
        return routine

    def add_task(self, task_id, routine_id, name=None, order=0):
        task = SimpleNamespace(id=task_id, routine_id=routine_id, name=name or task_id, order=order)
        self.tasks.append(task)
        return task

    def complete(self, date, task_id, user_id="u1"):
        self.set_completion(date, user_id, task_id)

    def get_routines_by_user(self, user_id):
        return [routine for routine in self.routines if routine.user_id == user_id]

    def get_tasks_by_routine(self, routine_id):
        return sorted((task for task in self.tasks if task.routine_id == routine_id), key=lambda task: task.order)

    def get_completions(self, date, user_id):
        return dict(self.completions.get(date, {}).get(user_id, {}))

    def get_all_completions(self, user_id=None):
        return {
            date: {uid: dict(tasks) for uid, tasks in by_user.items() if user_id is None or uid == user_id}
            for date, by_user in self.completions.items()
        }

    def set_completion(self, date, user_id, task_id):
        self.completions.setdefault(date, {}).setdefault(user_id, {})[task_id] = True


@pytest.fixture
def fake_store():
    return FakeStore()

import os

# Settings are read at import time; keep tests off real services and files
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["GROQ_API_KEY"] = ""
os.environ["GOOGLE_SHEET_ID"] = ""

from types import SimpleNamespace
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from appraisal.db import Base, get_db
from appraisal import models  # noqa: F401
from appraisal.deps import get_completion_client, get_sheets_mirror
from appraisal.main import app
from appraisal.sheets import sheet_rows_for


class FakeCompletionClient:
    """Stands in for CompletionClient; records prompts and returns a canned reply."""

    def __init__(self, reply: str = "", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []
        self.systems: List[str] = []

    async def complete(self, prompt, *, system, temperature=None, max_tokens=None):
        self.prompts.append(prompt)
        self.systems.append(system)
        if self.error is not None:
            raise self.error
        return self.reply

    async def aclose(self):
        pass


class FakeMirror:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.rows: List[List[str]] = []

    async def mirror_profile(self, teacher):
        if self.error is not None:
            raise self.error
        rows = sheet_rows_for(teacher)
        self.rows.extend(rows)
        return len(rows)


def make_profile(**overrides):
    """Plain-object profile for the pure functions."""
    data = dict(
        name="Asha Rao",
        designation="Professor",
        department="SOC",
        domain="AIA",
        hours_taught=0,
        student_feedback=0,
        papers=[],
        workshops=[],
        awards=[],
    )
    data.update(overrides)
    return SimpleNamespace(**data)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def completion():
    return FakeCompletionClient(reply="Dear Asha Rao,\n\nKeep publishing.")


@pytest.fixture
def mirror():
    return FakeMirror()


@pytest.fixture
def client(session_factory, completion, mirror):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_completion_client] = lambda: completion
    app.dependency_overrides[get_sheets_mirror] = lambda: mirror
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

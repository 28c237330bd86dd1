"""Shared fixtures: an in-memory database and a TestClient per test."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from db import init_db
from main import create_app
from storage import KeyValueStore

USER = "user-1"


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def store(engine):
    with Session(engine) as session:
        yield KeyValueStore(session)


@pytest.fixture()
def app(engine):
    return create_app(engine=engine, start_ticker=False)


@pytest.fixture()
def client(app):
    with TestClient(app, headers={"X-User-Id": USER}) as c:
        yield c


@pytest.fixture()
def timers(client):
    registry = client.app.state.timers
    registry.focus_seconds = 3
    registry.break_seconds = 2
    return registry

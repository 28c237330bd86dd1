from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

import config


def make_engine(url: str) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=False, connect_args=connect_args)


engine = make_engine(config.DATABASE_URL)


def init_db(bind: Engine) -> None:
    # registers StorageItem on the metadata
    import models  # noqa: F401

    SQLModel.metadata.create_all(bind)


def get_session(request: Request):
    with Session(request.app.state.engine) as session:
        yield session

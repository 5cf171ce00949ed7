from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from break_reminder import config


def make_engine(url: str = config.DATABASE_URL) -> Engine:
    """Create the engine and make sure the store table exists."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(url, echo=False, connect_args=connect_args)
    # models must be imported so the table is registered on the metadata
    from break_reminder import models  # noqa: F401
    SQLModel.metadata.create_all(engine)
    return engine

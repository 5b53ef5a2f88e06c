# lexideck/database.py
import os
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from lexideck.config import DATABASE_URL
from lexideck.core.log_manager import logger

connect_args = {}
engine_kwargs = {}
if DATABASE_URL.startswith("sqlite"):
    # check_same_thread=False is needed for SQLite with NiceGUI/FastAPI concurrency
    connect_args["check_same_thread"] = False
    if DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every checkout sees an empty database
        engine_kwargs["poolclass"] = StaticPool

engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args, **engine_kwargs)


def _ensure_sqlite_dir():
    if not DATABASE_URL.startswith("sqlite:///"):
        return
    db_file = DATABASE_URL[len("sqlite:///"):]
    directory = os.path.dirname(db_file)
    if db_file != ":memory:" and directory:
        os.makedirs(directory, exist_ok=True)


def init_db():
    """
    Creates the database tables based on the models.
    Should be called on app startup.
    """
    from lexideck.models import User, Folder, Deck, Flashcard, LearningSession # Import to register models
    _ensure_sqlite_dir()
    SQLModel.metadata.create_all(engine)
    logger.info(f"Database initialized at {engine.url}")

import os
import random
import tempfile

import pytest

# Settings are read at import time, so they must be in place first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "lexideck-test-logs"))
os.environ["ALLOWED_USERS"] = ""

from sqlmodel import SQLModel, Session

from lexideck.database import engine, init_db
from lexideck.models import Deck, Flashcard, User
from lexideck.schemas import FlashcardSnapshot


def _snapshots(count, deck_id=1, meanings=None):
    cards = []
    for i in range(1, count + 1):
        meaning = meanings[i - 1] if meanings else f"meaning {i}"
        cards.append(FlashcardSnapshot(id=i, deck_id=deck_id, word=f"word {i}", meaning=meaning))
    return cards


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def make_cards():
    """Factory for cards with ids 1..count, 'word N' / 'meaning N' unless meanings are given."""
    return _snapshots


@pytest.fixture
def cards():
    return _snapshots(10)


@pytest.fixture
def db():
    init_db()
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def user(db):
    with Session(engine) as session:
        record = User(email="learner@example.com", name="Learner")
        session.add(record)
        session.commit()
        session.refresh(record)
        return record


@pytest.fixture
def other_user(db):
    with Session(engine) as session:
        record = User(email="other@example.com", name="Other")
        session.add(record)
        session.commit()
        session.refresh(record)
        return record


@pytest.fixture
def deck(user):
    """A private deck of five cards owned by `user`."""
    with Session(engine) as session:
        record = Deck(owner_id=user.id, title="Animals", description="Basics")
        session.add(record)
        session.commit()
        session.refresh(record)
        for word, meaning in [
            ("perro", "dog"),
            ("gato", "cat"),
            ("pájaro", "bird"),
            ("caballo", "horse"),
            ("pez", "fish"),
        ]:
            session.add(Flashcard(deck_id=record.id, word=word, meaning=meaning))
        session.commit()
        session.refresh(record)
        return record

from typing import Optional, List
from datetime import datetime, timezone
from enum import Enum
from sqlmodel import SQLModel, Field, Relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionType(str, Enum):
    """
    The three learning modes. Fixed when a session starts.
    """
    FLASHCARD = "FLASHCARD"
    QUIZ = "QUIZ"
    MATCH = "MATCH"

# --- 1. ACCOUNTS ---

class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    name: str
    picture_url: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)

    # Relationships
    owned_decks: List["Deck"] = Relationship(back_populates="owner")
    folders: List["Folder"] = Relationship(back_populates="owner")

# --- 2. CONTENT (Folders > Decks > Flashcards) ---

class Folder(SQLModel, table=True):
    """
    Optional grouping of a user's decks. Deleting a folder keeps its decks.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    owner_id: int = Field(foreign_key="user.id", index=True)
    name: str
    created_at: datetime = Field(default_factory=_utcnow)

    # Relationships
    owner: User = Relationship(back_populates="folders")
    decks: List["Deck"] = Relationship(back_populates="folder")

class Deck(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    owner_id: int = Field(foreign_key="user.id", index=True)
    folder_id: Optional[int] = Field(default=None, foreign_key="folder.id")

    title: str
    description: Optional[str] = None
    is_public: bool = Field(default=False)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    # Relationships
    owner: User = Relationship(back_populates="owned_decks")
    folder: Optional[Folder] = Relationship(back_populates="decks")
    flashcards: List["Flashcard"] = Relationship(back_populates="deck")

class Flashcard(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    deck_id: int = Field(foreign_key="deck.id", index=True)

    word: str
    meaning: str
    example: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    # Relationships
    deck: Deck = Relationship(back_populates="flashcards")

# --- 3. HISTORY (one row per completed run) ---

class LearningSession(SQLModel, table=True):
    """
    The persisted summary of one completed learning session.
    Partial progress is never stored.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    deck_id: int = Field(foreign_key="deck.id", index=True)

    session_type: SessionType
    total: int
    correct: int
    created_at: datetime = Field(default_factory=_utcnow)

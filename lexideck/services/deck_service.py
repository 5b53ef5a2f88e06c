# lexideck/services/deck_service.py
from typing import List, Tuple, Optional, Dict
from datetime import datetime, timezone
from sqlmodel import Session, select, func, col, delete
from lexideck.database import engine
from lexideck.models import Deck, Flashcard, Folder, LearningSession, User
from lexideck.schemas import FlashcardSnapshot
from lexideck.core.log_manager import logger


class DeckNotFoundError(Exception):
    """Raised when a deck id does not exist."""
    pass


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip()

def _require_text(value: Optional[str], field: str) -> str:
    cleaned = _clean(value)
    if not cleaned:
        raise ValueError(f"{field} is required.")
    return cleaned

def _owned_deck(session: Session, user_id: int, deck_id: int) -> Optional[Deck]:
    deck = session.get(Deck, deck_id)
    if not deck or deck.owner_id != user_id:
        return None
    return deck

def _card_counts(session: Session, deck_ids: List[int]) -> Dict[int, int]:
    if not deck_ids:
        return {}
    statement = (
        select(Flashcard.deck_id, func.count(Flashcard.id))
        .where(col(Flashcard.deck_id).in_(deck_ids))
        .group_by(Flashcard.deck_id)
    )
    return dict(session.exec(statement).all())

def _serialize_deck(deck: Deck, card_count: int, author: Optional[str] = None) -> Dict:
    return {
        "id": deck.id,
        "title": deck.title,
        "description": deck.description,
        "is_public": deck.is_public,
        "folder_id": deck.folder_id,
        "author": author,
        "timestamp": deck.created_at.strftime("%Y-%m-%d"),
        "card_count": card_count,
    }

# --- FLASHCARD POOL (read side of the learning engine) ---

def load_flashcards(deck_id: int, user_id: Optional[int] = None) -> List[FlashcardSnapshot]:
    """
    Snapshots every flashcard of a deck in creation order.
    With user_id, the deck must be public or owned by that user.
    Raises DeckNotFoundError for an unknown or inaccessible deck.
    """
    with Session(engine) as session:
        deck = session.get(Deck, deck_id)
        if not deck:
            raise DeckNotFoundError(f"Deck {deck_id} not found.")
        if user_id is not None and not deck.is_public and deck.owner_id != user_id:
            logger.warning(f"User {user_id} denied access to private Deck {deck_id}")
            raise DeckNotFoundError(f"Deck {deck_id} not found.")

        statement = (
            select(Flashcard)
            .where(Flashcard.deck_id == deck_id)
            .order_by(col(Flashcard.created_at), col(Flashcard.id))
        )
        cards = session.exec(statement).all()
        return [
            FlashcardSnapshot(
                id=c.id, deck_id=c.deck_id, word=c.word, meaning=c.meaning, example=c.example
            )
            for c in cards
        ]

# --- DECKS ---

def create_deck(
    user_id: int,
    title: str,
    description: Optional[str] = None,
    is_public: bool = False,
    folder_id: Optional[int] = None
) -> Deck:
    with Session(engine) as session:
        if folder_id is not None:
            folder = session.get(Folder, folder_id)
            if not folder or folder.owner_id != user_id:
                raise ValueError("Folder not found.")

        deck = Deck(
            owner_id=user_id,
            title=_require_text(title, "Title"),
            description=_clean(description),
            is_public=is_public,
            folder_id=folder_id
        )
        session.add(deck)
        session.commit()
        session.refresh(deck)
        logger.info(f"Deck created: '{deck.title}' (ID: {deck.id}) by User {user_id}")
        return deck

def get_user_decks(user_id: int, folder_id: Optional[int] = None) -> List[Dict]:
    """
    Lists the user's own decks, newest first. With folder_id, only that folder.
    """
    with Session(engine) as session:
        statement = select(Deck).where(Deck.owner_id == user_id)
        if folder_id is not None:
            statement = statement.where(Deck.folder_id == folder_id)
        statement = statement.order_by(col(Deck.created_at).desc(), col(Deck.id).desc())

        decks = session.exec(statement).all()
        counts = _card_counts(session, [d.id for d in decks])
        return [_serialize_deck(d, counts.get(d.id, 0)) for d in decks]

def get_public_decks(
    page: int = 1,
    page_size: int = 9
) -> Tuple[List[dict], int]:
    """
    Retrieves a paginated list of public decks.
    Returns:
        Tuple containing:
        1. List of dicts with deck details and author name.
        2. Total count of public decks (for pagination math).
    """
    offset = (page - 1) * page_size

    with Session(engine) as session:
        count_statement = select(func.count(Deck.id)).where(Deck.is_public == True)
        total_count = session.exec(count_statement).one()

        # Join User to display the author's name without N+1 queries
        statement = (
            select(Deck, User.name)
            .join(User, Deck.owner_id == User.id)
            .where(Deck.is_public == True)
            .order_by(col(Deck.created_at).desc(), col(Deck.id).desc())
            .offset(offset)
            .limit(page_size)
        )
        results = session.exec(statement).all()
        counts = _card_counts(session, [deck.id for deck, _ in results])

        deck_list = [
            _serialize_deck(deck, counts.get(deck.id, 0), author=author_name)
            for deck, author_name in results
        ]
        return deck_list, total_count

def get_deck_overview(user_id: int, deck_id: int) -> Optional[Dict]:
    """
    Title and card count for the mode picker.
    Returns None unless the deck is public or owned by the user.
    """
    with Session(engine) as session:
        deck = session.get(Deck, deck_id)
        if not deck or (not deck.is_public and deck.owner_id != user_id):
            return None

        counts = _card_counts(session, [deck.id])
        overview = _serialize_deck(deck, counts.get(deck.id, 0))
        overview["is_owner"] = deck.owner_id == user_id
        return overview

def update_deck(
    user_id: int,
    deck_id: int,
    title: Optional[str] = None,
    description: Optional[str] = None,
    is_public: Optional[bool] = None
) -> Optional[Deck]:
    """Partial update. Fields left as None keep their value."""
    with Session(engine) as session:
        deck = _owned_deck(session, user_id, deck_id)
        if not deck:
            return None

        if title is not None:
            deck.title = _require_text(title, "Title")
        if description is not None:
            deck.description = _clean(description)
        if is_public is not None:
            deck.is_public = is_public
        deck.updated_at = datetime.now(timezone.utc)

        session.add(deck)
        session.commit()
        session.refresh(deck)
        return deck

def delete_deck(user_id: int, deck_id: int) -> bool:
    """Deletes an owned deck together with its flashcards and session history."""
    with Session(engine) as session:
        deck = _owned_deck(session, user_id, deck_id)
        if not deck:
            return False

        session.execute(delete(Flashcard).where(Flashcard.deck_id == deck_id))
        session.execute(delete(LearningSession).where(LearningSession.deck_id == deck_id))
        session.delete(deck)
        session.commit()
        logger.info(f"Deck {deck_id} deleted by User {user_id}")
        return True

def move_deck_to_folder(user_id: int, deck_id: int, folder_id: Optional[int]) -> bool:
    """Files a deck into a folder, or takes it out with folder_id=None."""
    with Session(engine) as session:
        deck = _owned_deck(session, user_id, deck_id)
        if not deck:
            return False

        if folder_id is not None:
            folder = session.get(Folder, folder_id)
            if not folder or folder.owner_id != user_id:
                return False

        deck.folder_id = folder_id
        session.add(deck)
        session.commit()
        return True

# --- FOLDERS ---

def create_folder(user_id: int, name: str) -> Folder:
    with Session(engine) as session:
        folder = Folder(owner_id=user_id, name=_require_text(name, "Folder name"))
        session.add(folder)
        session.commit()
        session.refresh(folder)
        return folder

def get_user_folders(user_id: int) -> List[Dict]:
    with Session(engine) as session:
        statement = (
            select(Folder, func.count(Deck.id))
            .join(Deck, Deck.folder_id == Folder.id, isouter=True)
            .where(Folder.owner_id == user_id)
            .group_by(Folder.id)
            .order_by(col(Folder.name))
        )
        return [
            {"id": folder.id, "name": folder.name, "deck_count": deck_count}
            for folder, deck_count in session.exec(statement).all()
        ]

def rename_folder(user_id: int, folder_id: int, name: str) -> bool:
    with Session(engine) as session:
        folder = session.get(Folder, folder_id)
        if not folder or folder.owner_id != user_id:
            return False

        folder.name = _require_text(name, "Folder name")
        session.add(folder)
        session.commit()
        return True

def delete_folder(user_id: int, folder_id: int) -> bool:
    """Removes the folder. Its decks stay, unfiled."""
    with Session(engine) as session:
        folder = session.get(Folder, folder_id)
        if not folder or folder.owner_id != user_id:
            return False

        for deck in session.exec(select(Deck).where(Deck.folder_id == folder_id)).all():
            deck.folder_id = None
            session.add(deck)
        session.delete(folder)
        session.commit()
        return True

# --- FLASHCARDS ---

def add_flashcard(
    user_id: int,
    deck_id: int,
    word: str,
    meaning: str,
    example: Optional[str] = None
) -> Optional[Flashcard]:
    with Session(engine) as session:
        deck = _owned_deck(session, user_id, deck_id)
        if not deck:
            return None

        card = Flashcard(
            deck_id=deck_id,
            word=_require_text(word, "Word"),
            meaning=_require_text(meaning, "Meaning"),
            example=_clean(example) or None
        )
        session.add(card)
        session.commit()
        session.refresh(card)
        return card

def update_flashcard(
    user_id: int,
    flashcard_id: int,
    word: Optional[str] = None,
    meaning: Optional[str] = None,
    example: Optional[str] = None
) -> Optional[Flashcard]:
    with Session(engine) as session:
        card = session.get(Flashcard, flashcard_id)
        if not card or not _owned_deck(session, user_id, card.deck_id):
            return None

        if word is not None:
            card.word = _require_text(word, "Word")
        if meaning is not None:
            card.meaning = _require_text(meaning, "Meaning")
        if example is not None:
            card.example = _clean(example) or None
        card.updated_at = datetime.now(timezone.utc)

        session.add(card)
        session.commit()
        session.refresh(card)
        return card

def delete_flashcard(user_id: int, flashcard_id: int) -> bool:
    with Session(engine) as session:
        card = session.get(Flashcard, flashcard_id)
        if not card or not _owned_deck(session, user_id, card.deck_id):
            return False

        session.delete(card)
        session.commit()
        return True

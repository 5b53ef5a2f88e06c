# lexideck/services/import_service.py
import html
import json
import bleach
from collections import Counter
from pydantic import ValidationError
from sqlmodel import Session
from lexideck.database import engine
from lexideck.models import Deck, Flashcard
from lexideck.schemas import DeckImportDTO
from lexideck.core.log_manager import logger

# Flashcards are plain text: every tag is stripped
ALLOWED_TAGS = []

def sanitize_text(content: str) -> str:
    if not content: return ""
    # Labels escape on render, so entities go back to plain characters
    return html.unescape(bleach.clean(content, tags=ALLOWED_TAGS, strip=True)).strip()

def parse_and_preview_deck(file_content: str) -> dict:
    """
    1. Parses JSON.
    2. Validates Schema.
    3. Sanitizes text immediately (so preview shows what will be saved).
    4. Calculates Stats.
    Returns: A dict containing the 'dto' and 'stats'.
    """
    try:
        data = json.loads(file_content)
    except json.JSONDecodeError:
        raise ValueError("Invalid JSON file format.")

    try:
        deck_dto = DeckImportDTO(**data)
    except (ValidationError, TypeError) as e:
        raise ValueError(f"Schema Error: {e}")

    for card in deck_dto.cards:
        card.word = sanitize_text(card.word)
        card.meaning = sanitize_text(card.meaning)
        if card.example:
            card.example = sanitize_text(card.example) or None

    empty_cards = [i for i, c in enumerate(deck_dto.cards, 1) if not c.word or not c.meaning]
    if empty_cards:
        raise ValueError(f"Cards {empty_cards} have an empty word or meaning after cleanup.")

    # --- Generate Stats for the Confirmation Step ---
    meaning_counts = Counter(c.meaning for c in deck_dto.cards)

    stats = {
        "card_count": len(deck_dto.cards),
        "with_example": sum(1 for c in deck_dto.cards if c.example),
        # Shared meanings make quiz options look alike
        "duplicate_meanings": [m for m, n in meaning_counts.most_common() if n > 1],
        "quiz_ready": len(deck_dto.cards) >= 4,
    }

    return {"dto": deck_dto, "stats": stats}

def save_dto_to_db(user_id: int, deck_dto: DeckImportDTO) -> Deck:
    """
    Takes the already validated DTO and commits it to SQL.
    """
    with Session(engine) as session:
        new_deck = Deck(
            owner_id=user_id,
            title=sanitize_text(deck_dto.title) or deck_dto.title,
            description=sanitize_text(deck_dto.description or ""),
            is_public=deck_dto.is_public
        )
        session.add(new_deck)
        session.commit()
        session.refresh(new_deck)

        for card_dto in deck_dto.cards:
            session.add(Flashcard(
                deck_id=new_deck.id,
                word=card_dto.word, # Already sanitized in parse step
                meaning=card_dto.meaning,
                example=card_dto.example
            ))

        session.commit()
        session.refresh(new_deck)
        logger.info(f"Import Success: Deck '{new_deck.title}' (ID: {new_deck.id}) with {len(deck_dto.cards)} cards")
        return new_deck

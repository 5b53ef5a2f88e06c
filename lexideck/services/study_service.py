# lexideck/services/study_service.py
"""
Flip-card study mode.

Every card is shown once in a random order and classified as known or
unknown. Classifying the last card completes the session.
"""
import random
from typing import List, Optional

from lexideck.core.exceptions import EmptyDeckError
from lexideck.core.log_manager import logger
from lexideck.core.shuffle import shuffled
from lexideck.schemas import FlashcardSnapshot, StudyItem, StudyState


def start_study_session(
    flashcards: List[FlashcardSnapshot],
    rng: Optional[random.Random] = None
) -> StudyState:
    """
    Builds a fresh study run over all cards in shuffled order.
    Raises EmptyDeckError when there is nothing to study.
    """
    if not flashcards:
        raise EmptyDeckError()

    items = tuple(StudyItem(flashcard=card) for card in shuffled(flashcards, rng))
    logger.info(f"Study session generated with {len(items)} cards.")
    return StudyState(items=items)


def flip(state: StudyState) -> StudyState:
    """Shows or hides the back of the current card."""
    if state.completed:
        return state
    return state.model_copy(update={"revealed": not state.revealed})


def _classify(state: StudyState, known: bool) -> StudyState:
    if state.completed:
        return state

    items = list(state.items)
    items[state.current_index] = items[state.current_index].model_copy(update={"known": known})

    next_index = state.current_index + 1
    known_count = state.known_count + (1 if known else 0)
    completed = next_index >= len(items)

    if completed:
        logger.info(f"Study session complete: {known_count}/{len(items)} known.")

    return state.model_copy(update={
        "items": tuple(items),
        "current_index": next_index,
        "known_count": known_count,
        "revealed": False,
        "completed": completed,
    })


def mark_known(state: StudyState) -> StudyState:
    return _classify(state, known=True)


def mark_unknown(state: StudyState) -> StudyState:
    return _classify(state, known=False)

# lexideck/services/learning_service.py
"""
Entry points used by the learning pages: load a deck, build the session for
the chosen mode, and reduce a finished session to its summary.
"""
import random
from typing import Callable, Dict, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from lexideck.core.exceptions import LoadFailureError
from lexideck.core.log_manager import logger
from lexideck.models import SessionType
from lexideck.schemas import FlashcardSnapshot, MatchState, QuizState, SessionSummary, StudyState
from lexideck.services.deck_service import DeckNotFoundError, load_flashcards
from lexideck.services.match_service import start_match_session
from lexideck.services.quiz_service import start_quiz_session
from lexideck.services.result_service import reduce_session
from lexideck.services.study_service import start_study_session

LearningState = Union[StudyState, QuizState, MatchState]
FlashcardLoader = Callable[[int, Optional[int]], List[FlashcardSnapshot]]

SESSION_GENERATORS: Dict[SessionType, Callable[..., LearningState]] = {
    SessionType.FLASHCARD: start_study_session,
    SessionType.QUIZ: start_quiz_session,
    SessionType.MATCH: start_match_session,
}


def load_session_cards(
    deck_id: int,
    user_id: Optional[int] = None,
    loader: FlashcardLoader = load_flashcards
) -> List[FlashcardSnapshot]:
    """
    Fetches the deck as seen by `user_id`, turning store errors into
    LoadFailureError. Private decks of other users count as missing.
    """
    try:
        return loader(deck_id, user_id)
    except DeckNotFoundError as e:
        logger.warning(f"Session start aborted, deck missing: {e}")
        raise LoadFailureError(str(e)) from e
    except SQLAlchemyError as e:
        logger.error(f"Session start aborted, could not load Deck {deck_id}: {e}")
        raise LoadFailureError(f"Could not load flashcards for deck {deck_id}.") from e


def start_learning_session(
    mode: SessionType,
    deck_id: int,
    user_id: Optional[int] = None,
    loader: FlashcardLoader = load_flashcards,
    rng: Optional[random.Random] = None
) -> LearningState:
    """
    Loads the deck and generates the session for `mode`.
    Raises LoadFailureError, EmptyDeckError or InsufficientCardsError before
    any state exists.
    """
    cards = load_session_cards(deck_id, user_id, loader)
    state = SESSION_GENERATORS[SessionType(mode)](cards, rng=rng)
    logger.info(f"Started {SessionType(mode).value} session on Deck {deck_id} with {len(cards)} cards.")
    return state


def finish_learning_session(state: LearningState, deck_id: int, user_id: Optional[int]) -> SessionSummary:
    """Summary of a completed session. Raises ValueError while still in progress."""
    outcome = state.outcome()
    return reduce_session(outcome.mode, outcome.total, outcome.correct, deck_id, user_id)

# lexideck/services/result_service.py
"""
Reduces a finished session to its summary and hands it to storage.

Saving is best effort: a missing user or a storage error is logged and the
session still counts as finished.
"""
import asyncio
from typing import Callable, Optional, Tuple

from lexideck.core.log_manager import logger
from lexideck.models import LearningSession, SessionType
from lexideck.schemas import SessionSummary
from lexideck.services.session_service import save_session

SessionSaver = Callable[[SessionSummary], LearningSession]

RESULT_HEADLINES = {
    SessionType.FLASHCARD: "result_title_flashcard",
    SessionType.QUIZ: "result_title_quiz",
    SessionType.MATCH: "result_title_match",
}


def reduce_session(
    mode: SessionType,
    total: int,
    correct: int,
    deck_id: int,
    user_id: Optional[int]
) -> SessionSummary:
    return SessionSummary(
        user_id=user_id,
        deck_id=deck_id,
        session_type=mode,
        score=correct,
        total_cards=total
    )


def clamp_score(correct: int, total: int) -> Tuple[int, int]:
    """Bounds figures taken from a URL: 0 <= correct <= total."""
    total = max(total, 0)
    return min(max(correct, 0), total), total


def score_percentage(correct: int, total: int) -> int:
    """Display only, never stored."""
    if total <= 0:
        return 0
    return round(correct / total * 100)


def persist_summary(
    summary: SessionSummary,
    saver: SessionSaver = save_session
) -> Optional[LearningSession]:
    if summary.user_id is None:
        logger.warning(f"Skipping save of {summary.session_type.value} session on Deck {summary.deck_id}: no user id.")
        return None

    try:
        return saver(summary)
    except Exception as e:
        logger.error(f"Failed to save {summary.session_type.value} session for User {summary.user_id}: {e}")
        return None


async def persist_summary_async(
    summary: SessionSummary,
    saver: SessionSaver = save_session
) -> Optional[LearningSession]:
    """Runs persist_summary off the event loop so the page can navigate right away."""
    return await asyncio.to_thread(persist_summary, summary, saver)


def result_headline(mode: SessionType) -> str:
    """Translation key for the result page title."""
    return RESULT_HEADLINES.get(mode, "result_title_default")


def result_message(percentage: int) -> str:
    """Translation key for the encouragement line."""
    if percentage == 100:
        return "result_msg_perfect"
    if percentage >= 80:
        return "result_msg_great"
    if percentage >= 60:
        return "result_msg_good"
    if percentage >= 40:
        return "result_msg_keep_practicing"
    return "result_msg_dont_give_up"

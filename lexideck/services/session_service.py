# lexideck/services/session_service.py
from typing import Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, col
from lexideck.database import engine
from lexideck.models import Deck, LearningSession
from lexideck.schemas import SessionSummary
from lexideck.core.exceptions import PersistenceFailureError
from lexideck.core.log_manager import logger


def save_session(summary: SessionSummary) -> LearningSession:
    """
    Writes one completed session to the history table.
    Raises PersistenceFailureError on any storage problem.
    """
    if summary.user_id is None:
        raise PersistenceFailureError("Cannot save a session without a user.")

    try:
        with Session(engine) as session:
            if not session.get(Deck, summary.deck_id):
                raise PersistenceFailureError(f"Deck {summary.deck_id} no longer exists.")

            record = LearningSession(
                user_id=summary.user_id,
                deck_id=summary.deck_id,
                session_type=summary.session_type,
                total=summary.total_cards,
                correct=summary.score
            )
            session.add(record)
            session.commit()
            session.refresh(record)
            logger.info(f"Saved {record.session_type.value} session {record.id} for User {record.user_id}: {record.correct}/{record.total}")
            return record
    except SQLAlchemyError as e:
        raise PersistenceFailureError(f"Database error while saving session: {e}") from e

def get_user_sessions(user_id: int, limit: int = 20) -> List[Dict]:
    """Session history with deck titles, most recent first."""
    with Session(engine) as session:
        statement = (
            select(LearningSession, Deck.title)
            .join(Deck, LearningSession.deck_id == Deck.id)
            .where(LearningSession.user_id == user_id)
            .order_by(col(LearningSession.created_at).desc(), col(LearningSession.id).desc())
            .limit(limit)
        )
        results = session.exec(statement).all()

        history = []
        for record, deck_title in results:
            history.append({
                "id": record.id,
                "deck_id": record.deck_id,
                "deck_title": deck_title,
                "type": record.session_type.value,
                "total": record.total,
                "correct": record.correct,
                "played_at": record.created_at.strftime("%Y-%m-%d %H:%M"),
            })
        return history

def get_deck_stats(user_id: int, deck_id: int) -> Dict:
    """
    Aggregates the user's history on one deck.
    Best score is the highest correct/total ratio, as a percentage.
    """
    with Session(engine) as session:
        statement = select(LearningSession).where(
            LearningSession.user_id == user_id,
            LearningSession.deck_id == deck_id
        )
        records = session.exec(statement).all()

        last_played: Optional[str] = "Never"
        best_score = 0
        if records:
            latest = max(records, key=lambda r: (r.created_at, r.id))
            last_played = latest.created_at.strftime("%Y-%m-%d")
            best_score = max(
                round(r.correct / r.total * 100) if r.total else 0
                for r in records
            )

        return {
            "total_sessions": len(records),
            "best_score": best_score,
            "last_played": last_played,
        }

# lexideck/services/match_service.py
"""
Word/meaning matching game.

The board holds a word column (deck order) and an independently shuffled
meaning column. The player keeps one selection per column; whenever both are
filled the pair is checked. The check is applied after a short feedback delay
through `resolve_match_check`, so the page decides when to call it while the
engine stays synchronous.
"""
import random
from typing import List, Optional

from lexideck.config import (
    MATCH_BOARD_LIMIT,
    MATCH_CONFIRM_DELAY,
    MATCH_REJECT_DELAY,
    MIN_CHOICE_CARDS,
)
from lexideck.core.exceptions import InsufficientCardsError
from lexideck.core.log_manager import logger
from lexideck.core.shuffle import shuffled
from lexideck.schemas import FlashcardSnapshot, MatchPair, MatchState, PairKind, PendingCheck


def select_working_set(
    flashcards: List[FlashcardSnapshot],
    limit: int = MATCH_BOARD_LIMIT
) -> List[FlashcardSnapshot]:
    """First `limit` cards in deck order. Keeps the board playable."""
    if len(flashcards) < MIN_CHOICE_CARDS:
        raise InsufficientCardsError(MIN_CHOICE_CARDS, len(flashcards))
    return list(flashcards[:min(limit, len(flashcards))])


def generate_pairs(
    working_set: List[FlashcardSnapshot],
    rng: Optional[random.Random] = None
) -> List[MatchPair]:
    word_pairs = [
        MatchPair(id=f"word-{card.id}", kind=PairKind.WORD, content=card.word, flashcard_id=card.id)
        for card in working_set
    ]
    meaning_pairs = [
        MatchPair(id=f"meaning-{card.id}", kind=PairKind.MEANING, content=card.meaning, flashcard_id=card.id)
        for card in working_set
    ]
    return word_pairs + shuffled(meaning_pairs, rng)


def start_match_session(
    flashcards: List[FlashcardSnapshot],
    rng: Optional[random.Random] = None,
    limit: int = MATCH_BOARD_LIMIT
) -> MatchState:
    working_set = select_working_set(flashcards, limit)
    pairs = generate_pairs(working_set, rng)
    logger.info(f"Match board generated with {len(working_set)} cards.")
    return MatchState(pairs=tuple(pairs), total=len(working_set))


def _with_check(state: MatchState, word_id: Optional[str], meaning_id: Optional[str]) -> MatchState:
    """
    Stores the new selections. Any change replaces the pending check; a new
    one is scheduled when both columns are filled.
    """
    update = {
        "selected_word_id": word_id,
        "selected_meaning_id": meaning_id,
        "pending": None,
    }
    if word_id and meaning_id:
        attempt = state.attempts + 1
        is_match = state.get_pair(word_id).flashcard_id == state.get_pair(meaning_id).flashcard_id
        update["attempts"] = attempt
        update["pending"] = PendingCheck(
            attempt=attempt,
            word_pair_id=word_id,
            meaning_pair_id=meaning_id,
            is_match=is_match,
            delay=MATCH_CONFIRM_DELAY if is_match else MATCH_REJECT_DELAY,
        )
    return state.model_copy(update=update)


def select_pair(state: MatchState, pair_id: str) -> MatchState:
    """
    Handles a tap on a tile.
    - matched tiles (and unknown ids) are ignored
    - tapping the current selection of a column clears it
    - otherwise the tile becomes that column's selection
    """
    if state.completed:
        return state

    pair = state.get_pair(pair_id)
    if pair is None or pair.matched:
        return state

    word_id, meaning_id = state.selected_word_id, state.selected_meaning_id
    if pair.kind == PairKind.WORD:
        word_id = None if word_id == pair.id else pair.id
    else:
        meaning_id = None if meaning_id == pair.id else pair.id

    return _with_check(state, word_id, meaning_id)


def resolve_match_check(state: MatchState, attempt: int) -> MatchState:
    """
    Applies the check scheduled for `attempt` once its delay has passed.
    Stale checks (the selection changed in the meantime) are ignored.
    """
    pending = state.pending
    if state.completed or pending is None or pending.attempt != attempt:
        return state

    update = {
        "selected_word_id": None,
        "selected_meaning_id": None,
        "pending": None,
    }
    if pending.is_match:
        matched_ids = {pending.word_pair_id, pending.meaning_pair_id}
        pairs = tuple(
            p.model_copy(update={"matched": True}) if p.id in matched_ids else p
            for p in state.pairs
        )
        # Count from the updated board, not from the previous counter
        matched_count = sum(1 for p in pairs if p.kind == PairKind.WORD and p.matched)
        update["pairs"] = pairs
        update["matched_count"] = matched_count
        update["completed"] = matched_count == state.total
        if update["completed"]:
            logger.info(f"Match game complete: {state.total} pairs in {state.attempts} attempts.")

    return state.model_copy(update=update)


def is_selected(state: MatchState, pair_id: str) -> bool:
    return pair_id in (state.selected_word_id, state.selected_meaning_id)

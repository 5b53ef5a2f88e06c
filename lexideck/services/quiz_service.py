# lexideck/services/quiz_service.py
"""
Multiple-choice quiz mode.

One question per card, asked in random order. Each question offers the card's
meaning plus three meanings taken from other cards.
"""
import random
from typing import List, Optional

from lexideck.config import MIN_CHOICE_CARDS, QUIZ_OPTION_COUNT
from lexideck.core.exceptions import InsufficientCardsError
from lexideck.core.log_manager import logger
from lexideck.core.shuffle import shuffled, take_random, unique
from lexideck.schemas import FlashcardSnapshot, QuizQuestion, QuizState

DISTRACTOR_COUNT = QUIZ_OPTION_COUNT - 1


def _pick_distractors(
    card: FlashcardSnapshot,
    flashcards: List[FlashcardSnapshot],
    rng: Optional[random.Random]
) -> List[str]:
    """
    Picks meanings of other cards that differ from the card's own meaning.
    Distinct strings are preferred; repeats are used only when the deck holds
    fewer than three distinct alternatives.
    """
    alternatives = [
        c.meaning for c in flashcards
        if c.id != card.id and c.meaning != card.meaning
    ]
    if not alternatives:
        raise InsufficientCardsError(
            MIN_CHOICE_CARDS, len(flashcards),
            message=f"No other card has a meaning different from '{card.word}'."
        )

    distractors = take_random(unique(alternatives), DISTRACTOR_COUNT, rng)
    while len(distractors) < DISTRACTOR_COUNT:
        logger.warning(f"Padding distractors for '{card.word}' with repeated meanings.")
        distractors.extend(take_random(alternatives, DISTRACTOR_COUNT - len(distractors), rng))
    return distractors


def generate_questions(
    flashcards: List[FlashcardSnapshot],
    rng: Optional[random.Random] = None
) -> List[QuizQuestion]:
    """Builds one question for every card in the deck, in shuffled order."""
    if len(flashcards) < MIN_CHOICE_CARDS:
        raise InsufficientCardsError(MIN_CHOICE_CARDS, len(flashcards))

    questions = []
    for card in shuffled(flashcards, rng):
        distractors = _pick_distractors(card, flashcards, rng)
        options = shuffled(distractors + [card.meaning], rng)
        questions.append(QuizQuestion(
            flashcard=card,
            options=tuple(options),
            correct_answer=card.meaning,
        ))
    return questions


def start_quiz_session(
    flashcards: List[FlashcardSnapshot],
    rng: Optional[random.Random] = None
) -> QuizState:
    questions = generate_questions(flashcards, rng)
    logger.info(f"Quiz session generated with {len(questions)} questions.")
    return QuizState(questions=tuple(questions))


def select_answer(state: QuizState, answer: str) -> QuizState:
    """
    Locks in an answer for the current question. Only the first selection
    counts; later calls for the same question change nothing.
    """
    if state.completed or state.show_result:
        return state

    question = state.current_question
    is_correct = answer == question.correct_answer
    return state.model_copy(update={
        "selected_answer": answer,
        "show_result": True,
        "correct_count": state.correct_count + (1 if is_correct else 0),
    })


def advance_question(state: QuizState) -> QuizState:
    """
    Moves past an answered question, completing the quiz after the last one.
    Unanswered questions cannot be skipped.
    """
    if state.completed or not state.show_result:
        return state

    if state.is_last_question:
        logger.info(f"Quiz complete: {state.correct_count}/{len(state.questions)} correct.")
        return state.model_copy(update={"completed": True})

    return state.model_copy(update={
        "current_index": state.current_index + 1,
        "selected_answer": None,
        "show_result": False,
    })


def is_answer_correct(state: QuizState) -> Optional[bool]:
    """Feedback for the current question, None while unanswered."""
    if not state.show_result or state.current_question is None:
        return None
    return state.selected_answer == state.current_question.correct_answer

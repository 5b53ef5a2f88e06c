import pytest

from lexideck.core.exceptions import InsufficientCardsError
from lexideck.services.quiz_service import (
    advance_question,
    generate_questions,
    is_answer_correct,
    select_answer,
    start_quiz_session,
)


def _wrong_option(state):
    question = state.current_question
    return next(o for o in question.options if o != question.correct_answer)


def test_one_question_per_card(cards, rng):
    questions = generate_questions(cards, rng)

    assert sorted(q.flashcard.id for q in questions) == [c.id for c in cards]


def test_options_hold_the_answer_once_and_distinct_distractors(cards, rng):
    for question in generate_questions(cards, rng):
        assert len(question.options) == 4
        assert question.options.count(question.correct_answer) == 1
        assert question.correct_answer == question.flashcard.meaning
        assert len(set(question.options)) == 4


def test_distractors_come_from_other_cards(cards, rng):
    meanings = {c.meaning for c in cards}
    for question in generate_questions(cards, rng):
        assert set(question.options) <= meanings


def test_shared_meanings_never_duplicate_the_answer(make_cards, rng):
    deck = make_cards(5, meanings=["dog", "dog", "cat", "bird", "fish"])

    for question in generate_questions(deck, rng):
        assert question.options.count(question.correct_answer) == 1
        assert len(set(question.options)) == 4


def test_distractors_repeat_when_too_few_distinct_meanings(make_cards, rng):
    deck = make_cards(4, meanings=["dog", "cat", "cat", "cat"])

    questions = generate_questions(deck, rng)

    dog = next(q for q in questions if q.correct_answer == "dog")
    assert sorted(dog.options) == ["cat", "cat", "cat", "dog"]


def test_no_alternative_meaning(make_cards):
    with pytest.raises(InsufficientCardsError):
        generate_questions(make_cards(4, meanings=["dog"] * 4))


@pytest.mark.parametrize("count", [0, 1, 3])
def test_too_few_cards(make_cards, count):
    with pytest.raises(InsufficientCardsError) as excinfo:
        start_quiz_session(make_cards(count))

    assert excinfo.value.required == 4
    assert excinfo.value.available == count


def test_correct_answer_counts(cards, rng):
    state = start_quiz_session(cards, rng)
    state = select_answer(state, state.current_question.correct_answer)

    assert state.show_result is True
    assert state.correct_count == 1
    assert is_answer_correct(state) is True


def test_wrong_answer_does_not_count(cards, rng):
    state = start_quiz_session(cards, rng)
    state = select_answer(state, _wrong_option(state))

    assert state.correct_count == 0
    assert is_answer_correct(state) is False


def test_second_selection_changes_nothing(cards, rng):
    state = start_quiz_session(cards, rng)
    wrong = _wrong_option(state)
    answered = select_answer(state, wrong)

    again = select_answer(answered, answered.current_question.correct_answer)

    assert again == answered
    assert again.correct_count == 0
    assert again.selected_answer == wrong


def test_cannot_skip_an_unanswered_question(cards, rng):
    state = start_quiz_session(cards, rng)

    assert advance_question(state) == state
    assert is_answer_correct(state) is None


def test_advance_resets_selection(cards, rng):
    state = start_quiz_session(cards, rng)
    state = advance_question(select_answer(state, _wrong_option(state)))

    assert state.current_index == 1
    assert state.selected_answer is None
    assert state.show_result is False


def test_full_quiz_completes_after_last_question(make_cards, rng):
    state = start_quiz_session(make_cards(4), rng)
    for _ in range(4):
        assert state.completed is False
        state = advance_question(select_answer(state, state.current_question.correct_answer))

    assert state.completed is True
    assert state.current_index == 3
    outcome = state.outcome()
    assert (outcome.total, outcome.correct) == (4, 4)

    assert select_answer(state, "anything") == state
    assert advance_question(state) == state


def test_repeated_generation_has_the_same_shape(cards):
    first, second = generate_questions(cards), generate_questions(cards)

    assert len(first) == len(second) == len(cards)
    assert [len(q.options) for q in first] == [len(q.options) for q in second]
    assert {q.flashcard.id for q in first} == {q.flashcard.id for q in second}


def test_four_card_deck_needs_no_repeated_distractors(make_cards, rng):
    for question in generate_questions(make_cards(4), rng):
        assert len(set(question.options)) == 4
        assert question.options.count(question.correct_answer) == 1

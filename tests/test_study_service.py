import pytest

from lexideck.core.exceptions import EmptyDeckError
from lexideck.services.study_service import flip, mark_known, mark_unknown, start_study_session


def test_start_uses_every_card_once(cards, rng):
    state = start_study_session(cards, rng)

    assert sorted(item.flashcard.id for item in state.items) == [c.id for c in cards]
    assert state.current_index == 0
    assert state.revealed is False
    assert state.known_count == 0
    assert state.completed is False
    assert all(item.known is None for item in state.items)


def test_start_with_empty_deck():
    with pytest.raises(EmptyDeckError):
        start_study_session([])


def test_flip_toggles_and_is_immutable(cards, rng):
    state = start_study_session(cards, rng)
    flipped = flip(state)

    assert flipped.revealed is True
    assert state.revealed is False
    assert flip(flipped).revealed is False


def test_mark_known_advances_and_resets_reveal(cards, rng):
    state = flip(start_study_session(cards, rng))
    first_id = state.current_item.flashcard.id

    state = mark_known(state)

    assert state.current_index == 1
    assert state.known_count == 1
    assert state.revealed is False
    assert state.items[0].flashcard.id == first_id
    assert state.items[0].known is True


def test_mark_unknown_keeps_count(cards, rng):
    state = mark_unknown(start_study_session(cards, rng))

    assert state.known_count == 0
    assert state.items[0].known is False
    assert state.current_index == 1


def test_five_cards_three_known(make_cards):
    state = start_study_session(make_cards(5))
    for action in (mark_known, mark_unknown, mark_known, mark_unknown, mark_known):
        state = action(state)

    assert state.completed is True
    assert state.known_count == 3
    outcome = state.outcome()
    assert (outcome.total, outcome.correct, outcome.percentage) == (5, 3, 60)


def test_single_card_completes_after_one_classification(make_cards):
    state = mark_unknown(start_study_session(make_cards(1)))

    assert state.completed is True
    assert state.outcome().correct == 0


def test_transitions_after_completion_do_nothing(make_cards):
    done = mark_known(start_study_session(make_cards(1)))

    assert mark_known(done) == done
    assert mark_unknown(done) == done
    assert flip(done) == done


def test_outcome_while_in_progress(cards):
    with pytest.raises(ValueError):
        start_study_session(cards).outcome()


def test_repeated_starts_have_the_same_shape(cards):
    first, second = start_study_session(cards), start_study_session(cards)

    assert len(first.items) == len(second.items) == len(cards)
    assert {i.flashcard.id for i in first.items} == {i.flashcard.id for i in second.items}

import pytest

from lexideck.config import MATCH_CONFIRM_DELAY, MATCH_REJECT_DELAY
from lexideck.core.exceptions import InsufficientCardsError
from lexideck.schemas import PairKind
from lexideck.services.match_service import (
    is_selected,
    resolve_match_check,
    select_pair,
    select_working_set,
    start_match_session,
)


def _pick(state, word_card, meaning_card):
    state = select_pair(state, f"word-{word_card}")
    return select_pair(state, f"meaning-{meaning_card}")


def test_working_set_is_capped_at_eight(cards):
    working_set = select_working_set(cards)

    assert [c.id for c in working_set] == [1, 2, 3, 4, 5, 6, 7, 8]


def test_small_deck_uses_every_card(make_cards):
    assert len(select_working_set(make_cards(5))) == 5


def test_too_few_cards(make_cards):
    with pytest.raises(InsufficientCardsError):
        start_match_session(make_cards(3))


def test_board_layout(cards, rng):
    state = start_match_session(cards, rng)

    assert state.total == 8
    assert [p.id for p in state.word_pairs] == [f"word-{i}" for i in range(1, 9)]
    assert sorted(p.flashcard_id for p in state.meaning_pairs) == list(range(1, 9))
    assert all(p.kind == PairKind.MEANING for p in state.meaning_pairs)
    assert not any(p.matched for p in state.pairs)
    assert (state.matched_count, state.attempts) == (0, 0)


def test_selecting_twice_clears_the_slot(cards, rng):
    state = select_pair(start_match_session(cards, rng), "word-1")
    assert is_selected(state, "word-1")

    state = select_pair(state, "word-1")

    assert state.selected_word_id is None
    assert state.pending is None


def test_selecting_another_word_replaces_it(cards, rng):
    state = start_match_session(cards, rng)
    state = select_pair(select_pair(state, "word-1"), "word-2")

    assert state.selected_word_id == "word-2"
    assert not is_selected(state, "word-1")


def test_both_slots_schedule_a_check(cards, rng):
    state = _pick(start_match_session(cards, rng), 1, 1)

    assert state.attempts == 1
    assert state.pending.is_match is True
    assert state.pending.delay == MATCH_CONFIRM_DELAY
    # Nothing is matched until the check resolves
    assert state.matched_count == 0


def test_correct_pair_is_matched_on_resolve(cards, rng):
    state = _pick(start_match_session(cards, rng), 2, 2)
    state = resolve_match_check(state, state.pending.attempt)

    assert state.get_pair("word-2").matched is True
    assert state.get_pair("meaning-2").matched is True
    assert state.matched_count == 1
    assert state.selected_word_id is None
    assert state.selected_meaning_id is None
    assert state.pending is None


def test_wrong_pair_only_clears_selection(cards, rng):
    state = _pick(start_match_session(cards, rng), 1, 2)
    assert state.pending.is_match is False
    assert state.pending.delay == MATCH_REJECT_DELAY

    state = resolve_match_check(state, state.pending.attempt)

    assert state.matched_count == 0
    assert state.attempts == 1
    assert state.selected_word_id is None
    assert not any(p.matched for p in state.pairs)


def test_stale_check_is_ignored(cards, rng):
    state = _pick(start_match_session(cards, rng), 1, 2)
    stale = state.pending.attempt

    state = select_pair(state, "meaning-1")
    assert state.pending.attempt == stale + 1

    assert resolve_match_check(state, stale) == state


def test_changing_selection_cancels_pending_check(cards, rng):
    state = _pick(start_match_session(cards, rng), 1, 1)
    state = select_pair(state, "meaning-1")

    assert state.pending is None
    assert state.selected_meaning_id is None


def test_matched_pairs_ignore_taps(cards, rng):
    state = _pick(start_match_session(cards, rng), 1, 1)
    state = resolve_match_check(state, state.pending.attempt)

    assert select_pair(state, "word-1") == state
    assert select_pair(state, "meaning-1") == state
    assert select_pair(state, "word-99") == state


def test_full_game_with_mistakes(make_cards, rng):
    state = start_match_session(make_cards(4), rng)

    state = _pick(state, 1, 3)
    state = resolve_match_check(state, state.pending.attempt)
    for card in (1, 2, 3, 4):
        state = _pick(state, card, card)
        state = resolve_match_check(state, state.pending.attempt)

    assert state.completed is True
    assert state.matched_count == 4
    assert state.attempts == 5
    outcome = state.outcome()
    assert (outcome.total, outcome.correct) == (4, 4)
    assert select_pair(state, "word-1") == state


def test_repeated_boards_have_the_same_shape(cards):
    first, second = start_match_session(cards), start_match_session(cards)

    assert first.total == second.total == 8
    assert len(first.pairs) == len(second.pairs) == 16
    assert len(first.word_pairs) == len(second.word_pairs) == 8
    assert len(first.meaning_pairs) == len(second.meaning_pairs) == 8
    assert {p.id for p in first.pairs} == {p.id for p in second.pairs}

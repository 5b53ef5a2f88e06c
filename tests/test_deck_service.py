import pytest

from lexideck.models import SessionType
from lexideck.services import deck_service
from lexideck.services.deck_service import DeckNotFoundError
from lexideck.services.result_service import reduce_session
from lexideck.services.session_service import get_user_sessions, save_session


def test_load_flashcards_in_creation_order(deck):
    cards = deck_service.load_flashcards(deck.id)

    assert [c.word for c in cards] == ["perro", "gato", "pájaro", "caballo", "pez"]
    assert all(c.deck_id == deck.id for c in cards)


def test_load_flashcards_unknown_deck(db):
    with pytest.raises(DeckNotFoundError):
        deck_service.load_flashcards(12345)


def test_create_deck_strips_and_requires_title(user):
    deck = deck_service.create_deck(user.id, "  Verbs  ", description=" irregular ")

    assert deck.title == "Verbs"
    assert deck.description == "irregular"
    with pytest.raises(ValueError):
        deck_service.create_deck(user.id, "   ")


def test_create_deck_in_foreign_folder(user, other_user):
    folder = deck_service.create_folder(other_user.id, "Theirs")

    with pytest.raises(ValueError):
        deck_service.create_deck(user.id, "Mine", folder_id=folder.id)


def test_user_decks_with_card_counts(user, deck):
    deck_service.create_deck(user.id, "Empty")

    decks = deck_service.get_user_decks(user.id)

    assert [d["title"] for d in decks] == ["Empty", "Animals"]
    assert {d["title"]: d["card_count"] for d in decks} == {"Empty": 0, "Animals": 5}


def test_public_decks_are_paginated(user, other_user):
    for i in range(3):
        deck_service.create_deck(user.id, f"Public {i}", is_public=True)
    deck_service.create_deck(other_user.id, "Private")

    first_page, total = deck_service.get_public_decks(page=1, page_size=2)
    second_page, _ = deck_service.get_public_decks(page=2, page_size=2)

    assert total == 3
    assert [d["title"] for d in first_page] == ["Public 2", "Public 1"]
    assert [d["title"] for d in second_page] == ["Public 0"]
    assert first_page[0]["author"] == "Learner"


def test_overview_access(user, other_user, deck):
    assert deck_service.get_deck_overview(user.id, deck.id)["is_owner"] is True
    assert deck_service.get_deck_overview(other_user.id, deck.id) is None

    deck_service.update_deck(user.id, deck.id, is_public=True)
    overview = deck_service.get_deck_overview(other_user.id, deck.id)
    assert overview["is_owner"] is False
    assert overview["card_count"] == 5


def test_update_deck_is_partial(user, deck):
    updated = deck_service.update_deck(user.id, deck.id, title="Pets")

    assert updated.title == "Pets"
    assert updated.description == "Basics"


def test_only_owner_can_update_or_delete(other_user, deck):
    assert deck_service.update_deck(other_user.id, deck.id, title="Hijacked") is None
    assert deck_service.delete_deck(other_user.id, deck.id) is False


def test_delete_deck_removes_cards_and_history(user, deck):
    save_session(reduce_session(SessionType.QUIZ, 5, 5, deck.id, user.id))

    assert deck_service.delete_deck(user.id, deck.id) is True

    with pytest.raises(DeckNotFoundError):
        deck_service.load_flashcards(deck.id)
    assert get_user_sessions(user.id) == []


def test_folders(user, deck):
    folder = deck_service.create_folder(user.id, "Spanish")

    assert deck_service.move_deck_to_folder(user.id, deck.id, folder.id) is True
    assert [d["id"] for d in deck_service.get_user_decks(user.id, folder_id=folder.id)] == [deck.id]
    assert deck_service.get_user_folders(user.id) == [
        {"id": folder.id, "name": "Spanish", "deck_count": 1}
    ]

    assert deck_service.rename_folder(user.id, folder.id, "Español") is True
    assert deck_service.get_user_folders(user.id)[0]["name"] == "Español"


def test_empty_folder_counts_zero(user):
    deck_service.create_folder(user.id, "Later")

    assert deck_service.get_user_folders(user.id)[0]["deck_count"] == 0


def test_delete_folder_keeps_decks(user, deck):
    folder = deck_service.create_folder(user.id, "Spanish")
    deck_service.move_deck_to_folder(user.id, deck.id, folder.id)

    assert deck_service.delete_folder(user.id, folder.id) is True

    decks = deck_service.get_user_decks(user.id)
    assert [d["id"] for d in decks] == [deck.id]
    assert decks[0]["folder_id"] is None
    assert deck_service.get_user_folders(user.id) == []


def test_folder_of_another_user(user, other_user, deck):
    folder = deck_service.create_folder(other_user.id, "Theirs")

    assert deck_service.move_deck_to_folder(user.id, deck.id, folder.id) is False
    assert deck_service.rename_folder(user.id, folder.id, "Mine") is False
    assert deck_service.delete_folder(user.id, folder.id) is False


def test_flashcard_crud(user, deck):
    card = deck_service.add_flashcard(user.id, deck.id, " ratón ", "mouse", example="  ")
    assert (card.word, card.meaning, card.example) == ("ratón", "mouse", None)

    card = deck_service.update_flashcard(user.id, card.id, meaning="mouse (animal)")
    assert card.word == "ratón"
    assert card.meaning == "mouse (animal)"

    assert len(deck_service.load_flashcards(deck.id)) == 6
    assert deck_service.delete_flashcard(user.id, card.id) is True
    assert len(deck_service.load_flashcards(deck.id)) == 5


def test_flashcard_needs_word_and_meaning(user, deck):
    with pytest.raises(ValueError):
        deck_service.add_flashcard(user.id, deck.id, "ratón", " ")


def test_flashcards_of_another_users_deck(other_user, deck):
    card_id = deck_service.load_flashcards(deck.id)[0].id

    assert deck_service.add_flashcard(other_user.id, deck.id, "a", "b") is None
    assert deck_service.update_flashcard(other_user.id, card_id, word="x") is None
    assert deck_service.delete_flashcard(other_user.id, card_id) is False


def test_load_flashcards_hides_private_decks_from_others(user, other_user, deck):
    assert len(deck_service.load_flashcards(deck.id, user.id)) == 5
    with pytest.raises(DeckNotFoundError):
        deck_service.load_flashcards(deck.id, other_user.id)

    deck_service.update_deck(user.id, deck.id, is_public=True)
    assert len(deck_service.load_flashcards(deck.id, other_user.id)) == 5

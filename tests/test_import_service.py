import json

import pytest

from lexideck.services.deck_service import get_user_decks, load_flashcards
from lexideck.services.import_service import parse_and_preview_deck, sanitize_text, save_dto_to_db


def _deck_json(cards, **extra):
    return json.dumps({"title": "Colours", "cards": cards, **extra})


def test_sanitize_text_strips_markup():
    assert sanitize_text("<b>rojo</b>") == "rojo"
    assert sanitize_text("  verde ") == "verde"
    assert sanitize_text("") == ""
    assert sanitize_text(None) == ""


def test_sanitize_text_keeps_plain_ampersands():
    assert sanitize_text("black & white") == "black & white"


def test_preview_stats():
    content = _deck_json([
        {"word": "rojo", "meaning": "red", "example": "El coche es rojo."},
        {"word": "azul", "meaning": "blue"},
        {"word": "celeste", "meaning": "blue"},
    ])

    preview = parse_and_preview_deck(content)

    assert preview["dto"].title == "Colours"
    assert preview["stats"] == {
        "card_count": 3,
        "with_example": 1,
        "duplicate_meanings": ["blue"],
        "quiz_ready": False,
    }


def test_preview_sanitizes_cards():
    preview = parse_and_preview_deck(_deck_json([
        {"word": "<i>rojo</i>", "meaning": "<script>x</script>red", "example": "<b></b>"},
    ]))

    card = preview["dto"].cards[0]
    assert card.word == "rojo"
    assert "<" not in card.meaning
    assert card.example is None


@pytest.mark.parametrize("content", [
    "not json",
    json.dumps([1, 2, 3]),
    json.dumps({"title": "No cards", "cards": []}),
    json.dumps({"cards": [{"word": "a", "meaning": "b"}]}),
    json.dumps({"title": "Bad card", "cards": [{"word": "a"}]}),
])
def test_preview_rejects_invalid_files(content):
    with pytest.raises(ValueError):
        parse_and_preview_deck(content)


def test_preview_rejects_cards_that_clean_to_nothing():
    with pytest.raises(ValueError):
        parse_and_preview_deck(_deck_json([{"word": "<b></b>", "meaning": "red"}]))


def test_preview_limits_deck_size():
    cards = [{"word": f"w{i}", "meaning": f"m{i}"} for i in range(501)]

    with pytest.raises(ValueError):
        parse_and_preview_deck(_deck_json(cards))


def test_save_imported_deck(user):
    preview = parse_and_preview_deck(_deck_json(
        [{"word": f"w{i}", "meaning": f"m{i}"} for i in range(4)],
        description="Imported",
        is_public=True,
    ))

    deck = save_dto_to_db(user.id, preview["dto"])

    assert deck.owner_id == user.id
    assert deck.is_public is True
    assert [c.word for c in load_flashcards(deck.id)] == ["w0", "w1", "w2", "w3"]
    assert get_user_decks(user.id)[0]["card_count"] == 4

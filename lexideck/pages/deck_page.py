from functools import partial
from nicegui import ui, app
from lexideck.config import MIN_CHOICE_CARDS
from lexideck.core.locale_manager import T
from lexideck.core.log_manager import logger
from lexideck.models import SessionType
from lexideck.pages.common import LEARNING_ROUTES, setup_page, create_navbar
from lexideck.services.deck_service import (
    DeckNotFoundError,
    add_flashcard,
    delete_flashcard,
    get_deck_overview,
    load_flashcards,
    update_deck,
    update_flashcard,
)
from lexideck.services.session_service import get_deck_stats

MODE_CARDS = [
    (SessionType.FLASHCARD, 'style', "mode_flashcard_desc"),
    (SessionType.QUIZ, 'quiz', "mode_quiz_desc"),
    (SessionType.MATCH, 'extension', "mode_match_desc"),
]

@ui.page('/app/deck')
def deck_page(deck_id: int = None):
    if not setup_page(restricted=True):
        return

    user_id = app.storage.user.get('id')
    overview = get_deck_overview(user_id, deck_id) if deck_id else None
    if not overview:
        logger.warning(f"Deck {deck_id} not accessible for User {user_id}")
        ui.notify(T("access_denied"), type='negative')
        ui.navigate.to('/app')
        return

    create_navbar()

    editing = {"card_id": None}

    # --- Card editor dialog ---
    with ui.dialog() as card_dialog, ui.card().classes('bg-gray-900 border border-white/10 w-[28rem]'):
        card_dialog_title = ui.label().classes('text-xl font-bold text-white')
        word_input = ui.input(T("word")).classes('w-full')
        meaning_input = ui.input(T("meaning")).classes('w-full')
        example_input = ui.textarea(T("example_optional")).classes('w-full')
        with ui.row().classes('w-full justify-end gap-4 mt-4'):
            ui.button(T("cancel"), on_click=card_dialog.close).props('flat color=white')
            ui.button(T("save"), on_click=lambda: save_card()).props('color=indigo-7')

    # --- Deck settings dialog ---
    with ui.dialog() as settings_dialog, ui.card().classes('bg-gray-900 border border-white/10 w-96'):
        ui.label(T("edit_deck")).classes('text-xl font-bold text-white')
        title_input = ui.input(T("deck_title"), value=overview['title']).classes('w-full')
        desc_input = ui.textarea(T("deck_description"), value=overview['description'] or "").classes('w-full')
        public_switch = ui.switch(T("make_public"), value=overview['is_public'])
        with ui.row().classes('w-full justify-end gap-4 mt-4'):
            ui.button(T("cancel"), on_click=settings_dialog.close).props('flat color=white')
            ui.button(T("save"), on_click=lambda: save_settings()).props('color=indigo-7')

    def open_card_dialog(card=None):
        editing["card_id"] = card.id if card else None
        word_input.value = card.word if card else ""
        meaning_input.value = card.meaning if card else ""
        example_input.value = (card.example or "") if card else ""
        card_dialog_title.set_text(T("edit_flashcard") if card else T("add_flashcard"))
        card_dialog.open()

    def save_card():
        try:
            if editing["card_id"]:
                result = update_flashcard(user_id, editing["card_id"], word_input.value,
                                          meaning_input.value, example_input.value)
            else:
                result = add_flashcard(user_id, deck_id, word_input.value,
                                       meaning_input.value, example_input.value)
        except ValueError as e:
            ui.notify(str(e), type='warning')
            return
        if not result:
            ui.notify(T("action_failed"), type='negative')
            return
        card_dialog.close()
        render_content.refresh()

    def remove_card(card_id):
        if not delete_flashcard(user_id, card_id):
            ui.notify(T("action_failed"), type='negative')
        render_content.refresh()

    def save_settings():
        try:
            deck = update_deck(user_id, deck_id, title_input.value, desc_input.value, public_switch.value)
        except ValueError as e:
            ui.notify(str(e), type='warning')
            return
        if not deck:
            ui.notify(T("action_failed"), type='negative')
            return
        overview.update(title=deck.title, description=deck.description, is_public=deck.is_public)
        settings_dialog.close()
        render_content.refresh()

    def start_mode(mode: SessionType):
        ui.navigate.to(f'{LEARNING_ROUTES[mode]}?deck_id={deck_id}')

    @ui.refreshable
    def render_content():
        try:
            cards = load_flashcards(deck_id)
        except DeckNotFoundError:
            ui.navigate.to('/app')
            return
        stats = get_deck_stats(user_id, deck_id)

        with ui.row().classes('w-full justify-between items-end'):
            with ui.column().classes('gap-1'):
                ui.label(overview['title']).classes('text-4xl font-bold text-white')
                ui.label(overview['description'] or T("deck_without_description")).classes('text-gray-400')
            if overview['is_owner']:
                ui.button(T("edit_deck"), icon='edit', on_click=settings_dialog.open).props('outline color=white no-caps')

        with ui.row().classes('gap-8'):
            for value, label in (
                (len(cards), T("cards")),
                (stats['total_sessions'], T("sessions")),
                (f"{stats['best_score']}%", T("best_score")),
                (stats['last_played'], T("last_activity")),
            ):
                with ui.column().classes('gap-0'):
                    ui.label(str(value)).classes('text-lg font-bold text-indigo-300 leading-none')
                    ui.label(label).classes('text-[10px] text-gray-500 uppercase')

        # Mode picker
        with ui.grid(columns='1').classes('w-full sm:grid-cols-3 gap-4'):
            for mode, icon, desc_key in MODE_CARDS:
                needed = 1 if mode == SessionType.FLASHCARD else MIN_CHOICE_CARDS
                ready = len(cards) >= needed
                with ui.card().classes('bg-black/40 border border-white/10 items-center p-6 gap-2'):
                    ui.icon(icon, size='2.5rem').classes('text-indigo-300')
                    ui.label(T(f"mode_{mode.value.lower()}")).classes('text-xl font-bold text-white')
                    ui.label(T(desc_key)).classes('text-xs text-gray-400 text-center')
                    button = ui.button(T("start_session"), icon='play_arrow', on_click=partial(start_mode, mode))\
                        .props('color=green-7 no-caps')
                    if not ready:
                        button.disable()
                        ui.label(T("needs_cards", count=needed)).classes('text-xs text-yellow-500')

        # Flashcards
        with ui.row().classes('w-full justify-between items-center mt-4'):
            ui.label(T("flashcards_section", count=len(cards))).classes('text-xl font-bold text-gray-200')
            if overview['is_owner']:
                ui.button(T("add_flashcard"), icon='add', on_click=lambda: open_card_dialog()).props('color=indigo-7 no-caps')

        if not cards:
            ui.label(T("no_flashcards_in_deck")).classes('text-gray-500 italic')
        with ui.column().classes('w-full gap-2'):
            for card in cards:
                with ui.row().classes('w-full items-center justify-between bg-black/30 rounded px-4 py-3 border border-white/5'):
                    with ui.column().classes('gap-0'):
                        ui.label(card.word).classes('text-lg font-semibold text-white')
                        ui.label(card.meaning).classes('text-sm text-gray-300')
                        if card.example:
                            ui.label(card.example).classes('text-xs italic text-gray-500')
                    if overview['is_owner']:
                        with ui.row().classes('gap-0'):
                            ui.button(icon='edit', on_click=partial(open_card_dialog, card)).props('flat round dense color=grey')
                            ui.button(icon='delete', on_click=partial(remove_card, card.id)).props('flat round dense color=red')

    with ui.column().classes('w-screen min-h-screen gradient-bg overflow-auto pb-10 pt-6'):
        with ui.column().classes('w-full max-w-5xl mx-auto p-6 gap-6'):
            render_content()

from functools import partial
from math import ceil
from nicegui import ui
from lexideck.config import MIN_CHOICE_CARDS
from lexideck.core.locale_manager import T
from lexideck.models import SessionType
from lexideck.pages.common import LEARNING_ROUTES, create_navbar, deck_url, setup_page
from lexideck.services.deck_service import get_public_decks

PAGE_SIZE = 9

QUICK_START = [
    (SessionType.FLASHCARD, 'style'),
    (SessionType.QUIZ, 'quiz'),
    (SessionType.MATCH, 'extension'),
]

def _deck_tile(deck: dict):
    """Shared deck with author, size and one-tap access to each mode."""
    with ui.card().classes('bg-black/40 border border-white/10 hover:border-indigo-500/80 h-56 justify-between'):
        with ui.column().classes('w-full gap-1'):
            ui.label(deck['title']).classes('text-xl font-bold text-gray-100 line-clamp-1')
            with ui.row().classes('gap-2 items-center'):
                ui.label(T("by_author", author=deck['author'])).classes('text-xs text-indigo-300')
                ui.label(T("card_count_info", count=deck['card_count'])).classes('text-xs text-gray-500')
            ui.label(deck['description'] or T("deck_without_description")).classes('text-xs text-gray-400 line-clamp-2')

        with ui.row().classes('w-full items-center justify-between'):
            with ui.row().classes('gap-0'):
                for mode, icon in QUICK_START:
                    needed = 1 if mode == SessionType.FLASHCARD else MIN_CHOICE_CARDS
                    target = f"{LEARNING_ROUTES[mode]}?deck_id={deck['id']}"
                    button = ui.button(icon=icon, on_click=partial(ui.navigate.to, target))\
                        .props('flat round dense color=indigo-3').tooltip(T(f"mode_{mode.value.lower()}"))
                    if deck['card_count'] < needed:
                        button.disable()
            ui.button(T("open_deck"), on_click=partial(ui.navigate.to, deck_url(deck['id'])))\
                .props('dense outline color=white no-caps').classes('px-3')

@ui.page('/app/public-library')
def public_library_page(page: int = 1):
    if not setup_page(restricted=True):
        return
    create_navbar()

    @ui.refreshable
    def render_library(current: int):
        decks, total_count = get_public_decks(page=current, page_size=PAGE_SIZE)
        total_pages = max(1, ceil(total_count / PAGE_SIZE))

        with ui.row().classes('w-full justify-between items-end'):
            with ui.column().classes('gap-1'):
                ui.label(T("public_library_page_title")).classes('text-4xl font-bold text-white')
                ui.label(T("public_library_page_subtitle")).classes('text-gray-400')
            ui.label(T("page_info", current_page=current, total_pages=total_pages)).classes('text-gray-500 font-mono text-sm')

        if not decks:
            ui.label(T("no_public_decks_found")).classes('w-full text-center text-xl text-gray-500 py-20')
            return

        with ui.grid(columns='1').classes('w-full sm:grid-cols-2 lg:grid-cols-3 gap-6'):
            for deck in decks:
                _deck_tile(deck)

        if total_pages > 1:
            ui.pagination(1, total_pages, direction_links=True, value=current,
                          on_change=lambda e: render_library.refresh(e.value))\
                .props('color=indigo-3 active-color=indigo-7').classes('self-center mt-6')

    with ui.column().classes('w-screen min-h-screen gradient-bg overflow-auto pb-10 pt-6'):
        with ui.column().classes('w-full max-w-6xl mx-auto p-6 gap-6'):
            render_library(max(1, page))

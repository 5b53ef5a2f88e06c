from typing import Optional
from urllib.parse import urlencode
from nicegui import app, ui, background_tasks
from lexideck.core.exceptions import (
    EmptyDeckError,
    InsufficientCardsError,
    LoadFailureError,
)
from lexideck.core.locale_manager import T
from lexideck.core.log_manager import logger
from lexideck.models import SessionType
from lexideck.services.learning_service import (
    LearningState,
    finish_learning_session,
    start_learning_session,
)
from lexideck.services.result_service import persist_summary_async

LEARNING_ROUTES = {
    SessionType.FLASHCARD: '/app/study',
    SessionType.QUIZ: '/app/quiz',
    SessionType.MATCH: '/app/match',
}

def setup_page(restricted: bool = True, remove_url_params: bool = False) -> bool:
    ui.dark_mode()
    ui.add_head_html("<style>html, #c3 { padding: 0 !important;}</style>")
    ui.add_head_html('<link rel="stylesheet" href="/assets/global.css">')
    if restricted:
        if not app.storage.user.get('id'):
            ui.notify(T("access_denied_login_required"), type='negative')
            ui.navigate.to('/')
            return False

    if remove_url_params:
        ui.run_javascript("window.history.replaceState(null, '', window.location.pathname);")

    return True

def create_navbar():
    with ui.header().classes('w-full bg-black text-white justify-between items-center px-6 py-2 shadow-md'):

        with ui.row().classes('items-center gap-4'):
            with ui.button(icon='menu').props('flat round color=white'):
                with ui.menu().props('auto-close'):
                    ui.menu_item(T("my_library"), on_click=lambda: ui.navigate.to('/app'))
                    ui.menu_item(T("public_library"), on_click=lambda: ui.navigate.to('/app/public-library'))
                    ui.menu_item(T("import_deck"), on_click=lambda: ui.navigate.to('/app/import-json'))

            ui.label(T("app_title")).classes('text-xl font-bold tracking-tight')

        with ui.avatar(size='32px').classes('bg-gray-700 cursor-pointer'):
            if app.storage.user.get("picture"):
                ui.image(app.storage.user.get("picture"))
            else:
                ui.icon('person')

            with ui.menu().props('auto-close'):
                ui.menu_item(T("logout"), on_click=logout)

def logout():
    app.storage.user.clear()
    ui.navigate.to('/')

def deck_url(deck_id: int) -> str:
    return f'/app/deck?deck_id={deck_id}'

# --- LEARNING PAGES ---

def open_learning_session(mode: SessionType, deck_id: Optional[int]) -> Optional[LearningState]:
    """
    Starts a session for the page. On any start failure the user is told why
    and sent back, and None is returned.
    """
    if not deck_id:
        logger.warning(f"{mode.value} page accessed without deck_id parameter.")
        ui.navigate.to('/app')
        return None

    try:
        return start_learning_session(mode, deck_id, app.storage.user.get('id'))
    except EmptyDeckError:
        ui.notify(T("no_flashcards_in_deck"), type='warning')
    except InsufficientCardsError as e:
        ui.notify(T("not_enough_cards", required=e.required, mode=mode.value.title()), type='warning')
    except LoadFailureError as e:
        logger.error(f"Could not load Deck {deck_id}: {e}")
        ui.notify(T("failed_to_load_flashcards"), type='negative')

    ui.navigate.to(deck_url(deck_id))
    return None

def complete_learning_session(state: LearningState, deck_id: int):
    """
    Reduces the finished session, saves it in the background and moves on to
    the result page without waiting for the save.
    """
    summary = finish_learning_session(state, deck_id, app.storage.user.get('id'))
    background_tasks.create(persist_summary_async(summary), name='save_session')

    params = urlencode({
        'mode': summary.session_type.value,
        'total': summary.total_cards,
        'correct': summary.score,
        'deck_id': deck_id,
    })
    ui.navigate.to(f'/app/result?{params}')

def session_header(title: str, on_back):
    with ui.row().classes('w-full max-w-3xl justify-between items-center mb-4'):
        ui.button(T("back"), icon='arrow_back', on_click=on_back).props('flat color=white no-caps')
        ui.label(title).classes('text-gray-400 text-sm font-bold tracking-widest uppercase')

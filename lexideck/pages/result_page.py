from nicegui import ui
from lexideck.pages.common import LEARNING_ROUTES, create_navbar, deck_url, setup_page
from lexideck.core.locale_manager import T
from lexideck.core.log_manager import logger
from lexideck.models import SessionType
from lexideck.services.result_service import clamp_score, result_headline, result_message, score_percentage

@ui.page('/app/result')
def result_page(mode: str = None, total: int = 0, correct: int = 0, deck_id: int = None):
    if not setup_page(restricted=True, remove_url_params=True):
        return

    try:
        session_type = SessionType(mode)
    except ValueError:
        logger.warning(f"Result page opened with unknown mode '{mode}'.")
        ui.navigate.to('/app')
        return

    create_navbar()

    correct, total = clamp_score(correct, total)
    percentage = score_percentage(correct, total)

    with ui.column().classes('w-screen min-h-screen gradient-bg text-white items-center p-4'):
        with ui.column().classes('w-full max-w-xl items-center text-center gap-6 py-10'):
            ui.icon('emoji_events', size='6rem').classes('text-yellow-400 animate-bounce')
            ui.label(T(result_headline(session_type))).classes('text-4xl font-black text-white')
            ui.label(f"{percentage}%").classes('text-6xl font-extrabold text-indigo-300')
            ui.label(T("result_score", correct=correct, total=total)).classes('text-xl text-gray-300')
            ui.label(T(result_message(percentage))).classes('text-lg text-gray-400')

            with ui.row().classes('gap-4 mt-6'):
                if deck_id:
                    ui.button(T("study_again"), icon='replay',
                              on_click=lambda: ui.navigate.to(f'{LEARNING_ROUTES[session_type]}?deck_id={deck_id}'))\
                        .props('color=indigo-7 no-caps')
                    ui.button(T("back_to_deck"), icon='style', on_click=lambda: ui.navigate.to(deck_url(deck_id)))\
                        .props('outline color=white no-caps')
                ui.button(T("go_home"), icon='home', on_click=lambda: ui.navigate.to('/app'))\
                    .props('flat color=white no-caps')

from nicegui import ui, events
from lexideck.pages.common import (
    complete_learning_session,
    create_navbar,
    deck_url,
    open_learning_session,
    session_header,
    setup_page,
)
from lexideck.core.locale_manager import T
from lexideck.models import SessionType
from lexideck.services.study_service import flip, mark_known, mark_unknown

@ui.page('/app/study')
def study_page(deck_id: int = None):
    if not setup_page(restricted=True):
        return

    state = open_learning_session(SessionType.FLASHCARD, deck_id)
    if state is None:
        return

    create_navbar()

    def apply(transition):
        nonlocal state
        if state.completed:
            return
        state = transition(state)
        if state.completed:
            complete_learning_session(state, deck_id)
            return
        render_card.refresh()

    def handle_key(e: events.KeyEventArguments):
        if not e.action.keydown or state.completed:
            return
        if e.key == ' ':
            apply(flip)
        elif e.key == 'ArrowLeft':
            apply(mark_unknown)
        elif e.key == 'ArrowRight':
            apply(mark_known)

    ui.keyboard(on_key=handle_key)

    @ui.refreshable
    def render_card():
        item = state.current_item
        total = len(state.items)

        with ui.column().classes('w-full max-w-3xl gap-1 mb-4'):
            ui.label(f"{state.current_index + 1} / {total}").classes('text-xs text-gray-400 font-mono')
            ui.linear_progress(value=state.current_index / total, show_value=False)\
                .props('size="10px" color="indigo-400" track-color="grey-8" rounded')

        with ui.card().on('click', lambda: apply(flip))\
                .classes('w-full max-w-3xl min-h-[320px] bg-gray-900 border border-white/20 items-center justify-center p-8 cursor-pointer'):
            if not state.revealed:
                ui.label(item.flashcard.word).classes('text-4xl font-bold text-white text-center')
                ui.label(T("tap_to_flip")).classes('text-xs text-gray-500 mt-6')
            else:
                ui.label(item.flashcard.meaning).classes('text-2xl text-indigo-200 text-center')
                if item.flashcard.example:
                    ui.label(item.flashcard.example).classes('text-sm italic text-gray-400 mt-4 text-center')

        with ui.row().classes('gap-6 mt-6'):
            ui.button(T("still_learning"), icon='close', on_click=lambda: apply(mark_unknown))\
                .props('color=red-9 no-caps').classes('px-6')
            ui.button(T("i_know_it"), icon='check', on_click=lambda: apply(mark_known))\
                .props('color=green-9 no-caps').classes('px-6')

    with ui.column().classes('w-screen min-h-screen gradient-bg text-white items-center p-4'):
        session_header(T("mode_flashcard"), lambda: ui.navigate.to(deck_url(deck_id)))
        render_card()

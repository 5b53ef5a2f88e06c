from functools import partial
from nicegui import ui
from lexideck.config import MATCH_FINISH_DELAY
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
from lexideck.schemas import MatchPair
from lexideck.services.match_service import is_selected, resolve_match_check, select_pair

@ui.page('/app/match')
def match_page(deck_id: int = None):
    if not setup_page(restricted=True):
        return

    state = open_learning_session(SessionType.MATCH, deck_id)
    if state is None:
        return

    create_navbar()

    def finish():
        complete_learning_session(state, deck_id)

    def resolve(attempt: int):
        nonlocal state
        if state.completed:
            return
        state = resolve_match_check(state, attempt)
        render_board.refresh()
        if state.completed:
            with timer_slot:
                ui.timer(MATCH_FINISH_DELAY, finish, once=True)

    def tap(pair_id: str):
        nonlocal state
        state = select_pair(state, pair_id)
        if state.pending:
            # Timers live outside the board, a refresh would delete them
            with timer_slot:
                ui.timer(state.pending.delay, partial(resolve, state.pending.attempt), once=True)
        render_board.refresh()

    def tile_color(pair: MatchPair) -> str:
        if pair.matched:
            return 'green-10'
        pending = state.pending
        if pending and pair.id in (pending.word_pair_id, pending.meaning_pair_id):
            return 'green-7' if pending.is_match else 'red-7'
        if is_selected(state, pair.id):
            return 'indigo-6'
        return 'grey-9'

    def render_column(pairs):
        with ui.column().classes('w-1/2 gap-3'):
            for pair in pairs:
                button = ui.button(pair.content, on_click=partial(tap, pair.id))\
                    .props(f'color={tile_color(pair)} no-caps').classes('w-full py-4')
                if pair.matched:
                    button.disable()

    @ui.refreshable
    def render_board():
        with ui.column().classes('w-full max-w-3xl gap-1 mb-4'):
            with ui.row().classes('w-full justify-between'):
                ui.label(T("matched_progress", matched=state.matched_count, total=state.total)).classes('text-xs text-gray-400 font-mono')
                ui.label(T("attempts_label", attempts=state.attempts)).classes('text-xs text-gray-400 font-mono')
            ui.linear_progress(value=state.matched_count / state.total, show_value=False)\
                .props('size="10px" color="green-5" track-color="grey-8" rounded')

        with ui.row().classes('w-full max-w-3xl gap-4 no-wrap'):
            render_column(state.word_pairs)
            render_column(state.meaning_pairs)

    with ui.column().classes('w-screen min-h-screen gradient-bg text-white items-center p-4'):
        session_header(T("mode_match"), lambda: ui.navigate.to(deck_url(deck_id)))
        ui.label(T("match_instructions")).classes('text-sm text-gray-400 mb-4')
        render_board()
        timer_slot = ui.element('div').classes('hidden')

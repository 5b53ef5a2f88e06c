from functools import partial
from nicegui import ui
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
from lexideck.services.quiz_service import advance_question, is_answer_correct, select_answer

@ui.page('/app/quiz')
def quiz_page(deck_id: int = None):
    if not setup_page(restricted=True):
        return

    state = open_learning_session(SessionType.QUIZ, deck_id)
    if state is None:
        return

    create_navbar()

    def choose(answer: str):
        nonlocal state
        state = select_answer(state, answer)
        render_question.refresh()

    def next_question():
        nonlocal state
        if state.completed:
            return
        state = advance_question(state)
        if state.completed:
            complete_learning_session(state, deck_id)
            return
        render_question.refresh()

    def option_color(option: str) -> str:
        question = state.current_question
        if not state.show_result:
            return 'grey-9'
        if option == question.correct_answer:
            return 'green-8'
        if option == state.selected_answer:
            return 'red-8'
        return 'grey-9'

    @ui.refreshable
    def render_question():
        question = state.current_question
        total = len(state.questions)

        with ui.column().classes('w-full max-w-3xl gap-1 mb-4'):
            with ui.row().classes('w-full justify-between'):
                ui.label(T("question_progress", current=state.current_index + 1, total=total)).classes('text-xs text-gray-400 font-mono')
                ui.label(T("score_label", score=state.correct_count)).classes('text-xs text-gray-400 font-mono')
            ui.linear_progress(value=(state.current_index + 1) / total, show_value=False)\
                .props('size="10px" color="indigo-400" track-color="grey-8" rounded')

        with ui.card().classes('w-full max-w-3xl bg-gray-900 border border-white/20 items-center p-8'):
            ui.label(T("what_does_it_mean")).classes('text-sm text-gray-500')
            ui.label(question.flashcard.word).classes('text-4xl font-bold text-white text-center')

        with ui.column().classes('w-full max-w-3xl gap-3 mt-6'):
            for option in question.options:
                ui.button(option, on_click=partial(choose, option))\
                    .props(f'color={option_color(option)} no-caps align=left')\
                    .classes('w-full py-3 text-left')

        correct = is_answer_correct(state)
        if correct is not None:
            feedback = T("answer_correct") if correct else T("answer_wrong", answer=question.correct_answer)
            ui.label(feedback).classes('text-lg font-bold mt-4 ' + ('text-green-400' if correct else 'text-red-400'))
            ui.button(T("finish") if state.is_last_question else T("next"), on_click=next_question)\
                .props('color=indigo-7 no-caps').classes('mt-4 px-8')

    with ui.column().classes('w-screen min-h-screen gradient-bg text-white items-center p-4'):
        session_header(T("mode_quiz"), lambda: ui.navigate.to(deck_url(deck_id)))
        render_question()

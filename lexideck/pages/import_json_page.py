from nicegui import ui, app, events
from lexideck.core.locale_manager import T
from lexideck.core.log_manager import logger
from lexideck.pages.common import setup_page, create_navbar, deck_url
from lexideck.services.import_service import parse_and_preview_deck, save_dto_to_db

SAMPLE_DECK = """{
  "title": "Kitchen vocabulary",
  "description": "Everyday words",
  "is_public": false,
  "cards": [
    {"word": "spoon", "meaning": "cuchara", "example": "Stir it with a spoon."},
    {"word": "knife", "meaning": "cuchillo"}
  ]
}"""

@ui.page('/app/import-json')
def import_json_page():
    if not setup_page(restricted=True):
        return
    create_navbar()

    # The DTO travels from the upload step to the confirm step
    current_import_data = {"dto": None}

    async def handle_parsing(e: events.UploadEventArguments, stepper_element):
        """Step 1 -> Step 2: Parse File & Show Preview"""
        try:
            content = await e.file.text()
            result = parse_and_preview_deck(content)
            dto = result['dto']
            stats = result['stats']
            current_import_data['dto'] = dto

            review_container.clear()
            with review_container:
                with ui.card().classes('w-full bg-black/20 border border-white/10 p-4'):
                    ui.label(dto.title).classes('text-xl font-bold')
                    ui.label(dto.description).classes('text-gray-400 italic text-sm')
                    ui.label(T("import_stats", count=stats['card_count'], examples=stats['with_example'])).classes('text-sm mt-2')

                if not stats['quiz_ready']:
                    ui.label(T("import_warning_small_deck")).classes('text-yellow-500 text-sm')
                if stats['duplicate_meanings']:
                    ui.label(T("import_warning_duplicates", meanings=", ".join(stats['duplicate_meanings'][:5])))\
                        .classes('text-yellow-500 text-sm')

                with ui.expansion(T("view_all_cards", count=stats['card_count']), icon="visibility").classes('w-full mt-4 bg-black/20 rounded-lg'):
                    with ui.scroll_area().classes('h-64 w-full p-2'):
                        for i, card in enumerate(dto.cards, 1):
                            with ui.row().classes('w-full items-start p-2 bg-black/30 rounded border border-white/5'):
                                ui.label(f"#{i}").classes('text-gray-500 text-xs mt-1 mr-2 w-6')
                                ui.label(f"{card.word} - {card.meaning}").classes('text-sm text-gray-200')

            stepper_element.next()

        except ValueError as err:
            ui.notify(str(err), type='warning')
        except Exception as err:
            logger.error(f"Parse Error: {err}")
            ui.notify(T("import_parse_error"), type='negative')

    def finalize_import():
        if not current_import_data['dto']:
            return

        user_id = app.storage.user.get('id')
        try:
            deck = save_dto_to_db(user_id, current_import_data['dto'])
        except Exception as e:
            logger.error(f"Import failed: {e}")
            ui.notify(T("import_save_error"), type='negative')
            return
        ui.notify(T("import_success", title=deck.title), type='positive')
        ui.navigate.to(deck_url(deck.id))

    with ui.column().classes('w-screen min-h-screen gradient-bg text-white p-8 overflow-y-auto'):
        with ui.column().classes('w-full items-center text-center max-w-3xl mx-auto mb-10'):
            ui.label(T("import_json_page_title")).classes('text-5xl font-extrabold text-white mt-12')
            ui.label(T("import_json_page_subtitle")).classes('text-xl text-gray-400 mt-2')

        with ui.card().classes('bg-black/30 p-6 rounded-xl shadow-2xl border border-indigo-600/50 mx-auto w-full max-w-3xl'):
            with ui.stepper().props("vertical done-color='green'").classes('w-full transparent') as stepper:

                with ui.step("import_upload", T("import_step_upload")):
                    ui.label(T("import_format_hint")).classes('text-gray-300')
                    ui.code(SAMPLE_DECK, language='json').classes('w-full')
                    ui.upload(
                        on_upload=lambda e: handle_parsing(e, stepper),
                        max_file_size=1_000_000,
                        multiple=False,
                        auto_upload=True
                    ).props('accept=".json" flat bordered').classes('w-full mt-4')

                with ui.step("import_review", T("import_step_review")):
                    review_container = ui.column().classes('w-full')
                    with ui.row().classes('mt-6 w-full justify-between'):
                        ui.button(T("cancel_or_reupload"), icon="arrow_upward", on_click=stepper.previous).props('flat color=red')
                        ui.button(T("confirm_import"), icon="check_circle", on_click=finalize_import).props('color=green-7')

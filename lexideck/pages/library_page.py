from functools import partial
from nicegui import ui, app, run
from lexideck.core.log_manager import logger
from lexideck.core.locale_manager import T
from lexideck.pages.common import setup_page, create_navbar, deck_url
from lexideck.services.deck_service import (
    create_deck,
    create_folder,
    delete_deck,
    delete_folder,
    get_user_decks,
    get_user_folders,
    move_deck_to_folder,
    rename_folder,
)
from lexideck.services.session_service import get_user_sessions

@ui.page('/app')
def library_page():
    if not setup_page(restricted=True):
        return
    create_navbar()

    user_id = app.storage.user.get('id')

    # --- State ---
    active_folder = {"id": None}
    pending_delete = {"id": None, "title": ""}

    with ui.column().classes('w-screen min-h-screen gradient-bg overflow-auto pb-10 pt-6'):
        content_wrapper = ui.column().classes('w-full max-w-6xl mx-auto p-6 gap-8')

    # --- Dialogs ---
    with ui.dialog() as deck_dialog, ui.card().classes('bg-gray-900 border border-white/10 w-96'):
        ui.label(T("create_deck")).classes('text-xl font-bold text-white')
        deck_title_input = ui.input(T("deck_title")).classes('w-full')
        deck_desc_input = ui.textarea(T("deck_description")).classes('w-full')
        deck_public_switch = ui.switch(T("make_public"), value=False)
        with ui.row().classes('w-full justify-end gap-4 mt-4'):
            ui.button(T("cancel"), on_click=deck_dialog.close).props('flat color=white')
            ui.button(T("create"), on_click=lambda: submit_deck()).props('color=indigo-7')

    with ui.dialog() as folder_dialog, ui.card().classes('bg-gray-900 border border-white/10 w-96'):
        folder_dialog_title = ui.label().classes('text-xl font-bold text-white')
        folder_name_input = ui.input(T("folder_name")).classes('w-full')
        folder_target = {"id": None}
        with ui.row().classes('w-full justify-end gap-4 mt-4'):
            ui.button(T("cancel"), on_click=folder_dialog.close).props('flat color=white')
            ui.button(T("save"), on_click=lambda: submit_folder()).props('color=indigo-7')

    with ui.dialog() as delete_dialog, ui.card().classes('bg-gray-900 border border-white/10'):
        delete_title_label = ui.label().classes('text-xl font-bold text-white')
        ui.label(T("confirm_delete_deck_message")).classes('text-gray-400')
        with ui.row().classes('w-full justify-end gap-4 mt-6'):
            ui.button(T("cancel"), on_click=delete_dialog.close).props('flat color=white')
            ui.button(T("confirm_delete"), color='red', on_click=lambda: execute_deletion())

    # --- Handlers ---

    def submit_deck():
        try:
            deck = create_deck(
                user_id,
                deck_title_input.value,
                deck_desc_input.value,
                is_public=deck_public_switch.value,
                folder_id=active_folder["id"]
            )
        except ValueError as e:
            ui.notify(str(e), type='warning')
            return
        deck_dialog.close()
        ui.navigate.to(deck_url(deck.id))

    def open_folder_dialog(folder_id=None, name=""):
        folder_target["id"] = folder_id
        folder_name_input.value = name
        folder_dialog_title.set_text(T("rename_folder") if folder_id else T("create_folder"))
        folder_dialog.open()

    def submit_folder():
        try:
            if folder_target["id"]:
                rename_folder(user_id, folder_target["id"], folder_name_input.value)
            else:
                create_folder(user_id, folder_name_input.value)
        except ValueError as e:
            ui.notify(str(e), type='warning')
            return
        folder_dialog.close()
        refresh_ui()

    def remove_folder(folder_id):
        if delete_folder(user_id, folder_id):
            if active_folder["id"] == folder_id:
                active_folder["id"] = None
            ui.notify(T("folder_deleted"), type='info')
        refresh_ui()

    def select_folder(folder_id):
        active_folder["id"] = folder_id
        refresh_ui()

    def move_deck(deck_id, folder_id):
        if not move_deck_to_folder(user_id, deck_id, folder_id):
            ui.notify(T("action_failed"), type='negative')
        refresh_ui()

    def open_delete_dialog(deck_id, title):
        pending_delete["id"] = deck_id
        pending_delete["title"] = title
        delete_title_label.set_text(T("confirm_delete_deck_title", title=title))
        delete_dialog.open()

    async def execute_deletion():
        deck_id = pending_delete["id"]
        if not deck_id:
            return
        delete_dialog.close()
        try:
            success = await run.io_bound(delete_deck, user_id, deck_id)
        except Exception as e:
            logger.error(f"Deletion error: {e}")
            ui.notify(T("action_failed"), type='negative')
            return
        if success:
            ui.notify(T("deck_deleted", title=pending_delete["title"]), type='positive')
        else:
            ui.notify(T("action_failed"), type='negative')
        refresh_ui()

    # --- Rendering ---

    def render_deck_card(deck, folders):
        with ui.card().classes('bg-black/40 border border-white/10 hover:border-indigo-400 transition-all duration-300 flex flex-col justify-between h-56'):
            with ui.row().classes('w-full justify-between items-start'):
                ui.label(deck['title']).classes('text-xl font-bold text-gray-100 leading-tight line-clamp-1')
                with ui.button(icon='more_vert').props('flat round dense').classes('text-gray-500'):
                    with ui.menu().classes('bg-gray-900 border border-white/10'):
                        for folder in folders:
                            if folder['id'] != deck['folder_id']:
                                ui.menu_item(T("move_to", folder=folder['name']),
                                             on_click=partial(move_deck, deck['id'], folder['id']))
                        if deck['folder_id']:
                            ui.menu_item(T("remove_from_folder"), on_click=partial(move_deck, deck['id'], None))
                        ui.menu_item(T("delete"), on_click=partial(open_delete_dialog, deck['id'], deck['title']))\
                            .classes('text-red-400')

            ui.label(deck['description'] or T("deck_without_description")).classes('text-xs text-gray-400 line-clamp-2')

            with ui.row().classes('w-full justify-between items-center mt-auto'):
                ui.label(T("card_count_info", count=deck['card_count'])).classes('text-xs text-gray-500')
                ui.button(T("open_deck"), icon="play_arrow", on_click=partial(ui.navigate.to, deck_url(deck['id'])))\
                    .props("dense color=green-7 no-caps").classes('px-4')

    def render_history():
        history = get_user_sessions(user_id, limit=10)
        ui.label(T("recent_sessions")).classes('text-xl font-bold text-gray-200')
        if not history:
            ui.label(T("no_sessions_yet")).classes('text-gray-500 italic')
            return
        with ui.column().classes('w-full gap-2'):
            for record in history:
                with ui.row().classes('w-full justify-between bg-black/30 rounded px-4 py-2 border border-white/5'):
                    ui.label(record['deck_title']).classes('text-gray-200 font-semibold')
                    ui.label(T(f"mode_{record['type'].lower()}")).classes('text-indigo-300 text-sm')
                    ui.label(f"{record['correct']}/{record['total']}").classes('text-gray-300 font-mono')
                    ui.label(record['played_at']).classes('text-gray-500 text-xs font-mono')

    def refresh_ui():
        folders = get_user_folders(user_id)
        decks = get_user_decks(user_id, folder_id=active_folder["id"])

        content_wrapper.clear()
        with content_wrapper:
            with ui.row().classes('w-full justify-between items-end'):
                with ui.column().classes('gap-1'):
                    ui.label(T("library_page_title", name=app.storage.user.get('name', ''))).classes('text-4xl font-bold text-white')
                    ui.label(T("library_page_subtitle")).classes('text-gray-400')
                with ui.row().classes('gap-2'):
                    ui.button(T("create_folder"), icon='create_new_folder', on_click=lambda: open_folder_dialog())\
                        .props('outline color=white no-caps')
                    ui.button(T("create_deck"), icon='add', on_click=deck_dialog.open).props('color=indigo-7 no-caps')

            # Folder filter
            with ui.row().classes('w-full gap-2 items-center'):
                ui.chip(T("all_decks"), on_click=partial(select_folder, None), selectable=True,
                        selected=active_folder["id"] is None).props('color=indigo-9 text-color=white')
                for folder in folders:
                    with ui.chip(f"{folder['name']} ({folder['deck_count']})", on_click=partial(select_folder, folder['id']),
                                 selectable=True, selected=active_folder["id"] == folder['id'])\
                            .props('color=grey-9 text-color=white'):
                        with ui.menu().props('context-menu'):
                            ui.menu_item(T("rename_folder"), on_click=partial(open_folder_dialog, folder['id'], folder['name']))
                            ui.menu_item(T("delete"), on_click=partial(remove_folder, folder['id']))

            if not decks:
                with ui.column().classes('w-full items-center justify-center py-12 opacity-50'):
                    ui.icon('import_contacts', size='4rem').classes('text-gray-600')
                    ui.label(T("library_no_decks")).classes('text-xl text-gray-500 mt-4')
                    ui.button(T("browse_public_library"), on_click=lambda: ui.navigate.to('/app/public-library'))\
                        .classes('mt-4 border border-indigo-500 text-indigo-300 transparent')
            else:
                with ui.grid(columns='1').classes('w-full sm:grid-cols-2 lg:grid-cols-3 gap-6'):
                    for deck in decks:
                        render_deck_card(deck, folders)

            ui.separator().classes('bg-white/20')
            render_history()

    refresh_ui()

# lexideck/main.py
import os
from nicegui import ui, app

from lexideck.config import SECRET_KEY, GOOGLE_AUTH_CLIENT_ID
from lexideck.database import init_db
from lexideck.components.google_auth import GoogleAuthService
from lexideck.core.locale_manager import T
from lexideck.core.log_manager import logger
from lexideck.pages.auth_callback import register_auth_callback

# Pages register their routes on import
import lexideck.pages.landing
import lexideck.pages.library_page
import lexideck.pages.public_library
import lexideck.pages.deck_page
import lexideck.pages.import_json_page
import lexideck.pages.study_page
import lexideck.pages.quiz_page
import lexideck.pages.match_page
import lexideck.pages.result_page

ASSETS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'assets')


def build_app() -> GoogleAuthService:
    """Wires the services that pages receive explicitly."""
    auth_service = GoogleAuthService(GOOGLE_AUTH_CLIENT_ID)
    register_auth_callback(auth_service)

    if os.path.exists(ASSETS_DIR):
        app.add_static_files('/assets', ASSETS_DIR)
    else:
        logger.critical(f"Assets directory not found at: {ASSETS_DIR}")

    app.on_startup(init_db)
    return auth_service


def run():
    build_app()
    ui.run(title=T("app_title", use_fallback=True), reload=False, port=int(os.getenv("PORT", "8080")), storage_secret=SECRET_KEY)


if __name__ in {"__main__", "__mp_main__"}:
    run()

# lexideck/pages/auth_callback.py
import asyncio
from nicegui import ui, app
from lexideck.components.google_auth import GoogleAuthService
from lexideck.core.log_manager import logger
from lexideck.core.locale_manager import T
from lexideck.services.user_service import get_or_create_user, AuthError
from lexideck.pages.common import setup_page

def register_auth_callback(auth_service: GoogleAuthService):
    """Declares the callback page bound to the given auth service."""

    @ui.page('/auth/google/callback')
    async def auth_callback_page(token: str = None):
        """
        Receives the Google Token via URL Query Parameter.
        Example: /auth/google/callback?token=eyJ...
        """
        if not setup_page(restricted=False, remove_url_params=True):
            return

        if not token:
            ui.notify(T("login_error_no_token"), type='negative')
            logger.warning("Auth callback visited without token.")
            ui.navigate.to('/')
            return

        with ui.column().classes('w-screen h-screen justify-center items-center gradient-bg') as loading_container:
            ui.spinner('dots', size='xl', color='primary')
            ui.label(T("verifying_login")).classes('text-xl mt-4 animate-pulse text-white/80')

        logger.info("Received token via HTTP Redirect. Verifying...")
        user_info = await auth_service.verify_token(token)

        if not user_info:
            logger.error("Token verification failed.")
            ui.notify(T("authentication_failed"), type='negative')
            ui.navigate.to('/')
            return

        try:
            db_user = await asyncio.to_thread(get_or_create_user, user_info)

            app.storage.user['email'] = db_user.email
            app.storage.user['name'] = db_user.name
            app.storage.user['picture'] = db_user.picture_url
            # The DB id links decks and session history to this login
            app.storage.user['id'] = db_user.id

            logger.info(f"Login Complete. User ID: {db_user.id}")
            ui.notify(T("welcome_user", name=db_user.name), type='positive')
            ui.navigate.to('/app')

        except AuthError as e:
            logger.warning(f"Auth Blocked: {e}")
            loading_container.delete()
            with ui.column().classes('w-screen h-screen justify-center items-center gradient-bg'):
                ui.icon('block', size='64px', color='red').classes('mb-4')
                ui.label(T("whitelist_blocked_user")).classes('text-xl text-white/80')

        except Exception as e:
            logger.error(f"Database Sync Error: {e}")
            ui.notify(T("login_sync_failed"), type='negative')
            ui.navigate.to('/')

    return auth_callback_page

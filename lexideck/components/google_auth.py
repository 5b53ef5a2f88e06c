import asyncio
from typing import Callable, Optional

from nicegui import ui
from google.oauth2 import id_token
from google.auth.transport import requests as google_requests

from lexideck.config import GOOGLE_AUTH_CLIENT_ID
from lexideck.core.log_manager import logger

TokenVerifier = Callable[..., dict]


class GoogleAuthService:
    """
    Verifies Google ID tokens for the sign-in flow.

    Built explicitly and handed to the pages that need it. The transport is
    configured lazily by `initialize()`; concurrent callers share the same
    in-flight configuration, so it runs at most once per service.
    """

    def __init__(
        self,
        client_id: Optional[str],
        verifier: TokenVerifier = id_token.verify_oauth2_token,
        request_factory: Callable[[], google_requests.Request] = google_requests.Request
    ):
        self.client_id = client_id
        self._verifier = verifier
        self._request_factory = request_factory
        self._request: Optional[google_requests.Request] = None
        self._init_future: Optional[asyncio.Future] = None

    @property
    def is_configured(self) -> bool:
        return self._request is not None

    async def _configure(self):
        if not self.client_id:
            raise RuntimeError("GOOGLE_CLIENT_ID is not set.")
        # Building the transport opens an HTTP session, keep it off the loop
        self._request = await asyncio.to_thread(self._request_factory)
        logger.info("Google sign-in configured.")

    async def initialize(self):
        if self._init_future is None:
            self._init_future = asyncio.ensure_future(self._configure())
        future = self._init_future
        try:
            await asyncio.shield(future)
        except Exception:
            # A failed configuration may be retried by the next caller
            if self._init_future is future:
                self._init_future = None
            raise

    async def verify_token(self, token: str) -> Optional[dict]:
        """Verifies the Google JWT asynchronously. Returns the claims, or None."""
        if not token:
            return None
        try:
            await self.initialize()
            return await asyncio.to_thread(self._verifier, token, self._request, self.client_id)
        except ValueError as e:
            logger.error(f"Token verification failed: {e}")
            return None
        except Exception as e:
            logger.error(f"Unexpected auth error: {e}")
            return None


class GoogleSignInButton(ui.element):
    def __init__(self, client_id: Optional[str] = GOOGLE_AUTH_CLIENT_ID):
        """
        Renders the Google Sign-In Button.
        The token comes back through the callback page.
        """
        super().__init__('div')
        self.client_id = client_id
        self.target_id = f'g-signin-{self.id}'

        with self:
            ui.element('div').props(f'id={self.target_id}')

        ui.timer(0.1, self._init_client_side, once=True)

    def _init_client_side(self):
        ui.run_javascript(f'initGoogleLogin("{self.client_id}", "{self.target_id}")')

# core/locale_manager.py

import json
from typing import Dict, Any, List
import importlib.resources as pkg_resources
from nicegui import app
from lexideck.core.log_manager import logger

# Directory holding the locale files (e.g., en.json).
I18N_DIR = pkg_resources.files('lexideck') / 'i18n'

FALLBACK_LOCALE = 'en'

class LocaleManager:
    """
    Loads every locale file found in the i18n directory and translates keys
    for the locale stored in the NiceGUI user session ('ui_language').
    """

    def __init__(self):
        self._fallback_translations: Dict[str, str] = self._load_translations(FALLBACK_LOCALE)
        self._all_translations: Dict[str, Dict[str, str]] = {FALLBACK_LOCALE: self._fallback_translations}

        try:
            for path in I18N_DIR.iterdir():
                if path.name.endswith('.json'):
                    locale_code = path.name[:-len('.json')]
                    if locale_code not in self._all_translations:
                        self._all_translations[locale_code] = self._load_translations(locale_code)
        except OSError as e:
            logger.error(f"Error during locale discovery: {e}")

        logger.info(f"LocaleManager initialized. Supported: {list(self._all_translations.keys())}. Fallback: {FALLBACK_LOCALE}")

    def _load_translations(self, locale: str) -> Dict[str, str]:
        file_name = f'{locale}.json'
        try:
            with (I18N_DIR / file_name).open('r', encoding='utf-8') as f:
                data = json.load(f)
                if not isinstance(data, dict):
                    raise TypeError("Translation file root must be a dictionary.")
                return data
        except FileNotFoundError:
            logger.warning(f"Translation resource not found for locale '{locale}' ({file_name}).")
            return {}
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(f"Invalid translation file for locale '{locale}': {e}")
            return {}

    @property
    def supported_locales(self) -> List[str]:
        return list(self._all_translations.keys())

    def T(self, key: str, use_fallback=False, **kwargs: Any) -> str:
        """
        Translates `key` for the current user's locale and formats it with kwargs.
        Missing keys fall back to English, then to a visible marker.
        """
        if use_fallback:
            current_locale = FALLBACK_LOCALE
        else:
            try:
                current_locale = app.storage.user.get('ui_language', FALLBACK_LOCALE)
            except RuntimeError:
                # No user storage outside a page request
                current_locale = FALLBACK_LOCALE

        translated_string = self._all_translations.get(current_locale, {}).get(key)
        if translated_string is None:
            translated_string = self._fallback_translations.get(key)
            if translated_string is None:
                logger.warning(f"Missing translation key '{key}' in both current and fallback locales.")
                return f"!! {key} !!"

        if kwargs:
            try:
                return translated_string.format(**kwargs)
            except (KeyError, IndexError, ValueError) as e:
                logger.error(f"Formatting failed for key '{key}' in locale '{current_locale}': {e}")
                return translated_string

        return translated_string

global_locale_manager = LocaleManager()

T = global_locale_manager.T

SUPPORTED_LOCALES = global_locale_manager.supported_locales

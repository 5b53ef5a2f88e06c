import secrets
from typing import List
import dotenv
import os
dotenv.load_dotenv("secrets.env")

SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    SECRET_KEY = secrets.token_hex(32)

GOOGLE_AUTH_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")
GOOGLE_AUTH_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET")

_allowed_users_str = os.getenv("ALLOWED_USERS", "")
ALLOWED_USERS: List[str] = [
    email.strip() for email in _allowed_users_str.split(",") if email.strip()
]

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///db/lexideck.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "log")
LOG_FILE = "lexideck.log"

# --- LEARNING ENGINE ---
# Quiz and Match both need the correct card plus three alternatives.
MIN_CHOICE_CARDS = 4
QUIZ_OPTION_COUNT = 4

MATCH_BOARD_LIMIT = int(os.getenv("MATCH_BOARD_LIMIT", "8"))

# Seconds. UI pacing only, the engine never sleeps.
MATCH_CONFIRM_DELAY = float(os.getenv("MATCH_CONFIRM_DELAY", "0.3"))
MATCH_REJECT_DELAY = float(os.getenv("MATCH_REJECT_DELAY", "0.8"))
MATCH_FINISH_DELAY = float(os.getenv("MATCH_FINISH_DELAY", "0.5"))

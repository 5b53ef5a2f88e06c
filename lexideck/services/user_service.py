# lexideck/services/user_service.py
from typing import Iterable, Optional
from sqlmodel import Session, select
from lexideck.config import ALLOWED_USERS
from lexideck.core.log_manager import logger
from lexideck.database import engine
from lexideck.models import User

# Google claims copied onto the User row on every login
PROFILE_FIELDS = ("name", "picture_url")

class AuthError(Exception):
    """The Google account is valid but not allowed in."""
    pass

def _check_whitelist(email: str, allowed_users: Optional[Iterable[str]]):
    whitelist = ALLOWED_USERS if allowed_users is None else list(allowed_users)
    if whitelist and email not in whitelist:
        logger.warning(f"Login blocked, {email} is not on the access list")
        raise AuthError(f"{email} is not allowed to use LexiDeck.")

def get_or_create_user(google_user_info: dict, allowed_users: Optional[Iterable[str]] = None) -> User:
    """
    Maps verified Google claims to a local User, creating it on first login.
    An empty access list lets everyone in. Name falls back to the email.
    """
    email = google_user_info.get('email')
    if not email:
        raise ValueError("Google claims carry no email.")
    _check_whitelist(email, allowed_users)

    profile = {
        "name": google_user_info.get('name') or email,
        "picture_url": google_user_info.get('picture'),
    }

    with Session(engine) as session:
        user = session.exec(select(User).where(User.email == email)).first()
        if user is None:
            user = User(email=email, **profile)
            logger.info(f"First login, creating User for {email}")
        else:
            changed = [field for field in PROFILE_FIELDS if getattr(user, field) != profile[field]]
            if not changed:
                return user
            for field in changed:
                setattr(user, field, profile[field])
            logger.info(f"Profile of User {user.id} synced: {', '.join(changed)}")

        session.add(user)
        session.commit()
        session.refresh(user)
        return user

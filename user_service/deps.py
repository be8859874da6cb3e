from __future__ import annotations

from user_service.settings import Settings, get_settings
from user_service.user_store import InMemoryUserStore


def get_settings_dep() -> Settings:
    """FastAPI dependency for settings.

    Delegates to user_service.settings.get_settings (canonical constructor).
    """
    return get_settings()


# One store per process. Tests swap it out via app.dependency_overrides.
_user_store = InMemoryUserStore()


def get_user_store() -> InMemoryUserStore:
    return _user_store

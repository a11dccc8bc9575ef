"""Identity provider backed by the settings file."""

from __future__ import annotations

from loguru import logger

from core.services.interfaces import UserInfo


class SettingsSessionProvider:
    """Reads the signed-in user and bearer token from `session.*` settings."""

    def __init__(self, settings) -> None:
        self._settings = settings
        self._signed_out = False

    def current_user(self) -> UserInfo | None:
        if self._signed_out:
            return None
        user_id = self._settings.get("session.user_id")
        if not user_id:
            return None
        return UserInfo(
            id=str(user_id),
            email=str(self._settings.get("session.email", "") or ""),
            full_name=self._settings.get("session.full_name") or None,
        )

    def get_token(self) -> str | None:
        if self._signed_out:
            return None
        token = self._settings.get("session.token")
        if not token:
            logger.warning("No session token configured")
            return None
        return str(token)

    def sign_out(self) -> None:
        self._signed_out = True
        logger.info("Signed out")

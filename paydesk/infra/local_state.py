"""
Accesseurs typés sur le stockage local.
Clés persistées: auth_token, refresh_token, user (JSON), wallet_balance.
Règle unique: une lecture ne lève jamais (None en cas d'absence, JSON invalide ou panne),
une écriture ratée est journalisée puis ignorée.
"""
from typing import Any, Dict, Optional
import json
import logging
from paydesk.errors import StorageUnavailableError

logger = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "auth_token"
REFRESH_TOKEN_KEY = "refresh_token"
USER_KEY = "user"
WALLET_BALANCE_KEY = "wallet_balance"


class LocalState:
    def __init__(self, store):
        self._store = store

    @property
    def store(self):
        return self._store

    def read(self, key: str) -> Optional[str]:
        try:
            return self._store.get(key)
        except StorageUnavailableError:
            logger.warning("local_state.read unavailable key=%s", key)
            return None

    def write(self, key: str, value: str) -> bool:
        try:
            self._store.set(key, value)
            return True
        except StorageUnavailableError:
            logger.warning("local_state.write skipped key=%s", key)
            return False

    def remove(self, key: str) -> bool:
        try:
            self._store.delete(key)
            return True
        except StorageUnavailableError:
            logger.warning("local_state.remove skipped key=%s", key)
            return False

    # --- Auth ---

    @property
    def auth_token(self) -> Optional[str]:
        return self.read(AUTH_TOKEN_KEY) or None

    def save_auth_token(self, token: str) -> bool:
        return self.write(AUTH_TOKEN_KEY, token)

    @property
    def refresh_token(self) -> Optional[str]:
        return self.read(REFRESH_TOKEN_KEY) or None

    def save_refresh_token(self, token: str) -> bool:
        return self.write(REFRESH_TOKEN_KEY, token)

    def user_profile(self) -> Optional[Dict[str, Any]]:
        """Profil stocké, ou None si absent / JSON invalide / pas un objet."""
        raw = self.read(USER_KEY)
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("local_state.user_profile malformed JSON")
            return None
        return data if isinstance(data, dict) else None

    def save_user_profile(self, profile: Dict[str, Any]) -> bool:
        return self.write(USER_KEY, json.dumps(profile))

    def clear_auth(self) -> None:
        for key in (AUTH_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_KEY):
            self.remove(key)

from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("id", "username", "email", "firstName", "lastName", "gender", "image")


class AuthResponse:
    def __init__(
        self,
        success: bool,
        user: Optional[Dict[str, Any]] = None,
        session: Optional[Dict[str, Any]] = None,
        error: Optional[str] = None,
    ):
        self.success = success
        self.user = user
        self.session = session
        self.error = error

    @property
    def access_token(self):
        return (self.session or {}).get("access_token")

    @property
    def refresh_token(self):
        return (self.session or {}).get("refresh_token")


def build_profile_dict(body: Dict[str, Any]) -> Dict[str, Any]:
    return {field: body.get(field) for field in PROFILE_FIELDS}


def build_session_dict(body: Dict[str, Any]) -> Dict[str, Any]:
    # Accepte le champ moderne (accessToken) et l'ancien (token)
    return {
        "access_token": body.get("accessToken") or body.get("token"),
        "refresh_token": body.get("refreshToken"),
    }


def make_auth_response(body: Dict[str, Any], fallback_error: str = "Invalid username or password.") -> AuthResponse:
    session = build_session_dict(body or {})
    if not session["access_token"]:
        return AuthResponse(False, error=fallback_error)
    return AuthResponse(True, user=build_profile_dict(body), session=session)


def handle_exception(action: str, e: Exception) -> AuthResponse:
    logger.exception(f"Erreur {action}")
    return AuthResponse(False, error=f"Erreur {action}: {str(e)}")

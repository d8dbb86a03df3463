"""
Cas d'usage Auth: connexion, déconnexion, libellés dérivés du profil stocké.
Les échecs de stockage ne bloquent jamais le parcours (voir LocalState).
"""
from typing import Any, Dict, Optional
import logging

from paydesk.config import DEFAULT_CUSTOMER_ID
from paydesk.errors import AuthUnavailableError
from paydesk.infra.local_state import LocalState
from .models import AuthResponse, make_auth_response, handle_exception
from .repository import auth_login_request, response_json

logger = logging.getLogger(__name__)

NETWORK_ERROR = "Network error. Please check your connection."
INVALID_CREDENTIALS = "Invalid username or password."


def login(state: LocalState, username: str, password: str) -> AuthResponse:
    """Connexion:
    - POST username/password vers la source d'auth
    - En cas de succès: stocke auth_token, refresh_token (si fourni) et le profil JSON
    - Message d'erreur: celui de l'API s'il existe, sinon réseau / identifiants invalides
    """
    try:
        resp = auth_login_request((username or "").strip(), password)
    except AuthUnavailableError:
        return AuthResponse(False, error=NETWORK_ERROR)
    except Exception as e:
        return handle_exception("login", e)

    body = response_json(resp)
    if not 200 <= resp.status_code < 300:
        message = body.get("message")
        return AuthResponse(False, error=message if isinstance(message, str) else INVALID_CREDENTIALS)

    result = make_auth_response(body, fallback_error=INVALID_CREDENTIALS)
    if not result.success:
        return result

    state.save_auth_token(result.access_token)
    if result.refresh_token:
        state.save_refresh_token(result.refresh_token)
    state.save_user_profile(result.user or {})
    logger.info("auth.login user_id=%s", (result.user or {}).get("id"))
    return result


def logout(state: LocalState) -> None:
    """Efface le contexte d'auth (auth_token, refresh_token, user); erreurs ignorées."""
    state.clear_auth()


def display_name(profile: Optional[Dict[str, Any]]) -> str:
    """Nom affiché dans la barre du haut, en majuscules."""
    if profile is None:
        return "USER"
    name = profile.get("firstName") or profile.get("username") or profile.get("email") or "User"
    return str(name).upper()


def customer_label(profile: Optional[Dict[str, Any]]) -> str:
    """'Prénom Nom - id', avec repli 'Customer - 12345678' si le profil est absent ou illisible."""
    if profile is None:
        return f"Customer - {DEFAULT_CUSTOMER_ID}"
    full_name = f"{profile.get('firstName') or ''} {profile.get('lastName') or ''}".strip()
    name = full_name or profile.get("username") or "Customer"
    customer_id = profile.get("id") or DEFAULT_CUSTOMER_ID
    return f"{name} - {customer_id}"

"""
Accès à la source d'authentification (POST /auth/login).
"""
from typing import Any, Dict, Optional
import httpx
from paydesk.config import CATALOG_BASE_URL, HTTP_TIMEOUT_SECONDS
from paydesk.errors import AuthUnavailableError


def auth_login_request(
    username: str,
    password: str,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Response:
    """Appel direct de l'endpoint de connexion; timeout HTTP_TIMEOUT_SECONDS.
    - Lève AuthUnavailableError si le réseau est indisponible (status 0 côté navigateur)
    - Retourne la réponse brute sinon (2xx ou erreur métier)
    """
    url = f"{CATALOG_BASE_URL}/auth/login"
    try:
        with httpx.Client(timeout=HTTP_TIMEOUT_SECONDS, transport=transport) as client:
            return client.post(url, json={"username": username, "password": password})
    except httpx.TransportError as e:
        raise AuthUnavailableError(str(e)) from e


def response_json(resp: httpx.Response) -> Dict[str, Any]:
    try:
        body = resp.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}

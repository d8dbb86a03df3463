from typing import Any, Dict
from fastapi import Depends, HTTPException

from paydesk.desk import Desk, get_desk


def require_token(desk: Desk = Depends(get_desk)) -> str:
    """
    Garde des écrans protégés: simple présence d'un auth_token dans le stockage local.
    La validité du token n'est pas vérifiée (pas de service d'auth dédié).
    """
    token = desk.state.auth_token
    if not token:
        raise HTTPException(status_code=401, detail="Non authentifié")
    return token


def get_current_profile(desk: Desk = Depends(get_desk), _token: str = Depends(require_token)) -> Dict[str, Any]:
    return desk.state.user_profile() or {}

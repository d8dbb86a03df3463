from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, Field
from typing import Dict, Any

from paydesk.config import LOGIN_PATH
from paydesk.desk import Desk, get_desk
from paydesk.utils.security import get_current_profile
from .service import (
    login as svc_login,
    logout as svc_logout,
    display_name,
    customer_label,
)

# --- API Router (/api/v1/auth) ---

api_router = APIRouter(prefix="/api/v1/auth", tags=["Auth API"])


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


@api_router.post("/login")
def api_login(req: LoginRequest, desk: Desk = Depends(get_desk)):
    """Point d'entrée de connexion (API JSON).
    - Délègue la vérification des identifiants au service (svc_login)
    - Le service persiste auth_token / refresh_token / user dans le stockage local
    - Retourne {access_token, token_type, user}
    """
    result = svc_login(desk.state, req.username, req.password)
    if not result.success:
        raise HTTPException(status_code=401, detail=result.error or "Invalid username or password.")
    return {"access_token": result.access_token, "token_type": "bearer", "user": result.user}


@api_router.post("/logout")
def api_logout(desk: Desk = Depends(get_desk)):
    """Déconnexion: efface le contexte d'auth, la sélection et la session de paiement."""
    svc_logout(desk.state)
    desk.reset()
    return {"ok": True, "redirect": LOGIN_PATH}


@api_router.get("/me")
def api_me(profile: Dict[str, Any] = Depends(get_current_profile)):
    return {
        "user": profile,
        "display_name": display_name(profile),
        "customer_label": customer_label(profile),
    }

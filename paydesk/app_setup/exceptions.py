"""
Gestionnaires d'exceptions de l'application.
- 401 en navigation HTML (Accept: text/html): redirection vers l'écran de connexion.
- Contexte de paiement absent/vide: redirection HTML vers le catalogue, 409 JSON pour l'API.
- Transition interdite / code incomplet / montant négatif: 409 JSON.
"""
import urllib.parse
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.status import HTTP_303_SEE_OTHER, HTTP_409_CONFLICT

from paydesk.config import LOGIN_PATH
from paydesk.errors import CheckoutRedirect, IllegalTransitionError, InvalidAmountError, VerificationIncompleteError


def _wants_html(request: Request) -> bool:
    accept = (request.headers.get("accept") or "").lower()
    return "text/html" in accept


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def html_redirect_on_auth_errors(request: Request, exc: HTTPException):
        if exc.status_code == 401:
            if _wants_html(request):
                msg = urllib.parse.quote_plus(str(exc.detail or "Veuillez vous connecter"))
                return RedirectResponse(url=f"{LOGIN_PATH}?error={msg}", status_code=HTTP_303_SEE_OTHER)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))

    @app.exception_handler(CheckoutRedirect)
    async def redirect_to_browse(request: Request, exc: CheckoutRedirect):
        if _wants_html(request):
            return RedirectResponse(url=exc.redirect_to, status_code=HTTP_303_SEE_OTHER)
        return JSONResponse(status_code=HTTP_409_CONFLICT, content={"detail": exc.detail, "redirect": exc.redirect_to})

    @app.exception_handler(IllegalTransitionError)
    async def illegal_transition(request: Request, exc: IllegalTransitionError):
        return JSONResponse(status_code=HTTP_409_CONFLICT, content={"detail": str(exc), "status": exc.current.value})

    @app.exception_handler(VerificationIncompleteError)
    async def verification_incomplete(request: Request, exc: VerificationIncompleteError):
        return JSONResponse(status_code=HTTP_409_CONFLICT, content={"detail": str(exc)})

    @app.exception_handler(InvalidAmountError)
    async def invalid_amount(request: Request, exc: InvalidAmountError):
        return JSONResponse(status_code=HTTP_409_CONFLICT, content={"detail": str(exc)})

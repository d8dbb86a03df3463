"""
Middlewares transverses de l'application.
- register_basic_middlewares: CORS et TrustedHost.
- register_security_middleware: en-têtes de sécurité.
- register_no_cache_middleware: empêche la mise en cache des réponses de paiement.
"""
from fastapi import Request, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware

from paydesk.config import COOKIE_SECURE, CORS_ORIGINS, ALLOWED_HOSTS

NO_CACHE_PREFIXES = ("/api/v1/checkout", "/api/v1/wallet")


def register_basic_middlewares(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=ALLOWED_HOSTS + ["*"] if "*" in CORS_ORIGINS else ALLOWED_HOSTS,
    )


def register_security_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if COOKIE_SECURE:
            response.headers.setdefault("Strict-Transport-Security", "max-age=63072000; includeSubDomains; preload")
        return response


def register_no_cache_middleware(app: FastAPI) -> None:
    """
    Solde et session de paiement ne doivent jamais être servis depuis un cache:
    la session ne survit pas à un rechargement.
    """
    @app.middleware("http")
    async def no_cache_for_checkout(request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith(NO_CACHE_PREFIXES):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
        return response

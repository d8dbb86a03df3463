"""
Registre central des routers (API v1 + health).
"""
from fastapi import FastAPI
from paydesk.auth.views import api_router as auth_api_router
from paydesk.catalog import views as catalog_views
from paydesk.selection import views as selection_views
from paydesk.wallet import views as wallet_views
from paydesk.checkout import views as checkout_views
from paydesk.health.router import router as health_router


def register_routers(app: FastAPI) -> None:
    app.include_router(auth_api_router)
    app.include_router(catalog_views.router)
    app.include_router(selection_views.router)
    app.include_router(wallet_views.router)
    app.include_router(checkout_views.router)
    app.include_router(health_router)

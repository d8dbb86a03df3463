"""
Factory d'application pour les entrypoints (ex: paydesk.asgi).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from typing import Optional
from fastapi import FastAPI

from paydesk.desk import Desk
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware, register_no_cache_middleware
from .exceptions import register_exception_handlers
from .routers import register_routers


def create_app(desk: Optional[Desk] = None) -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - middlewares de base, sécurité, no-cache
      - gestionnaires d'exceptions
      - tous les routers (auth, catalogue, sélection, porte-monnaie, paiement, health)
    `desk` permet d'injecter un poste préconfiguré (tests).
    """
    app = FastAPI(title="paydesk", lifespan=lifespan)
    app.state.desk = desk
    register_basic_middlewares(app)
    register_security_middleware(app)
    register_no_cache_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app

"""
Lifespan FastAPI: initialisation du poste de paiement (stockage local + clients).
- Si un Desk a été injecté (create_app(desk=...)), il est conservé tel quel.
- Sinon: Desk construit sur get_store() (mémoire, Redis ou fakeredis selon la config).
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from paydesk.desk import Desk
from paydesk.infra.storage import get_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = logging.getLogger("uvicorn.error")
    if getattr(app.state, "desk", None) is None:
        app.state.desk = Desk(get_store())
        logger.info("Desk initialised with %s", type(app.state.desk.state.store).__name__)
    yield

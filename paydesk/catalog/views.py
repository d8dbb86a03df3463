"""
Endpoints API du catalogue paginé.
- Sécurité: toutes les routes requièrent un auth_token (require_token)
- Une erreur de la source produits n'est pas une erreur HTTP: elle est exposée dans `error`
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from paydesk.desk import Desk, get_desk
from paydesk.utils.security import require_token

router = APIRouter(prefix="/api/v1/catalog", tags=["Catalog"], dependencies=[Depends(require_token)])


@router.get("")
async def get_catalog(page: Optional[int] = Query(default=None, ge=1), desk: Desk = Depends(get_desk)):
    """
    Retourne la page courante.
    - ?page=N: charge explicitement la page N
    - sans paramètre: charge la page courante si rien n'a encore été chargé
    """
    pager = desk.pager
    if page is not None:
        await pager.load(page)
    elif not pager.items and pager.error is None:
        await pager.load(pager.current_page)
    return pager.to_dict()


@router.post("/next")
async def next_page(desk: Desk = Depends(get_desk)):
    await desk.pager.next()
    return desk.pager.to_dict()


@router.post("/previous")
async def previous_page(desk: Desk = Depends(get_desk)):
    await desk.pager.previous()
    return desk.pager.to_dict()

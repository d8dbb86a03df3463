"""
Endpoints API de la sélection (écran catalogue).
- Saisies invalides (quantité, déduction) ignorées ou ramenées à 0, jamais de 400
- POST /review: fige la sélection et ouvre une session de paiement
"""
from typing import Any, Dict, Optional, Union
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from paydesk.desk import Desk, get_desk
from paydesk.utils.security import require_token
from .aggregator import SelectionAggregator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/selection", tags=["Selection"], dependencies=[Depends(require_token)])


class ProductPayload(BaseModel):
    id: Union[int, str]
    title: Optional[str] = None
    price: Optional[float] = None
    discountPercentage: Any = None


class RawValue(BaseModel):
    value: Any = None


def selection_view(selection: SelectionAggregator) -> Dict[str, Any]:
    return {
        "lines": [line.to_dict() for line in selection.lines],
        "count": len(selection),
        "gross_total": selection.gross_total,
        "total_deduction": selection.total_deduction,
    }


@router.get("")
def get_selection(desk: Desk = Depends(get_desk)):
    return selection_view(desk.selection)


@router.post("/items")
def add_item(payload: ProductPayload, desk: Desk = Depends(get_desk)):
    """
    Ajoute une unité d'un produit.
    - Corps complet {id, title, price, discountPercentage}: utilisé tel quel
    - Corps {id} seul: produit recherché dans la page catalogue courante (404 sinon)
    """
    product: Optional[Dict[str, Any]]
    if payload.price is None:
        product = desk.pager.find(payload.id)
        if not product:
            raise HTTPException(status_code=404, detail="Produit introuvable")
    else:
        product = payload.model_dump()
    desk.selection.add(product)
    return selection_view(desk.selection)


@router.delete("/items/{product_id}")
def remove_item(product_id: str, desk: Desk = Depends(get_desk)):
    desk.selection.remove(product_id)
    return selection_view(desk.selection)


@router.put("/items/{product_id}/quantity")
def update_quantity(product_id: str, body: RawValue, desk: Desk = Depends(get_desk)):
    desk.selection.set_quantity(product_id, body.value)
    return selection_view(desk.selection)


@router.put("/items/{product_id}/deduction")
def update_deduction(product_id: str, body: RawValue, desk: Desk = Depends(get_desk)):
    desk.selection.set_deduction(product_id, body.value)
    return selection_view(desk.selection)


@router.delete("")
def clear_selection(desk: Desk = Depends(get_desk)):
    desk.selection.clear()
    return selection_view(desk.selection)


@router.post("/review")
def review(desk: Desk = Depends(get_desk)):
    """Passage au récapitulatif. Sélection vide -> redirection catalogue (EmptySelectionError)."""
    session = desk.begin_review()
    return session.to_dict()

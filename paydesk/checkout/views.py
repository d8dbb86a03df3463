"""
Endpoints API de la session de paiement (écrans récapitulatif et reçu).
- Sans session active (ex: après redémarrage): redirection vers le catalogue
- POST /pay: un seul débit par session, les appels suivants ré-ouvrent la confirmation
- GET /receipt: reçu JSON, ou fichier texte si la transmission échoue
"""
from typing import Any, Dict
import logging

from fastapi import APIRouter, Depends, Path
from fastapi.responses import Response
from pydantic import BaseModel

from paydesk.config import BROWSE_PATH
from paydesk.desk import Desk, get_desk
from paydesk.utils.parsing import format_amount
from paydesk.utils.security import require_token
from .receipt import Receipt, ReceiptArtifact, receipt_artifact
from .session import PaymentStatus
from .verification import CODE_LENGTH

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/checkout", tags=["Checkout"], dependencies=[Depends(require_token)])

INSUFFICIENT_MESSAGE = "Insufficient wallet balance"


class SlotValue(BaseModel):
    value: str = ""


def render_receipt(receipt: Receipt) -> Dict[str, Any]:
    return receipt.to_dict()


def artifact_response(artifact: ReceiptArtifact) -> Response:
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )


@router.get("")
def get_session(desk: Desk = Depends(get_desk)):
    """Session courante; la référence et la date restent identiques d'un appel à l'autre."""
    return desk.require_session().to_dict()


@router.put("/verification/{slot}")
def write_slot(body: SlotValue, slot: int = Path(ge=0, le=CODE_LENGTH - 1), desk: Desk = Depends(get_desk)):
    pad = desk.require_session().verification
    pad.write(slot, body.value)
    return {"slots": pad.slots, "focus": pad.focus, "complete": pad.is_complete}


@router.post("/verification/{slot}/backspace")
def backspace_slot(slot: int = Path(ge=0, le=CODE_LENGTH - 1), desk: Desk = Depends(get_desk)):
    pad = desk.require_session().verification
    pad.backspace(slot)
    return {"slots": pad.slots, "focus": pad.focus, "complete": pad.is_complete}


@router.post("/pay")
def pay(desk: Desk = Depends(get_desk)):
    """
    Paiement contre le porte-monnaie local.
    - insufficient: 200 avec message, solde inchangé
    - confirmed / receipt_ready: solde débité une seule fois
    """
    status = desk.pay()
    balance = desk.ledger.read_balance()
    payload = {
        "status": status.value,
        "balance": balance,
        "balance_display": format_amount(balance),
        "session": desk.require_session().to_dict(),
    }
    if status is PaymentStatus.INSUFFICIENT:
        payload["message"] = INSUFFICIENT_MESSAGE
    return payload


@router.post("/dismiss")
def dismiss(desk: Desk = Depends(get_desk)):
    session = desk.require_session()
    session.dismiss_insufficient_funds()
    return session.to_dict()


@router.get("/receipt")
def get_receipt(desk: Desk = Depends(get_desk)):
    result = desk.require_session().to_receipt(render_receipt)
    if isinstance(result, ReceiptArtifact):
        return artifact_response(result)
    return result


@router.get("/receipt.txt")
def download_receipt(desk: Desk = Depends(get_desk)):
    return artifact_response(desk.require_session().to_receipt(receipt_artifact))


@router.post("/done")
def done(desk: Desk = Depends(get_desk)):
    desk.finish()
    return {"ok": True, "redirect": BROWSE_PATH}

from fastapi import APIRouter, Depends

from paydesk.desk import Desk, get_desk
from paydesk.utils.parsing import format_amount
from paydesk.utils.security import require_token

router = APIRouter(prefix="/api/v1/wallet", tags=["Wallet"], dependencies=[Depends(require_token)])


@router.get("")
def get_wallet(desk: Desk = Depends(get_desk)):
    balance = desk.ledger.read_balance()
    return {"balance": balance, "balance_display": format_amount(balance)}

"""
Poste de paiement: regroupe l'état d'un "navigateur".
- state / ledger: stockage local persistant (tokens, profil, solde)
- pager / selection: état de l'écran catalogue
- session: session de paiement en mémoire, créée à l'entrée du récapitulatif

Une instance par application (app.state.desk), créée dans le lifespan.
"""
from typing import Optional
import logging

from fastapi import Request

from paydesk.auth.service import customer_label
from paydesk.catalog.pager import CatalogPager
from paydesk.checkout.session import CheckoutSession, PaymentStatus
from paydesk.config import CATALOG_PAGE_SIZE, WALLET_SEED_BALANCE
from paydesk.errors import NoActiveSessionError
from paydesk.infra.catalog_client import CatalogClient
from paydesk.infra.local_state import LocalState
from paydesk.selection.aggregator import SelectionAggregator
from paydesk.wallet.ledger import WalletLedger

logger = logging.getLogger(__name__)


class Desk:
    def __init__(
        self,
        store,
        catalog_client: Optional[CatalogClient] = None,
        page_size: int = CATALOG_PAGE_SIZE,
        seed_balance: float = WALLET_SEED_BALANCE,
    ):
        self.state = LocalState(store)
        self.ledger = WalletLedger(self.state, seed_balance=seed_balance)
        self.catalog_client = catalog_client or CatalogClient()
        self.pager = CatalogPager(self.catalog_client.fetch_products, page_size=page_size)
        self.selection = SelectionAggregator()
        self.session: Optional[CheckoutSession] = None

    def begin_review(self) -> CheckoutSession:
        """
        Passage catalogue -> récapitulatif.
        - Copie figée de la sélection transmise à une nouvelle session
        - Sélection vide: EmptySelectionError (la session précédente est conservée)
        """
        session = CheckoutSession.start(
            self.selection.snapshot(),
            customer_label(self.state.user_profile()),
        )
        self.session = session
        return session

    def require_session(self) -> CheckoutSession:
        if self.session is None:
            raise NoActiveSessionError()
        return self.session

    def pay(self) -> PaymentStatus:
        """Paiement de la session courante; la sélection vivante est vidée une fois payé."""
        session = self.require_session()
        status = session.attempt_payment(self.ledger)
        if session.payment_processed:
            self.selection.clear()
        return status

    def finish(self) -> None:
        """Fin du parcours (retour au catalogue): la session est abandonnée."""
        self.session = None

    def reset(self) -> None:
        self.selection.clear()
        self.session = None


def get_desk(request: Request) -> Desk:
    return request.app.state.desk

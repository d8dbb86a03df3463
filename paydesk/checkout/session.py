"""
Session de paiement: bundle transitoire entre l'écran récapitulatif et l'écran reçu.

Machine à états (toute transition passe par _TRANSITIONS):
    pending ──(solde insuffisant)──> insufficient ──(dismiss)──> pending
    pending ──(1er paiement, débit)──> confirmed ──(reçu)──> receipt_ready
Un nouvel essai une fois payé ne débite jamais: il ré-ouvre seulement la confirmation.

La référence et la date sont générées une seule fois, à la création.
La session vit en mémoire (paydesk.desk); elle ne survit pas à un redémarrage.
"""
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union
import logging
import secrets
import string
import threading

from paydesk.errors import (
    EmptySelectionError,
    IllegalTransitionError,
    InvalidAmountError,
    VerificationIncompleteError,
)
from paydesk.selection.models import CheckoutSnapshot
from paydesk.utils.parsing import format_amount
from .receipt import Receipt, ReceiptArtifact, receipt_artifact
from .verification import VerificationPad

logger = logging.getLogger(__name__)

REFERENCE_ALPHABET = string.ascii_lowercase + string.digits
REFERENCE_LENGTH = 10


class PaymentStatus(str, Enum):
    PENDING = "pending"
    INSUFFICIENT = "insufficient"
    CONFIRMED = "confirmed"
    RECEIPT_READY = "receipt_ready"


_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.INSUFFICIENT, PaymentStatus.CONFIRMED},
    PaymentStatus.INSUFFICIENT: {PaymentStatus.PENDING},
    PaymentStatus.CONFIRMED: {PaymentStatus.RECEIPT_READY},
    PaymentStatus.RECEIPT_READY: set(),
}


def generate_reference() -> str:
    return "".join(secrets.choice(REFERENCE_ALPHABET) for _ in range(REFERENCE_LENGTH))


def format_long_date(day: date) -> str:
    """date(2026, 10, 18) -> '18 October 2026'"""
    return f"{day.day} {day.strftime('%B %Y')}"


class CheckoutSession:
    def __init__(
        self,
        snapshot: CheckoutSnapshot,
        customer_label: str,
        reference: str,
        payment_date: str,
        verification: Optional[VerificationPad] = None,
    ):
        self.snapshot = snapshot
        self.customer_label = customer_label
        self.reference = reference
        self.date = payment_date
        self.verification = verification or VerificationPad()
        self.status = PaymentStatus.PENDING
        # les routes synchrones tournent dans le pool de threads de FastAPI
        self._lock = threading.Lock()

    @classmethod
    def start(
        cls,
        snapshot: CheckoutSnapshot,
        customer_label: str,
        today: Callable[[], date] = date.today,
        make_reference: Callable[[], str] = generate_reference,
    ) -> "CheckoutSession":
        """
        Entrée sur le récapitulatif.
        - Sélection vide: EmptySelectionError (retour au catalogue), aucune référence générée.
        """
        if snapshot.is_empty:
            raise EmptySelectionError()
        session = cls(
            snapshot=snapshot,
            customer_label=customer_label,
            reference=make_reference(),
            payment_date=format_long_date(today()),
        )
        logger.info("checkout.start reference=%s lines=%s amount=%s", session.reference, len(snapshot.lines), session.amount)
        return session

    @property
    def amount(self) -> float:
        return self.snapshot.total_deduction

    @property
    def payment_processed(self) -> bool:
        return self.status in (PaymentStatus.CONFIRMED, PaymentStatus.RECEIPT_READY)

    def _transition(self, target: PaymentStatus) -> None:
        if target not in _TRANSITIONS[self.status]:
            raise IllegalTransitionError(self.status, target)
        logger.info("checkout.transition reference=%s %s -> %s", self.reference, self.status.value, target.value)
        self.status = target

    def attempt_payment(self, ledger) -> PaymentStatus:
        """
        Tente le paiement contre le porte-monnaie.
        - Déjà payé: aucun débit, le statut courant est renvoyé (ré-ouverture de la confirmation)
        - Solde insuffisant: statut insufficient, porte-monnaie intact
        - Montant total négatif: InvalidAmountError, porte-monnaie intact
        - Sinon: débit du montant total puis statut confirmed
        Vérification et débit se font sous verrou: deux appels concurrents ne débitent qu'une fois.
        """
        with self._lock:
            if self.payment_processed:
                return self.status
            if self.status is PaymentStatus.INSUFFICIENT:
                raise IllegalTransitionError(self.status, PaymentStatus.CONFIRMED)
            if not self.verification.is_complete:
                raise VerificationIncompleteError("Code de vérification incomplet")
            if self.amount < 0:
                raise InvalidAmountError(f"Montant invalide: {self.amount}")
            if not ledger.sufficient_for(self.amount):
                self._transition(PaymentStatus.INSUFFICIENT)
                return self.status
            self._transition(PaymentStatus.CONFIRMED)
            ledger.debit(self.amount)
            return self.status

    def dismiss_insufficient_funds(self) -> PaymentStatus:
        with self._lock:
            self._transition(PaymentStatus.PENDING)
            return self.status

    def receipt(self) -> Receipt:
        return Receipt(
            snapshot=self.snapshot,
            reference=self.reference,
            date=self.date,
            customer_label=self.customer_label,
        )

    def to_receipt(self, deliver: Callable[[Receipt], Any]) -> Union[Any, ReceiptArtifact]:
        """
        Transmet le reçu à l'écran reçu via `deliver`.
        - Uniquement une fois payé (IllegalTransitionError sinon)
        - Si `deliver` lève: repli sur un fichier texte téléchargeable
        """
        with self._lock:
            if not self.payment_processed:
                raise IllegalTransitionError(self.status, PaymentStatus.RECEIPT_READY)
            if self.status is PaymentStatus.CONFIRMED:
                self._transition(PaymentStatus.RECEIPT_READY)
        receipt = self.receipt()
        try:
            return deliver(receipt)
        except Exception:
            logger.exception("checkout.to_receipt handoff failed reference=%s, text fallback", self.reference)
            return receipt_artifact(receipt)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reference": self.reference,
            "date": self.date,
            "customer_label": self.customer_label,
            "status": self.status.value,
            "payment_processed": self.payment_processed,
            "amount": self.amount,
            "amount_display": format_amount(self.amount),
            "verification": {
                "slots": self.verification.slots,
                "focus": self.verification.focus,
                "complete": self.verification.is_complete,
            },
            **self.snapshot.to_dict(),
        }

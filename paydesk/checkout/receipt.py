"""
Reçu de paiement.
- Receipt: paquet transmis à l'écran reçu (instantané, référence, date, libellé client)
- receipt_text / ReceiptArtifact: repli texte téléchargeable si la transmission échoue
"""
from dataclasses import dataclass
from typing import Any, Dict, List

from paydesk.selection.models import CheckoutSnapshot
from paydesk.utils.parsing import format_amount


@dataclass(frozen=True)
class Receipt:
    snapshot: CheckoutSnapshot
    reference: str
    date: str
    customer_label: str

    @property
    def amount(self) -> float:
        return self.snapshot.total_deduction

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reference": self.reference,
            "date": self.date,
            "customer_label": self.customer_label,
            "amount": self.amount,
            "amount_display": format_amount(self.amount),
            **self.snapshot.to_dict(),
        }


@dataclass(frozen=True)
class ReceiptArtifact:
    filename: str
    content: str
    media_type: str = "text/plain; charset=utf-8"


def receipt_lines(receipt: Receipt) -> List[str]:
    return [
        "Payment Successful",
        f"Ref Number: {receipt.reference}",
        f"Date: {receipt.date}",
        f"Amount: {format_amount(receipt.amount)}",
        f"Customer: {receipt.customer_label}",
    ]


def receipt_artifact(receipt: Receipt) -> ReceiptArtifact:
    return ReceiptArtifact(
        filename=f"receipt-{receipt.reference}.txt",
        content="\n".join(receipt_lines(receipt)),
    )

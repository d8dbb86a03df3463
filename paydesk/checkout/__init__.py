"""
Feature 'checkout': session de paiement, pavé de vérification, reçu.
"""
from .receipt import Receipt, ReceiptArtifact, receipt_artifact, receipt_lines
from .session import CheckoutSession, PaymentStatus, format_long_date, generate_reference
from .verification import VerificationPad, CODE_LENGTH

__all__ = [
    "Receipt",
    "ReceiptArtifact",
    "receipt_artifact",
    "receipt_lines",
    "CheckoutSession",
    "PaymentStatus",
    "format_long_date",
    "generate_reference",
    "VerificationPad",
    "CODE_LENGTH",
]

"""
Politiques "parse-or-default" pour les saisies numériques et arrondi monétaire.
- Remise: nombre tel quel, chaîne lue jusqu'au premier caractère non numérique, tout le reste -> 0
- Quantité: entier strictement positif, sinon None (l'appelant ignore la saisie)
- Déduction: même lecture du nombre en tête ("12.5 KES" -> 12.5), 0 si illisible
- Arrondi à l'unité monétaire, demi-unité éloignée de zéro (ROUND_HALF_UP de decimal)
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Optional
import math
import re

from paydesk.config import CURRENCY_CODE


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


# Nombre en tête de chaîne: "12.5 KES" -> 12.5, "abc" -> aucun
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _leading_float(text: str) -> float:
    match = _LEADING_NUMBER.match(text)
    if not match:
        return 0.0
    return _finite_or_zero(float(match.group(1)))


def coerce_discount_percent(raw: Any) -> float:
    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        return _finite_or_zero(float(raw))
    if isinstance(raw, str):
        return _leading_float(raw)
    return 0.0


def parse_quantity(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        qty = raw
    else:
        try:
            qty = int(str(raw if raw is not None else "").strip())
        except ValueError:
            return None
    return qty if qty >= 1 else None


def parse_deduction(raw: Any) -> float:
    if isinstance(raw, bool) or raw is None:
        return 0.0
    if isinstance(raw, str):
        return _leading_float(raw)
    try:
        return _finite_or_zero(float(raw))
    except (TypeError, ValueError):
        return 0.0


def as_amount(value: Any) -> float:
    """Valeur monétaire déjà stockée; 0 si non numérique."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return _finite_or_zero(float(value))


def round_amount(value: float) -> int:
    """Arrondi à l'unité; 0.5 s'éloigne de zéro (2.5 -> 3, -2.5 -> -3)."""
    try:
        return int(Decimal(repr(float(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError, OverflowError):
        return 0


def format_amount(value: float, currency: str = CURRENCY_CODE) -> str:
    """2400 -> '2,400.00 KES'"""
    return f"{as_amount(value):,.2f} {currency}"

"""
Agrégateur de sélection: identifiant produit -> ligne (quantité, prix, remise, déduction).

Règles:
- Toute opération qui change la quantité recalcule la déduction depuis la remise stockée:
  deduction = round(unit_price * (1 - remise/100) * quantité)
- set_deduction est la seule opération qui peut s'écarter de la formule (saisie manuelle),
  jusqu'au prochain changement de quantité.
- Saisies invalides: ignorées (quantité) ou ramenées à 0 (déduction), jamais d'exception.
"""
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional
import logging

from paydesk.utils.parsing import (
    as_amount,
    coerce_discount_percent,
    parse_deduction,
    parse_quantity,
    round_amount,
)
from .models import CheckoutSnapshot, SelectionLine

logger = logging.getLogger(__name__)


def _product_key(product_id: Any) -> str:
    return str(product_id if product_id is not None else "").strip()


def _with_quantity(line: SelectionLine, quantity: int) -> SelectionLine:
    return replace(
        line,
        quantity=quantity,
        deduction=round_amount(line.per_unit_deduction * quantity),
    )


class SelectionAggregator:
    def __init__(self):
        # dict ordonné: l'ordre d'ajout est l'ordre d'affichage
        self._lines: Dict[str, SelectionLine] = {}

    @property
    def lines(self) -> List[SelectionLine]:
        return list(self._lines.values())

    def get(self, product_id: Any) -> Optional[SelectionLine]:
        return self._lines.get(_product_key(product_id))

    def __len__(self) -> int:
        return len(self._lines)

    def add(self, product: Mapping[str, Any]) -> SelectionLine:
        """Ajoute une unité d'un produit (création de ligne ou quantité + 1)."""
        key = _product_key(product.get("id"))
        existing = self._lines.get(key)
        if existing:
            line = _with_quantity(existing, existing.quantity + 1)
        else:
            discount = coerce_discount_percent(product.get("discountPercentage"))
            unit_price = as_amount(product.get("price"))
            line = SelectionLine(
                product_id=key,
                title=str(product.get("title") or ""),
                unit_price=unit_price,
                quantity=1,
                discount_percent=discount,
                deduction=round_amount(unit_price * (1 - discount / 100)),
            )
        self._lines[key] = line
        logger.debug("selection.add product_id=%s qty=%s", key, line.quantity)
        return line

    def remove(self, product_id: Any) -> Optional[SelectionLine]:
        """Retire une unité; supprime la ligne à 0. Retourne la ligne restante (ou None)."""
        key = _product_key(product_id)
        existing = self._lines.get(key)
        if not existing:
            return None
        quantity = existing.quantity - 1
        if quantity <= 0:
            del self._lines[key]
            return None
        line = _with_quantity(existing, quantity)
        self._lines[key] = line
        return line

    def set_quantity(self, product_id: Any, raw_value: Any) -> Optional[SelectionLine]:
        key = _product_key(product_id)
        existing = self._lines.get(key)
        quantity = parse_quantity(raw_value)
        if not existing or quantity is None:
            return existing
        line = _with_quantity(existing, quantity)
        self._lines[key] = line
        return line

    def set_deduction(self, product_id: Any, raw_value: Any) -> Optional[SelectionLine]:
        key = _product_key(product_id)
        existing = self._lines.get(key)
        if not existing:
            return None
        line = replace(existing, deduction=parse_deduction(raw_value))
        self._lines[key] = line
        return line

    def clear(self) -> None:
        self._lines.clear()

    @property
    def gross_total(self) -> float:
        return sum(line.unit_price * line.quantity for line in self._lines.values())

    @property
    def total_deduction(self) -> float:
        return sum(as_amount(line.deduction) for line in self._lines.values())

    def snapshot(self) -> CheckoutSnapshot:
        """Copie figée transmise au récapitulatif (indépendante de la sélection vivante)."""
        return CheckoutSnapshot(
            lines=tuple(self._lines.values()),
            gross_total=self.gross_total,
            total_deduction=self.total_deduction,
        )

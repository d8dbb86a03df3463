"""
Modèles de la sélection: ligne d'article et instantané transmis au récapitulatif.
Les deux sont immuables; l'agrégateur remplace une ligne à chaque modification.
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class SelectionLine:
    product_id: str
    title: str
    unit_price: float
    quantity: int
    discount_percent: float
    deduction: float

    @property
    def per_unit_deduction(self) -> float:
        return self.unit_price * (1 - self.discount_percent / 100)

    @property
    def gross(self) -> float:
        return self.unit_price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CheckoutSnapshot:
    lines: Tuple[SelectionLine, ...]
    gross_total: float
    total_deduction: float

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lines": [line.to_dict() for line in self.lines],
            "gross_total": self.gross_total,
            "total_deduction": self.total_deduction,
        }

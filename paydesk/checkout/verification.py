"""
Pavé de vérification: six cases d'un caractère, avec déplacement du focus.
Simple garde d'interface: aucun contrôle du code contre un code émis côté serveur.
"""
from typing import List

from paydesk.config import VERIFICATION_PREFILL

CODE_LENGTH = 6


class VerificationPad:
    def __init__(self, prefill: str = VERIFICATION_PREFILL):
        chars = list((prefill or "")[:CODE_LENGTH])
        self._slots: List[str] = chars + [""] * (CODE_LENGTH - len(chars))
        self.focus = 0

    @property
    def slots(self) -> List[str]:
        return list(self._slots)

    @property
    def code(self) -> str:
        return "".join(self._slots)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < CODE_LENGTH:
            raise IndexError(f"case {index} hors de 0..{CODE_LENGTH - 1}")

    def write(self, index: int, value: str) -> None:
        """Garde le dernier caractère saisi; une case remplie passe le focus à la suivante."""
        self._check_index(index)
        normalized = (value or "")[-1:]
        self._slots[index] = normalized
        self.focus = index
        if normalized and index < CODE_LENGTH - 1:
            self.focus = index + 1

    def backspace(self, index: int) -> None:
        """Case remplie: vidée sur place. Case vide: focus sur la précédente."""
        self._check_index(index)
        self.focus = index
        if self._slots[index]:
            self._slots[index] = ""
        elif index > 0:
            self.focus = index - 1

    @property
    def is_complete(self) -> bool:
        return all(value.strip() for value in self._slots)

"""
Porte-monnaie local: un solde unique persisté sous la clé wallet_balance.

- read_balance(): solde stocké s'il est fini et >= 0, sinon le solde initial (jamais écrit à la lecture)
- sufficient_for(amount): amount <= solde
- debit(amount): max(0, solde - amount) persisté, amount ramené à 0 s'il est négatif; pas de compensation possible
- Stockage indisponible: lecture -> solde initial, écriture -> ignorée (journalisée)

L'appelant garantit au plus un débit par paiement (voir paydesk.checkout.session).
"""
import logging
import math

from paydesk.config import WALLET_SEED_BALANCE
from paydesk.infra.local_state import LocalState, WALLET_BALANCE_KEY
from paydesk.utils.parsing import as_amount

logger = logging.getLogger(__name__)


class WalletLedger:
    def __init__(self, state: LocalState, seed_balance: float = WALLET_SEED_BALANCE):
        self._state = state
        self._seed_balance = float(seed_balance)

    @property
    def seed_balance(self) -> float:
        return self._seed_balance

    def read_balance(self) -> float:
        raw = self._state.read(WALLET_BALANCE_KEY)
        if raw is None:
            return self._seed_balance
        try:
            balance = float(raw)
        except (TypeError, ValueError):
            logger.warning("wallet.read_balance malformed value=%r", raw)
            return self._seed_balance
        if not math.isfinite(balance) or balance < 0:
            return self._seed_balance
        return balance

    def sufficient_for(self, amount: float) -> bool:
        return amount <= self.read_balance()

    def debit(self, amount: float) -> float:
        """
        Débite et retourne le nouveau solde (même si l'écriture a échoué).
        Un montant négatif ou non numérique ne débite rien: le solde ne peut jamais augmenter ici.
        """
        amount = max(0.0, as_amount(amount))
        new_balance = max(0.0, self.read_balance() - amount)
        if self._state.write(WALLET_BALANCE_KEY, repr(new_balance)):
            logger.info("wallet.debit amount=%s balance=%s", amount, new_balance)
        return new_balance

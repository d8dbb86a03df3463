"""
Exceptions métier de paydesk.
Aucune n'est fatale: chacune a un chemin de repli (valeur par défaut, redirection, 409).
Les gestionnaires HTTP sont enregistrés dans paydesk.app_setup.exceptions.
"""
from paydesk.config import BROWSE_PATH


class PaydeskError(Exception):
    """Base des erreurs métier."""


class StorageUnavailableError(PaydeskError):
    """Le stockage local (mémoire/Redis) ne répond pas."""


class CatalogUnavailableError(PaydeskError):
    """La source catalogue est injoignable ou a répondu une erreur."""


class AuthUnavailableError(PaydeskError):
    """La source d'authentification est injoignable."""


class CheckoutRedirect(PaydeskError):
    """
    Contexte de paiement absent ou invalide: l'appelant doit revenir à l'écran catalogue.
    - Levée quand la sélection est vide à l'entrée du récapitulatif
    - Levée quand aucune session de paiement n'existe (ex: après rechargement)
    """

    def __init__(self, detail: str, redirect_to: str = BROWSE_PATH):
        super().__init__(detail)
        self.detail = detail
        self.redirect_to = redirect_to


class EmptySelectionError(CheckoutRedirect):
    def __init__(self):
        super().__init__("Aucun article sélectionné")


class NoActiveSessionError(CheckoutRedirect):
    def __init__(self):
        super().__init__("Aucune session de paiement active")


class IllegalTransitionError(PaydeskError):
    """Transition refusée par la machine à états du paiement."""

    def __init__(self, current, target):
        super().__init__(f"Transition interdite: {current.value} -> {target.value}")
        self.current = current
        self.target = target


class VerificationIncompleteError(PaydeskError):
    """Les six cases du code de vérification ne sont pas toutes remplies."""


class InvalidAmountError(PaydeskError):
    """Montant à débiter négatif (déductions saisies à la main): le paiement est refusé."""

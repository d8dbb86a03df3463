"""
Feature 'selection': lignes d'articles, déductions, instantané pour le récapitulatif.
"""
from .aggregator import SelectionAggregator
from .models import CheckoutSnapshot, SelectionLine

__all__ = ["SelectionAggregator", "CheckoutSnapshot", "SelectionLine"]

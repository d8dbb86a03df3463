"""
paydesk: parcours de paiement (catalogue paginé, sélection, porte-monnaie local, reçu).
"""

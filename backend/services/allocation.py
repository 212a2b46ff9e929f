"""
Allocation Resolver.

Fonction pure : aucune lecture ni écriture en base. Reçoit les candidats
(vendor, price, stock) et la quantité demandée, retourne le gagnant ou None.
"""

from __future__ import annotations

from typing import Iterable

from backend.services.inventory import Candidate


def candidate_sort_key(c: Candidate):
    # ordre total : prix croissant, puis plus petit vendor_id
    return (c.price, c.vendor_id)


def resolve_allocation(candidates: Iterable[Candidate], quantity: int) -> Candidate | None:
    """
    Premier candidat (price ASC, vendor_id ASC) avec stock >= quantity.

    Pas de découpage multi-vendeurs : si aucun vendeur ne couvre seul la
    quantité, l'allocation échoue même si la somme des stocks suffirait.
    L'échec est une valeur de retour (None), pas une exception.
    """
    eligible = sorted((c for c in candidates if c.stock > 0), key=candidate_sort_key)
    for c in eligible:
        if c.stock >= quantity:
            return c
    return None

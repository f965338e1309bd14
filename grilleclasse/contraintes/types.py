from __future__ import annotations

from enum import Enum


class TypeContrainte(str, Enum):
    """Enum centralisant les types logiques de contraintes.

    Hérite de `str` pour une sérialisation JSON directe (valeur = nom stable).
    """

    # Unaires (élève)
    ABSOLUE = "absolute"
    DANS_RANG = "must_be_in_row"

    # Binaires (paire d'élèves)
    ENSEMBLE = "together"
    PAS_ENSEMBLE = "not_together"
    ELOIGNES = "far_apart"

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Représente une *place précise* dans la grille de la salle.

    Attributs
    ---------
    rang : int
    Indice de rangée, du tableau vers le fond (0-indexé, 0 = premier rang).
    colonne : int
    Indice de colonne, de gauche à droite (0-indexé).


    Cette classe est immuable pour garantir la stabilité des clés
    dans les dictionnaires/ensembles pendant la recherche.
    """

    rang: int
    colonne: int

    def a_gauche(self) -> "Position":
        """Retourne la place immédiatement à gauche (sans contrôle des bornes)."""
        return Position(self.rang, self.colonne - 1)

    def a_droite(self) -> "Position":
        """Retourne la place immédiatement à droite (sans contrôle des bornes)."""
        return Position(self.rang, self.colonne + 1)


def adjacents_horizontalement(a: Position, b: Position) -> bool:
    """Retourne `True` si `a` et `b` sont sur le même rang à une colonne d'écart."""
    return a.rang == b.rang and abs(a.colonne - b.colonne) == 1


def distance_euclidienne(a: Position, b: Position) -> float:
    """Calcule la distance euclidienne entre deux places de la grille."""
    d_rang: int = a.rang - b.rang
    d_colonne: int = a.colonne - b.colonne
    return math.sqrt(d_rang * d_rang + d_colonne * d_colonne)

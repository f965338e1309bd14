from __future__ import annotations

from typing import Dict, List, Optional

from .eleve import Eleve
from .position import Position

Grille = List[List[Optional[str]]]


class Placement:
    """Affectation partielle élèves → sièges, propre à une résolution.

    Tient à la fois la grille (nom ou `None` par case) et l'index inverse
    élève → position, mis à jour ensemble à chaque pose/retrait.
    """

    def __init__(self, nb_rangs: int, nb_colonnes: int) -> None:
        self._grille: Grille = [[None] * nb_colonnes for _ in range(nb_rangs)]
        self._positions: Dict[Eleve, Position] = {}

    def placer(self, eleve: Eleve, pos: Position) -> None:
        """Pose `eleve` en `pos` ; la case doit être libre."""
        assert self._grille[pos.rang][pos.colonne] is None, f"siège {pos} déjà occupé"
        self._grille[pos.rang][pos.colonne] = eleve.nom()
        self._positions[eleve] = pos

    def retirer(self, eleve: Eleve) -> None:
        """Annule la pose de `eleve`."""
        pos: Position = self._positions.pop(eleve)
        self._grille[pos.rang][pos.colonne] = None

    def position_de(self, eleve: Eleve) -> Optional[Position]:
        """Retourne la position de `eleve`, ou `None` s'il n'est pas placé."""
        return self._positions.get(eleve)

    def est_place(self, eleve: Eleve) -> bool:
        return eleve in self._positions

    def est_libre(self, pos: Position) -> bool:
        return self._grille[pos.rang][pos.colonne] is None

    def nb_places(self) -> int:
        return len(self._positions)

    def affectation(self) -> Dict[Eleve, Position]:
        """Copie de l'index élève → position."""
        return dict(self._positions)

    def copie_grille(self) -> Grille:
        """Copie profonde de la grille (la grille interne continue d'être mutée)."""
        return [list(ligne) for ligne in self._grille]

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .base import ContrainteBinaire
from .types import TypeContrainte
from ..modele.eleve import Eleve
from ..modele.placement import Placement
from ..modele.position import Position, adjacents_horizontalement, distance_euclidienne
from ..modele.salle import Salle


class DoiventEtreEnsemble(ContrainteBinaire):
    """Exige que A et B soient côte à côte : même rang, colonnes voisines.

    L'adjacence verticale ne compte pas.
    """

    priorite_domaine = 2

    def type_contrainte(self) -> TypeContrainte:
        return TypeContrainte.ENSEMBLE

    def places_autorisees(self, eleve: Eleve, salle: Salle, placement: Placement) -> Optional[List[Position]]:
        if not self.mentionne(eleve):
            return None
        pos_partenaire: Optional[Position] = placement.position_de(self.autre(eleve))
        if pos_partenaire is None:
            return None
        return salle.voisins_horizontaux(pos_partenaire)

    def est_coherente(self, eleve: Eleve, pos: Position, salle: Salle, placement: Placement) -> bool:
        pos_partenaire: Optional[Position] = placement.position_de(self.autre(eleve))
        if pos_partenaire is not None:
            return adjacents_horizontalement(pos, pos_partenaire)
        # Partenaire pas encore placé : il faut qu'une case voisine reste libre
        # à cet instant (rien ne garantit qu'elle le restera).
        return any(
            salle.est_disponible(v) and placement.est_libre(v)
            for v in salle.voisins_horizontaux(pos)
        )

    def est_satisfaite(self, affectation: Dict[Eleve, Position]) -> bool:
        pa: Optional[Position] = affectation.get(self.a)
        pb: Optional[Position] = affectation.get(self.b)
        return pa is not None and pb is not None and adjacents_horizontalement(pa, pb)

    def texte_humain(self) -> str:
        return f"{self.a.nom()} et {self.b.nom()} doivent être assis côte à côte"


class NeDoiventPasEtreEnsemble(ContrainteBinaire):
    """Interdit que A et B soient côte à côte sur le même rang.

    Devant/derrière ou en diagonale reste permis.
    """

    def type_contrainte(self) -> TypeContrainte:
        return TypeContrainte.PAS_ENSEMBLE

    def est_coherente(self, eleve: Eleve, pos: Position, salle: Salle, placement: Placement) -> bool:
        pos_autre: Optional[Position] = placement.position_de(self.autre(eleve))
        if pos_autre is None:
            return True  # revérifiée quand l'autre sera placé
        return not adjacents_horizontalement(pos, pos_autre)

    def est_satisfaite(self, affectation: Dict[Eleve, Position]) -> bool:
        pa: Optional[Position] = affectation.get(self.a)
        pb: Optional[Position] = affectation.get(self.b)
        if pa is None or pb is None:
            return True
        return not adjacents_horizontalement(pa, pb)

    def texte_humain(self) -> str:
        return f"{self.a.nom()} et {self.b.nom()} ne doivent pas être assis côte à côte"


class DoiventEtreEloignes(ContrainteBinaire):
    """Exige que A et B soient séparés d'au moins `d` (distance euclidienne en cases)."""

    def __init__(self, a: Eleve, b: Eleve, d: float) -> None:
        super().__init__(a, b)
        self.d: float = d

    def type_contrainte(self) -> TypeContrainte:
        return TypeContrainte.ELOIGNES

    def est_coherente(self, eleve: Eleve, pos: Position, salle: Salle, placement: Placement) -> bool:
        pos_autre: Optional[Position] = placement.position_de(self.autre(eleve))
        if pos_autre is None:
            return True
        return distance_euclidienne(pos, pos_autre) >= self.d

    def est_satisfaite(self, affectation: Dict[Eleve, Position]) -> bool:
        pa: Optional[Position] = affectation.get(self.a)
        pb: Optional[Position] = affectation.get(self.b)
        if pa is None or pb is None:
            return True
        return distance_euclidienne(pa, pb) >= self.d

    def texte_humain(self) -> str:
        return f"{self.a.nom()} et {self.b.nom()} doivent être éloignés d'au moins {self.d:g}"

    def code_machine(self) -> Dict[str, Any]:
        code: Dict[str, Any] = super().code_machine()
        code["minDistance"] = self.d
        return code

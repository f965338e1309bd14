from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from .base import Contrainte
from .types import TypeContrainte
from ..modele.eleve import Eleve
from ..modele.placement import Placement
from ..modele.position import Position
from ..modele.salle import Salle


class DoitEtreExactementIci(Contrainte):
    """Exige que l'élève soit à une position exacte (rang, colonne).

    La case est réservée : aucun autre élève ne peut la prendre (contrôle
    fait par le solveur, qui connaît toutes les réservations).
    """

    priorite_domaine = 0

    def __init__(self, eleve: Eleve, ou: Position) -> None:
        self.eleve: Eleve = eleve
        self.ou: Position = ou

    def type_contrainte(self) -> TypeContrainte:
        return TypeContrainte.ABSOLUE

    def implique(self) -> Sequence[Eleve]:
        return [self.eleve]

    def places_autorisees(self, eleve: Eleve, salle: Salle, placement: Placement) -> Optional[List[Position]]:
        return [self.ou] if eleve == self.eleve else None

    def est_coherente(self, eleve: Eleve, pos: Position, salle: Salle, placement: Placement) -> bool:
        return eleve != self.eleve or pos == self.ou

    def est_satisfaite(self, affectation: Dict[Eleve, Position]) -> bool:
        pos: Optional[Position] = affectation.get(self.eleve)
        if pos != self.ou:
            return False
        return all(e == self.eleve for e, p in affectation.items() if p == self.ou)

    def texte_humain(self) -> str:
        return f"{self.eleve.nom()} doit être au rang {self.ou.rang}, colonne {self.ou.colonne}"

    def code_machine(self) -> Dict[str, Any]:
        return {
            "type": self.type_contrainte().value,
            "student1": self.eleve.nom(),
            "row": self.ou.rang,
            "col": self.ou.colonne,
        }


class DoitEtreDansRang(Contrainte):
    """Exige que l'élève soit assis quelque part dans le rang `rang`."""

    priorite_domaine = 1

    def __init__(self, eleve: Eleve, rang: int) -> None:
        self.eleve: Eleve = eleve
        self.rang: int = rang

    def type_contrainte(self) -> TypeContrainte:
        return TypeContrainte.DANS_RANG

    def implique(self) -> Sequence[Eleve]:
        return [self.eleve]

    def places_autorisees(self, eleve: Eleve, salle: Salle, placement: Placement) -> Optional[List[Position]]:
        if eleve != self.eleve:
            return None
        return salle.places_du_rang(self.rang)

    def est_coherente(self, eleve: Eleve, pos: Position, salle: Salle, placement: Placement) -> bool:
        return eleve != self.eleve or pos.rang == self.rang

    def est_satisfaite(self, affectation: Dict[Eleve, Position]) -> bool:
        pos: Optional[Position] = affectation.get(self.eleve)
        return pos is not None and pos.rang == self.rang

    def texte_humain(self) -> str:
        return f"{self.eleve.nom()} doit être dans le rang {self.rang}"

    def code_machine(self) -> Dict[str, Any]:
        return {"type": self.type_contrainte().value, "student1": self.eleve.nom(), "row": self.rang}

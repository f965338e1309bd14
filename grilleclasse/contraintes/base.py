from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from ..modele.eleve import Eleve
from ..modele.placement import Placement
from ..modele.position import Position
from ..modele.salle import Salle
from .types import TypeContrainte


class Contrainte(ABC):
    """Classe de base pour les contraintes (unaires, binaires).

    Méthodes à implémenter
    ----------------------
    - `type_contrainte()` : retourne un membre de `TypeContrainte`.
    - `implique()` : renvoie les élèves concernés (taille 1 ou 2).
    - `places_autorisees(eleve, salle, placement)` : optionnel, restreint le
      domaine d'un élève au moment où le solveur le choisit.
    - `est_coherente(eleve, pos, salle, placement)` : valide la pose de `eleve`
      en `pos` sur l'affectation partielle courante.
    - `est_satisfaite(affectation)` : valide une affectation complète.
    - `texte_humain()` : texte lisible pour l'interface.
    - `code_machine()` : représentation stable et sérialisable (dict JSON-friendly).

    Attribut `priorite_domaine`
    ---------------------------
    Rang de la contrainte quand plusieurs peuvent fournir un domaine pour le
    même élève (plus petit = prioritaire) ; `None` si la contrainte ne
    restreint jamais de domaine.
    """

    priorite_domaine: Optional[int] = None

    @abstractmethod
    def type_contrainte(self) -> TypeContrainte:
        """Retourne le type logique de la contrainte."""
        raise NotImplementedError

    @abstractmethod
    def implique(self) -> Sequence[Eleve]:
        """Retourne la liste des élèves impliqués (1 ou 2)."""
        raise NotImplementedError

    def mentionne(self, eleve: Eleve) -> bool:
        """Indique si `eleve` fait partie des élèves impliqués."""
        return eleve in self.implique()

    def places_autorisees(self, eleve: Eleve, salle: Salle, placement: Placement) -> Optional[List[Position]]:
        """Retourne les places candidates pour `eleve`, ou `None` si aucun filtrage.

        Les places renvoyées ne sont pas encore filtrées sur l'occupation ni
        sur le genre : le solveur s'en charge.
        """
        return None

    @abstractmethod
    def est_coherente(self, eleve: Eleve, pos: Position, salle: Salle, placement: Placement) -> bool:
        """Indique si la pose (déjà effectuée) de `eleve` en `pos` respecte la contrainte."""
        raise NotImplementedError

    @abstractmethod
    def est_satisfaite(self, affectation: Dict[Eleve, Position]) -> bool:
        """Indique si la contrainte est satisfaite sous une affectation complète."""
        raise NotImplementedError

    @abstractmethod
    def texte_humain(self) -> str:
        """Texte concis, lisible par un humain."""
        raise NotImplementedError

    @abstractmethod
    def code_machine(self) -> Dict[str, Any]:
        """Représentation sérialisable, stable et exploitable par des outils."""
        raise NotImplementedError

    def __repr__(self) -> str:  # pragma: no cover - représentation
        return f"{self.__class__.__name__}({self.code_machine()!r})"


class ContrainteBinaire(Contrainte, ABC):
    """Base commune des contraintes portant sur une paire d'élèves (a, b)."""

    def __init__(self, a: Eleve, b: Eleve) -> None:
        self.a: Eleve = a
        self.b: Eleve = b

    def implique(self) -> Sequence[Eleve]:
        return [self.a, self.b]

    def autre(self, eleve: Eleve) -> Eleve:
        """Retourne le partenaire de `eleve` dans la paire."""
        return self.b if eleve == self.a else self.a

    def code_machine(self) -> Dict[str, Any]:
        return {"type": self.type_contrainte().value, "student1": self.a.nom(), "student2": self.b.nom()}

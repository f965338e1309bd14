from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from ..modele.eleve import Eleve
from ..modele.placement import Grille
from ..modele.position import Position
from ..modele.salle import Salle
from ..contraintes.base import Contrainte

MESSAGE_CAPACITE: str = "Not enough available seats for all students"
MESSAGE_INSATISFIABLE: str = "No valid seating arrangement found. Try relaxing some constraints."
PREFIXE_ENTREE_INVALIDE: str = "Invalid input: "


class TypeEchec(str, Enum):
    """Cause d'un échec de résolution."""

    CAPACITE = "capacity"
    INSATISFIABLE = "unsatisfiable"
    BUDGET_EPUISE = "budget_exhausted"
    ENTREE_INVALIDE = "invalid_input"


class ResultatPlacement:
    """Résultat d'une tentative de résolution : tout ou rien.

    Attributs
    ---------
    succes : bool
        `True` si une grille complète a été trouvée.
    grille : Optional[Grille]
        Grille `nb_rangs × nb_colonnes` (nom ou `None` par case) si succès.
    message : Optional[str]
        Raison lisible de l'échec, sinon `None`.
    echec : Optional[TypeEchec]
        Cause structurée de l'échec, sinon `None`.
    essais : int
        Nombre de placements testés.
    verifications : int
        Nombre de validations de contraintes effectuées.
    """

    def __init__(
        self,
        *,
        grille: Optional[Grille] = None,
        message: Optional[str] = None,
        echec: Optional[TypeEchec] = None,
        essais: int = 0,
        verifications: int = 0,
    ) -> None:
        self.grille: Optional[Grille] = grille
        self.message: Optional[str] = message
        self.echec: Optional[TypeEchec] = echec
        self.essais: int = essais
        self.verifications: int = verifications

    @property
    def succes(self) -> bool:
        return self.grille is not None

    @classmethod
    def reussite(cls, grille: Grille, essais: int = 0, verifications: int = 0) -> "ResultatPlacement":
        return cls(grille=grille, essais=essais, verifications=verifications)

    @classmethod
    def echec_de(cls, echec: TypeEchec, message: str, essais: int = 0, verifications: int = 0) -> "ResultatPlacement":
        return cls(message=message, echec=echec, essais=essais, verifications=verifications)

    def en_dict(self) -> Dict[str, Any]:
        """Forme JSON : `{"success": true, "seating": ...}` ou `{"success": false, "message": ...}`."""
        if self.succes:
            return {"success": True, "seating": self.grille}
        return {"success": False, "message": self.message}

    def __repr__(self) -> str:  # pragma: no cover - représentation
        etat = "succès" if self.succes else f"échec {self.echec.value if self.echec else '?'}"
        return f"ResultatPlacement({etat}, essais={self.essais}, verifications={self.verifications})"


class Solveur(ABC):
    """Interface abstraite des solveurs de placement."""

    @abstractmethod
    def resoudre(
        self,
        salle: Salle,
        eleves: Sequence[Eleve],
        contraintes: Sequence[Contrainte],
        *,
        essais_max: Optional[int] = None,
        budget_temps_ms: Optional[int] = None,
    ) -> ResultatPlacement:
        """Construit une affectation satisfaisant toutes les contraintes, si possible."""
        raise NotImplementedError

    def valider_final(self, salle: Salle, affectation: Dict[Eleve, Position], contraintes: Sequence[Contrainte]) -> bool:
        """Vérification d'une affectation complète, indépendante de la recherche.

        Contrôle qu'aucun siège n'est partagé, que chaque élève est sur un
        siège disponible compatible avec son genre, et que chaque contrainte
        est satisfaite.
        """
        if len(set(affectation.values())) != len(affectation):
            return False
        for eleve, pos in affectation.items():
            if not salle.accepte(eleve, pos):
                return False
        return all(c.est_satisfaite(affectation) for c in contraintes)

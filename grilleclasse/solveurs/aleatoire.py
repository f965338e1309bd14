from __future__ import annotations

import logging
import random
import time
from itertools import groupby
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Union

from .base import (
    MESSAGE_CAPACITE,
    MESSAGE_INSATISFIABLE,
    PREFIXE_ENTREE_INVALIDE,
    ResultatPlacement,
    Solveur,
    TypeEchec,
)
from .validation import genres_placables, valider_entrees
from ..modele.eleve import Eleve
from ..modele.placement import Grille, Placement
from ..modele.position import Position
from ..modele.salle import GrilleDisponibilites, GrilleGenres, Salle
from ..contraintes.base import Contrainte
from ..contraintes.binaires import DoiventEtreEnsemble
from ..contraintes.unaires import DoitEtreExactementIci

logger = logging.getLogger(__name__)

# nombre d'essais entre deux lectures de l'horloge
_PERIODE_HORLOGE: int = 256


class SolveurAleatoireRetourArriere(Solveur):
    """Retour arrière (backtracking) avec réduction de domaine et ordre front-arrière aléatoire.

    Caractéristiques
    ----------------
    - Choix de l'élève : place imposée d'abord, puis partenaire d'un binôme
      « côte à côte » déjà assis, puis élève le plus contraint.
    - Domaine calculé depuis la contrainte la plus restrictive (place exacte,
      rang imposé, voisins du partenaire), filtré sur disponibilité,
      occupation et genre.
    - Candidats triés par rang croissant puis mélangés à l'intérieur de
      chaque rang : placement compact, mais varié d'une résolution à l'autre.
    - Budgets facultatifs (essais, temps) convertis en échec propre.

    Paramètres
    ----------
    rng : random.Random, optionnel
        Source aléatoire ; par défaut le générateur global du module `random`.
    melanger_eleves : bool
        Mélange l'ordre des élèves avant la recherche (départage des égalités).
    """

    def __init__(self, *, rng: Optional[random.Random] = None, melanger_eleves: bool = False) -> None:
        self.rng: Any = rng if rng is not None else random
        self.melanger_eleves: bool = melanger_eleves

    def resoudre(
        self,
        salle: Salle,
        eleves: Sequence[Eleve],
        contraintes: Sequence[Contrainte],
        *,
        essais_max: Optional[int] = None,
        budget_temps_ms: Optional[int] = None,
    ) -> ResultatPlacement:
        probleme: Optional[str] = valider_entrees(salle, eleves, contraintes)
        if probleme is not None:
            logger.info("Entrée invalide : %s", probleme)
            return ResultatPlacement.echec_de(TypeEchec.ENTREE_INVALIDE, PREFIXE_ENTREE_INVALIDE + probleme)

        if len(eleves) > salle.nb_places_disponibles():
            return ResultatPlacement.echec_de(TypeEchec.CAPACITE, MESSAGE_CAPACITE)

        placement: Placement = Placement(salle.nb_rangs(), salle.nb_colonnes())
        if not eleves:
            return ResultatPlacement.reussite(placement.copie_grille())

        if not genres_placables(salle, eleves):
            return ResultatPlacement.echec_de(TypeEchec.INSATISFIABLE, MESSAGE_INSATISFIABLE)

        ordre: List[Eleve] = list(eleves)
        if self.melanger_eleves:
            self.rng.shuffle(ordre)

        # Contraintes par élève, places réservées, binômes « côte à côte »
        contraintes_par_eleve: Dict[Eleve, List[Contrainte]] = {e: [] for e in ordre}
        for c in contraintes:
            for e in set(c.implique()):
                contraintes_par_eleve[e].append(c)
        nb_references: Dict[Eleve, int] = {e: len(cs) for e, cs in contraintes_par_eleve.items()}
        reductrices: Dict[Eleve, List[Contrainte]] = {
            e: sorted((c for c in cs if c.priorite_domaine is not None), key=lambda c: c.priorite_domaine)
            for e, cs in contraintes_par_eleve.items()
        }

        reservations: Dict[Position, Eleve] = {}
        a_place_imposee: Set[Eleve] = set()
        for c in contraintes:
            if isinstance(c, DoitEtreExactementIci):
                reservations.setdefault(c.ou, c.eleve)
                a_place_imposee.add(c.eleve)
        binomes: List[DoiventEtreEnsemble] = [c for c in contraintes if isinstance(c, DoiventEtreEnsemble)]

        logger.debug(
            "Résolution : %d élèves, %d contraintes, grille %dx%d (%d sièges disponibles)",
            len(ordre), len(contraintes), salle.nb_rangs(), salle.nb_colonnes(), salle.nb_places_disponibles(),
        )

        essais: int = 0
        verifications: int = 0
        interrompu: bool = False
        echeance: Optional[float] = (
            time.monotonic() + budget_temps_ms / 1000.0 if budget_temps_ms and budget_temps_ms > 0 else None
        )

        def budget_depasse() -> bool:
            nonlocal interrompu
            if interrompu:
                return True
            if essais_max is not None and essais > essais_max:
                interrompu = True
            elif echeance is not None and essais % _PERIODE_HORLOGE == 0 and time.monotonic() > echeance:
                interrompu = True
            return interrompu

        def choisir_eleve() -> Eleve:
            non_places: List[Eleve] = [e for e in ordre if not placement.est_place(e)]
            for e in non_places:
                if e in a_place_imposee:
                    return e
            for c in binomes:
                for e in (c.b, c.a):
                    if not placement.est_place(e) and placement.est_place(c.autre(e)):
                        return e
            return max(non_places, key=lambda el: nb_references[el])

        def domaine(eleve: Eleve) -> List[Position]:
            candidates: Optional[List[Position]] = None
            for c in reductrices[eleve]:
                candidates = c.places_autorisees(eleve, salle, placement)
                if candidates is not None:
                    break
            if candidates is None:
                candidates = salle.places_disponibles()
            return [p for p in candidates if salle.accepte(eleve, p) and placement.est_libre(p)]

        def ordonner(candidates: List[Position]) -> List[Position]:
            # compact devant, varié à l'intérieur d'un rang
            ordonnees: List[Position] = []
            for _rang, groupe in groupby(sorted(candidates, key=lambda p: p.rang), key=lambda p: p.rang):
                meme_rang: List[Position] = list(groupe)
                self.rng.shuffle(meme_rang)
                ordonnees.extend(meme_rang)
            return ordonnees

        def placement_coherent(eleve: Eleve, pos: Position) -> bool:
            nonlocal verifications
            proprietaire: Optional[Eleve] = reservations.get(pos)
            if proprietaire is not None and proprietaire != eleve:
                return False
            for contrainte in contraintes_par_eleve[eleve]:
                verifications += 1
                if not contrainte.est_coherente(eleve, pos, salle, placement):
                    return False
            return True

        def retour_arriere() -> Optional[Grille]:
            nonlocal essais
            if placement.nb_places() == len(ordre):
                if self.valider_final(salle, placement.affectation(), contraintes):
                    return placement.copie_grille()
                return None
            eleve: Eleve = choisir_eleve()
            for pos in ordonner(domaine(eleve)):
                essais += 1
                if budget_depasse():
                    return None
                placement.placer(eleve, pos)
                if placement_coherent(eleve, pos):
                    solution: Optional[Grille] = retour_arriere()
                    if solution is not None:
                        return solution
                placement.retirer(eleve)
            return None

        grille: Optional[Grille] = retour_arriere()
        if grille is not None:
            logger.info("Placement trouvé (%d essais, %d vérifications)", essais, verifications)
            return ResultatPlacement.reussite(grille, essais=essais, verifications=verifications)

        if interrompu:
            logger.info("Budget de recherche épuisé après %d essais", essais)
            return ResultatPlacement.echec_de(
                TypeEchec.BUDGET_EPUISE, MESSAGE_INSATISFIABLE, essais=essais, verifications=verifications
            )
        logger.info("Aucun placement possible (%d essais, %d vérifications)", essais, verifications)
        return ResultatPlacement.echec_de(
            TypeEchec.INSATISFIABLE, MESSAGE_INSATISFIABLE, essais=essais, verifications=verifications
        )


def resoudre_placement(
    eleves: Sequence[Union[Eleve, str, Mapping[str, Any]]],
    contraintes: Sequence[Contrainte],
    nb_rangs: int,
    nb_colonnes: int,
    disponibilites: Optional[GrilleDisponibilites] = None,
    genres_sieges: Optional[GrilleGenres] = None,
    *,
    rng: Optional[random.Random] = None,
    melanger_eleves: bool = False,
    essais_max: Optional[int] = None,
    budget_temps_ms: Optional[int] = None,
) -> ResultatPlacement:
    """Point d'entrée « fonction » : élèves, contraintes, dimensions et grilles → résultat.

    Les élèves peuvent être donnés comme `Eleve`, comme simples noms ou comme
    dicts `{"name", "gender"}`. Une entrée mal formée donne un échec
    « entrée invalide », jamais une exception.
    """
    try:
        salle: Salle = Salle(nb_rangs, nb_colonnes, disponibilites=disponibilites, genres_sieges=genres_sieges)
        roster: List[Eleve] = [e if isinstance(e, Eleve) else Eleve.depuis_donnees(e) for e in eleves]
    except (TypeError, ValueError) as exc:
        return ResultatPlacement.echec_de(TypeEchec.ENTREE_INVALIDE, PREFIXE_ENTREE_INVALIDE + str(exc))

    solveur = SolveurAleatoireRetourArriere(rng=rng, melanger_eleves=melanger_eleves)
    return solveur.resoudre(salle, roster, contraintes, essais_max=essais_max, budget_temps_ms=budget_temps_ms)

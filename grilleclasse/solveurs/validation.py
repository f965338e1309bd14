from __future__ import annotations

import math
from typing import Optional, Sequence, Set

from ..modele.eleve import Eleve
from ..modele.genre import Genre, RestrictionGenre
from ..modele.salle import Salle
from ..contraintes.base import Contrainte, ContrainteBinaire
from ..contraintes.binaires import DoiventEtreEloignes
from ..contraintes.unaires import DoitEtreDansRang, DoitEtreExactementIci


def valider_entrees(salle: Salle, eleves: Sequence[Eleve], contraintes: Sequence[Contrainte]) -> Optional[str]:
    """Contrôle défensif des entrées du solveur.

    Retourne `None` si tout est cohérent, sinon une description du premier
    problème rencontré (le solveur la transforme en échec « entrée invalide »).
    """
    noms: Set[str] = set()
    for e in eleves:
        if e.nom() in noms:
            return f"duplicate student name {e.nom()!r}"
        noms.add(e.nom())

    for c in contraintes:
        for e in c.implique():
            if e.nom() not in noms:
                return f"constraint {c.type_contrainte().value!r} references unknown student {e.nom()!r}"

        if isinstance(c, DoitEtreExactementIci) and not salle.dans_les_limites(c.ou):
            return f"seat ({c.ou.rang}, {c.ou.colonne}) is outside the {salle.nb_rangs()}x{salle.nb_colonnes()} grid"
        if isinstance(c, DoitEtreDansRang) and not 0 <= c.rang < salle.nb_rangs():
            return f"row {c.rang} is outside the grid ({salle.nb_rangs()} rows)"
        if isinstance(c, ContrainteBinaire) and c.a == c.b:
            return f"constraint {c.type_contrainte().value!r} pairs {c.a.nom()!r} with themselves"
        if isinstance(c, DoiventEtreEloignes) and (math.isnan(c.d) or c.d < 0):
            return f"minimum distance must be >= 0, got {c.d!r}"
    return None


def genres_placables(salle: Salle, eleves: Sequence[Eleve]) -> bool:
    """Condition nécessaire : assez de sièges compatibles pour chaque genre déclaré.

    Les élèves sans genre vont partout et ne sont pas comptés ici ; le
    contrôle global de capacité est fait à part.
    """
    for genre, restriction in ((Genre.FEMININ, RestrictionGenre.FEMININ), (Genre.MASCULIN, RestrictionGenre.MASCULIN)):
        nb_eleves: int = sum(1 for e in eleves if e.genre() is genre)
        if not nb_eleves:
            continue
        nb_sieges: int = sum(
            1
            for p in salle.places_disponibles()
            if salle.restriction(p) in (restriction, RestrictionGenre.INDIFFERENT)
        )
        if nb_eleves > nb_sieges:
            return False
    return True

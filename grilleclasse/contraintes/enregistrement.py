from __future__ import annotations

from typing import Any, Mapping

from .types import TypeContrainte
from .registre import enregistrer, ContexteFabrique
from .unaires import DoitEtreExactementIci, DoitEtreDansRang
from .binaires import DoiventEtreEnsemble, NeDoiventPasEtreEnsemble, DoiventEtreEloignes
from ..modele.position import Position


@enregistrer(TypeContrainte.ABSOLUE)
def _fab_absolue(code: Mapping[str, Any], ctx: ContexteFabrique):
    """Construit une contrainte de place imposée (champs `student1`, `row`, `col`)."""
    rang: int = int(code["row"])
    colonne: int = int(code["col"])
    return DoitEtreExactementIci(eleve=ctx.eleve(code["student1"]), ou=Position(rang, colonne))


@enregistrer(TypeContrainte.DANS_RANG)
def _fab_dans_rang(code: Mapping[str, Any], ctx: ContexteFabrique):
    rang: int = int(code["row"])
    return DoitEtreDansRang(eleve=ctx.eleve(code["student1"]), rang=rang)


@enregistrer(TypeContrainte.ENSEMBLE)
def _fab_ensemble(code: Mapping[str, Any], ctx: ContexteFabrique):
    return DoiventEtreEnsemble(a=ctx.eleve(code["student1"]), b=ctx.eleve(code["student2"]))


@enregistrer(TypeContrainte.PAS_ENSEMBLE)
def _fab_pas_ensemble(code: Mapping[str, Any], ctx: ContexteFabrique):
    return NeDoiventPasEtreEnsemble(a=ctx.eleve(code["student1"]), b=ctx.eleve(code["student2"]))


@enregistrer(TypeContrainte.ELOIGNES)
def _fab_eloignes(code: Mapping[str, Any], ctx: ContexteFabrique):
    """
    Construit une contrainte d'éloignement (distance euclidienne).

    Champs :
      - student1, student2 : noms
      - minDistance : nombre (accepte aussi `d` ou `min_distance`)
    """
    brut: Any = code.get("minDistance", code.get("min_distance", code.get("d")))
    if brut is None:
        raise KeyError("minDistance")
    try:
        d: float = float(brut)
    except ValueError as exc:
        raise ValueError(f"minDistance invalide: {brut!r}") from exc
    return DoiventEtreEloignes(a=ctx.eleve(code["student1"]), b=ctx.eleve(code["student2"]), d=d)

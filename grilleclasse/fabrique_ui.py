# grilleclasse/fabrique_ui.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .contraintes import enregistrement  # noqa: F401  (remplit le registre)
from .contraintes.registre import ContexteFabrique, contrainte_depuis_code
from .contraintes.base import Contrainte
from .contraintes.types import TypeContrainte
from .modele.eleve import Eleve
from .modele.salle import Salle

# marqueurs UI sans valeur métier
_MARQUEURS_UI = {"_batch_marker_", "_objective_", ""}


# --- helpers ---------------------------------------------------------------

def _entier(payload: Mapping[str, Any], cle: str) -> int:
    try:
        return int(payload[cle])
    except KeyError as exc:
        raise ValueError(f"Champ {cle!r} manquant dans le payload.") from exc
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Champ {cle!r} invalide: {payload[cle]!r}") from exc


def _normaliser_code(c: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Harmonise une contrainte UI vers le format « code_machine ».

    Tolère les alias d'anciens formats : `a`/`b` pour `student1`/`student2`,
    `d` pour `minDistance`, `key="r,c"` pour une place imposée.
    """
    code: Dict[str, Any] = dict(c)
    code["type"] = str(c.get("type", "")).strip()
    if "student1" not in code and "a" in c:
        code["student1"] = c["a"]
    if "student2" not in code and "b" in c:
        code["student2"] = c["b"]
    if code["type"] == TypeContrainte.ELOIGNES.value and "minDistance" not in code and "d" in c:
        code["minDistance"] = c["d"]
    if code["type"] == TypeContrainte.ABSOLUE.value and "key" in c and isinstance(c["key"], str):
        rang, colonne = (int(t) for t in c["key"].split(","))
        code["row"], code["col"] = rang, colonne
    return code


# --- public ----------------------------------------------------------------

def eleves_depuis_payload(students: Sequence[Any]) -> List[Eleve]:
    """Convertit le roster UI (noms ou `{"name", "gender"}`) en objets `Eleve`."""
    if students is not None and not isinstance(students, list):
        raise ValueError(f"Champ 'students' invalide: liste attendue, reçu {students!r}")
    return [Eleve.depuis_donnees(s) for s in students or []]


def salle_depuis_payload(payload: Mapping[str, Any]) -> Salle:
    """Construit la salle depuis `rows`, `cols` et le `layout` facultatif.

    `layout` accepte des cases `{"available": bool, "gender": "..."}` ou de
    simples booléens (ancien format « disponibilité seule »).
    """
    nb_rangs: int = _entier(payload, "rows")
    nb_colonnes: int = _entier(payload, "cols")
    layout = payload.get("layout")
    if layout is None:
        return Salle(nb_rangs, nb_colonnes)
    if not isinstance(layout, list) or not all(isinstance(ligne, list) for ligne in layout):
        raise ValueError("Champ 'layout' invalide: liste de rangs attendue.")
    cases: List[Any] = [case for ligne in layout for case in ligne]
    if all(isinstance(case, bool) for case in cases):
        return Salle(nb_rangs, nb_colonnes, disponibilites=layout)
    if all(isinstance(case, Mapping) for case in cases):
        return Salle.depuis_schema(nb_rangs, nb_colonnes, layout)
    raise ValueError("Champ 'layout' invalide: cases toutes booléennes ou toutes objets.")


def fabrique_contraintes_ui(
        *,
        salle: Salle,
        eleves: Sequence[Eleve],
        constraints_ui: Sequence[Mapping[str, Any]],
) -> List[Contrainte]:
    """
    Traduit la liste brute des contraintes UI en objets métier via le registre.
    Ignore les marqueurs UI ; lève `ValueError` sur une contrainte inexploitable.
    """
    if constraints_ui is not None and not isinstance(constraints_ui, list):
        raise ValueError(f"Champ 'constraints' invalide: liste attendue, reçu {constraints_ui!r}")
    index_eleves_par_nom: Dict[str, Eleve] = {e.nom(): e for e in eleves}
    ctx = ContexteFabrique(salle=salle, index_eleves_par_nom=index_eleves_par_nom)

    out: List[Contrainte] = []
    for c in constraints_ui or []:
        if not isinstance(c, Mapping):
            raise ValueError(f"Contrainte UI invalide: {c!r}")
        code: Dict[str, Any] = _normaliser_code(c)
        if code["type"] in _MARQUEURS_UI:
            continue
        out.append(contrainte_depuis_code(code, ctx))
    return out


def fabrique_depuis_payload(payload: Mapping[str, Any]) -> Tuple[Salle, List[Eleve], List[Contrainte]]:
    """Payload JSON complet → `(salle, eleves, contraintes)` prêts pour le solveur."""
    salle: Salle = salle_depuis_payload(payload)
    eleves: List[Eleve] = eleves_depuis_payload(payload.get("students", []))
    contraintes: List[Contrainte] = fabrique_contraintes_ui(
        salle=salle,
        eleves=eleves,
        constraints_ui=payload.get("constraints", []),
    )
    return salle, eleves, contraintes

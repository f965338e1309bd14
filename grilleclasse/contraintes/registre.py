from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from .types import TypeContrainte
from .base import Contrainte
from ..modele.eleve import Eleve
from ..modele.salle import Salle

# une fabrique reçoit le dict « code_machine » et le contexte de la résolution
Fabrique = Callable[[Mapping[str, Any], "ContexteFabrique"], Contrainte]


class ContexteFabrique:
    """Ce qu'il faut connaître pour relire une contrainte sérialisée.

    Les contraintes JSON désignent les élèves par leur nom ; le contexte
    porte le roster indexé et la salle de la résolution en cours.
    """

    def __init__(self, salle: Salle, index_eleves_par_nom: Mapping[str, Eleve]) -> None:
        self.salle: Salle = salle
        self.index_eleves_par_nom: Mapping[str, Eleve] = index_eleves_par_nom

    def eleve(self, nom: Any) -> Eleve:
        """Retrouve l'élève `nom` ; lève `ValueError` s'il n'est pas dans le roster."""
        cle: str = str(nom or "").strip()
        try:
            return self.index_eleves_par_nom[cle]
        except KeyError as exc:
            raise ValueError(f"Élève inconnu: {cle!r}") from exc


_FABRIQUES: Dict[TypeContrainte, Fabrique] = {}


def enregistrer(type_c: TypeContrainte) -> Callable[[Fabrique], Fabrique]:
    """Décorateur : associe la fonction décorée au type `type_c`.

    Un second enregistrement pour le même type remplace le premier.
    """

    def deco(fabrique: Fabrique) -> Fabrique:
        _FABRIQUES[type_c] = fabrique
        return fabrique

    return deco


def fabrique_de(type_c: TypeContrainte) -> Optional[Fabrique]:
    return _FABRIQUES.get(type_c)


def types_enregistres() -> List[TypeContrainte]:
    """Types pour lesquels une fabrique existe, dans l'ordre de déclaration de l'enum."""
    return [t for t in TypeContrainte if t in _FABRIQUES]


def contrainte_depuis_code(code: Mapping[str, Any], contexte: ContexteFabrique) -> Contrainte:
    """Relit une contrainte depuis sa forme `code_machine()`.

    - type absent ou inconnu : `ValueError`
    - champ manquant ou de mauvais type, élève hors roster : `ValueError`
    - type connu mais sans fabrique enregistrée : `KeyError`
    """
    brut: str = str(code.get("type", "")).strip()
    try:
        type_c: TypeContrainte = TypeContrainte(brut)
    except ValueError as exc:
        raise ValueError(f"Type de contrainte inconnu: {brut!r}") from exc

    fabrique: Optional[Fabrique] = fabrique_de(type_c)
    if fabrique is None:
        raise KeyError(f"Pas de fabrique pour {type_c.value!r} (module enregistrement non importé ?)")
    try:
        return fabrique(code, contexte)
    except KeyError as exc:
        raise ValueError(f"Contrainte {brut!r} : champ {exc.args[0]!r} manquant") from exc
    except TypeError as exc:
        raise ValueError(f"Contrainte {brut!r} mal formée: {dict(code)!r}") from exc

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import List, Optional

from .modele.eleve import Eleve
from .modele.placement import Grille
from .modele.position import Position
from .modele.salle import Salle
from .solveurs.aleatoire import SolveurAleatoireRetourArriere
from .solveurs.base import ResultatPlacement
from .contraintes.base import Contrainte
from .contraintes.unaires import DoitEtreExactementIci, DoitEtreDansRang
from .contraintes.binaires import DoiventEtreEnsemble, NeDoiventPasEtreEnsemble, DoiventEtreEloignes
from .contraintes.registre import ContexteFabrique, contrainte_depuis_code
from .fabrique_ui import fabrique_depuis_payload


def formater_grille(grille: Grille, largeur: int = 10) -> str:
    """Rend une grille de placement en texte, un rang par ligne (« - » = siège vide)."""
    lignes: List[str] = []
    for i, rang in enumerate(grille):
        cases = " | ".join(f"{(nom or '-')[:largeur]:{largeur}s}" for nom in rang)
        lignes.append(f"rang {i}: {cases}")
    return "\n".join(lignes)


def construire_exemple() -> None:
    """
    construit une salle, une liste d'élèves, un jeu de contraintes et lance le solveur.

    affiche le placement si une solution est trouvée, et un export JSON des contraintes.
    """
    # pour la reproductibilité de la démonstration
    rng = random.Random(42)

    # salle : 5 rangs de 8 colonnes, deux allées (colonnes 2 et 5), dernier rang incomplet
    disponibilites = [[c not in (2, 5) for c in range(8)] for _ in range(5)]
    disponibilites[4] = [True, True, False, True, False, False, False, False]
    salle: Salle = Salle(5, 8, disponibilites=disponibilites)
    salle.alterner_genres()

    # élèves : 20 élèves, genres alternés pour l'exemple
    eleves: List[Eleve] = [
        Eleve(nom=f"Eleve {chr(65 + i)}", genre="female" if i % 2 == 0 else "male")
        for i in range(20)
    ]

    contraintes: List[Contrainte] = [
        DoitEtreExactementIci(eleve=eleves[0], ou=Position(0, 0)),
        DoiventEtreEnsemble(a=eleves[0], b=eleves[1]),
        DoiventEtreEloignes(a=eleves[0], b=eleves[17], d=5),
        DoitEtreDansRang(eleve=eleves[3], rang=0),
        NeDoiventPasEtreEnsemble(a=eleves[4], b=eleves[5]),
        DoitEtreDansRang(eleve=eleves[19], rang=1),
    ]

    print("=== salle ===")
    print(salle)

    solveur = SolveurAleatoireRetourArriere(rng=rng)
    res: ResultatPlacement = solveur.resoudre(salle, eleves, contraintes)
    if not res.succes:
        print(f"aucune solution trouvée : {res.message}")
        return

    print("\n=== placement trouvé ===")
    print(formater_grille(res.grille))
    print(f"({res.essais} essais, {res.verifications} vérifications)")

    # export JSON « code_machine » + démonstration de rechargement via la fabrique
    codes = [c.code_machine() for c in contraintes]
    print("\n=== export JSON des contraintes ===")
    print(json.dumps(codes, ensure_ascii=False, indent=2))
    for c in contraintes:
        print(f" - {c.texte_humain()}")

    # reconstruction
    ctx = ContexteFabrique(salle=salle, index_eleves_par_nom={e.nom(): e for e in eleves})
    reconstruites = [contrainte_depuis_code(code, ctx) for code in codes]
    assert all(c1.code_machine() == c2.code_machine() for c1, c2 in zip(contraintes, reconstruites))
    print("\n(reconstruction via fabrique : OK)")


def resoudre_fichier(chemin: Path, graine: Optional[int] = None) -> int:
    """
    résout le payload JSON contenu dans `chemin` et affiche la grille.

    retourne le code de sortie : 0 si un placement est trouvé, 1 sinon.
    """
    try:
        payload = json.loads(chemin.read_text(encoding="utf-8"))
        salle, eleves, contraintes = fabrique_depuis_payload(payload)
    except ValueError as exc:
        print(f"payload invalide : {exc}")
        return 1

    rng: Optional[random.Random] = random.Random(graine) if graine is not None else None
    res = SolveurAleatoireRetourArriere(rng=rng).resoudre(salle, eleves, contraintes)
    if not res.succes:
        print(res.message)
        return 1
    print(formater_grille(res.grille))
    return 0


def main() -> None:
    """point d'entrée du module CLI."""
    construire_exemple()


def run_exemple() -> None:
    # alias utilisé par __main__.py
    return construire_exemple()


if __name__ == "__main__":
    main()

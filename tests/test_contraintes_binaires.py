from __future__ import annotations

from grilleclasse.modele.salle import Salle
from grilleclasse.modele.position import Position
from grilleclasse.modele.eleve import Eleve
from grilleclasse.modele.placement import Placement
from grilleclasse.contraintes.binaires import (
    DoiventEtreEloignes,
    DoiventEtreEnsemble,
    NeDoiventPasEtreEnsemble,
)


def test_together_horizontal_only():
    e1, e2 = Eleve("DUPONT A", "female"), Eleve("DUPONT B", "male")
    c = DoiventEtreEnsemble(e1, e2)
    assert c.est_satisfaite({e1: Position(0, 0), e2: Position(0, 1)}) is True
    assert c.est_satisfaite({e1: Position(0, 0), e2: Position(1, 0)}) is False  # vertical
    assert c.est_satisfaite({e1: Position(0, 0), e2: Position(1, 1)}) is False  # diagonale
    assert c.est_satisfaite({e1: Position(0, 0), e2: Position(0, 2)}) is False


def test_together_domaine_voisins_du_partenaire():
    salle = Salle(2, 3)
    e1, e2 = Eleve("A"), Eleve("B")
    c = DoiventEtreEnsemble(e1, e2)
    placement = Placement(2, 3)
    assert c.places_autorisees(e2, salle, placement) is None
    placement.placer(e1, Position(1, 0))
    assert c.places_autorisees(e2, salle, placement) == [Position(1, 1)]


def test_together_partenaire_non_place_exige_un_voisin_libre():
    # rang unique de 3, trou à droite
    salle = Salle(1, 3, disponibilites=[[True, True, False]])
    e1, e2, e3 = Eleve("A"), Eleve("B"), Eleve("C")
    c = DoiventEtreEnsemble(e1, e2)
    placement = Placement(1, 3)
    placement.placer(e3, Position(0, 0))
    placement.placer(e1, Position(0, 1))
    # gauche occupée, droite indisponible
    assert c.est_coherente(e1, Position(0, 1), salle, placement) is False
    placement.retirer(e3)
    assert c.est_coherente(e1, Position(0, 1), salle, placement) is True


def test_not_together():
    e1, e2 = Eleve("A"), Eleve("B")
    c = NeDoiventPasEtreEnsemble(e1, e2)
    assert c.est_satisfaite({e1: Position(0, 0), e2: Position(0, 1)}) is False
    assert c.est_satisfaite({e1: Position(0, 0), e2: Position(1, 0)}) is True  # devant/derrière permis
    assert c.est_satisfaite({e1: Position(0, 0), e2: Position(1, 1)}) is True
    assert c.est_satisfaite({e1: Position(0, 0)}) is True  # partiel


def test_far_apart_euclidienne():
    e1, e2 = Eleve("A"), Eleve("B")
    c = DoiventEtreEloignes(e1, e2, d=3)
    assert c.est_satisfaite({e1: Position(0, 0), e2: Position(0, 3)}) is True  # 3
    assert c.est_satisfaite({e1: Position(0, 0), e2: Position(2, 2)}) is False  # 2.83
    assert c.est_satisfaite({e1: Position(0, 0), e2: Position(2, 3)}) is True  # 3.61
    assert DoiventEtreEloignes(e1, e2, d=0).est_satisfaite({e1: Position(0, 0), e2: Position(0, 1)}) is True


def test_codes_binaires():
    e1, e2 = Eleve("A"), Eleve("B")
    assert DoiventEtreEnsemble(e1, e2).code_machine() == {"type": "together", "student1": "A", "student2": "B"}
    assert DoiventEtreEloignes(e1, e2, d=2.5).code_machine()["minDistance"] == 2.5
    assert DoiventEtreEloignes(e1, e2, d=2).texte_humain().endswith("au moins 2")

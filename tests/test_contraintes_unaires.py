from __future__ import annotations

from grilleclasse.modele.salle import Salle
from grilleclasse.modele.position import Position
from grilleclasse.modele.eleve import Eleve
from grilleclasse.modele.placement import Placement
from grilleclasse.contraintes.unaires import DoitEtreExactementIci, DoitEtreDansRang


def test_exact_seat():
    e = Eleve("Alice")
    autre = Eleve("Bob")
    c = DoitEtreExactementIci(e, Position(1, 2))
    assert c.est_satisfaite({e: Position(1, 2)}) is True
    assert c.est_satisfaite({e: Position(0, 2)}) is False
    assert c.est_satisfaite({}) is False
    # la case est à elle seule
    assert c.est_satisfaite({e: Position(1, 2), autre: Position(1, 2)}) is False


def test_exact_seat_domaine():
    salle = Salle(2, 3)
    e, autre = Eleve("Alice"), Eleve("Bob")
    c = DoitEtreExactementIci(e, Position(1, 2))
    placement = Placement(2, 3)
    assert c.places_autorisees(e, salle, placement) == [Position(1, 2)]
    assert c.places_autorisees(autre, salle, placement) is None
    assert c.est_coherente(autre, Position(0, 0), salle, placement) is True


def test_must_be_in_row():
    salle = Salle(3, 3, disponibilites=[[True] * 3, [False, True, True], [True] * 3])
    e = Eleve("Alice")
    c = DoitEtreDansRang(e, 1)
    assert c.places_autorisees(e, salle, Placement(3, 3)) == [Position(1, 1), Position(1, 2)]
    assert c.est_satisfaite({e: Position(1, 0)}) is True  # la dispo est contrôlée ailleurs
    assert c.est_satisfaite({e: Position(2, 1)}) is False


def test_textes_et_codes():
    e = Eleve("Alice")
    assert DoitEtreDansRang(e, 0).code_machine() == {"type": "must_be_in_row", "student1": "Alice", "row": 0}
    assert DoitEtreExactementIci(e, Position(2, 1)).code_machine() == {
        "type": "absolute", "student1": "Alice", "row": 2, "col": 1,
    }
    assert "rang 0" in DoitEtreDansRang(e, 0).texte_humain()

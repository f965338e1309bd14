from __future__ import annotations

import random
from collections import Counter

from grilleclasse.modele.salle import Salle
from grilleclasse.modele.eleve import Eleve
from grilleclasse.modele.position import Position, adjacents_horizontalement, distance_euclidienne
from grilleclasse.contraintes.unaires import DoitEtreExactementIci, DoitEtreDansRang
from grilleclasse.contraintes.binaires import DoiventEtreEnsemble, NeDoiventPasEtreEnsemble, DoiventEtreEloignes
from grilleclasse.solveurs.aleatoire import SolveurAleatoireRetourArriere, resoudre_placement
from grilleclasse.solveurs.base import MESSAGE_CAPACITE, MESSAGE_INSATISFIABLE, TypeEchec


def _eleves(*noms):
    return [Eleve(n) for n in noms]


def _positions(grille):
    return {nom: Position(r, c) for r, ligne in enumerate(grille) for c, nom in enumerate(ligne) if nom is not None}


def _resoudre(salle, eleves, contraintes, graine=0, **kw):
    return SolveurAleatoireRetourArriere(rng=random.Random(graine)).resoudre(salle, eleves, contraintes, **kw)


def test_capacite_insuffisante():
    res = _resoudre(Salle(2, 1), _eleves("A", "B", "C"), [])
    assert res.succes is False
    assert res.message == MESSAGE_CAPACITE
    assert res.echec is TypeEchec.CAPACITE
    assert res.en_dict() == {"success": False, "message": MESSAGE_CAPACITE}


def test_capacite_compte_les_sieges_disponibles():
    salle = Salle(2, 2, disponibilites=[[True, False], [False, True]])
    res = _resoudre(salle, _eleves("A", "B", "C"), [])
    assert res.message == MESSAGE_CAPACITE


def test_aucun_eleve():
    res = _resoudre(Salle(2, 3), [], [])
    assert res.succes
    assert res.grille == [[None, None, None], [None, None, None]]


def test_trois_eleves_deux_par_deux():
    res = _resoudre(Salle(2, 2), _eleves("A", "B", "C"), [])
    assert res.succes
    noms = [n for ligne in res.grille for n in ligne]
    assert sorted(n for n in noms if n) == ["A", "B", "C"]
    assert noms.count(None) == 1
    assert res.en_dict()["success"] is True


def test_jamais_sur_un_siege_indisponible():
    dispo = [[True, False, True], [False, True, False]]
    for graine in range(10):
        res = _resoudre(Salle(2, 3, disponibilites=dispo), _eleves("A", "B", "C"), [], graine=graine)
        assert res.succes
        for r in range(2):
            for c in range(3):
                if not dispo[r][c]:
                    assert res.grille[r][c] is None


def test_place_imposee():
    a, b, c = _eleves("A", "B", "C")
    for graine in range(5):
        res = _resoudre(Salle(2, 3), [a, b, c], [DoitEtreExactementIci(a, Position(1, 2))], graine=graine)
        assert res.succes
        assert res.grille[1][2] == "A"


def test_places_imposees_en_conflit():
    a, b = _eleves("A", "B")
    res = _resoudre(
        Salle(2, 2), [a, b],
        [DoitEtreExactementIci(a, Position(0, 0)), DoitEtreExactementIci(b, Position(0, 0))],
    )
    assert res.succes is False
    assert res.message == MESSAGE_INSATISFIABLE
    assert res.echec is TypeEchec.INSATISFIABLE


def test_place_imposee_sur_siege_indisponible():
    a, = _eleves("A")
    res = _resoudre(Salle(1, 2, disponibilites=[[False, True]]), [a], [DoitEtreExactementIci(a, Position(0, 0))])
    assert res.succes is False
    assert res.message == MESSAGE_INSATISFIABLE


def test_place_reservee_pas_prise_par_un_autre():
    # A est déclaré en dernier mais sa case n'est jamais donnée à B
    a, b = _eleves("A", "B")
    contraintes = [DoitEtreExactementIci(a, Position(0, 1))]
    for graine in range(10):
        res = _resoudre(Salle(1, 2), [b, a], contraintes, graine=graine)
        assert res.succes
        assert res.grille == [["B", "A"]]


def test_ensemble_horizontal():
    eleves = _eleves("A", "B", "C", "D", "E", "F")
    a, b = eleves[0], eleves[1]
    for graine in range(20):
        res = _resoudre(Salle(3, 3), eleves, [DoiventEtreEnsemble(a, b)], graine=graine)
        assert res.succes
        pos = _positions(res.grille)
        assert adjacents_horizontalement(pos["A"], pos["B"])


def test_ensemble_vertical_ne_compte_pas():
    a, b = _eleves("A", "B")
    res = _resoudre(Salle(2, 1), [a, b], [DoiventEtreEnsemble(a, b)])
    assert res.succes is False
    assert res.message == MESSAGE_INSATISFIABLE


def test_ensemble_avec_place_imposee():
    a, b, c = _eleves("A", "B", "C")
    res = _resoudre(
        Salle(2, 3), [c, b, a],
        [DoiventEtreEnsemble(a, b), DoitEtreExactementIci(a, Position(1, 0))],
    )
    assert res.succes
    assert res.grille[1][0] == "A"
    assert res.grille[1][1] == "B"


def test_pas_ensemble():
    a, b = _eleves("A", "B")
    assert _resoudre(Salle(1, 2), [a, b], [NeDoiventPasEtreEnsemble(a, b)]).succes is False
    for graine in range(10):
        res = _resoudre(Salle(2, 2), [a, b], [NeDoiventPasEtreEnsemble(a, b)], graine=graine)
        assert res.succes
        pos = _positions(res.grille)
        assert not adjacents_horizontalement(pos["A"], pos["B"])


def test_rang_impose():
    eleves = _eleves("A", "B", "C", "D")
    for graine in range(5):
        res = _resoudre(Salle(3, 3), eleves, [DoitEtreDansRang(eleves[2], 2)], graine=graine)
        assert res.succes
        assert "C" in res.grille[2]


def test_eloignes():
    a, b = _eleves("A", "B")
    res = _resoudre(Salle(1, 5), [a, b], [DoiventEtreEloignes(a, b, d=4)])
    assert res.succes
    pos = _positions(res.grille)
    assert distance_euclidienne(pos["A"], pos["B"]) >= 4
    assert {pos["A"].colonne, pos["B"].colonne} == {0, 4}

    res = _resoudre(Salle(1, 5), [a, b], [DoiventEtreEloignes(a, b, d=5)])
    assert res.succes is False


def test_genres_respectes():
    genres = [["female", "male", "any"], ["male", "female", "female"]]
    eleves = [
        Eleve("Alice", "female"), Eleve("Bruno", "male"), Eleve("Chloé", "female"),
        Eleve("David", "male"), Eleve("Emma"),
    ]
    par_nom = {e.nom(): e for e in eleves}
    for graine in range(10):
        salle = Salle(2, 3, genres_sieges=genres)
        res = _resoudre(salle, eleves, [], graine=graine)
        assert res.succes
        for nom, pos in _positions(res.grille).items():
            assert salle.accepte(par_nom[nom], pos)


def test_genres_impossibles():
    salle = Salle(1, 3, genres_sieges=[["female", "male", "male"]])
    eleves = [Eleve("Alice", "female"), Eleve("Chloé", "female")]
    res = _resoudre(salle, eleves, [])
    assert res.succes is False
    assert res.message == MESSAGE_INSATISFIABLE


def _remplissage(grille):
    return [sum(1 for n in ligne if n) for ligne in grille]


def test_compacite_premiers_rangs():
    for graine in range(10):
        res = _resoudre(Salle(3, 4), _eleves(*"ABCDEFG"), [], graine=graine)
        assert res.succes
        assert _remplissage(res.grille) == [4, 3, 0]


def test_variete_entre_resolutions():
    # 5 élèves, 3 rangs de 5 : toujours le premier rang, jamais le même ordre
    eleves = _eleves(*"ABCDE")
    grilles = set()
    for graine in range(20):
        res = _resoudre(Salle(3, 5), eleves, [], graine=graine)
        assert res.succes
        assert _remplissage(res.grille) == [5, 0, 0]
        grilles.add(tuple(tuple(ligne) for ligne in res.grille))
    assert len(grilles) > 1


def test_meme_graine_meme_resultat():
    eleves = _eleves(*"ABCDEFGH")
    contraintes = [DoiventEtreEnsemble(eleves[0], eleves[1]), NeDoiventPasEtreEnsemble(eleves[2], eleves[3])]
    r1 = _resoudre(Salle(3, 4), eleves, contraintes, graine=123)
    r2 = _resoudre(Salle(3, 4), eleves, contraintes, graine=123)
    assert r1.grille == r2.grille


def test_classe_de_26_avec_allee():
    # 5 rangs de 6 ; allée en colonne 2 sauf au dernier rang -> 26 sièges, tous occupés
    dispo = [[c != 2 for c in range(6)] for _ in range(4)] + [[True] * 6]
    salle = Salle(5, 6, disponibilites=dispo)
    eleves = _eleves(*(f"E{i:02d}" for i in range(26)))
    contraintes = [
        DoitEtreExactementIci(eleves[0], Position(0, 0)),
        DoiventEtreEnsemble(eleves[0], eleves[1]),
        DoitEtreDansRang(eleves[2], 4),
        NeDoiventPasEtreEnsemble(eleves[3], eleves[4]),
        DoiventEtreEloignes(eleves[5], eleves[6], d=3),
    ]
    res = _resoudre(salle, eleves, contraintes, graine=1)
    assert res.succes, res.message
    pos = _positions(res.grille)
    assert len(pos) == 26
    assert pos["E00"] == Position(0, 0)
    assert pos["E01"] == Position(0, 1)
    assert pos["E02"].rang == 4
    assert not adjacents_horizontalement(pos["E03"], pos["E04"])
    assert distance_euclidienne(pos["E05"], pos["E06"]) >= 3
    for r in range(4):
        assert res.grille[r][2] is None


def test_cinquante_eleves_dix_par_dix():
    eleves = _eleves(*(f"E{i:02d}" for i in range(50)))
    contraintes = [
        DoiventEtreEnsemble(eleves[0], eleves[1]),
        DoiventEtreEnsemble(eleves[2], eleves[3]),
        NeDoiventPasEtreEnsemble(eleves[4], eleves[5]),
        DoitEtreDansRang(eleves[6], 9),
        DoiventEtreEloignes(eleves[7], eleves[8], d=6),
        DoitEtreExactementIci(eleves[9], Position(5, 5)),
    ]
    res = _resoudre(Salle(10, 10), eleves, contraintes, graine=5)
    assert res.succes, res.message
    pos = _positions(res.grille)
    assert len(pos) == 50
    assert adjacents_horizontalement(pos["E00"], pos["E01"])
    assert pos["E06"].rang == 9
    assert distance_euclidienne(pos["E07"], pos["E08"]) >= 6
    assert pos["E09"] == Position(5, 5)
    assert Counter(n for ligne in res.grille for n in ligne if n).most_common(1)[0][1] == 1


def test_budget_essais_epuise():
    res = _resoudre(Salle(2, 5), _eleves(*"ABCDEFGHIJ"), [], essais_max=3)
    assert res.succes is False
    assert res.echec is TypeEchec.BUDGET_EPUISE
    assert res.message == MESSAGE_INSATISFIABLE


def test_budget_temps_genereux():
    res = _resoudre(Salle(3, 3), _eleves(*"ABCDE"), [], budget_temps_ms=5_000)
    assert res.succes


def test_entrees_invalides():
    a, b = _eleves("A", "B")
    cas = [
        ([a, Eleve("A")], []),
        ([a], [DoiventEtreEnsemble(a, b)]),
        ([a, b], [DoitEtreExactementIci(a, Position(4, 0))]),
        ([a, b], [DoitEtreDansRang(a, -1)]),
        ([a, b], [NeDoiventPasEtreEnsemble(a, a)]),
        ([a, b], [DoiventEtreEloignes(a, b, d=-1)]),
    ]
    for eleves, contraintes in cas:
        res = _resoudre(Salle(2, 2), eleves, contraintes)
        assert res.succes is False
        assert res.echec is TypeEchec.ENTREE_INVALIDE
        assert res.message.startswith("Invalid input: ")


def test_melanger_eleves():
    eleves = _eleves(*"ABCDEF")
    res = SolveurAleatoireRetourArriere(rng=random.Random(2), melanger_eleves=True).resoudre(
        Salle(2, 3), eleves, [DoiventEtreEnsemble(eleves[0], eleves[5])]
    )
    assert res.succes
    pos = _positions(res.grille)
    assert adjacents_horizontalement(pos["A"], pos["F"])


def test_resoudre_placement_fonction():
    res = resoudre_placement(
        ["Bruno", {"name": "Alice", "gender": "female"}],
        [],
        1,
        2,
        genres_sieges=[["female", "male"]],
        rng=random.Random(0),
    )
    assert res.succes
    assert res.grille == [["Alice", "Bruno"]]

    for eleves, dispo in (([None], None), ([3], None), (["Alice"], [None])):
        res = resoudre_placement(eleves, [], 1, 2, disponibilites=dispo)
        assert res.succes is False
        assert res.echec is TypeEchec.ENTREE_INVALIDE
        assert res.message.startswith("Invalid input: ")
    res = resoudre_placement(["Alice"], [], -1, 2)
    assert res.echec is TypeEchec.ENTREE_INVALIDE

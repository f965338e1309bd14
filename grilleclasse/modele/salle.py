from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Union

from .eleve import Eleve
from .genre import RestrictionGenre, genre_compatible, restriction_depuis_texte
from .position import Position

GrilleDisponibilites = Sequence[Sequence[bool]]
GrilleGenres = Sequence[Sequence[Union[RestrictionGenre, str]]]


class Salle:
    """
    Modélise une salle de classe en grille `nb_rangs × nb_colonnes`.

    Chaque case est un siège portant deux attributs indépendants :
    - sa **disponibilité** (une case indisponible ne reçoit jamais d'élève,
      c'est un trou dans la grille : allée, pilier...),
    - sa **restriction de genre** (« male », « female » ou « any »).

    Exemple :
        salle = Salle(2, 3, disponibilites=[
            [True, False, True],   # trou au milieu du premier rang
            [True, True, True],
        ])
    """

    def __init__(
        self,
        nb_rangs: int,
        nb_colonnes: int,
        disponibilites: Optional[GrilleDisponibilites] = None,
        genres_sieges: Optional[GrilleGenres] = None,
    ) -> None:
        """
        Construit la grille ; les deux grilles facultatives valent par défaut
        « tout disponible » et « any » partout.

        Lève `ValueError` si les dimensions sont négatives ou si une grille
        fournie n'a pas la forme `nb_rangs × nb_colonnes`.
        """
        if nb_rangs < 0 or nb_colonnes < 0:
            raise ValueError(f"Dimensions négatives: {nb_rangs}×{nb_colonnes}.")
        self._nb_rangs: int = nb_rangs
        self._nb_colonnes: int = nb_colonnes

        if disponibilites is None:
            self._disponibles: List[List[bool]] = [[True] * nb_colonnes for _ in range(nb_rangs)]
        else:
            self._verifier_forme(disponibilites, "disponibilités")
            self._disponibles = [[bool(v) for v in ligne] for ligne in disponibilites]

        if genres_sieges is None:
            self._genres: List[List[RestrictionGenre]] = [
                [RestrictionGenre.INDIFFERENT] * nb_colonnes for _ in range(nb_rangs)
            ]
        else:
            self._verifier_forme(genres_sieges, "genres des sièges")
            self._genres = [[restriction_depuis_texte(v) for v in ligne] for ligne in genres_sieges]

    @classmethod
    def depuis_schema(cls, nb_rangs: int, nb_colonnes: int, schema: Sequence[Sequence[Mapping[str, Any]]]) -> "Salle":
        """
        Construit une salle depuis le format JSON par case :
        `[[{"available": true, "gender": "any"}, ...], ...]`.
        """
        disponibilites: List[List[bool]] = [[bool(case.get("available", True)) for case in ligne] for ligne in schema]
        genres: List[List[str]] = [[str(case.get("gender") or "any") for case in ligne] for ligne in schema]
        return cls(nb_rangs, nb_colonnes, disponibilites=disponibilites, genres_sieges=genres)

    def _verifier_forme(self, grille: Sequence[Sequence[Any]], quoi: str) -> None:
        if isinstance(grille, (str, bytes)) or not isinstance(grille, Sequence) or any(
            isinstance(ligne, (str, bytes)) or not isinstance(ligne, Sequence) for ligne in grille
        ):
            raise ValueError(f"La grille des {quoi} doit être une liste de rangs.")
        if len(grille) != self._nb_rangs or any(len(ligne) != self._nb_colonnes for ligne in grille):
            raise ValueError(f"La grille des {quoi} ne fait pas {self._nb_rangs}×{self._nb_colonnes}.")

    # --- Accès de base -----------------------------------------------------

    def nb_rangs(self) -> int:
        return self._nb_rangs

    def nb_colonnes(self) -> int:
        return self._nb_colonnes

    def dans_les_limites(self, pos: Position) -> bool:
        """Indique si `pos` est une case de la grille."""
        return 0 <= pos.rang < self._nb_rangs and 0 <= pos.colonne < self._nb_colonnes

    def est_disponible(self, pos: Position) -> bool:
        """Indique si le siège `pos` existe et peut recevoir un élève."""
        return self.dans_les_limites(pos) and self._disponibles[pos.rang][pos.colonne]

    def restriction(self, pos: Position) -> RestrictionGenre:
        """Retourne la restriction de genre du siège `pos`."""
        return self._genres[pos.rang][pos.colonne]

    def accepte(self, eleve: Eleve, pos: Position) -> bool:
        """Indique si `eleve` peut s'asseoir en `pos` (disponibilité + genre)."""
        return self.est_disponible(pos) and genre_compatible(self.restriction(pos), eleve.genre())

    def disponibilites(self) -> List[List[bool]]:
        """Retourne une copie de la grille des disponibilités."""
        return [list(ligne) for ligne in self._disponibles]

    def genres_sieges(self) -> List[List[RestrictionGenre]]:
        """Retourne une copie de la grille des restrictions de genre."""
        return [list(ligne) for ligne in self._genres]

    # --- Utilitaires pour le solveur / tests -------------------------------

    def toutes_les_places(self) -> List[Position]:
        """Énumère toutes les cases, rang par rang puis colonne par colonne."""
        return [Position(r, c) for r in range(self._nb_rangs) for c in range(self._nb_colonnes)]

    def places_disponibles(self) -> List[Position]:
        """Énumère les sièges disponibles, dans l'ordre de `toutes_les_places`."""
        return [p for p in self.toutes_les_places() if self._disponibles[p.rang][p.colonne]]

    def nb_places_disponibles(self) -> int:
        return sum(1 for ligne in self._disponibles for v in ligne if v)

    def places_du_rang(self, rang: int) -> List[Position]:
        """Énumère les sièges disponibles du rang `rang` (vide si hors grille)."""
        if not 0 <= rang < self._nb_rangs:
            return []
        return [Position(rang, c) for c in range(self._nb_colonnes) if self._disponibles[rang][c]]

    def voisins_horizontaux(self, pos: Position) -> List[Position]:
        """Retourne les cases gauche/droite de `pos` qui sont dans la grille."""
        return [p for p in (pos.a_gauche(), pos.a_droite()) if self.dans_les_limites(p)]

    # --- Édition de la disposition ------------------------------------------

    def basculer_siege(self, pos: Position) -> None:
        """Fait tourner l'état du siège : any → male → female → indisponible → any."""
        if not self.dans_les_limites(pos):
            raise ValueError(f"Siège hors grille: {pos}.")
        r, c = pos.rang, pos.colonne
        if not self._disponibles[r][c]:
            self._disponibles[r][c] = True
            self._genres[r][c] = RestrictionGenre.INDIFFERENT
        elif self._genres[r][c] is RestrictionGenre.INDIFFERENT:
            self._genres[r][c] = RestrictionGenre.MASCULIN
        elif self._genres[r][c] is RestrictionGenre.MASCULIN:
            self._genres[r][c] = RestrictionGenre.FEMININ
        else:
            self._disponibles[r][c] = False
            self._genres[r][c] = RestrictionGenre.INDIFFERENT

    def alterner_genres(self) -> None:
        """
        Pose une alternance fille / garçon sur les sièges disponibles.

        L'alternance suit l'ordre rang par rang et commence par « female » ;
        les cases indisponibles sont sautées sans casser l'alternance.
        Appliquer deux fois donne le même résultat.
        """
        alternance = (RestrictionGenre.FEMININ, RestrictionGenre.MASCULIN)
        for i, p in enumerate(self.places_disponibles()):
            self._genres[p.rang][p.colonne] = alternance[i % 2]

    def schema(self) -> List[List[dict[str, Any]]]:
        """Export JSON de la disposition (format accepté par `depuis_schema`)."""
        return [
            [
                {"available": self._disponibles[r][c], "gender": self._genres[r][c].value}
                for c in range(self._nb_colonnes)
            ]
            for r in range(self._nb_rangs)
        ]

    def __str__(self) -> str:
        """
        Représentation texte simple : « . » siège libre, « F »/« M » siège
        restreint, « # » case indisponible. Utile pour debug.
        """
        symboles = {
            RestrictionGenre.INDIFFERENT: ".",
            RestrictionGenre.FEMININ: "F",
            RestrictionGenre.MASCULIN: "M",
        }
        lignes: List[str] = []
        for r in range(self._nb_rangs):
            lignes.append(" ".join(
                symboles[self._genres[r][c]] if self._disponibles[r][c] else "#"
                for c in range(self._nb_colonnes)
            ))
        return "\n".join(lignes)

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from .genre import Genre, genre_depuis_texte


class Eleve:
    """Modélise un élève plaçable dans la grille de la classe.


    Paramètres du constructeur
    --------------------------
    nom : str
    Nom tel que saisi (ex. « Alice »). Sert d'identité : supposé unique
    dans une résolution donnée.
    genre : Genre | str | None
    Genre déclaré (« male » / « female ») ou rien.


    Détails d'implémentation
    ------------------------
    - Le nom est épuré des espaces de bord.
    - L'élève est immuable pendant une résolution : aucune position n'est
      stockée ici, le solveur tient sa propre grille.
    """

    def __init__(self, nom: str, genre: Union[Genre, str, None] = None) -> None:
        nom_epure: str = nom.strip()
        if not nom_epure:
            raise ValueError("Le nom d'un élève ne peut pas être vide.")
        self._nom: str = nom_epure
        self._genre: Optional[Genre] = genre_depuis_texte(genre)

    @classmethod
    def depuis_donnees(cls, donnees: Union[str, Mapping[str, Any]]) -> "Eleve":
        """Construit un élève depuis une entrée de roster.

        Accepte l'ancien format (simple chaîne = nom) comme le format
        objet `{"name": ..., "gender": ...}`.
        """
        if isinstance(donnees, str):
            return cls(nom=donnees)
        if not isinstance(donnees, Mapping):
            raise ValueError(f"Entrée de roster invalide: {donnees!r}")
        if "name" not in donnees:
            raise ValueError(f"Élève sans nom: {dict(donnees)!r}")
        return cls(nom=str(donnees["name"]), genre=donnees.get("gender"))

    def nom(self) -> str:
        """Retourne le nom (identité) de l'élève."""
        return self._nom

    def genre(self) -> Optional[Genre]:
        """Retourne le genre déclaré, ou `None`."""
        return self._genre

    def en_dict(self) -> dict[str, Any]:
        """Représentation sérialisable (clé `gender` absente si non déclaré)."""
        d: dict[str, Any] = {"name": self._nom}
        if self._genre is not None:
            d["gender"] = self._genre.value
        return d

    # --- Protocole de comparaison / hachage ---
    def __str__(self) -> str:  # pragma: no cover - représentation
        return self._nom if self._genre is None else f"{self._nom} ({self._genre.value})"

    def __repr__(self) -> str:  # pragma: no cover - représentation
        return f"Eleve({self._nom!r}, {self._genre.value if self._genre else None!r})"

    def __hash__(self) -> int:
        return hash(self._nom)

    def __eq__(self, autre: object) -> bool:
        return isinstance(autre, Eleve) and self._nom == autre._nom

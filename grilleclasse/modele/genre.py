from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class Genre(str, Enum):
    """Genre déclaré d'un élève (facultatif).

    Hérite de `str` pour une sérialisation JSON directe.
    """

    MASCULIN = "male"
    FEMININ = "female"


class RestrictionGenre(str, Enum):
    """Restriction de genre posée sur un siège."""

    MASCULIN = "male"
    FEMININ = "female"
    INDIFFERENT = "any"


def genre_depuis_texte(valeur: Union[str, Genre, None]) -> Optional[Genre]:
    """Convertit une saisie libre (« male », « Female », « ») en `Genre`.

    Une chaîne vide ou `None` donne `None` (genre non déclaré).
    Lève `ValueError` pour toute autre valeur.
    """
    if valeur is None or isinstance(valeur, Genre):
        return valeur
    texte: str = str(valeur).strip().lower()
    if not texte:
        return None
    try:
        return Genre(texte)
    except ValueError as exc:
        raise ValueError(f"Genre inconnu: {valeur!r}") from exc


def restriction_depuis_texte(valeur: Union[str, RestrictionGenre, None]) -> RestrictionGenre:
    """Convertit une saisie libre en `RestrictionGenre` (`None` ou vide → « any »)."""
    if isinstance(valeur, RestrictionGenre):
        return valeur
    texte: str = str(valeur or "").strip().lower()
    if not texte:
        return RestrictionGenre.INDIFFERENT
    try:
        return RestrictionGenre(texte)
    except ValueError as exc:
        raise ValueError(f"Restriction de genre inconnue: {valeur!r}") from exc


def genre_compatible(restriction: RestrictionGenre, genre: Optional[Genre]) -> bool:
    """Indique si un élève de genre `genre` peut occuper un siège restreint à `restriction`.

    Un siège « any » accepte tout le monde ; un élève sans genre déclaré
    est accepté partout (joker, pas exclusion).
    """
    if restriction is RestrictionGenre.INDIFFERENT or genre is None:
        return True
    return restriction.value == genre.value

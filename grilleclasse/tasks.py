from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Mapping, Optional

from celery import shared_task
from django.conf import settings

from .contraintes.base import Contrainte
from .fabrique_ui import fabrique_depuis_payload
from .modele.eleve import Eleve
from .modele.salle import Salle
from .solveurs.aleatoire import SolveurAleatoireRetourArriere
from .solveurs.base import ResultatPlacement

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------- helpers de conversion

def _entier_ou_none(valeur: Any) -> Optional[int]:
    if valeur is None or valeur == "":
        return None
    try:
        return int(valeur)
    except (TypeError, ValueError):
        return None


def _parse_options(options: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Normalise les options et pose les défauts.

    Champs reconnus (tous facultatifs) :
      - random_seed: int | null      graine pour une résolution reproductible
      - shuffle_students: bool       mélange l'ordre des élèves avant la recherche
      - max_attempts: int | null     plafond d'essais (défaut : GRILLECLASSE_ESSAIS_MAX)
      - time_budget_ms: int | null   budget temps (défaut : GRILLECLASSE_BUDGET_TEMPS_MS)
    """
    o: Dict[str, Any] = {**(options or {})}
    o["random_seed"] = _entier_ou_none(o.get("random_seed"))
    o["shuffle_students"] = bool(o.get("shuffle_students", False))
    o["max_attempts"] = _entier_ou_none(o.get("max_attempts", getattr(settings, "GRILLECLASSE_ESSAIS_MAX", None)))
    o["time_budget_ms"] = _entier_ou_none(
        o.get("time_budget_ms", getattr(settings, "GRILLECLASSE_BUDGET_TEMPS_MS", None))
    )
    return o


def resoudre_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Traduit un payload UI en salle/élèves/contraintes, résout, et rend une
    structure JSON homogène (`status` = SUCCESS ou FAILURE).

    Partagé par la vue synchrone et la tâche Celery.
    """
    options: Dict[str, Any] = _parse_options(payload.get("options", {}))

    try:
        salle: Salle
        eleves: List[Eleve]
        contraintes: List[Contrainte]
        salle, eleves, contraintes = fabrique_depuis_payload(payload)
    except ValueError as exc:
        logger.info("Payload rejeté : %s", exc)
        return {"status": "FAILURE", "error": str(exc), "reason": "invalid_input"}

    rng: Optional[random.Random] = random.Random(options["random_seed"]) if options["random_seed"] is not None else None
    slv = SolveurAleatoireRetourArriere(rng=rng, melanger_eleves=options["shuffle_students"])
    res: ResultatPlacement = slv.resoudre(
        salle,
        eleves,
        contraintes,
        essais_max=options["max_attempts"],
        budget_temps_ms=options["time_budget_ms"],
    )

    if not res.succes:
        return {
            "status": "FAILURE",
            "error": res.message,
            "reason": res.echec.value if res.echec else None,
            "essais": res.essais,
        }
    return {
        "status": "SUCCESS",
        "seating": res.grille,
        "essais": res.essais,
        "verifications": res.verifications,
        "random_seed": options["random_seed"],
        "shuffle_students": options["shuffle_students"],
    }


# --------------------------------------------------------------------------- tâche principale

@shared_task(bind=True)
def t_resoudre_placement(self, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Tâche asynchrone de résolution :
      - traduit le payload UI en salle/élèves/contraintes,
      - exécute la résolution,
      - rend la grille (ou le motif d'échec).
    """
    logger.debug("Tâche %s : résolution démarrée", self.request.id)
    return resoudre_payload(payload)

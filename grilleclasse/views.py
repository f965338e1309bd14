# grilleclasse/views.py

"""
Vues de l'application "grilleclasse".

Contenu :
- Sonde de santé (sante)
- Résolution synchrone (solve) pour les petites classes
- Démarrage et polling d'une tâche Celery (solve_start / solve_status)
- Description lisible des contraintes d'un payload (contraintes_texte)

Toutes les bornes parlent JSON ; un corps illisible donne un 400.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from django.http import HttpRequest, HttpResponse, HttpResponseBadRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .fabrique_ui import fabrique_depuis_payload
from .tasks import resoudre_payload

logger = logging.getLogger(__name__)


def _lire_json(request: HttpRequest) -> Optional[Dict[str, Any]]:
    """Décode le corps JSON ; `None` s'il est illisible ou n'est pas un objet."""
    try:
        data = json.loads((request.body or b"{}").decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


# ---------------------------------------------------------------------------
# Pages basiques
# ---------------------------------------------------------------------------

@require_GET
def sante(request: HttpRequest) -> HttpResponse:
    """
    Sonde de santé (sans DB/cache), utile pour load balancer / monitoring.
    """
    return JsonResponse({"ok": True, "service": "grilleclasse", "version": 1})


# ---------------------------------------------------------------------------
# Résolution
# ---------------------------------------------------------------------------

@csrf_exempt
@require_POST
def solve(request: HttpRequest) -> HttpResponse:
    """
    Résout immédiatement et renvoie le résultat :
    - Body : {"rows", "cols", "layout"?, "students", "constraints", "options"?}
    - Réponse : {"status": "SUCCESS", "seating": ...} ou {"status": "FAILURE", "error": ...}
    """
    data = _lire_json(request)
    if data is None:
        return HttpResponseBadRequest("JSON invalide")
    return JsonResponse(resoudre_payload(data))


@csrf_exempt
@require_POST
def solve_start(request: HttpRequest) -> HttpResponse:
    """
    Lance la tâche Celery de résolution :
    - Body : même JSON que `solve`
    - Réponse : {"task_id": "..."} à poller via solve_status
    """
    from .tasks import t_resoudre_placement

    data = _lire_json(request)
    if data is None:
        return HttpResponseBadRequest("JSON invalide")
    task = t_resoudre_placement.delay(data)
    logger.debug("Tâche de résolution %s envoyée", task.id)
    return JsonResponse({"task_id": task.id})


@require_GET
def solve_status(request: HttpRequest, task_id: str) -> HttpResponse:
    """
    Polling d'état (PENDING / STARTED / SUCCESS / FAILURE).
    En cas de SUCCESS, renvoie aussi le résultat de la tâche.
    """
    from celery.result import AsyncResult

    ar = AsyncResult(task_id)
    if ar.state in ("PENDING", "RECEIVED", "STARTED", "RETRY"):
        return JsonResponse({"status": ar.state})
    if ar.state == "SUCCESS":
        return JsonResponse(ar.result)  # type: ignore[arg-type]

    # FAILURE (exception dans la tâche)
    logger.error("Tâche %s en échec : %s", task_id, ar.result)
    return JsonResponse({"status": "FAILURE", "error": str(ar.result) or "échec."})


# ---------------------------------------------------------------------------
# Description des contraintes
# ---------------------------------------------------------------------------

@csrf_exempt
@require_POST
def contraintes_texte(request: HttpRequest) -> HttpResponse:
    """
    Renvoie, pour chaque contrainte du payload, son texte lisible et son
    code normalisé : {"constraints": [{"text": ..., "code": {...}}, ...]}.
    """
    data = _lire_json(request)
    if data is None:
        return HttpResponseBadRequest("JSON invalide")
    try:
        _salle, _eleves, contraintes = fabrique_depuis_payload(data)
    except ValueError as exc:
        return JsonResponse({"error": str(exc)}, status=400)
    return JsonResponse({
        "constraints": [{"text": c.texte_humain(), "code": c.code_machine()} for c in contraintes],
    })

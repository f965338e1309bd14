from django.urls import path
from . import views

app_name = "grilleclasse"

urlpatterns = [
    # Petite sonde de santé (pratique pour Nginx / monitoring)
    path("sante", views.sante, name="sante"),

    # Résolution synchrone (petites classes) ou via Celery (start + polling)
    path("solve", views.solve, name="gc_solve"),
    path("solve/start", views.solve_start, name="gc_solve_start"),
    path("solve/status/<str:task_id>", views.solve_status, name="gc_solve_status"),

    # Texte lisible des contraintes d'un payload
    path("contraintes/texte", views.contraintes_texte, name="gc_contraintes_texte"),
]

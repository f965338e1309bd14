# grilleclasse/apps.py
from django.apps import AppConfig


class GrilleclasseConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "grilleclasse"

    def ready(self):
        # enregistre les fabriques de contraintes dans le registre
        from .contraintes import enregistrement  # noqa: F401

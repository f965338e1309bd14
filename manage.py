#!/usr/bin/env python
"""Utilitaire en ligne de commande de Django pour le site grilleclasse."""
import os
import sys


def main():
    """Point d'entrée des commandes de gestion (runserver, check...)."""
    # dev par défaut ; la prod passe DJANGO_SETTINGS_MODULE=siteclasse.settings.prod
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "siteclasse.settings.dev")
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Django is not installed or not on PYTHONPATH."
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()

# grilleclasse/__main__.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


def _run_exemple() -> int:
    # importe tardivement pour éviter d'imposer des dépendances quand on affiche juste l'aide
    try:
        from .exemples import run_exemple
    except ImportError as e:
        print("Impossible d'importer grilleclasse.exemples.run_exemple :", e, file=sys.stderr)
        return 1
    run_exemple()
    return 0


def _run_resoudre(fichier: Path, graine: int | None) -> int:
    from .exemples import resoudre_fichier

    if not fichier.is_file():
        print(f"Fichier introuvable : {fichier}", file=sys.stderr)
        return 1
    return resoudre_fichier(fichier, graine=graine)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="grilleclasse",
        description="Outils et exemples pour le placement en grille."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Journalise la recherche (niveau DEBUG).")
    sub = parser.add_subparsers(dest="cmd")

    p_ex = sub.add_parser("exemple", help="Exécute le scénario d'exemple.")
    p_ex.set_defaults(func=lambda a: _run_exemple())

    p_res = sub.add_parser("resoudre", help="Résout un payload JSON et affiche la grille.")
    p_res.add_argument("fichier", type=Path, help="Chemin du payload JSON.")
    p_res.add_argument("--graine", type=int, default=None, help="Graine aléatoire (résultat reproductible).")
    p_res.set_defaults(func=lambda a: _run_resoudre(a.fichier, a.graine))

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # défaut: si aucune sous-commande n'est fournie, on lance l'exemple
    if not args.cmd:
        return _run_exemple()

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())

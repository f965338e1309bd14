import json

from grilleclasse.__main__ import main


def test_exemple(capsys):
    assert main(["exemple"]) == 0
    out = capsys.readouterr().out
    assert "=== placement trouvé ===" in out
    assert "reconstruction via fabrique : OK" in out


def test_resoudre_fichier(tmp_path, capsys):
    chemin = tmp_path / "payload.json"
    chemin.write_text(json.dumps({"rows": 1, "cols": 2, "students": ["Alice", "Bob"]}), encoding="utf-8")
    assert main(["resoudre", str(chemin), "--graine", "4"]) == 0
    out = capsys.readouterr().out
    assert "Alice" in out and "Bob" in out


def test_resoudre_sans_solution(tmp_path, capsys):
    chemin = tmp_path / "payload.json"
    chemin.write_text(json.dumps({"rows": 1, "cols": 1, "students": ["Alice", "Bob"]}), encoding="utf-8")
    assert main(["resoudre", str(chemin)]) == 1
    assert "Not enough available seats" in capsys.readouterr().out


def test_fichier_introuvable(tmp_path):
    assert main(["resoudre", str(tmp_path / "absent.json")]) == 1

# comments in English
def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.content == b"ok"


def test_sante(client):
    r = client.get("/grilleclasse/sante")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_solve_requires_post(client):
    r = client.get("/grilleclasse/solve")
    assert r.status_code == 405

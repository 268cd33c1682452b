import pytest


@pytest.mark.django_db
def test_health_reports_db_ok(client):
    r = client.get("/health/")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "components": {"db": {"ok": True}}}

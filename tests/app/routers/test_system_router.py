"""Tests for the system settings endpoint."""


def test_system_settings(client):
    r = client.get("/system/settings")
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["general"]["is_production"] is False
    assert data["app"]["environment"] == "test"
    assert data["database"]["database_driver"] == "sqlite"
    assert data["generation"]["backend"] == "local"
    assert data["conversation"]["default_page_size"] == 20

def test_config(client, settings):
    response = client.get("/config")
    assert response.status_code == 200
    data = response.json()
    assert data["intake_cap"] == settings.intake_cap
    assert data["data_dir"] == str(settings.data_dir)
    assert data["rate_limit_enabled"] is False

"""
Tests for pot routes
"""

SETTINGS = {
    "start_watering_threshold": 25,
    "stop_watering_threshold": 70,
    "auto_stop": False,
    "single_water_volume": 12,
    "indicator_light": False,
}


def test_pots_require_login(client):
    """Test that pot routes reject requests without a current session."""
    response = client.get("/pots")
    assert response.status_code == 401


def test_list_seeded_pots(logged_in_client):
    """Test that a fresh registry contains the demo pots."""
    response = logged_in_client.get("/pots")
    assert response.status_code == 200
    pots = response.json()
    assert [p["id"] for p in pots] == ["pot_001", "pot_002"]
    assert [p["soil_moisture"] for p in pots] == [32, 65]
    assert len(pots[0]["history"]) == 25
    assert len(pots[0]["temperature_history"]) == 25


def test_get_pot(logged_in_client):
    response = logged_in_client.get("/pots/pot_002")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Balcony Basil"
    assert data["device_serial_number"] == "SN-4421-B772"
    assert data["bind_date"] == "2023-11-02"


def test_get_unknown_pot(logged_in_client):
    response = logged_in_client.get("/pots/pot_999")
    assert response.status_code == 404


def test_get_history(logged_in_client):
    """Test both history series are served oldest first."""
    pot = logged_in_client.get("/pots/pot_001").json()

    moisture = logged_in_client.get("/pots/pot_001/history").json()
    assert moisture == pot["history"]

    temperature = logged_in_client.get(
        "/pots/pot_001/history", params={"kind": "temperature"}
    ).json()
    assert temperature == pot["temperature_history"]

    response = logged_in_client.get("/pots/pot_999/history")
    assert response.status_code == 404


def test_update_settings(logged_in_client):
    """Test settings are replaced and other pots are untouched."""
    before = logged_in_client.get("/pots/pot_002").json()

    response = logged_in_client.put("/pots/pot_001/settings", json=SETTINGS)
    assert response.status_code == 200
    assert response.json()["settings"] == SETTINGS

    assert logged_in_client.get("/pots/pot_001").json()["settings"] == SETTINGS
    assert logged_in_client.get("/pots/pot_002").json() == before


def test_update_settings_rejects_inverted_thresholds(logged_in_client):
    settings = dict(SETTINGS, start_watering_threshold=70, stop_watering_threshold=60)
    response = logged_in_client.put("/pots/pot_001/settings", json=settings)
    assert response.status_code == 422


def test_update_settings_rejects_out_of_range_volume(logged_in_client):
    settings = dict(SETTINGS, single_water_volume=50)
    response = logged_in_client.put("/pots/pot_001/settings", json=settings)
    assert response.status_code == 422


def test_update_settings_unknown_pot(logged_in_client):
    before = logged_in_client.get("/pots").json()
    response = logged_in_client.put("/pots/pot_999/settings", json=SETTINGS)
    assert response.status_code == 404
    assert logged_in_client.get("/pots").json() == before


def test_update_name_and_image(logged_in_client):
    response = logged_in_client.patch("/pots/pot_001/name", json={"name": "Fern"})
    assert response.status_code == 200
    assert response.json()["name"] == "Fern"

    response = logged_in_client.put(
        "/pots/pot_001/image", json={"image": "https://example.com/fern.png"}
    )
    assert response.status_code == 200
    pot = logged_in_client.get("/pots/pot_001").json()
    assert pot["name"] == "Fern"
    assert pot["image"] == "https://example.com/fern.png"


def test_update_name_unknown_pot(logged_in_client):
    response = logged_in_client.patch("/pots/pot_999/name", json={"name": "Fern"})
    assert response.status_code == 404
    response = logged_in_client.put("/pots/pot_999/image", json={"image": "x"})
    assert response.status_code == 404


def test_bind_and_unbind_pot(logged_in_client):
    """Test binding a pot then unbinding it restores the registry."""
    before = logged_in_client.get("/pots").json()

    response = logged_in_client.post(
        "/pots",
        json={"device_serial_number": "SN-0001-A001", "anonymous_id": "AID-1"},
    )
    assert response.status_code == 201
    pot = response.json()
    assert pot["id"].startswith("pot_")
    assert pot["name"] == "New Pot"
    assert pot["settings"]["start_watering_threshold"] == 30

    ids = [p["id"] for p in logged_in_client.get("/pots").json()]
    assert ids == ["pot_001", "pot_002", pot["id"]]

    response = logged_in_client.delete(f"/pots/{pot['id']}")
    assert response.status_code == 204
    assert logged_in_client.get(f"/pots/{pot['id']}").status_code == 404
    assert logged_in_client.get("/pots").json() == before


def test_bind_duplicate_serial(logged_in_client):
    response = logged_in_client.post(
        "/pots",
        json={"device_serial_number": "SN-7823-X921", "anonymous_id": "AID-2"},
    )
    assert response.status_code == 409


def test_unbind_unknown_pot_is_noop(logged_in_client):
    """Test that unbinding an unknown pot succeeds and changes nothing."""
    before = logged_in_client.get("/pots").json()
    response = logged_in_client.delete("/pots/pot_999")
    assert response.status_code == 204
    assert logged_in_client.get("/pots").json() == before


def test_update_settings_requires_complete_object(logged_in_client):
    """Test that a partial settings body is rejected rather than merged."""
    response = logged_in_client.put(
        "/pots/pot_001/settings", json={"auto_stop": False}
    )
    assert response.status_code == 422
    settings = logged_in_client.get("/pots/pot_001").json()["settings"]
    assert settings["auto_stop"] is True

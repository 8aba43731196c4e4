def test_health_live(client):
    response = client.get("/health/live")

    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "ok"
    assert body["server_time"].endswith("Z")


def test_health_ready_checks_database(client):
    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.get_json() == {"db": "ok", "status": "ok"}


def test_responses_carry_timing_headers(client):
    response = client.get("/health/live")

    assert response.headers["Server-Timing"].startswith("app;dur=")
    assert response.headers["X-Server-Time"].endswith("Z")

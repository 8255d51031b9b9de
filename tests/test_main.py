def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "version" in response.json()


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["token_signing_configured"] is True


def test_unknown_route_is_not_wrapped(client):
    assert client.get("/api/nowhere").status_code == 404

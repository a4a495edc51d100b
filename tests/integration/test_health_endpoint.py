"""
Health endpoint test through the HTTP API.
"""


def test_health_reports_database(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"

"""Unit tests for the health and metrics endpoints."""

from fastapi.testclient import TestClient

from fixwatch.api.main import app


class TestHealthRoute:
    """Tests for GET /v1/health."""

    def test_health(self, project_version: str) -> None:
        response = TestClient(app).get("/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": project_version}


class TestMetricsRoute:
    """Tests for GET /v1/metrics."""

    def test_prometheus_format(self) -> None:
        client = TestClient(app)
        client.post("/v1/reports", json={"description": "x", "location": "y"})

        response = client.get("/v1/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "reports_submitted_total" in response.text
        assert "http_requests_total" in response.text

    def test_report_ids_not_used_as_labels(self) -> None:
        client = TestClient(app)
        report_id = client.post(
            "/v1/reports", json={"description": "x", "location": "y"}
        ).json()["report_id"]
        client.get(f"/v1/reports/{report_id}")

        response = client.get("/v1/metrics")

        assert report_id not in response.text
        assert "/v1/reports/{report_id}" in response.text

    def test_correlation_id_echoed(self) -> None:
        response = TestClient(app).get(
            "/v1/health", headers={"X-Correlation-ID": "req-42"}
        )

        assert response.headers["X-Correlation-ID"] == "req-42"

    def test_oversized_correlation_id_replaced(self) -> None:
        supplied = "x" * 500

        response = TestClient(app).get(
            "/v1/health", headers={"X-Correlation-ID": supplied}
        )

        echoed = response.headers["X-Correlation-ID"]
        assert echoed != supplied
        assert len(echoed) == 32

from unittest.mock import patch


class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert set(data["services"]) == {"database", "cache"}

    def test_health_check_reports_response_times(self, client):
        data = client.get("/health").json()
        for service in data["services"].values():
            assert service["status"] == "up"
            assert "response_time_ms" in service

    def test_cache_failure_returns_503(self, client):
        def broken_cache():
            raise ConnectionError("redis unreachable")

        with patch.dict("modules.core.views.PROBES", {"cache": broken_cache}):
            response = client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["services"]["cache"] == {"status": "down"}
        assert data["services"]["database"]["status"] == "up"

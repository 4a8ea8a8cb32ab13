"""Health and root endpoint tests (no authentication)."""


class TestHealth:
    def test_root_returns_app_info(self, test_client):
        r = test_client.get("/")
        assert r.status_code == 200
        data = r.json()
        assert data.get("name") == "EAP Billing API"
        assert "version" in data
        assert data.get("status") == "running"

    def test_health_returns_ok(self, test_client):
        r = test_client.get("/health")
        assert r.status_code == 200
        data = r.json()
        assert data.get("status") == "healthy"
        assert data["components"]["database"] == "ok"

    def test_unknown_path_returns_json_404(self, test_client):
        r = test_client.get("/nope")
        assert r.status_code == 404
        assert r.json()["error"] == "Not Found"

    def test_responses_carry_process_time(self, test_client):
        r = test_client.get("/health")
        assert float(r.headers["X-Process-Time"]) >= 0


class TestRequestLogging:
    def test_health_polls_are_not_logged_at_info(self, test_client, caplog):
        with caplog.at_level("INFO", logger="app.core.middleware"):
            test_client.get("/health")
        assert not [r for r in caplog.records if r.name == "app.core.middleware"]

    def test_rejected_requests_are_logged_as_warnings(self, test_client, caplog):
        with caplog.at_level("INFO", logger="app.core.middleware"):
            test_client.get("/api/cron/subscription")
        records = [r for r in caplog.records if r.name == "app.core.middleware"]
        assert len(records) == 1
        assert records[0].levelname == "WARNING"
        assert "/api/cron/subscription" in records[0].getMessage()
        assert "[401]" in records[0].getMessage()

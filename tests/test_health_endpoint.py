"""Test health endpoint connectivity"""

from fastapi.testclient import TestClient

from regdesk.main import create_app
from regdesk.models.database import create_db_engine


class TestHealthEndpoint:
    """Test health endpoint is accessible"""

    def test_health_endpoint(self, client):
        """Test that the health endpoint is accessible"""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "regdesk"

    def test_detailed_health_endpoint(self, client):
        """Test that the detailed health check reaches the database"""
        response = client.get("/health/detailed")

        assert response.status_code == 200
        assert response.json()["checks"]["database"] == "healthy"

    def test_unknown_route_uses_error_envelope(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_detailed_health_reports_unreachable_database(self, tmp_path):
        """Test that a failing database check returns 503 with the full report"""
        unreachable = create_db_engine(f"sqlite:///{tmp_path / 'missing' / 'db.sqlite'}")
        app = create_app(engine=unreachable)
        app.state.engine = unreachable

        response = TestClient(app).get("/health/detailed")

        assert response.status_code == 503
        body = response.json()
        assert body["success"] is False
        assert body["error"]["status"] == "unhealthy"
        assert body["error"]["checks"]["database"].startswith("unhealthy")
        unreachable.dispose()

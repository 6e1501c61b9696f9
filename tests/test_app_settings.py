from src.planner.repositories import InMemoryRepository, open_repository
from src.planner.settings import DEFAULT_MONGO_URI, get_settings


class TestHealth:
    def test_health_check(self, client):
        res = client.get("/")
        assert res.status_code == 200
        data = res.json()
        assert data["message"] == "Healthy"
        assert data["backend"] in ("memory", "mongo")


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("PERSISTENCE_BACKEND", "MONGO_URI", "CORS_ALLOW_ORIGINS", "PORT", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = get_settings()
        assert settings.persistence_backend == "memory"
        assert settings.mongo_uri == DEFAULT_MONGO_URI
        assert settings.cors_allow_origins == ["*"]
        assert settings.port == 5001
        assert settings.log_level == "INFO"

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "Mongo")
        monkeypatch.setenv("MONGO_URI", "mongodb://db:27017/plans")
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
        monkeypatch.setenv("PORT", "8080")
        settings = get_settings()
        assert settings.persistence_backend == "mongo"
        assert settings.mongo_uri == "mongodb://db:27017/plans"
        assert settings.cors_allow_origins == ["http://a.test", "http://b.test"]
        assert settings.port == 8080

    def test_unknown_backend_and_bad_port_fall_back(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "sqlite")
        monkeypatch.setenv("PORT", "not-a-port")
        settings = get_settings()
        assert settings.persistence_backend == "memory"
        assert settings.port == 5001
        assert isinstance(open_repository(settings), InMemoryRepository)

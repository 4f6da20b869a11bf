"""
Tests for Settings and Credential Status
"""

from information_layer.core.config import Settings


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettings:

    def test_defaults(self):
        settings = make_settings()

        assert settings.port == 3000
        assert settings.rate_limit == "1000 per 15 minutes"
        assert settings.max_request_body_bytes == 1024 * 1024
        assert settings.allowed_origins_list == ["http://localhost:3000", "http://localhost:3001"]

    def test_origins_parsing(self):
        settings = make_settings(allowed_origins=" https://a.example.com , ,https://b.example.com")

        assert settings.allowed_origins_list == ["https://a.example.com", "https://b.example.com"]

    def test_production_flag(self):
        assert make_settings(environment="Production").is_production
        assert not make_settings().is_production

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("RATE_LIMIT", "10/minute")
        monkeypatch.setenv("ENABLE_DEMO_MODE", "true")

        settings = make_settings()

        assert settings.rate_limit == "10/minute"
        assert settings.enable_demo_mode is True


class TestConfigurationStatus:

    def test_placeholders_count_as_missing(self):
        settings = make_settings(
            openai_api_key="your-openai-key-here",
            pinecone_api_key="pc-real",
            pinecone_environment="us-east-1",
        )

        assert settings.missing_api_keys() == ["OPENAI_API_KEY"]

        status = settings.configuration_status()
        assert status["configured"] is False
        assert status["openai_configured"] is False
        assert status["pinecone_configured"] is True
        assert status["configured_keys"] == 2

    def test_demo_mode_counts_as_configured(self):
        status = make_settings(enable_demo_mode=True).configuration_status()

        assert status["configured"] is True
        assert status["demo_mode"] is True
        assert len(status["missing_keys"]) == 3

    def test_fully_configured(self):
        status = make_settings(
            openai_api_key="sk-1",
            pinecone_api_key="pc-1",
            pinecone_environment="gcp-starter",
        ).configuration_status()

        assert status["configured"] is True
        assert status["missing_keys"] == []

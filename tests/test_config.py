"""Tests for configuration loading and validation."""

import pytest
from pydantic import ValidationError

from models.config_models import Config, CredentialsConfig, ServerConfig
from utils.config_loader import load_config


class TestCredentialsConfig:
    """Test CredentialsConfig validation."""

    def test_valid_credentials(self):
        """Test that valid credentials pass validation."""
        creds = CredentialsConfig(
            github_client_id="Iv1.abc",
            github_client_secret="secret",
        )
        assert creds.github_client_id == "Iv1.abc"
        assert creds.github_client_secret == "secret"
        assert creds.llm_provider == "gemini"
        assert creds.llm_model == "gemini-2.5-pro"

    def test_rejects_placeholder_client_id(self):
        """Test that placeholder client ID is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            CredentialsConfig(
                github_client_id="your_github_client_id",
                github_client_secret="secret",
            )
        assert "GitHub client ID must be set" in str(exc_info.value)

    def test_rejects_placeholder_client_secret(self):
        with pytest.raises(ValidationError) as exc_info:
            CredentialsConfig(
                github_client_id="Iv1.abc",
                github_client_secret="your_github_client_secret",
            )
        assert "GitHub client secret must be set" in str(exc_info.value)

    def test_empty_credentials_rejected(self):
        """Test that empty credentials are rejected."""
        with pytest.raises(ValidationError):
            CredentialsConfig(
                github_client_id="",
                github_client_secret="",
            )

    def test_optional_llm_keys(self):
        """Test that LLM API keys are optional."""
        creds = CredentialsConfig(
            github_client_id="Iv1.abc",
            github_client_secret="secret",
        )
        assert creds.gemini_api_key is None
        assert creds.openai_api_key is None
        assert creds.anthropic_api_key is None

    def test_provider_is_normalized(self):
        creds = CredentialsConfig(
            github_client_id="Iv1.abc",
            github_client_secret="secret",
            llm_provider="OpenAI",
        )
        assert creds.llm_provider == "openai"

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            CredentialsConfig(
                github_client_id="Iv1.abc",
                github_client_secret="secret",
                llm_provider="cohere",
            )
        assert "LLM provider must be one of" in str(exc_info.value)

    def test_api_key_for_provider(self):
        creds = CredentialsConfig(
            github_client_id="Iv1.abc",
            github_client_secret="secret",
            gemini_api_key="g-key",
            openai_api_key="o-key",
        )
        assert creds.api_key_for("gemini") == "g-key"
        assert creds.api_key_for("OPENAI") == "o-key"
        assert creds.api_key_for("anthropic") is None


class TestServerConfig:
    """Test ServerConfig defaults and parsing."""

    def test_defaults(self):
        server = ServerConfig(session_secret="s3cret")
        assert server.github_redirect_uri == "http://localhost:3000/auth/github/callback"
        assert server.frontend_url == "http://localhost:3001"
        assert server.cors_origins == [
            "http://localhost:5173",
            "https://lakshitabeniwal.github.io",
        ]
        assert server.github_timeout == 30.0
        assert server.session_max_age == 1209600

    def test_cors_origins_from_comma_string(self):
        server = ServerConfig(
            session_secret="s3cret",
            cors_origins="http://a.example, http://b.example,,",
        )
        assert server.cors_origins == ["http://a.example", "http://b.example"]

    def test_frontend_url_trailing_slash_removed(self):
        server = ServerConfig(session_secret="s3cret", frontend_url="http://localhost:3001/")
        assert server.frontend_url == "http://localhost:3001"

    def test_missing_session_secret_rejected(self):
        with pytest.raises(ValidationError):
            ServerConfig(session_secret="")

    def test_placeholder_session_secret_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ServerConfig(session_secret="your_session_secret")
        assert "Session secret must be set" in str(exc_info.value)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            ServerConfig(session_secret="s3cret", github_timeout=0)

    def test_session_max_age_must_be_positive(self):
        with pytest.raises(ValidationError):
            ServerConfig(session_secret="s3cret", session_max_age=0)


class TestConfig:
    """Test main Config model."""

    def test_log_level_case_insensitive(self):
        """Test that log level is normalized to uppercase."""
        config = Config(
            credentials=CredentialsConfig(
                github_client_id="Iv1.abc",
                github_client_secret="secret",
            ),
            server=ServerConfig(session_secret="s3cret"),
            log_level="info",
        )
        assert config.log_level == "INFO"

    def test_invalid_log_level_rejected(self):
        """Test that invalid log level is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Config(
                credentials=CredentialsConfig(
                    github_client_id="Iv1.abc",
                    github_client_secret="secret",
                ),
                server=ServerConfig(session_secret="s3cret"),
                log_level="INVALID",
            )
        assert "Log level must be one of" in str(exc_info.value)


class TestConfigLoader:
    """Test config_loader.load_config() function."""

    def test_load_valid_config(self, test_env):
        """Test loading valid configuration from environment."""
        config = load_config()

        assert config.credentials.github_client_id == test_env["github_client_id"]
        assert config.credentials.github_client_secret == test_env["github_client_secret"]
        assert config.credentials.gemini_api_key == test_env["gemini_api_key"]
        assert config.server.session_secret == test_env["session_secret"]
        assert config.log_level == test_env["log_level"]

    def test_load_config_reads_server_settings(self, test_env, monkeypatch):
        monkeypatch.setenv("FRONTEND_URL", "https://dash.example.com")
        monkeypatch.setenv("CORS_ORIGINS", "https://dash.example.com")
        monkeypatch.setenv("GITHUB_TIMEOUT", "12.5")

        config = load_config()

        assert config.server.frontend_url == "https://dash.example.com"
        assert config.server.cors_origins == ["https://dash.example.com"]
        assert config.server.github_timeout == 12.5

    def test_load_config_with_missing_credentials(self, invalid_env):
        """Test that loading config with missing credentials fails gracefully."""
        with pytest.raises(SystemExit) as exc_info:
            load_config()
        assert exc_info.value.code == 1

"""Configuration models for validation using Pydantic."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class CredentialsConfig(BaseModel):
    """API credentials loaded from environment variables."""

    # GitHub OAuth app (required for the web flow)
    github_client_id: str = Field(..., min_length=1, description="GitHub OAuth app client ID")
    github_client_secret: str = Field(..., min_length=1, description="GitHub OAuth app client secret")
    github_token: Optional[str] = Field(None, description="Personal access token used by the CLI")

    # LLM configuration
    gemini_api_key: Optional[str] = Field(None, description="Google Gemini API key")
    openai_api_key: Optional[str] = Field(None, description="OpenAI API key")
    anthropic_api_key: Optional[str] = Field(None, description="Anthropic API key")
    llm_provider: str = Field(default="gemini", description="LLM provider: 'gemini', 'openai' or 'anthropic'")
    llm_model: str = Field(default="gemini-2.5-pro", description="LLM model name")

    @field_validator("github_client_id")
    @classmethod
    def validate_client_id(cls, v: str) -> str:
        """Reject the placeholder from .env.example."""
        if v == "your_github_client_id":
            raise ValueError("GitHub client ID must be set in .env file")
        return v

    @field_validator("github_client_secret")
    @classmethod
    def validate_client_secret(cls, v: str) -> str:
        """Reject the placeholder from .env.example."""
        if v == "your_github_client_secret":
            raise ValueError("GitHub client secret must be set in .env file")
        return v

    @field_validator("llm_provider")
    @classmethod
    def validate_llm_provider(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in ("gemini", "openai", "anthropic"):
            raise ValueError("LLM provider must be one of: gemini, openai, anthropic")
        return v_lower

    def api_key_for(self, provider: str) -> Optional[str]:
        """Return the API key matching an LLM provider name."""
        return {
            "gemini": self.gemini_api_key,
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
        }.get(provider.lower())


class ServerConfig(BaseModel):
    """HTTP server, session and CORS settings."""

    session_secret: str = Field(..., min_length=1, description="Key used to sign the session cookie")
    github_redirect_uri: str = Field(
        default="http://localhost:3000/auth/github/callback",
        description="OAuth callback URL registered with the GitHub app"
    )
    frontend_url: str = Field(default="http://localhost:3001", description="Where to send users after login")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "https://lakshitabeniwal.github.io"],
        description="Origins allowed to call the API with credentials"
    )
    github_timeout: float = Field(default=30.0, gt=0, description="Per-request timeout for GitHub calls (seconds)")
    session_max_age: int = Field(
        default=14 * 24 * 60 * 60, gt=0, description="Seconds a session stays valid after sign-in"
    )

    @field_validator("session_secret")
    @classmethod
    def validate_session_secret(cls, v: str) -> str:
        if v == "your_session_secret":
            raise ValueError("Session secret must be set in .env file")
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, v):
        """Accept a comma separated string as well as a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("frontend_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class Config(BaseModel):
    """Application configuration."""

    credentials: CredentialsConfig
    server: ServerConfig
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper

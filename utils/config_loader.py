"""Configuration loader that reads from .env and validates with Pydantic."""

import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from pydantic import ValidationError

from models.config_models import Config, CredentialsConfig, ServerConfig

DEFAULT_CORS_ORIGINS = "http://localhost:5173,https://lakshitabeniwal.github.io"


def load_config() -> Config:
    """
    Load and validate configuration from environment variables.

    Reads from .env file in the project root and validates all required
    credentials and settings using Pydantic models.

    Returns:
        Config: Validated configuration object

    Raises:
        SystemExit: If configuration is invalid or missing required fields
    """
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    try:
        config = Config(
            credentials=CredentialsConfig(
                github_client_id=os.getenv("GITHUB_CLIENT_ID", ""),
                github_client_secret=os.getenv("GITHUB_CLIENT_SECRET", ""),
                github_token=os.getenv("GITHUB_TOKEN") or None,
                gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
                openai_api_key=os.getenv("OPENAI_API_KEY") or None,
                anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
                llm_provider=os.getenv("LLM_PROVIDER", "gemini"),
                llm_model=os.getenv("LLM_MODEL", "gemini-2.5-pro"),
            ),
            server=ServerConfig(
                session_secret=os.getenv("SESSION_SECRET", ""),
                github_redirect_uri=os.getenv(
                    "GITHUB_REDIRECT_URI", "http://localhost:3000/auth/github/callback"
                ),
                frontend_url=os.getenv("FRONTEND_URL", "http://localhost:3001"),
                cors_origins=os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
                github_timeout=os.getenv("GITHUB_TIMEOUT", "30"),
                session_max_age=os.getenv("SESSION_MAX_AGE", "1209600"),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

        return config

    except ValidationError as e:
        print("❌ Configuration validation failed:", file=sys.stderr)
        print("\nPlease check your .env file. Missing or invalid fields:", file=sys.stderr)

        for error in e.errors():
            field_path = " → ".join(str(x) for x in error["loc"])
            message = error["msg"]
            print(f"  • {field_path}: {message}", file=sys.stderr)

        print("\nHint: Copy .env.example to .env and fill in your credentials.", file=sys.stderr)
        sys.exit(1)

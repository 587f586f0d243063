"""Server configuration read from environment variables."""

import os

from pydantic import BaseModel, Field

DEV_JWT_SECRET = "dev_jwt_secret"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class ServerSettings(BaseModel):
    """Settings for the mentor HTTP server."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=5000)
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    jwt_secret: str = Field(default=DEV_JWT_SECRET)
    require_auth: bool = Field(default=False, description="Reject /api/ask calls without a valid token")
    account_backend: str = Field(default="sqlite")
    account_db: str = Field(default="./mentor_accounts.db")
    llm_provider: str = Field(default="gemini")
    llm_api_key: str | None = Field(default=None)
    llm_model: str | None = Field(default=None)

    @classmethod
    def from_env(cls) -> "ServerSettings":
        """Build settings from the environment.

        Environment variables:
            MENTOR_HOST, MENTOR_PORT: Bind address (default 127.0.0.1:5000)
            MENTOR_CORS_ORIGIN: Comma-separated allowed origins
            JWT_SECRET: Token signing secret
            MENTOR_REQUIRE_AUTH: Require a login token on /api/ask
            MENTOR_ACCOUNT_BACKEND: "sqlite" or "memory"
            MENTOR_ACCOUNT_DB: SQLite database path
            LLM_PROVIDER: "gemini" (default) or "openai"
            GEMINI_API_KEY / GEMINI_MODEL, OPENAI_API_KEY / OPENAI_CHAT_MODEL
        """
        provider = os.getenv("LLM_PROVIDER", "gemini").lower()
        if provider == "openai":
            api_key = os.getenv("OPENAI_API_KEY")
            model = os.getenv("OPENAI_CHAT_MODEL")
        else:
            api_key = os.getenv("GEMINI_API_KEY")
            model = os.getenv("GEMINI_MODEL")

        origins = os.getenv("MENTOR_CORS_ORIGIN", "http://localhost:5173")
        return cls(
            host=os.getenv("MENTOR_HOST", "127.0.0.1"),
            port=int(os.getenv("MENTOR_PORT", "5000")),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            jwt_secret=os.getenv("JWT_SECRET", DEV_JWT_SECRET),
            require_auth=_env_flag("MENTOR_REQUIRE_AUTH"),
            account_backend=os.getenv("MENTOR_ACCOUNT_BACKEND", "sqlite"),
            account_db=os.getenv("MENTOR_ACCOUNT_DB", "./mentor_accounts.db"),
            llm_provider=provider,
            llm_api_key=api_key,
            llm_model=model,
        )

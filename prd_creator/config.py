"""PRD Creator configuration — loaded from environment / .env file."""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="PRD_CREATOR_", extra="ignore", populate_by_name=True
    )

    env: str = "development"
    sql_echo: bool = False
    database_url: str = "sqlite+aiosqlite:///./data/prd-creator.db"
    db_path: Path | None = Field(default=None, validation_alias=AliasChoices("DB_PATH", "PRD_CREATOR_DB_PATH"))

    # Paths (relative to the working directory)
    data_dir: Path = Path("data")
    logs_dir: Path = Path("logs")
    seed_templates_dir: Path = PACKAGE_DIR / "seed_templates"

    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    # AI providers: plain env names, shared with other tooling
    openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
    openai_base_url: str | None = Field(default=None, validation_alias="OPENAI_API_BASE_URL")
    openai_model: str = Field(default="gpt-4", validation_alias="OPENAI_MODEL")

    anthropic_api_key: str | None = Field(default=None, validation_alias="ANTHROPIC_API_KEY")
    anthropic_base_url: str | None = Field(default=None, validation_alias="ANTHROPIC_API_BASE_URL")
    anthropic_model: str = Field(default="claude-3-opus-20240229", validation_alias="ANTHROPIC_MODEL")

    gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash", validation_alias="GEMINI_MODEL")

    local_model_url: str | None = Field(default=None, validation_alias="LOCAL_MODEL_API_URL")
    local_model_name: str = Field(default="llama3", validation_alias="LOCAL_MODEL_NAME")

    default_ai_provider: str | None = Field(default=None, validation_alias="DEFAULT_AI_PROVIDER")

    @property
    def resolved_database_url(self) -> str:
        if self.db_path is not None:
            return f"sqlite+aiosqlite:///{self.db_path.resolve()}"
        return self.database_url

    @property
    def provider_config_path(self) -> Path:
        return self.data_dir / "provider-config.json"

    @property
    def echo_sql(self) -> bool:
        return self.env == "development" and self.sql_echo


settings = Settings()

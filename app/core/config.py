# app/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "crew-scheduler"

    # ---------------------------------------------------------------------
    # API contract / OpenAPI
    # ---------------------------------------------------------------------

    api_version: str = "1.0.0"
    api_description: str = (
        "Crew scheduler API.\n\n"
        "Day x work-line assignment grid: single-cell edits, bulk range "
        "assignment with holiday weekdays, per-cell day locks.\n\n"
        "All endpoints except /health require the X-Role header. "
        "Mutations require X-Role: admin."
    )

    env: str = "local"
    debug: bool = True

    log_level: str = "INFO"

    db_host: str = "127.0.0.1"
    db_port: int = 5432
    db_name: str = "scheduler"
    db_user: str = "scheduler"
    db_password: str = "scheduler"

    # Full URL override (e.g. sqlite:///./scheduler.db). Wins over db_* parts.
    db_url: str | None = None

    # Days shown by the grid when the caller gives only a start date.
    grid_days_visible: int = 14

    @property
    def database_url(self) -> str:
        if self.db_url:
            return self.db_url
        return (
            f"postgresql+psycopg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/fintrack.db"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = ["http://localhost:5173"]
    log_level: str = "INFO"

    # Scheduler
    scheduler_enabled: bool = True
    recurring_interval_hours: int = 24
    recurring_run_on_startup: bool = True

    # Categories
    seed_default_categories: bool = True

    # Budgets & goals
    budget_alert_threshold: float = 80.0
    goal_urgent_days: int = 30

    @property
    def is_sqlite(self) -> bool:
        return "sqlite" in self.database_url

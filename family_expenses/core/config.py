from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "dev"
    auth_mode: str = "dev"  # dev | forwardauth
    root_path: str = ""
    log_level: str = "INFO"

    # Full SQLAlchemy URL; wins over the postgres_* fields.
    db_url: str | None = None
    # PostgreSQL is used when postgres_host is set, else a local SQLite file.
    postgres_db: str = "family_expenses"
    postgres_user: str = "family_expenses"
    postgres_password: str = "family_expenses"
    postgres_host: str | None = None
    postgres_port: int = 5432
    sqlite_url: str = "sqlite:///./family_expenses.db"

    # Budget settings given to a freshly bootstrapped family.
    default_monthly_limit: float = 2000.0
    default_warning_percentage: int = 20
    default_currency: str = "EUR"

    # Shown wherever a profile has no name or email on record.
    unknown_display_name: str = "Unknown"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def database_url(self) -> str:
        if self.db_url:
            return self.db_url
        if self.postgres_host:
            return (
                f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
                f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
            )
        return self.sqlite_url


settings = Settings()

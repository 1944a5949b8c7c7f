from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    database_url: str = "sqlite+pysqlite:///gitfetch-cache.db"
    github_api_base_url: str = "https://api.github.com"
    github_graphql_url: str = "https://api.github.com/graphql"
    github_token: str | None = None
    cache_ttl_minutes: int = 15
    cache_version: str = "0.1.0"
    terminal_columns: int = 80
    terminal_rows: int = 24
    custom_box: str = "■"
    level_0_color: str = "#ebedf0"
    level_1_color: str = "#9be9a8"
    level_2_color: str = "#40c463"
    level_3_color: str = "#30a14e"
    level_4_color: str = "#216e39"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1
    rate_limit_per_minute: int = 30
    rate_limit_window_seconds: int = 60

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def palette(self) -> tuple[str, str, str, str, str]:
        return (
            self.level_0_color,
            self.level_1_color,
            self.level_2_color,
            self.level_3_color,
            self.level_4_color,
        )

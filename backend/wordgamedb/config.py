from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Word Game DB"
    environment: str = "dev"

    # Any SQLAlchemy URL; SQLite file by default
    database_url: str = "sqlite:///./wordgamedb.db"

    # Pool limits for server databases (ignored for SQLite)
    db_pool_size: int = 10
    db_max_overflow: int = 0
    db_pool_timeout_sec: int = 10

    # POST/PUT/DELETE on /words are off unless explicitly enabled
    enable_destructive_endpoints: bool = False

    search_min_length: int = 2
    seed_sample_words: bool = True
    log_level: str = "INFO"

    # Used by the demo client
    api_base_url: str = "http://localhost:8000"
    request_timeout_sec: float = 30.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()

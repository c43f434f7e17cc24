from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # MongoDB URL including the database name, e.g. mongodb://localhost/recordstore
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000
    debug: bool = False
    cors_origins: list[str] = []
    database_timeout_ms: int = 5000  # Server selection timeout; startup fails if the database is not reachable

    model_config = {
        "env_file": [".env"],
        "env_prefix": "RECORDSTORE_",
        "extra": "ignore",
    }

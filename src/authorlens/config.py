"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All configuration is loaded from environment variables prefixed with AL_."""

    # Commit database
    database_url: str = ""
    db_timeout: float | None = None

    # Signature sources
    signature_cache: str = "signatures.csv"
    hash_file: str | None = None

    # Filtering and statistics
    blacklist_dir: str | None = None
    recent_months: int = 12

    # Output
    people_output: str = "people.parquet"
    external_id_provider: str = ""

    model_config = {"env_file": ".env", "env_prefix": "AL_"}


def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    log_file: str | None = None

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "pinsweep"
    db_username: str = "pinsweep"
    db_password: str = "secret"
    db_pool_max_size: int = 4

    passcode_length: int = 6
    batch_count: int = 100
    stale_batch_minutes: int = 10
    progress_interval: int = 1000

    pdf_engine: str = "pymupdf"
    found_log_path: str = "Found.txt"

    @property
    def passcode_space(self) -> int:
        """Number of distinct candidates, e.g. 1_000_000 for six digits."""
        return 10**self.passcode_length

    @model_validator(mode="after")
    def _check_batch_count(self) -> "Settings":
        if self.passcode_length < 1:
            raise ValueError("passcode_length must be at least 1")
        if not 1 <= self.batch_count <= self.passcode_space:
            raise ValueError(
                f"batch_count must be between 1 and {self.passcode_space}"
            )
        return self

"""Application configuration module."""

from pathlib import Path
from pydantic_settings import BaseSettings

# 以此檔案位置計算路徑，避免從不同目錄啟動時路徑錯誤
_THIS_DIR = Path(__file__).parent  # blindquote/
_PROJECT_ROOT = _THIS_DIR.parent
_ENV_FILE = _PROJECT_ROOT / ".env"
_DEFAULT_RATE_SOURCE = _THIS_DIR / "data" / "price-matrix.yaml"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    # Pricing
    rate_source_path: str = str(_DEFAULT_RATE_SOURCE)
    product_type: str = "roller_blind"

    # Sessions
    session_ttl: int = 8 * 3600
    max_sessions: int = 256

    # Backend Configuration
    backend_host: str = "localhost"
    backend_port: int = 8000
    backend_debug: bool = False

    # Logging
    log_level: str = "INFO"

    @property
    def rate_source_file(self) -> Path:
        """Rate source path as Path object (relative paths resolve against project root)."""
        path = Path(self.rate_source_path)
        if not path.is_absolute():
            path = _PROJECT_ROOT / path
        return path

    model_config = {
        "env_file": str(_ENV_FILE),
        "env_file_encoding": "utf-8",
        "env_prefix": "BLINDQUOTE_",
        "case_sensitive": False,
    }


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()

# keygate/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _env_list(name: str, default: str) -> list[str]:
    """Split a comma separated environment variable into a clean list."""
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "keygate license gateway"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # CORS origins for desktop loaders / web panels
    CORS_ORIGINS: list[str] = _env_list("CORS_ORIGINS", "*")

    # Record store (Tortoise connection URL)
    database_url: str = os.getenv("DATABASE_URL", "sqlite://keygate.db")

    # Tree layout of the record store
    keys_path: str = os.getenv("KEYS_PATH", "keys")
    applications_path: str = os.getenv("APPLICATIONS_PATH", "applications")
    default_app_name: str = os.getenv("DEFAULT_APP_NAME", "default")

    # Create applications/<default_app_name> on startup when it is missing
    bootstrap_default_app: bool = os.getenv("BOOTSTRAP_DEFAULT_APP", "false").lower() in ("true", "1", "yes")

settings = Settings()  # Instantiate configuration

import os
from dataclasses import dataclass
from dotenv import load_dotenv

from src.real_estate_catalog.core.exceptions import ConfigurationError

# Loads the variables from the .env file (if present) into the environment
load_dotenv()

# Environments accepted by the application
ENVIRONMENTS = ("development", "production", "test")

DEFAULT_DATABASE_URL = "sqlite:///./real_estate.db"
DEFAULT_PORT = 7000


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    port: int = DEFAULT_PORT
    app_env: str = "development"
    api_base_url: str = f"http://localhost:{DEFAULT_PORT}/api"
    log_level: str = "INFO"

    @property
    def serve_client(self) -> bool:
        """
        In production the API also serves the web view (unified deployment).
        """
        return self.app_env == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Builds the settings from the environment variables.
        """
        raw_port = os.getenv("PORT", str(DEFAULT_PORT))
        try:
            port = int(raw_port)
        except ValueError:
            raise ConfigurationError(f"PORT must be an integer, got '{raw_port}'.")

        app_env = os.getenv("APP_ENV", "development").lower()
        if app_env not in ENVIRONMENTS:
            raise ConfigurationError(f"APP_ENV must be one of {ENVIRONMENTS}, got '{app_env}'.")

        return cls(
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            port=port,
            app_env=app_env,
            api_base_url=os.getenv("API_BASE_URL", f"http://localhost:{port}/api"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


settings = Settings.from_env()

"""
# Configuration Management Module

Configuration for the swift-backend service, built on **Pydantic Settings**.

## Loading Hierarchy

Higher layers override lower layers:

1. **Environment variables** (e.g. `export MONGODB_URL="mongodb://..."`)
2. **`SWIFT_BACKEND_CONFIG_PATH`**: custom config file path taken from the environment
3. **`.env` file** in the project root
4. **Default values** declared on `Settings`

If no configuration file is found the service runs in environment-only mode.

## Settings

```python
HOST: str = "0.0.0.0"                       # Bind address
PORT: int = 3000                            # HTTP listen port
MONGODB_URL: str                            # Connection string (REQUIRED, also read from MONGO_URI)
MONGODB_DATABASE: str = "swift-backend-assign"
MONGODB_CONNECTION_TIMEOUT: int = 10000     # ms
MONGODB_SERVER_SELECTION_TIMEOUT: int = 5000  # ms
SOURCE_API_BASE_URL: str = "https://jsonplaceholder.typicode.com"
SOURCE_API_TIMEOUT: Optional[float] = None  # seconds, None waits indefinitely
LOG_LEVEL: str = "INFO"
```

## Usage

Settings are read **once** at startup and handed to whatever needs them:

```python
from swift_backend.config import load_settings
from swift_backend.main import create_app

settings = load_settings()  # exits the process if MONGODB_URL is missing
app = create_app(settings)
```

The module logs only through the stdlib `logging` module so it can be imported before
the application logging is configured.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Constants ---
DEFAULT_ENV_FILENAME: str = ".env"
CONFIG_ENV_VAR: str = "SWIFT_BACKEND_CONFIG_PATH"
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]

logger = logging.getLogger(__name__)


# --- Config file discovery (no logging) ---
def get_config_path() -> Optional[str]:
    """
    Determines the configuration file path.

    Checks, in order:
    1.  **Environment Variable**: `SWIFT_BACKEND_CONFIG_PATH` (if set and the file exists).
    2.  **Dotenv Config**: `.env` file in the project root directory.
    3.  **Fallback**: `None`, which means environment-variable-only mode.

    Returns:
        Optional[str]: Path to the configuration file, or `None` if not found.
    """
    env_path: Optional[str] = os.environ.get(CONFIG_ENV_VAR)
    if env_path and os.path.exists(env_path):
        return env_path
    env_path_file: Path = PROJECT_ROOT / DEFAULT_ENV_FILENAME
    if env_path_file.exists():
        return str(env_path_file)
    return None


CONFIG_PATH: Optional[str] = get_config_path()
if CONFIG_PATH:
    load_dotenv(dotenv_path=CONFIG_PATH, override=False)


class Settings(BaseSettings):
    """
    Application configuration settings model.

    **Configuration Groups:**
    *   **Server**: Host, port, debug mode.
    *   **Database**: MongoDB connection string, database name, driver timeouts.
    *   **Source API**: Base URL and optional timeout of the seed data API.
    *   **Logging**: Console log level.

    `MONGODB_URL` has no default; constructing `Settings` without it raises a
    `ValidationError`. Use `load_settings()` to turn that into a startup failure.
    """

    model_config = SettingsConfigDict(
        env_file=CONFIG_PATH if CONFIG_PATH else None,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    DEBUG: bool = False

    # MongoDB configuration
    MONGODB_URL: str = Field(..., validation_alias=AliasChoices("MONGODB_URL", "MONGO_URI"))
    MONGODB_DATABASE: str = "swift-backend-assign"
    MONGODB_CONNECTION_TIMEOUT: int = 10000
    MONGODB_SERVER_SELECTION_TIMEOUT: int = 5000

    # Seed data source
    SOURCE_API_BASE_URL: str = "https://jsonplaceholder.typicode.com"
    SOURCE_API_TIMEOUT: Optional[float] = None

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("MONGODB_URL", mode="before")
    @classmethod
    def no_empty_urls(cls, v: Any, info: Any) -> Any:
        """
        Validates that the MongoDB URL is not empty.

        Raises:
            ValueError: If the URL is empty or whitespace.
        """
        if not v or not str(v).strip():
            raise ValueError(f"{info.field_name} must be set via environment or .env and not empty!")
        return str(v).strip()

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("PORT must be between 1 and 65535")
        return v


def load_settings() -> Settings:
    """
    Build the application settings, failing fast when they are unusable.

    Returns:
        Settings: The validated settings instance.

    Raises:
        SystemExit: With status 1 if validation fails (for example a missing
            `MONGODB_URL`); the service cannot run without storage.
    """
    try:
        return Settings()
    except ValidationError as exc:
        logger.critical("Invalid configuration, MongoDB URI is missing or malformed: %s", exc)
        raise SystemExit(1) from exc

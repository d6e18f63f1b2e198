import sys

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    EMPLOYEE_API_URL: str = ""
    EMPLOYEE_API_TIMEOUT_SECONDS: float = 30.0

    RETRY_MAX_ATTEMPTS: int = 10
    RETRY_INITIAL_DELAY_SECONDS: float = 30.0
    RETRY_MAX_DELAY_SECONDS: float = 90.0
    RETRY_BACKOFF_MULTIPLIER: float = 2.0
    RETRY_JITTER_RATIO: float = 0.5

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


settings = Settings()

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "X to WhatsApp Bridge"
    VERSION: str = "1.0.0"
    APP_ENV: str = "development"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"

    # WhatsApp contact number, E.164 digits without "+". Missing or malformed
    # values degrade /healthz instead of stopping the app.
    WHATSAPP_NUMBER: str = ""

    # Storage: DATABASE_URL selects Postgres, APP_ENV=test selects the
    # in-memory store, anything else uses the SQLite file.
    DATABASE_URL: Optional[str] = None
    SQLITE_PATH: str = "./data/clicks.db"

    ADMIN_TOKEN: Optional[str] = None
    IP_HASH_SALT: str = "x-wa-bridge-default-salt"

    SLUG_CONFIG_PATH: Optional[str] = None
    SLUG_CONFIG_JSON: Optional[str] = None

    # Admin rate limiting; disabled when REDIS_HOST is unset
    REDIS_HOST: Optional[str] = None
    REDIS_PORT: int = 6379
    RATE_LIMIT_LIMIT: int = 100
    RATE_LIMIT_WINDOW: int = 60

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()

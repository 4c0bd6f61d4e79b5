from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Backend API (default matches the local dev server)
    API_BASE_URL: str = "http://localhost:5000/api"
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    # Session storage: "memory" for tests and local runs, "redis" for a durable store
    STORAGE_BACKEND: str = "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    STORAGE_KEY_PREFIX: str = "skwin:"

    # App
    APP_NAME: str = "SK Win"
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False


settings = Settings()

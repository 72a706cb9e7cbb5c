# flora/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    APP_TITLE: str = "Studio Flora Order API"

    DATABASE_URL: str = "sqlite+aiosqlite:///./orders.db"  # хранилище заказов
    DATABASE_ECHO: bool = False                             # вывод SQL для отладки

    CORS_ORIGINS: list[str] = ["*"]

    LOG_DIR: str = "log"
    LOG_PRINT: str = "1"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()

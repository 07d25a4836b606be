"""Application configuration"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Optimized Demo API"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    # database (デフォルトはインメモリSQLite)
    DATABASE_URL: str = "sqlite://"
    SQL_ECHO: bool = False

    # 起動時に空のDBへ初期データを投入する
    SEED_ON_STARTUP: bool = True

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )


settings = Settings()

# marketplace/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/300x200?text=No+Image"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    HOST: str = "0.0.0.0"
    PORT: int = 5000
    CORS_ORIGIN: str = "http://localhost:3000"
    PUBLIC_DIR: str = "public"
    UPLOADS_SUBDIR: str = "uploads"
    PLACEHOLDER_IMAGE_URL: str = PLACEHOLDER_IMAGE_URL
    LOG_LEVEL: str = "INFO"

settings = Settings()

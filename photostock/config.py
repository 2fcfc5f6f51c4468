"""
Application settings.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./data/photostock.db"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # File storage
    DATA_DIR: str = "./data"
    UPLOAD_DIR: str = "./data/uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Every saved invoice must mention each of these spec labels
    REQUIRED_SPECS: List[str] = ["INV#", "CPU", "GPU", "CASE", "MOBO", "RAM", "PSU"]

    # Search terms that are dropped before matching
    SEARCH_STOPWORDS: List[str] = ["core"]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    APP_NAME: str = "PhoneValue Quote API"
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    CORS_ORIGINS: List[str] = ["*"]

    SCRAPE_TIMEOUT: float = 5.0  # seconds, per outbound lookup
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/108.0.0.0 Safari/537.36"
    )
    CEX_SEARCH_URL: str = "https://uk.webuy.com/search"
    MUSIC_MAGPIE_SEARCH_URL: str = "https://www.musicmagpie.co.uk/sell-mobile-phones/search/"

    BONUS_MIN: int = 5
    BONUS_MAX: int = 30

    class Config:
        env_file = ".env"

settings = Settings()

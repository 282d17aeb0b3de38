from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./hospoda.db"
    sql_echo: bool = False
    app_timezone: str = "Europe/Prague"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]


settings = Settings()

from typing import Optional
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "inventory"
    DEBUG: bool = True

    DB_URL: str = "sqlite+aiosqlite:///./inventory.db"

    session_cookie: str = "session"
    # None keeps the session until logout and the cookie for the browser session only
    session_max_age: Optional[int] = None

    bcrypt_rounds: int = 10

    host: str = "0.0.0.0"
    port: int = 5000

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent / ".env", extra="ignore"
    )

import os
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _split_csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


class Settings:
    """Runtime configuration read from the environment (and .env)."""

    def __init__(self):
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./menu_engine.db")
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.known_branches = _split_csv(os.getenv("KNOWN_BRANCHES"))
        self.resolver_cache_size = int(os.getenv("RESOLVER_CACHE_SIZE", 256))
        self.cors_origins = _split_csv(os.getenv("CORS_ORIGINS", "*"))


settings = Settings()

import os

from dotenv import load_dotenv
from pydantic import BaseModel


class Settings(BaseModel):
    title: str = "Preisliste"
    csv_url: str = ""
    icon_index_url: str = ""
    icon_base_url: str = ""
    fetch_timeout: float = 10.0
    log_level: str = "INFO"
    json_logs: bool = False


def load_settings() -> Settings:
    """Settings from the environment (a local .env is honoured)."""
    load_dotenv()
    return Settings(
        title=os.getenv("PRICEBOARD_TITLE", "Preisliste"),
        csv_url=os.getenv("PRICEBOARD_CSV_URL", ""),
        icon_index_url=os.getenv("PRICEBOARD_ICON_INDEX_URL", ""),
        icon_base_url=os.getenv("PRICEBOARD_ICON_BASE_URL", ""),
        fetch_timeout=float(os.getenv("PRICEBOARD_FETCH_TIMEOUT", "10")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        json_logs=os.getenv("JSON_LOGS", "false").lower() == "true",
    )

import os
from pydantic import BaseModel

class Settings(BaseModel):
    openai_api_key: str = os.getenv("OPENAI_API_KEY", "")
    vision_model: str = os.getenv("VISION_MODEL", "gpt-4o-mini")
    vision_timeout_sec: float = float(os.getenv("VISION_TIMEOUT_SEC", "60"))

    redis_url: str = os.getenv("REDIS_URL", "")
    history_path: str = os.getenv("HISTORY_PATH", "./storage/otc_signal_history.json")
    history_key: str = os.getenv("HISTORY_KEY", "otc_signal_history")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

settings = Settings()

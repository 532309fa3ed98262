"""
Application settings.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./data/purchase_orders.db"

    # Environment
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # File storage
    DATA_DIR: str = "./data"
    UPLOAD_DIR: str = "./data/uploads"
    PUBLIC_DIR: str = "./public"
    MEMO_LOG_PATH: str = "memos.txt"

    # Speech-to-text (ElevenLabs)
    ELEVEN_API_KEY: str = ""
    ELEVENLABS_MODEL_ID: str = "scribe_v1"
    SPANISH_LANGUAGE_CODE: str = "es"
    ENGLISH_LANGUAGE_CODE: str = "en"

    # LLM (OpenAI)
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-3.5-turbo"

    # Per-call timeout for both external services; unset means client default
    EXTERNAL_TIMEOUT_SECONDS: Optional[float] = None

    # Cost estimates (USD)
    ELEVENLABS_COST_PER_MINUTE: float = 0.003
    OPENAI_INPUT_COST_PER_1K: float = 0.0015
    OPENAI_OUTPUT_COST_PER_1K: float = 0.002

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

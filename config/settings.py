# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.enums import Environment
import logging


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()

_log = logging.getLogger("config.settings")


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(..., validation_alias="APP_ENV")
    REDIS_URL: str = Field(..., validation_alias="REDIS_URL")

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(..., validation_alias="ALLOWED_ORIGIN")
    RATE_LIMIT_TIMES: int = Field(..., validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(..., validation_alias="RATE_LIMIT_SECONDS")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")

    # Caller role, set by the auth gateway in front of this service
    ROLE_HEADER: str = Field(default="X-Caller-Role", validation_alias="ROLE_HEADER")

    # Embedding providers: "gemini" | "sentence_transformers" | "local"
    EMBEDDING_BACKEND: str = Field(default="gemini", validation_alias="EMBEDDING_BACKEND")
    EMBEDDING_DIM: int = 768
    EMBEDDING_MAX_CHARS: int = 10_000
    EMBEDDING_TIMEOUT_SECONDS: float = Field(
        default=15.0, validation_alias="EMBEDDING_TIMEOUT_SECONDS"
    )
    EMBED_CONCURRENCY: int = Field(default=4, validation_alias="EMBED_CONCURRENCY")
    FALLBACK_VOCAB_SIZE: int = 100

    GEMINI_API_KEY: str = Field(default="", validation_alias="GEMINI_API_KEY")
    GEMINI_API_URL: str = "https://generativelanguage.googleapis.com/v1beta/models"
    GEMINI_EMBEDDING_MODEL: str = Field(
        default="text-embedding-004", validation_alias="GEMINI_EMBEDDING_MODEL"
    )
    LOCAL_EMBEDDING_MODEL_NAME: str = "sentence-transformers/all-mpnet-base-v2"

    # Resume field extraction: "gemini" | "rules"
    RESUME_EXTRACTOR: str = Field(default="gemini", validation_alias="RESUME_EXTRACTOR")
    GEMINI_EXTRACTION_MODEL: str = Field(
        default="gemini-2.0-flash", validation_alias="GEMINI_EXTRACTION_MODEL"
    )
    EXTRACTION_MAX_CHARS: int = 15_000
    EXTRACTION_TIMEOUT_SECONDS: float = Field(
        default=30.0, validation_alias="EXTRACTION_TIMEOUT_SECONDS"
    )

    # Chunking
    CHUNK_WORDS: int = 500
    CHUNK_OVERLAP_WORDS: int = 50

    # Scoring
    SEMANTIC_WEIGHT: float = 0.5
    SKILLS_WEIGHT: float = 0.3
    EXPERIENCE_WEIGHT: float = 0.2
    SCORE_TIE_EPSILON: float = 1e-4

    # Evidence
    EVIDENCE_LIMIT: int = 3
    EVIDENCE_SNIPPET_CHARS: int = 200
    MATCH_EVIDENCE_THRESHOLD: float = 0.7

    # Request defaults
    DEFAULT_SEARCH_K: int = 5
    DEFAULT_MATCH_TOP_N: int = 10

    # Logging knobs
    LOGGER_NAME: str = "resume-radar"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)

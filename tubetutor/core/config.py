import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Always load .env from the repo root (stable, regardless of CWD)
BASE_DIR = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=BASE_DIR / ".env", override=False)


def _csv(value: str) -> tuple[str, ...]:
    return tuple(p.strip() for p in value.split(",") if p.strip())


@dataclass(frozen=True)
class Settings:
    env: str = os.getenv("ENV", "local")

    # LLM provider: "openai" | "ollama"
    llm_provider: str = os.getenv("LLM_PROVIDER", "openai").lower()
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    ollama_model: str = os.getenv("OLLAMA_MODEL", "qwen2.5:7b-instruct")
    llm_temperature: float = float(os.getenv("LLM_TEMPERATURE", "0.2"))

    # Retry knobs (per-attempt timeout, attempt budget, backoff base)
    llm_timeout_sec: float = float(os.getenv("LLM_TIMEOUT_SEC", "30"))
    llm_attempts: int = int(os.getenv("LLM_ATTEMPTS", "3"))
    llm_backoff_sec: float = float(os.getenv("LLM_BACKOFF_SEC", "1.5"))
    llm_backoff_mode: str = os.getenv("LLM_BACKOFF_MODE", "exponential")

    # Transcript limits
    transcript_max_chars: int = int(os.getenv("TRANSCRIPT_MAX_CHARS", "30000"))
    transcript_min_chars: int = int(os.getenv("TRANSCRIPT_MIN_CHARS", "100"))

    # Cache: unset -> in-process memory cache; redis://... -> redis
    transcript_cache_url: str | None = os.getenv("TRANSCRIPT_CACHE_URL")
    transcript_cache_ttl_sec: int = int(os.getenv("TRANSCRIPT_CACHE_TTL_SEC", "3600"))

    # Optional: proxy URL, e.g. http://127.0.0.1:7890
    youtube_proxy_url: str | None = os.getenv("YOUTUBE_PROXY_URL")
    youtube_languages: tuple[str, ...] = field(
        default_factory=lambda: _csv(os.getenv("YOUTUBE_LANGUAGES", "en"))
    )

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("LOG_JSON", "1") == "1"


settings = Settings()

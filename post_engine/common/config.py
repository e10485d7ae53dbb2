"""Project configuration and paths.

Loads settings from config/settings.yaml, then applies environment overrides
(DATABASE_URL, REQUEST_TIMEOUT, REVIEW_POLICY, SLUG_POLICY, ...).
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_TOPIC_POOL_PATH = CONFIG_DIR / "topic_pool.yaml"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class ReviewPolicy(str, Enum):
    """What the orchestrator does when the review stage rejects a draft."""
    STRICT = "strict"  # halt the run
    BEST_EFFORT = "best_effort"  # keep going, feedback becomes warnings


class SlugPolicy(str, Enum):
    """How a colliding post slug is resolved."""
    SUFFIX = "suffix"  # base, base-2, base-3, ...
    REJECT = "reject"


class HTTPSettings(BaseModel):
    """Settings for reachability probes."""
    request_timeout: float = 10.0
    max_retries: int = 3
    backoff_base: float = 1.5
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/121.0.0.0 Safari/537.36"
    )
    rotate_user_agent: bool = True


class DatabaseSettings(BaseModel):
    """Database connection settings."""
    db_path: str = str(DATA_DIR / "blog.db")


class LLMSettings(BaseModel):
    """LLM API settings (ideation only)."""
    provider: str = "openai"
    openai_model: str = "gpt-4o"
    anthropic_model: str = "claude-sonnet-4-5-20250929"
    max_tokens: int = 2048
    temperature: float = 0.7


class PipelineSettings(BaseModel):
    """Quality gates and publishing rules."""
    min_word_count: int = 2000
    min_affiliate_links: int = 3
    min_images: int = 3
    image_candidates: int = 4
    title_length_range: tuple[int, int] = (50, 70)
    meta_description_range: tuple[int, int] = (140, 165)
    meta_title_max: int = 60
    meta_description_max: int = 160
    words_per_minute: int = 200
    review_policy: ReviewPolicy = ReviewPolicy.STRICT
    slug_policy: SlugPolicy = SlugPolicy.SUFFIX
    fallback_image_category: str = "productivity"
    topic_pool_path: str = str(DEFAULT_TOPIC_POOL_PATH)


class Settings(BaseModel):
    """Top-level application settings."""
    http: HTTPSettings = Field(default_factory=HTTPSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    admin_email: str = "admin@afflux.dev"

    @classmethod
    def load(cls, path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        Environment variables win over the YAML file.
        """
        settings_path = path or CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        settings = cls(**data)
        # Relative paths in the YAML are relative to the project root
        settings.database.db_path = database_path_from_url(settings.database.db_path)
        settings.apply_env()
        return settings

    def apply_env(self) -> None:
        """Apply environment overrides in place."""
        if url := os.getenv("DATABASE_URL"):
            self.database.db_path = database_path_from_url(url)
        if timeout := os.getenv("REQUEST_TIMEOUT"):
            self.http.request_timeout = float(timeout)
        if policy := os.getenv("REVIEW_POLICY"):
            self.pipeline.review_policy = ReviewPolicy(policy.lower())
        if policy := os.getenv("SLUG_POLICY"):
            self.pipeline.slug_policy = SlugPolicy(policy.lower())
        if pool := os.getenv("TOPIC_POOL_PATH"):
            self.pipeline.topic_pool_path = pool
        if provider := os.getenv("LLM_PROVIDER"):
            self.llm.provider = provider.lower()


def database_path_from_url(url: str) -> str:
    """Turn a DATABASE_URL into a SQLite file path.

    Accepts ``sqlite:///relative.db``, ``sqlite:////abs/path.db``,
    ``file:./dev.db`` (Prisma style) or a bare path. Relative paths resolve
    against the project root.
    """
    path = url.strip()
    for prefix in ("sqlite:///", "file:"):
        if path.startswith(prefix):
            path = path[len(prefix):]
            break
    if path == ":memory:":
        return path
    p = Path(path)
    if not p.is_absolute():
        p = PROJECT_ROOT / p
    return str(p)


def get_openai_api_key() -> str:
    """Get OpenAI API key from environment."""
    key = os.getenv("OPENAI_API_KEY", "")
    if not key:
        raise ValueError("OPENAI_API_KEY not set in environment")
    return key


def get_anthropic_api_key() -> str:
    """Get Anthropic API key from environment."""
    key = os.getenv("ANTHROPIC_API_KEY", "")
    if not key:
        raise ValueError("ANTHROPIC_API_KEY not set in environment")
    return key


# Singleton settings instance
settings = Settings.load()

"""Centralised settings for the llms.txt link validator.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _default_file_concurrency() -> int:
    return 2 * (os.cpu_count() or 1)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------
    doc_suffix: str = field(
        default_factory=lambda: os.environ.get("LLMS_LINKS_SUFFIX", "llms.txt")
    )

    # ------------------------------------------------------------------
    # HTTP client
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("LLMS_LINKS_TIMEOUT", "15.0"))
    )
    max_redirects: int = field(
        default_factory=lambda: int(os.environ.get("LLMS_LINKS_MAX_REDIRECTS", "10"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "LLMS_LINKS_USER_AGENT",
            "Mozilla/5.0 (compatible; llms-links/1.0; link validator)",
        )
    )

    # ------------------------------------------------------------------
    # Concurrency
    # ------------------------------------------------------------------
    file_concurrency: int = field(
        default_factory=lambda: int(
            os.environ.get("LLMS_LINKS_FILE_CONCURRENCY", _default_file_concurrency())
        )
    )
    url_concurrency: int = field(
        default_factory=lambda: int(os.environ.get("LLMS_LINKS_URL_CONCURRENCY", "5"))
    )

    def __post_init__(self) -> None:
        if self.file_concurrency < 1:
            raise ValueError(f"file_concurrency must be >= 1, got {self.file_concurrency}")
        if self.url_concurrency < 1:
            raise ValueError(f"url_concurrency must be >= 1, got {self.url_concurrency}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be > 0, got {self.request_timeout}")
        if self.max_redirects < 0:
            raise ValueError(f"max_redirects must be >= 0, got {self.max_redirects}")

    @property
    def max_connections(self) -> int:
        """Upper bound on simultaneous network connections for one run."""
        return self.file_concurrency * self.url_concurrency


# Module-level singleton; import this everywhere:
#   from llms_links.config import settings
settings = Settings()

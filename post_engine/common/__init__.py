# Common utilities and shared modules
"""
Shared components used by every pipeline stage:
- Project configuration and environment overrides
- Database utilities for the blog schema
- Row models (Pydantic schemas)
- HTTP reachability probes
- Logging configuration
"""

from .config import settings, PROJECT_ROOT, DATA_DIR, ReviewPolicy, SlugPolicy
from .database import get_connection, init_db, transaction
from .http_client import HTTPClient, ProbeResult
from .logging import setup_logging

__all__ = [
    "settings",
    "PROJECT_ROOT",
    "DATA_DIR",
    "ReviewPolicy",
    "SlugPolicy",
    "get_connection",
    "init_db",
    "transaction",
    "HTTPClient",
    "ProbeResult",
    "setup_logging",
]

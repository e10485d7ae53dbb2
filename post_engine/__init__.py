# Affiliate Post Engine
"""
Content pipeline that turns topic briefs into draft blog posts:
- common: settings, SQLite storage, logging, HTTP probing
- pipeline: topic selection, draft generation, review, asset validation,
  publishing and the orchestrator that runs them in order
"""

__version__ = "0.3.0"

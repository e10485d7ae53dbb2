"""Data models for the asset validator module."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ValidationResult:
    """Fatal errors block publishing; warnings are reported only.

    The validator only reports. It never rewrites the draft it checks.
    """
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

"""Asset Validator module: image/link reachability and document structure."""

from .models import ValidationResult
from .validator import AssetValidator

__all__ = ["AssetValidator", "ValidationResult"]

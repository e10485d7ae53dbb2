"""Exceptions raised inside pipeline stages.

Stage boundaries convert these into result values; only the orchestrator
decides whether a failure is fatal.
"""


class PostEngineError(Exception):
    """Base exception for all post engine errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class InvalidBriefError(PostEngineError):
    """Raised when a topic brief lacks the fields needed to write a draft."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Invalid topic brief: missing {', '.join(missing)}")


class InsufficientImagesError(PostEngineError):
    """Raised when fewer than the required number of images are reachable."""

    def __init__(self, found: int, required: int):
        self.found = found
        self.required = required
        super().__init__(
            f"Not enough valid images found: {found} (minimum {required})"
        )


class DuplicateSlugError(PostEngineError):
    """Raised when a slug is taken and the slug policy forbids renaming."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Slug already exists: {slug}")


class PublisherAccountError(PostEngineError):
    """Raised when no admin account exists to own the post."""

    def __init__(self, message: str = "No publisher account available"):
        super().__init__(message)

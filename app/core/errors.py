"""
Domain errors for the portfolio engine.

Unknown block ids are NOT errors anywhere in the engine: mutations and
removals that target a missing block are silent no-ops.
"""


class PortfolioError(Exception):
    """Base class for all engine errors."""


class UnknownKindError(PortfolioError, ValueError):
    """A block kind outside the fixed registry was requested."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Unknown block kind: {kind!r}")


class ImageError(PortfolioError):
    """Base class for rejected uploads. Message is user-facing."""


class TooLargeError(ImageError):
    def __init__(self, size: int, limit_mb: int):
        self.size = size
        self.limit_mb = limit_mb
        super().__init__(f"File size should be less than {limit_mb}MB")


class UnsupportedTypeError(ImageError):
    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__("Please upload a valid image file (JPEG, PNG, GIF, WebP, SVG)")


class GenerationFailure(PortfolioError):
    """Transient failure of a generation or assistant call."""

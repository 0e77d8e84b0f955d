"""
Custom exceptions for VueLocalizer.
"""

class VueLocalizerError(Exception):
    """Base exception for VueLocalizer."""
    pass

class SegmentParseError(VueLocalizerError):
    """Raised when a component file cannot be split into its blocks."""
    pass

class MarkupParseError(VueLocalizerError):
    """Raised when template markup cannot be turned into a node tree."""
    pass

class KeyCollisionError(VueLocalizerError):
    """Raised when two different texts map to the same translation key."""

    def __init__(self, key: str, existing: str, incoming: str):
        self.key = key
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Key {key} already maps to {existing!r}, refusing to remap it to {incoming!r}"
        )

class ConfigError(VueLocalizerError):
    """Raised when configuration-related errors occur."""
    pass

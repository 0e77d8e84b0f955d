"""
Translation Accumulator
=======================

Collects the texts discovered while rewriting templates into two parallel
tables: one for the source locale and one for the target locale. The target
table is seeded with the source text and is meant to be edited by hand later.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from vuelocalizer.core.exceptions import KeyCollisionError
from vuelocalizer.core.keys import DEFAULT_KEY_LENGTH, DEFAULT_KEY_PREFIX, key_for


class TranslationAccumulator:
    """Insert-only key -> text store shared by every localization path.

    A key is written once. Recording the same text again is a no-op, while
    recording a different text under an existing key raises
    :class:`KeyCollisionError`.
    """

    def __init__(self,
                 key_prefix: str = DEFAULT_KEY_PREFIX,
                 key_length: int = DEFAULT_KEY_LENGTH,
                 source_locale: str = "zh",
                 target_locale: str = "en"):
        self.logger = logging.getLogger(__name__)
        self.key_prefix = key_prefix
        self.key_length = key_length
        self.source_locale = source_locale
        self.target_locale = target_locale
        self._source: Dict[str, str] = {}
        self._target: Dict[str, str] = {}

    @classmethod
    def like(cls, other: "TranslationAccumulator") -> "TranslationAccumulator":
        """Create an empty accumulator with the same key and locale settings."""
        return cls(other.key_prefix, other.key_length, other.source_locale, other.target_locale)

    def key_for(self, text: str) -> str:
        return key_for(text, self.key_prefix, self.key_length)

    def record(self, text: str) -> str:
        """Register ``text`` (trimmed) and return its key."""
        trimmed = text.strip()
        key = self.key_for(trimmed)
        self._insert(key, trimmed)
        return key

    def check_merge(self, other: "TranslationAccumulator") -> None:
        """Raise ``KeyCollisionError`` if ``other`` cannot be merged in."""
        for key, text in other.items():
            existing = self._source.get(key)
            if existing is not None and existing != text:
                raise KeyCollisionError(key, existing, text)

    def merge(self, other: "TranslationAccumulator") -> int:
        """Fold ``other`` into this accumulator; returns the number of new keys.

        Collisions are checked before anything is written, so a failed merge
        leaves this accumulator untouched.
        """
        self.check_merge(other)

        added = 0
        for key, text in other.items():
            if key not in self._source:
                self._source[key] = text
                self._target[key] = other._target.get(key, text)
                added += 1
        return added

    def _insert(self, key: str, text: str) -> None:
        existing = self._source.get(key)
        if existing is None:
            self._source[key] = text
            self._target[key] = text
            self.logger.debug(f"New key {key} -> {text!r}")
        elif existing != text:
            raise KeyCollisionError(key, existing, text)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._source.get(key, default)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._source.items()))

    @property
    def source(self) -> Mapping[str, str]:
        return MappingProxyType(self._source)

    @property
    def target(self) -> Mapping[str, str]:
        return MappingProxyType(self._target)

    def as_tables(self) -> Dict[str, Dict[str, str]]:
        """Both tables keyed by locale name, as plain dicts."""
        return {
            self.source_locale: dict(self._source),
            self.target_locale: dict(self._target),
        }

    def __contains__(self, key: object) -> bool:
        return key in self._source

    def __len__(self) -> int:
        return len(self._source)

    def __repr__(self) -> str:
        return (f"TranslationAccumulator({len(self)} keys, "
                f"{self.source_locale}/{self.target_locale})")

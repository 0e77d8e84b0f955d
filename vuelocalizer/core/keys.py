"""
Translation key generation
==========================

Keys are derived from the trimmed text only, so the same wording yields the
same key in every file and on every run.
"""

import hashlib

DEFAULT_KEY_PREFIX = "i18n_"
DEFAULT_KEY_LENGTH = 8


def key_for(text: str, prefix: str = DEFAULT_KEY_PREFIX, length: int = DEFAULT_KEY_LENGTH) -> str:
    """Return the translation key for ``text``.

    The key is ``prefix`` followed by the first ``length`` hex characters of
    the MD5 digest of the trimmed text encoded as UTF-8.
    """
    if length < 1 or length > 32:
        raise ValueError(f"Key length must be between 1 and 32, got {length}")
    digest = hashlib.md5(text.strip().encode('utf-8')).hexdigest()
    return f"{prefix}{digest[:length]}"

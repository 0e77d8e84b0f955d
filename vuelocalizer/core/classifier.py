"""
Text classification
===================

Decides whether a piece of template text carries Chinese characters and
therefore needs a translation key.
"""

import re

# CJK Unified Ideographs, the range the extraction has always targeted
CHINESE_CHAR_RE = re.compile(r'[\u4e00-\u9fa5]')


def contains_chinese(text: str) -> bool:
    """True if at least one CJK ideograph is present in ``text``."""
    return bool(text) and CHINESE_CHAR_RE.search(text) is not None


def is_localizable(text: str) -> bool:
    """Whether ``text`` should be replaced by a translation call.

    Empty and whitespace-only strings never qualify.
    """
    if not text or not text.strip():
        return False
    return contains_chinese(text)

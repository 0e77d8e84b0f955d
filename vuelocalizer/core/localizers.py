"""
Attribute and interpolation localizers.

Both work on already-parsed pieces of a template: the ordered attribute
mapping of an element, or the inner text of a ``{{ ... }}`` expression.
Every Chinese string they find is registered with the accumulator and
replaced by a ``$t('<key>')`` call.
"""

from __future__ import annotations

import html
import logging
from typing import Dict, Iterable, Iterator, NamedTuple, Optional, Tuple

from vuelocalizer.core.accumulator import TranslationAccumulator
from vuelocalizer.core.classifier import is_localizable

QUOTE_CHARS = ("'", '"', '`')
BINDING_PREFIXES = ('v-bind:', ':')
DEFAULT_LOCALIZABLE_ATTRIBUTES = ('title', 'placeholder')


def translation_call(key: str) -> str:
    return f"$t('{key}')"


class StringLiteral(NamedTuple):
    start: int
    end: int  # exclusive, past the closing quote
    quote: str
    body: str


def iter_string_literals(expression: str) -> Iterator[StringLiteral]:
    """Yield the quoted string literals of a JavaScript expression in order.

    Backslash escapes are honoured. Scanning stops at an unterminated literal.
    """
    i = 0
    length = len(expression)
    while i < length:
        char = expression[i]
        if char not in QUOTE_CHARS:
            i += 1
            continue
        j = i + 1
        while j < length:
            if expression[j] == '\\':
                j += 2
                continue
            if expression[j] == char:
                break
            j += 1
        if j >= length:
            return
        yield StringLiteral(i, j + 1, char, expression[i + 1:j])
        i = j + 1


def split_binding(name: str) -> Tuple[str, str]:
    """Split an attribute name into (binding marker, bare name)."""
    for prefix in BINDING_PREFIXES:
        if name.startswith(prefix):
            return prefix, name[len(prefix):]
    return '', name


class InterpolationLocalizer:
    """Replaces Chinese string literals inside template expressions."""

    def __init__(self, accumulator: TranslationAccumulator):
        self.logger = logging.getLogger(__name__)
        self.accumulator = accumulator

    def is_replaceable(self, literal: StringLiteral) -> bool:
        if literal.quote == '`' and '${' in literal.body:
            # template literal with substitutions, no single key can stand in for it
            if is_localizable(literal.body):
                self.logger.warning(f"Leaving template literal with substitutions as is: {literal.body!r}")
            return False
        return is_localizable(literal.body)

    def localize(self, expression: str) -> str:
        """Return ``expression`` with every Chinese literal turned into ``$t()``.

        Operators, identifiers and all other literals are kept verbatim.
        """
        if not is_localizable(expression):
            return expression

        parts = []
        cursor = 0
        for literal in iter_string_literals(expression):
            if not self.is_replaceable(literal):
                continue
            key = self.accumulator.record(literal.body)
            parts.append(expression[cursor:literal.start])
            parts.append(translation_call(key))
            cursor = literal.end
        parts.append(expression[cursor:])
        return ''.join(parts)


class AttributeLocalizer:
    """Binds enumerated attributes (``title``, ``placeholder``...) to ``$t()``.

    ``title="提交"`` becomes ``:title="$t('i18n_xxxxxxxx')"``. Attributes that
    are already bound keep their marker; when their value is a real
    expression only its Chinese literals are replaced.
    """

    def __init__(self,
                 accumulator: TranslationAccumulator,
                 attribute_names: Iterable[str] = DEFAULT_LOCALIZABLE_ATTRIBUTES,
                 interpolation: Optional[InterpolationLocalizer] = None):
        self.logger = logging.getLogger(__name__)
        self.accumulator = accumulator
        self.attribute_names = frozenset(attribute_names)
        self.interpolation = interpolation or InterpolationLocalizer(accumulator)

    def localize(self, attributes: Dict[str, Optional[str]]) -> Dict[str, Optional[str]]:
        """Return a new attribute mapping, order preserved."""
        result: Dict[str, Optional[str]] = {}
        for name, value in attributes.items():
            marker, bare = split_binding(name)
            if bare not in self.attribute_names or not is_localizable(value):
                result[name] = value
                continue

            if marker:
                result[name] = self._localize_bound(value)
                continue

            bound_name = ':' + bare
            if bound_name in attributes:
                self.logger.warning(f"Both {name} and {bound_name} are set, leaving {name} untouched")
                result[name] = value
                continue
            result[bound_name] = translation_call(self.accumulator.record(html.unescape(value)))
        return result

    def _localize_bound(self, value: str) -> str:
        stripped = value.strip()
        if not any(quote in stripped for quote in QUOTE_CHARS):
            # bare text written as if it were bound, e.g. :placeholder="请输入"
            return translation_call(self.accumulator.record(stripped))
        return self.interpolation.localize(value)

"""
Template Walker
===============

Walks a parsed template tree depth-first, localizes every element and text
node on the way and serializes the result back to markup.
"""

from __future__ import annotations

import html
import logging
import re
from typing import Iterable, List, Optional

from vuelocalizer.core.accumulator import TranslationAccumulator
from vuelocalizer.core.classifier import contains_chinese, is_localizable
from vuelocalizer.core.localizers import (
    DEFAULT_LOCALIZABLE_ATTRIBUTES,
    AttributeLocalizer,
    InterpolationLocalizer,
    translation_call,
)
from vuelocalizer.core.markup import Comment, DocumentNode, Element, Text, parse_markup

INTERPOLATION_RE = re.compile(r'{{(.*?)}}', re.DOTALL)


def format_attribute(name: str, value: Optional[str]) -> str:
    if value is None:
        return f" {name}"
    if '"' in value and "'" not in value:
        return f" {name}='{value}'"
    return ' {}="{}"'.format(name, value.replace('"', '&quot;'))


class TemplateWalker:
    """Renders DocumentNode trees with Chinese text replaced by ``$t()`` calls."""

    def __init__(self,
                 accumulator: TranslationAccumulator,
                 attribute_names: Iterable[str] = DEFAULT_LOCALIZABLE_ATTRIBUTES,
                 preserve_comments: bool = False):
        self.logger = logging.getLogger(__name__)
        self.accumulator = accumulator
        self.interpolation = InterpolationLocalizer(accumulator)
        self.attributes = AttributeLocalizer(accumulator, attribute_names, self.interpolation)
        self.preserve_comments = preserve_comments

    def render(self, nodes: List[DocumentNode]) -> str:
        return ''.join(self._render_node(node) for node in nodes)

    def _render_node(self, node: DocumentNode) -> str:
        if isinstance(node, Element):
            return self.render_element(node)
        if isinstance(node, Text):
            return self.render_text(node.content)
        if isinstance(node, Comment):
            if self.preserve_comments:
                return f"<!--{node.content}-->"
            self.logger.debug("Dropping template comment")
            return ''
        return ''

    def render_element(self, element: Element) -> str:
        attributes = self.attributes.localize(element.attributes)
        opening = element.name + ''.join(format_attribute(k, v) for k, v in attributes.items())
        return f"<{opening}>{self.render(element.children)}</{element.name}>"

    def render_text(self, content: str) -> str:
        """Localize one text node.

        Text without Chinese characters comes back byte-identical.
        """
        if not contains_chinese(content):
            return content

        trimmed = content.strip()
        if INTERPOLATION_RE.search(trimmed):
            return INTERPOLATION_RE.sub(self._render_interpolation, trimmed)
        if is_localizable(trimmed):
            return '{{ ' + translation_call(self.accumulator.record(html.unescape(trimmed))) + ' }}'
        return content

    def _render_interpolation(self, match: re.Match) -> str:
        return '{{ ' + self.interpolation.localize(match.group(1).strip()) + ' }}'


def localize_template(markup: str,
                      accumulator: TranslationAccumulator,
                      attribute_names: Iterable[str] = DEFAULT_LOCALIZABLE_ATTRIBUTES,
                      preserve_comments: bool = False) -> str:
    """Parse template markup and return its localized serialization."""
    walker = TemplateWalker(accumulator, attribute_names, preserve_comments)
    return walker.render(parse_markup(markup))

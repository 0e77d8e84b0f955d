"""
Template markup parsing
=======================

Turns template markup into a small Element/Text/Comment tree.

BeautifulSoup (html.parser backend) does the tokenizing. html.parser folds
tag and attribute names to lower case, but component templates rely on case
(``<MyDialog :itemList="...">``), so the original spelling is read back from
the source position BeautifulSoup records for every start tag.

Character references (``&lt;``, ``&nbsp;``...) are not decoded: every ``&``
is swapped for a private-use placeholder before parsing and restored
afterwards, so text and attribute values hold their source spelling. An
attribute written without ``=`` (``v-else``) gets the value ``None``.
"""

from __future__ import annotations

import logging
import re
import warnings
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Comment as SoupComment
from bs4.element import NavigableString, PreformattedString, Tag

from vuelocalizer.core.exceptions import MarkupParseError

logger = logging.getLogger(__name__)


@dataclass
class Text:
    content: str


@dataclass
class Comment:
    content: str


@dataclass
class Element:
    name: str
    attributes: Dict[str, Optional[str]] = field(default_factory=dict)
    children: List["DocumentNode"] = field(default_factory=list)


DocumentNode = Union[Element, Text, Comment]

_TAG_NAME_RE = re.compile(r'<([^\s/>]+)')
_ATTR_RE = re.compile(
    r'''([^\s/>"'=][^\s/>=]*)(\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]*))?'''
)
_AMP_PLACEHOLDERS = ('\ue000', '\ue001', '\ue002', '\ue003')


def _line_offsets(markup: str) -> List[int]:
    offsets = [0]
    for index, char in enumerate(markup):
        if char == '\n':
            offsets.append(index + 1)
    return offsets


def _pick_placeholder(markup: str) -> str:
    for candidate in _AMP_PLACEHOLDERS:
        if candidate not in markup:
            return candidate
    raise MarkupParseError("Template markup uses every reserved private-use character")


def _source_spelling(markup: str, offset: int) -> Optional[tuple]:
    """Read the tag name and attribute names of the start tag at ``offset``.

    Attribute names map lower case -> (source spelling, has ``=``).
    """
    match = _TAG_NAME_RE.match(markup, offset)
    if not match:
        return None

    name = match.group(1)
    attr_names: Dict[str, tuple] = {}
    pos = match.end()
    length = len(markup)
    while pos < length:
        char = markup[pos]
        if char.isspace() or char == '/':
            pos += 1
            continue
        if char == '>':
            break
        attr = _ATTR_RE.match(markup, pos)
        if not attr or attr.end() == pos:
            break
        attr_names.setdefault(attr.group(1).lower(), (attr.group(1), attr.group(2) is not None))
        pos = attr.end()
    return name, attr_names


class _TreeBuilder:
    """Converts a BeautifulSoup tree into DocumentNode objects."""

    def __init__(self, markup: str, placeholder: str):
        self.markup = markup
        self.placeholder = placeholder
        self.line_offsets = _line_offsets(markup)

    def restore(self, text: str) -> str:
        return text.replace(self.placeholder, '&')

    def build(self, soup_nodes) -> List[DocumentNode]:
        nodes: List[DocumentNode] = []
        for soup_node in soup_nodes:
            node = self._convert(soup_node)
            if node is not None:
                nodes.append(node)
        return nodes

    def _convert(self, soup_node) -> Optional[DocumentNode]:
        if isinstance(soup_node, Tag):
            name, attributes = self._restore_case(soup_node)
            return Element(name=name, attributes=attributes, children=self.build(soup_node.contents))
        if isinstance(soup_node, SoupComment):
            return Comment(self.restore(str(soup_node)))
        if isinstance(soup_node, PreformattedString):
            # doctype, CDATA, processing instructions
            logger.debug(f"Dropping {type(soup_node).__name__} node from template")
            return None
        if isinstance(soup_node, NavigableString):
            return Text(self.restore(str(soup_node)))
        return None

    def _restore_case(self, tag: Tag):
        attributes = {key: ('' if value is None else self.restore(str(value)))
                      for key, value in tag.attrs.items()}
        line = getattr(tag, 'sourceline', None)
        column = getattr(tag, 'sourcepos', None)
        if line is None or column is None or line > len(self.line_offsets):
            return tag.name, attributes

        spelling = _source_spelling(self.markup, self.line_offsets[line - 1] + column)
        if spelling is None:
            return tag.name, attributes

        source_name, attr_names = spelling
        name = source_name if source_name.lower() == tag.name else tag.name
        restored: Dict[str, Optional[str]] = {}
        for key, value in attributes.items():
            spelled, has_value = attr_names.get(key, (key, True))
            restored[spelled] = value if has_value or value else None
        return name, restored


def parse_markup(markup: str) -> List[DocumentNode]:
    """Parse template markup into an ordered list of top-level nodes."""
    placeholder = _pick_placeholder(markup)
    try:
        with warnings.catch_warnings():
            # short fragments can look like file names or URLs to bs4
            warnings.simplefilter("ignore", UserWarning)
            soup = BeautifulSoup(markup.replace('&', placeholder), "html.parser",
                                 multi_valued_attributes=None)
    except Exception as e:
        raise MarkupParseError(f"Could not parse template markup: {e}") from e

    return _TreeBuilder(markup, placeholder).build(soup.contents)

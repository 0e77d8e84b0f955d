"""
Single File Component parser
============================

Splits a ``.vue`` file into its top-level ``<template>``, ``<script>`` and
``<style>`` blocks. Only the block boundaries are located here; the template
content is handed to the markup parser and the other blocks are kept verbatim.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from vuelocalizer.core.exceptions import SegmentParseError

logger = logging.getLogger(__name__)

_BLOCK_OPEN_RE = re.compile(r'<([A-Za-z][\w-]*)((?:\s+[^>]*?)?)\s*(/?)>')
_TEMPLATE_TAG_RE = re.compile(r'<(/?)template\b[^>]*?(/?)>', re.IGNORECASE)
_BLOCK_ATTR_RE = re.compile(r'''([^\s=/>]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s>]+)))?''')


@dataclass
class TemplateSegment:
    content: str
    attrs: Dict[str, str] = field(default_factory=dict)


@dataclass
class ScriptSegment:
    content: str
    attrs: Dict[str, str] = field(default_factory=dict)

    @property
    def setup(self) -> bool:
        return 'setup' in self.attrs

    @property
    def lang(self) -> Optional[str]:
        return self.attrs.get('lang') or None


@dataclass
class StyleSegment:
    content: str
    attrs: Dict[str, str] = field(default_factory=dict)

    @property
    def scoped(self) -> bool:
        return 'scoped' in self.attrs

    @property
    def lang(self) -> Optional[str]:
        return self.attrs.get('lang') or None


@dataclass
class ComponentDescriptor:
    filename: str = "anonymous.vue"
    template: Optional[TemplateSegment] = None
    scripts: List[ScriptSegment] = field(default_factory=list)
    styles: List[StyleSegment] = field(default_factory=list)

    @property
    def script(self) -> Optional[ScriptSegment]:
        return self.scripts[0] if self.scripts else None


def parse_block_attrs(raw: str) -> Dict[str, str]:
    attrs: Dict[str, str] = {}
    for match in _BLOCK_ATTR_RE.finditer(raw or ''):
        name = match.group(1)
        value = next((g for g in match.groups()[1:] if g is not None), '')
        attrs[name] = value
    return attrs


def _find_template_end(source: str, start: int, filename: str):
    """Return (content_end, block_end) for a template opened before ``start``."""
    depth = 1
    for match in _TEMPLATE_TAG_RE.finditer(source, start):
        if match.group(2):
            continue  # <template /> does not nest
        depth += -1 if match.group(1) else 1
        if depth == 0:
            return match.start(), match.end()
    raise SegmentParseError(f"{filename}: <template> block is never closed")


def _find_block_end(source: str, name: str, start: int, filename: str):
    close = re.compile(rf'</{re.escape(name)}\s*>', re.IGNORECASE)
    match = close.search(source, start)
    if not match:
        raise SegmentParseError(f"{filename}: <{name}> block is never closed")
    return match.start(), match.end()


def parse_component(source: str, filename: str = "anonymous.vue") -> ComponentDescriptor:
    """Split component source into a :class:`ComponentDescriptor`.

    Raises :class:`SegmentParseError` for unclosed blocks, unclosed comments
    or more than one template block.
    """
    descriptor = ComponentDescriptor(filename=filename)
    pos = 0
    length = len(source)

    while pos < length:
        lt = source.find('<', pos)
        if lt == -1:
            break

        if source.startswith('<!--', lt):
            end = source.find('-->', lt + 4)
            if end == -1:
                raise SegmentParseError(f"{filename}: unclosed comment at offset {lt}")
            pos = end + 3
            continue

        match = _BLOCK_OPEN_RE.match(source, lt)
        if not match:
            pos = lt + 1
            continue

        name = match.group(1).lower()
        attrs = parse_block_attrs(match.group(2))
        if match.group(3):
            logger.debug(f"{filename}: skipping self-closing top-level <{name}/>")
            pos = match.end()
            continue

        if name == 'template':
            content_end, block_end = _find_template_end(source, match.end(), filename)
        else:
            content_end, block_end = _find_block_end(source, name, match.end(), filename)
        content = source[match.end():content_end]

        if name == 'template':
            if descriptor.template is not None:
                raise SegmentParseError(f"{filename}: more than one top-level <template> block")
            descriptor.template = TemplateSegment(content, attrs)
        elif name == 'script':
            descriptor.scripts.append(ScriptSegment(content, attrs))
        elif name == 'style':
            descriptor.styles.append(StyleSegment(content, attrs))
        else:
            logger.warning(f"{filename}: custom block <{name}> is not carried to the output")

        pos = block_end

    return descriptor

"""
Output Formatter
===============

Reassembles localized component files and renders the generated locale
modules (``lang/zh.js``, ``lang/en.js``).
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from vuelocalizer.core.accumulator import TranslationAccumulator
from vuelocalizer.core.sfc_parser import ComponentDescriptor, ScriptSegment, StyleSegment


class ComponentOutputFormatter:
    """Formats component files and translation tables for writing."""

    def __init__(self, json_indent: int = 2):
        self.logger = logging.getLogger(__name__)
        self.json_indent = json_indent

    def script_open_tag(self, script: ScriptSegment) -> str:
        tag = "<script"
        if script.setup:
            tag += " setup"
        if script.lang:
            tag += f' lang="{script.lang}"'
        return tag + ">"

    def style_open_tag(self, style: StyleSegment) -> str:
        tag = "<style"
        if style.lang:
            tag += f' lang="{style.lang}"'
        if style.scoped:
            tag += " scoped"
        return tag + ">"

    def format_component(self, descriptor: ComponentDescriptor, localized_template: Optional[str]) -> str:
        """Join template, script and style blocks in that order.

        Blocks that the source component does not have are left out; script
        and style contents are copied verbatim.
        """
        parts: List[str] = []
        if localized_template is not None:
            parts.append(f"<template>{localized_template}</template>")
        for script in descriptor.scripts:
            parts.append(f"{self.script_open_tag(script)}{script.content}</script>")
        for style in descriptor.styles:
            parts.append(f"{self.style_open_tag(style)}{style.content}</style>")
        return "\n".join(parts)

    def format_locale_module(self, table: Mapping[str, str]) -> str:
        """Render a table as an ES module with a single default export."""
        body = json.dumps(dict(table), ensure_ascii=False, indent=self.json_indent)
        return f"export default {body};"

    def write_locale_modules(self,
                             accumulator: TranslationAccumulator,
                             lang_dir: Path,
                             extension: str = ".js") -> Dict[str, Path]:
        """Write one module per locale into ``lang_dir``; returns locale -> path."""
        lang_dir.mkdir(parents=True, exist_ok=True)
        written: Dict[str, Path] = {}
        for locale, table in accumulator.as_tables().items():
            path = lang_dir / f"{locale}{extension}"
            path.write_text(self.format_locale_module(table), encoding="utf-8")
            self.logger.info(f"Wrote {len(table)} entries to {path}")
            written[locale] = path
        return written

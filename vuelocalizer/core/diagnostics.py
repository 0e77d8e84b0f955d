"""Run diagnostics for the VueLocalizer pipeline.

Small helper to collect per-file outcomes (converted, copied, failed) and
emit a JSON report summarizing counts and per-file details.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class FileReport:
    file_path: str
    status: str = 'pending'
    keys: List[str] = field(default_factory=list)
    new_keys: int = 0
    error: Optional[str] = None


@dataclass
class DiagnosticReport:
    source_root: str = ''
    output_root: str = ''
    total_converted: int = 0
    total_copied: int = 0
    total_failed: int = 0
    total_keys: int = 0
    files: Dict[str, FileReport] = field(default_factory=dict)

    def _file(self, file_path: str) -> FileReport:
        fr = self.files.get(file_path)
        if not fr:
            fr = FileReport(file_path=file_path)
            self.files[file_path] = fr
        return fr

    def mark_converted(self, file_path: str, keys: List[str], new_keys: int):
        fr = self._file(file_path)
        fr.status = 'converted'
        fr.keys = list(keys)
        fr.new_keys = new_keys
        self.total_converted += 1

    def mark_copied(self, file_path: str):
        self._file(file_path).status = 'copied'
        self.total_copied += 1

    def mark_failed(self, file_path: str, error: str):
        fr = self._file(file_path)
        fr.status = 'failed'
        fr.error = error
        self.total_failed += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source_root': self.source_root,
            'output_root': self.output_root,
            'totals': {
                'converted': self.total_converted,
                'copied': self.total_copied,
                'failed': self.total_failed,
                'keys': self.total_keys,
            },
            'files': {p: {
                'status': fr.status,
                'keys': fr.keys,
                'new_keys': fr.new_keys,
                'error': fr.error,
            } for p, fr in self.files.items()}
        }

    def write(self, path: str) -> bool:
        p = Path(path)
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(json.dumps(self.to_dict(), ensure_ascii=False, indent=2), encoding='utf-8')
            return True
        except OSError as e:
            logger.error(f"Could not write diagnostics report {p}: {e}")
            return False

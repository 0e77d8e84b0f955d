# -*- coding: utf-8 -*-
"""
Localization Pipeline
=====================

Batch driver: source tree -> localized output tree + locale modules.

Flow:
1. Validate the source and output roots
2. Collect every file under the source root (sorted, so runs are repeatable)
3. Convert component files one by one, copy everything else
4. Merge each file's discoveries into the run tables
5. Write ``lang/<locale>.js`` and the optional diagnostics report

Each file is its own unit of work: a failure is recorded against that file
and the batch carries on with the next one.
"""

import logging
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

from vuelocalizer.core.accumulator import TranslationAccumulator
from vuelocalizer.core.diagnostics import DiagnosticReport
from vuelocalizer.core.exceptions import ConfigError, VueLocalizerError
from vuelocalizer.core.output_formatter import ComponentOutputFormatter
from vuelocalizer.core.sfc_parser import parse_component
from vuelocalizer.core.template_walker import localize_template
from vuelocalizer.utils.config import ConfigManager
from vuelocalizer.utils.encoding import read_text_safely


class PipelineStage(Enum):
    """Pipeline stages"""
    IDLE = "idle"
    VALIDATING = "validating"
    SCANNING = "scanning"
    CONVERTING = "converting"
    SAVING = "saving"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass
class FileResult:
    """Outcome of processing one source file."""
    source_path: Path
    output_path: Path
    kind: str  # 'component' or 'copy'
    keys: List[str] = field(default_factory=list)
    new_keys: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class PipelineResult:
    """Pipeline result"""
    success: bool
    message: str
    stage: PipelineStage
    stats: Optional[Dict] = None
    output_path: Optional[str] = None
    error: Optional[str] = None
    files: List[FileResult] = field(default_factory=list)

    @property
    def failed_files(self) -> List[FileResult]:
        return [f for f in self.files if not f.ok]


def localize_component(source: str,
                       accumulator: TranslationAccumulator,
                       filename: str = "anonymous.vue",
                       attribute_names=("title", "placeholder"),
                       preserve_comments: bool = False,
                       formatter: Optional[ComponentOutputFormatter] = None) -> str:
    """Localize the template of one component and rebuild the file text."""
    descriptor = parse_component(source, filename)
    localized = None
    if descriptor.template is not None:
        localized = localize_template(descriptor.template.content, accumulator,
                                      attribute_names, preserve_comments)
    formatter = formatter or ComponentOutputFormatter()
    return formatter.format_component(descriptor, localized)


class LocalizationPipeline:
    """
    Converts a whole source tree.

    ``on_stage(stage, message)`` and ``on_progress(current, total, text)``
    are optional callbacks for front ends that want live feedback.
    """

    def __init__(self,
                 config: ConfigManager,
                 on_stage: Optional[Callable[[str, str], None]] = None,
                 on_progress: Optional[Callable[[int, int, str], None]] = None):
        self.logger = logging.getLogger(__name__)
        self.config = config
        self.on_stage = on_stage
        self.on_progress = on_progress

        ext = config.extractor_settings
        out = config.output_settings
        self.formatter = ComponentOutputFormatter(json_indent=out.json_indent)
        self.accumulator = TranslationAccumulator(
            key_prefix=ext.key_prefix,
            key_length=ext.key_length,
            source_locale=out.source_locale,
            target_locale=out.target_locale,
        )
        self.report = DiagnosticReport()
        self.current_stage = PipelineStage.IDLE

    def _set_stage(self, stage: PipelineStage, message: str) -> None:
        self.current_stage = stage
        self.logger.info(message)
        if self.on_stage:
            self.on_stage(stage.value, message)

    def _progress(self, current: int, total: int, text: str) -> None:
        if self.on_progress:
            self.on_progress(current, total, text)

    def validate_roots(self, source_root: Path, output_root: Path) -> None:
        if not source_root.is_dir():
            raise ConfigError(f"Source directory not found: {source_root}")
        src = source_root.resolve()
        dst = output_root.resolve()
        if src == dst or dst in src.parents:
            raise ConfigError(f"Output directory {output_root} would overwrite the source tree")
        if src in dst.parents:
            raise ConfigError(f"Output directory {output_root} lies inside the source tree")

    def collect_files(self, source_root: Path) -> List[Path]:
        return sorted(p for p in source_root.rglob('*') if p.is_file())

    def prepare_output(self, output_root: Path) -> None:
        if self.config.extractor_settings.clean_output and output_root.exists():
            self.logger.info(f"Removing previous output: {output_root}")
            shutil.rmtree(output_root)
        output_root.mkdir(parents=True, exist_ok=True)

    def process_file(self, path: Path, source_root: Path, output_root: Path) -> FileResult:
        """Convert or copy one file. Errors are captured in the result."""
        ext = self.config.extractor_settings
        relative = path.relative_to(source_root)
        destination = output_root / relative
        is_component = path.suffix == ext.component_extension
        result = FileResult(path, destination, 'component' if is_component else 'copy')

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            if not is_component:
                shutil.copy2(path, destination)
                self.report.mark_copied(relative.as_posix())
                return result

            file_accumulator = TranslationAccumulator.like(self.accumulator)
            converted = localize_component(
                read_text_safely(path),
                file_accumulator,
                filename=relative.as_posix(),
                attribute_names=ext.localizable_attributes,
                preserve_comments=ext.preserve_comments,
                formatter=self.formatter,
            )
            # tables only take keys from files that were written
            self.accumulator.check_merge(file_accumulator)
            destination.write_text(converted, encoding='utf-8')
            result.new_keys = self.accumulator.merge(file_accumulator)
            result.keys = list(file_accumulator.source)
            self.report.mark_converted(relative.as_posix(), result.keys, result.new_keys)
            self.logger.info(f"Converted {relative} ({len(result.keys)} keys, {result.new_keys} new)")
        except (VueLocalizerError, OSError, UnicodeError) as e:
            result.error = f"{type(e).__name__}: {e}"
            self.report.mark_failed(relative.as_posix(), result.error)
            self.logger.error(f"Failed to process {relative}: {result.error}")
        return result

    def write_tables(self, output_root: Path) -> Dict[str, Path]:
        out = self.config.output_settings
        return self.formatter.write_locale_modules(
            self.accumulator, output_root / out.lang_dir, out.module_extension
        )

    def run(self) -> PipelineResult:
        ext = self.config.extractor_settings
        out = self.config.output_settings
        source_root = Path(ext.source_dir)
        output_root = Path(ext.output_dir)

        try:
            self._set_stage(PipelineStage.VALIDATING, f"Checking {source_root} -> {output_root}")
            self.validate_roots(source_root, output_root)
        except ConfigError as e:
            self._set_stage(PipelineStage.ERROR, str(e))
            return PipelineResult(False, "Invalid source or output directory",
                                  PipelineStage.ERROR, error=str(e))

        self._set_stage(PipelineStage.SCANNING, f"Searching for files in: {source_root}")
        files = self.collect_files(source_root)
        if not files:
            self.logger.warning("No files found in the source directory.")
            self._set_stage(PipelineStage.COMPLETED, "Nothing to do")
            return PipelineResult(True, "No files found in the source directory.",
                                  PipelineStage.COMPLETED, stats=self._stats([]))

        self.report.source_root = str(source_root)
        self.report.output_root = str(output_root)
        self.prepare_output(output_root)

        self._set_stage(PipelineStage.CONVERTING, f"Processing {len(files)} files")
        results: List[FileResult] = []
        for index, path in enumerate(files, start=1):
            self._progress(index, len(files), path.relative_to(source_root).as_posix())
            results.append(self.process_file(path, source_root, output_root))

        self._set_stage(PipelineStage.SAVING, f"Writing {len(self.accumulator)} keys")
        self.write_tables(output_root)
        self.report.total_keys = len(self.accumulator)
        if out.report_file:
            self.report.write(out.report_file)

        stats = self._stats(results)
        failed = [r for r in results if not r.ok]
        if failed:
            message = f"{len(failed)} of {len(results)} files failed"
            self._set_stage(PipelineStage.COMPLETED, message)
            return PipelineResult(False, message, PipelineStage.COMPLETED, stats=stats,
                                  output_path=str(output_root),
                                  error="; ".join(f"{r.source_path}: {r.error}" for r in failed),
                                  files=results)

        self._set_stage(PipelineStage.COMPLETED, "Localization finished")
        return PipelineResult(True, "Localization finished", PipelineStage.COMPLETED,
                              stats=stats, output_path=str(output_root), files=results)

    def _stats(self, results: List[FileResult]) -> Dict[str, int]:
        return {
            'total': len(results),
            'converted': sum(1 for r in results if r.ok and r.kind == 'component'),
            'copied': sum(1 for r in results if r.ok and r.kind == 'copy'),
            'failed': sum(1 for r in results if not r.ok),
            'keys': len(self.accumulator),
        }

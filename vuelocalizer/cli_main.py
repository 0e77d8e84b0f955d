# -*- coding: utf-8 -*-
"""
VueLocalizer CLI Main Module
"""

import sys
import argparse
import logging
from typing import List, Optional

from vuelocalizer import __version__
from vuelocalizer.core.exceptions import ConfigError
from vuelocalizer.core.pipeline import LocalizationPipeline, PipelineResult
from vuelocalizer.utils.config import ConfigManager


class CliHandler:
    """Prints pipeline stages and progress to the console."""

    def on_stage_changed(self, stage: str, message: str):
        print(f"\n>> STAGE: {message} ({stage})")

    def on_progress_updated(self, current: int, total: int, text: str):
        percent = 0
        if total > 0:
            percent = int((current / total) * 100)

        sys.stdout.write(f"\rProgress: [{current}/{total}] {percent}% - {text[:50].ljust(50)}")
        sys.stdout.flush()

    def on_finished(self, result: PipelineResult):
        print("\n" + "="*60)
        if result.success:
            print("SUCCESS")
        else:
            print("FAILED")
        print(result.message)
        if result.stats:
            print("\nStatistics:")
            print(f"  Files:     {result.stats.get('total', 0)}")
            print(f"  Converted: {result.stats.get('converted', 0)}")
            print(f"  Copied:    {result.stats.get('copied', 0)}")
            print(f"  Failed:    {result.stats.get('failed', 0)}")
            print(f"  Keys:      {result.stats.get('keys', 0)}")
        for failed in result.failed_files:
            print(f"  ! {failed.source_path}: {failed.error}")
        if result.error and not result.failed_files:
            print(f"Details: {result.error}")
        print("="*60)


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )


def print_header():
    """Print the CLI header."""
    print("\n" + "="*60)
    print(f"       VueLocalizer CLI v{__version__}")
    print("       Vue template i18n extraction tool")
    print("="*60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"VueLocalizer v{__version__} CLI")
    parser.add_argument("--source", help="Source directory (default: source/src)")
    parser.add_argument("--output", "-o", help="Output directory (default: output/src)")
    parser.add_argument("--config", help="Path to JSON configuration file (default: vuelocalizer.json)")
    parser.add_argument("--preserve-comments", action="store_true", help="Keep template comments in the output")
    parser.add_argument("--no-clean", action="store_true", help="Do not wipe the output directory first")
    parser.add_argument("--report", help="Write a JSON diagnostics report to this path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def apply_overrides(config: ConfigManager, args: argparse.Namespace) -> None:
    if args.source:
        config.set_setting('extractor.source_dir', args.source)
    if args.output:
        config.set_setting('extractor.output_dir', args.output)
    if args.preserve_comments:
        config.set_setting('extractor.preserve_comments', True)
    if args.no_clean:
        config.set_setting('extractor.clean_output', False)
    if args.report:
        config.set_setting('output.report_file', args.report)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    print_header()

    config = ConfigManager(args.config) if args.config else ConfigManager()
    try:
        config.load_config()
        apply_overrides(config, args)
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return 1

    handler = CliHandler()
    pipeline = LocalizationPipeline(
        config,
        on_stage=handler.on_stage_changed,
        on_progress=handler.on_progress_updated,
    )
    result = pipeline.run()
    handler.on_finished(result)
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())

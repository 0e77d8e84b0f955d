"""
Configuration Manager
====================

Manages extraction and output settings.

Every setting has a default, so a run without a config file behaves exactly
like the classic script: ``source/src`` in, ``output/src`` out, ``lang/zh.js``
and ``lang/en.js`` written next to the converted sources.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, asdict, field, fields

from vuelocalizer.core.exceptions import ConfigError


@dataclass
class ExtractorSettings:
    """Settings that drive template extraction."""
    source_dir: str = "source/src"
    output_dir: str = "output/src"
    component_extension: str = ".vue"
    localizable_attributes: List[str] = field(default_factory=lambda: ["title", "placeholder"])
    key_prefix: str = "i18n_"
    key_length: int = 8
    preserve_comments: bool = False  # template comments are dropped unless set
    clean_output: bool = True  # wipe output_dir before a run

@dataclass
class OutputSettings:
    """Settings for the generated locale modules and reports."""
    lang_dir: str = "lang"
    source_locale: str = "zh"
    target_locale: str = "en"
    module_extension: str = ".js"
    json_indent: int = 2
    report_file: str = ""  # empty: no diagnostics report

class ConfigManager:
    """Manages application configuration."""

    SECTIONS = {
        'extractor_settings': ('extractor', ExtractorSettings),
        'output_settings': ('output', OutputSettings),
    }

    def __init__(self, config_file: str = "vuelocalizer.json"):
        self.logger = logging.getLogger(__name__)
        self.config_file = Path(config_file)

        # Default configuration
        self.extractor_settings = ExtractorSettings()
        self.output_settings = OutputSettings()

    def load_config(self) -> bool:
        """Load configuration from file. Returns False when no file exists."""
        if not self.config_file.exists():
            self.logger.info("Config file doesn't exist, using defaults")
            return False

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read config file {self.config_file}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigError(f"Config file {self.config_file} must contain a JSON object")

        for section, (_, settings_cls) in self.SECTIONS.items():
            if section not in config_data:
                continue
            try:
                setattr(self, section, settings_cls(**config_data[section]))
            except TypeError as e:
                raise ConfigError(f"Invalid {section} in {self.config_file}: {e}") from e

        unknown = set(config_data) - set(self.SECTIONS)
        if unknown:
            raise ConfigError(f"Unknown config sections: {', '.join(sorted(unknown))}")

        self.validate()
        self.logger.info("Configuration loaded successfully")
        return True

    def validate(self) -> None:
        """Raise :class:`ConfigError` for settings that cannot work."""
        ext = self.extractor_settings
        if not 1 <= ext.key_length <= 32:
            raise ConfigError(f"key_length must be between 1 and 32, got {ext.key_length}")
        if not ext.component_extension.startswith('.'):
            raise ConfigError(f"component_extension must start with '.', got {ext.component_extension!r}")
        out = self.output_settings
        if out.source_locale == out.target_locale:
            raise ConfigError("source_locale and target_locale must differ")

    def save_config(self) -> bool:
        """Save configuration to file."""
        try:
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(self.as_dict(), f, indent=4, ensure_ascii=False)

            self.logger.info("Configuration saved successfully")
            return True

        except OSError as e:
            self.logger.error(f"Error saving configuration: {e}")
            return False

    def _section(self, prefix: str) -> Optional[Any]:
        for section, (short, _) in self.SECTIONS.items():
            if short == prefix:
                return getattr(self, section)
        return None

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value using dot notation (e.g., 'extractor.key_length')."""
        parts = key.split('.')
        if len(parts) != 2:
            return default
        settings = self._section(parts[0])
        if settings is None:
            return default
        return getattr(settings, parts[1], default)

    def set_setting(self, key: str, value: Any) -> None:
        """Set a setting value using dot notation (e.g., 'output.report_file')."""
        parts = key.split('.')
        settings = self._section(parts[0]) if len(parts) == 2 else None
        if settings is None or parts[1] not in {f.name for f in fields(settings)}:
            raise ConfigError(f"Unknown setting: {key}")
        setattr(settings, parts[1], value)

    def as_dict(self) -> Dict[str, Dict[str, Any]]:
        return {
            'extractor_settings': asdict(self.extractor_settings),
            'output_settings': asdict(self.output_settings),
        }

    def reset_to_defaults(self) -> None:
        """Reset configuration to defaults."""
        self.extractor_settings = ExtractorSettings()
        self.output_settings = OutputSettings()
        self.logger.info("Configuration reset to defaults")

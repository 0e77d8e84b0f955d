import json

import pytest

from vuelocalizer.core.exceptions import ConfigError
from vuelocalizer.utils.config import ConfigManager, ExtractorSettings, OutputSettings
from vuelocalizer.utils.encoding import decode_bytes, read_text_safely


def test_defaults_match_classic_layout(tmp_path):
    config = ConfigManager(str(tmp_path / "none.json"))
    assert config.load_config() is False
    assert config.extractor_settings == ExtractorSettings()
    assert config.get_setting("extractor.source_dir") == "source/src"
    assert config.get_setting("extractor.output_dir") == "output/src"
    assert config.get_setting("extractor.localizable_attributes") == ["title", "placeholder"]
    assert config.get_setting("output.lang_dir") == "lang"
    assert config.get_setting("output.module_extension") == ".js"


def test_load_partial_config(tmp_path):
    path = tmp_path / "vuelocalizer.json"
    path.write_text(json.dumps({
        "extractor_settings": {"key_length": 10, "localizable_attributes": ["title", "label"]},
        "output_settings": {"target_locale": "ja"},
    }), encoding="utf-8")
    config = ConfigManager(str(path))
    assert config.load_config() is True
    assert config.extractor_settings.key_length == 10
    assert config.extractor_settings.source_dir == "source/src"
    assert config.output_settings.target_locale == "ja"
    assert config.output_settings.source_locale == "zh"


@pytest.mark.parametrize("payload", [
    {"extractor_settings": {"no_such_setting": 1}},
    {"mystery_section": {}},
    {"extractor_settings": {"key_length": 0}},
    {"output_settings": {"target_locale": "zh"}},
    ["not", "an", "object"],
])
def test_invalid_config_raises(tmp_path, payload):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ConfigError):
        ConfigManager(str(path)).load_config()


def test_unreadable_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        ConfigManager(str(path)).load_config()


def test_save_and_reload_roundtrip(tmp_path):
    path = tmp_path / "cfg.json"
    config = ConfigManager(str(path))
    config.set_setting("extractor.preserve_comments", True)
    config.set_setting("output.report_file", "report.json")
    assert config.save_config()

    again = ConfigManager(str(path))
    again.load_config()
    assert again.extractor_settings.preserve_comments is True
    assert again.output_settings == OutputSettings(report_file="report.json")


def test_set_unknown_setting_raises(tmp_path):
    config = ConfigManager(str(tmp_path / "cfg.json"))
    with pytest.raises(ConfigError):
        config.set_setting("extractor.nope", 1)
    with pytest.raises(ConfigError):
        config.set_setting("nope", 1)
    assert config.get_setting("extractor.nope", "fallback") == "fallback"


def test_reset_to_defaults(tmp_path):
    config = ConfigManager(str(tmp_path / "cfg.json"))
    config.set_setting("extractor.key_prefix", "t_")
    config.reset_to_defaults()
    assert config.extractor_settings.key_prefix == "i18n_"


def test_read_text_safely_handles_bom_and_gbk(tmp_path):
    bom = tmp_path / "bom.vue"
    bom.write_bytes("\ufeff<template>你好</template>".encode("utf-8"))
    assert read_text_safely(bom) == "<template>你好</template>"

    legacy = "<template><p>这是一个使用国标编码保存的组件文件，内容足够长以便识别编码。</p></template>"
    assert "<template>" in decode_bytes(legacy.encode("gb18030"))


def test_read_text_safely_propagates_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_text_safely(tmp_path / "missing.vue")

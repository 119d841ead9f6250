import pytest

from CantoDictYomitan.util.config import configuration
from CantoDictYomitan.util.config.configuration import DictionaryConfig, Source, load_config


def test_defaults_match_cantodict_export():
    config = DictionaryConfig()
    assert config.source.reading_type == "jyutping"
    assert config.source.reading_schemes == ["jyutping", "yale", "pinyin"]
    assert config.source.term_kinds == ["compound", "character"]
    assert config.index.format == 3
    assert config.export.entries_per_bank == 10000
    assert config.paths.output_path == "[Cantonese] CantoDict.zip"


def test_load_config_without_file_returns_defaults(monkeypatch):
    monkeypatch.delenv(configuration.CONFIG_ENV, raising=False)
    assert load_config() == DictionaryConfig()


def test_load_config_merges_partial_toml(tmp_path):
    config_file = tmp_path / "cantodict.toml"
    config_file.write_text(
        '[source]\nreading_type = "yale"\n\n[export]\nentries_per_bank = 500\n',
        encoding="utf-8",
    )
    config = load_config(str(config_file))
    assert config.source.reading_type == "yale"
    assert config.source.language == "zh-HK"
    assert config.export.entries_per_bank == 500
    assert config.index.title == "CantoDict"
    assert isinstance(config.source, Source)


def test_load_config_reads_env_variable(tmp_path, monkeypatch):
    config_file = tmp_path / "cantodict.toml"
    config_file.write_text('[index]\ntitle = "CantoDict (test)"\n', encoding="utf-8")
    monkeypatch.setenv(configuration.CONFIG_ENV, str(config_file))
    assert load_config().index.title == "CantoDict (test)"


def test_unknown_keys_are_rejected(tmp_path):
    config_file = tmp_path / "cantodict.toml"
    config_file.write_text('[export]\nbank_size = 5\n', encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(config_file))


def test_unknown_section_is_rejected():
    with pytest.raises(ValueError):
        DictionaryConfig.from_toml_dict({"anki": {"url": "x"}})


def test_reading_type_must_be_a_scheme():
    with pytest.raises(ValueError):
        Source(reading_type="cantonese_pinyin")


def test_get_field_value():
    config = DictionaryConfig()
    assert config.get_field_value("index", "title") == "CantoDict"
    with pytest.raises(ValueError):
        config.get_field_value("index", "missing")

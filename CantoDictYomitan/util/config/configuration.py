import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml
from dataclasses_json import dataclass_json

from CantoDictYomitan.util.logging_config import logger

JYUTPING = 'jyutping'
YALE = 'yale'
PINYIN = 'pinyin'

COMPOUND = 'compound'
CHARACTER = 'character'
SENTENCE = 'sentence'

CONFIG_ENV = 'CANTODICT_CONFIG'

# Columns whose non-empty values are JSON documents rather than plain strings
DEFAULT_JSON_FIELDS = [
    'cantodict_id',
    'similar',
    'variants',
    'pos',
    'flag',
    'compound_cantodictids',
    'sentence_cantodictids',
    'character_cantodictids',
    'google_frequency',
]

DEFAULT_DESCRIPTION = (
    "CantoDict was a Cantonese-English dictionary created and maintained by public contributors. "
    "It was abandoned, but the data was archived thanks to awong-dev at "
    "https://github.com/awong-dev/cantodict-archive.\n"
    "Created with https://github.com/MarvNC/yomichan-dictionaries"
)


def sanitize_and_resolve_path(path: str) -> str:
    if not path:
        return path
    return str(Path(os.path.expanduser(path.strip().strip('"'))))


@dataclass_json
@dataclass
class Paths:
    csv_path: str = 'cantodict.csv'
    output_path: str = '[Cantonese] CantoDict.zip'

    def __post_init__(self):
        self.csv_path = sanitize_and_resolve_path(self.csv_path)
        self.output_path = sanitize_and_resolve_path(self.output_path)


@dataclass_json
@dataclass
class Source:
    json_fields: List[str] = field(default_factory=lambda: list(DEFAULT_JSON_FIELDS))
    reading_type: str = JYUTPING
    reading_schemes: List[str] = field(default_factory=lambda: [JYUTPING, YALE, PINYIN])
    term_kinds: List[str] = field(default_factory=lambda: [COMPOUND, CHARACTER])
    language: str = 'zh-HK'
    translation_language: str = 'en'

    def __post_init__(self):
        if self.reading_type not in self.reading_schemes:
            raise ValueError(
                f"reading_type '{self.reading_type}' is not one of the reading schemes {self.reading_schemes}")


@dataclass_json
@dataclass
class Index:
    title: str = 'CantoDict'
    revision_prefix: str = 'cantodict'
    format: int = 3
    url: str = 'http://www.cantonese.sheik.co.uk/'
    description: str = DEFAULT_DESCRIPTION
    author: str = 'CantoDict contributors, Marv'
    attribution: str = 'CantoDict contributors'
    frequency_mode: str = 'rank-based'


@dataclass_json
@dataclass
class Export:
    entries_per_bank: int = 10000
    workers: int = 1


@dataclass_json
@dataclass
class DictionaryConfig:
    paths: Paths = field(default_factory=Paths)
    source: Source = field(default_factory=Source)
    index: Index = field(default_factory=Index)
    export: Export = field(default_factory=Export)

    def get_field_value(self, section: str, field_name: str):
        section_obj = getattr(self, section, None)
        if section_obj and hasattr(section_obj, field_name):
            return getattr(section_obj, field_name)
        raise ValueError(
            f"Field '{field_name}' not found in section '{section}' of DictionaryConfig.")

    @classmethod
    def from_toml_dict(cls, data: Dict[str, Any]) -> 'DictionaryConfig':
        """Merge a possibly partial TOML document over the defaults."""
        merged = cls().to_dict()
        for section, values in data.items():
            if section not in merged:
                raise ValueError(f"Unknown config section '{section}'")
            if not isinstance(values, dict):
                raise ValueError(f"Config section '{section}' must be a table")
            unknown = set(values) - set(merged[section])
            if unknown:
                raise ValueError(f"Unknown keys in section '{section}': {', '.join(sorted(unknown))}")
            merged[section].update(values)
        return cls.from_dict(merged)


def load_config(path: Optional[str] = None) -> DictionaryConfig:
    """
    Load the builder configuration.

    Falls back to the CANTODICT_CONFIG environment variable, then to the built-in
    defaults when neither names a file.
    """
    path = path or os.environ.get(CONFIG_ENV)
    if not path:
        logger.debug("No config file given, using defaults")
        return DictionaryConfig()

    config_path = Path(sanitize_and_resolve_path(path))
    with open(config_path, 'r', encoding='utf-8') as f:
        config_data = toml.load(f)

    logger.info(f"Loaded config from {config_path}")
    return DictionaryConfig.from_toml_dict(config_data)

"""Decoding of raw CantoDict rows into typed entries."""

import json
from typing import Dict, Iterable, Iterator, List, Optional

from CantoDictYomitan.util.config.configuration import Source
from CantoDictYomitan.util.logging_config import logger
from .contracts import Entry, MalformedInputError, MissingColumnError

# Column name -> Entry field name for list-valued structured columns
LIST_COLUMNS = {
    'pos': 'pos',
    'variants': 'variants',
    'similar': 'similar',
    'compound_cantodictids': 'compound_refs',
    'sentence_cantodictids': 'sentence_refs',
    'character_cantodictids': 'character_refs',
}


def decode_row(row: Dict[str, str], json_fields: Iterable[str], line: Optional[int] = None) -> dict:
    """
    Decode the structured columns of a raw row.

    Columns listed in ``json_fields`` hold JSON documents; every non-empty one is
    parsed. Empty or missing values are kept as they are.

    Args:
        row: Column name -> raw string value
        json_fields: Names of the columns holding JSON
        line: Source line number, only used in error messages

    Returns:
        A new dict with the structured columns decoded

    Raises:
        MalformedInputError: A structured column holds invalid JSON
    """
    decoded = dict(row)
    for column in json_fields:
        value = decoded.get(column)
        if not value:
            continue
        try:
            decoded[column] = json.loads(value)
        except json.JSONDecodeError as e:
            raise MalformedInputError(column, value, line, e.msg) from e
    return decoded


def _as_list(decoded: dict, column: str, line: Optional[int]) -> list:
    value = decoded.get(column)
    if not value:
        return []
    if not isinstance(value, list):
        raise MalformedInputError(column, json.dumps(value, ensure_ascii=False), line, "expected a JSON list")
    return value


def _required(decoded: dict, column: str, line: Optional[int]) -> str:
    value = decoded.get(column)
    if value in (None, ""):
        raise MissingColumnError(column, line)
    return value


def entry_from_row(row: Dict[str, str], source: Source, line: Optional[int] = None) -> Entry:
    """Decode one raw row and build the typed Entry for it."""
    decoded = decode_row(row, source.json_fields, line)

    lists = {
        field_name: _as_list(decoded, column, line)
        for column, field_name in LIST_COLUMNS.items()
    }
    readings = {scheme: decoded.get(scheme) or "" for scheme in source.reading_schemes}

    return Entry(
        kind=_required(decoded, 'entry_type', line),
        id=decoded.get('cantodict_id'),
        surface_form=_required(decoded, 'chinese', line),
        readings=readings,
        definition=decoded.get('definition') or "",
        notes=decoded.get('notes') or None,
        flag=decoded.get('flag') or None,
        frequency=decoded.get('google_frequency') or None,
        dialect=decoded.get('dialect') or None,
        **lists,
    )


def decode_rows(rows: Iterable[Dict[str, str]], source: Source) -> Iterator[Entry]:
    """
    Decode every row of the table.

    Line numbers in errors count the header as line 1.
    """
    count = 0
    for line, row in enumerate(rows, start=2):
        yield entry_from_row(row, source, line)
        count += 1
    logger.info(f"Decoded {count} rows")


def decode_all(rows: Iterable[Dict[str, str]], source: Source) -> List[Entry]:
    return list(decode_rows(rows, source))

"""
Yomitan dictionary builder package.

This package provides components for building a Yomitan-compatible dictionary
from the CantoDict CSV export.

Components:
- CantoDictBuilder: Main orchestrating class for building dictionaries
- ContentBuilder: Builds Yomitan structured content and term entries
- EntryIndex: Lookup of decoded entries by kind and CantoDict id
- Entry: Typed CantoDict row produced by the field decoder
"""

from .content_builder import ContentBuilder, synthesize
from .contracts import (
    CantoDictError,
    Entry,
    KanjiBankNotSupportedError,
    MalformedInputError,
    MissingColumnError,
)
from .dict_builder import CantoDictBuilder, create_term_bank
from .entry_index import EntryIndex, build_entry_index
from .field_decoder import decode_row, entry_from_row

__all__ = [
    'CantoDictBuilder',
    'ContentBuilder',
    'EntryIndex',
    'Entry',
    'CantoDictError',
    'MalformedInputError',
    'MissingColumnError',
    'KanjiBankNotSupportedError',
    'build_entry_index',
    'create_term_bank',
    'decode_row',
    'entry_from_row',
    'synthesize',
]

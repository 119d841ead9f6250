"""Lookup of decoded entries by (kind, id)."""

from collections import Counter
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Optional

from CantoDictYomitan.util.logging_config import logger
from .contracts import Entry, entry_key


class EntryIndex(Mapping):
    """
    Read-only mapping of ``"<kind>,<id>"`` to Entry.

    Iteration follows the order rows appeared in the source table. When two rows
    share a key the later one replaces the earlier one but keeps the first one's
    position, the same way a dict assignment does.
    """

    def __init__(self, entries: Optional[Iterable[Entry]] = None):
        store: Dict[str, Entry] = {}
        self.overwritten = 0
        for entry in entries or ():
            key = entry.key
            if key in store:
                self.overwritten += 1
                logger.debug(f"Duplicate entry {key}, keeping the later row")
            store[key] = entry
        self._entries = MappingProxyType(store)

    def __getitem__(self, key: str) -> Entry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get_entry(self, kind: str, entry_id: Any) -> Optional[Entry]:
        return self._entries.get(entry_key(kind, entry_id))

    def entries(self) -> Iterator[Entry]:
        return iter(self._entries.values())

    def count_by_kind(self) -> Dict[str, int]:
        return dict(Counter(entry.kind for entry in self._entries.values()))


def build_entry_index(entries: Iterable[Entry]) -> EntryIndex:
    index = EntryIndex(entries)
    logger.info(f"Indexed {len(index)} entries ({index.overwritten} duplicate keys overwritten)")
    return index

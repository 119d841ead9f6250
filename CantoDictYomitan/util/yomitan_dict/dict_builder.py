"""Main Yomitan dictionary builder that orchestrates all components."""

import io
import json
import zipfile
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from CantoDictYomitan.util.config.configuration import DictionaryConfig
from CantoDictYomitan.util.logging_config import logger
from .content_builder import ContentBuilder, DanglingReferenceHook
from .contracts import Entry
from .entry_index import EntryIndex, build_entry_index
from .field_decoder import decode_rows
from .table_reader import iter_rows


def create_term_bank(index: EntryIndex, content_builder: ContentBuilder, workers: int = 1) -> List[list]:
    """
    Build the term bank for every compound and character in the index.

    Entries are visited in index order and each entry's rows stay together,
    headword first. Sentences and other kinds only serve as lookup targets.

    Args:
        index: The entry index
        content_builder: Builder used for each entry
        workers: Number of threads; results keep the sequential order

    Returns:
        Term bank rows
    """
    term_kinds = set(content_builder.source.term_kinds)
    eligible = [entry for entry in index.entries() if entry.kind in term_kinds]

    def synthesize(entry: Entry) -> List[list]:
        return content_builder.create_term_entries(entry, index)

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(synthesize, eligible))
    else:
        results = [synthesize(entry) for entry in eligible]

    term_bank = []
    for rows in results:
        term_bank.extend(rows)

    logger.info(f"Built {len(term_bank)} term entries from {len(eligible)} headwords")
    return term_bank


def format_revision(prefix: str, now: Optional[datetime] = None) -> str:
    """Revision tag like "cantodict_2024-01-31T12:00:00.000Z"."""
    now = now or datetime.now(timezone.utc)
    now = now.astimezone(timezone.utc)
    return f"{prefix}_{now.strftime('%Y-%m-%dT%H:%M:%S')}.{now.microsecond // 1000:03d}Z"


class CantoDictBuilder:
    """
    Builder for creating a Yomitan dictionary from the CantoDict CSV export.

    This class orchestrates the table reading, field decoding, indexing and
    content building components to create a complete Yomitan dictionary ZIP
    file.
    """

    def __init__(self, config: Optional[DictionaryConfig] = None,
                 on_dangling_reference: Optional[DanglingReferenceHook] = None):
        """
        Initialize the dictionary builder.

        Args:
            config: Builder configuration (defaults to DictionaryConfig())
            on_dangling_reference: Forwarded to the ContentBuilder
        """
        self.config = config or DictionaryConfig()
        self.content_builder = ContentBuilder(self.config.source, on_dangling_reference)
        self.index: Optional[EntryIndex] = None
        self.entries: List[list] = []  # Term bank entries

    def load_rows(self, rows: Iterable[Dict[str, str]]) -> EntryIndex:
        """Decode raw rows and index them. Replaces any previously loaded index."""
        self.index = build_entry_index(decode_rows(rows, self.config.source))
        return self.index

    def load_csv(self, csv_path: Optional[str] = None) -> EntryIndex:
        return self.load_rows(iter_rows(csv_path or self.config.paths.csv_path))

    def build(self, workers: Optional[int] = None) -> List[list]:
        """
        Synthesize the term bank from the loaded index.

        Returns:
            The term bank entries, also kept on ``self.entries``
        """
        if self.index is None:
            raise RuntimeError("No entries loaded, call load_rows() or load_csv() first")
        workers = workers if workers is not None else self.config.export.workers
        self.entries = create_term_bank(self.index, self.content_builder, workers=workers)
        if self.content_builder.dangling_references:
            logger.debug(f"Skipped {self.content_builder.dangling_references} references to missing entries")
        return self.entries

    def _create_index(self, now: Optional[datetime] = None) -> dict:
        """
        Create the dictionary index metadata.

        Returns:
            Dictionary containing index.json content: title, revision (derived
            from the current time), format 3, url, description, author,
            attribution and frequencyMode
        """
        index_config = self.config.index
        return {
            "title": index_config.title,
            "revision": format_revision(index_config.revision_prefix, now),
            "format": index_config.format,
            "url": index_config.url,
            "description": index_config.description,
            "author": index_config.author,
            "attribution": index_config.attribution,
            "frequencyMode": index_config.frequency_mode,
        }

    def create_files(self, now: Optional[datetime] = None) -> Dict[str, object]:
        """
        Map archive file names to their JSON documents.

        The term bank is split into chunks of ``entries_per_bank`` rows; zero or
        less keeps it in a single file. An empty bank still gets term_bank_1.json.
        """
        files: Dict[str, object] = {"index.json": self._create_index(now)}

        per_bank = self.config.export.entries_per_bank
        if per_bank <= 0 or len(self.entries) <= per_bank:
            files["term_bank_1.json"] = self.entries
            return files

        for i in range(0, len(self.entries), per_bank):
            bank_num = (i // per_bank) + 1
            files[f"term_bank_{bank_num}.json"] = self.entries[i:i + per_bank]
        return files

    def export_bytes(self, now: Optional[datetime] = None) -> bytes:
        """
        Export dictionary as ZIP file bytes.

        Returns:
            Bytes of the ZIP file
        """
        buffer = io.BytesIO()

        with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as zf:
            for filename, document in self.create_files(now).items():
                indent = 2 if filename == "index.json" else None
                data = json.dumps(document, ensure_ascii=False, indent=indent)
                zf.writestr(filename, data.encode('utf-8'))

        return buffer.getvalue()

    def export(self, output_path: Optional[str] = None) -> str:
        """
        Export dictionary as ZIP file to disk.

        Args:
            output_path: Path to write the ZIP file (defaults to the configured path)

        Returns:
            The output path
        """
        output = Path(output_path or self.config.paths.output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        zip_bytes = self.export_bytes()
        with open(output, 'wb') as f:
            f.write(zip_bytes)
        logger.info(f"Dictionary saved to: {output}")
        return str(output)

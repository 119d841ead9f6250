"""Reading of the CantoDict CSV export."""

import csv
from pathlib import Path
from typing import Dict, Iterator, Union

from CantoDictYomitan.util.logging_config import logger


def iter_rows(csv_path: Union[str, Path]) -> Iterator[Dict[str, str]]:
    """
    Yield one dict per CSV line, keyed by the header row.

    Cells missing at the end of a short line come back as empty strings.
    """
    csv_path = Path(csv_path)
    logger.info(f"Reading {csv_path}")
    with open(csv_path, 'r', encoding='utf-8-sig', newline='') as f:
        reader = csv.DictReader(f, restval='')
        for row in reader:
            # Overflow cells of a long line end up under the None key
            row.pop(None, None)
            yield row

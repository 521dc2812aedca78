"""CSV product catalog reader."""
from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Dict, List

from .errors import UpstreamError

logger = logging.getLogger(__name__)

ProductRecord = Dict[str, str]

REQUIRED_COLUMNS = ("displayTitle", "embeddingText", "productType")
LFS_POINTER_PREFIX = "version https://git-lfs.github.com/spec/v1"


def load_catalog(path: str | Path) -> List[ProductRecord]:
    """Read every row of the catalog file as a field name -> string mapping."""
    file_path = Path(path)
    try:
        with file_path.open("r", encoding="utf-8-sig", newline="") as fh:
            # Detect Git LFS placeholder to avoid parsing it as a header row.
            first_line = fh.readline()
            if first_line.startswith(LFS_POINTER_PREFIX):
                logger.warning("Catalog file %s is a Git LFS pointer; real data not downloaded", file_path)
                return []
            fh.seek(0)
            reader = csv.DictReader(fh)
            missing = [column for column in REQUIRED_COLUMNS if column not in (reader.fieldnames or [])]
            if missing:
                logger.warning("Catalog file %s is missing columns %s", file_path, missing)
            records = [dict(row) for row in reader]
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        logger.error("Error reading catalog file %s: %s", file_path, exc)
        raise UpstreamError(f"Failed to read product catalog {file_path}") from exc
    logger.debug("Loaded %s products from %s", len(records), file_path)
    return records

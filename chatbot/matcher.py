"""Product matching over the in-memory catalog."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Sequence

from .catalog import ProductRecord, load_catalog

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("displayTitle", "embeddingText", "productType")
DEFAULT_LIMIT = 2


def _combined_text(record: ProductRecord) -> str:
    return " ".join(record.get(field) or "" for field in TEXT_FIELDS).lower()


def search_products(
    catalog: Sequence[ProductRecord], query: str, limit: int = DEFAULT_LIMIT
) -> List[ProductRecord]:
    """Return the first ``limit`` records containing any query term.

    Terms are whitespace separated and matched as case-insensitive substrings
    of the title, description and type fields. Catalog order is preserved; there
    is no ranking. A blank query has no terms and matches nothing.
    """
    terms = query.lower().split()
    if not terms or limit <= 0:
        return []
    matches: List[ProductRecord] = []
    for record in catalog:
        text = _combined_text(record)
        if any(term in text for term in terms):
            matches.append(record)
            if len(matches) >= limit:
                break
    return matches


class ProductSearch:
    """Reloads the catalog on every call and renders matches for the model."""

    def __init__(self, products_path: str | Path, limit: int = DEFAULT_LIMIT) -> None:
        self.products_path = Path(products_path)
        self.limit = limit

    def find(self, query: str) -> List[ProductRecord]:
        catalog = load_catalog(self.products_path)
        matches = search_products(catalog, query, self.limit)
        logger.info("product search q=%r catalog=%s hits=%s", query, len(catalog), len(matches))
        return matches

    def search(self, query: str) -> str:
        return json.dumps(self.find(query), ensure_ascii=False)

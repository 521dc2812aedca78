"""Shared fixtures: a small catalog file and a scripted completion client."""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pytest

from chatbot.completion import CompletionMessage, FunctionCall
from chatbot.models import ChatTurn

CATALOG_ROWS = [
    {"displayTitle": "iPhone 12", "embeddingText": "Apple smartphone with 5G", "productType": "Technology", "price": "900.0 USD"},
    {"displayTitle": "Leather Wallet", "embeddingText": "Slim bifold wallet", "productType": "Accessories", "price": "45.0 USD"},
    {"displayTitle": "Redmi Note 12", "embeddingText": "Android PHONE with AMOLED screen", "productType": "Technology", "price": "299.0 USD"},
    {"displayTitle": "Galaxy S23", "embeddingText": "Samsung flagship phone", "productType": "Technology", "price": "799.0 USD"},
    {"displayTitle": "Cotton T-Shirt", "embeddingText": "Organic cotton tee", "productType": "Clothing", "price": "19.0 USD"},
]


class ScriptedCompletion:
    """Returns queued messages in order and records every request."""

    def __init__(self, *replies: CompletionMessage) -> None:
        self.replies = list(replies)
        self.calls: List[Dict[str, Any]] = []

    def complete(
        self,
        messages: Sequence[ChatTurn],
        functions: Optional[List[Dict[str, Any]]] = None,
    ) -> CompletionMessage:
        self.calls.append({"messages": list(messages), "functions": functions})
        return self.replies.pop(0)


def write_catalog(path: Path, rows: List[Dict[str, str]]) -> Path:
    with path.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        writer.writerows(rows)
    return path


@pytest.fixture
def catalog_rows():
    return [dict(row) for row in CATALOG_ROWS]


@pytest.fixture
def catalog_path(tmp_path: Path) -> Path:
    return write_catalog(tmp_path / "products_list.csv", CATALOG_ROWS)


@pytest.fixture
def scripted_completion():
    return ScriptedCompletion


@pytest.fixture
def text_reply():
    def _make(content: str) -> CompletionMessage:
        return CompletionMessage(content=content)

    return _make


@pytest.fixture
def function_reply():
    def _make(name: str, arguments: str) -> CompletionMessage:
        return CompletionMessage(function_call=FunctionCall(name=name, arguments=arguments))

    return _make

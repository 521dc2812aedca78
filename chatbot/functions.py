"""Functions the model may ask the service to run."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Tuple, Type, Union

from pydantic import BaseModel, ValidationError

from .completion import FunctionCall
from .errors import MalformedArguments, UnknownFunction
from .models import ConvertCurrenciesArgs, SearchProductsArgs

logger = logging.getLogger(__name__)


class FunctionName(str, Enum):
    SEARCH_PRODUCTS = "searchProducts"
    CONVERT_CURRENCIES = "convertCurrencies"


FunctionArgs = Union[SearchProductsArgs, ConvertCurrenciesArgs]

ARGUMENT_MODELS: Dict[FunctionName, Type[BaseModel]] = {
    FunctionName.SEARCH_PRODUCTS: SearchProductsArgs,
    FunctionName.CONVERT_CURRENCIES: ConvertCurrenciesArgs,
}

# OpenAI function calling schema
FUNCTION_DECLARATIONS: List[Dict[str, Any]] = [
    {
        "type": "function",
        "function": {
            "name": FunctionName.SEARCH_PRODUCTS.value,
            "description": "Retrieve a selection of 2 items from the product list related to the query",
            "parameters": {
                "type": "object",
                "properties": {
                    "query": {"type": "string"},
                },
                "required": ["query"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": FunctionName.CONVERT_CURRENCIES.value,
            "description": "Convert a price from one currency to another",
            "parameters": {
                "type": "object",
                "properties": {
                    "amount": {"type": "number"},
                    "fromCurrency": {"type": "string"},
                    "toCurrency": {"type": "string"},
                },
                "required": ["amount", "fromCurrency", "toCurrency"],
            },
        },
    },
]


def resolve_function(name: str) -> FunctionName:
    try:
        return FunctionName(name)
    except ValueError as exc:
        logger.error("Model selected unknown function %r", name)
        raise UnknownFunction(name) from exc


def parse_function_call(call: FunctionCall) -> Tuple[FunctionName, FunctionArgs]:
    """Resolve the function name and validate its JSON arguments."""
    name = resolve_function(call.name)
    model = ARGUMENT_MODELS[name]
    try:
        args = model.model_validate_json(call.arguments)
    except ValidationError as exc:
        logger.error("Malformed arguments for %s: %r", name.value, call.arguments)
        raise MalformedArguments(f"Invalid arguments for {name.value}: {exc}") from exc
    return name, args

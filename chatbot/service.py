"""Chat orchestration: plan with the model, run one function, narrate the result."""
from __future__ import annotations

import logging
from time import perf_counter

from .completion import CompletionClient
from .config import Settings
from .currency import CurrencyConverter
from .functions import FUNCTION_DECLARATIONS, FunctionArgs, FunctionName, parse_function_call
from .matcher import ProductSearch
from .prompts import answer_messages, planning_messages

logger = logging.getLogger(__name__)


class ChatService:
    """Answers one enquiry with at most two completion calls.

    The first call declares both functions and lets the model pick one (or
    none). A plain reply is returned as is. Otherwise the selected function is
    executed locally and a second call, without function declarations, turns
    its result into the final answer. Function results never trigger a third
    call.
    """

    def __init__(
        self,
        completion: CompletionClient,
        products: ProductSearch,
        converter: CurrencyConverter,
    ) -> None:
        self.completion = completion
        self.products = products
        self.converter = converter

    def _dispatch(self, name: FunctionName, args: FunctionArgs) -> str:
        if name is FunctionName.SEARCH_PRODUCTS:
            return self.products.search(args.query)
        return self.converter.convert(args.amount, args.fromCurrency, args.toCurrency)

    def handle(self, enquiry: str) -> str:
        t0 = perf_counter()
        plan = self.completion.complete(planning_messages(enquiry), functions=FUNCTION_DECLARATIONS)
        t1 = perf_counter()

        if plan.function_call is None:
            logger.info(
                "timing: total=%.2fms function=none q=%r",
                (t1 - t0) * 1000,
                enquiry,
            )
            return plan.content or ""

        name, args = parse_function_call(plan.function_call)
        logger.info("model selected %s args=%s", name.value, args.model_dump())
        result = self._dispatch(name, args)
        t2 = perf_counter()

        answer = self.completion.complete(answer_messages(enquiry, name.value, result))
        t3 = perf_counter()
        logger.info(
            "timing: total=%.2fms plan=%.2fms function=%s exec=%.2fms answer=%.2fms q=%r",
            (t3 - t0) * 1000,
            (t1 - t0) * 1000,
            name.value,
            (t2 - t1) * 1000,
            (t3 - t2) * 1000,
            enquiry,
        )
        return answer.content or ""


def build_chat_service(settings: Settings) -> ChatService:
    return ChatService(
        completion=CompletionClient.from_settings(settings),
        products=ProductSearch(settings.products_path, settings.search_result_size),
        converter=CurrencyConverter.from_settings(settings),
    )

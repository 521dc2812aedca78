"""Chat-completion client factory and adapter.

The rest of the code works against :class:`CompletionClient`, which hides the
OpenAI SDK response objects behind :class:`CompletionMessage`. Blocking calls
are wrapped via ``asyncio.to_thread`` by the caller where necessary.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import openai

from .config import Settings
from .errors import ConfigurationError, UpstreamError
from .models import ChatTurn

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FunctionCall:
    name: str
    arguments: str


@dataclass(frozen=True)
class CompletionMessage:
    content: Optional[str] = None
    function_call: Optional[FunctionCall] = None


def _extract_function_call(message: Any) -> Optional[FunctionCall]:
    tool_calls = getattr(message, "tool_calls", None) or []
    for tool_call in tool_calls:
        function = getattr(tool_call, "function", None)
        if function is not None:
            return FunctionCall(name=function.name, arguments=function.arguments or "")
    # Older models answer with the deprecated single function_call field.
    legacy = getattr(message, "function_call", None)
    if legacy is not None:
        return FunctionCall(name=legacy.name, arguments=legacy.arguments or "")
    return None


class CompletionClient:
    def __init__(self, client: openai.OpenAI, model: str) -> None:
        self.client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionClient":
        if not settings.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY environment variable is required")
        logger.info("Creating OpenAI client for model %s", settings.chat_model)
        client = openai.OpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url or None,
            timeout=settings.openai_timeout_seconds,
            max_retries=0,
        )
        return cls(client, settings.chat_model)

    def complete(
        self,
        messages: Sequence[ChatTurn],
        functions: Optional[List[Dict[str, Any]]] = None,
    ) -> CompletionMessage:
        """Send one completion request and return the first choice's message.

        ``functions`` are OpenAI ``tools`` declarations; when given, the model
        decides on its own whether to call one of them.
        """
        request: Dict[str, Any] = {
            "model": self.model,
            "messages": [turn.model_dump() for turn in messages],
        }
        if functions:
            request["tools"] = functions
            request["tool_choice"] = "auto"

        try:
            response = self.client.chat.completions.create(**request)
        except openai.OpenAIError as exc:
            logger.error("Error fetching from OpenAI: %s", exc)
            raise UpstreamError("Error fetching from OpenAI") from exc

        choices = getattr(response, "choices", None) or []
        if not choices:
            logger.error("OpenAI response contained no choices: %r", response)
            raise UpstreamError("OpenAI response contained no choices")

        message = choices[0].message
        result = CompletionMessage(
            content=getattr(message, "content", None),
            function_call=_extract_function_call(message),
        )
        logger.debug(
            "completion model=%s function=%s content_len=%s",
            self.model,
            result.function_call.name if result.function_call else None,
            len(result.content or ""),
        )
        return result

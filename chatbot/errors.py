"""Error taxonomy for the chat pipeline.

Every failure inside a request is raised as one of these. The HTTP layer
renders all of them as the same generic 500 envelope; the distinction only
matters for logs and tests.
"""
from __future__ import annotations


class ChatbotError(Exception):
    """Base class for failures raised while answering an enquiry."""


class UpstreamError(ChatbotError):
    """The completion endpoint, the rate service or the catalog read failed."""


class ConfigurationError(ChatbotError):
    """A required credential is missing."""


class MalformedArguments(ChatbotError):
    """Function-call arguments are not valid JSON or do not fit the schema."""


class UnknownFunction(ChatbotError):
    """The model selected a function that was never declared."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Model selected unknown function {name!r}")
        self.name = name

"""Pydantic models for request/response payloads and function arguments."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class ChatRequest(BaseModel):
    userEnquiry: str = Field(
        ...,
        description="User input for the chatbot",
        examples=["I am looking for a phone"],
    )


class ErrorResponse(BaseModel):
    statusCode: int
    message: str
    timestamp: str
    path: str


class ChatTurn(BaseModel):
    role: Role
    content: str


class SearchProductsArgs(BaseModel):
    model_config = ConfigDict(strict=True)

    query: str


class ConvertCurrenciesArgs(BaseModel):
    model_config = ConfigDict(strict=True)

    amount: float
    fromCurrency: str
    toCurrency: str

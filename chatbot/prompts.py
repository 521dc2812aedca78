"""Instructions sent to the model on each round trip."""
from __future__ import annotations

from typing import List

from .models import ChatTurn

FUNCTIONS_SUMMARY = "searchProducts(query), convertCurrencies(amount, fromCurrency, toCurrency)"

PLANNER_SYSTEM_PROMPT = (
    "You are a helpful assistant chatbot. You can call functions to get additional "
    "information. Always return results in JSON format."
)

ANSWER_SYSTEM_PROMPT = "You are a helpful assistant chatbot."


def planning_messages(enquiry: str) -> List[ChatTurn]:
    user_prompt = (
        f"A user asks: {enquiry}. You have the following functions available: {FUNCTIONS_SUMMARY}. "
        "Indicate which function you want to use to solve the user's enquiry. "
        "Always use the appropriate function and provide the result in JSON format."
    )
    return [
        ChatTurn(role="system", content=PLANNER_SYSTEM_PROMPT),
        ChatTurn(role="user", content=user_prompt),
    ]


def answer_messages(enquiry: str, function_name: str, result: str) -> List[ChatTurn]:
    user_prompt = (
        f"A user asks: {enquiry}. You have the following functions available: {FUNCTIONS_SUMMARY}. "
        f"You chose to execute the function {function_name} but do not tell me what function you used. "
        f"The result was: {result}. Formulate a final response."
    )
    return [
        ChatTurn(role="system", content=ANSWER_SYSTEM_PROMPT),
        ChatTurn(role="user", content=user_prompt),
    ]

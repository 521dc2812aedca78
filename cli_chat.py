"""Terminal client that reuses the in-process chat service."""
from __future__ import annotations

import argparse
from pathlib import Path
from time import perf_counter
from typing import Iterable

from chatbot.config import settings
from chatbot.errors import ChatbotError
from chatbot.service import ChatService, build_chat_service

GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"
SLOW_REPLY_MS = 5000


def perform_enquiry(service: ChatService, enquiry: str) -> tuple[str, float]:
    t0 = perf_counter()
    reply = service.handle(enquiry)
    return reply, (perf_counter() - t0) * 1000


def pretty_print_reply(enquiry: str, reply: str, elapsed_ms: float) -> None:
    color = GREEN if elapsed_ms < SLOW_REPLY_MS else RED
    print(f"Enquiry: {enquiry} | {color}{elapsed_ms:.1f} ms{RESET}")
    print(f"  {reply}")


def pretty_print_error(enquiry: str, exc: ChatbotError) -> None:
    print(f"Enquiry: {enquiry} | {RED}{type(exc).__name__}: {exc}{RESET}")


def ask(service: ChatService, enquiry: str) -> bool:
    try:
        reply, elapsed_ms = perform_enquiry(service, enquiry)
    except ChatbotError as exc:
        pretty_print_error(enquiry, exc)
        return False
    pretty_print_reply(enquiry, reply, elapsed_ms)
    return True


def interactive_shell(service: ChatService) -> None:
    print("Interactive product chatbot. Type 'exit' to quit.")
    while True:
        try:
            enquiry = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not enquiry:
            continue
        if enquiry.lower() in {"exit", "quit"}:
            return
        ask(service, enquiry)


def batch_mode(service: ChatService, file_path: Path) -> bool:
    ok = True
    with file_path.open("r", encoding="utf-8") as fh:
        for line in fh:
            enquiry = line.strip()
            if not enquiry:
                continue
            ok = ask(service, enquiry) and ok
    return ok


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="CLI client for the product chatbot")
    parser.add_argument("enquiry", nargs="?", help="Enquiry text. If omitted, starts REPL mode.")
    parser.add_argument("--batch", type=Path, help="File with enquiries to send line by line")
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        service = build_chat_service(settings)
    except ChatbotError as exc:
        print(f"{RED}{exc}{RESET}")
        return 2

    if args.batch:
        return 0 if batch_mode(service, args.batch) else 1
    if args.enquiry:
        return 0 if ask(service, args.enquiry) else 1
    interactive_shell(service)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

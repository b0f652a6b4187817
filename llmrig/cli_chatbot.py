"""A simple interactive command-line chat loop."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from .completion import Chat, Message

logger = logging.getLogger(__name__)

_RESPONSE_HEADER = "========================== Response ============================"
_SEPARATOR = "================================================================"


async def cli_chatbot(
    chatbot: Chat, stdin: TextIO | None = None, stdout: TextIO | None = None
) -> None:
    """Run a read-eval-print chat loop until the user types ``exit`` or input ends.

    Raises :class:`~llmrig.completion.PromptError` if the chatbot fails.
    """
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    chat_log: list[Message] = []

    print("Welcome to the chatbot! Type 'exit' to quit.", file=stdout)
    while True:
        stdout.write("> ")
        stdout.flush()

        try:
            line = stdin.readline()
        except (OSError, UnicodeDecodeError) as exc:
            print(f"Error reading input: {exc}", file=stdout)
            continue
        if not line:
            break

        text = line.strip()
        if text == "exit":
            break
        logger.info("Prompt:\n%s\n", text)

        response = await chatbot.chat(text, list(chat_log))
        chat_log.append(Message(role="user", content=text))
        chat_log.append(Message(role="assistant", content=response))

        print(_RESPONSE_HEADER, file=stdout)
        print(response, file=stdout)
        print(_SEPARATOR + "\n\n", file=stdout)

        logger.info("Response:\n%s\n", response)
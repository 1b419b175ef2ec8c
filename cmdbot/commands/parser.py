from __future__ import annotations

import re
from dataclasses import dataclass

# A double-quoted run (quotes kept) or any other non-whitespace run.
_TOKEN_RE = re.compile(r'".+?"|\S+')
_WHITESPACE_RE = re.compile(r"\s")


@dataclass(frozen=True)
class ParsedRequest:
    raw_text: str
    command: str
    raw_parameters: str
    parameters: tuple[str, ...] = ()


def _clean_token(token: str) -> str:
    # Only tokens with inner whitespace came from a quoted run; a quoted
    # single word such as "x" keeps its quotes.
    if _WHITESPACE_RE.search(token):
        token = token[1:-1]
    return token.strip()


def split_parameters(parameter_text: str) -> tuple[str, ...]:
    """Split a parameter string into tokens (``Hello "Great World"`` -> 2 tokens)."""
    return tuple(_clean_token(m.group(0)) for m in _TOKEN_RE.finditer(parameter_text))


def parse_command(text: str | None, marker: str = "/") -> ParsedRequest:
    """Tokenize a message into command name, raw parameters and parameter tokens.

    The command marker is optional and stripped once. A ``@botname`` suffix on
    the command is dropped. Empty or missing text yields an empty command.
    """
    if not text:
        return ParsedRequest(raw_text=text or "", command="", raw_parameters="")

    body = text[len(marker):] if marker and text.startswith(marker) else text

    match = _WHITESPACE_RE.search(body)
    command = body[: match.start()] if match else body
    raw_parameters = body[len(command):].strip()

    command = command.split("@", 1)[0]

    return ParsedRequest(
        raw_text=text,
        command=command,
        raw_parameters=raw_parameters,
        parameters=split_parameters(raw_parameters),
    )

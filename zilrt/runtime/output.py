"""
ZIL Runtime Output

TELL renders an ordered token stream to an output sink in a single left to
right pass with one token of lookahead.

Token kinds:
- Directive.NEWLINE (CR): line break
- Directive.DESC (D): next token is an object id; writes its description
- Directive.NUMBER (N): next token written in decimal
- Directive.CHAR (C): next token written as one character
- str: written verbatim
- anything else: str()

Key classes:
- OutputSink: write(text) protocol owned by the host
- BufferSink, EchoSink: in-memory and terminal sinks
- TokenRenderer: the token interpreter
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Sequence

import click

from zilrt.runtime.signals import MalformedOutputStream


class Directive(Enum):
    NEWLINE = "CR"
    DESC = "D"
    NUMBER = "N"
    CHAR = "C"

    def __str__(self) -> str:
        return self.value


NEWLINE = Directive.NEWLINE
CR = Directive.NEWLINE
DESC = Directive.DESC
NUMBER = Directive.NUMBER
CHAR = Directive.CHAR


class OutputSink(Protocol):
    def write(self, text: str) -> None: ...


class InputSource(Protocol):
    def read_line(self, prompt: str) -> Optional[str]: ...


class BufferSink:
    """Collects output in memory."""

    def __init__(self):
        self.parts: List[str] = []

    def write(self, text: str) -> None:
        self.parts.append(text)

    def getvalue(self) -> str:
        return "".join(self.parts)

    def clear(self) -> None:
        self.parts.clear()


class EchoSink:
    """Writes through click.echo without adding newlines."""

    def __init__(self, err: bool = False):
        self.err = err

    def write(self, text: str) -> None:
        click.echo(text, nl=False, err=self.err)


class ScriptedInput:
    """Feeds a fixed list of lines, then reports end of input."""

    def __init__(self, lines: Sequence[str], echo: Optional[OutputSink] = None):
        self._lines = list(lines)
        self._pos = 0
        self.echo = echo

    def read_line(self, prompt: str) -> Optional[str]:
        if self._pos >= len(self._lines):
            return None
        line = self._lines[self._pos]
        self._pos += 1
        if self.echo is not None:
            self.echo.write(f"{prompt} {line}\n")
        return line


class ConsoleInput:
    """Blocking terminal input through click.prompt."""

    def read_line(self, prompt: str) -> Optional[str]:
        try:
            return click.prompt(prompt, default="", show_default=False, prompt_suffix=" ")
        except click.Abort:
            return None


class TokenRenderer:
    """
    Interprets TELL token streams.

    describe maps an object id to its printable description.
    """

    def __init__(self, describe: Callable[[Any], str]):
        self.describe = describe

    def render(self, tokens: Sequence[Any], sink: OutputSink) -> None:
        """
        Render tokens to sink.

        Everything before a malformed directive is written before
        MalformedOutputStream is raised.
        """
        i = 0
        n = len(tokens)
        while i < n:
            token = tokens[i]
            if isinstance(token, Directive):
                if token is Directive.NEWLINE:
                    sink.write("\n")
                    i += 1
                    continue
                if i + 1 >= n:
                    raise MalformedOutputStream(token, i)
                sink.write(self._render_directive(token, tokens[i + 1], i))
                i += 2
                continue
            if isinstance(token, str):
                sink.write(token)
            else:
                sink.write(str(token))
            i += 1

    def _render_directive(self, directive: Directive, operand: Any, position: int) -> str:
        if directive is Directive.DESC:
            return self.describe(operand)
        if directive is Directive.NUMBER:
            if isinstance(operand, bool):
                return str(int(operand))
            if isinstance(operand, (int, float)):
                return str(operand)
            raise MalformedOutputStream(directive, position, f"expects a number, got {operand!r}")
        if isinstance(operand, int):
            try:
                return chr(operand)
            except (ValueError, OverflowError):
                raise MalformedOutputStream(
                    directive, position, f"has no character for code {operand}") from None
        text = str(operand)
        return text[:1]

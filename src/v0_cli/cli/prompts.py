"""Interactive prompts for the v0 CLI."""

from __future__ import annotations

import sys
from typing import Protocol, Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt

Choice = tuple[str, str]


class PromptUnavailableError(RuntimeError):
    """Raised when no interactive terminal can answer a prompt."""


class Prompter(Protocol):
    def text(self, message: str, *, default: str | None = None) -> str: ...

    def secret(self, message: str) -> str: ...

    def confirm(self, message: str, *, default: bool = False) -> bool: ...

    def select(
        self, message: str, choices: Sequence[Choice], *, default: str | None = None
    ) -> str: ...

    def multi_select(self, message: str, choices: Sequence[Choice]) -> list[str]: ...


class TerminalPrompter:
    """Prompter backed by rich prompts on the controlling terminal."""

    def __init__(self, console: Console | None = None, *, stdin=None) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._console = console or Console(stderr=True, highlight=False)

    def _require_tty(self) -> None:
        isatty = getattr(self._stdin, "isatty", None)
        if not callable(isatty) or not isatty():
            raise PromptUnavailableError("interactive input is not available (stdin is not a TTY)")

    def _ask(self, message: str, **kwargs) -> str:
        self._require_tty()
        try:
            return Prompt.ask(message, console=self._console, **kwargs)
        except (EOFError, KeyboardInterrupt) as exc:
            raise PromptUnavailableError("prompt aborted") from exc

    def text(self, message: str, *, default: str | None = None) -> str:
        if default is None:
            return self._ask(message)
        return self._ask(message, default=default, show_default=bool(default))

    def secret(self, message: str) -> str:
        return self._ask(message, password=True)

    def confirm(self, message: str, *, default: bool = False) -> bool:
        self._require_tty()
        try:
            return Confirm.ask(message, console=self._console, default=default)
        except (EOFError, KeyboardInterrupt) as exc:
            raise PromptUnavailableError("prompt aborted") from exc

    def _print_choices(self, message: str, choices: Sequence[Choice]) -> None:
        self._console.print(message, markup=False)
        for index, (label, _) in enumerate(choices, start=1):
            self._console.print(f"  {index}. {label}", markup=False)

    def select(
        self, message: str, choices: Sequence[Choice], *, default: str | None = None
    ) -> str:
        if not choices:
            raise PromptUnavailableError(f"nothing to choose from: {message}")
        self._print_choices(message, choices)
        values = [value for _, value in choices]
        default_index = str(values.index(default) + 1) if default in values else None
        numbers = [str(i) for i in range(1, len(choices) + 1)]
        if default_index is None:
            answer = self._ask("Choice", choices=numbers, show_choices=False)
        else:
            answer = self._ask("Choice", choices=numbers, show_choices=False, default=default_index)
        return values[int(answer) - 1]

    def multi_select(self, message: str, choices: Sequence[Choice]) -> list[str]:
        self._print_choices(message, choices)
        values = [value for _, value in choices]
        while True:
            raw = self._ask("Choices (comma-separated numbers)")
            picked: list[str] = []
            valid = True
            for part in raw.split(","):
                part = part.strip()
                if not part:
                    continue
                if not part.isdigit() or not 1 <= int(part) <= len(values):
                    valid = False
                    break
                value = values[int(part) - 1]
                if value not in picked:
                    picked.append(value)
            if valid and picked:
                return picked
            self._console.print("Select at least one valid option", style="yellow", markup=False)

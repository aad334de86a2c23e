from __future__ import annotations

import io

import pytest
from rich.console import Console

from v0_cli.cli.prompts import PromptUnavailableError, TerminalPrompter


class _TTY(io.StringIO):
    def isatty(self) -> bool:
        return True


def _prompter() -> TerminalPrompter:
    return TerminalPrompter(Console(file=io.StringIO()), stdin=_TTY())


def test_non_tty_stdin_raises_prompt_unavailable() -> None:
    prompter = TerminalPrompter(Console(file=io.StringIO()), stdin=io.StringIO())

    with pytest.raises(PromptUnavailableError):
        prompter.text("Name")
    with pytest.raises(PromptUnavailableError):
        prompter.secret("Key")
    with pytest.raises(PromptUnavailableError):
        prompter.confirm("Sure?")


def test_select_maps_number_to_value(monkeypatch) -> None:
    asked: list[dict] = []

    def fake_ask(message, **kwargs):  # noqa: ANN001, ANN003
        asked.append(kwargs)
        return "2"

    monkeypatch.setattr("v0_cli.cli.prompts.Prompt.ask", fake_ask)

    value = _prompter().select(
        "Pick", [("Table", "table"), ("JSON", "json")], default="table"
    )

    assert value == "json"
    assert asked[0]["choices"] == ["1", "2"]
    assert asked[0]["default"] == "1"


def test_select_without_choices_raises() -> None:
    with pytest.raises(PromptUnavailableError):
        _prompter().select("Pick", [])


def test_multi_select_reasks_until_valid(monkeypatch) -> None:
    answers = iter(["9", "", "3, 1, 3"])
    monkeypatch.setattr("v0_cli.cli.prompts.Prompt.ask", lambda message, **kwargs: next(answers))

    picked = _prompter().multi_select("Events", [("a", "a"), ("b", "b"), ("c", "c")])

    assert picked == ["c", "a"]


def test_eof_becomes_prompt_unavailable(monkeypatch) -> None:
    def fake_ask(message, **kwargs):  # noqa: ANN001, ANN003
        raise EOFError

    monkeypatch.setattr("v0_cli.cli.prompts.Prompt.ask", fake_ask)

    with pytest.raises(PromptUnavailableError):
        _prompter().text("Name")

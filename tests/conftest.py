from __future__ import annotations

import logging
from typing import Sequence

import pytest


@pytest.fixture(autouse=True)
def isolated_cli_env(tmp_path, monkeypatch):
    for name in ("V0_API_KEY", "V0_BASE_URL", "FORCE_COLOR", "TTY_COMPATIBLE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setattr(
        "v0_cli.cli.config.DEFAULT_CONFIG_PATH",
        tmp_path / "home" / ".v0_cli" / "config.toml",
    )
    yield
    package_logger = logging.getLogger("v0_cli")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


class ScriptedPrompter:
    """Answers prompts from a fixed script and records what was asked."""

    def __init__(
        self,
        *,
        texts: Sequence[str] = (),
        secrets: Sequence[str] = (),
        confirms: Sequence[bool] = (),
        selects: Sequence[str] = (),
        multi: Sequence[list[str]] = (),
    ) -> None:
        self.texts = list(texts)
        self.secrets = list(secrets)
        self.confirms = list(confirms)
        self.selects = list(selects)
        self.multi = list(multi)
        self.asked: list[str] = []
        self.choices: list[list[tuple[str, str]]] = []

    def text(self, message: str, *, default: str | None = None) -> str:
        self.asked.append(message)
        return self.texts.pop(0)

    def secret(self, message: str) -> str:
        self.asked.append(message)
        return self.secrets.pop(0)

    def confirm(self, message: str, *, default: bool = False) -> bool:
        self.asked.append(message)
        return self.confirms.pop(0)

    def select(self, message: str, choices, *, default: str | None = None) -> str:
        self.asked.append(message)
        self.choices.append(list(choices))
        return self.selects.pop(0)

    def multi_select(self, message: str, choices) -> list[str]:
        self.asked.append(message)
        self.choices.append(list(choices))
        return self.multi.pop(0)


@pytest.fixture
def scripted_prompter():
    return ScriptedPrompter

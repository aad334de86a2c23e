"""Persisted settings for the v0 CLI."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, TextIO

import tomli_w

from v0_cli.cli.output import info, success, warning
from v0_cli.cli.prompts import Prompter, PromptUnavailableError

DEFAULT_CONFIG_PATH = Path.home() / ".v0_cli" / "config.toml"
API_KEY_ENV_VAR = "V0_API_KEY"
BASE_URL_ENV_VAR = "V0_BASE_URL"
API_KEY_URL = "https://v0.dev/chat/settings/keys"

OutputFormat = Literal["json", "table", "yaml"]
OUTPUT_FORMATS: tuple[str, ...] = ("json", "table", "yaml")
DEFAULT_OUTPUT_FORMAT: OutputFormat = "table"
CONFIG_KEYS: tuple[str, ...] = ("api_key", "default_project", "base_url", "output_format")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Configuration:
    api_key: str = ""
    default_project: str = ""
    base_url: str = ""
    output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT


class ConfigError(ValueError):
    """Raised when a setting cannot be stored or resolved."""


def _load_toml(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")

    try:  # Python 3.11+
        import tomllib  # type: ignore[attr-defined]
        try:
            return tomllib.loads(raw)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    except ModuleNotFoundError:
        try:
            import tomli
        except ModuleNotFoundError as exc:
            raise ConfigError("toml parser unavailable; install tomli for Python < 3.11") from exc
        try:
            return tomli.loads(raw)
        except tomli.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc


def _as_str(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)


def _present(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def normalize_output_format(value: Any) -> OutputFormat:
    candidate = _as_str(value).strip().lower()
    if candidate in OUTPUT_FORMATS:
        return candidate  # type: ignore[return-value]
    return DEFAULT_OUTPUT_FORMAT


def _chmod_owner_only(path: Path) -> None:
    if os.name != "posix":
        return
    path.chmod(0o600)


class ConfigStore:
    """Settings stored as flat keys in a single TOML file."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path else DEFAULT_CONFIG_PATH

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            parsed = _load_toml(self.path)
        except (ConfigError, OSError) as exc:
            logger.warning("ignoring unreadable config %s: %s", self.path, exc)
            return {}
        return parsed if isinstance(parsed, dict) else {}

    def get_config(self) -> Configuration:
        source = self._read()
        return Configuration(
            api_key=_as_str(source.get("api_key")),
            default_project=_as_str(source.get("default_project")),
            base_url=_as_str(source.get("base_url")),
            output_format=normalize_output_format(source.get("output_format")),
        )

    def set_config(self, key: str, value: str | None) -> Path:
        if key not in CONFIG_KEYS:
            raise ConfigError(
                f"unknown config key: {key} (expected one of: {', '.join(CONFIG_KEYS)})"
            )
        if key == "output_format" and value is not None and value not in OUTPUT_FORMATS:
            raise ConfigError("Invalid output format. Must be one of: json, table, yaml")

        source = {k: v for k, v in self._read().items() if k in CONFIG_KEYS}
        if value is None:
            source.pop(key, None)
        else:
            source[key] = value

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(tomli_w.dumps(source), encoding="utf-8")
            _chmod_owner_only(self.path)
        except OSError as exc:
            raise ConfigError(f"failed to write config file: {self.path}: {exc}") from exc
        return self.path

    def clear_config(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            raise ConfigError(f"failed to remove config file: {self.path}: {exc}") from exc

    def resolve_base_url(self, preferred: str | None = None) -> str | None:
        return (
            _present(preferred)
            or _present(os.getenv(BASE_URL_ENV_VAR))
            or _present(self.get_config().base_url)
        )

    def ensure_api_key(
        self,
        preferred: str | None = None,
        *,
        prompter: Prompter,
        stdout: TextIO | None = None,
    ) -> str:
        resolved = (
            _present(preferred)
            or _present(os.getenv(API_KEY_ENV_VAR))
            or _present(self.get_config().api_key)
        )
        if resolved:
            return resolved

        warning("No API key found. Please provide your v0 API key.", stdout=stdout)
        info(f"You can get your API key from: {API_KEY_URL}", stdout=stdout)
        api_key = None
        while not api_key:
            try:
                api_key = _present(prompter.secret("Enter your v0 API key"))
            except PromptUnavailableError as exc:
                raise ConfigError(
                    "API key is required; pass --api-key, set V0_API_KEY "
                    "or run `v0 config set-api-key`"
                ) from exc
            if not api_key:
                warning("API key is required", stdout=stdout)

        self.set_config("api_key", api_key)
        success("API key saved successfully!", stdout=stdout)
        return api_key


def mask_secret(value: str) -> str:
    if not value:
        return "Not set"
    return "***" + value[-4:]


def describe(config: Configuration) -> dict[str, str]:
    return {
        "API Key": mask_secret(config.api_key),
        "Default Project": config.default_project or "Not set",
        "Base URL": config.base_url or "Not set",
        "Output Format": config.output_format,
    }

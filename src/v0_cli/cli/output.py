"""Rendering of API results as table, JSON or YAML text.

Every command funnels its result through :func:`format_output`. The renderer
accepts any value the platform returns: a record, a list of records (keys may
differ between rows), a list of scalars or a bare scalar. It never raises for
such input; YAML failures fall back to the JSON rendering and unexpected
types are stringified on a best-effort basis.

The four message helpers (:func:`success`, :func:`error`, :func:`info`,
:func:`warning`) print a glyph and a message. Only :func:`error` writes to
stderr.
"""

from __future__ import annotations

import json
import logging
import math
import re
import sys
import traceback
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, TextIO, Union

import yaml
from rich.console import Console
from rich.text import Text

MAX_COLUMN_WIDTH = 40
MAX_LIST_ITEM_WIDTH = 120
ELLIPSIS = "…"
NO_ITEMS = "No items found"
COLUMN_SEPARATOR = " | "

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

_SENSITIVE_FIELDS = (
    "api_key",
    "apikey",
    "api-key",
    "authorization",
    "password",
    "secret",
    "token",
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scalar:
    value: Any


@dataclass(frozen=True)
class RecordValue:
    fields: Mapping


@dataclass(frozen=True)
class ListOfScalars:
    items: tuple


@dataclass(frozen=True)
class ListOfRecords:
    rows: tuple


Renderable = Union[Scalar, RecordValue, ListOfScalars, ListOfRecords]


def classify(data: Any) -> Renderable:
    if isinstance(data, Mapping):
        return RecordValue(data)
    if isinstance(data, (list, tuple)):
        items = tuple(data)
        if items and all(isinstance(item, Mapping) for item in items):
            return ListOfRecords(items)
        return ListOfScalars(items)
    return Scalar(data)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    return str(value)


def _finite(value: Any) -> Any:
    # NaN and Infinity become null, as JSON has no literal for them.
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Mapping):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(item) for item in value]
    return value


def stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        try:
            return json.dumps(
                _finite(value),
                ensure_ascii=False,
                allow_nan=False,
                separators=(",", ":"),
                default=_json_default,
            )
        except (TypeError, ValueError, RecursionError):
            pass
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)


def truncate(value: str, limit: int = MAX_COLUMN_WIDTH) -> str:
    """Flatten control characters to spaces, then cut to ``limit`` characters."""
    value = _CONTROL_CHARS.sub(" ", value)
    if len(value) <= limit:
        return value
    return value[: limit - 1] + ELLIPSIS


def to_json(data: Any) -> str:
    try:
        return json.dumps(
            _finite(data),
            indent=2,
            ensure_ascii=False,
            allow_nan=False,
            default=_json_default,
        )
    except (TypeError, ValueError, RecursionError):
        return stringify(data)


def to_yaml(data: Any) -> str:
    try:
        rendered = yaml.safe_dump(
            data,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    except Exception as exc:
        logger.debug("YAML serialization failed, falling back to JSON: %s", exc)
        return to_json(data)
    rendered = rendered.rstrip("\n")
    # Bare scalars come back with an explicit document-end marker.
    if rendered.endswith("\n..."):
        rendered = rendered[: -len("\n...")]
    return rendered


def _table_lines(renderable: Renderable) -> list[tuple[str, str | None]]:
    if isinstance(renderable, ListOfScalars):
        if not renderable.items:
            return [(NO_ITEMS, "bright_black")]
        return [
            (f"{index}. {truncate(stringify(item), MAX_LIST_ITEM_WIDTH)}", None)
            for index, item in enumerate(renderable.items, start=1)
        ]

    if isinstance(renderable, ListOfRecords):
        headers: dict[str, None] = {}
        for row in renderable.rows:
            for key in row:
                headers.setdefault(str(key), None)
        columns = list(headers)
        cells = [
            [truncate(stringify(_cell(row, column))) for column in columns]
            for row in renderable.rows
        ]
        widths = [
            min(
                MAX_COLUMN_WIDTH,
                max([len(column)] + [len(row_cells[i]) for row_cells in cells]),
            )
            for i, column in enumerate(columns)
        ]
        header_line = COLUMN_SEPARATOR.join(
            column.ljust(widths[i]) for i, column in enumerate(columns)
        )
        lines: list[tuple[str, str | None]] = [
            (header_line, "blue"),
            ("-" * len(header_line), "bright_black"),
        ]
        for row_cells in cells:
            lines.append(
                (
                    COLUMN_SEPARATOR.join(
                        cell.ljust(widths[i]) for i, cell in enumerate(row_cells)
                    ),
                    None,
                )
            )
        return lines

    if isinstance(renderable, RecordValue):
        return [(f"{key}: {stringify(value)}", None) for key, value in renderable.fields.items()]

    return [(stringify(renderable.value), None)]


def _cell(row: Mapping, column: str) -> Any:
    if column in row:
        return row[column]
    for key, value in row.items():
        if str(key) == column:
            return value
    return None


def render_table(data: Any) -> str:
    return "\n".join(text for text, _ in _table_lines(classify(data)))


def render(data: Any, fmt: str = "table") -> str:
    if fmt == "json":
        return to_json(data)
    if fmt == "yaml":
        return to_yaml(data)
    return render_table(data)


def _console(stream: TextIO) -> Console:
    return Console(
        file=stream,
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )


def _emit(stream: TextIO, lines: Iterable[tuple[str, str | None]]) -> None:
    console = _console(stream)
    for text, style in lines:
        console.print(Text(text, style=style or ""))


def format_output(data: Any, fmt: str = "table", *, stdout: TextIO | None = None) -> None:
    stream = stdout or sys.stdout
    if fmt in ("json", "yaml"):
        _emit(stream, [(render(data, fmt), None)])
        return
    renderable = classify(data)
    if isinstance(renderable, RecordValue):
        console = _console(stream)
        for key, value in renderable.fields.items():
            console.print(Text.assemble((str(key), "blue"), f": {stringify(value)}"))
        return
    _emit(stream, _table_lines(renderable))


def _message(stream: TextIO, glyph: str, style: str, message: str) -> None:
    _console(stream).print(Text.assemble((glyph, style), " ", str(message)))


def success(message: str, *, stdout: TextIO | None = None) -> None:
    _message(stdout or sys.stdout, "✓", "green", message)


def error(message: str, *, stderr: TextIO | None = None) -> None:
    _message(stderr or sys.stderr, "✗", "red", message)


def info(message: str, *, stdout: TextIO | None = None) -> None:
    _message(stdout or sys.stdout, "ℹ", "blue", message)


def warning(message: str, *, stdout: TextIO | None = None) -> None:
    _message(stdout or sys.stdout, "⚠", "yellow", message)


def note(message: str, *, stream: TextIO | None = None) -> None:
    _emit(stream or sys.stdout, [(message, "bright_black")])


def detail_view(
    title: str,
    rows: Iterable[tuple[str, Any]],
    *,
    stdout: TextIO | None = None,
    title_style: str = "blue",
) -> None:
    lines: list[tuple[str, str | None]] = [(title, title_style)]
    lines.extend((f"{label}: {stringify(value)}", None) for label, value in rows)
    _emit(stdout or sys.stdout, lines)


def format_chat(chat: Mapping, *, stdout: TextIO | None = None) -> None:
    rows = [
        ("ID", chat.get("id")),
        ("Name", chat.get("name") or "Untitled"),
        ("Privacy", chat.get("privacy")),
        ("Created", chat.get("createdAt")),
        ("URL", chat.get("webUrl")),
    ]
    latest = chat.get("latestVersion")
    if isinstance(latest, Mapping) and latest.get("demoUrl"):
        rows.append(("Demo", latest.get("demoUrl")))
    detail_view("Chat Details:", rows, stdout=stdout)


def format_project(project: Mapping, *, stdout: TextIO | None = None) -> None:
    rows = [
        ("ID", project.get("id")),
        ("Name", project.get("name")),
        ("Description", project.get("description") or "No description"),
        ("Created", project.get("createdAt")),
        ("URL", project.get("webUrl")),
    ]
    if project.get("vercelProjectId"):
        rows.append(("Vercel Project ID", project.get("vercelProjectId")))
    detail_view("Project Details:", rows, stdout=stdout)


def format_user(user: Mapping, *, stdout: TextIO | None = None) -> None:
    detail_view(
        "User Details:",
        [
            ("ID", user.get("id")),
            ("Name", user.get("name") or "No name"),
            ("Email", user.get("email")),
            ("Avatar", user.get("avatar")),
        ],
        stdout=stdout,
    )


def format_deployment(deployment: Mapping, *, stdout: TextIO | None = None) -> None:
    detail_view(
        "Deployment Details:",
        [
            ("ID", deployment.get("id")),
            ("Project ID", deployment.get("projectId")),
            ("Chat ID", deployment.get("chatId")),
            ("Version ID", deployment.get("versionId")),
            ("Inspector URL", deployment.get("inspectorUrl")),
            ("Web URL", deployment.get("webUrl")),
        ],
        stdout=stdout,
    )


def sanitize_error_text(value: str) -> str:
    redacted = re.sub(r"(?i)(bearer\s+)([^\s,\"']+)", r"\1[REDACTED]", value)
    for field in _SENSITIVE_FIELDS:
        redacted = re.sub(
            rf"(?i)({re.escape(field)}[\"']?\s*[=:]\s*[\"']?)(?!\[REDACTED\])([^,\s\"'&]+)",
            r"\1[REDACTED]",
            redacted,
        )
    redacted = re.sub(
        r"(?i)([?&](?:secret|token|api_key|apikey)=)([^&\s]+)",
        r"\1[REDACTED]",
        redacted,
    )
    return redacted


def print_api_error(
    exc: BaseException | None,
    *,
    verbose: bool = False,
    stderr: TextIO | None = None,
) -> None:
    stream = stderr or sys.stderr
    if exc is None:
        if verbose:
            note("[no error object]", stream=stream)
        return

    status = getattr(exc, "status_code", None)
    code = getattr(exc, "error_code", None)
    detail = getattr(exc, "detail", None)
    message = detail if isinstance(detail, str) and detail else str(exc) or "Unknown error"

    parts = []
    if status:
        parts.append(f"status={status}")
    if code:
        parts.append(f"code={code}")
    parts.append(f"message={message}")
    note(sanitize_error_text("Details: " + " | ".join(parts)), stream=stream)

    if not verbose:
        return
    body = getattr(exc, "body", None)
    if body:
        rendered = body if isinstance(body, str) else to_json(body)
        note(sanitize_error_text(f"Body: {rendered}"), stream=stream)
    trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()
    note(sanitize_error_text(trace), stream=stream)

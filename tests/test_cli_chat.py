from __future__ import annotations

import io
import json

from v0_cli.cli.config import ConfigStore
from v0_cli.cli.main import main


def _cells(line: str) -> list[str]:
    return [cell.strip() for cell in line.split(" | ")]


def test_chat_create_sends_payload_and_prints_json(monkeypatch) -> None:
    out = io.StringIO()
    err = io.StringIO()
    captured: dict[str, object] = {}

    class _Client:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            captured["api_key"] = api_key
            captured["base_url"] = base_url

        def create_chat(self, payload: dict) -> dict:
            captured["payload"] = payload
            return {"id": "chat-1", "webUrl": "https://v0.dev/chat/chat-1"}

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)

    rc = main(
        ["-k", "v0_key", "chat", "create", "Build a todo app", "-o", "json"],
        stdout=out,
        stderr=err,
    )

    assert rc == 0
    assert json.loads(out.getvalue()) == {"id": "chat-1", "webUrl": "https://v0.dev/chat/chat-1"}
    assert captured["api_key"] == "v0_key"
    assert captured["base_url"] is None
    assert captured["payload"] == {
        "message": "Build a todo app",
        "chatPrivacy": "private",
        "modelConfiguration": {"modelId": "v0-1.5-md"},
    }


def test_chat_create_table_uses_default_project_and_prompts_for_message(
    tmp_path, monkeypatch, scripted_prompter
) -> None:
    config_path = tmp_path / "config.toml"
    store = ConfigStore(config_path)
    store.set_config("api_key", "stored-key")
    store.set_config("default_project", "proj-default")
    out = io.StringIO()
    captured: dict[str, object] = {}

    class _Client:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            captured["api_key"] = api_key

        def create_chat(self, payload: dict) -> dict:
            captured["payload"] = payload
            return {
                "id": "chat-2",
                "name": None,
                "privacy": "private",
                "createdAt": "2024-01-01T00:00:00Z",
                "webUrl": "https://v0.dev/chat/chat-2",
                "latestVersion": {"demoUrl": "https://demo.example"},
            }

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)
    prompter = scripted_prompter(texts=["", "hello there"])

    rc = main(
        ["--config", str(config_path), "chat", "create", "-a", "https://a.png", "https://b.png"],
        stdout=out,
        stderr=io.StringIO(),
        prompter=prompter,
    )

    assert rc == 0
    assert captured["api_key"] == "stored-key"
    assert captured["payload"]["message"] == "hello there"
    assert captured["payload"]["projectId"] == "proj-default"
    assert captured["payload"]["attachments"] == [{"url": "https://a.png"}, {"url": "https://b.png"}]
    lines = out.getvalue().splitlines()
    assert "⚠ Message is required" in lines
    assert "Chat Details:" in lines
    assert "Name: Untitled" in lines
    assert "Demo: https://demo.example" in lines
    assert lines[-1] == "✓ Chat URL: https://v0.dev/chat/chat-2"


def test_chat_list_filters_and_renders_table(monkeypatch) -> None:
    out = io.StringIO()
    captured: dict[str, object] = {}

    class _Client:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

        def find_chats(self, *, limit=None, is_favorite=None) -> dict:  # noqa: ANN001
            captured["limit"] = limit
            captured["is_favorite"] = is_favorite
            return {
                "data": [
                    {"id": "c1", "name": "Landing page", "privacy": "public", "projectId": "p1"},
                    {"id": "c2", "name": "Dashboard", "privacy": "private", "projectId": "p1"},
                    {"id": "c3", "name": "Landing v2", "privacy": "public", "projectId": "p2"},
                ],
                "pagination": {"nextCursor": "cur-2"},
            }

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)

    rc = main(
        ["-k", "k", "chat", "list", "-l", "5", "-f", "-P", "p1", "-n", "LANDING"],
        stdout=out,
        stderr=io.StringIO(),
    )

    assert rc == 0
    assert captured == {"limit": 5, "is_favorite": True}
    lines = [line for line in out.getvalue().splitlines() if line]
    assert _cells(lines[0]) == ["id", "name", "privacy", "created", "url"]
    assert _cells(lines[2])[:3] == ["c1", "Landing page", "public"]
    assert len(lines) == 4
    assert lines[3] == "Next page cursor: cur-2"


def test_chat_list_empty_table_prints_info(monkeypatch) -> None:
    out = io.StringIO()

    class _Client:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

        def find_chats(self, *, limit=None, is_favorite=None) -> dict:  # noqa: ANN001
            return {"data": []}

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)

    rc = main(["-k", "k", "chat", "list"], stdout=out, stderr=io.StringIO())
    assert rc == 0
    assert out.getvalue().strip() == "ℹ No chats found"

    out = io.StringIO()
    rc = main(["-k", "k", "chat", "list", "-o", "json"], stdout=out, stderr=io.StringIO())
    assert rc == 0
    assert json.loads(out.getvalue()) == []


def test_chat_update_requires_a_field(monkeypatch) -> None:
    err = io.StringIO()

    class _Client:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)

    rc = main(["-k", "k", "chat", "update", "c1"], stdout=io.StringIO(), stderr=err)

    assert rc == 1
    assert "No update fields provided" in err.getvalue()


def test_chat_init_reads_local_files(tmp_path, monkeypatch) -> None:
    source = tmp_path / "page.tsx"
    source.write_text("export default function Page() {}\n", encoding="utf-8")
    captured: dict[str, object] = {}

    class _Client:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

        def init_chat(self, payload: dict) -> dict:
            captured["payload"] = payload
            return {"id": "chat-init"}

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)

    rc = main(
        ["-k", "k", "chat", "init", "--file", str(source), "-n", "Imported", "-o", "json"],
        stdout=io.StringIO(),
        stderr=io.StringIO(),
    )

    assert rc == 0
    assert captured["payload"] == {
        "type": "files",
        "name": "Imported",
        "lockAllFiles": False,
        "files": [{"name": "page.tsx", "content": "export default function Page() {}\n"}],
    }


def test_chat_init_without_source_is_validation_error(monkeypatch) -> None:
    err = io.StringIO()

    class _Client:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)

    rc = main(["-k", "k", "chat", "init"], stdout=io.StringIO(), stderr=err)

    assert rc == 1
    assert "Provide at least one source" in err.getvalue()


def test_chat_init_missing_file_is_validation_error(tmp_path, monkeypatch) -> None:
    err = io.StringIO()

    class _Client:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)

    rc = main(
        ["-k", "k", "chat", "init", "--file", str(tmp_path / "nope.txt")],
        stdout=io.StringIO(),
        stderr=err,
    )

    assert rc == 1
    assert "Failed to initialize chat" in err.getvalue()


def test_chat_delete_cancelled_does_not_call_api(monkeypatch, scripted_prompter) -> None:
    out = io.StringIO()
    deleted: list[str] = []

    class _Client:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

        def delete_chat(self, chat_id: str) -> dict:
            deleted.append(chat_id)
            return {}

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)

    rc = main(
        ["-k", "k", "chat", "delete", "c1"],
        stdout=out,
        stderr=io.StringIO(),
        prompter=scripted_prompter(confirms=[False]),
    )
    assert rc == 0
    assert deleted == []
    assert "Chat deletion cancelled" in out.getvalue()

    rc = main(
        ["-k", "k", "chat", "delete", "c1", "-f"],
        stdout=out,
        stderr=io.StringIO(),
        prompter=scripted_prompter(),
    )
    assert rc == 0
    assert deleted == ["c1"]
    assert "Chat c1 deleted successfully!" in out.getvalue()


def test_chat_favorite_toggle(monkeypatch) -> None:
    calls: list[tuple[str, bool]] = []

    class _Client:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

        def favorite_chat(self, chat_id: str, *, is_favorite: bool) -> dict:
            calls.append((chat_id, is_favorite))
            return {}

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)

    out = io.StringIO()
    assert main(["-k", "k", "chat", "favorite", "c1"], stdout=out, stderr=io.StringIO()) == 0
    assert main(["-k", "k", "chat", "favorite", "c1", "-r"], stdout=out, stderr=io.StringIO()) == 0
    assert calls == [("c1", True), ("c1", False)]
    assert "removed from favorites" in out.getvalue()


def test_chat_messages_list_truncates_content(monkeypatch) -> None:
    out = io.StringIO()

    class _Client:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

        def find_messages(self, chat_id: str, *, limit=None, cursor=None) -> dict:  # noqa: ANN001
            assert (chat_id, limit, cursor) == ("c1", 20, "abc")
            return {
                "data": [
                    {"id": "m1", "role": "user", "type": "message", "content": "hi"},
                ]
            }

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)

    rc = main(
        ["-k", "k", "chat", "messages", "list", "c1", "-c", "abc"],
        stdout=out,
        stderr=io.StringIO(),
    )

    assert rc == 0
    lines = out.getvalue().splitlines()
    assert _cells(lines[0]) == ["id", "role", "type", "createdAt", "content"]
    assert _cells(lines[2]) == ["m1", "user", "message", "", "hi"]


def test_chat_message_sends_model_and_response_mode(monkeypatch) -> None:
    captured: dict[str, object] = {}

    class _Client:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

        def send_message(self, chat_id: str, payload: dict) -> dict:
            captured["chat_id"] = chat_id
            captured["payload"] = payload
            return {"id": "msg-1"}

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)
    out = io.StringIO()

    rc = main(
        [
            "-k",
            "k",
            "chat",
            "message",
            "c1",
            "Make it blue",
            "-m",
            "v0-1.5-lg",
            "--response-mode",
            "async",
        ],
        stdout=out,
        stderr=io.StringIO(),
    )

    assert rc == 0
    assert captured == {
        "chat_id": "c1",
        "payload": {
            "message": "Make it blue",
            "modelConfiguration": {"modelId": "v0-1.5-lg"},
            "responseMode": "async",
        },
    }
    assert "Message sent successfully!" in out.getvalue()


def test_chat_versions_update_requires_files(monkeypatch) -> None:
    err = io.StringIO()

    class _Client:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)

    rc = main(
        ["-k", "k", "chat", "versions", "update", "c1", "v1"],
        stdout=io.StringIO(),
        stderr=err,
    )

    assert rc == 1
    assert "--file" in err.getvalue()


def test_chat_fork_passes_version(monkeypatch) -> None:
    captured: dict[str, object] = {}

    class _Client:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

        def fork_chat(self, chat_id: str, *, version_id=None) -> dict:  # noqa: ANN001
            captured.update(chat_id=chat_id, version_id=version_id)
            return {"id": "forked"}

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)
    out = io.StringIO()

    rc = main(["-k", "k", "chat", "fork", "c1", "-v", "v9", "-o", "json"], stdout=out, stderr=io.StringIO())

    assert rc == 0
    assert captured == {"chat_id": "c1", "version_id": "v9"}
    assert json.loads(out.getvalue()) == {"id": "forked"}

from __future__ import annotations

import io
import json

from v0_cli.cli.main import main


class _Client:
    def __init__(self, *, api_key: str, base_url: str | None) -> None:
        self.api_key = api_key

    def get_user(self) -> dict:
        return {"id": "u1", "name": None, "email": "dev@example.com", "avatar": "https://a/u1.png"}

    def get_plan(self) -> dict:
        return {
            "plan": "premium",
            "billingCycle": {"start": 1700000000, "end": 1702592000},
            "balance": {"total": 2000, "remaining": 1500},
        }

    def get_billing(self, *, scope=None) -> dict:  # noqa: ANN001
        return {"billingType": "legacy", "data": {"limit": 100, "remaining": 0}}

    def get_scopes(self) -> dict:
        return {"data": [{"id": "s1", "name": "personal"}, {"id": "s2"}]}

    def get_rate_limits(self, *, scope=None) -> dict:  # noqa: ANN001
        return {"limit": 60, "remaining": 59, "reset": 1700000060}


def test_user_info_table(monkeypatch) -> None:
    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)
    out = io.StringIO()

    rc = main(["-k", "k", "user", "info"], stdout=out, stderr=io.StringIO())

    assert rc == 0
    assert out.getvalue().splitlines() == [
        "User Details:",
        "ID: u1",
        "Name: No name",
        "Email: dev@example.com",
        "Avatar: https://a/u1.png",
    ]


def test_user_info_yaml(monkeypatch) -> None:
    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)
    out = io.StringIO()

    rc = main(["-k", "k", "user", "info", "-o", "yaml"], stdout=out, stderr=io.StringIO())

    assert rc == 0
    assert out.getvalue().splitlines()[:3] == ["id: u1", "name: null", "email: dev@example.com"]


def test_user_plan_table(monkeypatch) -> None:
    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)
    out = io.StringIO()

    rc = main(["-k", "k", "user", "plan"], stdout=out, stderr=io.StringIO())

    assert rc == 0
    lines = out.getvalue().splitlines()
    assert lines[0] == "User Plan:"
    assert "Plan: premium" in lines
    assert "Balance Remaining: 1500" in lines


def test_user_billing_legacy_shows_unknown_remaining(monkeypatch) -> None:
    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)
    out = io.StringIO()

    rc = main(["-k", "k", "user", "billing"], stdout=out, stderr=io.StringIO())

    assert rc == 0
    lines = out.getvalue().splitlines()
    assert "Billing Type: legacy" in lines
    assert "Limit: 100" in lines
    assert "Remaining: Unknown" in lines


def test_user_scopes_and_rate_limits(monkeypatch) -> None:
    monkeypatch.setattr("v0_cli.cli.main.V0Client", _Client)

    out = io.StringIO()
    assert main(["-k", "k", "user", "scopes"], stdout=out, stderr=io.StringIO()) == 0
    assert out.getvalue().splitlines() == ["User Scopes:", "- personal", "- s2"]

    out = io.StringIO()
    assert main(["-k", "k", "user", "rate-limits", "-o", "json"], stdout=out, stderr=io.StringIO()) == 0
    assert json.loads(out.getvalue())["remaining"] == 59


def test_hook_create_prompts_for_events(monkeypatch, scripted_prompter) -> None:
    captured: dict[str, object] = {}

    class _HookClient:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

        def create_hook(self, payload: dict) -> dict:
            captured["payload"] = payload
            return {"id": "h1", **payload}

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _HookClient)
    prompter = scripted_prompter(
        texts=["Deploy hook", "https://hooks.example/v0"],
        multi=[["chat.created", "message.created"]],
    )
    out = io.StringIO()

    rc = main(
        ["-k", "k", "hook", "create", "--project-id", "p1", "-o", "json"],
        stdout=out,
        stderr=io.StringIO(),
        prompter=prompter,
    )

    assert rc == 0
    assert len(prompter.choices[0]) == 9
    assert captured["payload"] == {
        "name": "Deploy hook",
        "url": "https://hooks.example/v0",
        "events": ["chat.created", "message.created"],
        "projectId": "p1",
    }
    assert json.loads(out.getvalue())["id"] == "h1"


def test_hook_create_rejects_unknown_event(monkeypatch) -> None:
    class _HookClient:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

        def create_hook(self, payload: dict) -> dict:  # pragma: no cover
            raise AssertionError("should not be called")

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _HookClient)
    err = io.StringIO()

    rc = main(
        ["-k", "k", "hook", "create", "-n", "x", "-u", "https://h", "-e", "chat.exploded"],
        stdout=io.StringIO(),
        stderr=err,
    )

    assert rc == 1
    assert "Failed to create hook" in err.getvalue()


def test_hook_list_and_delete(monkeypatch, scripted_prompter) -> None:
    deleted: list[str] = []

    class _HookClient:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

        def find_hooks(self) -> dict:
            return {
                "data": [
                    {"id": "h1", "name": "n", "url": "https://h", "events": ["chat.created", "chat.deleted"]}
                ]
            }

        def delete_hook(self, hook_id: str) -> dict:
            deleted.append(hook_id)
            return {}

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _HookClient)

    out = io.StringIO()
    assert main(["-k", "k", "hook", "list"], stdout=out, stderr=io.StringIO()) == 0
    row = [cell.strip() for cell in out.getvalue().splitlines()[2].split(" | ")]
    assert row == ["h1", "n", "https://h", "chat.created, chat.deleted"]

    out = io.StringIO()
    assert (
        main(
            ["-k", "k", "hook", "delete", "h1"],
            stdout=out,
            stderr=io.StringIO(),
            prompter=scripted_prompter(confirms=[True]),
        )
        == 0
    )
    assert deleted == ["h1"]


def test_vercel_create_and_list(monkeypatch) -> None:
    captured: dict[str, object] = {}

    class _VercelClient:
        def __init__(self, *, api_key: str, base_url: str | None) -> None:
            pass

        def find_vercel_projects(self) -> list:
            return [{"id": "prj_1", "name": "site", "framework": "nextjs"}]

        def create_vercel_project(self, payload: dict) -> dict:
            captured["payload"] = payload
            return {"id": "v0p_1"}

    monkeypatch.setattr("v0_cli.cli.main.V0Client", _VercelClient)

    out = io.StringIO()
    assert main(["-k", "k", "vercel", "projects"], stdout=out, stderr=io.StringIO()) == 0
    row = [cell.strip() for cell in out.getvalue().splitlines()[2].split(" | ")]
    assert row == ["prj_1", "site"]

    out = io.StringIO()
    assert (
        main(
            ["-k", "k", "vercel", "create", "-v", "prj_1", "-n", "Imported site"],
            stdout=out,
            stderr=io.StringIO(),
        )
        == 0
    )
    assert captured["payload"] == {"projectId": "prj_1", "name": "Imported site"}
    assert "✓ Integration project created" in out.getvalue()

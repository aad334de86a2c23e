"""Command-line interface for the v0 Platform API."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path
from typing import Any, Callable, Sequence, TextIO

from pydantic import ValidationError

from v0_cli.cli.config import (
    API_KEY_URL,
    BASE_URL_ENV_VAR,
    OUTPUT_FORMATS,
    ConfigError,
    ConfigStore,
    Configuration,
    describe,
)
from v0_cli.cli.output import (
    detail_view,
    error,
    format_chat,
    format_deployment,
    format_output,
    format_project,
    format_user,
    info,
    note,
    print_api_error,
    sanitize_error_text,
    success,
    warning,
)
from v0_cli.cli.prompts import Prompter, PromptUnavailableError, TerminalPrompter
from v0_cli.client import V0Client
from v0_cli.errors import APIUnavailableError
from v0_cli.schemas import (
    DEFAULT_MODEL_ID,
    HOOK_EVENTS,
    Attachment,
    ChatCreateRequest,
    ChatInitRequest,
    ChatUpdateRequest,
    DeploymentCreateRequest,
    EnvVarInput,
    EnvVarsCreateRequest,
    EnvVarsDeleteRequest,
    EnvVarsUpdateRequest,
    EnvVarUpdate,
    HookCreateRequest,
    HookUpdateRequest,
    MessageCreateRequest,
    ModelConfiguration,
    ProjectCreateRequest,
    ProjectUpdateRequest,
    RepoSource,
    SourceFile,
    UrlSource,
    VercelProjectCreateRequest,
    VersionUpdateRequest,
)

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 1
EXIT_API_ERROR = 2

DEFAULT_QUICK_TIMEOUT_SECONDS = 120
DEFAULT_QUICK_POLL_SECONDS = 3
DEFAULT_QUICK_PROJECT_NAME = "Quick Deploy"

OUTPUT_FORMAT_CHOICES = (
    ("Table (default)", "table"),
    ("JSON", "json"),
    ("YAML", "yaml"),
)

logger = logging.getLogger(__name__)


class UsageError(ValueError):
    """Raised when a command is invoked with unusable arguments."""


@dataclass
class CommandContext:
    args: argparse.Namespace
    store: ConfigStore
    config: Configuration
    prompter: Prompter
    stdout: TextIO
    stderr: TextIO
    _client: V0Client | None = field(default=None, repr=False)

    @property
    def verbose(self) -> bool:
        return bool(getattr(self.args, "verbose", False))

    @property
    def output_format(self) -> str:
        return (
            getattr(self.args, "output", None)
            or getattr(self.args, "global_output", None)
            or self.config.output_format
        )

    def client(self) -> V0Client:
        if self._client is None:
            api_key = self.store.ensure_api_key(
                getattr(self.args, "api_key", None),
                prompter=self.prompter,
                stdout=self.stdout,
            )
            base_url = self.store.resolve_base_url(getattr(self.args, "base_url", None))
            self._client = V0Client(api_key=api_key, base_url=base_url)
        return self._client

    def render(self, data: Any, fmt: str | None = None) -> None:
        format_output(data, fmt or self.output_format, stdout=self.stdout)


def _sdk_version() -> str:
    try:
        return pkg_version("v0-cli")
    except PackageNotFoundError:
        return "0.0.0+local"


def _add_output(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (json|table|yaml)",
    )


def _command(
    sub: argparse._SubParsersAction,
    name: str,
    handler: Callable[[CommandContext], int],
    action: str,
    help_text: str,
) -> argparse.ArgumentParser:
    parser = sub.add_parser(name, help=help_text, description=help_text)
    parser.set_defaults(handler=handler, action=action)
    _add_output(parser)
    return parser


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="v0", description="CLI tool for v0 Platform API")
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"v0-cli {_sdk_version()}",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to CLI config TOML (default: ~/.v0_cli/config.toml)",
    )
    parser.add_argument("-k", "--api-key", default=None, help="API key for v0")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument(
        "-o",
        "--output",
        dest="global_output",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Default output format for this invocation (json|table|yaml)",
    )
    parser.add_argument("--base-url", default=None, help="Override the platform API base URL")

    sub = parser.add_subparsers(dest="command", required=True)
    _build_chat_parser(sub)
    _build_project_parser(sub)
    _build_deploy_parser(sub)
    _build_user_parser(sub)
    _build_config_parser(sub)
    _build_hook_parser(sub)
    _build_vercel_parser(sub)
    return parser


def _build_chat_parser(sub: argparse._SubParsersAction) -> None:
    chat = sub.add_parser("chat", help="Manage v0 chats")
    chat_sub = chat.add_subparsers(dest="chat_command", required=True)

    create = _command(chat_sub, "create", _run_chat_create, "create chat", "Create a new chat")
    create.add_argument("message", nargs="?", default=None, help="Initial message")
    create.add_argument("-s", "--system", default=None, help="System message")
    create.add_argument(
        "-p", "--privacy", default="private", help="Privacy setting (public|private)"
    )
    create.add_argument("-m", "--model", default=DEFAULT_MODEL_ID, help="Model to use")
    create.add_argument("-P", "--project-id", default=None, help="Project ID to associate")
    create.add_argument(
        "-a", "--attachment", action="extend", nargs="+", default=None, help="Attachment URL(s)"
    )

    list_ = _command(chat_sub, "list", _run_chat_list, "list chats", "List all chats")
    list_.add_argument("-f", "--favorite", action="store_true", help="Show only favorite chats")
    list_.add_argument("-l", "--limit", type=int, default=10, help="Number of chats to show")
    list_.add_argument("-P", "--project-id", default=None, help="Filter by project ID")
    list_.add_argument("-n", "--name", default=None, help="Filter by name containing text")
    list_.add_argument("-p", "--privacy", default=None, help="Filter by privacy (public|private)")

    get = _command(chat_sub, "get", _run_chat_get, "get chat", "Get chat details")
    get.add_argument("chat_id", help="Chat ID")

    update = _command(chat_sub, "update", _run_chat_update, "update chat", "Update chat details")
    update.add_argument("chat_id", help="Chat ID")
    update.add_argument("-n", "--name", default=None, help="New chat name")
    update.add_argument("-p", "--privacy", default=None, help="Privacy (public|private)")

    init = _command(
        chat_sub,
        "init",
        _run_chat_init,
        "initialize chat",
        "Initialize a chat from sources (files, repo, registry, or zip)",
    )
    init.add_argument("-n", "--name", default=None, help="Chat name")
    init.add_argument(
        "-p",
        "--privacy",
        default=None,
        help="Privacy (public|private|team|team-edit|unlisted)",
    )
    init.add_argument("-P", "--project-id", default=None, help="Project ID to associate")
    init.add_argument(
        "--lock-all-files", action="store_true", help="Lock all files when applicable"
    )
    init.add_argument(
        "--file",
        dest="files",
        action="extend",
        nargs="+",
        default=None,
        help="Add local file(s) to initialize the chat (reads content)",
    )
    init.add_argument("--repo-url", default=None, help="Initialize from a Git repo URL")
    init.add_argument("--repo-branch", default=None, help="Git repo branch")
    init.add_argument("--registry-url", default=None, help="Initialize from a registry URL")
    init.add_argument("--zip-url", default=None, help="Initialize from a zip URL")

    fork = _command(
        chat_sub,
        "fork",
        _run_chat_fork,
        "fork chat",
        "Fork a chat (optionally from a specific version)",
    )
    fork.add_argument("chat_id", help="Chat ID")
    fork.add_argument("-v", "--version-id", default=None, help="Version ID to fork from")

    messages = chat_sub.add_parser("messages", help="Manage chat messages")
    messages_sub = messages.add_subparsers(dest="messages_command", required=True)
    messages_list = _command(
        messages_sub, "list", _run_messages_list, "list messages", "List messages in a chat"
    )
    messages_list.add_argument("chat_id", help="Chat ID")
    messages_list.add_argument(
        "-l", "--limit", type=int, default=20, help="Number of messages to show"
    )
    messages_list.add_argument("-c", "--cursor", default=None, help="Pagination cursor")
    messages_get = _command(
        messages_sub, "get", _run_messages_get, "get message", "Get a specific message"
    )
    messages_get.add_argument("chat_id", help="Chat ID")
    messages_get.add_argument("message_id", help="Message ID")

    versions = chat_sub.add_parser("versions", help="Manage chat versions")
    versions_sub = versions.add_subparsers(dest="versions_command", required=True)
    versions_list = _command(
        versions_sub, "list", _run_versions_list, "list versions", "List versions of a chat"
    )
    versions_list.add_argument("chat_id", help="Chat ID")
    versions_list.add_argument(
        "-l", "--limit", type=int, default=20, help="Number of versions to show"
    )
    versions_list.add_argument("-c", "--cursor", default=None, help="Pagination cursor")
    versions_get = _command(
        versions_sub, "get", _run_versions_get, "get version", "Get a specific version"
    )
    versions_get.add_argument("chat_id", help="Chat ID")
    versions_get.add_argument("version_id", help="Version ID")
    versions_update = _command(
        versions_sub,
        "update",
        _run_versions_update,
        "update version",
        "Update files in a specific version",
    )
    versions_update.add_argument("chat_id", help="Chat ID")
    versions_update.add_argument("version_id", help="Version ID")
    versions_update.add_argument(
        "--file",
        dest="files",
        action="extend",
        nargs="+",
        default=None,
        help="Local file paths to include (reads content)",
    )

    resume = _command(
        chat_sub,
        "resume",
        _run_chat_resume,
        "resume",
        "Resume a chat generation after a specific message",
    )
    resume.add_argument("chat_id", help="Chat ID")
    resume.add_argument("message_id", help="Message ID")

    message = _command(
        chat_sub, "message", _run_chat_message, "send message", "Send a message to a chat"
    )
    message.add_argument("chat_id", help="Chat ID")
    message.add_argument("message", nargs="?", default=None, help="Message to send")
    message.add_argument(
        "-a", "--attachment", action="extend", nargs="+", default=None, help="Attachment URL(s)"
    )
    message.add_argument("-m", "--model", default=None, help="Model to use")
    message.add_argument(
        "--response-mode", choices=("sync", "async"), default=None, help="Response mode"
    )

    delete = _command(
        chat_sub, "delete", _run_chat_delete, "delete chat", "Delete a chat"
    )
    delete.add_argument("chat_id", help="Chat ID")
    delete.add_argument("-f", "--force", action="store_true", help="Skip confirmation")

    favorite = _command(
        chat_sub,
        "favorite",
        _run_chat_favorite,
        "update favorite",
        "Add or remove a chat from favorites"
    )
    favorite.add_argument("chat_id", help="Chat ID")
    favorite.add_argument("-r", "--remove", action="store_true", help="Remove from favorites")


def _build_project_parser(sub: argparse._SubParsersAction) -> None:
    project = sub.add_parser("project", help="Manage v0 projects")
    project_sub = project.add_subparsers(dest="project_command", required=True)

    create = _command(
        project_sub, "create", _run_project_create, "create project", "Create a new project"
    )
    create.add_argument("name", nargs="?", default=None, help="Project name")
    create.add_argument("-d", "--description", default=None, help="Project description")
    create.add_argument("-i", "--icon", default=None, help="Project icon")
    create.add_argument("--instructions", default=None, help="Project instructions")
    create.add_argument("--privacy", default=None, help="Project privacy (private|team)")
    create.add_argument("--vercel-project-id", default=None, help="Link to a Vercel project ID")
    create.add_argument(
        "--env",
        action="extend",
        nargs="+",
        default=None,
        metavar="KEY=VALUE",
        help="Environment variables to set on create",
    )

    list_ = _command(project_sub, "list", _run_project_list, "list projects", "List all projects")
    list_.add_argument("-l", "--limit", type=int, default=10, help="Number of projects to show")

    get = _command(project_sub, "get", _run_project_get, "get project", "Get project details")
    get.add_argument("project_id", help="Project ID")

    update = _command(
        project_sub, "update", _run_project_update, "update project", "Update project details"
    )
    update.add_argument("project_id", help="Project ID")
    update.add_argument("-n", "--name", default=None, help="New project name")
    update.add_argument("-d", "--description", default=None, help="New project description")
    update.add_argument("-i", "--instructions", default=None, help="New project instructions")
    update.add_argument("--privacy", default=None, help="Project privacy (private|team)")

    assign = _command(
        project_sub,
        "assign",
        _run_project_assign,
        "assign chat to project",
        "Assign a chat to a project"
    )
    assign.add_argument("project_id", help="Project ID")
    assign.add_argument("chat_id", help="Chat ID")

    by_chat = _command(
        project_sub,
        "get-by-chat",
        _run_project_get_by_chat,
        "get project",
        "Get the project a chat belongs to",
    )
    by_chat.add_argument("chat_id", help="Chat ID")

    env = project_sub.add_parser("env", help="Manage project environment variables")
    env_sub = env.add_subparsers(dest="env_command", required=True)

    env_list = _command(
        env_sub, "list", _run_env_list, "list env vars", "List environment variables"
    )
    env_list.add_argument("project_id", help="Project ID")
    env_list.add_argument(
        "--decrypted", action="store_true", help="Return decrypted values when available"
    )

    env_get = _command(
        env_sub, "get", _run_env_get, "get env var", "Get an environment variable"
    )
    env_get.add_argument("project_id", help="Project ID")
    env_get.add_argument("env_var_id", help="Environment Variable ID")
    env_get.add_argument(
        "--decrypted", action="store_true", help="Return decrypted value when available"
    )

    env_create = _command(
        env_sub, "create", _run_env_create, "create env vars", "Create environment variables"
    )
    env_create.add_argument("project_id", help="Project ID")
    env_create.add_argument(
        "--var",
        dest="vars",
        action="extend",
        nargs="+",
        default=None,
        metavar="KEY=VALUE",
        help="Key=Value pair(s) to create",
    )
    env_create.add_argument("--upsert", action="store_true", help="Upsert existing keys")
    env_create.add_argument(
        "--decrypted", action="store_true", help="Return decrypted values in response"
    )

    env_update = _command(
        env_sub,
        "update",
        _run_env_update,
        "update env vars",
        "Update environment variables by ID",
    )
    env_update.add_argument("project_id", help="Project ID")
    env_update.add_argument(
        "--var",
        dest="vars",
        action="extend",
        nargs="+",
        default=None,
        metavar="ID=VALUE",
        help="Id=Value pair(s) to update",
    )
    env_update.add_argument(
        "--decrypted", action="store_true", help="Return decrypted values in response"
    )

    env_delete = _command(
        env_sub,
        "delete",
        _run_env_delete,
        "delete env vars",
        "Delete environment variables by ID",
    )
    env_delete.add_argument("project_id", help="Project ID")
    env_delete.add_argument(
        "--id",
        dest="ids",
        action="extend",
        nargs="+",
        default=None,
        metavar="ENV_VAR_ID",
        help="Environment variable ID(s) to delete",
    )


def _build_deploy_parser(sub: argparse._SubParsersAction) -> None:
    deploy = sub.add_parser("deploy", help="Manage v0 deployments")
    deploy_sub = deploy.add_subparsers(dest="deploy_command", required=True)

    list_ = _command(
        deploy_sub, "list", _run_deploy_list, "list deployments", "List deployments"
    )
    list_.add_argument("-p", "--project-id", default=None, help="Filter by project ID")
    list_.add_argument("-c", "--chat-id", default=None, help="Filter by chat ID")
    list_.add_argument("--version-id", default=None, help="Filter by version ID")

    create = _command(
        deploy_sub,
        "create",
        _run_deploy_create,
        "create deployment",
        "Create a new deployment (prompts for missing IDs)",
    )
    create.add_argument("project_id", nargs="?", default=None, help="Project ID")
    create.add_argument("chat_id", nargs="?", default=None, help="Chat ID")
    create.add_argument("version_id", nargs="?", default=None, help="Version ID")

    from_chat = _command(
        deploy_sub,
        "from-chat",
        _run_deploy_from_chat,
        "create deployment",
        "Deploy the latest version of a chat",
    )
    from_chat.add_argument("chat_id", help="Chat ID")
    from_chat.add_argument("-p", "--project-id", default=None, help="Project ID")

    quick = _command(
        deploy_sub,
        "quick",
        _run_deploy_quick,
        "quick deploy",
        "Create a project and chat from a prompt, then deploy the generated version",
    )
    quick.add_argument("message", nargs="?", default=None, help="Prompt for the new chat")
    quick.add_argument("--project-name", default=None, help="Name for the new project")
    quick.add_argument(
        "-p", "--project-id", default=None, help="Use an existing project instead of creating one"
    )
    quick.add_argument(
        "--timeout-seconds",
        type=int,
        default=DEFAULT_QUICK_TIMEOUT_SECONDS,
        help="How long to wait for the chat version to complete",
    )
    quick.add_argument(
        "--poll-seconds",
        type=int,
        default=DEFAULT_QUICK_POLL_SECONDS,
        help="Seconds between status checks",
    )

    get = _command(
        deploy_sub, "get", _run_deploy_get, "get deployment", "Get deployment details"
    )
    get.add_argument("deployment_id", help="Deployment ID")

    delete = _command(
        deploy_sub,
        "delete",
        _run_deploy_delete,
        "delete deployment",
        "Delete a deployment"
    )
    delete.add_argument("deployment_id", help="Deployment ID")
    delete.add_argument("-f", "--force", action="store_true", help="Skip confirmation")

    logs = _command(
        deploy_sub, "logs", _run_deploy_logs, "get deployment logs", "Get deployment logs"
    )
    logs.add_argument("deployment_id", help="Deployment ID")
    logs.add_argument("-s", "--since", default=None, help="Get logs since timestamp")

    errors = _command(
        deploy_sub,
        "errors",
        _run_deploy_errors,
        "get deployment errors",
        "Get deployment errors",
    )
    errors.add_argument("deployment_id", help="Deployment ID")


def _build_user_parser(sub: argparse._SubParsersAction) -> None:
    user = sub.add_parser("user", help="Manage v0 user information")
    user_sub = user.add_subparsers(dest="user_command", required=True)

    _command(user_sub, "info", _run_user_info, "get user information", "Get user information")
    _command(
        user_sub,
        "plan",
        _run_user_plan,
        "get user plan",
        "Get user plan and billing information",
    )
    billing = _command(
        user_sub,
        "billing",
        _run_user_billing,
        "get billing information",
        "Get detailed billing information",
    )
    billing.add_argument("-s", "--scope", default=None, help="Billing scope")
    _command(user_sub, "scopes", _run_user_scopes, "get user scopes", "Get user scopes")
    rate_limits = _command(
        user_sub,
        "rate-limits",
        _run_user_rate_limits,
        "get rate limits",
        "Get rate limit information",
    )
    rate_limits.add_argument("-s", "--scope", default=None, help="Rate limit scope")


def _build_config_parser(sub: argparse._SubParsersAction) -> None:
    config = sub.add_parser("config", help="Manage CLI configuration")
    config_sub = config.add_subparsers(dest="config_command", required=True)

    _command(
        config_sub, "show", _run_config_show, "show configuration", "Show current configuration"
    )
    set_api_key = _command(
        config_sub, "set-api-key", _run_config_set_api_key, "set API key", "Set API key"
    )
    set_api_key.add_argument("value", nargs="?", default=None, help="API key to set")

    set_project = _command(
        config_sub,
        "set-default-project",
        _run_config_set_default_project,
        "set default project",
        "Set default project ID"
    )
    set_project.add_argument(
        "value", nargs="?", default=None, help="Project ID to set as default"
    )

    set_format = _command(
        config_sub,
        "set-output-format",
        _run_config_set_output_format,
        "set output format",
        "Set default output format"
    )
    set_format.add_argument("value", nargs="?", default=None, help="Output format (json|table|yaml)")

    set_base_url = _command(
        config_sub,
        "set-base-url",
        _run_config_set_base_url,
        "set base URL",
        "Store a default platform API base URL"
    )
    set_base_url.add_argument("value", nargs="?", default=None, help="Base URL to store")
    set_base_url.add_argument(
        "--clear", action="store_true", help="Remove the stored base URL"
    )

    clear = _command(
        config_sub,
        "clear",
        _run_config_clear,
        "clear configuration",
        "Clear all configuration"
    )
    clear.add_argument("-f", "--force", action="store_true", help="Skip confirmation")

    _command(
        config_sub,
        "setup",
        _run_config_setup,
        "setup configuration",
        "Interactive configuration setup"
    )


def _build_hook_parser(sub: argparse._SubParsersAction) -> None:
    hook = sub.add_parser("hook", help="Manage v0 webhooks")
    hook_sub = hook.add_subparsers(dest="hook_command", required=True)

    _command(hook_sub, "list", _run_hook_list, "list hooks", "List hooks")

    create = _command(hook_sub, "create", _run_hook_create, "create hook", "Create a new hook")
    create.add_argument("-n", "--name", default=None, help="Hook name")
    create.add_argument(
        "-e",
        "--event",
        dest="events",
        action="extend",
        nargs="+",
        default=None,
        help="Event(s) to subscribe to",
    )
    create.add_argument("--chat-id", default=None, help="Chat ID scope")
    create.add_argument("--project-id", default=None, help="Project ID scope")
    create.add_argument("-u", "--url", default=None, help="Webhook URL")

    get = _command(hook_sub, "get", _run_hook_get, "get hook", "Get hook details")
    get.add_argument("hook_id", help="Hook ID")

    update = _command(hook_sub, "update", _run_hook_update, "update hook", "Update a hook")
    update.add_argument("hook_id", help="Hook ID")
    update.add_argument("-n", "--name", default=None, help="Hook name")
    update.add_argument(
        "-e",
        "--event",
        dest="events",
        action="extend",
        nargs="+",
        default=None,
        help="Event(s) to subscribe to",
    )
    update.add_argument("-u", "--url", default=None, help="Webhook URL")

    delete = _command(
        hook_sub, "delete", _run_hook_delete, "delete hook", "Delete a hook"
    )
    delete.add_argument("hook_id", help="Hook ID")
    delete.add_argument("-f", "--force", action="store_true", help="Skip confirmation")


def _build_vercel_parser(sub: argparse._SubParsersAction) -> None:
    vercel = sub.add_parser("vercel", help="Vercel integration")
    vercel_sub = vercel.add_subparsers(dest="vercel_command", required=True)

    _command(
        vercel_sub,
        "projects",
        _run_vercel_projects,
        "list Vercel projects",
        "List linked Vercel projects",
    )
    create = _command(
        vercel_sub,
        "create",
        _run_vercel_create,
        "create integration project",
        "Create a v0 integration from a Vercel project",
    )
    create.add_argument(
        "-v", "--vercel-project-id", required=True, help="Vercel project ID"
    )
    create.add_argument("-n", "--name", required=True, help="Name for the v0 project")


# shared helpers


def _prompt_required(ctx: CommandContext, message: str, required: str) -> str:
    while True:
        answer = (ctx.prompter.text(message) or "").strip()
        if answer:
            return answer
        warning(required, stdout=ctx.stdout)


def _confirm(ctx: CommandContext, message: str) -> bool:
    if getattr(ctx.args, "force", False):
        return True
    return ctx.prompter.confirm(message, default=False)


def _data(response: Any) -> list:
    if isinstance(response, dict):
        data = response.get("data")
        return data if isinstance(data, list) else []
    if isinstance(response, list):
        return response
    return []


def _next_cursor(response: Any) -> str | None:
    if not isinstance(response, dict):
        return None
    pagination = response.get("pagination")
    if isinstance(pagination, dict) and pagination.get("nextCursor"):
        return pagination["nextCursor"]
    return response.get("nextCursor")


def _parse_pairs(values: Sequence[str] | None) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for raw in values or ():
        key, sep, value = raw.partition("=")
        if not sep or not key:
            logger.debug("skipping malformed pair: %r", raw)
            continue
        pairs.append((key, value))
    return pairs


def _read_source_files(paths: Sequence[str]) -> list[SourceFile]:
    return [
        SourceFile(name=Path(path).name, content=Path(path).read_text(encoding="utf-8"))
        for path in paths
    ]


def _attachments(urls: Sequence[str] | None) -> list[Attachment] | None:
    if not urls:
        return None
    return [Attachment(url=url) for url in urls]


def _progress(ctx: CommandContext, message: str) -> None:
    if ctx.output_format == "table":
        info(message, stdout=ctx.stdout)


def _show(ctx: CommandContext, data: Any, table_view: Callable[..., None]) -> None:
    if ctx.output_format == "table":
        table_view(data, stdout=ctx.stdout)
    else:
        ctx.render(data)


# chat


def _run_chat_create(ctx: CommandContext) -> int:
    args = ctx.args
    client = ctx.client()
    message = args.message or _prompt_required(ctx, "Enter your message", "Message is required")
    request = ChatCreateRequest(
        message=message,
        system=args.system,
        chat_privacy=args.privacy,
        project_id=args.project_id or ctx.config.default_project or None,
        model_configuration=ModelConfiguration(model_id=args.model),
        attachments=_attachments(args.attachment),
    )
    chat = client.create_chat(request.to_payload())
    _show(ctx, chat, format_chat)
    if ctx.output_format == "table":
        success(f"Chat URL: {chat.get('webUrl')}", stdout=ctx.stdout)
    return EXIT_SUCCESS


def _run_chat_list(ctx: CommandContext) -> int:
    args = ctx.args
    response = ctx.client().find_chats(limit=args.limit, is_favorite=args.favorite or None)
    chats = _data(response)
    if not chats and ctx.output_format == "table":
        info("No chats found", stdout=ctx.stdout)
        return EXIT_SUCCESS

    name_filter = (args.name or "").lower()
    rows = []
    for chat in chats:
        if args.project_id and chat.get("projectId") != args.project_id:
            continue
        if args.privacy and chat.get("privacy") != args.privacy:
            continue
        if name_filter and name_filter not in (chat.get("name") or "").lower():
            continue
        rows.append(
            {
                "id": chat.get("id"),
                "name": chat.get("name") or "Untitled",
                "privacy": chat.get("privacy"),
                "created": chat.get("createdAt"),
                "url": chat.get("webUrl"),
            }
        )
    ctx.render(rows)

    cursor = _next_cursor(response)
    if cursor and ctx.output_format == "table":
        note(f"\nNext page cursor: {cursor}", stream=ctx.stdout)
    return EXIT_SUCCESS


def _run_chat_get(ctx: CommandContext) -> int:
    chat = ctx.client().get_chat(ctx.args.chat_id)
    _show(ctx, chat, format_chat)
    return EXIT_SUCCESS


def _run_chat_update(ctx: CommandContext) -> int:
    args = ctx.args
    request = ChatUpdateRequest(name=args.name, privacy=args.privacy)
    payload = request.to_payload()
    if not payload:
        raise UsageError("No update fields provided. Use --name and/or --privacy")
    chat = ctx.client().update_chat(args.chat_id, payload)
    _show(ctx, chat, format_chat)
    return EXIT_SUCCESS


def _run_chat_init(ctx: CommandContext) -> int:
    args = ctx.args
    lock_all_files = bool(args.lock_all_files)
    common = {
        "name": args.name,
        "chat_privacy": args.privacy,
        "project_id": args.project_id or ctx.config.default_project or None,
        "lock_all_files": lock_all_files,
    }
    if args.files:
        request = ChatInitRequest(type="files", files=_read_source_files(args.files), **common)
    elif args.repo_url:
        request = ChatInitRequest(
            type="repo",
            repo=RepoSource(url=args.repo_url, branch=args.repo_branch),
            **common,
        )
    elif args.registry_url:
        request = ChatInitRequest(type="registry", registry=UrlSource(url=args.registry_url), **common)
    elif args.zip_url:
        request = ChatInitRequest(type="zip", zip=UrlSource(url=args.zip_url), **common)
    else:
        raise UsageError(
            "Provide at least one source: --file, --repo-url, --registry-url, or --zip-url"
        )

    chat = ctx.client().init_chat(request.to_payload())
    _show(ctx, chat, format_chat)
    return EXIT_SUCCESS


def _run_chat_fork(ctx: CommandContext) -> int:
    chat = ctx.client().fork_chat(ctx.args.chat_id, version_id=ctx.args.version_id)
    _show(ctx, chat, format_chat)
    return EXIT_SUCCESS


def _run_messages_list(ctx: CommandContext) -> int:
    args = ctx.args
    response = ctx.client().find_messages(args.chat_id, limit=args.limit, cursor=args.cursor)
    if ctx.output_format != "table":
        ctx.render(response)
        return EXIT_SUCCESS

    rows = [
        {
            "id": message.get("id"),
            "role": message.get("role"),
            "type": message.get("type"),
            "createdAt": message.get("createdAt"),
            "content": (message.get("content") or "")[:80],
        }
        for message in _data(response)
    ]
    ctx.render(rows, "table")
    cursor = _next_cursor(response)
    if cursor:
        note(f"\nNext page cursor: {cursor}", stream=ctx.stdout)
    return EXIT_SUCCESS


def _run_messages_get(ctx: CommandContext) -> int:
    ctx.render(ctx.client().get_message(ctx.args.chat_id, ctx.args.message_id))
    return EXIT_SUCCESS


def _run_versions_list(ctx: CommandContext) -> int:
    args = ctx.args
    response = ctx.client().find_versions(args.chat_id, limit=args.limit, cursor=args.cursor)
    if ctx.output_format != "table":
        ctx.render(response)
        return EXIT_SUCCESS

    rows = [
        {
            "id": version.get("id"),
            "status": version.get("status"),
            "createdAt": version.get("createdAt"),
            "demoUrl": version.get("demoUrl") or "",
        }
        for version in _data(response)
    ]
    ctx.render(rows, "table")
    cursor = _next_cursor(response)
    if cursor:
        note(f"\nNext page cursor: {cursor}", stream=ctx.stdout)
    return EXIT_SUCCESS


def _run_versions_get(ctx: CommandContext) -> int:
    ctx.render(ctx.client().get_version(ctx.args.chat_id, ctx.args.version_id))
    return EXIT_SUCCESS


def _run_versions_update(ctx: CommandContext) -> int:
    args = ctx.args
    if not args.files:
        raise UsageError("Provide at least one --file path to update the version")
    request = VersionUpdateRequest(files=_read_source_files(args.files))
    updated = ctx.client().update_version(args.chat_id, args.version_id, request.to_payload())
    ctx.render(updated)
    if ctx.output_format == "table":
        success("Version updated successfully!", stdout=ctx.stdout)
    return EXIT_SUCCESS


def _run_chat_resume(ctx: CommandContext) -> int:
    ctx.render(ctx.client().resume_message(ctx.args.chat_id, ctx.args.message_id))
    return EXIT_SUCCESS


def _run_chat_message(ctx: CommandContext) -> int:
    args = ctx.args
    client = ctx.client()
    message = args.message or _prompt_required(ctx, "Enter your message", "Message is required")
    request = MessageCreateRequest(
        message=message,
        attachments=_attachments(args.attachment),
        model_configuration=ModelConfiguration(model_id=args.model) if args.model else None,
        response_mode=args.response_mode,
    )
    response = client.send_message(args.chat_id, request.to_payload())
    if ctx.output_format == "table":
        detail_view(
            "Message sent successfully!",
            [("Chat ID", args.chat_id), ("Message", message)],
            stdout=ctx.stdout,
        )
    else:
        ctx.render(response)
    return EXIT_SUCCESS


def _run_chat_delete(ctx: CommandContext) -> int:
    chat_id = ctx.args.chat_id
    client = ctx.client()
    if not _confirm(ctx, f"Are you sure you want to delete chat {chat_id}?"):
        info("Chat deletion cancelled", stdout=ctx.stdout)
        return EXIT_SUCCESS
    client.delete_chat(chat_id)
    success(f"Chat {chat_id} deleted successfully!", stdout=ctx.stdout)
    return EXIT_SUCCESS


def _run_chat_favorite(ctx: CommandContext) -> int:
    args = ctx.args
    ctx.client().favorite_chat(args.chat_id, is_favorite=not args.remove)
    if args.remove:
        success(f"Chat {args.chat_id} removed from favorites", stdout=ctx.stdout)
    else:
        success(f"Chat {args.chat_id} added to favorites", stdout=ctx.stdout)
    return EXIT_SUCCESS


# project


def _run_project_create(ctx: CommandContext) -> int:
    args = ctx.args
    client = ctx.client()
    name = args.name or _prompt_required(ctx, "Enter project name", "Project name is required")
    env_pairs = _parse_pairs(args.env)
    request = ProjectCreateRequest(
        name=name,
        description=args.description,
        icon=args.icon,
        instructions=args.instructions,
        vercel_project_id=args.vercel_project_id,
        privacy=args.privacy,
        environment_variables=(
            [EnvVarInput(key=key, value=value) for key, value in env_pairs]
            if args.env is not None
            else None
        ),
    )
    project = client.create_project(request.to_payload())
    _show(ctx, project, format_project)
    if ctx.output_format == "table":
        success(f"Project URL: {project.get('webUrl')}", stdout=ctx.stdout)
    return EXIT_SUCCESS


def _run_project_list(ctx: CommandContext) -> int:
    projects = _data(ctx.client().find_projects())
    if not projects and ctx.output_format == "table":
        info("No projects found", stdout=ctx.stdout)
        return EXIT_SUCCESS
    if ctx.args.limit and ctx.args.limit > 0:
        projects = projects[: ctx.args.limit]
    rows = [
        {
            "id": project.get("id"),
            "name": project.get("name"),
            "description": project.get("description") or "No description",
            "created": project.get("createdAt"),
            "url": project.get("webUrl"),
        }
        for project in projects
    ]
    ctx.render(rows)
    return EXIT_SUCCESS


def _run_project_get(ctx: CommandContext) -> int:
    project = ctx.client().get_project(ctx.args.project_id)
    _show(ctx, project, format_project)
    return EXIT_SUCCESS


def _run_project_update(ctx: CommandContext) -> int:
    args = ctx.args
    request = ProjectUpdateRequest(
        name=args.name,
        description=args.description,
        instructions=args.instructions,
        privacy=args.privacy,
    )
    payload = request.to_payload()
    if not payload:
        raise UsageError(
            "No update fields provided. Use --name, --description, --instructions or --privacy"
        )
    project = ctx.client().update_project(args.project_id, payload)
    _show(ctx, project, format_project)
    return EXIT_SUCCESS


def _run_project_assign(ctx: CommandContext) -> int:
    args = ctx.args
    ctx.client().assign_project(args.project_id, chat_id=args.chat_id)
    success(f"Chat {args.chat_id} assigned to project {args.project_id}", stdout=ctx.stdout)
    return EXIT_SUCCESS


def _run_project_get_by_chat(ctx: CommandContext) -> int:
    project = ctx.client().get_project_by_chat(ctx.args.chat_id)
    _show(ctx, project, format_project)
    return EXIT_SUCCESS


def _run_env_list(ctx: CommandContext) -> int:
    args = ctx.args
    response = ctx.client().find_env_vars(args.project_id, decrypted=args.decrypted)
    if ctx.output_format == "table":
        ctx.render(_data(response), "table")
    else:
        ctx.render(response)
    return EXIT_SUCCESS


def _run_env_get(ctx: CommandContext) -> int:
    args = ctx.args
    ctx.render(
        ctx.client().get_env_var(args.project_id, args.env_var_id, decrypted=args.decrypted)
    )
    return EXIT_SUCCESS


def _run_env_create(ctx: CommandContext) -> int:
    args = ctx.args
    if not args.vars:
        raise UsageError("Provide at least one --var KEY=VALUE")
    request = EnvVarsCreateRequest(
        environment_variables=[
            EnvVarInput(key=key, value=value) for key, value in _parse_pairs(args.vars)
        ],
        upsert=bool(args.upsert),
    )
    response = ctx.client().create_env_vars(
        args.project_id, request.to_payload(), decrypted=args.decrypted
    )
    ctx.render(response)
    return EXIT_SUCCESS


def _run_env_update(ctx: CommandContext) -> int:
    args = ctx.args
    if not args.vars:
        raise UsageError("Provide at least one --var ID=VALUE")
    request = EnvVarsUpdateRequest(
        environment_variables=[
            EnvVarUpdate(id=env_id, value=value) for env_id, value in _parse_pairs(args.vars)
        ],
    )
    response = ctx.client().update_env_vars(
        args.project_id, request.to_payload(), decrypted=args.decrypted
    )
    ctx.render(response)
    return EXIT_SUCCESS


def _run_env_delete(ctx: CommandContext) -> int:
    args = ctx.args
    if not args.ids:
        raise UsageError("Provide at least one --id ENV_VAR_ID")
    request = EnvVarsDeleteRequest(environment_variable_ids=list(args.ids))
    ctx.render(ctx.client().delete_env_vars(args.project_id, request.to_payload()))
    return EXIT_SUCCESS


# deploy


def _deployment_rows(deployments: list) -> list[dict]:
    return [
        {
            "id": deployment.get("id"),
            "projectId": deployment.get("projectId"),
            "chatId": deployment.get("chatId"),
            "versionId": deployment.get("versionId"),
            "inspectorUrl": deployment.get("inspectorUrl"),
            "webUrl": deployment.get("webUrl"),
        }
        for deployment in deployments
    ]


def _latest_version(chat: dict) -> dict:
    latest = chat.get("latestVersion")
    return latest if isinstance(latest, dict) else {}


def _select_project(ctx: CommandContext, client: V0Client) -> str:
    projects = _data(client.find_projects())
    if not projects:
        raise UsageError("No projects found; create one with `v0 project create`")
    choices = [
        (f"{project.get('name') or 'Untitled'} ({project.get('id')})", project.get("id"))
        for project in projects
    ]
    default = ctx.config.default_project or None
    return ctx.prompter.select("Select a project", choices, default=default)


def _select_chat(ctx: CommandContext, client: V0Client, project_id: str) -> str:
    chats = _data(client.find_chats())
    scoped = [chat for chat in chats if chat.get("projectId") == project_id] or chats
    if not scoped:
        raise UsageError("No chats found; create one with `v0 chat create`")
    choices = [
        (f"{chat.get('name') or 'Untitled'} ({chat.get('id')})", chat.get("id"))
        for chat in scoped
    ]
    return ctx.prompter.select("Select a chat", choices)


def _create_deployment(
    ctx: CommandContext, client: V0Client, *, project_id: str, chat_id: str, version_id: str
) -> int:
    request = DeploymentCreateRequest(
        project_id=project_id, chat_id=chat_id, version_id=version_id
    )
    deployment = client.create_deployment(request.to_payload())
    _show(ctx, deployment, format_deployment)
    if ctx.output_format == "table":
        success(f"Deployment URL: {deployment.get('webUrl')}", stdout=ctx.stdout)
        success(f"Inspector URL: {deployment.get('inspectorUrl')}", stdout=ctx.stdout)
    return EXIT_SUCCESS


def _run_deploy_list(ctx: CommandContext) -> int:
    args = ctx.args
    response = ctx.client().find_deployments(
        project_id=args.project_id,
        chat_id=args.chat_id,
        version_id=args.version_id,
    )
    deployments = _data(response)
    if not deployments and ctx.output_format == "table":
        info("No deployments found", stdout=ctx.stdout)
        return EXIT_SUCCESS
    ctx.render(_deployment_rows(deployments))
    return EXIT_SUCCESS


def _run_deploy_create(ctx: CommandContext) -> int:
    args = ctx.args
    client = ctx.client()
    project_id = args.project_id or _select_project(ctx, client)
    chat_id = args.chat_id or _select_chat(ctx, client, project_id)
    version_id = args.version_id
    if not version_id:
        version_id = _latest_version(client.get_chat(chat_id)).get("id")
        if not version_id:
            raise UsageError(f"Chat {chat_id} has no version to deploy yet")
        _progress(ctx, f"Using latest version {version_id}")
    return _create_deployment(
        ctx, client, project_id=project_id, chat_id=chat_id, version_id=version_id
    )


def _run_deploy_from_chat(ctx: CommandContext) -> int:
    args = ctx.args
    client = ctx.client()
    chat = client.get_chat(args.chat_id)
    version_id = _latest_version(chat).get("id")
    if not version_id:
        raise UsageError(f"Chat {args.chat_id} has no version to deploy yet")
    project_id = args.project_id or chat.get("projectId") or ctx.config.default_project
    if not project_id:
        raise UsageError("No project ID: pass --project-id or set a default project")
    return _create_deployment(
        ctx, client, project_id=project_id, chat_id=args.chat_id, version_id=version_id
    )


def _version_ready(version: dict) -> bool:
    return bool(version.get("id")) and version.get("status") in (None, "completed")


def _run_deploy_quick(ctx: CommandContext) -> int:
    args = ctx.args
    client = ctx.client()
    message = args.message or _prompt_required(ctx, "Enter your message", "Message is required")

    project_id = args.project_id
    if not project_id:
        name = args.project_name or DEFAULT_QUICK_PROJECT_NAME
        project = client.create_project(ProjectCreateRequest(name=name).to_payload())
        project_id = project.get("id")
        if not project_id:
            raise UsageError("project creation returned no project ID")
        _progress(ctx, f"Created project {project_id}")

    chat = client.create_chat(
        ChatCreateRequest(
            message=message,
            project_id=project_id,
            model_configuration=ModelConfiguration(),
        ).to_payload()
    )
    chat_id = chat.get("id")
    if not chat_id:
        raise UsageError("chat creation returned no chat ID")
    _progress(ctx, f"Created chat {chat_id}")

    timeout_seconds = max(1, int(args.timeout_seconds))
    poll_seconds = max(1, int(args.poll_seconds))
    deadline = time.time() + timeout_seconds
    latest = _latest_version(chat)
    while not _version_ready(latest) and latest.get("status") != "failed":
        if time.time() >= deadline:
            break
        time.sleep(poll_seconds)
        latest = _latest_version(client.get_chat(chat_id))

    if latest.get("status") == "failed":
        error(f"Generation failed for chat {chat_id}", stderr=ctx.stderr)
        return EXIT_VALIDATION_ERROR
    if not _version_ready(latest):
        warning(
            f"Chat {chat_id} is not ready yet. Deploy it later with: "
            f"v0 deploy from-chat {chat_id} --project-id {project_id}",
            stdout=ctx.stdout,
        )
        return EXIT_SUCCESS

    return _create_deployment(
        ctx, client, project_id=project_id, chat_id=chat_id, version_id=latest["id"]
    )


def _run_deploy_get(ctx: CommandContext) -> int:
    deployment = ctx.client().get_deployment(ctx.args.deployment_id)
    _show(ctx, deployment, format_deployment)
    return EXIT_SUCCESS


def _run_deploy_delete(ctx: CommandContext) -> int:
    deployment_id = ctx.args.deployment_id
    client = ctx.client()
    if not _confirm(ctx, f"Are you sure you want to delete deployment {deployment_id}?"):
        info("Deployment deletion cancelled", stdout=ctx.stdout)
        return EXIT_SUCCESS
    client.delete_deployment(deployment_id)
    success(f"Deployment {deployment_id} deleted successfully!", stdout=ctx.stdout)
    return EXIT_SUCCESS


def _run_deploy_logs(ctx: CommandContext) -> int:
    args = ctx.args
    logs = ctx.client().find_deployment_logs(args.deployment_id, since=args.since)
    if ctx.output_format != "table":
        ctx.render(logs)
        return EXIT_SUCCESS

    if logs.get("error"):
        warning(f"Deployment has errors: {logs['error']}", stdout=ctx.stdout)
    entries = logs.get("logs") or []
    if not entries:
        info("No logs found", stdout=ctx.stdout)
        return EXIT_SUCCESS
    detail_view("Deployment Logs:", [], stdout=ctx.stdout)
    ctx.render(entries, "table")
    if logs.get("nextSince"):
        note(f"\nNext logs available since: {logs['nextSince']}", stream=ctx.stdout)
    return EXIT_SUCCESS


def _run_deploy_errors(ctx: CommandContext) -> int:
    errors = ctx.client().find_deployment_errors(ctx.args.deployment_id)
    if ctx.output_format != "table":
        ctx.render(errors)
        return EXIT_SUCCESS

    if not errors.get("error"):
        info("No errors found for this deployment", stdout=ctx.stdout)
        return EXIT_SUCCESS
    rows = [("Error", errors.get("error"))]
    if errors.get("errorType"):
        rows.append(("Type", errors.get("errorType")))
    if errors.get("formattedError"):
        rows.append(("Formatted", errors.get("formattedError")))
    if errors.get("fullErrorText"):
        rows.append(("Full Error", errors.get("fullErrorText")))
    detail_view("Deployment Error:", rows, stdout=ctx.stdout, title_style="red")
    return EXIT_SUCCESS


# user


def _nested(data: dict, *keys: str) -> Any:
    current: Any = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _run_user_info(ctx: CommandContext) -> int:
    _show(ctx, ctx.client().get_user(), format_user)
    return EXIT_SUCCESS


def _run_user_plan(ctx: CommandContext) -> int:
    plan = ctx.client().get_plan()
    if ctx.output_format != "table":
        ctx.render(plan)
        return EXIT_SUCCESS
    detail_view(
        "User Plan:",
        [
            ("Plan", plan.get("plan")),
            ("Billing Cycle Start", _nested(plan, "billingCycle", "start")),
            ("Billing Cycle End", _nested(plan, "billingCycle", "end")),
            ("Balance Total", _nested(plan, "balance", "total")),
            ("Balance Remaining", _nested(plan, "balance", "remaining")),
        ],
        stdout=ctx.stdout,
    )
    return EXIT_SUCCESS


def _run_user_billing(ctx: CommandContext) -> int:
    billing = ctx.client().get_billing(scope=ctx.args.scope)
    if ctx.output_format != "table":
        ctx.render(billing)
        return EXIT_SUCCESS

    billing_type = billing.get("billingType")
    data = billing.get("data") if isinstance(billing.get("data"), dict) else {}
    rows: list[tuple[str, Any]] = [("Billing Type", billing_type)]
    if billing_type == "token":
        rows.extend(
            [
                ("Plan", data.get("plan")),
                ("Role", data.get("role")),
                ("Billing Mode", data.get("billingMode") or "production"),
                ("Billing Cycle Start", _nested(data, "billingCycle", "start")),
                ("Billing Cycle End", _nested(data, "billingCycle", "end")),
                ("Balance Total", _nested(data, "balance", "total")),
                ("Balance Remaining", _nested(data, "balance", "remaining")),
                ("On-Demand Balance", _nested(data, "onDemand", "balance")),
            ]
        )
    elif billing_type == "legacy":
        rows.append(("Limit", data.get("limit")))
        rows.append(("Remaining", data.get("remaining") or "Unknown"))
        if data.get("reset"):
            rows.append(("Reset", data.get("reset")))
    detail_view("Billing Information:", rows, stdout=ctx.stdout)
    return EXIT_SUCCESS


def _run_user_scopes(ctx: CommandContext) -> int:
    scopes = ctx.client().get_scopes()
    if ctx.output_format != "table":
        ctx.render(scopes)
        return EXIT_SUCCESS
    entries = _data(scopes)
    if not entries:
        info("No scopes found", stdout=ctx.stdout)
        return EXIT_SUCCESS
    detail_view("User Scopes:", [], stdout=ctx.stdout)
    for scope in entries:
        print(f"- {scope.get('name') or scope.get('id')}", file=ctx.stdout)
    return EXIT_SUCCESS


def _run_user_rate_limits(ctx: CommandContext) -> int:
    limits = ctx.client().get_rate_limits(scope=ctx.args.scope)
    if ctx.output_format != "table":
        ctx.render(limits)
        return EXIT_SUCCESS
    rows = [
        ("Limit", limits.get("limit")),
        ("Remaining", limits.get("remaining") or "Unknown"),
    ]
    if limits.get("reset"):
        rows.append(("Reset", limits.get("reset")))
    detail_view("Rate Limits:", rows, stdout=ctx.stdout)
    return EXIT_SUCCESS


# config


def _run_config_show(ctx: CommandContext) -> int:
    summary = describe(ctx.config)
    summary["Config File"] = str(ctx.store.path)
    if ctx.output_format == "table":
        detail_view("Current Configuration:", summary.items(), stdout=ctx.stdout)
    else:
        ctx.render(summary)
    return EXIT_SUCCESS


def _prompt_secret(ctx: CommandContext, message: str, required: str) -> str:
    while True:
        answer = (ctx.prompter.secret(message) or "").strip()
        if answer:
            return answer
        warning(required, stdout=ctx.stdout)


def _run_config_set_api_key(ctx: CommandContext) -> int:
    api_key = (ctx.args.value or "").strip() or _prompt_secret(
        ctx, "Enter your v0 API key", "API key is required"
    )
    ctx.store.set_config("api_key", api_key)
    success("API key set successfully!", stdout=ctx.stdout)
    info(f"You can get your API key from: {API_KEY_URL}", stdout=ctx.stdout)
    return EXIT_SUCCESS


def _run_config_set_default_project(ctx: CommandContext) -> int:
    project_id = (ctx.args.value or "").strip() or _prompt_required(
        ctx, "Enter project ID to set as default", "Project ID is required"
    )
    ctx.store.set_config("default_project", project_id)
    success("Default project set successfully!", stdout=ctx.stdout)
    return EXIT_SUCCESS


def _run_config_set_output_format(ctx: CommandContext) -> int:
    fmt = ctx.args.value or ctx.prompter.select(
        "Select default output format", OUTPUT_FORMAT_CHOICES, default="table"
    )
    ctx.store.set_config("output_format", fmt)
    success(f"Output format set to: {fmt}", stdout=ctx.stdout)
    return EXIT_SUCCESS


def _run_config_set_base_url(ctx: CommandContext) -> int:
    args = ctx.args
    base_value = None if args.clear else (args.value or "").strip()
    if not args.clear and not base_value:
        raise UsageError("base URL must not be empty")
    config_path = ctx.store.set_config("base_url", base_value)
    if args.clear:
        success(f"Base URL cleared ({config_path})", stdout=ctx.stdout)
    else:
        success(f"Base URL stored ({config_path})", stdout=ctx.stdout)
    if os.getenv(BASE_URL_ENV_VAR):
        warning(
            f"{BASE_URL_ENV_VAR} is currently set in the environment and will override "
            "the stored config value in this shell",
            stdout=ctx.stdout,
        )
    return EXIT_SUCCESS


def _run_config_clear(ctx: CommandContext) -> int:
    if not _confirm(
        ctx,
        "Are you sure you want to clear all configuration? "
        "This will remove your API key and other settings.",
    ):
        info("Configuration clear cancelled", stdout=ctx.stdout)
        return EXIT_SUCCESS
    ctx.store.clear_config()
    success("Configuration cleared successfully!", stdout=ctx.stdout)
    return EXIT_SUCCESS


def _run_config_setup(ctx: CommandContext) -> int:
    detail_view("Welcome to v0 CLI configuration setup!", [], stdout=ctx.stdout)
    note("This will help you configure the CLI for first use.\n", stream=ctx.stdout)

    api_key = _prompt_secret(ctx, "Enter your v0 API key", "API key is required")
    default_project = (
        ctx.prompter.text("Enter default project ID (optional)", default="") or ""
    ).strip()
    fmt = ctx.prompter.select(
        "Select default output format", OUTPUT_FORMAT_CHOICES, default="table"
    )

    ctx.store.set_config("api_key", api_key)
    if default_project:
        ctx.store.set_config("default_project", default_project)
    ctx.store.set_config("output_format", fmt)

    success("Configuration setup completed successfully!", stdout=ctx.stdout)
    note("\nYou can now use the v0 CLI. Try: v0 --help", stream=ctx.stdout)
    return EXIT_SUCCESS


# hook


def _run_hook_list(ctx: CommandContext) -> int:
    response = ctx.client().find_hooks()
    if ctx.output_format != "table":
        ctx.render(response)
        return EXIT_SUCCESS
    hooks = _data(response)
    if not hooks:
        info("No hooks found", stdout=ctx.stdout)
        return EXIT_SUCCESS
    rows = [
        {
            "id": hook.get("id"),
            "name": hook.get("name"),
            "url": hook.get("url"),
            "events": ", ".join(hook.get("events") or []),
        }
        for hook in hooks
    ]
    ctx.render(rows, "table")
    return EXIT_SUCCESS


def _run_hook_create(ctx: CommandContext) -> int:
    args = ctx.args
    client = ctx.client()
    name = args.name or _prompt_required(ctx, "Hook name", "Name is required")
    url = args.url or _prompt_required(ctx, "Webhook URL", "URL is required")
    events = list(args.events or [])
    if not events:
        events = ctx.prompter.multi_select(
            "Select events", [(event, event) for event in HOOK_EVENTS]
        )
    request = HookCreateRequest(
        name=name,
        url=url,
        events=events,
        chat_id=args.chat_id,
        project_id=args.project_id,
    )
    created = client.create_hook(request.to_payload())
    ctx.render(created)
    if ctx.output_format == "table":
        success("Hook created successfully!", stdout=ctx.stdout)
    return EXIT_SUCCESS


def _run_hook_get(ctx: CommandContext) -> int:
    ctx.render(ctx.client().get_hook(ctx.args.hook_id))
    return EXIT_SUCCESS


def _run_hook_update(ctx: CommandContext) -> int:
    args = ctx.args
    request = HookUpdateRequest(name=args.name, url=args.url, events=args.events or None)
    payload = request.to_payload()
    if not payload:
        raise UsageError("No update fields provided. Use --name, --url and/or --event")
    updated = ctx.client().update_hook(args.hook_id, payload)
    ctx.render(updated)
    if ctx.output_format == "table":
        success("Hook updated successfully!", stdout=ctx.stdout)
    return EXIT_SUCCESS


def _run_hook_delete(ctx: CommandContext) -> int:
    hook_id = ctx.args.hook_id
    client = ctx.client()
    if not _confirm(ctx, f"Are you sure you want to delete hook {hook_id}?"):
        info("Hook deletion cancelled", stdout=ctx.stdout)
        return EXIT_SUCCESS
    client.delete_hook(hook_id)
    success(f"Hook {hook_id} deleted successfully!", stdout=ctx.stdout)
    return EXIT_SUCCESS


# vercel


def _run_vercel_projects(ctx: CommandContext) -> int:
    response = ctx.client().find_vercel_projects()
    if ctx.output_format != "table":
        ctx.render(response)
        return EXIT_SUCCESS
    projects = _data(response)
    if not projects:
        info("No Vercel projects found", stdout=ctx.stdout)
        return EXIT_SUCCESS
    rows = [{"id": project.get("id"), "name": project.get("name")} for project in projects]
    ctx.render(rows, "table")
    return EXIT_SUCCESS


def _run_vercel_create(ctx: CommandContext) -> int:
    args = ctx.args
    request = VercelProjectCreateRequest(project_id=args.vercel_project_id, name=args.name)
    ctx.render(ctx.client().create_vercel_project(request.to_payload()))
    if ctx.output_format == "table":
        success("Integration project created", stdout=ctx.stdout)
    return EXIT_SUCCESS


# entry point


def _configure_logging(*, verbose: bool, stderr: TextIO) -> None:
    package_logger = logging.getLogger("v0_cli")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    handler = logging.StreamHandler(stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def _validation_message(exc: ValidationError) -> str:
    problems = []
    for item in exc.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        problems.append(f"{location}: {item.get('msg')}" if location else str(item.get("msg")))
    return "; ".join(problems) or str(exc)


def _fail(ctx: CommandContext, action: str, message: str, *, code: int) -> int:
    error(f"Failed to {action}: {sanitize_error_text(message)}", stderr=ctx.stderr)
    return code


def _run_command(ctx: CommandContext) -> int:
    handler = ctx.args.handler
    action = ctx.args.action
    try:
        return handler(ctx)
    except APIUnavailableError as exc:
        _fail(ctx, action, str(exc), code=EXIT_API_ERROR)
        print_api_error(exc, verbose=ctx.verbose, stderr=ctx.stderr)
        return EXIT_API_ERROR
    except ValidationError as exc:
        return _fail(ctx, action, _validation_message(exc), code=EXIT_VALIDATION_ERROR)
    except (ConfigError, UsageError) as exc:
        return _fail(ctx, action, str(exc), code=EXIT_VALIDATION_ERROR)
    except PromptUnavailableError as exc:
        return _fail(ctx, action, str(exc), code=EXIT_VALIDATION_ERROR)
    except OSError as exc:
        return _fail(ctx, action, str(exc), code=EXIT_VALIDATION_ERROR)


def main(
    argv: Sequence[str] | None = None,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    prompter: Prompter | None = None,
) -> int:
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(verbose=args.verbose, stderr=stderr)
    store = ConfigStore(args.config)
    ctx = CommandContext(
        args=args,
        store=store,
        config=store.get_config(),
        prompter=prompter or TerminalPrompter(),
        stdout=stdout,
        stderr=stderr,
    )
    logger.debug("running %s (output=%s)", args.command, ctx.output_format)
    return _run_command(ctx)


if __name__ == "__main__":
    raise SystemExit(main())

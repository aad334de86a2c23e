"""v0 CLI public surface."""

from v0_cli.client import DEFAULT_BASE_URL, V0Client
from v0_cli.errors import APIRequestError, APIUnavailableError, SDKTimeoutError, V0SDKError
from v0_cli.schemas import (
    DEFAULT_MODEL_ID,
    HOOK_EVENTS,
    ChatCreateRequest,
    DeploymentCreateRequest,
    HookCreateRequest,
    MessageCreateRequest,
    ProjectCreateRequest,
)

__all__ = [
    "V0SDKError",
    "APIUnavailableError",
    "APIRequestError",
    "SDKTimeoutError",
    "V0Client",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL_ID",
    "HOOK_EVENTS",
    "ChatCreateRequest",
    "MessageCreateRequest",
    "ProjectCreateRequest",
    "DeploymentCreateRequest",
    "HookCreateRequest",
]

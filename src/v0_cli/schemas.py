"""Request body schemas for the v0 Platform API."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_MODEL_ID = "v0-1.5-md"

HookEvent = Literal[
    "chat.created",
    "chat.updated",
    "chat.deleted",
    "message.created",
    "message.updated",
    "message.deleted",
    "project.created",
    "project.updated",
    "project.deleted",
]

HOOK_EVENTS: tuple[str, ...] = (
    "chat.created",
    "chat.updated",
    "chat.deleted",
    "message.created",
    "message.updated",
    "message.deleted",
    "project.created",
    "project.updated",
    "project.deleted",
)


class RequestBody(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        protected_namespaces=(),
    )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Attachment(RequestBody):
    url: str


class ModelConfiguration(RequestBody):
    model_id: str = DEFAULT_MODEL_ID


class SourceFile(RequestBody):
    name: str
    content: str


class RepoSource(RequestBody):
    url: str
    branch: Optional[str] = None


class UrlSource(RequestBody):
    url: str


class ChatCreateRequest(RequestBody):
    message: str = Field(..., min_length=1)
    system: Optional[str] = None
    chat_privacy: Optional[str] = None
    project_id: Optional[str] = None
    model_configuration: Optional[ModelConfiguration] = None
    attachments: Optional[List[Attachment]] = None


class ChatUpdateRequest(RequestBody):
    name: Optional[str] = None
    privacy: Optional[str] = None


class ChatInitRequest(RequestBody):
    type: Literal["files", "repo", "registry", "zip"]
    name: Optional[str] = None
    chat_privacy: Optional[str] = None
    project_id: Optional[str] = None
    lock_all_files: Optional[bool] = None
    files: Optional[List[SourceFile]] = None
    repo: Optional[RepoSource] = None
    registry: Optional[UrlSource] = None
    zip: Optional[UrlSource] = None


class MessageCreateRequest(RequestBody):
    message: str = Field(..., min_length=1)
    attachments: Optional[List[Attachment]] = None
    model_configuration: Optional[ModelConfiguration] = None
    response_mode: Optional[Literal["sync", "async"]] = None


class VersionUpdateRequest(RequestBody):
    files: List[SourceFile] = Field(..., min_length=1)


class EnvVarInput(RequestBody):
    key: str = Field(..., min_length=1)
    value: str


class EnvVarUpdate(RequestBody):
    id: str = Field(..., min_length=1)
    value: str


class ProjectCreateRequest(RequestBody):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    icon: Optional[str] = None
    instructions: Optional[str] = None
    vercel_project_id: Optional[str] = None
    privacy: Optional[str] = None
    environment_variables: Optional[List[EnvVarInput]] = None


class ProjectUpdateRequest(RequestBody):
    name: Optional[str] = None
    description: Optional[str] = None
    instructions: Optional[str] = None
    privacy: Optional[str] = None


class EnvVarsCreateRequest(RequestBody):
    environment_variables: List[EnvVarInput] = Field(..., min_length=1)
    upsert: bool = False


class EnvVarsUpdateRequest(RequestBody):
    environment_variables: List[EnvVarUpdate] = Field(..., min_length=1)


class EnvVarsDeleteRequest(RequestBody):
    environment_variable_ids: List[str] = Field(..., min_length=1)


class DeploymentCreateRequest(RequestBody):
    project_id: str = Field(..., min_length=1)
    chat_id: str = Field(..., min_length=1)
    version_id: str = Field(..., min_length=1)


class HookCreateRequest(RequestBody):
    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    events: List[HookEvent] = Field(..., min_length=1)
    chat_id: Optional[str] = None
    project_id: Optional[str] = None


class HookUpdateRequest(RequestBody):
    name: Optional[str] = None
    url: Optional[str] = None
    events: Optional[List[HookEvent]] = None


class VercelProjectCreateRequest(RequestBody):
    project_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)

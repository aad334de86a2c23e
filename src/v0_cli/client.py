"""Thin HTTP client for the v0 Platform API."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from v0_cli.errors import APIRequestError, APIUnavailableError, SDKTimeoutError

DEFAULT_BASE_URL = "https://api.v0.dev/v1"

logger = logging.getLogger(__name__)


def _error_fields(body: object) -> tuple[object | None, str | None]:
    if not isinstance(body, dict):
        return None, None
    detail = body.get("detail")
    raw_code = body.get("error_code") or body.get("code")
    nested = body.get("error")
    if isinstance(nested, dict):
        if detail is None:
            detail = nested.get("message")
        if raw_code is None:
            raw_code = nested.get("type")
    elif isinstance(nested, str) and detail is None:
        detail = nested
    if detail is None:
        detail = body.get("message")
    error_code = str(raw_code) if isinstance(raw_code, str) else None
    return detail, error_code


@dataclass
class V0Client:
    api_key: str
    base_url: str | None = None
    timeout: float = 30.0

    def __post_init__(self) -> None:
        try:
            import requests
        except Exception as exc:  # pragma: no cover
            raise APIUnavailableError(f"requests stack unavailable: {exc}") from exc

        self._session = requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {self.api_key}",
                "Accept": "application/json",
            }
        )
        if not self.base_url:
            self.base_url = DEFAULT_BASE_URL

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_payload: dict | None = None,
        params: dict | None = None,
    ) -> dict:
        query = {k: v for k, v in (params or {}).items() if v is not None} or None
        logger.debug("%s %s params=%s", method, path, query)
        try:
            response = self._session.request(
                method,
                self._url(path),
                json=json_payload,
                params=query,
                timeout=self.timeout,
            )
        except Exception as exc:  # pragma: no cover
            raise APIUnavailableError(str(exc)) from exc

        if response.status_code >= 400:
            try:
                body = response.json()
            except Exception:
                body = None
            detail, error_code = _error_fields(body)
            if isinstance(detail, str):
                message = f"API request failed: {response.status_code} {detail}"
            else:
                message = f"API request failed: {response.status_code} {response.text}"
            raise APIRequestError(
                message,
                status_code=response.status_code,
                detail=detail,
                error_code=error_code,
                body=body,
            )
        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    # chats

    def create_chat(self, payload: dict) -> dict:
        return self._request("POST", "/chats", json_payload=payload)

    def find_chats(self, *, limit: int | None = None, is_favorite: bool | None = None) -> dict:
        params = {"limit": limit}
        if is_favorite:
            params["isFavorite"] = "true"
        return self._request("GET", "/chats", params=params)

    def get_chat(self, chat_id: str) -> dict:
        return self._request("GET", f"/chats/{chat_id}")

    def update_chat(self, chat_id: str, payload: dict) -> dict:
        return self._request("PATCH", f"/chats/{chat_id}", json_payload=payload)

    def delete_chat(self, chat_id: str) -> dict:
        return self._request("DELETE", f"/chats/{chat_id}")

    def favorite_chat(self, chat_id: str, *, is_favorite: bool) -> dict:
        return self._request(
            "PUT",
            f"/chats/{chat_id}/favorite",
            json_payload={"isFavorite": is_favorite},
        )

    def fork_chat(self, chat_id: str, *, version_id: str | None = None) -> dict:
        payload = {"versionId": version_id} if version_id else {}
        return self._request("POST", f"/chats/{chat_id}/fork", json_payload=payload)

    def init_chat(self, payload: dict) -> dict:
        return self._request("POST", "/chats/init", json_payload=payload)

    def find_messages(
        self, chat_id: str, *, limit: int | None = None, cursor: str | None = None
    ) -> dict:
        return self._request(
            "GET",
            f"/chats/{chat_id}/messages",
            params={"limit": limit, "cursor": cursor},
        )

    def get_message(self, chat_id: str, message_id: str) -> dict:
        return self._request("GET", f"/chats/{chat_id}/messages/{message_id}")

    def send_message(self, chat_id: str, payload: dict) -> dict:
        return self._request("POST", f"/chats/{chat_id}/messages", json_payload=payload)

    def resume_message(self, chat_id: str, message_id: str) -> dict:
        return self._request("POST", f"/chats/{chat_id}/messages/{message_id}/resume")

    def find_versions(
        self, chat_id: str, *, limit: int | None = None, cursor: str | None = None
    ) -> dict:
        return self._request(
            "GET",
            f"/chats/{chat_id}/versions",
            params={"limit": limit, "cursor": cursor},
        )

    def get_version(self, chat_id: str, version_id: str) -> dict:
        return self._request("GET", f"/chats/{chat_id}/versions/{version_id}")

    def update_version(self, chat_id: str, version_id: str, payload: dict) -> dict:
        return self._request(
            "PATCH",
            f"/chats/{chat_id}/versions/{version_id}",
            json_payload=payload,
        )

    def wait_for_version(
        self,
        chat_id: str,
        *,
        timeout: float,
        interval: float = 3.0,
    ) -> dict:
        """Poll a chat until its latest version finishes generating.

        Returns the version once its status is `completed` or `failed`.
        """
        deadline = time.time() + timeout
        while time.time() < deadline:
            latest = self.get_chat(chat_id).get("latestVersion") or {}
            if latest.get("status") in ("completed", "failed"):
                return latest
            time.sleep(max(0.1, interval))
        raise SDKTimeoutError(f"timed out waiting for chat version: chat_id={chat_id}")

    # projects

    def create_project(self, payload: dict) -> dict:
        return self._request("POST", "/projects", json_payload=payload)

    def find_projects(self) -> dict:
        return self._request("GET", "/projects")

    def get_project(self, project_id: str) -> dict:
        return self._request("GET", f"/projects/{project_id}")

    def update_project(self, project_id: str, payload: dict) -> dict:
        return self._request("PATCH", f"/projects/{project_id}", json_payload=payload)

    def assign_project(self, project_id: str, *, chat_id: str) -> dict:
        return self._request(
            "POST",
            f"/projects/{project_id}/assign",
            json_payload={"chatId": chat_id},
        )

    def get_project_by_chat(self, chat_id: str) -> dict:
        return self._request("GET", f"/chats/{chat_id}/project")

    def find_env_vars(self, project_id: str, *, decrypted: bool = False) -> dict:
        return self._request(
            "GET",
            f"/projects/{project_id}/env-vars",
            params={"decrypted": "true" if decrypted else None},
        )

    def get_env_var(self, project_id: str, env_var_id: str, *, decrypted: bool = False) -> dict:
        return self._request(
            "GET",
            f"/projects/{project_id}/env-vars/{env_var_id}",
            params={"decrypted": "true" if decrypted else None},
        )

    def create_env_vars(self, project_id: str, payload: dict, *, decrypted: bool = False) -> dict:
        return self._request(
            "POST",
            f"/projects/{project_id}/env-vars",
            json_payload=payload,
            params={"decrypted": "true" if decrypted else None},
        )

    def update_env_vars(self, project_id: str, payload: dict, *, decrypted: bool = False) -> dict:
        return self._request(
            "PATCH",
            f"/projects/{project_id}/env-vars",
            json_payload=payload,
            params={"decrypted": "true" if decrypted else None},
        )

    def delete_env_vars(self, project_id: str, payload: dict) -> dict:
        return self._request(
            "POST",
            f"/projects/{project_id}/env-vars/delete",
            json_payload=payload,
        )

    # deployments

    def find_deployments(
        self,
        *,
        project_id: str | None = None,
        chat_id: str | None = None,
        version_id: str | None = None,
    ) -> dict:
        return self._request(
            "GET",
            "/deployments",
            params={"projectId": project_id, "chatId": chat_id, "versionId": version_id},
        )

    def create_deployment(self, payload: dict) -> dict:
        return self._request("POST", "/deployments", json_payload=payload)

    def get_deployment(self, deployment_id: str) -> dict:
        return self._request("GET", f"/deployments/{deployment_id}")

    def delete_deployment(self, deployment_id: str) -> dict:
        return self._request("DELETE", f"/deployments/{deployment_id}")

    def find_deployment_logs(self, deployment_id: str, *, since: str | None = None) -> dict:
        return self._request(
            "GET",
            f"/deployments/{deployment_id}/logs",
            params={"since": since},
        )

    def find_deployment_errors(self, deployment_id: str) -> dict:
        return self._request("GET", f"/deployments/{deployment_id}/errors")

    # hooks

    def find_hooks(self) -> dict:
        return self._request("GET", "/hooks")

    def create_hook(self, payload: dict) -> dict:
        return self._request("POST", "/hooks", json_payload=payload)

    def get_hook(self, hook_id: str) -> dict:
        return self._request("GET", f"/hooks/{hook_id}")

    def update_hook(self, hook_id: str, payload: dict) -> dict:
        return self._request("PATCH", f"/hooks/{hook_id}", json_payload=payload)

    def delete_hook(self, hook_id: str) -> dict:
        return self._request("DELETE", f"/hooks/{hook_id}")

    # user

    def get_user(self) -> dict:
        return self._request("GET", "/user")

    def get_plan(self) -> dict:
        return self._request("GET", "/user/plan")

    def get_billing(self, *, scope: str | None = None) -> dict:
        return self._request("GET", "/user/billing", params={"scope": scope})

    def get_scopes(self) -> dict:
        return self._request("GET", "/user/scopes")

    def get_rate_limits(self, *, scope: str | None = None) -> dict:
        return self._request("GET", "/rate-limits", params={"scope": scope})

    # integrations

    def find_vercel_projects(self) -> dict:
        return self._request("GET", "/integrations/vercel/projects")

    def create_vercel_project(self, payload: dict) -> dict:
        return self._request("POST", "/integrations/vercel/projects", json_payload=payload)


__all__ = ["DEFAULT_BASE_URL", "V0Client"]

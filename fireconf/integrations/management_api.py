"""Firebase Management API client.

ManagementApiClient implements ProjectService over the public REST APIs:

- Listing pages through ``GET /v1beta1/projects``.
- Creating first creates a Google Cloud project through the Cloud Resource
  Manager, then calls ``projects/{id}:addFirebase``. Both steps are
  long-running operations that are polled until done.

HTTP Client Sharing:
    One httpx.AsyncClient is shared for the lifetime of the client. Use it
    as an async context manager (``async with ManagementApiClient(...)``)
    so the connection pool is closed deterministically.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import httpx

from fireconf.config.settings import (
    DEFAULT_API_BASE_URL,
    DEFAULT_RESOURCE_MANAGER_URL,
    Settings,
)
from fireconf.integrations.projects import BackendProject
from fireconf.utils.errors import ProjectApiError
from fireconf.utils.logging import log_message
from fireconf.utils.retry import RetryConfig, retry_async

PAGE_SIZE = 100

# Resolves the bearer token for an (optional) account identifier.
TokenProvider = Callable[[str | None], str]


class ManagementApiClient:
    """Async client for listing and creating Firebase projects.

    Transient failures (transport errors, 429 and 5xx responses) are
    retried with exponential backoff; every other failure is raised as
    ProjectApiError.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        resource_manager_url: str = DEFAULT_RESOURCE_MANAGER_URL,
        timeout_seconds: float = 30.0,
        retry_config: RetryConfig | None = None,
        poll_interval_seconds: float = 2.0,
        max_polls: int = 60,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._token_provider = token_provider
        self._base_url = base_url.rstrip("/")
        self._resource_manager_url = resource_manager_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._retry_config = retry_config or RetryConfig()
        self._poll_interval_seconds = poll_interval_seconds
        self._max_polls = max_polls
        self._http_client = http_client
        self._owns_client = http_client is None

    @classmethod
    def from_settings(cls, settings: Settings) -> ManagementApiClient:
        """Build a client from loaded configuration."""
        return cls(
            lambda account: settings.access_token,
            base_url=settings.api_base_url,
            resource_manager_url=settings.resource_manager_url,
            timeout_seconds=float(settings.http_timeout_seconds),
            retry_config=RetryConfig(max_retries=max(settings.http_max_retries, 0)),
            poll_interval_seconds=float(settings.operation_poll_seconds),
            max_polls=settings.operation_max_polls,
        )

    async def __aenter__(self) -> ManagementApiClient:
        """Enter async context manager, ensuring HTTP client is initialized."""
        self._get_http_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager, closing HTTP client."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this instance created it. Safe to call twice."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout_seconds))
            self._owns_client = True
        return self._http_client

    def _headers(self, account: str | None) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self._token_provider(account)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        account: str | None,
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request with retry and return the decoded JSON body."""
        client = self._get_http_client()

        async def send() -> httpx.Response:
            response = await client.request(
                method,
                url,
                headers=self._headers(account),
                params=params,
                json=json_data,
            )
            response.raise_for_status()
            return response

        def on_retry(attempt: int, delay: float, error: Exception) -> None:
            log_message(f"{operation}: retry {attempt} in {delay:.1f}s after {error}")

        try:
            response = await retry_async(send, self._retry_config, on_retry=on_retry)
        except httpx.HTTPStatusError as e:
            raise ProjectApiError(
                _error_message(e.response),
                operation=operation,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ProjectApiError(str(e) or type(e).__name__, operation=operation) from e

        try:
            body = response.json()
        except ValueError as e:
            raise ProjectApiError("Response was not valid JSON", operation=operation) from e
        return body if isinstance(body, dict) else {}

    async def list_projects(self, account: str | None = None) -> list[BackendProject]:
        """Return every Firebase project visible to the account."""
        projects: list[BackendProject] = []
        page_token = ""
        seen_tokens: set[str] = set()
        while True:
            params = {"pageSize": str(PAGE_SIZE)}
            if page_token:
                params["pageToken"] = page_token
            body = await self._request(
                "GET",
                f"{self._base_url}/projects",
                operation="list projects",
                account=account,
                params=params,
            )
            projects.extend(BackendProject.from_api(item) for item in body.get("results", []))
            page_token = body.get("nextPageToken", "")
            if not page_token:
                break
            if page_token in seen_tokens:
                raise ProjectApiError(
                    f"Pagination did not advance (repeated page token {page_token!r})",
                    operation="list projects",
                )
            seen_tokens.add(page_token)
        log_message(f"Fetched {len(projects)} Firebase projects")
        return projects

    async def create_project(self, project_id: str, account: str | None = None) -> BackendProject:
        """Create a Cloud project and add Firebase to it."""
        operation = await self._request(
            "POST",
            f"{self._resource_manager_url}/projects",
            operation="create project",
            account=account,
            json_data={"projectId": project_id, "name": project_id},
        )
        await self._wait_for_operation(
            self._resource_manager_url, operation, "create project", account
        )

        operation = await self._request(
            "POST",
            f"{self._base_url}/projects/{project_id}:addFirebase",
            operation="add Firebase",
            account=account,
            json_data={},
        )
        done = await self._wait_for_operation(self._base_url, operation, "add Firebase", account)

        response = done.get("response") or {}
        if not response.get("projectId"):
            response = {"projectId": project_id, "displayName": project_id, **response}
        log_message(f"Created Firebase project {project_id}")
        return BackendProject.from_api(response)

    async def _wait_for_operation(
        self,
        base_url: str,
        operation: dict[str, Any],
        name: str,
        account: str | None,
    ) -> dict[str, Any]:
        """Poll a long-running operation until it reports done."""
        polls = 0
        while not operation.get("done"):
            operation_name = operation.get("name")
            if not operation_name:
                raise ProjectApiError(
                    "Operation is not done and has no name to poll", operation=name
                )
            if polls >= self._max_polls:
                raise ProjectApiError(
                    f"Operation {operation_name} did not finish after {polls} polls",
                    operation=name,
                )
            polls += 1
            await asyncio.sleep(self._poll_interval_seconds)
            operation = await self._request(
                "GET",
                f"{base_url}/{operation_name}",
                operation=name,
                account=account,
            )

        error = operation.get("error")
        if error:
            raise ProjectApiError(
                str(error.get("message", error)),
                operation=name,
                status_code=error.get("code"),
            )
        return operation


def _error_message(response: httpx.Response) -> str:
    """Extract the Google API error message from a failed response."""
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message")
        if message:
            return f"HTTP {response.status_code}: {message}"
    return f"HTTP {response.status_code}"


__all__ = [
    "ManagementApiClient",
    "TokenProvider",
    "PAGE_SIZE",
]

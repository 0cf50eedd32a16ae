"""GitHub REST API client for listing a user's public repositories."""

from typing import Any

import httpx
import structlog

from core.config import settings
from core.exceptions import GitHubUserNotFoundError, UpstreamUnavailableError

logger = structlog.get_logger()


class GitHubClient:
    """Thin async wrapper around ``GET /users/{username}/repos``.

    A non-200 answer and a transport failure surface as different errors so
    callers can tell "no such user" from "GitHub is down".
    """

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        token: str = settings.github_token,
        timeout: float = settings.github_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport

    async def list_repos(self, username: str) -> list[dict[str, Any]]:
        """Return the user's repositories, oldest first."""
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": settings.app_name,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    f"/users/{username}/repos",
                    params={"sort": "created", "direction": "asc"},
                    headers=headers,
                )
        except httpx.HTTPError as e:
            logger.error("github_request_failed", username=username, error=str(e))
            raise UpstreamUnavailableError("GitHub") from e

        if response.status_code != 200:
            logger.info(
                "github_user_not_found",
                username=username,
                upstream_status=response.status_code,
            )
            raise GitHubUserNotFoundError(username, response.status_code)

        return response.json()  # type: ignore[no-any-return]

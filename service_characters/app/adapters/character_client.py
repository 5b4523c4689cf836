"""
Upstream character API client for the Characters Service.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from shared.logging import get_logger
from shared.errors import NotFoundError, UpstreamServiceError


class CharacterApiClient:
    """Client for the public character REST API."""

    SERVICE_NAME = "character_api"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.logger = get_logger("characters.upstream")
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Return the shared HTTP client, creating it on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def list_characters(self) -> Any:
        """Fetch the first page of all characters."""
        return await self._get("/character", not_found_message="No characters available")

    async def get_character(self, character_id: str) -> Any:
        """Fetch a single character by id."""
        return await self._get(
            f"/character/{quote(str(character_id), safe=',')}",
            not_found_message=f"Character with ID {character_id} not found",
            details={"id": character_id},
        )

    async def search_characters(self, name: str) -> Any:
        """Search characters by name."""
        return await self._get(
            "/character/",
            params={"name": name},
            not_found_message=f'No characters found with name "{name}"',
            details={"name": name},
        )

    async def _get(
        self,
        path: str,
        *,
        not_found_message: str,
        params: Optional[Dict[str, Any]] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Execute a GET against the upstream API and decode the JSON body."""
        url = f"{self.base_url}{path}"
        try:
            response = await self._get_client().get(path, params=params)
        except httpx.TimeoutException as exc:
            self.logger.error("Upstream request timed out", url=url, params=params, timeout=self.timeout)
            raise UpstreamServiceError(
                self.SERVICE_NAME,
                f"request timed out after {self.timeout}s",
                details={"url": url},
            ) from exc
        except httpx.HTTPError as exc:
            self.logger.error("Upstream request failed", url=url, params=params, error=str(exc))
            raise UpstreamServiceError(
                self.SERVICE_NAME,
                str(exc) or exc.__class__.__name__,
                details={"url": url},
            ) from exc

        if response.status_code == 404:
            self.logger.info("Upstream resource not found", url=url, params=params)
            raise NotFoundError(not_found_message, details=details)

        if response.status_code != 200:
            self.logger.error(
                "Upstream request returned unexpected status",
                url=url,
                params=params,
                status_code=response.status_code,
                response=response.text
            )
            raise UpstreamServiceError(
                self.SERVICE_NAME,
                f"Unexpected status {response.status_code}",
                details={"status_code": response.status_code, "body": response.text}
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamServiceError(
                self.SERVICE_NAME,
                "response body is not valid JSON",
                details={"url": url},
            ) from exc

        self.logger.debug("Upstream response retrieved", url=url, params=params)
        return data

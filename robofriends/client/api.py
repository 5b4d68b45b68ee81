"""
RoboFriends Client — HTTP API Wrapper
=======================================

What:  Async wrapper around the three /api/robots endpoints.
Why:   Gives the controller one uniform result type per call, so the
       creation flow never inspects status codes or content types itself.
How:   httpx.AsyncClient for transport; every httpx error, non-OK status and
       non-JSON body is converted into a Failure result and logged.

Result mapping:
    2xx + JSON                          → Ok(parsed payload)
    400 {"code": "duplicate_robot"}     → ConflictFailure(msg)
    400 (any other JSON)                → ValidationFailure(msg)
    other non-2xx JSON                  → TransportFailure(msg or "HTTP error! status: N")
    non-JSON body / httpx.HTTPError     → TransportFailure(description)

No retries: a failed call is reported once and the user decides what to do.
"""

import logging
from typing import Any, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError as SchemaError

from robofriends.client.results import (
    ApiResult,
    ConflictFailure,
    Ok,
    TransportFailure,
    ValidationFailure,
)
from robofriends.config import ClientSettings
from robofriends.exceptions import DUPLICATE_ROBOT_MESSAGE
from robofriends.schemas.robot import RobotCreate, RobotResponse

logger = logging.getLogger(__name__)

ROBOTS_PATH = "/api/robots"


def _json_or_none(response: httpx.Response) -> Optional[Any]:
    """Parsed JSON body, or None when the response is not JSON."""
    content_type = response.headers.get("content-type", "")
    if "application/json" not in content_type:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _not_json(response: httpx.Response) -> TransportFailure:
    content_type = response.headers.get("content-type") or "no content type"
    return TransportFailure(
        message=f"Expected JSON, got {content_type}. Response body: {response.text}"
    )


def _status_error(response: httpx.Response) -> TransportFailure:
    return TransportFailure(message=f"HTTP error! status: {response.status_code}")


class RobotsAPI:
    """
    Client for the Directory Service.

    Args:
        base_url: Service root, e.g. "http://localhost:5000". Defaults to
                  ROBOFRIENDS_API_URL (ClientSettings.api_url).
        client:   Optional pre-built httpx.AsyncClient (tests pass one with
                  a mock or ASGI transport). A client passed in is not closed
                  by aclose().
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        client_settings = ClientSettings()
        self.base_url = (base_url or client_settings.api_url).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout or client_settings.request_timeout,
        )

    async def __aenter__(self) -> "RobotsAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _url(self, path: str = "") -> str:
        return f"{self.base_url}{ROBOTS_PATH}{path}"

    async def list_robots(self) -> ApiResult:
        """GET /api/robots → Ok(List[RobotResponse])."""
        try:
            response = await self._client.get(self._url())
        except httpx.HTTPError as e:
            logger.error("Error fetching robots: %s", e)
            return TransportFailure(message=str(e) or type(e).__name__)

        if not response.is_success:
            return _status_error(response)

        body = _json_or_none(response)
        if body is None:
            return _not_json(response)

        try:
            robots: List[RobotResponse] = [RobotResponse.model_validate(item) for item in body]
        except (SchemaError, TypeError) as e:
            logger.error("Malformed robot list from service: %s", e)
            return TransportFailure(message="Received a malformed robot list from the server.")

        return Ok(value=robots)

    async def check_phone(self, phone: str) -> ApiResult:
        """
        GET /api/robots/check-phone/{phone} → Ok(bool).

        The phone is percent-encoded and sent otherwise unchanged. The route
        takes the rest of the path, so a phone containing "/" still reaches
        the service verbatim.
        """
        try:
            response = await self._client.get(self._url(f"/check-phone/{quote(phone, safe='')}"))
        except httpx.HTTPError as e:
            logger.error("Error checking phone number: %s", e)
            return TransportFailure(message=str(e) or type(e).__name__)

        if not response.is_success:
            return _status_error(response)

        body = _json_or_none(response)
        if not isinstance(body, dict) or "exists" not in body:
            return _not_json(response)

        return Ok(value=bool(body["exists"]))

    async def create_robot(self, draft: RobotCreate) -> ApiResult:
        """POST /api/robots → Ok(RobotResponse) echoing the stored record."""
        try:
            response = await self._client.post(
                self._url(),
                json=draft.model_dump(by_alias=True),
            )
        except httpx.HTTPError as e:
            logger.error("Error adding robot: %s", e)
            return TransportFailure(message=str(e) or type(e).__name__)

        body = _json_or_none(response)

        if not response.is_success:
            if body is None:
                return TransportFailure(
                    message=(
                        f"HTTP error! status: {response.status_code}. "
                        f"Response body: {response.text}"
                    )
                )
            fields = body if isinstance(body, dict) else {}
            message = fields.get("msg") or f"HTTP error! status: {response.status_code}"
            if response.status_code == 400:
                if fields.get("code") == "duplicate_robot" or message == DUPLICATE_ROBOT_MESSAGE:
                    return ConflictFailure(message=message)
                return ValidationFailure(message=message)
            return TransportFailure(message=message)

        if body is None:
            return _not_json(response)

        try:
            return Ok(value=RobotResponse.model_validate(body))
        except SchemaError as e:
            logger.error("Malformed robot from service: %s", e)
            return TransportFailure(message="Received a malformed robot from the server.")

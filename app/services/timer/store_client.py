"""
Timer Store Client

HTTP client for the /api/timer session store.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from app.config import TIMER_API_TIMEOUT_SECONDS, TIMER_API_URL
from app.features.timer.domain import TimerSession, TimerSessionUpdate, TimerState

logger = logging.getLogger(__name__)

TIMER_PATH = "/api/timer"


class TimerStoreError(Exception):
    """The store could not be reached or failed to handle the request"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TimerNotFoundError(TimerStoreError):
    """The user has no active session"""


class TimerValidationError(TimerStoreError):
    """The store rejected the payload"""

    def __init__(self, message: str, errors: List[Dict[str, Any]]):
        super().__init__(message, status_code=400)
        self.errors = errors


class TimerStoreClient:
    """Async client for the single-active-session store"""

    def __init__(
        self,
        base_url: str = TIMER_API_URL,
        user_id: Optional[int] = None,
        timeout: float = TIMER_API_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Root URL of the timer service
            user_id: Sent as X-User-Id; None lets the service pick its default user
            timeout: Per-request timeout in seconds
            client: Shared HTTP client; the caller keeps ownership
            transport: Transport for the client created here (ignored with ``client``)
        """
        headers = {"X-User-Id": str(user_id)} if user_id is not None else {}
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)
        self._client = client
        self._headers = headers

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, json: Optional[dict] = None) -> httpx.Response:
        try:
            response = await self._client.request(method, TIMER_PATH, json=json, headers=self._headers)
        except httpx.HTTPError as e:
            raise TimerStoreError(f"{method} {TIMER_PATH} failed: {e}") from e

        if response.status_code == 404:
            raise TimerNotFoundError("No active timer session found", status_code=404)
        if response.status_code == 400:
            try:
                payload = response.json()
            except ValueError:
                payload = {}
            raise TimerValidationError(
                payload.get("message", "Invalid timer data"),
                payload.get("errors", []),
            )
        if response.is_error:
            raise TimerStoreError(
                f"{method} {TIMER_PATH} returned {response.status_code}",
                status_code=response.status_code,
            )
        return response

    async def get_active(self) -> Optional[TimerSession]:
        """
        Fetch the active session.

        Returns:
            The session, or None if the user has none
        """
        try:
            response = await self._request("GET")
        except TimerNotFoundError:
            return None
        return TimerSession.model_validate(response.json())

    async def create(self, state: TimerState) -> TimerSession:
        """Create a session from local state, replacing any existing one"""
        payload = state.to_state().model_dump(by_alias=True, mode="json")
        response = await self._request("POST", json=payload)
        return TimerSession.model_validate(response.json())

    async def update(self, state: TimerState) -> TimerSession:
        """
        Push the full client-owned state.

        Raises:
            TimerNotFoundError: The session was deleted meanwhile
        """
        payload = TimerSessionUpdate.from_state(state).model_dump(by_alias=True, mode="json")
        response = await self._request("PUT", json=payload)
        return TimerSession.model_validate(response.json())

    async def delete(self) -> None:
        """Delete the active session; succeeds when there is none"""
        await self._request("DELETE")

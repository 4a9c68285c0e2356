"""
HTTP client for a live activity relay.

The relay owns the OS-level surface (lock screen / dynamic island); this
client only pushes the content state:

    POST {base}/activities                      {"session_id", "title"}
    POST {base}/activities/{session_id}/update  {"state": <snapshot>}
    POST {base}/activities/{session_id}/end     {"state": <snapshot>}
"""

import logging
from typing import Any, Dict, Optional

import httpx

from application.errors import BroadcastError
from domain.models import LiveStatusSnapshot

logger = logging.getLogger(__name__)


class HttpLiveStatusBroadcaster:
    """
    LiveStatusBroadcaster that posts snapshots to a relay over HTTP.

    Non-2xx responses, connection errors and timeouts raise BroadcastError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the broadcaster.

        Args:
            base_url: Base URL of the relay (e.g., "http://live-relay:8010")
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._session_id: Optional[str] = None

    @property
    def session_id(self) -> Optional[str]:
        return self._session_id

    async def start(self, session_id: str, title: str) -> None:
        await self._post("/activities", {"session_id": session_id, "title": title})
        self._session_id = session_id
        logger.info(f"Live activity started for session {session_id}")

    async def update(self, snapshot: LiveStatusSnapshot) -> None:
        session_id = self._require_session("update")
        await self._post(
            f"/activities/{session_id}/update",
            {"state": snapshot.model_dump(mode="json")},
        )

    async def end(self, final_snapshot: LiveStatusSnapshot) -> None:
        session_id = self._require_session("end")
        # The handle is released even if the relay rejects the final push.
        self._session_id = None
        await self._post(
            f"/activities/{session_id}/end",
            {"state": final_snapshot.model_dump(mode="json")},
        )
        logger.info(f"Live activity ended for session {session_id}")

    def _require_session(self, action: str) -> str:
        if self._session_id is None:
            raise BroadcastError(f"Cannot {action} live activity: none started")
        return self._session_id

    async def _post(self, path: str, payload: Dict[str, Any]) -> None:
        url = f"{self._base_url}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(url, json=payload)
        except httpx.TimeoutException as e:
            logger.error(f"Live status relay timeout: {e}")
            raise BroadcastError("Live status relay request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Live status relay unavailable: {e}")
            raise BroadcastError(
                f"Live status relay is not available at {self._base_url}"
            ) from e

        if not response.is_success:
            logger.error(
                f"Live status relay error: {response.status_code} - {response.text}"
            )
            raise BroadcastError(
                f"Live status relay rejected {path}: {response.status_code}"
            )

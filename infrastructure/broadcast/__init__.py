"""Live status broadcaster adapters."""

import logging
from typing import Optional

from application.ports import LiveStatusBroadcaster
from infrastructure.broadcast.http_broadcaster import HttpLiveStatusBroadcaster

logger = logging.getLogger(__name__)


def build_broadcaster(
    enabled: bool,
    url: Optional[str],
    timeout: float = 5.0,
) -> Optional[LiveStatusBroadcaster]:
    """
    Build the configured broadcaster, or None when the surface is absent.

    Args:
        enabled: LIVE_STATUS_ENABLED
        url: LIVE_STATUS_URL
        timeout: Per-request timeout in seconds
    """
    if not enabled:
        return None
    if not url:
        logger.warning("LIVE_STATUS_ENABLED is set but LIVE_STATUS_URL is empty; broadcaster disabled")
        return None
    return HttpLiveStatusBroadcaster(url, timeout=timeout)


__all__ = ["HttpLiveStatusBroadcaster", "build_broadcaster"]

"""Delayed responses posted to a slash command's `response_url`."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from .errors import DelayedResponseError

logger = structlog.get_logger("slack_router.delayed")

DEFAULT_TIMEOUT = 10.0


async def send_delayed_response(
    response_url: str,
    envelope: dict[str, Any],
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> None:
    """POST an envelope to Slack as JSON.

    Args:
        response_url: The URL Slack sent with the command payload.
        envelope: A response envelope, e.g. from `ephemeral_response`.
        client: Client to reuse; a short-lived one is created if omitted.
        timeout: Request timeout in seconds for a short-lived client.

    Raises:
        DelayedResponseError: If the URL is empty, the request fails, or Slack
            answers with a non-2xx status.
    """
    if not response_url:
        raise DelayedResponseError("missing response_url")

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as owned:
                response = await owned.post(response_url, json=envelope)
        else:
            response = await client.post(response_url, json=envelope)
    except httpx.HTTPError as exc:
        logger.warning("slack_router.delayed.request_failed", error=str(exc))
        raise DelayedResponseError(f"delayed response failed: {exc}") from exc

    if not response.is_success:
        logger.warning(
            "slack_router.delayed.rejected",
            status_code=response.status_code,
            body=response.text[:200],
        )
        raise DelayedResponseError(
            f"delayed response rejected ({response.status_code})",
            status_code=response.status_code,
        )
    logger.debug("slack_router.delayed.sent", status_code=response.status_code)

"""Response envelope builders for Slack slash commands."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Literal

ResponseType = Literal["ephemeral", "in_channel"]

HELP_TEXT = "Available commands:"


def _build_response(
    text: str,
    response_type: ResponseType,
    attachments: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Build an envelope, adding `attachments` only when some are given."""
    envelope: dict[str, Any] = {"text": text}
    if attachments is not None:
        envelope["attachments"] = [{"text": item} for item in attachments]
    envelope["response_type"] = response_type
    return envelope


def ephemeral_response(
    text: str, attachments: Iterable[str] | None = None
) -> dict[str, Any]:
    """Envelope only visible to the user who issued the command."""
    return _build_response(text, "ephemeral", attachments)


def in_channel_response(
    text: str, attachments: Iterable[str] | None = None
) -> dict[str, Any]:
    """Envelope posted to the whole channel."""
    return _build_response(text, "in_channel", attachments)


def help_response(lines: Iterable[str]) -> dict[str, Any]:
    return ephemeral_response(HELP_TEXT, ["\n".join(lines)])

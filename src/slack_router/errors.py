"""Exceptions raised by the Slack command router."""

from __future__ import annotations


class SlackRouterError(Exception):
    """Base class for router errors."""


class ConfigError(SlackRouterError):
    """Invalid setup: bad config file, bad command or alias registration."""


class ArgSpecError(ConfigError):
    """An argument declaration could not be compiled."""


class DelayedResponseError(SlackRouterError):
    """Posting to a `response_url` failed."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

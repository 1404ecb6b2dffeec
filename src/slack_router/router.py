"""Slash command routing.

`SlackBot` holds the registered commands and turns an inbound event into a
call to one handler::

    bot = SlackBot(token="verification-token")

    @bot.command("echo", "Greetings", args=["title", {"last_name": "User"}, "words..."])
    def echo(bot, event, done):
        done(None, bot.ephemeral_response(" ".join(event["args"]["words"])))

    bot.route(event, done, fail)

Routing runs token check, tokenize, resolve, bind and dispatch in that order.
The handler's ``done(error, envelope)`` call is the final result; the router
never rewrites it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import anyio
import httpx
import structlog

from .args import ArgDeclaration
from .config import SlackBotConfig
from .delayed import send_delayed_response
from .errors import DelayedResponseError
from .help import render_help_lines
from .parse import bind_args, split_command
from .registry import HELP_COMMAND, CommandEntry, CommandRegistry, Done, Handler
from .responses import ephemeral_response, help_response, in_channel_response

logger = structlog.get_logger("slack_router.router")

INVALID_TOKEN_MESSAGE = "Invalid Slack token"

Fail = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Outcome of one routed event: either the handler's result or a failure."""

    error: Any = None
    envelope: dict[str, Any] | None = None
    message: str | None = None

    @classmethod
    def success(cls, error: Any, envelope: dict[str, Any] | None) -> RouteResult:
        return cls(error=error, envelope=envelope)

    @classmethod
    def failure(cls, message: str) -> RouteResult:
        return cls(message=message)

    @property
    def failed(self) -> bool:
        return self.message is not None


def _event_body(event: dict[str, Any]) -> dict[str, Any]:
    body = event.get("body")
    return body if isinstance(body, dict) else {}


class SlackBot:
    """Registry of slash commands plus the router that dispatches to them.

    The bot is also the helper object handed to every handler as its first
    argument, so handlers build envelopes with `ephemeral_response` and
    friends.
    """

    def __init__(self, token: str | None = None) -> None:
        self.token = token or None
        self.registry = CommandRegistry()

    @classmethod
    def from_config(cls, config: SlackBotConfig) -> SlackBot:
        return cls(token=config.token)

    # --- registration ---

    def add_command(
        self,
        name: str,
        description: str,
        handler: Handler,
        *,
        args: ArgDeclaration | None = None,
    ) -> CommandEntry:
        return self.registry.add(name, description, handler, args)

    def command(
        self,
        name: str,
        description: str,
        *,
        args: ArgDeclaration | None = None,
    ) -> Callable[[Handler], Handler]:
        """Decorator form of `add_command`."""

        def decorator(handler: Handler) -> Handler:
            self.add_command(name, description, handler, args=args)
            return handler

        return decorator

    def alias_command(self, name: str, *aliases: str) -> None:
        self.registry.alias(name, *aliases)

    # --- helpers for handlers ---

    @staticmethod
    def ephemeral_response(
        text: str, attachments: Iterable[str] | None = None
    ) -> dict[str, Any]:
        return ephemeral_response(text, attachments)

    @staticmethod
    def in_channel_response(
        text: str, attachments: Iterable[str] | None = None
    ) -> dict[str, Any]:
        return in_channel_response(text, attachments)

    def help_response(self) -> dict[str, Any]:
        return help_response(render_help_lines(self.registry))

    async def send_delayed_response(
        self,
        event: dict[str, Any],
        envelope: dict[str, Any],
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Post a follow-up envelope to the event's `response_url`."""
        response_url = _event_body(event).get("response_url")
        if not isinstance(response_url, str) or not response_url:
            raise DelayedResponseError("event has no response_url")
        await send_delayed_response(response_url, envelope, client=client)

    # --- routing ---

    def _token_ok(self, event: dict[str, Any]) -> bool:
        if not self.token:
            return True
        return _event_body(event).get("token") == self.token

    def route(self, event: dict[str, Any], done: Done, fail: Fail) -> None:
        """Route one event to its handler.

        ``event["args"]`` is set on the event itself before the handler runs.
        Unknown, empty and ``help`` commands answer with the help listing.
        Exceptions raised by a handler propagate to the caller.
        """
        if not self._token_ok(event):
            logger.warning("slack_router.route.invalid_token")
            fail(INVALID_TOKEN_MESSAGE)
            return

        text = _event_body(event).get("text")
        command_name, tail = split_command(text if isinstance(text, str) else "")

        entry = None
        if command_name is not None and command_name != HELP_COMMAND:
            entry = self.registry.resolve(command_name)

        if entry is None:
            if command_name not in (None, HELP_COMMAND):
                logger.debug("slack_router.route.unknown_command", command=command_name)
            event["args"] = {}
            done(None, self.help_response())
            return

        event["args"] = bind_args(entry.args, tail)
        logger.debug(
            "slack_router.route.dispatch",
            command=entry.name,
            invoked_as=command_name,
        )
        entry.handler(self, event, done)

    def build_router(self) -> Callable[[dict[str, Any], Any], None]:
        """Return a ``(event, context)`` callable for Lambda-style transports.

        ``context`` must expose ``done(error, envelope)`` and ``fail(message)``.
        """

        def router(event: dict[str, Any], context: Any) -> None:
            self.route(event, context.done, context.fail)

        return router

    async def route_async(
        self, event: dict[str, Any], *, timeout: float | None = None
    ) -> RouteResult:
        """Route an event and wait for its handler to call back.

        Only the first callback counts. With ``timeout`` set, a handler that
        has not called back in time raises `TimeoutError`.
        """
        finished = anyio.Event()
        outcome: list[RouteResult] = []

        def done(error: Any, envelope: dict[str, Any] | None = None) -> None:
            if not outcome:
                outcome.append(RouteResult.success(error, envelope))
                finished.set()

        def fail(message: str) -> None:
            if not outcome:
                outcome.append(RouteResult.failure(message))
                finished.set()

        self.route(event, done, fail)
        if not finished.is_set():
            if timeout is None:
                await finished.wait()
            else:
                with anyio.fail_after(timeout):
                    await finished.wait()
        return outcome[0]

"""Command registry and alias table."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from .args import ArgDeclaration, ArgSpec, compile_arg_spec, format_arg_spec
from .errors import ConfigError

if TYPE_CHECKING:
    from .router import SlackBot

logger = structlog.get_logger("slack_router.registry")

HELP_COMMAND = "help"

Done = Callable[[Any, dict[str, Any] | None], None]
Handler = Callable[["SlackBot", dict[str, Any], Done], None]


@dataclass(frozen=True, slots=True)
class CommandEntry:
    name: str
    description: str
    args: ArgSpec
    handler: Handler


def _check_command_name(name: object, *, kind: str) -> str:
    if not isinstance(name, str) or not name or any(ch.isspace() for ch in name):
        raise ConfigError(f"invalid {kind} name {name!r}")
    if name == HELP_COMMAND:
        raise ConfigError(f"{HELP_COMMAND!r} is reserved for the built-in help")
    return name


class CommandRegistry:
    """Commands keyed by canonical name, in registration order.

    Aliases resolve lazily: an alias may be recorded before its target, and an
    alias whose target is missing at lookup time resolves to nothing.
    """

    def __init__(self) -> None:
        self._commands: dict[str, CommandEntry] = {}
        self._aliases: dict[str, str] = {}

    def add(
        self,
        name: str,
        description: str,
        handler: Handler,
        args: ArgDeclaration | None = None,
    ) -> CommandEntry:
        name = _check_command_name(name, kind="command")
        if not callable(handler):
            raise ConfigError(f"handler for {name!r} is not callable")
        entry = CommandEntry(
            name=name,
            description=description,
            args=compile_arg_spec(args),
            handler=handler,
        )
        if name in self._commands:
            logger.info("slack_router.command.replaced", command=name)
        self._commands[name] = entry
        logger.debug(
            "slack_router.command.registered",
            command=name,
            args=format_arg_spec(entry.args),
        )
        return entry

    def alias(self, name: str, *aliases: str) -> None:
        name = _check_command_name(name, kind="command")
        for alias in aliases:
            alias = _check_command_name(alias, kind="alias")
            if alias == name:
                raise ConfigError(f"command {name!r} cannot alias itself")
            self._aliases[alias] = name
            logger.debug("slack_router.alias.registered", alias=alias, command=name)

    def resolve(self, name: str | None) -> CommandEntry | None:
        if name is None:
            return None
        canonical = self._aliases.get(name, name)
        entry = self._commands.get(canonical)
        if entry is None and canonical != name:
            logger.warning(
                "slack_router.alias.dangling", alias=name, command=canonical
            )
        return entry

    def aliases_for(self, name: str) -> tuple[str, ...]:
        return tuple(alias for alias, target in self._aliases.items() if target == name)

    def entries(self) -> Iterator[CommandEntry]:
        return iter(self._commands.values())

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

"""Slash command router for Slack.

This package provides token checking, alias resolution, argument parsing,
dispatch and help for chat slash commands.
"""

from __future__ import annotations

from .args import (
    NamedArg,
    SimpleArg,
    SplatArg,
    compile_arg_spec,
    format_arg_spec,
)
from .config import SlackBotConfig, config_from_env, load_config
from .errors import ArgSpecError, ConfigError, DelayedResponseError, SlackRouterError
from .parse import bind_args, split_command, tokenize
from .registry import CommandEntry, CommandRegistry
from .responses import ephemeral_response, in_channel_response
from .router import INVALID_TOKEN_MESSAGE, RouteResult, SlackBot

__all__ = [
    "ArgSpecError",
    "bind_args",
    "CommandEntry",
    "CommandRegistry",
    "compile_arg_spec",
    "config_from_env",
    "ConfigError",
    "DelayedResponseError",
    "ephemeral_response",
    "format_arg_spec",
    "in_channel_response",
    "INVALID_TOKEN_MESSAGE",
    "load_config",
    "NamedArg",
    "RouteResult",
    "SimpleArg",
    "SlackBot",
    "SlackBotConfig",
    "SlackRouterError",
    "split_command",
    "SplatArg",
    "tokenize",
]

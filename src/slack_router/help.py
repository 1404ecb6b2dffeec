"""Help listing for registered commands."""

from __future__ import annotations

from .args import format_arg_spec
from .registry import HELP_COMMAND, CommandEntry, CommandRegistry

HELP_DESCRIPTION = "display this help message"


def format_help_line(entry: CommandEntry, aliases: tuple[str, ...] = ()) -> str:
    head = entry.name
    if aliases:
        head = f"{head} ({', '.join(aliases)})"
    summary = format_arg_spec(entry.args)
    if summary:
        head = f"{head} {summary}"
    return f"{head}: {entry.description}"


def render_help_lines(registry: CommandRegistry) -> list[str]:
    """One line per command in registration order, then the help entry itself."""
    lines = [
        format_help_line(entry, registry.aliases_for(entry.name))
        for entry in registry.entries()
    ]
    lines.append(f"{HELP_COMMAND}: {HELP_DESCRIPTION}")
    return lines

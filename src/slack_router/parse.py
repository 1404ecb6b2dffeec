"""Command text parsing utilities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .args import ArgSpec, NamedArg, SplatArg


def tokenize(text: str) -> tuple[str, ...]:
    """Split text into whitespace-delimited tokens.

    Runs of whitespace count as a single delimiter and leading or trailing
    whitespace is dropped. There is no quoting or escaping.
    """
    if not text or not text.strip():
        return ()
    return tuple(text.split())


def split_command(text: str) -> tuple[str | None, tuple[str, ...]]:
    """Parse command text, returning (command_name, tail_tokens).

    Args:
        text: The full command text, e.g. ``"echo Sir User hello"``.

    Returns:
        A tuple of (command_name, tail_tokens) where command_name is None if
        the text holds no tokens at all.
    """
    tokens = tokenize(text)
    if not tokens:
        return None, ()
    return tokens[0], tokens[1:]


def bind_args(spec: ArgSpec, tokens: Sequence[str]) -> dict[str, Any]:
    """Bind tail tokens to a compiled ArgSpec.

    Simple and named arguments take one token each, in order. A missing token
    binds ``None`` for a simple argument and the default for a named one. A
    trailing splat takes every remaining token as a list, which may be empty.
    Tokens left over without a splat to absorb them are ignored.
    """
    bound: dict[str, Any] = {}
    position = 0
    for arg in spec:
        if isinstance(arg, SplatArg):
            bound[arg.name] = list(tokens[position:])
            position = len(tokens)
            continue
        if position < len(tokens):
            bound[arg.name] = tokens[position]
            position += 1
        elif isinstance(arg, NamedArg):
            bound[arg.name] = arg.default
        else:
            bound[arg.name] = None
    return bound

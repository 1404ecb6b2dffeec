"""Argument declarations for slash commands.

A command declares its arguments as a list of descriptors:

- ``"title"``: a simple argument, binds one token (``None`` when missing).
- ``{"last_name": "User"}``: a named argument with a default, binds one token
  and falls back to the default when missing.
- ``"words..."``: a splat, binds every remaining token as a list. It must be
  the last descriptor.

Declarations are compiled once, when the command is registered, so routing
never has to inspect their shape again.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias

from .errors import ArgSpecError

SPLAT_MARKER = "..."


@dataclass(frozen=True, slots=True)
class SimpleArg:
    name: str


@dataclass(frozen=True, slots=True)
class NamedArg:
    name: str
    default: Any


@dataclass(frozen=True, slots=True)
class SplatArg:
    name: str


ArgDescriptor: TypeAlias = SimpleArg | NamedArg | SplatArg
ArgSpec: TypeAlias = tuple[ArgDescriptor, ...]
RawDescriptor: TypeAlias = str | Mapping[str, Any] | ArgDescriptor
ArgDeclaration: TypeAlias = RawDescriptor | Sequence[RawDescriptor]

_DESCRIPTOR_TYPES = (SimpleArg, NamedArg, SplatArg)


def _check_name(name: object, *, raw: object) -> str:
    if not isinstance(name, str):
        raise ArgSpecError(f"argument name must be a string, got {raw!r}")
    if not name or name != name.strip() or any(ch.isspace() for ch in name):
        raise ArgSpecError(f"invalid argument name {raw!r}")
    return name


def _compile_one(raw: object) -> ArgDescriptor:
    if isinstance(raw, _DESCRIPTOR_TYPES):
        _check_name(raw.name, raw=raw)
        return raw
    if isinstance(raw, str):
        if raw.endswith(SPLAT_MARKER):
            return SplatArg(_check_name(raw[: -len(SPLAT_MARKER)], raw=raw))
        return SimpleArg(_check_name(raw, raw=raw))
    if isinstance(raw, Mapping):
        if len(raw) != 1:
            raise ArgSpecError(
                f"named argument must have exactly one key, got {dict(raw)!r}"
            )
        ((name, default),) = raw.items()
        return NamedArg(_check_name(name, raw=raw), default)
    raise ArgSpecError(f"unsupported argument declaration {raw!r}")


def compile_arg_spec(declaration: ArgDeclaration | None) -> ArgSpec:
    """Normalize a raw argument declaration into an ArgSpec.

    Args:
        declaration: ``None`` for a command without arguments, a single
            descriptor, or a sequence of descriptors.

    Returns:
        A tuple of descriptors in declaration order.

    Raises:
        ArgSpecError: If a splat is repeated or not last, a mapping does not
            hold exactly one key, a name is invalid or duplicated, or a
            descriptor has an unsupported type.
    """
    if declaration is None:
        return ()
    if isinstance(declaration, (str, Mapping, *_DESCRIPTOR_TYPES)):
        raw_items: Sequence[object] = (declaration,)
    elif isinstance(declaration, Sequence):
        raw_items = declaration
    else:
        raise ArgSpecError(f"unsupported argument declaration {declaration!r}")

    spec = tuple(_compile_one(raw) for raw in raw_items)

    splat_positions = [i for i, arg in enumerate(spec) if isinstance(arg, SplatArg)]
    if len(splat_positions) > 1:
        raise ArgSpecError("only one splat argument is allowed")
    if splat_positions and splat_positions[0] != len(spec) - 1:
        raise ArgSpecError(
            f"splat argument {spec[splat_positions[0]].name!r} must be last"
        )

    seen: set[str] = set()
    for arg in spec:
        if arg.name in seen:
            raise ArgSpecError(f"duplicate argument name {arg.name!r}")
        seen.add(arg.name)
    return spec


def format_arg(arg: ArgDescriptor) -> str:
    if isinstance(arg, NamedArg):
        return f"{arg.name}:{arg.default}"
    if isinstance(arg, SplatArg):
        return f"{arg.name}{SPLAT_MARKER}"
    return arg.name


def format_arg_spec(spec: ArgSpec) -> str:
    """Render the argument summary shown in help, e.g. ``arg1 arg3:3 rest...``."""
    return " ".join(format_arg(arg) for arg in spec)

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared type aliases for the safe decoding layer."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final, TypeAlias

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | Sequence["JSONValue"] | Mapping[str, "JSONValue"]

CodingKey: TypeAlias = str | int
CodingPath: TypeAlias = tuple[CodingKey, ...]

TypeToken: TypeAlias = Any
UserInfo: TypeAlias = Mapping[str, Any]

ROOT_PATH: Final[CodingPath] = ()


def render_path(path: CodingPath) -> str:
    """Return a dotted representation of ``path`` for diagnostics.

    Args:
        path: Coding path accumulated by the decoder.

    Returns:
        str: Path such as ``epidemic[0].num`` or ``<root>`` for the empty path.
    """

    if not path:
        return "<root>"
    rendered = ""
    for component in path:
        if isinstance(component, int):
            rendered += f"[{component}]"
        elif rendered:
            rendered += f".{component}"
        else:
            rendered = component
    return rendered


__all__ = [
    "ROOT_PATH",
    "CodingKey",
    "CodingPath",
    "JSONPrimitive",
    "JSONValue",
    "TypeToken",
    "UserInfo",
    "render_path",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Decoder settings shared by the native JSON backend and the entry API."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field

_WORD_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"(.)([A-Z][a-z]+)")
_LOWER_UPPER: Final[re.Pattern[str]] = re.compile(r"([a-z0-9])([A-Z])")


def camel_to_snake(key: str) -> str:
    """Return ``key`` rewritten from camelCase into snake_case.

    Args:
        key: Key as it appears in the encoded payload, e.g. ``routeUri``.

    Returns:
        str: Snake-cased key such as ``route_uri``. Keys without upper-case
        letters are returned unchanged.
    """

    if not any(char.isupper() for char in key):
        return key
    partial = _WORD_BOUNDARY.sub(r"\1_\2", key)
    return _LOWER_UPPER.sub(r"\1_\2", partial).lower()


class KeyDecodingStrategy(str, Enum):
    """Enumerate how object keys are mapped onto attribute names."""

    USE_DEFAULT_KEYS = "use_default_keys"
    CONVERT_FROM_CAMEL_CASE = "convert_from_camel_case"

    def convert(self, key: str) -> str:
        """Return ``key`` transformed according to the strategy.

        Args:
            key: Raw key read from the payload.

        Returns:
            str: Key used for lookups by keyed containers.
        """

        if self is KeyDecodingStrategy.CONVERT_FROM_CAMEL_CASE:
            return camel_to_snake(key)
        return key


class DecoderSettings(BaseModel):
    """Options controlling how the native decoder reads payloads."""

    model_config = ConfigDict(frozen=True)

    key_strategy: KeyDecodingStrategy = KeyDecodingStrategy.USE_DEFAULT_KEYS
    user_info: dict[str, Any] = Field(default_factory=dict)


__all__ = [
    "DecoderSettings",
    "KeyDecodingStrategy",
    "camel_to_snake",
]

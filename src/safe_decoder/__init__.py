# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Public export surface for the fallback-aware decoder."""

from __future__ import annotations

from typing import Final

from .api import SafeDecoder, decode
from .codable import CODING_KEY, Decodable, decode_value
from .configuration import BASELINE, Configuration, ConfigurationBuilder, ConfigurationProvider
from .errors import (
    ConfigurationError,
    DataCorruptedError,
    DecodingError,
    KeyNotFoundError,
    TypeMismatchError,
    UnsupportedTypeError,
    ValueNotFoundError,
)
from .json_decoder import JSONDecoder
from .kinds import (
    BOOL,
    DOUBLE,
    FLOAT,
    INT,
    INT8,
    INT16,
    INT32,
    INT64,
    STRING,
    UINT,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    ScalarKind,
)
from .protocols import Decoder, KeyedContainer, SingleValueContainer, UnkeyedContainer
from .proxy import DecodingProxy
from .settings import DecoderSettings, KeyDecodingStrategy

__version__: Final[str] = "1.0.0"

__all__: Final[tuple[str, ...]] = (
    "BASELINE",
    "BOOL",
    "CODING_KEY",
    "DOUBLE",
    "FLOAT",
    "INT",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "STRING",
    "UINT",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "Configuration",
    "ConfigurationBuilder",
    "ConfigurationError",
    "ConfigurationProvider",
    "DataCorruptedError",
    "Decodable",
    "Decoder",
    "DecoderSettings",
    "DecodingError",
    "DecodingProxy",
    "JSONDecoder",
    "KeyDecodingStrategy",
    "KeyNotFoundError",
    "KeyedContainer",
    "SafeDecoder",
    "ScalarKind",
    "SingleValueContainer",
    "TypeMismatchError",
    "UnkeyedContainer",
    "UnsupportedTypeError",
    "ValueNotFoundError",
    "decode",
    "decode_value",
)

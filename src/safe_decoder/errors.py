# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exceptions raised by the native decoder and the safe decoding layer."""

from __future__ import annotations

from .types import CodingKey, CodingPath, TypeToken, render_path


class DecodingError(ValueError):
    """Base class for failures raised while decoding a payload.

    Every decoding error records the coding path at which it occurred so that
    callers can locate the offending value. The safe decoding layer only ever
    masks subclasses of this exception.
    """

    def __init__(self, debug_description: str, *, coding_path: CodingPath = ()) -> None:
        """Create the error with a human readable description and coding path.

        Args:
            debug_description: Explanation of the failure.
            coding_path: Path of keys and indices leading to the failing value.
        """

        super().__init__(f"{render_path(coding_path)}: {debug_description}")
        self.debug_description = debug_description
        self.coding_path = coding_path


class TypeMismatchError(DecodingError):
    """Raised when the encoded value has a different shape than requested."""

    def __init__(self, expected: TypeToken, debug_description: str, *, coding_path: CodingPath = ()) -> None:
        super().__init__(debug_description, coding_path=coding_path)
        self.expected = expected


class ValueNotFoundError(DecodingError):
    """Raised when a value is null or a sequence is exhausted."""

    def __init__(self, expected: TypeToken, debug_description: str, *, coding_path: CodingPath = ()) -> None:
        super().__init__(debug_description, coding_path=coding_path)
        self.expected = expected


class KeyNotFoundError(DecodingError):
    """Raised when a keyed container has no entry for the requested key."""

    def __init__(self, key: CodingKey, debug_description: str, *, coding_path: CodingPath = ()) -> None:
        super().__init__(debug_description, coding_path=coding_path)
        self.key = key


class DataCorruptedError(DecodingError):
    """Raised for malformed input: invalid JSON, out-of-range numbers, unknown enum values."""


class UnsupportedTypeError(TypeError):
    """Raised when a target type cannot be reconstructed by the decoder."""


class ConfigurationError(TypeError):
    """Raised when a default value is registered against a type it does not satisfy."""


__all__ = (
    "ConfigurationError",
    "DataCorruptedError",
    "DecodingError",
    "KeyNotFoundError",
    "TypeMismatchError",
    "UnsupportedTypeError",
    "ValueNotFoundError",
)
